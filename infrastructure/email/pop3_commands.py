# infrastructure/email/pop3_commands.py
# Codificación de comandos POP3: "<VERBO>[ <arg1>[ <arg2>]]\r\n"
from __future__ import annotations
from domain.errors import InvalidArgument

CRLF = "\r\n"
MAX_NUMBER = 2**32 - 1

# verbo -> (mín. argumentos, máx. argumentos)
COMMANDS: dict[str, tuple[int, int]] = {
    "USER": (1, 1),
    "PASS": (1, 1),
    "STAT": (0, 0),
    "LIST": (0, 1),
    "RETR": (1, 1),
    "DELE": (1, 1),
    "NOOP": (0, 0),
    "RSET": (0, 0),
    "QUIT": (0, 0),
    "TOP": (2, 2),
    "UIDL": (0, 1),
}


def number_arg(value: int, *, name: str = "msg", minimum: int = 1) -> str:
    # bool es subclase de int; no lo aceptamos como número de mensaje
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidArgument(f"{name} debe ser un entero, recibido {value!r}")
    if value < minimum:
        raise InvalidArgument(f"{name} debe ser >= {minimum}, recibido {value}")
    if value > MAX_NUMBER:
        raise InvalidArgument(f"{name} fuera de rango (máx. {MAX_NUMBER}), recibido {value}")
    return str(value)


def text_arg(value: str, *, name: str = "argumento") -> str:
    if not isinstance(value, str) or not value:
        raise InvalidArgument(f"{name} debe ser un texto no vacío")
    if "\r" in value or "\n" in value:
        raise InvalidArgument(f"{name} no puede contener CR/LF")
    return value


def encode_command(verb: str, *args: str) -> bytes:
    verb = verb.upper()
    if verb not in COMMANDS:
        raise InvalidArgument(f"comando no soportado: {verb}")
    lo, hi = COMMANDS[verb]
    if not lo <= len(args) <= hi:
        raise InvalidArgument(f"{verb} admite entre {lo} y {hi} argumentos, recibidos {len(args)}")
    parts = [verb] + [text_arg(a) for a in args]
    return (" ".join(parts) + CRLF).encode("utf-8")
