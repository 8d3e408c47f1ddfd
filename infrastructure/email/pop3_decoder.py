# infrastructure/email/pop3_decoder.py
# Convierte cuerpos/líneas de estado POP3 en modelos tipados.
from __future__ import annotations
from typing import Iterable

from domain.errors import UnexpectedFormat
from domain.models import MailboxStat, MessageInfo, MessageUid

CRLF = "\r\n"


def parse_uint(token: str, what: str) -> int:
    # int() aceptaría "+5", " 5" o "1_000"; aquí solo dígitos ASCII
    if not (token.isascii() and token.isdigit()):
        raise UnexpectedFormat(f"{what}: se esperaba un entero no negativo, recibido {token!r}")
    return int(token)


def _fields(line: str, what: str) -> list[str]:
    parts = line.split()
    if len(parts) < 2:
        raise UnexpectedFormat(f"{what}: se esperaban 2 campos, recibido {line!r}")
    return parts


def decode_stat(status_line: str) -> MailboxStat:
    parts = _fields(status_line, "STAT")
    return MailboxStat(
        message_count=parse_uint(parts[0], "STAT count"),
        total_size=parse_uint(parts[1], "STAT size"),
    )


def decode_list_entry(line: str) -> MessageInfo:
    parts = _fields(line, "LIST")
    return MessageInfo(
        message_id=parse_uint(parts[0], "LIST id"),
        message_size=parse_uint(parts[1], "LIST size"),
    )


def decode_list(lines: Iterable[str]) -> list[MessageInfo]:
    return [decode_list_entry(line) for line in lines]


def decode_uid_entry(line: str) -> MessageUid:
    parts = _fields(line, "UIDL")
    return MessageUid(message_id=parse_uint(parts[0], "UIDL id"), unique_id=parts[1])


def decode_uidl(lines: Iterable[str]) -> list[MessageUid]:
    return [decode_uid_entry(line) for line in lines]


def join_message(lines: list[str], line_ending: str = CRLF) -> str:
    """
    Reconstruye el mensaje (RETR/TOP) terminando cada línea con 'line_ending'.
    Un cuerpo vacío da "".
    """
    return "".join(line + line_ending for line in lines)
