# infrastructure/email/pop3_responses.py
from __future__ import annotations
import logging

from domain.errors import ConnectionClosed, MalformedStatusLine, UnterminatedBody
from domain.models import Response
from infrastructure.email.line_reader import LineReader

logger = logging.getLogger(__name__)

OK = "+OK"
ERR = "-ERR"
TERMINATOR = "."


def parse_status_line(line: str) -> tuple[bool, str]:
    """
    Separa el indicador de estado del texto que le sigue.
    El indicador distingue mayúsculas: "+ok" no es válido.
    """
    marker, _, text = line.partition(" ")
    if marker == OK:
        return True, text
    if marker == ERR:
        return False, text
    raise MalformedStatusLine(line)


def unstuff(line: str) -> str:
    # "..foo" -> ".foo"; un "." solo es el terminador y no llega aquí
    if len(line) > 1 and line.startswith("."):
        return line[1:]
    return line


def read_body(reader: LineReader) -> list[str]:
    lines: list[str] = []
    while True:
        try:
            # el cuerpo no tiene tope de línea: lo acota el terminador
            line = reader.next_line(limit=None)
        except ConnectionClosed as e:
            raise UnterminatedBody(
                f"conexión cerrada antes del terminador tras {len(lines)} líneas"
            ) from e
        # sin strip(): "." seguido de espacios no es terminador
        if line == TERMINATOR:
            return lines
        lines.append(unstuff(line))


def read_response(reader: LineReader, expect_multiline: bool = False) -> Response:
    positive, text = parse_status_line(reader.next_line())
    if not positive:
        return Response(positive=False, status_line=text)
    if not expect_multiline:
        return Response(positive=True, status_line=text)
    body = read_body(reader)
    logger.debug("respuesta multilínea: %d líneas", len(body))
    return Response(positive=True, status_line=text, body=body)
