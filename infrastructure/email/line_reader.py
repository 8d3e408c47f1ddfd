# infrastructure/email/line_reader.py
from __future__ import annotations
from domain.errors import ConnectionClosed, LineTooLong
from infrastructure.email.transport import READ_CHUNK, Transport

DEFAULT_MAX_LINE = 64 * 1024
ENCODING = "utf-8"


class LineReader:
    """
    Acumula los bytes del transporte y entrega líneas completas sin el CRLF.
    Tolera líneas partidas entre varias lecturas. Acepta también LF a secas.
    Los bytes no UTF-8 se conservan vía 'surrogateescape'.
    """
    def __init__(self, transport: Transport, max_line: int = DEFAULT_MAX_LINE) -> None:
        self.transport = transport
        self.max_line = max_line
        self._buffer = bytearray()
        self._scanned = 0  # bytes ya revisados sin encontrar LF

    def next_line(self, limit: int | None = -1) -> str:
        """limit=-1 -> max_line; limit=None -> sin tope (cuerpos multilínea)."""
        if limit == -1:
            limit = self.max_line
        while True:
            eol = self._buffer.find(b"\n", self._scanned)
            if eol >= 0:
                break
            self._scanned = len(self._buffer)
            if limit is not None and self._scanned > limit:
                raise LineTooLong(limit)
            chunk = self.transport.read(READ_CHUNK)
            if not chunk:
                raise ConnectionClosed("conexión cerrada por el servidor")
            self._buffer += chunk

        raw = bytes(self._buffer[:eol])
        del self._buffer[:eol + 1]
        self._scanned = 0
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        if limit is not None and len(raw) > limit:
            raise LineTooLong(limit)
        return raw.decode(ENCODING, errors="surrogateescape")
