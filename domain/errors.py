# domain/errors.py
# Jerarquía de fallos del cliente POP3.
# fatal=True -> la sesión queda inutilizable (framing del protocolo ya no es fiable).
from __future__ import annotations


class Pop3Error(Exception):
    fatal: bool = False


# ───────── transporte ─────────
class IoFailure(Pop3Error):
    fatal = True

class ConnectionClosed(IoFailure):
    pass

class LineTooLong(IoFailure):
    def __init__(self, limit: int) -> None:
        super().__init__(f"línea supera el límite de {limit} bytes")
        self.limit = limit


# ───────── protocolo ─────────
class ProtocolFailure(Pop3Error):
    fatal = True

class MalformedStatusLine(ProtocolFailure):
    def __init__(self, line: str) -> None:
        super().__init__(f"línea de estado no válida: {line!r}")
        self.line = line

class UnterminatedBody(ProtocolFailure):
    pass

class UnexpectedFormat(ProtocolFailure):
    pass


# ───────── locales (no se envía nada) ─────────
class InvalidState(Pop3Error):
    pass

class InvalidArgument(Pop3Error):
    pass


# ───────── respuestas -ERR del servidor ─────────
class ServerRejected(Pop3Error):
    def __init__(self, status_line: str) -> None:
        super().__init__(status_line)
        self.status_line = status_line

class AuthenticationFailure(ServerRejected):
    pass
