# infrastructure/email/pop3_client.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import TextIO

from domain.errors import (
    AuthenticationFailure,
    InvalidState,
    Pop3Error,
    ServerRejected,
    UnexpectedFormat,
)
from domain.models import MailboxStat, MessageInfo, MessageUid, Response, State
from infrastructure.email.line_reader import DEFAULT_MAX_LINE, LineReader
from infrastructure.email.pop3_commands import encode_command, number_arg
from infrastructure.email.pop3_decoder import (
    CRLF,
    decode_list,
    decode_list_entry,
    decode_stat,
    decode_uid_entry,
    decode_uidl,
    join_message,
)
from infrastructure.email.pop3_responses import read_response
from infrastructure.email.transport import Transport, open_tls

logger = logging.getLogger(__name__)

POP3_SSL_PORT = 995

LEGAL_COMMANDS: dict[State, frozenset[str]] = {
    State.AUTHORIZATION: frozenset({"USER", "PASS", "QUIT"}),
    State.TRANSACTION: frozenset({"STAT", "LIST", "RETR", "DELE", "NOOP", "RSET", "TOP", "UIDL", "QUIT"}),
    State.UPDATE: frozenset(),
}


class Pop3Session:
    """
    Sesión POP3 sobre un transporte ya cifrado. Un solo comando en vuelo:
    cada método envía un comando y lee la respuesta completa antes de volver.

    Uso:
        with connect("pop.example.com") as pop:
            pop.login("user", "secret")
            for info in pop.list_messages():
                ...
    """
    def __init__(self, transport: Transport, *, max_line: int = DEFAULT_MAX_LINE) -> None:
        self.transport = transport
        self.reader = LineReader(transport, max_line=max_line)
        self.state = State.AUTHORIZATION
        self.welcome = ""
        self._poisoned = False
        self._closed = False

    def __enter__(self) -> "Pop3Session":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self.usable:
                self.quit()
        except Pop3Error:
            logger.exception("Error cerrando POP3")
        finally:
            self.close()

    @property
    def usable(self) -> bool:
        return not (self._poisoned or self._closed or self.state is State.UPDATE)

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self.transport.close()

    # ───────── núcleo petición/respuesta ─────────
    def _poison(self, err: BaseException) -> None:
        logger.error("Sesión POP3 inutilizable: %r", err)
        self._poisoned = True
        self.close()

    def _check(self, verb: str) -> None:
        if self._poisoned or self._closed:
            raise InvalidState(f"{verb}: la sesión está cerrada o en estado no fiable")
        if verb not in LEGAL_COMMANDS[self.state]:
            raise InvalidState(f"{verb} no permitido en estado {self.state.name}")

    def _read(self, multiline: bool = False) -> Response:
        try:
            return read_response(self.reader, multiline)
        except Pop3Error as e:
            if e.fatal:
                self._poison(e)
            raise
        except BaseException as e:
            # lectura abortada a medias: el flujo ya no está sincronizado
            self._poison(e)
            raise

    def _exchange(self, verb: str, *args: str, multiline: bool = False) -> Response:
        self._check(verb)
        data = encode_command(verb, *args)
        logger.debug("C: %s", f"{verb} ****" if verb == "PASS" else data.decode("utf-8").rstrip())
        try:
            self.transport.write_all(data)
        except BaseException as e:
            self._poison(e)
            raise
        resp = self._read(multiline)
        logger.debug("S: %s %s", "+OK" if resp.positive else "-ERR", resp.status_line)
        return resp

    def _number(self, verb: str, value: int, **kwargs) -> str:
        # el estado se valida antes que los argumentos
        self._check(verb)
        return number_arg(value, **kwargs)

    def _command(self, verb: str, *args: str, multiline: bool = False) -> Response:
        resp = self._exchange(verb, *args, multiline=multiline)
        if not resp.positive:
            raise ServerRejected(resp.status_line)
        return resp

    def _decode(self, decoder, value):
        try:
            return decoder(value)
        except UnexpectedFormat as e:
            self._poison(e)
            raise

    def read_greeting(self) -> str:
        resp = self._read()
        if not resp.positive:
            raise ServerRejected(resp.status_line)
        self.welcome = resp.status_line
        return self.welcome

    # ───────── AUTHORIZATION ─────────
    def user(self, name: str) -> str:
        return self._command("USER", name).status_line

    def pass_(self, password: str) -> str:
        resp = self._exchange("PASS", password)
        if not resp.positive:
            raise AuthenticationFailure(resp.status_line)
        self.state = State.TRANSACTION
        logger.info("Autenticado en POP3: %s", resp.status_line)
        return resp.status_line

    def login(self, user: str, password: str) -> None:
        self.user(user)
        self.pass_(password)

    # ───────── TRANSACTION ─────────
    def stat(self) -> MailboxStat:
        return self._decode(decode_stat, self._command("STAT").status_line)

    def list_messages(self) -> list[MessageInfo]:
        return self._decode(decode_list, self._command("LIST", multiline=True).body)

    def list_message(self, msg: int) -> MessageInfo:
        return self._decode(decode_list_entry, self._command("LIST", self._number("LIST", msg)).status_line)

    def message_size(self, msg: int) -> int:
        return self.list_message(msg).message_size

    def retr_lines(self, msg: int) -> list[str]:
        return self._command("RETR", self._number("RETR", msg), multiline=True).body

    def retr(self, msg: int, line_ending: str = CRLF) -> str:
        """Mensaje completo (cabeceras + línea en blanco + cuerpo), ya sin byte-stuffing."""
        return join_message(self.retr_lines(msg), line_ending)

    def write_message(self, msg: int, fp: TextIO, line_ending: str = "\n") -> None:
        for line in self.retr_lines(msg):
            fp.write(line)
            fp.write(line_ending)

    def top(self, msg: int, lines: int, line_ending: str = CRLF) -> str:
        args = (self._number("TOP", msg), self._number("TOP", lines, name="n", minimum=0))
        body = self._command("TOP", *args, multiline=True).body
        return join_message(body, line_ending)

    def dele(self, msg: int) -> str:
        return self._command("DELE", self._number("DELE", msg)).status_line

    def noop(self) -> str:
        return self._command("NOOP").status_line

    def rset(self) -> str:
        return self._command("RSET").status_line

    def uidl_messages(self) -> list[MessageUid]:
        return self._decode(decode_uidl, self._command("UIDL", multiline=True).body)

    def uidl_message(self, msg: int) -> MessageUid:
        return self._decode(decode_uid_entry, self._command("UIDL", self._number("UIDL", msg)).status_line)

    def unique_id(self, msg: int) -> str:
        return self.uidl_message(msg).unique_id

    # ───────── QUIT -> UPDATE ─────────
    def quit(self) -> str:
        """
        Cierra la sesión. Desde TRANSACTION el servidor confirma los DELE pendientes.
        Pase lo que pase, la sesión queda en UPDATE y el transporte cerrado.
        """
        self._check("QUIT")
        try:
            resp = self._exchange("QUIT")
        finally:
            self.state = State.UPDATE
            self.close()
        if not resp.positive:
            raise ServerRejected(resp.status_line)
        return resp.status_line


def connect(
    host: str,
    port: int = POP3_SSL_PORT,
    *,
    timeout: float | None = None,
    cafile: Path | None = None,
    max_line: int = DEFAULT_MAX_LINE,
) -> Pop3Session:
    """Conecta (TCP + TLS), lee el saludo y devuelve la sesión en AUTHORIZATION."""
    transport = open_tls(host, port, timeout=timeout, cafile=cafile)
    session = Pop3Session(transport, max_line=max_line)
    try:
        session.read_greeting()
    except Pop3Error:
        session.close()
        raise
    logger.info("Conectado a %s:%s — %s", host, port, session.welcome)
    return session
