# infrastructure/email/transport.py
from __future__ import annotations
import logging
import socket
import ssl
from pathlib import Path
from typing import Protocol

from domain.errors import ConnectionClosed, IoFailure

logger = logging.getLogger(__name__)

READ_CHUNK = 4096


class Transport(Protocol):
    """
    Flujo de bytes ordenado y fiable (ya cifrado).
    read() devuelve b"" cuando el servidor cierra la conexión.
    """
    def read(self, size: int = READ_CHUNK) -> bytes: ...
    def write_all(self, data: bytes) -> None: ...
    def close(self) -> None: ...


class TLSTransport:
    def __init__(self, sock: socket.socket) -> None:
        self.sock: socket.socket | None = sock

    def read(self, size: int = READ_CHUNK) -> bytes:
        if self.sock is None:
            raise ConnectionClosed("transporte cerrado")
        try:
            return self.sock.recv(size)
        except OSError as e:
            raise IoFailure(f"error de lectura: {e}") from e

    def write_all(self, data: bytes) -> None:
        if self.sock is None:
            raise ConnectionClosed("transporte cerrado")
        try:
            self.sock.sendall(data)
        except OSError as e:
            raise IoFailure(f"error de escritura: {e}") from e

    def close(self) -> None:
        sock, self.sock = self.sock, None
        if sock is None:
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # el servidor puede haber cerrado ya (ENOTCONN)
            logger.debug("shutdown sobre socket ya cerrado")
        finally:
            sock.close()


def open_tls(host: str, port: int, *, timeout: float | None = None, cafile: Path | None = None) -> TLSTransport:
    """
    Abre TCP + TLS contra host:port.
    Con 'cafile' se confía solo en ese bundle PEM; si no, en el almacén del sistema.
    """
    try:
        context = ssl.create_default_context(cafile=str(cafile) if cafile else None)
    except (ssl.SSLError, OSError) as e:
        raise IoFailure(f"no se pudo cargar el almacén de certificados {cafile}: {e}") from e
    try:
        raw = socket.create_connection((host, port), timeout=timeout)
    except OSError as e:
        raise IoFailure(f"no se pudo conectar a {host}:{port}: {e}") from e
    try:
        sock = context.wrap_socket(raw, server_hostname=host)
    except (ssl.SSLError, OSError) as e:
        raw.close()
        raise IoFailure(f"fallo en el handshake TLS con {host}:{port}: {e}") from e
    logger.debug("TLS establecido con %s:%s (%s)", host, port, sock.version())
    return TLSTransport(sock)
