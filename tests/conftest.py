"""Shared fixtures: scripted in-memory transport and POP3 sessions built on it."""

from __future__ import annotations

import pytest

from infrastructure.email.pop3_client import Pop3Session


class FakeTransport:
    """Serves pre-recorded server bytes in fixed-size chunks and records writes."""

    def __init__(self, data: bytes = b"", chunk: int | None = None) -> None:
        self.data = bytearray(data)
        self.chunk = chunk
        self.written = bytearray()
        self.closed = False
        self.reads = 0

    def feed(self, data: bytes) -> None:
        self.data += data

    def read(self, size: int = 4096) -> bytes:
        self.reads += 1
        n = min(size, self.chunk or size)
        out = bytes(self.data[:n])
        del self.data[:n]
        return out

    def write_all(self, data: bytes) -> None:
        self.written += data

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_transport():
    def _make(data: bytes = b"", chunk: int | None = None) -> FakeTransport:
        return FakeTransport(data, chunk)
    return _make


@pytest.fixture
def make_session():
    """
    Session over a FakeTransport. With authenticated=True the USER/PASS
    exchange is replayed first and the recorded writes are cleared.
    """
    def _make(data: bytes = b"", *, authenticated: bool = True, chunk: int | None = None, max_line: int = 65536):
        transport = FakeTransport(chunk=chunk)
        session = Pop3Session(transport, max_line=max_line)
        if authenticated:
            transport.feed(b"+OK user accepted\r\n+OK maildrop ready\r\n")
            session.login("alice", "secret")
            transport.written.clear()
        transport.feed(data)
        return session, transport
    return _make
