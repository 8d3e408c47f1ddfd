"""Tests for the socket transport wrapper."""

import socket

import pytest

from domain.errors import ConnectionClosed, IoFailure
from infrastructure.email import transport as transport_mod
from infrastructure.email.transport import TLSTransport, open_tls


@pytest.fixture
def pair():
    a, b = socket.socketpair()
    yield a, b
    a.close()
    b.close()


class TestTLSTransport:
    def test_read_and_write(self, pair):
        a, b = pair
        t = TLSTransport(a)
        t.write_all(b"NOOP\r\n")
        assert b.recv(16) == b"NOOP\r\n"
        b.sendall(b"+OK\r\n")
        assert t.read() == b"+OK\r\n"

    def test_read_returns_empty_on_peer_close(self, pair):
        a, b = pair
        t = TLSTransport(a)
        b.close()
        assert t.read() == b""

    def test_use_after_close(self, pair):
        a, _ = pair
        t = TLSTransport(a)
        t.close()
        t.close()
        with pytest.raises(ConnectionClosed):
            t.read()
        with pytest.raises(ConnectionClosed):
            t.write_all(b"QUIT\r\n")


class TestOpenTLS:
    def test_connect_refused_is_io_failure(self, monkeypatch):
        def refuse(address, timeout=None):
            raise ConnectionRefusedError("refused")

        monkeypatch.setattr(transport_mod.socket, "create_connection", refuse)
        with pytest.raises(IoFailure) as exc:
            open_tls("pop.example.com", 995, timeout=1.0)
        assert isinstance(exc.value.__cause__, ConnectionRefusedError)

    def test_missing_cafile_is_io_failure(self, tmp_path):
        with pytest.raises(IoFailure) as exc:
            open_tls("pop.example.com", 995, cafile=tmp_path / "missing.pem")
        assert isinstance(exc.value.__cause__, OSError)

    def test_invalid_cafile_is_io_failure(self, tmp_path):
        bad = tmp_path / "bad.pem"
        bad.write_text("not a certificate\n")
        with pytest.raises(IoFailure):
            open_tls("pop.example.com", 995, cafile=bad)
