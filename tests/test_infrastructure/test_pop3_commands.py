"""Tests for POP3 command encoding."""

import pytest

from domain.errors import InvalidArgument
from infrastructure.email.pop3_commands import encode_command, number_arg


class TestEncodeCommand:
    def test_no_args(self):
        assert encode_command("STAT") == b"STAT\r\n"
        assert encode_command("QUIT") == b"QUIT\r\n"

    def test_verb_uppercased(self):
        assert encode_command("noop") == b"NOOP\r\n"

    def test_one_arg(self):
        assert encode_command("USER", "alice@example.com") == b"USER alice@example.com\r\n"
        assert encode_command("RETR", "5") == b"RETR 5\r\n"

    def test_two_args(self):
        assert encode_command("TOP", "3", "10") == b"TOP 3 10\r\n"

    def test_optional_arg(self):
        assert encode_command("LIST") == b"LIST\r\n"
        assert encode_command("LIST", "2") == b"LIST 2\r\n"
        assert encode_command("UIDL", "7") == b"UIDL 7\r\n"

    def test_password_passed_through(self):
        assert encode_command("PASS", "p@ss word") == b"PASS p@ss word\r\n"

    @pytest.mark.parametrize("arg", ["bad\r\nDELE 1", "bad\n", "bad\r"])
    def test_crlf_injection_rejected(self, arg):
        with pytest.raises(InvalidArgument):
            encode_command("USER", arg)

    def test_empty_arg_rejected(self):
        with pytest.raises(InvalidArgument):
            encode_command("USER", "")

    def test_unknown_verb(self):
        with pytest.raises(InvalidArgument):
            encode_command("APOP", "alice", "digest")

    def test_wrong_arity(self):
        with pytest.raises(InvalidArgument):
            encode_command("RETR")
        with pytest.raises(InvalidArgument):
            encode_command("STAT", "1")


class TestNumberArg:
    def test_positive(self):
        assert number_arg(42) == "42"

    @pytest.mark.parametrize("value", [0, -1, True, "3", 1.5, None])
    def test_rejected(self, value):
        with pytest.raises(InvalidArgument):
            number_arg(value)

    def test_zero_allowed_with_minimum(self):
        assert number_arg(0, name="n", minimum=0) == "0"

    def test_upper_bound(self):
        assert number_arg(2**32 - 1) == "4294967295"
        with pytest.raises(InvalidArgument):
            number_arg(2**32)
