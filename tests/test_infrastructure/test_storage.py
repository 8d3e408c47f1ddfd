"""Tests for the on-disk message store."""

from infrastructure.filesystem.storage import MailStorage


class TestMailStorage:
    def test_creates_base_dir(self, tmp_path):
        base = tmp_path / "nested" / "mail"
        MailStorage(base)
        assert base.is_dir()

    def test_save_and_has(self, tmp_path):
        storage = MailStorage(tmp_path)
        stored = storage.save_message("abc123", "Subject: hi\r\n\r\nbody\r\n")
        assert storage.has("abc123")
        assert stored.path.read_bytes() == b"Subject: hi\r\n\r\nbody\r\n"
        assert stored.path.suffix == ".eml"

    def test_uid_with_path_separators(self, tmp_path):
        storage = MailStorage(tmp_path)
        stored = storage.save_message("a/b\\c:d", "x\r\n")
        assert stored.path.parent == tmp_path.resolve()
        assert storage.stored_ids() == {"a/b\\c:d"}

    def test_no_leftover_partial_files(self, tmp_path):
        storage = MailStorage(tmp_path)
        storage.save_message("u1", "x\r\n")
        assert [p.name for p in tmp_path.iterdir()] == ["u1.eml"]

    def test_non_utf8_bytes_preserved(self, tmp_path):
        storage = MailStorage(tmp_path)
        text = b"caf\xe9\r\n".decode("utf-8", errors="surrogateescape")
        stored = storage.save_message("u2", text)
        assert stored.path.read_bytes() == b"caf\xe9\r\n"

    def test_stored_ids_empty(self, tmp_path):
        assert MailStorage(tmp_path).stored_ids() == set()
