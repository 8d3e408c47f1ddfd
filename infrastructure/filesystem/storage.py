# infrastructure/filesystem/storage.py
from __future__ import annotations
from pathlib import Path
from urllib.parse import quote, unquote

from domain.models import StoredMessage

SUFFIX = ".eml"


class MailStorage:
    """Un fichero .eml por mensaje, nombrado por su UID (escapado para el sistema de ficheros)."""
    def __init__(self, base: Path) -> None:
        self.base = base.resolve()
        self.base.mkdir(parents=True, exist_ok=True)

    def path_for(self, unique_id: str) -> Path:
        return self.base / f"{quote(unique_id, safe='')}{SUFFIX}"

    def has(self, unique_id: str) -> bool:
        return self.path_for(unique_id).exists()

    def save_message(self, unique_id: str, text: str) -> StoredMessage:
        fp = self.path_for(unique_id)
        tmp = fp.with_suffix(".part")
        # surrogateescape: devuelve intactos los bytes no UTF-8 recibidos del servidor
        tmp.write_bytes(text.encode("utf-8", errors="surrogateescape"))
        tmp.replace(fp)
        return StoredMessage(unique_id=unique_id, path=fp)

    def stored_ids(self) -> set[str]:
        return {unquote(p.name[: -len(SUFFIX)]) for p in self.base.glob(f"*{SUFFIX}")}
