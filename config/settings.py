# config/settings.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import os
from dotenv import load_dotenv

load_dotenv()

@dataclass(frozen=True)
class Settings:
    RUN_MODE: str = os.getenv("RUN_MODE", "download").lower()  # download | list

    # POP3 (siempre sobre TLS)
    POP3_HOST: str = os.getenv("POP3_HOST", "")
    POP3_PORT: int = int(os.getenv("POP3_PORT", 995))
    POP3_USERNAME: str = os.getenv("POP3_USERNAME", "")
    POP3_PASSWORD: str = os.getenv("POP3_PASSWORD", "")
    POP3_TIMEOUT: int = int(os.getenv("POP3_TIMEOUT", 30))   # 0 = sin timeout
    POP3_CAFILE: str = os.getenv("POP3_CAFILE", "")          # vacío = almacén del sistema
    POP3_MAX_LINE: int = int(os.getenv("POP3_MAX_LINE", 64 * 1024))

    # Descarga
    DOWNLOAD_DIR: str = os.getenv("DOWNLOAD_DIR", "./_mail")
    DELETE_AFTER_DOWNLOAD: bool = os.getenv("DELETE_AFTER_DOWNLOAD", "false").lower() == "true"

    # Polling
    POLL_INTERVAL: int = int(os.getenv("POLL_INTERVAL", 60))
    MAX_MAILS_PER_LOOP: int = int(os.getenv("MAX_MAILS_PER_LOOP", 20))  # 0 = sin límite

    # ───────── helpers ─────────
    def download_dir_path(self) -> Path:
        return Path(self.DOWNLOAD_DIR).resolve()

    def timeout_seconds(self) -> float | None:
        return float(self.POP3_TIMEOUT) if self.POP3_TIMEOUT > 0 else None

    def cafile_path(self) -> Path | None:
        raw = (self.POP3_CAFILE or "").strip()
        return Path(raw).expanduser() if raw else None
