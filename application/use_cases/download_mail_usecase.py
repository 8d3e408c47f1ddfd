# application/use_cases/download_mail_usecase.py
from __future__ import annotations
import logging
from typing import Any

from domain.errors import ServerRejected
from infrastructure.email.pop3_client import Pop3Session
from infrastructure.filesystem.storage import MailStorage

logger = logging.getLogger(__name__)


class DownloadMailUseCase:
    def __init__(self, *, storage: MailStorage, delete_after: bool = False, limit: int = 0) -> None:
        self.storage = storage
        self.delete_after = delete_after
        self.limit = limit

    def run(self, session: Pop3Session) -> dict[str, Any]:
        """
        Descarga los mensajes cuyo UID aún no está en disco.
        Devuelve: {"downloaded": n, "skipped": n, "deleted": n, "failed": n}

        Un -ERR sobre un mensaje concreto se registra y se sigue con el resto;
        los fallos fatales (IO/protocolo) se propagan.
        """
        result = {"downloaded": 0, "skipped": 0, "deleted": 0, "failed": 0}
        known = self.storage.stored_ids()

        for entry in session.uidl_messages():
            if entry.unique_id in known:
                result["skipped"] += 1
                continue
            if self.limit and result["downloaded"] >= self.limit:
                logger.info("Límite de %d mensajes por ciclo alcanzado", self.limit)
                break
            try:
                text = session.retr(entry.message_id)
            except ServerRejected as e:
                logger.warning("RETR %s rechazado: %s", entry.message_id, e.status_line)
                result["failed"] += 1
                continue

            stored = self.storage.save_message(entry.unique_id, text)
            result["downloaded"] += 1
            logger.info("Guardado mensaje %s (uid=%s) -> %s", entry.message_id, entry.unique_id, stored.path.name)

            if self.delete_after:
                try:
                    session.dele(entry.message_id)
                    result["deleted"] += 1
                except ServerRejected as e:
                    logger.warning("DELE %s rechazado: %s", entry.message_id, e.status_line)
                    result["failed"] += 1

        return result
