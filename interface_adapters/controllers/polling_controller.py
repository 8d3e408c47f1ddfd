# interface_adapters/controllers/polling_controller.py
from __future__ import annotations
import logging
from typing import Any, Callable

from config.settings import Settings
from application.use_cases.download_mail_usecase import DownloadMailUseCase
from domain.models import MessageInfo
from infrastructure.email.pop3_client import Pop3Session, connect
from infrastructure.filesystem.storage import MailStorage

logger = logging.getLogger(__name__)

class PollingController:
    def __init__(self, settings: Settings, connector: Callable[..., Pop3Session] = connect) -> None:
        self.settings = settings
        self.connector = connector
        self.storage = MailStorage(base=settings.download_dir_path())
        self.uc = DownloadMailUseCase(
            storage=self.storage,
            delete_after=settings.DELETE_AFTER_DOWNLOAD,
            limit=settings.MAX_MAILS_PER_LOOP,
        )

    def _open(self) -> Pop3Session:
        st = self.settings
        session = self.connector(
            st.POP3_HOST,
            st.POP3_PORT,
            timeout=st.timeout_seconds(),
            cafile=st.cafile_path(),
            max_line=st.POP3_MAX_LINE,
        )
        try:
            session.login(st.POP3_USERNAME, st.POP3_PASSWORD)
        except Exception:
            session.close()
            raise
        return session

    def list_mailbox(self) -> list[MessageInfo]:
        with self._open() as pop:
            infos = pop.list_messages()
        logger.info("id\tsize")
        for info in infos:
            logger.info("%s\t%s", info.message_id, info.message_size)
        return infos

    def run_once(self) -> dict[str, Any]:
        with self._open() as pop:
            stat = pop.stat()
            if not stat.message_count:
                logger.info("Sin correos en el buzón.")
                return {"downloaded": 0, "skipped": 0, "deleted": 0, "failed": 0}
            logger.info("Buzón: %d mensajes (%d bytes)", stat.message_count, stat.total_size)
            result = self.uc.run(pop)
        logger.info(
            "Ciclo completado: %(downloaded)d descargados, %(skipped)d ya existentes, "
            "%(deleted)d borrados, %(failed)d fallidos",
            result,
        )
        return result
