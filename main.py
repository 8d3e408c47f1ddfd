# main.py
# Punto de entrada: loop de polling POP3 -> descarga correos nuevos a disco
# (RUN_MODE=list: lista id/tamaño del buzón y termina)
from __future__ import annotations
import logging
import time
from config.settings import Settings
from interface_adapters.controllers.polling_controller import PollingController

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> None:
    settings = Settings()
    controller = PollingController(settings=settings)

    logger.info("=== POP3 Mail Downloader ===")
    logger.info("POP3 host=%s:%s dir=%s", settings.POP3_HOST, settings.POP3_PORT, settings.DOWNLOAD_DIR)
    if settings.RUN_MODE == "list":
        controller.list_mailbox()
        return
    while True:
        try:
            controller.run_once()
        except Exception:
            logger.exception("Error en ciclo de polling")
        time.sleep(settings.POLL_INTERVAL)


if __name__ == "__main__":
    main()
