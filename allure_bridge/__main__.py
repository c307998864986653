"""Run the service with uvicorn on the configured port."""

import logging
import sys

import uvicorn

from allure_bridge.core.config import ConfigMissingError, get_settings
from allure_bridge.core.logging import configure_logging

logger = logging.getLogger("allure_bridge")


def main() -> None:
    try:
        settings = get_settings()
    except ConfigMissingError as exc:
        configure_logging()
        logger.critical("Refusing to start: %s", exc)
        sys.exit(1)

    configure_logging(settings.log_level)
    logger.info("Starting Allure report bridge on port %d", settings.server_port)
    uvicorn.run("allure_bridge.main:app", host="0.0.0.0", port=settings.server_port)


if __name__ == "__main__":  # pragma: no cover - script entry point
    main()
