# invoicething/core/logging_config.py

import logging

from invoicething.core.config import get_config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging() -> None:
    """Configure root logging once, at the configured level."""
    config = get_config()

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format=LOG_FORMAT,
    )

    if config.is_production:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
