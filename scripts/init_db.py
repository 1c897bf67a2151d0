from invoicething.core.logging_config import configure_logging
from invoicething.db.engine import get_engine
from invoicething.db.schema import metadata

import logging

logger = logging.getLogger(__name__)


def main():
    configure_logging()
    engine = get_engine()
    metadata.drop_all(engine)
    metadata.create_all(engine)
    logger.info("DB schema created at %s", engine.url)


if __name__ == "__main__":
    main()
