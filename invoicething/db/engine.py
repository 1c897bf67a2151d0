# invoicething/db/engine.py

import time
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from invoicething.core.config import get_config

_engine: Optional[Engine] = None


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        # echo=True if you want to see SQL printed in the terminal
        _engine = create_engine(get_config().DATABASE_URL, future=True)
    return _engine


def now_ms() -> int:
    """Current time as epoch milliseconds (the stored time format)."""
    return int(time.time() * 1000)
