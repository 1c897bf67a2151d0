# invoicething/services/status.py
"""Invoice status changes, with an optional transition table."""

from invoicething.core.config import get_config
from invoicething.core.exceptions import InvalidArgumentError

ALLOWED_TRANSITIONS = {
    "draft": {"sent"},
    "sent": {"paid", "overdue"},
    "overdue": {"paid"},
    "paid": set(),
}


def is_allowed(current: str, new: str) -> bool:
    return current == new or new in ALLOWED_TRANSITIONS.get(current, set())


def check_transition(current: str, new: str) -> None:
    """Raise if the move is illegal and transitions are enforced."""
    if not get_config().ENFORCE_STATUS_TRANSITIONS:
        return
    if not is_allowed(current, new):
        raise InvalidArgumentError(
            f"Invoice status cannot change from {current!r} to {new!r}"
        )
