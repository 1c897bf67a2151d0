# invoicething/api/deps.py
"""Request-scoped dependencies shared by the routers."""

from typing import Optional

from fastapi import Header

from invoicething.core.exceptions import AuthenticationError
from invoicething.db.engine import get_engine
from invoicething.repositories.users import get_user_by_subject

SUBJECT_HEADER = "X-User-Subject"


def get_current_user(
    x_user_subject: Optional[str] = Header(default=None, alias=SUBJECT_HEADER),
) -> dict:
    """
    Resolve the acting user from the identity-provider subject forwarded by
    the auth layer. Every owned query is scoped by this user's id.
    """
    if not x_user_subject:
        raise AuthenticationError(f"Missing {SUBJECT_HEADER} header")

    with get_engine().connect() as conn:
        user = get_user_by_subject(conn, x_user_subject)

    if user is None:
        raise AuthenticationError("Unknown user; sync the user first")
    return user
