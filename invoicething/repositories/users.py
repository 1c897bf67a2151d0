# invoicething/repositories/users.py

from typing import Optional

from sqlalchemy import select

from invoicething.db.engine import now_ms
from invoicething.db.schema import users


def get_user(conn, user_id: int) -> Optional[dict]:
    row = conn.execute(select(users).where(users.c.id == user_id)).mappings().first()
    return dict(row) if row else None


def get_user_by_subject(conn, subject_id: str) -> Optional[dict]:
    stmt = select(users).where(users.c.subject_id == subject_id)
    row = conn.execute(stmt).mappings().first()
    return dict(row) if row else None


def store_user(conn, subject_id: str, email: str, name=None, image_url=None) -> int:
    """Create the user on first sign-in, otherwise refresh its profile fields."""
    existing = get_user_by_subject(conn, subject_id)

    if existing:
        conn.execute(
            users.update()
            .where(users.c.id == existing["id"])
            .values(email=email, name=name, image_url=image_url)
        )
        return existing["id"]

    result = conn.execute(
        users.insert().values(
            subject_id=subject_id,
            email=email,
            name=name,
            image_url=image_url,
            created_at=now_ms(),
        )
    )
    return result.inserted_primary_key[0]
