# invoicething/repositories/attachments.py

from typing import List, Optional

from sqlalchemy import select

from invoicething.db.engine import now_ms
from invoicething.db.schema import attachments


def create_attachment(conn, user_id: int, storage_id: str) -> None:
    conn.execute(
        attachments.insert().values(
            storage_id=storage_id,
            user_id=user_id,
            uploaded=False,
            created_at=now_ms(),
        )
    )


def get_attachment(conn, user_id: int, storage_id: str) -> Optional[dict]:
    stmt = select(attachments).where(
        attachments.c.storage_id == storage_id,
        attachments.c.user_id == user_id,
    )
    row = conn.execute(stmt).mappings().first()
    return dict(row) if row else None


def mark_uploaded(conn, storage_id: str, size: int) -> None:
    conn.execute(
        attachments.update()
        .where(attachments.c.storage_id == storage_id)
        .values(uploaded=True, size=size)
    )


def delete_attachment(conn, user_id: int, storage_id: str) -> bool:
    result = conn.execute(
        attachments.delete().where(
            attachments.c.storage_id == storage_id,
            attachments.c.user_id == user_id,
        )
    )
    return result.rowcount > 0


def delete_expired_pending(conn, issued_before: int) -> List[str]:
    """Drop upload reservations that never received content."""
    stmt = select(attachments.c.storage_id).where(
        attachments.c.uploaded.is_(False),
        attachments.c.created_at < issued_before,
    )
    expired = list(conn.execute(stmt).scalars().all())
    if expired:
        conn.execute(
            attachments.delete().where(attachments.c.storage_id.in_(expired))
        )
    return expired
