# invoicething/repositories/clients.py

from typing import List, Optional

from sqlalchemy import func, select

from invoicething.db.engine import now_ms
from invoicething.db.schema import clients, invoices

ADDRESS_FIELDS = ("street_name", "building_name", "unit_number", "postal_code")


def clean_address(values: dict) -> dict:
    """Trim address parts; blank parts become None."""
    cleaned = dict(values)
    for key in ADDRESS_FIELDS:
        if key in cleaned and cleaned[key] is not None:
            cleaned[key] = cleaned[key].strip() or None
    return cleaned


def list_clients(conn, user_id: int) -> List[dict]:
    stmt = (
        select(clients)
        .where(clients.c.user_id == user_id)
        .order_by(clients.c.name, clients.c.id)
    )
    return [dict(row) for row in conn.execute(stmt).mappings().all()]


def get_client(conn, user_id: int, client_id: int) -> Optional[dict]:
    stmt = select(clients).where(
        clients.c.id == client_id,
        clients.c.user_id == user_id,
    )
    row = conn.execute(stmt).mappings().first()
    return dict(row) if row else None


def create_client(conn, user_id: int, values: dict) -> int:
    ts = now_ms()
    result = conn.execute(
        clients.insert().values(
            user_id=user_id,
            created_at=ts,
            updated_at=ts,
            **clean_address(values),
        )
    )
    return result.inserted_primary_key[0]


def update_client(conn, user_id: int, client_id: int, values: dict) -> bool:
    result = conn.execute(
        clients.update()
        .where(clients.c.id == client_id, clients.c.user_id == user_id)
        .values(updated_at=now_ms(), **clean_address(values))
    )
    return result.rowcount > 0


def count_client_invoices(conn, client_id: int) -> int:
    stmt = select(func.count()).select_from(invoices).where(
        invoices.c.client_id == client_id
    )
    return conn.execute(stmt).scalar_one()


def delete_client(conn, user_id: int, client_id: int) -> bool:
    result = conn.execute(
        clients.delete().where(
            clients.c.id == client_id,
            clients.c.user_id == user_id,
        )
    )
    return result.rowcount > 0
