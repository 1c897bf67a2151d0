# invoicething/repositories/settings.py

from decimal import Decimal
from typing import Optional

from sqlalchemy import select

from invoicething.db.engine import now_ms
from invoicething.db.schema import invoices, settings
from invoicething.services.numbering import DEFAULT_PREFIX, DEFAULT_START

DEFAULT_SETTINGS = {
    "invoice_prefix": DEFAULT_PREFIX,
    "invoice_number_start": DEFAULT_START,
    "due_date_days": 14,
    "tax_rate": Decimal("0"),
    "payment_instructions": None,
    "enable_rounding": False,
    "rounding_increment": Decimal("0.05"),
}


def get_settings_row(conn, user_id: int) -> Optional[dict]:
    stmt = select(settings).where(settings.c.user_id == user_id)
    row = conn.execute(stmt).mappings().first()
    return dict(row) if row else None


def get_settings(conn, user_id: int) -> dict:
    """Stored settings, or the defaults when the user never saved any."""
    row = get_settings_row(conn, user_id)
    if row is None:
        return {"id": None, "user_id": user_id, **DEFAULT_SETTINGS}
    if row["rounding_increment"] is None:
        row["rounding_increment"] = DEFAULT_SETTINGS["rounding_increment"]
    return row


def upsert_settings(conn, user_id: int, values: dict) -> int:
    """
    Patch the user's settings row, creating it (with defaults for anything
    not given) on first save. Keys absent from values are left untouched.
    """
    existing = get_settings_row(conn, user_id)
    ts = now_ms()

    if existing:
        if values:
            conn.execute(
                settings.update()
                .where(settings.c.id == existing["id"])
                .values(updated_at=ts, **values)
            )
        return existing["id"]

    row = {**DEFAULT_SETTINGS, **values}
    result = conn.execute(
        settings.insert().values(
            user_id=user_id,
            created_at=ts,
            updated_at=ts,
            **row,
        )
    )
    return result.inserted_primary_key[0]


def get_latest_invoice_number(conn, user_id: int) -> Optional[str]:
    """invoice_number of the user's most recently issued invoice."""
    stmt = (
        select(invoices.c.invoice_number)
        .where(invoices.c.user_id == user_id)
        .order_by(invoices.c.issue_date.desc(), invoices.c.id.desc())
        .limit(1)
    )
    return conn.execute(stmt).scalar_one_or_none()
