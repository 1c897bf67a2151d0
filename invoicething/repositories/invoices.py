# invoicething/repositories/invoices.py

from typing import Iterable, List, Optional

from sqlalchemy import select

from invoicething.db.engine import now_ms
from invoicething.db.schema import claims, clients, invoices, line_items
from invoicething.services.totals import InvoiceTotals


def _totals_values(totals: InvoiceTotals) -> dict:
    return {
        "subtotal": totals.subtotal,
        "tax": totals.tax,
        "total": totals.total,
        "rounding_adjustment": totals.rounding_adjustment,
    }


def insert_invoice(conn, user_id: int, header: dict, totals: InvoiceTotals) -> int:
    """
    Insert an invoice with its line items and claims.

    header: invoice fields other than money and timestamps, e.g.
      {
        "client_id": 3,
        "invoice_number": "INV-0007",
        "issue_date": 1767225600000,
        "due_date": 1768435200000,
        "status": "draft",
        "notes": None,
      }
    """
    ts = now_ms()
    result = conn.execute(
        invoices.insert().values(
            user_id=user_id,
            created_at=ts,
            updated_at=ts,
            **header,
            **_totals_values(totals),
        )
    )
    invoice_id = result.inserted_primary_key[0]
    _insert_children(conn, invoice_id, totals)
    return invoice_id


def _insert_children(conn, invoice_id: int, totals: InvoiceTotals) -> None:
    if totals.line_items:
        conn.execute(
            line_items.insert(),
            [
                {
                    "invoice_id": invoice_id,
                    "description": item.description,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                    "total": item.total,
                    "order": item.order,
                }
                for item in totals.line_items
            ],
        )
    if totals.claims:
        conn.execute(
            claims.insert(),
            [
                {
                    "invoice_id": invoice_id,
                    "description": claim.description,
                    "amount": claim.amount,
                    "date": claim.date,
                    "order": claim.order,
                    "image_storage_id": claim.image_storage_id,
                }
                for claim in totals.claims
            ],
        )


def delete_children(conn, invoice_id: int) -> None:
    conn.execute(line_items.delete().where(line_items.c.invoice_id == invoice_id))
    conn.execute(claims.delete().where(claims.c.invoice_id == invoice_id))


def set_invoice_children(conn, invoice_id: int, totals: InvoiceTotals) -> None:
    """Replace all line items and claims of an invoice with the given set."""
    delete_children(conn, invoice_id)
    _insert_children(conn, invoice_id, totals)


def update_invoice(
    conn, user_id: int, invoice_id: int, header: dict, totals: InvoiceTotals
) -> bool:
    result = conn.execute(
        invoices.update()
        .where(invoices.c.id == invoice_id, invoices.c.user_id == user_id)
        .values(updated_at=now_ms(), **header, **_totals_values(totals))
    )
    if result.rowcount == 0:
        return False
    set_invoice_children(conn, invoice_id, totals)
    return True


def get_invoice_row(conn, user_id: int, invoice_id: int) -> Optional[dict]:
    stmt = select(invoices).where(
        invoices.c.id == invoice_id,
        invoices.c.user_id == user_id,
    )
    row = conn.execute(stmt).mappings().first()
    return dict(row) if row else None


def _client_map(conn, client_ids: Iterable[int]) -> dict:
    ids = set(client_ids)
    if not ids:
        return {}
    rows = conn.execute(select(clients).where(clients.c.id.in_(ids))).mappings().all()
    return {row["id"]: dict(row) for row in rows}


def list_invoices(
    conn,
    user_id: int,
    status: Optional[str] = None,
    client_id: Optional[int] = None,
    limit: Optional[int] = None,
    with_clients: bool = True,
) -> List[dict]:
    """The user's invoices, newest issue date first, each with its client."""
    conditions = [invoices.c.user_id == user_id]
    if status is not None:
        conditions.append(invoices.c.status == status)
    if client_id is not None:
        conditions.append(invoices.c.client_id == client_id)

    stmt = (
        select(invoices)
        .where(*conditions)
        .order_by(invoices.c.issue_date.desc(), invoices.c.id.desc())
    )
    if limit is not None:
        stmt = stmt.limit(limit)

    rows = [dict(row) for row in conn.execute(stmt).mappings().all()]

    if with_clients:
        by_id = _client_map(conn, (row["client_id"] for row in rows))
        for row in rows:
            row["client"] = by_id.get(row["client_id"])
    return rows


def get_invoice(conn, user_id: int, invoice_id: int) -> Optional[dict]:
    """Invoice with client, line items and claims (children in stored order)."""
    invoice = get_invoice_row(conn, user_id, invoice_id)
    if invoice is None:
        return None

    invoice["client"] = _client_map(conn, [invoice["client_id"]]).get(
        invoice["client_id"]
    )

    item_stmt = (
        select(line_items)
        .where(line_items.c.invoice_id == invoice_id)
        .order_by(line_items.c["order"])
    )
    claim_stmt = (
        select(claims)
        .where(claims.c.invoice_id == invoice_id)
        .order_by(claims.c["order"])
    )
    invoice["line_items"] = [dict(r) for r in conn.execute(item_stmt).mappings().all()]
    invoice["claims"] = [dict(r) for r in conn.execute(claim_stmt).mappings().all()]
    return invoice


def set_status(conn, user_id: int, invoice_id: int, status: str) -> bool:
    result = conn.execute(
        invoices.update()
        .where(invoices.c.id == invoice_id, invoices.c.user_id == user_id)
        .values(status=status, updated_at=now_ms())
    )
    return result.rowcount > 0


def delete_invoice(conn, user_id: int, invoice_id: int) -> bool:
    """Delete an invoice and all of its line items and claims."""
    if get_invoice_row(conn, user_id, invoice_id) is None:
        return False
    delete_children(conn, invoice_id)
    conn.execute(invoices.delete().where(invoices.c.id == invoice_id))
    return True

