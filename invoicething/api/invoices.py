# invoicething/api/invoices.py

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from invoicething.api.deps import get_current_user
from invoicething.core.exceptions import InvalidArgumentError
from invoicething.db.engine import get_engine
from invoicething.models.invoices import (
    BulkDeleteIn,
    BulkResult,
    BulkStatusIn,
    InvoiceCreate,
    InvoiceDetailOut,
    InvoiceOut,
    InvoiceStatus,
    InvoiceUpdate,
    StatusIn,
    TotalsIn,
    TotalsOut,
)
from invoicething.repositories import invoices as repo
from invoicething.repositories.clients import get_client
from invoicething.repositories.settings import get_settings
from invoicething.services.attachments import require_uploaded
from invoicething.services.status import check_transition
from invoicething.services.totals import (
    ClaimInput,
    InvoiceTotals,
    LineItemInput,
    calculate_invoice_totals,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invoices", tags=["invoices"])


def _compute_totals(conn, user_id: int, payload: TotalsIn) -> InvoiceTotals:
    """Run the calculator, applying the user's rounding setting if enabled."""
    settings = get_settings(conn, user_id)
    increment = settings["rounding_increment"] if settings["enable_rounding"] else None

    return calculate_invoice_totals(
        line_items=[
            LineItemInput(
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in payload.line_items
        ],
        claims=[
            ClaimInput(
                description=claim.description,
                amount=claim.amount,
                date=claim.date,
                image_storage_id=claim.image_storage_id,
            )
            for claim in payload.claims
        ],
        tax_rate=payload.tax_rate,
        rounding_increment=increment,
    )


def _require_client(conn, user_id: int, client_id: int) -> None:
    if get_client(conn, user_id, client_id) is None:
        raise InvalidArgumentError(f"Unknown client {client_id}")


def _require_receipts(conn, user_id: int, payload: TotalsIn) -> None:
    for claim in payload.claims:
        if claim.image_storage_id is not None:
            require_uploaded(conn, user_id, claim.image_storage_id)


@router.get("/", response_model=List[InvoiceOut])
def list_invoices(
    status: Optional[InvoiceStatus] = Query(default=None),
    client_id: Optional[int] = Query(default=None),
    current_user: dict = Depends(get_current_user),
) -> List[InvoiceOut]:
    """
    Return the acting user's invoices with their client, newest issue date
    first.
    """
    engine = get_engine()

    with engine.connect() as conn:
        rows = repo.list_invoices(
            conn, current_user["id"], status=status, client_id=client_id
        )

    return [InvoiceOut.model_validate(row) for row in rows]


@router.post("/", response_model=InvoiceDetailOut, status_code=201)
def create_invoice(
    payload: InvoiceCreate,
    current_user: dict = Depends(get_current_user),
) -> InvoiceDetailOut:
    user_id = current_user["id"]
    engine = get_engine()

    # One transaction: the invoice and its children are written together.
    with engine.begin() as conn:
        _require_client(conn, user_id, payload.client_id)
        _require_receipts(conn, user_id, payload)
        totals = _compute_totals(conn, user_id, payload)
        invoice_id = repo.insert_invoice(
            conn,
            user_id,
            {
                "client_id": payload.client_id,
                "invoice_number": payload.invoice_number,
                "issue_date": payload.issue_date,
                "due_date": payload.due_date,
                "status": payload.status,
                "notes": payload.notes,
            },
            totals,
        )
        invoice = repo.get_invoice(conn, user_id, invoice_id)

    logger.info(
        "Created invoice %s (%s) for user %s, total %s",
        invoice_id, payload.invoice_number, user_id, totals.total,
    )
    return InvoiceDetailOut.model_validate(invoice)


@router.post("/preview-totals", response_model=TotalsOut)
def preview_totals(
    payload: TotalsIn,
    current_user: dict = Depends(get_current_user),
) -> TotalsOut:
    """
    Compute totals for an unsaved invoice form. Nothing is stored.
    """
    engine = get_engine()

    with engine.connect() as conn:
        totals = _compute_totals(conn, current_user["id"], payload)

    return TotalsOut.model_validate(totals)


@router.post("/bulk/status", response_model=BulkResult)
def bulk_update_status(
    payload: BulkStatusIn,
    current_user: dict = Depends(get_current_user),
) -> BulkResult:
    """
    Set one status on many invoices. Ids the user does not own are skipped.
    """
    user_id = current_user["id"]
    affected: List[int] = []

    if not payload.invoice_ids:
        return BulkResult(affected=affected)

    engine = get_engine()

    with engine.begin() as conn:
        for invoice_id in payload.invoice_ids:
            row = repo.get_invoice_row(conn, user_id, invoice_id)
            if row is None:
                logger.warning(
                    "Skipping status update of invoice %s: not found for user %s",
                    invoice_id, user_id,
                )
                continue
            check_transition(row["status"], payload.status)
            repo.set_status(conn, user_id, invoice_id, payload.status)
            affected.append(invoice_id)

    logger.info(
        "Set status %s on %d invoice(s) for user %s",
        payload.status, len(affected), user_id,
    )
    return BulkResult(affected=affected)


@router.post("/bulk/delete", response_model=BulkResult)
def bulk_delete(
    payload: BulkDeleteIn,
    current_user: dict = Depends(get_current_user),
) -> BulkResult:
    user_id = current_user["id"]
    affected: List[int] = []

    if not payload.invoice_ids:
        return BulkResult(affected=affected)

    engine = get_engine()

    with engine.begin() as conn:
        for invoice_id in payload.invoice_ids:
            if repo.delete_invoice(conn, user_id, invoice_id):
                affected.append(invoice_id)
            else:
                logger.warning(
                    "Skipping delete of invoice %s: not found for user %s",
                    invoice_id, user_id,
                )

    logger.info("Deleted %d invoice(s) for user %s", len(affected), user_id)
    return BulkResult(affected=affected)


@router.get("/{invoice_id}", response_model=InvoiceDetailOut)
def get_invoice(
    invoice_id: int,
    current_user: dict = Depends(get_current_user),
) -> InvoiceDetailOut:
    """
    Look up a single invoice with its client, line items and claims.
    """
    engine = get_engine()

    with engine.connect() as conn:
        invoice = repo.get_invoice(conn, current_user["id"], invoice_id)

    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")

    return InvoiceDetailOut.model_validate(invoice)


@router.put("/{invoice_id}", response_model=InvoiceDetailOut)
def update_invoice(
    invoice_id: int,
    payload: InvoiceUpdate,
    current_user: dict = Depends(get_current_user),
) -> InvoiceDetailOut:
    """
    Replace an invoice's header, line items and claims. Totals are
    recomputed over the complete new set; status is left as is.
    """
    user_id = current_user["id"]
    engine = get_engine()

    with engine.begin() as conn:
        if repo.get_invoice_row(conn, user_id, invoice_id) is None:
            raise HTTPException(status_code=404, detail="Invoice not found")

        _require_client(conn, user_id, payload.client_id)
        _require_receipts(conn, user_id, payload)
        totals = _compute_totals(conn, user_id, payload)
        repo.update_invoice(
            conn,
            user_id,
            invoice_id,
            {
                "client_id": payload.client_id,
                "invoice_number": payload.invoice_number,
                "issue_date": payload.issue_date,
                "due_date": payload.due_date,
                "notes": payload.notes,
            },
            totals,
        )
        invoice = repo.get_invoice(conn, user_id, invoice_id)

    logger.info("Updated invoice %s for user %s", invoice_id, user_id)
    return InvoiceDetailOut.model_validate(invoice)


@router.patch("/{invoice_id}/status", response_model=InvoiceOut)
def update_status(
    invoice_id: int,
    payload: StatusIn,
    current_user: dict = Depends(get_current_user),
) -> InvoiceOut:
    user_id = current_user["id"]
    engine = get_engine()

    with engine.begin() as conn:
        row = repo.get_invoice_row(conn, user_id, invoice_id)
        if row is None:
            raise HTTPException(status_code=404, detail="Invoice not found")

        previous = row["status"]
        check_transition(previous, payload.status)
        repo.set_status(conn, user_id, invoice_id, payload.status)
        row = repo.get_invoice_row(conn, user_id, invoice_id)

    logger.info(
        "Invoice %s status %s -> %s for user %s",
        invoice_id, previous, payload.status, user_id,
    )
    return InvoiceOut.model_validate(row)


@router.delete("/{invoice_id}", status_code=204)
def delete_invoice(
    invoice_id: int,
    current_user: dict = Depends(get_current_user),
) -> Response:
    """
    Delete an invoice together with its line items and claims.
    """
    engine = get_engine()

    with engine.begin() as conn:
        deleted = repo.delete_invoice(conn, current_user["id"], invoice_id)

    if not deleted:
        raise HTTPException(status_code=404, detail="Invoice not found")

    logger.info("Deleted invoice %s for user %s", invoice_id, current_user["id"])
    return Response(status_code=204)
