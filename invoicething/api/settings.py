# invoicething/api/settings.py

import logging

from fastapi import APIRouter, Depends, Query

from invoicething.api.deps import get_current_user
from invoicething.db.engine import get_engine
from invoicething.models.settings import (
    DefaultDueDateOut,
    NextInvoiceNumberOut,
    SettingsIn,
    SettingsOut,
)
from invoicething.repositories import settings as repo
from invoicething.services.numbering import next_invoice_number

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])

DAY_MS = 24 * 60 * 60 * 1000
NULLABLE_FIELDS = {"payment_instructions"}


@router.get("/", response_model=SettingsOut)
def get_settings(current_user: dict = Depends(get_current_user)) -> SettingsOut:
    """
    Return the acting user's settings, or the defaults if none were saved.
    """
    engine = get_engine()

    with engine.connect() as conn:
        row = repo.get_settings(conn, current_user["id"])

    return SettingsOut.model_validate(row)


@router.put("/", response_model=SettingsOut)
def upsert_settings(
    payload: SettingsIn,
    current_user: dict = Depends(get_current_user),
) -> SettingsOut:
    """
    Save settings. Fields left out of the body keep their stored (or default)
    value.
    """
    values = {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or key in NULLABLE_FIELDS
    }

    engine = get_engine()

    with engine.begin() as conn:
        settings_id = repo.upsert_settings(conn, current_user["id"], values)
        row = repo.get_settings(conn, current_user["id"])

    logger.info("Saved settings %s for user %s", settings_id, current_user["id"])
    return SettingsOut.model_validate(row)


@router.get("/next-invoice-number", response_model=NextInvoiceNumberOut)
def get_next_invoice_number(
    current_user: dict = Depends(get_current_user),
) -> NextInvoiceNumberOut:
    """
    Suggest the next invoice number from the settings prefix/start and the
    most recently issued invoice.
    """
    engine = get_engine()

    with engine.connect() as conn:
        settings = repo.get_settings(conn, current_user["id"])
        last_number = repo.get_latest_invoice_number(conn, current_user["id"])

    return NextInvoiceNumberOut(
        invoice_number=next_invoice_number(
            last_number,
            prefix=settings["invoice_prefix"],
            start=settings["invoice_number_start"],
        )
    )


@router.get("/default-due-date", response_model=DefaultDueDateOut)
def get_default_due_date(
    issue_date: int = Query(..., description="Issue date as epoch milliseconds"),
    current_user: dict = Depends(get_current_user),
) -> DefaultDueDateOut:
    engine = get_engine()

    with engine.connect() as conn:
        settings = repo.get_settings(conn, current_user["id"])

    days = settings["due_date_days"]
    return DefaultDueDateOut(
        issue_date=issue_date,
        due_date=issue_date + days * DAY_MS,
        due_date_days=days,
    )
