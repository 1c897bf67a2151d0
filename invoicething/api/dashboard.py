# invoicething/api/dashboard.py

from typing import List

from fastapi import APIRouter, Depends, Query

from invoicething.api.deps import get_current_user
from invoicething.db.engine import get_engine
from invoicething.models.dashboard import (
    DashboardStatsOut,
    StatusBreakdownOut,
    StatusCount,
    WeeklyRevenueItem,
    WeeklyRevenueOut,
)
from invoicething.models.invoices import InvoiceOut
from invoicething.repositories.clients import list_clients
from invoicething.repositories.invoices import list_invoices
from invoicething.services import dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _user_invoices(user_id: int) -> list:
    engine = get_engine()
    with engine.connect() as conn:
        return list_invoices(conn, user_id, with_clients=False)


@router.get("/stats", response_model=DashboardStatsOut)
def get_stats(current_user: dict = Depends(get_current_user)) -> DashboardStatsOut:
    """
    Earnings (paid), outstanding (sent + overdue) and counts over all of the
    user's invoices and clients.
    """
    engine = get_engine()

    with engine.connect() as conn:
        invoices = list_invoices(conn, current_user["id"], with_clients=False)
        clients = list_clients(conn, current_user["id"])

    stats = dashboard.compute_stats(invoices, clients)
    return DashboardStatsOut.model_validate(stats)


@router.get("/status-breakdown", response_model=StatusBreakdownOut)
def get_status_breakdown(
    current_user: dict = Depends(get_current_user),
) -> StatusBreakdownOut:
    counts = dashboard.status_breakdown(_user_invoices(current_user["id"]))
    return StatusBreakdownOut(
        items=[StatusCount(status=status, count=n) for status, n in counts.items()]
    )


@router.get("/weekly-revenue", response_model=WeeklyRevenueOut)
def get_weekly_revenue(
    weeks: int = Query(8, ge=1, le=52),
    current_user: dict = Depends(get_current_user),
) -> WeeklyRevenueOut:
    buckets = dashboard.weekly_revenue(_user_invoices(current_user["id"]), weeks=weeks)
    return WeeklyRevenueOut(
        weeks=[WeeklyRevenueItem.model_validate(b) for b in buckets]
    )


@router.get("/recent-invoices", response_model=List[InvoiceOut])
def get_recent_invoices(
    limit: int = Query(5, ge=1, le=50),
    current_user: dict = Depends(get_current_user),
) -> List[InvoiceOut]:
    engine = get_engine()

    with engine.connect() as conn:
        rows = list_invoices(conn, current_user["id"], limit=limit)

    return [InvoiceOut.model_validate(row) for row in rows]
