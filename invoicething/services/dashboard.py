# invoicething/services/dashboard.py
"""
Dashboard aggregation over a user's full invoice collection.

Recomputed on every call; nothing is cached or maintained incrementally.
Drafts count towards invoice totals but never towards money figures.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Sequence

from invoicething.db.schema import INVOICE_STATUSES

ZERO = Decimal("0")
OUTSTANDING_STATUSES = ("sent", "overdue")


@dataclass(frozen=True)
class DashboardStats:
    total_earnings: Decimal
    total_outstanding: Decimal
    total_invoices: int
    paid_invoices: int
    active_clients: int


@dataclass(frozen=True)
class WeeklyRevenue:
    week_start: int
    label: str
    paid: Decimal
    total: Decimal


def compute_stats(invoices: Sequence[Mapping], clients: Sequence[Mapping]) -> DashboardStats:
    total_earnings = ZERO
    total_outstanding = ZERO
    paid_invoices = 0

    for inv in invoices:
        if inv["status"] == "paid":
            total_earnings += inv["total"]
            paid_invoices += 1
        elif inv["status"] in OUTSTANDING_STATUSES:
            total_outstanding += inv["total"]

    return DashboardStats(
        total_earnings=total_earnings,
        total_outstanding=total_outstanding,
        total_invoices=len(invoices),
        paid_invoices=paid_invoices,
        active_clients=len(clients),
    )


def status_breakdown(invoices: Sequence[Mapping]) -> Dict[str, int]:
    """Invoice count per status, in enum order, omitting zero counts."""
    counts = {status: 0 for status in INVOICE_STATUSES}
    for inv in invoices:
        if inv["status"] in counts:
            counts[inv["status"]] += 1
    return {status: n for status, n in counts.items() if n > 0}


def _week_start(moment: datetime) -> datetime:
    # Weeks start on Sunday (weekday() is 0 for Monday).
    days_since_sunday = (moment.weekday() + 1) % 7
    day = moment - timedelta(days=days_since_sunday)
    return day.replace(hour=0, minute=0, second=0, microsecond=0)


def weekly_revenue(
    invoices: Sequence[Mapping],
    weeks: int = 8,
    now: Optional[datetime] = None,
) -> List[WeeklyRevenue]:
    """
    Paid and non-draft totals of invoices issued in each of the last `weeks`
    weeks, oldest week first. The current week is the last bucket.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    current = _week_start(now)
    buckets: List[WeeklyRevenue] = []

    for offset in range(weeks - 1, -1, -1):
        start = current - timedelta(weeks=offset)
        end = start + timedelta(weeks=1)
        start_ms = int(start.timestamp() * 1000)
        end_ms = int(end.timestamp() * 1000)

        paid = ZERO
        total = ZERO
        for inv in invoices:
            if not (start_ms <= inv["issue_date"] < end_ms):
                continue
            if inv["status"] == "draft":
                continue
            total += inv["total"]
            if inv["status"] == "paid":
                paid += inv["total"]

        buckets.append(
            WeeklyRevenue(
                week_start=start_ms,
                label=start.strftime("%b %d"),
                paid=paid,
                total=total,
            )
        )

    return buckets
