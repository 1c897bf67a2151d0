# invoicething/models/dashboard.py

from decimal import Decimal
from typing import List

from pydantic import BaseModel


class DashboardStatsOut(BaseModel):
    total_earnings: Decimal
    total_outstanding: Decimal
    total_invoices: int
    paid_invoices: int
    active_clients: int

    class Config:
        from_attributes = True


class StatusCount(BaseModel):
    status: str
    count: int


class StatusBreakdownOut(BaseModel):
    items: List[StatusCount]


class WeeklyRevenueItem(BaseModel):
    week_start: int
    label: str
    paid: Decimal
    total: Decimal

    class Config:
        from_attributes = True


class WeeklyRevenueOut(BaseModel):
    weeks: List[WeeklyRevenueItem]
