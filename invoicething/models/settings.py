# invoicething/models/settings.py

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from invoicething.models.invoices import DECIMAL_PLACES


class SettingsIn(BaseModel):
    invoice_prefix: Optional[str] = Field(default=None, min_length=1)
    invoice_number_start: Optional[int] = Field(default=None, ge=0)
    due_date_days: Optional[int] = Field(default=None, ge=0)
    tax_rate: Optional[Decimal] = Field(
        default=None, ge=0, le=1, decimal_places=DECIMAL_PLACES
    )
    payment_instructions: Optional[str] = None
    enable_rounding: Optional[bool] = None
    rounding_increment: Optional[Decimal] = Field(
        default=None, gt=0, decimal_places=DECIMAL_PLACES
    )


class SettingsOut(BaseModel):
    id: Optional[int] = None
    invoice_prefix: str
    invoice_number_start: int
    due_date_days: int
    tax_rate: Decimal
    payment_instructions: Optional[str] = None
    enable_rounding: bool
    rounding_increment: Decimal

    class Config:
        from_attributes = True


class NextInvoiceNumberOut(BaseModel):
    invoice_number: str


class DefaultDueDateOut(BaseModel):
    issue_date: int
    due_date: int
    due_date_days: int
