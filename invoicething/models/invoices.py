# invoicething/models/invoices.py

from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from invoicething.models.clients import ClientOut

InvoiceStatus = Literal["draft", "sent", "paid", "overdue"]

# Accepted precision of money and quantity inputs.
MAX_DIGITS = 18
DECIMAL_PLACES = 6


class LineItemIn(BaseModel):
    description: str
    quantity: Decimal = Field(
        ..., ge=0, max_digits=MAX_DIGITS, decimal_places=DECIMAL_PLACES
    )
    unit_price: Decimal = Field(
        ..., ge=0, max_digits=MAX_DIGITS, decimal_places=DECIMAL_PLACES
    )


class ClaimIn(BaseModel):
    description: str
    amount: Decimal = Field(
        ..., ge=0, max_digits=MAX_DIGITS, decimal_places=DECIMAL_PLACES
    )
    date: int
    image_storage_id: Optional[str] = None


class TotalsIn(BaseModel):
    line_items: List[LineItemIn]
    claims: List[ClaimIn] = []
    tax_rate: Decimal = Field(
        default=Decimal("0"), ge=0, le=1, decimal_places=DECIMAL_PLACES
    )


class InvoiceCreate(TotalsIn):
    client_id: int
    invoice_number: str = Field(..., min_length=1)
    issue_date: int
    due_date: int
    status: InvoiceStatus = "draft"
    notes: Optional[str] = None


class InvoiceUpdate(TotalsIn):
    client_id: int
    invoice_number: str = Field(..., min_length=1)
    issue_date: int
    due_date: int
    notes: Optional[str] = None


class StatusIn(BaseModel):
    status: InvoiceStatus


class BulkStatusIn(BaseModel):
    invoice_ids: List[int]
    status: InvoiceStatus


class BulkDeleteIn(BaseModel):
    invoice_ids: List[int]


class BulkResult(BaseModel):
    affected: List[int]


class LineItemOut(BaseModel):
    id: Optional[int] = None
    description: str
    quantity: Decimal
    unit_price: Decimal
    total: Decimal
    order: int

    class Config:
        from_attributes = True


class ClaimOut(BaseModel):
    id: Optional[int] = None
    description: str
    amount: Decimal
    date: int
    order: int
    image_storage_id: Optional[str] = None

    class Config:
        from_attributes = True


class TotalsOut(BaseModel):
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    rounding_adjustment: Optional[Decimal] = None
    line_items: List[LineItemOut]
    claims: List[ClaimOut]

    class Config:
        from_attributes = True


class InvoiceOut(BaseModel):
    id: int
    client_id: int
    invoice_number: str
    issue_date: int
    due_date: int
    status: InvoiceStatus
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    rounding_adjustment: Optional[Decimal] = None
    notes: Optional[str] = None
    created_at: int
    updated_at: int
    client: Optional[ClientOut] = None

    class Config:
        from_attributes = True


class InvoiceDetailOut(InvoiceOut):
    line_items: List[LineItemOut]
    claims: List[ClaimOut]
