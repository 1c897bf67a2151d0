# invoicething/services/totals.py
"""
Invoice financial totals.

Derives the money fields stored on an invoice from its line items, claims,
a tax rate and an optional rounding increment:

    subtotal = sum(quantity * unit_price) + sum(claim amount)
    tax      = subtotal * tax_rate
    total    = subtotal + tax, snapped to the nearest rounding increment

All arithmetic is Decimal. Nothing is persisted here.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Sequence

from invoicething.core.exceptions import InvalidArgumentError

ZERO = Decimal("0")
ONE = Decimal("1")


@dataclass(frozen=True)
class LineItemInput:
    description: str
    quantity: Decimal
    unit_price: Decimal


@dataclass(frozen=True)
class ClaimInput:
    description: str
    amount: Decimal
    date: int
    image_storage_id: Optional[str] = None


@dataclass(frozen=True)
class PricedLineItem:
    description: str
    quantity: Decimal
    unit_price: Decimal
    total: Decimal
    order: int


@dataclass(frozen=True)
class OrderedClaim:
    description: str
    amount: Decimal
    date: int
    order: int
    image_storage_id: Optional[str] = None


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    rounding_adjustment: Optional[Decimal] = None
    line_items: List[PricedLineItem] = field(default_factory=list)
    claims: List[OrderedClaim] = field(default_factory=list)


def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 0.1 as 0.1 instead of its binary expansion
    return Decimal(str(value))


def validate_tax_rate(tax_rate: Decimal) -> Decimal:
    tax_rate = _as_decimal(tax_rate)
    if tax_rate < ZERO or tax_rate > ONE:
        raise InvalidArgumentError(f"tax rate must be between 0 and 1, got {tax_rate}")
    return tax_rate


def validate_rounding_increment(increment: Decimal) -> Decimal:
    increment = _as_decimal(increment)
    if increment <= ZERO:
        raise InvalidArgumentError(
            f"rounding increment must be positive, got {increment}"
        )
    return increment


def round_to_increment(amount: Decimal, increment: Decimal) -> Decimal:
    """Snap amount to the nearest multiple of increment (halves away from zero)."""
    steps = (amount / increment).quantize(ONE, rounding=ROUND_HALF_UP)
    return steps * increment


def price_line_items(items: Iterable[LineItemInput]) -> List[PricedLineItem]:
    priced: List[PricedLineItem] = []
    for order, item in enumerate(items):
        quantity = _as_decimal(item.quantity)
        unit_price = _as_decimal(item.unit_price)
        if quantity < ZERO:
            raise InvalidArgumentError(
                f"line item {order}: quantity must not be negative"
            )
        if unit_price < ZERO:
            raise InvalidArgumentError(
                f"line item {order}: unit price must not be negative"
            )
        priced.append(
            PricedLineItem(
                description=item.description,
                quantity=quantity,
                unit_price=unit_price,
                total=quantity * unit_price,
                order=order,
            )
        )
    return priced


def order_claims(claims: Iterable[ClaimInput]) -> List[OrderedClaim]:
    ordered: List[OrderedClaim] = []
    for order, claim in enumerate(claims):
        amount = _as_decimal(claim.amount)
        if amount < ZERO:
            raise InvalidArgumentError(f"claim {order}: amount must not be negative")
        ordered.append(
            OrderedClaim(
                description=claim.description,
                amount=amount,
                date=claim.date,
                order=order,
                image_storage_id=claim.image_storage_id,
            )
        )
    return ordered


def calculate_invoice_totals(
    line_items: Sequence[LineItemInput],
    claims: Optional[Sequence[ClaimInput]] = None,
    tax_rate: Decimal = ZERO,
    rounding_increment: Optional[Decimal] = None,
) -> InvoiceTotals:
    """
    Price line items, order claims and derive subtotal, tax and total.

    rounding_increment=None means rounding is disabled; the adjustment is then
    None and the total is unrounded.
    """
    tax_rate = validate_tax_rate(tax_rate)
    if rounding_increment is not None:
        rounding_increment = validate_rounding_increment(rounding_increment)

    priced = price_line_items(line_items)
    ordered = order_claims(claims or [])

    line_item_subtotal = sum((item.total for item in priced), ZERO)
    claims_total = sum((claim.amount for claim in ordered), ZERO)

    subtotal = line_item_subtotal + claims_total
    tax = subtotal * tax_rate
    raw_total = subtotal + tax

    if rounding_increment is None:
        return InvoiceTotals(
            subtotal=subtotal,
            tax=tax,
            total=raw_total,
            line_items=priced,
            claims=ordered,
        )

    rounded_total = round_to_increment(raw_total, rounding_increment)
    return InvoiceTotals(
        subtotal=subtotal,
        tax=tax,
        total=rounded_total,
        rounding_adjustment=rounded_total - raw_total,
        line_items=priced,
        claims=ordered,
    )
