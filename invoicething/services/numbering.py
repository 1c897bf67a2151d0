# invoicething/services/numbering.py
"""
Next-invoice-number suggestion.

The number is a UI default only: nothing enforces uniqueness or
monotonicity of stored invoice numbers.
"""

import re
from typing import Optional

DEFAULT_PREFIX = "INV"
DEFAULT_START = 1
NUMBER_WIDTH = 4

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def format_invoice_number(prefix: str, number: int) -> str:
    return f"{prefix}-{number:0{NUMBER_WIDTH}d}"


def _parse_suffix(invoice_number: str) -> Optional[int]:
    # Last "-" segment; like parseInt, leading digits count ("0012a" -> 12).
    suffix = invoice_number.split("-")[-1] or "0"
    m = _LEADING_INT.match(suffix)
    if not m:
        return None
    return int(m.group(1))


def next_invoice_number(
    last_invoice_number: Optional[str],
    prefix: str = DEFAULT_PREFIX,
    start: int = DEFAULT_START,
) -> str:
    """
    Suggest the invoice number following last_invoice_number.

    With no previous invoice, or one whose last segment is not numeric, the
    sequence restarts at start.
    """
    if last_invoice_number is None:
        return format_invoice_number(prefix, start)

    last = _parse_suffix(last_invoice_number)
    if last is None:
        return format_invoice_number(prefix, start)

    return format_invoice_number(prefix, last + 1)
