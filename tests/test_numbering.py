import pytest

from invoicething.services.numbering import format_invoice_number, next_invoice_number


def test_first_invoice_uses_defaults():
    assert next_invoice_number(None) == "INV-0001"


def test_first_invoice_uses_configured_prefix_and_start():
    assert next_invoice_number(None, prefix="ACME", start=42) == "ACME-0042"


@pytest.mark.parametrize(
    "last, expected",
    [
        ("INV-0007", "INV-0008"),
        ("INV-0999", "INV-1000"),
        ("INV-9999", "INV-10000"),
        ("2024-INV-12", "INV-0013"),
        ("17", "INV-0018"),
        ("INV-0012b", "INV-0013"),
    ],
)
def test_increments_last_numeric_segment(last, expected):
    assert next_invoice_number(last) == expected


def test_new_prefix_applies_to_continued_sequence():
    assert next_invoice_number("INV-0007", prefix="BILL") == "BILL-0008"


@pytest.mark.parametrize("last", ["INV-ABC", "draft", "INV-x12"])
def test_unparsable_suffix_restarts_from_start(last):
    assert next_invoice_number(last) == "INV-0001"
    assert next_invoice_number(last, start=5) == "INV-0005"


def test_empty_suffix_counts_as_zero():
    assert next_invoice_number("INV-", start=5) == "INV-0001"


def test_format_pads_to_four_digits():
    assert format_invoice_number("INV", 3) == "INV-0003"
