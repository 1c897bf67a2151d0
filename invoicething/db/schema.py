# invoicething/db/schema.py

from decimal import Decimal

from sqlalchemy import (
    MetaData, Table, Column, Integer, BigInteger, String, Boolean,
    ForeignKey, CheckConstraint, Text, Index
)
from sqlalchemy.types import TypeDecorator

metadata = MetaData()


class ExactDecimal(TypeDecorator):
    """Decimal stored as its exact string form: no scale rounding, no float."""
    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(str(value)))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


# Money and quantities are exact decimals; times are epoch milliseconds.
MONEY = ExactDecimal()

INVOICE_STATUSES = ("draft", "sent", "paid", "overdue")

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("subject_id", String, nullable=False, unique=True),
    Column("email", String, nullable=False),
    Column("name", String, nullable=True),
    Column("image_url", Text, nullable=True),
    Column("created_at", BigInteger, nullable=False),
)

clients = Table(
    "clients",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False, index=True),
    Column("name", String, nullable=False),
    Column("email", String, nullable=True),
    Column("street_name", String, nullable=True),
    Column("building_name", String, nullable=True),
    Column("unit_number", String, nullable=True),
    Column("postal_code", String, nullable=True),
    Column("contact_person", String, nullable=True),
    Column("created_at", BigInteger, nullable=False),
    Column("updated_at", BigInteger, nullable=False),
)

settings = Table(
    "settings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False, unique=True),
    Column("invoice_prefix", String, nullable=False),
    Column("invoice_number_start", Integer, nullable=False),
    Column("due_date_days", Integer, nullable=False),
    Column("tax_rate", MONEY, nullable=False),
    Column("payment_instructions", Text, nullable=True),
    Column("enable_rounding", Boolean, nullable=False, default=False),
    Column("rounding_increment", MONEY, nullable=True),
    Column("created_at", BigInteger, nullable=False),
    Column("updated_at", BigInteger, nullable=False),
)

invoices = Table(
    "invoices",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False, index=True),
    Column("client_id", Integer, ForeignKey("clients.id"), nullable=False, index=True),
    # Not unique: the suggested number is only a default.
    Column("invoice_number", Text, nullable=False, index=True),
    Column("issue_date", BigInteger, nullable=False),
    Column("due_date", BigInteger, nullable=False),
    Column("status", String, nullable=False),
    Column("subtotal", MONEY, nullable=False),
    Column("tax", MONEY, nullable=False),
    Column("total", MONEY, nullable=False),
    Column("rounding_adjustment", MONEY, nullable=True),
    Column("notes", Text, nullable=True),
    Column("created_at", BigInteger, nullable=False),
    Column("updated_at", BigInteger, nullable=False),
    CheckConstraint(
        "status IN ('draft', 'sent', 'paid', 'overdue')",
        name="ck_invoices_status",
    ),
    Index("ix_invoices_user_issue_date", "user_id", "issue_date"),
)

line_items = Table(
    "line_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("invoice_id", Integer, ForeignKey("invoices.id"), nullable=False, index=True),
    Column("description", Text, nullable=False),
    Column("quantity", MONEY, nullable=False),
    Column("unit_price", MONEY, nullable=False),
    Column("total", MONEY, nullable=False),
    Column("order", Integer, nullable=False),
)

claims = Table(
    "claims",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("invoice_id", Integer, ForeignKey("invoices.id"), nullable=False, index=True),
    Column("description", Text, nullable=False),
    Column("amount", MONEY, nullable=False),
    Column("date", BigInteger, nullable=False),
    Column("order", Integer, nullable=False),
    Column("image_storage_id", String, nullable=True),
)

# Claim receipt images. A row is created when an upload URL is issued and
# marked uploaded once the bytes arrive; pending rows expire.
attachments = Table(
    "attachments",
    metadata,
    Column("storage_id", String, primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False, index=True),
    Column("uploaded", Boolean, nullable=False, default=False),
    Column("size", Integer, nullable=True),
    Column("created_at", BigInteger, nullable=False),
)
