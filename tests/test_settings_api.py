from decimal import Decimal

from sqlalchemy import func, select

from invoicething.db.schema import settings

from conftest import invoice_payload

DAY_MS = 24 * 60 * 60 * 1000


def test_defaults_when_nothing_saved(client, alice):
    body = client.get("/settings/", headers=alice).json()

    assert body["id"] is None
    assert body["invoice_prefix"] == "INV"
    assert body["invoice_number_start"] == 1
    assert body["due_date_days"] == 14
    assert Decimal(body["tax_rate"]) == 0
    assert body["enable_rounding"] is False
    assert Decimal(body["rounding_increment"]) == Decimal("0.05")


def test_upsert_creates_once_then_patches(client, engine, alice):
    first = client.put("/settings/", json={"invoice_prefix": "ACME", "tax_rate": "0.09"}, headers=alice)
    assert first.status_code == 200, first.text
    second = client.put("/settings/", json={"due_date_days": 30}, headers=alice)

    body = second.json()
    assert body["id"] == first.json()["id"]
    assert body["invoice_prefix"] == "ACME"
    assert Decimal(body["tax_rate"]) == Decimal("0.09")
    assert body["due_date_days"] == 30

    with engine.connect() as conn:
        assert conn.execute(select(func.count()).select_from(settings)).scalar_one() == 1


def test_invalid_settings_are_rejected(client, alice):
    assert client.put("/settings/", json={"tax_rate": "1.5"}, headers=alice).status_code == 422
    assert client.put("/settings/", json={"rounding_increment": "0"}, headers=alice).status_code == 422


def test_next_number_defaults(client, alice):
    body = client.get("/settings/next-invoice-number", headers=alice).json()
    assert body == {"invoice_number": "INV-0001"}


def test_next_number_uses_start_and_prefix(client, alice):
    client.put("/settings/", json={"invoice_prefix": "ACME", "invoice_number_start": 100}, headers=alice)
    body = client.get("/settings/next-invoice-number", headers=alice).json()
    assert body == {"invoice_number": "ACME-0100"}


def test_next_number_follows_latest_issued_invoice(client, alice, acme):
    client.post(
        "/invoices/",
        json=invoice_payload(acme["id"], invoice_number="INV-0007", issue_date=2000),
        headers=alice,
    )
    client.post(
        "/invoices/",
        json=invoice_payload(acme["id"], invoice_number="INV-0003", issue_date=1000),
        headers=alice,
    )
    body = client.get("/settings/next-invoice-number", headers=alice).json()
    assert body == {"invoice_number": "INV-0008"}


def test_next_number_restarts_on_unparsable_suffix(client, alice, acme):
    client.post("/invoices/", json=invoice_payload(acme["id"], invoice_number="INV-ABC"), headers=alice)
    body = client.get("/settings/next-invoice-number", headers=alice).json()
    assert body == {"invoice_number": "INV-0001"}


def test_next_number_ignores_other_users(client, alice, bob, acme):
    client.post("/invoices/", json=invoice_payload(acme["id"], invoice_number="INV-0041"), headers=alice)
    body = client.get("/settings/next-invoice-number", headers=bob).json()
    assert body == {"invoice_number": "INV-0001"}


def test_default_due_date(client, alice):
    client.put("/settings/", json={"due_date_days": 30}, headers=alice)
    body = client.get("/settings/default-due-date", params={"issue_date": 0}, headers=alice).json()
    assert body == {"issue_date": 0, "due_date": 30 * DAY_MS, "due_date_days": 30}


def test_settings_precision_is_bounded(client, alice):
    assert client.put("/settings/", json={"tax_rate": "0.0000001"}, headers=alice).status_code == 422
    resp = client.put("/settings/", json={"rounding_increment": "0.000001"}, headers=alice)
    assert resp.status_code == 200
    assert Decimal(resp.json()["rounding_increment"]) == Decimal("0.000001")
