from decimal import Decimal

from conftest import invoice_payload


def _create(client, headers, client_id, status, amount, number):
    payload = invoice_payload(
        client_id,
        invoice_number=number,
        status=status,
        line_items=[{"description": "Work", "quantity": "1", "unit_price": amount}],
    )
    resp = client.post("/invoices/", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text


def test_stats_exclude_drafts(client, alice, bob, acme):
    _create(client, alice, acme["id"], "draft", "75", "INV-0001")
    _create(client, alice, acme["id"], "sent", "100", "INV-0002")
    _create(client, alice, acme["id"], "paid", "50", "INV-0003")

    body = client.get("/dashboard/stats", headers=alice).json()
    assert Decimal(body["total_earnings"]) == Decimal("50")
    assert Decimal(body["total_outstanding"]) == Decimal("100")
    assert body["total_invoices"] == 3
    assert body["paid_invoices"] == 1
    assert body["active_clients"] == 1

    empty = client.get("/dashboard/stats", headers=bob).json()
    assert empty["total_invoices"] == 0
    assert Decimal(empty["total_earnings"]) == 0


def test_status_breakdown(client, alice, acme):
    _create(client, alice, acme["id"], "sent", "1", "INV-0001")
    _create(client, alice, acme["id"], "sent", "1", "INV-0002")
    _create(client, alice, acme["id"], "overdue", "1", "INV-0003")

    body = client.get("/dashboard/status-breakdown", headers=alice).json()
    assert body == {"items": [{"status": "sent", "count": 2}, {"status": "overdue", "count": 1}]}


def test_weekly_revenue_shape(client, alice):
    body = client.get("/dashboard/weekly-revenue", params={"weeks": 4}, headers=alice).json()
    assert len(body["weeks"]) == 4
    assert all(Decimal(w["total"]) == 0 for w in body["weeks"])


def test_recent_invoices(client, alice, acme):
    for n in range(1, 8):
        payload = invoice_payload(acme["id"], invoice_number=f"INV-000{n}", issue_date=n * 1000)
        client.post("/invoices/", json=payload, headers=alice)

    body = client.get("/dashboard/recent-invoices", headers=alice).json()
    assert [i["invoice_number"] for i in body] == [f"INV-000{n}" for n in range(7, 2, -1)]
