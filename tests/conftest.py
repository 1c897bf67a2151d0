from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

import invoicething.db.engine as db_engine
from invoicething.db.schema import metadata
from invoicething.main import app
from invoicething.services.attachments import AttachmentStore, get_attachment_store


@pytest.fixture
def engine(tmp_path, monkeypatch):
    engine = create_engine(f"sqlite:///{tmp_path / 'invoicething_test.db'}", future=True)
    metadata.create_all(engine)
    monkeypatch.setattr(db_engine, "_engine", engine)
    yield engine
    engine.dispose()


@pytest.fixture
def client(engine, tmp_path):
    store = AttachmentStore(str(tmp_path / "attachments"))
    app.dependency_overrides[get_attachment_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def sync_user(client, subject="user_alice", email="alice@example.com", name="Alice"):
    resp = client.post(
        "/users/sync",
        json={"subject_id": subject, "email": email, "name": name},
    )
    assert resp.status_code == 200, resp.text
    return {"X-User-Subject": subject}


@pytest.fixture
def alice(client):
    return sync_user(client)


@pytest.fixture
def bob(client):
    return sync_user(client, subject="user_bob", email="bob@example.com", name="Bob")


@pytest.fixture
def acme(client, alice):
    resp = client.post("/clients/", json={"name": "Acme Pte Ltd"}, headers=alice)
    assert resp.status_code == 201, resp.text
    return resp.json()


def invoice_payload(client_id, **overrides):
    payload = {
        "client_id": client_id,
        "invoice_number": "INV-0001",
        "issue_date": 1767225600000,
        "due_date": 1768435200000,
        "status": "draft",
        "line_items": [
            {"description": "Design", "quantity": "2", "unit_price": "150"},
        ],
        "claims": [],
        "tax_rate": "0",
    }
    payload.update(overrides)
    return payload
