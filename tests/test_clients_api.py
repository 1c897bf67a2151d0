from conftest import invoice_payload


def test_create_trims_blank_address_parts(client, alice):
    resp = client.post(
        "/clients/",
        json={
            "name": "Globex",
            "email": "billing@globex.com",
            "street_name": "  12 Orchard Road ",
            "building_name": "   ",
            "unit_number": "",
            "postal_code": "238824",
            "contact_person": "Hank",
        },
        headers=alice,
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()

    assert body["street_name"] == "12 Orchard Road"
    assert body["building_name"] is None
    assert body["unit_number"] is None
    assert body["postal_code"] == "238824"
    assert body["created_at"] == body["updated_at"]


def test_name_is_required(client, alice):
    assert client.post("/clients/", json={"email": "a@b.com"}, headers=alice).status_code == 422
    assert client.post("/clients/", json={"name": ""}, headers=alice).status_code == 422


def test_list_is_scoped_to_user_and_sorted(client, alice, bob):
    for name in ("Zeta", "Alpha"):
        client.post("/clients/", json={"name": name}, headers=alice)
    client.post("/clients/", json={"name": "Bob's client"}, headers=bob)

    names = [c["name"] for c in client.get("/clients/", headers=alice).json()]
    assert names == ["Alpha", "Zeta"]
    assert [c["name"] for c in client.get("/clients/", headers=bob).json()] == ["Bob's client"]


def test_patch_updates_only_given_fields(client, alice, acme):
    resp = client.patch(
        f"/clients/{acme['id']}",
        json={"contact_person": "Wile E.", "postal_code": " "},
        headers=alice,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["name"] == "Acme Pte Ltd"
    assert body["contact_person"] == "Wile E."
    assert body["postal_code"] is None
    assert body["updated_at"] >= acme["updated_at"]


def test_other_users_cannot_touch_client(client, alice, bob, acme):
    url = f"/clients/{acme['id']}"
    assert client.get(url, headers=bob).status_code == 404
    assert client.patch(url, json={"name": "Stolen"}, headers=bob).status_code == 404
    assert client.delete(url, headers=bob).status_code == 404
    assert client.get(url, headers=alice).json()["name"] == "Acme Pte Ltd"


def test_delete_refused_while_invoices_reference_client(client, alice, acme):
    invoice = client.post("/invoices/", json=invoice_payload(acme["id"]), headers=alice).json()
    url = f"/clients/{acme['id']}"

    assert client.delete(url, headers=alice).status_code == 409

    client.delete(f"/invoices/{invoice['id']}", headers=alice)
    assert client.delete(url, headers=alice).status_code == 204
    assert client.get(url, headers=alice).status_code == 404


def test_client_invoices(client, alice, acme):
    other = client.post("/clients/", json={"name": "Other"}, headers=alice).json()
    client.post("/invoices/", json=invoice_payload(acme["id"], invoice_number="A-1"), headers=alice)
    client.post("/invoices/", json=invoice_payload(other["id"], invoice_number="B-1"), headers=alice)

    resp = client.get(f"/clients/{acme['id']}/invoices", headers=alice)
    assert [i["invoice_number"] for i in resp.json()] == ["A-1"]
