from __future__ import annotations

from flask.testing import FlaskClient
from support import bearer, register_and_login


def _create(client: FlaskClient, token: str, **overrides) -> dict:
    payload = {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"}
    payload.update(overrides)
    response = client.post("/contacts", json=payload, headers=bearer(token))
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def test_contacts_require_authentication(client: FlaskClient) -> None:
    assert client.get("/contacts").status_code == 401
    assert client.post("/contacts", json={}).status_code == 401
    assert client.patch("/contacts/1", json={}).status_code == 401
    assert client.delete("/contacts/1").status_code == 401


def test_create_and_list_contacts(client: FlaskClient) -> None:
    token = register_and_login(client)

    created = _create(client, token, email=" Ada@Example.com ")
    _create(client, token, first_name="Alan", last_name="Turing", email="alan@example.com")

    assert created["email"] == "ada@example.com"
    listed = client.get("/contacts", headers=bearer(token)).get_json()
    assert [c["first_name"] for c in listed] == ["Ada", "Alan"]


def test_create_contact_validates_payload(client: FlaskClient) -> None:
    token = register_and_login(client)

    response = client.post(
        "/contacts",
        json={"first_name": "", "last_name": "Lovelace", "email": "not-an-email"},
        headers=bearer(token),
    )

    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "invalid_input"
    assert body["context"]["fields"] == ["email", "first_name"]


def test_duplicate_contact_email_conflicts(client: FlaskClient) -> None:
    token = register_and_login(client)
    _create(client, token)

    response = client.post(
        "/contacts",
        json={"first_name": "Other", "last_name": "Person", "email": "ADA@example.com"},
        headers=bearer(token),
    )

    assert response.status_code == 409
    assert response.get_json()["error"] == "duplicate_contact"


def test_update_and_delete_contact(client: FlaskClient) -> None:
    token = register_and_login(client)
    contact = _create(client, token)

    updated = client.patch(
        f"/contacts/{contact['id']}", json={"last_name": "King"}, headers=bearer(token)
    )
    assert updated.status_code == 200
    assert updated.get_json()["last_name"] == "King"
    assert updated.get_json()["first_name"] == "Ada"

    deleted = client.delete(f"/contacts/{contact['id']}", headers=bearer(token))
    assert deleted.status_code == 204
    assert client.get("/contacts", headers=bearer(token)).get_json() == []

    missing = client.delete(f"/contacts/{contact['id']}", headers=bearer(token))
    assert missing.status_code == 404
    assert missing.get_json()["error"] == "contact_not_found"


def test_contacts_are_scoped_to_their_owner(client: FlaskClient) -> None:
    alice = register_and_login(client)
    bob = register_and_login(client, "bob", "bob@example.com")
    contact = _create(client, alice)

    assert client.get("/contacts", headers=bearer(bob)).get_json() == []

    patched = client.patch(
        f"/contacts/{contact['id']}", json={"first_name": "Eve"}, headers=bearer(bob)
    )
    deleted = client.delete(f"/contacts/{contact['id']}", headers=bearer(bob))

    assert patched.status_code == deleted.status_code == 404
    assert len(client.get("/contacts", headers=bearer(alice)).get_json()) == 1

    # Same email is fine under a different owner
    _create(client, bob)


def test_update_contact_rejects_unknown_fields(client: FlaskClient) -> None:
    token = register_and_login(client)
    contact = _create(client, token)

    response = client.patch(
        f"/contacts/{contact['id']}", json={"owner_id": 99}, headers=bearer(token)
    )

    assert response.status_code == 400
