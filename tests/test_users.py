"""Tests for the tenant-scoped user endpoints."""

import pytest
from sqlmodel import select

from catalog_api.models import User

PEOPLE = [
    ("John", "Doe", "john.doe@example.com"),
    ("Jane", "Smith", "jane.smith@example.com"),
    ("Marie", "Curie", "marie@radium.org"),
]


class TestUserList:
    """Tests for GET /api/users."""

    def test_lists_only_own_users(self, client, auth_headers, tenant, other_tenant, add_users):
        add_users(tenant, PEOPLE)
        add_users(other_tenant, [("Other", "Person", "other@example.com")], start=10)

        response = client.get("/api/users", headers=auth_headers)
        assert response.status_code == 200
        assert response.headers["Cache-Control"] == "private, max-age=300"
        assert "Authorization" in response.headers["Vary"]

        body = response.json()
        assert body["meta"] == {
            "current_page": 1,
            "total_pages": 1,
            "total_items": 3,
            "items_per_page": 10,
        }
        assert [user["email"] for user in body["data"]] == [
            "marie@radium.org",
            "jane.smith@example.com",
            "john.doe@example.com",
        ]

    def test_list_item_shape(self, client, auth_headers, tenant, add_users):
        user = add_users(tenant, PEOPLE[:1])[0]

        item = client.get("/api/users", headers=auth_headers).json()["data"][0]
        assert item == {
            "id": user.id,
            "firstName": "John",
            "lastName": "Doe",
            "email": "john.doe@example.com",
            "fullName": "John Doe",
            "_links": {
                "self": f"http://testserver/api/users/{user.id}",
                "delete": f"http://testserver/api/users/{user.id}",
            },
        }

    def test_search_matches_names_and_email(self, client, auth_headers, tenant, add_users):
        add_users(tenant, PEOPLE)

        def emails(term):
            body = client.get("/api/users", params={"search": term}, headers=auth_headers).json()
            return {user["email"] for user in body["data"]}

        assert emails("jane") == {"jane.smith@example.com"}
        assert emails("CURIE") == {"marie@radium.org"}
        assert emails("radium") == {"marie@radium.org"}
        assert emails("example.com") == {"john.doe@example.com", "jane.smith@example.com"}
        assert emails("nobody") == set()

    def test_search_is_preserved_in_links(self, client, auth_headers, tenant, add_users):
        add_users(tenant, PEOPLE)

        links = client.get("/api/users?search=e&limit=1&page=2", headers=auth_headers).json()["_links"]
        assert links["self"] == "http://testserver/api/users?page=2&limit=1&search=e"
        assert links["prev"] == "http://testserver/api/users?page=1&limit=1&search=e"
        assert links["next"] == "http://testserver/api/users?page=3&limit=1&search=e"
        assert links["last"] == "http://testserver/api/users?page=3&limit=1&search=e"

    def test_search_does_not_cross_tenants(self, client, auth_headers, tenant, other_tenant, add_users):
        add_users(other_tenant, [("John", "Other", "john@other.com")])

        body = client.get("/api/users?search=john", headers=auth_headers).json()
        assert body["data"] == []
        assert body["meta"]["total_items"] == 0

    def test_pagination_counts(self, client, auth_headers, tenant, add_users):
        add_users(tenant, [("User", "Number", f"user{i}@example.com") for i in range(25)])

        body = client.get("/api/users?page=3", headers=auth_headers).json()
        assert body["meta"]["total_pages"] == 3
        assert len(body["data"]) == 5

        body = client.get("/api/users?page=4", headers=auth_headers).json()
        assert body["data"] == []
        assert "next" not in body["_links"]


class TestUserShow:
    """Tests for GET /api/users/{id}."""

    def test_show(self, client, auth_headers, tenant, add_users):
        user = add_users(tenant, PEOPLE[:1])[0]

        response = client.get(f"/api/users/{user.id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.headers["Cache-Control"] == "private, max-age=600"
        assert "Authorization" in response.headers["Vary"]

        body = response.json()
        assert body["fullName"] == "John Doe"
        assert body["createdAt"].startswith("2025-01-01T00:00:00")
        assert body["_links"] == {
            "self": f"http://testserver/api/users/{user.id}",
            "list": "http://testserver/api/users",
            "delete": f"http://testserver/api/users/{user.id}",
        }

    def test_other_tenants_user_is_not_found(self, client, auth_headers, other_tenant, add_users):
        foreign = add_users(other_tenant, PEOPLE[:1])[0]

        response = client.get(f"/api/users/{foreign.id}", headers=auth_headers)
        missing = client.get("/api/users/9999", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}
        assert missing.json() == response.json()


class TestUserCreate:
    """Tests for POST /api/users."""

    def test_create(self, client, session, auth_headers, tenant):
        response = client.post(
            "/api/users",
            json={"firstName": "John", "lastName": "Doe", "email": "  John.Doe@Example.COM "},
            headers=auth_headers,
        )
        assert response.status_code == 201

        body = response.json()
        assert body["email"] == "john.doe@example.com"
        assert body["fullName"] == "John Doe"
        assert body["_links"] == {
            "self": f"http://testserver/api/users/{body['id']}",
            "list": "http://testserver/api/users",
        }
        assert response.headers["Location"] == body["_links"]["self"]

        stored = session.get(User, body["id"])
        assert stored.client_id == tenant.id

    def test_created_user_round_trips(self, client, auth_headers, tenant):
        created = client.post(
            "/api/users",
            json={"firstName": "Jean-Luc", "lastName": "O'Brien", "email": "jl@example.com"},
            headers=auth_headers,
        ).json()

        shown = client.get(f"/api/users/{created['id']}", headers=auth_headers).json()
        for key in ("id", "firstName", "lastName", "email"):
            assert shown[key] == created[key]

    def test_duplicate_email_conflicts(self, client, session, auth_headers, tenant):
        payload = {"firstName": "John", "lastName": "Doe", "email": "john@example.com"}
        assert client.post("/api/users", json=payload, headers=auth_headers).status_code == 201

        payload["email"] = "JOHN@example.com"
        response = client.post("/api/users", json=payload, headers=auth_headers)
        assert response.status_code == 409
        assert response.json() == {"error": "Email already exists for this client"}

        rows = session.exec(select(User).where(User.email == "john@example.com")).all()
        assert len(rows) == 1

    def test_same_email_allowed_for_other_tenant(self, client, auth_headers, other_headers):
        payload = {"firstName": "John", "lastName": "Doe", "email": "john@example.com"}

        assert client.post("/api/users", json=payload, headers=auth_headers).status_code == 201
        assert client.post("/api/users", json=payload, headers=other_headers).status_code == 201

    def test_field_errors(self, client, auth_headers):
        response = client.post(
            "/api/users",
            json={"firstName": "J", "lastName": "Doe42", "email": "not-an-email"},
            headers=auth_headers,
        )
        assert response.status_code == 400
        errors = response.json()["errors"]
        assert set(errors) == {"firstName", "lastName", "email"}

    def test_missing_fields(self, client, auth_headers):
        response = client.post("/api/users", json={"email": "a@example.com"}, headers=auth_headers)
        assert response.status_code == 400
        assert set(response.json()["errors"]) == {"firstName", "lastName"}

    def test_empty_body(self, client, auth_headers):
        response = client.post("/api/users", json={}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON"}

    @pytest.mark.parametrize("body", [[{"firstName": "John"}], "john", 42])
    def test_non_object_body(self, client, auth_headers, body):
        response = client.post("/api/users", json=body, headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON"}

    def test_malformed_json(self, client, auth_headers):
        response = client.post(
            "/api/users",
            content="{oops",
            headers={**auth_headers, "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON"}

    def test_requires_token(self, client):
        response = client.post("/api/users", json={"firstName": "John", "lastName": "Doe", "email": "j@example.com"})
        assert response.status_code == 401
        assert response.json() == {"error": "JWT Token not found"}


class TestUserDelete:
    """Tests for DELETE /api/users/{id}."""

    def test_delete(self, client, session, auth_headers, tenant, add_users):
        user = add_users(tenant, PEOPLE[:1])[0]

        response = client.delete(f"/api/users/{user.id}", headers=auth_headers)
        assert response.status_code == 204
        assert response.content == b""

        assert client.get(f"/api/users/{user.id}", headers=auth_headers).status_code == 404
        assert client.get("/api/users", headers=auth_headers).json()["meta"]["total_items"] == 0
        assert client.delete(f"/api/users/{user.id}", headers=auth_headers).status_code == 404

        session.expire_all()
        assert session.get(User, user.id).deleted_at is not None

    def test_other_tenants_user_is_not_deleted(self, client, session, auth_headers, other_tenant, add_users):
        foreign = add_users(other_tenant, PEOPLE[:1])[0]

        response = client.delete(f"/api/users/{foreign.id}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

        session.expire_all()
        assert session.get(User, foreign.id).deleted_at is None

    def test_recreating_deleted_user_restores_it(self, client, auth_headers, tenant, add_users):
        user = add_users(tenant, PEOPLE[:1])[0]
        client.delete(f"/api/users/{user.id}", headers=auth_headers)

        response = client.post(
            "/api/users",
            json={"firstName": "Johnny", "lastName": "Doe", "email": "john.doe@example.com"},
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["id"] == user.id
        assert response.json()["firstName"] == "Johnny"
        assert client.get(f"/api/users/{user.id}", headers=auth_headers).status_code == 200

    def test_restored_user_is_newest(self, client, auth_headers, tenant, add_users):
        user, later = add_users(tenant, PEOPLE[:2])
        client.delete(f"/api/users/{user.id}", headers=auth_headers)

        restored = client.post(
            "/api/users",
            json={"firstName": "John", "lastName": "Doe", "email": "john.doe@example.com"},
            headers=auth_headers,
        ).json()
        assert not restored["createdAt"].startswith("2025-01-01")

        ids = [item["id"] for item in client.get("/api/users", headers=auth_headers).json()["data"]]
        assert ids == [user.id, later.id]
