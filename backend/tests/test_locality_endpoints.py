"""
Tests for /api/localities endpoints.
"""

import pytest


class TestLocalityCreate:

    def test_create_locality(self, client):
        response = client.post("/api/localities", json={"name": "CDMX"})

        assert response.status_code == 201
        data = response.json()
        assert data["id"] is not None
        assert data["name"] == "CDMX"
        assert data["is_active"] is True
        assert data["areas"] == []

    def test_create_with_initial_areas(self, client):
        response = client.post(
            "/api/localities",
            json={"name": "CDMX", "areas": [{"name": "Almacen"}, {"name": "Produccion"}]},
        )

        assert response.status_code == 201
        assert [a["name"] for a in response.json()["areas"]] == ["Almacen", "Produccion"]

    def test_duplicate_initial_areas_conflict(self, client):
        response = client.post(
            "/api/localities",
            json={"name": "CDMX", "areas": [{"name": "Almacen"}, {"name": "almacen"}]},
        )

        assert response.status_code == 409
        assert response.json()["error"] == "duplicate_in_scope"

    def test_duplicate_name_conflict(self, client, seed_locality):
        response = client.post("/api/localities", json={"name": "cdmx"})

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "duplicate"
        assert "detail" in body

    def test_name_too_short_is_rejected(self, client):
        response = client.post("/api/localities", json={"name": "A"})
        assert response.status_code == 422

    def test_name_is_trimmed(self, client):
        response = client.post("/api/localities", json={"name": "  Monterrey  "})
        assert response.json()["name"] == "Monterrey"

    def test_non_json_body_is_rejected(self, client):
        response = client.post(
            "/api/localities",
            content="name=CDMX",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        assert response.status_code == 415


class TestLocalityRead:

    def test_get_locality_with_areas(self, client, seed_area):
        response = client.get(f"/api/localities/{seed_area.locality_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "CDMX"
        assert data["areas"][0]["name"] == "Almacen"

    def test_get_unknown_locality(self, client):
        response = client.get("/api/localities/999")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_list_and_active(self, client, locality_service, seed_locality, seed_other_locality):
        locality_service.deactivate(seed_other_locality.id)

        all_names = [loc["name"] for loc in client.get("/api/localities").json()]
        active_names = [loc["name"] for loc in client.get("/api/localities/active").json()]

        assert all_names == ["CDMX", "Guadalajara"]
        assert active_names == ["CDMX"]

    def test_paginated(self, client, seed_locality, seed_other_locality):
        response = client.get("/api/localities/paginated", params={"limit": 1, "offset": 1})

        assert response.status_code == 200
        data = response.json()
        assert [loc["name"] for loc in data["items"]] == ["Guadalajara"]
        assert data["pagination"]["total"] == 2
        assert data["pagination"]["page"] == 2
        assert data["pagination"]["has_next"] is False
        assert data["pagination"]["has_prev"] is True

    def test_paginated_unknown_order_field(self, client, seed_locality):
        response = client.get("/api/localities/paginated", params={"order_by": "secret"})
        assert response.status_code == 400

    def test_search(self, client, seed_locality, seed_other_locality):
        response = client.get("/api/localities/search", params={"name": "guada"})
        assert [loc["name"] for loc in response.json()] == ["Guadalajara"]

    def test_exists(self, client, seed_locality):
        assert client.get("/api/localities/exists", params={"name": "CDMX"}).json() == {"exists": True}
        assert client.get("/api/localities/exists", params={"name": "Tijuana"}).json() == {
            "exists": False
        }


class TestLocalityUpdate:

    def test_update_name(self, client, seed_locality):
        response = client.put(f"/api/localities/{seed_locality.id}", json={"name": "Ciudad de México"})

        assert response.status_code == 200
        assert response.json()["name"] == "Ciudad de México"

    def test_update_without_name_is_rejected(self, client, seed_locality):
        response = client.put(f"/api/localities/{seed_locality.id}", json={"is_active": False})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_failed"

    def test_update_onto_existing_name(self, client, seed_locality, seed_other_locality):
        response = client.put(
            f"/api/localities/{seed_other_locality.id}", json={"name": "CDMX"}
        )
        assert response.status_code == 409

    def test_update_unknown(self, client):
        response = client.put("/api/localities/999", json={"name": "CDMX"})
        assert response.status_code == 404


class TestLocalityLifecycle:

    def test_deactivate_and_activate(self, client, seed_locality):
        response = client.patch(f"/api/localities/{seed_locality.id}/deactivate")
        assert response.status_code == 200
        assert response.json()["is_active"] is False

        response = client.patch(f"/api/localities/{seed_locality.id}/activate")
        assert response.status_code == 200
        assert response.json()["is_active"] is True

    def test_activate_unknown(self, client):
        assert client.patch("/api/localities/999/activate").status_code == 404

    def test_soft_delete(self, client, seed_locality):
        response = client.delete(f"/api/localities/{seed_locality.id}")

        assert response.status_code == 204
        assert client.get(f"/api/localities/{seed_locality.id}").json()["is_active"] is False

    def test_purge_removes_areas(self, client, seed_area):
        locality_id = seed_area.locality_id

        response = client.delete(f"/api/localities/{locality_id}/purge")

        assert response.status_code == 200
        assert response.json() == {"locality_id": locality_id, "removed_areas": 1}
        assert client.get(f"/api/localities/{locality_id}").status_code == 404
        assert client.get(f"/api/areas/{seed_area.id}").status_code == 404

    @pytest.mark.parametrize("locality_id", [999, 0])
    def test_purge_unknown(self, client, locality_id):
        assert client.delete(f"/api/localities/{locality_id}/purge").status_code == 404


class TestResponseHeaders:

    def test_request_id_is_echoed(self, client):
        response = client.get("/api/localities", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_security_headers(self, client):
        response = client.get("/api/localities")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
