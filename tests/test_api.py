from unittest.mock import patch

from fastapi.testclient import TestClient


def create_category(client: TestClient, name="Reading", color="#40E0D0") -> dict:
    response = client.post("/api/v1/categories/", json={"name": name, "color": color})
    assert response.status_code == 201
    return response.json()


class TestCategoriesAPI:

    def test_create_and_list(self, client: TestClient):
        created = create_category(client)
        assert created["id"]
        assert created["name"] == "Reading"
        assert created["color"] == "#40E0D0"
        assert "created_at" in created

        response = client.get("/api/v1/categories/")
        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == [created["id"]]

    def test_create_missing_name(self, client: TestClient):
        response = client.post("/api/v1/categories/", json={"name": "", "color": "#40E0D0"})
        assert response.status_code == 422
        assert response.json()["detail"] == "Name and color are required"

    def test_update(self, client: TestClient):
        created = create_category(client)

        response = client.put(f"/api/v1/categories/{created['id']}", json={"name": "Books", "color": "#8B5CF6"})
        assert response.status_code == 200
        assert response.json()["name"] == "Books"

    def test_update_missing(self, client: TestClient):
        response = client.put("/api/v1/categories/missing", json={"name": "Books", "color": "#8B5CF6"})
        assert response.status_code == 404

    def test_delete_moves_links_to_uncategorized(self, client: TestClient):
        created = create_category(client)
        link = client.post("/api/v1/links/", json={"url": "https://example.com/", "category_id": created["id"]}).json()

        response = client.delete(f"/api/v1/categories/{created['id']}")
        assert response.status_code == 204

        fetched = client.get(f"/api/v1/links/{link['id']}").json()
        assert fetched["category_id"] is None
        assert fetched["category"] is None


class TestLinksAPI:

    def test_add_link(self, client: TestClient):
        category = create_category(client)

        response = client.post("/api/v1/links/", json={
            "url": "https://www.example.com/a",
            "category_id": category["id"],
        })
        assert response.status_code == 201

        data = response.json()
        assert data["source"] == "example.com"
        assert data["title"] == "https://www.example.com/a"
        assert data["category"]["name"] == "Reading"

    def test_add_link_empty_url(self, client: TestClient):
        response = client.post("/api/v1/links/", json={"url": ""})
        assert response.status_code == 422
        assert response.json()["detail"] == "URL is required"

        assert client.get("/api/v1/links/").json() == []

    def test_add_link_with_unknown_category_is_backend_error(self, client: TestClient):
        response = client.post("/api/v1/links/", json={"url": "https://example.com/", "category_id": "nope"})
        assert response.status_code == 502

    def test_list_filters(self, client: TestClient):
        category = create_category(client)
        client.post("/api/v1/links/", json={"url": "https://a.example.com/", "title": "Alpha", "category_id": category["id"]})
        client.post("/api/v1/links/", json={"url": "https://b.example.com/", "title": "Beta", "notes": "alpha notes"})

        everything = client.get("/api/v1/links/", params={"category_id": "all"}).json()
        assert [link["title"] for link in everything] == ["Beta", "Alpha"]

        in_category = client.get("/api/v1/links/", params={"category_id": category["id"]}).json()
        assert [link["title"] for link in in_category] == ["Alpha"]

        searched = client.get("/api/v1/links/", params={"q": "ALPHA"}).json()
        assert {link["title"] for link in searched} == {"Alpha", "Beta"}

    def test_get_missing(self, client: TestClient):
        response = client.get("/api/v1/links/nonexistent")
        assert response.status_code == 404

    def test_update_link(self, client: TestClient):
        link = client.post("/api/v1/links/", json={"url": "https://example.com/", "title": "Example"}).json()

        response = client.patch(f"/api/v1/links/{link['id']}", json={"notes": "updated"})
        assert response.status_code == 200
        assert response.json()["notes"] == "updated"
        assert response.json()["title"] == "Example"

    def test_delete_link(self, client: TestClient):
        link = client.post("/api/v1/links/", json={"url": "https://example.com/"}).json()

        response = client.delete(f"/api/v1/links/{link['id']}")
        assert response.status_code == 200
        assert response.json() == {"success": True}

        assert client.get(f"/api/v1/links/{link['id']}").status_code == 404
        assert client.delete(f"/api/v1/links/{link['id']}").status_code == 404


class TestMetadataAPI:

    def test_metadata(self, client: TestClient):
        page = type("Resp", (), {
            "text": "<html><head><title>Example Domain</title></head></html>",
            "headers": {"content-type": "text/html"},
            "raise_for_status": lambda self: None,
        })()

        with patch("junkdraw_app.services.metadata_service.requests.get", return_value=page):
            response = client.get("/api/v1/metadata/", params={"url": "https://www.example.com/"})

        assert response.status_code == 200
        assert response.json() == {"title": "Example Domain", "source": "example.com"}


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
