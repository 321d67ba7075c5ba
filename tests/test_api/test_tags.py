"""Tests for tag and service-level API endpoints."""


class TestListTags:
    """Tests for GET /api/tags endpoint."""

    def test_list_tags(self, client):
        """Test tags are listed by name."""
        response = client.get("/api/tags")
        assert response.status_code == 200
        assert response.json() == [
            {"id": 1, "name": "concurrency"},
            {"id": 2, "name": "memory"},
        ]

    def test_tags_cache_header(self, client):
        """Test the tag list is cacheable."""
        response = client.get("/api/tags")
        assert response.headers["Cache-Control"] == "public, max-age=300"

    def test_tags_store_failure(self, broken_client):
        """Test store failures surface as a 500 error payload."""
        response = broken_client.get("/api/tags")
        assert response.status_code == 500
        assert response.json() == {"error": "Database query failed"}


class TestServiceEndpoints:
    """Tests for root and health endpoints."""

    def test_root(self, client):
        """Test the root endpoint lists the API entry points."""
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["endpoints"]["questions"] == "/api/questions"

    def test_health(self, client):
        """Test health reports the question count."""
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["total_questions"] == 2

    def test_health_store_failure(self, broken_client):
        """Test health reports an unreachable store."""
        data = broken_client.get("/health").json()
        assert data["status"] == "unhealthy"
        assert data["database"] == "disconnected"

    def test_unknown_route_error_payload(self, client):
        """Test HTTP errors use the error payload."""
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}
