"""HTTP tests for URL Shortener Service."""

from datetime import datetime, timedelta, timezone

import pytest

from shortlinks.core.config import settings
from shortlinks.core.errors import StoreFailureError


def shorten(client, url, expires_at=None):
    payload = {"url": url}
    if expires_at is not None:
        payload["expires_at"] = expires_at.isoformat()
    return client.post("/api/shorten", json=payload)


class TestHealthEndpoint:
    """Tests for the root health check."""

    def test_health_check(self, client):
        """Test health check returns ok status."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == settings.app_title
        assert data["message"] == f"API endpoints available under {settings.public_base_url}/api"


class TestShortenEndpoint:
    """Tests for POST /api/shorten."""

    def test_shorten_success(self, client):
        """Test creating a short URL successfully."""
        response = shorten(client, "https://example.com/a/b")
        assert response.status_code == 200
        data = response.json()
        code = data["short_code"]
        assert len(code) == settings.short_code_length
        assert code.isalnum()
        assert data["short_url"] == f"{settings.public_base_url}/{code}"

    def test_shorten_trims_whitespace(self, client, test_db):
        """Test the stored URL is the trimmed input."""
        response = shorten(client, "   https://example.com/trim   ")
        assert response.status_code == 200
        row = test_db.get_url_by_code(response.json()["short_code"])
        assert row["original_url"] == "https://example.com/trim"

    def test_shorten_same_url_twice(self, client, test_db):
        """Test submitting the same URL returns the same code and keeps one row."""
        first = shorten(client, "https://example.com/dup").json()
        second = shorten(client, " https://example.com/dup ").json()
        assert first["short_code"] == second["short_code"]
        assert len(test_db.get_all_urls()) == 1

    def test_shorten_ignores_new_expiry_for_known_url(self, client, test_db):
        """Test a repeated URL keeps the original record's expiration."""
        code = shorten(client, "https://example.com/keep").json()["short_code"]
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        assert shorten(client, "https://example.com/keep", past).json()["short_code"] == code
        assert test_db.get_url_by_code(code)["expires_at"] is None

    @pytest.mark.parametrize(
        "url",
        [
            "not a url",
            "not-a-url",
            "ftp://example.com/file",
            "https://",
            "",
            "   ",
        ],
    )
    def test_shorten_invalid_url(self, client, url):
        """Test malformed URLs are rejected with 400."""
        response = shorten(client, url)
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid URL"

    def test_shorten_missing_url(self, client):
        """Test a body without url is rejected with 400."""
        response = client.post("/api/shorten", json={})
        assert response.status_code == 400

    def test_shorten_own_host_rejected(self, client):
        """Test URLs pointing at this service cannot be shortened."""
        response = shorten(client, f"{settings.public_base_url}/abcdefg")
        assert response.status_code == 400

    def test_shorten_bad_expiry(self, client):
        """Test an unparsable expiration timestamp fails validation."""
        response = client.post(
            "/api/shorten",
            json={"url": "https://example.com", "expires_at": "next tuesday"},
        )
        assert response.status_code == 422

    def test_shorten_store_failure(self, failing_client, mock_db):
        """Test store errors answer 500 without leaking the cause."""
        mock_db.get_url_by_original.side_effect = StoreFailureError("disk I/O error")
        response = shorten(failing_client, "https://example.com")
        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to shorten"}


class TestRedirectEndpoint:
    """Tests for GET /{short_code}."""

    def test_redirect_success(self, client):
        """Test successful redirect to the exact submitted URL."""
        code = shorten(client, "https://example.com/a/b").json()["short_code"]

        response = client.get(f"/{code}", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/a/b"

        stats = client.get(f"/api/stats/{code}").json()
        assert stats["click_count"] == 1

    def test_redirect_not_found(self, client):
        """Test unknown codes render the HTML not found page."""
        response = client.get("/nonexistent", follow_redirects=False)
        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")
        assert "Not Found" in response.text

    def test_redirect_invalid_code(self, client):
        """Test malformed codes are treated as not found."""
        response = client.get("/ab", follow_redirects=False)
        assert response.status_code == 404

    def test_redirect_expired(self, client):
        """Test expired links answer 410 and are not counted."""
        expires_at = datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        code = shorten(client, "https://example.com/old", expires_at).json()["short_code"]

        response = client.get(f"/{code}", follow_redirects=False)
        assert response.status_code == 410
        assert response.headers["content-type"].startswith("text/html")
        assert "Link Expired" in response.text
        assert "2020-01-02 03:04:05 UTC" in response.text

        stats = client.get(f"/api/stats/{code}").json()
        assert stats["click_count"] == 0

    def test_redirect_future_expiry(self, client):
        """Test links that expire later still redirect."""
        expires_at = datetime.now(timezone.utc) + timedelta(hours=1)
        code = shorten(client, "https://example.com/soon", expires_at).json()["short_code"]

        response = client.get(f"/{code}", follow_redirects=False)
        assert response.status_code == 302

    def test_redirect_click_count_increments(self, client):
        """Test that each redirect increments the click count once."""
        code = shorten(client, "https://example.com/clicks").json()["short_code"]

        for _ in range(3):
            client.get(f"/{code}", follow_redirects=False)
        client.get("/unknowncode", follow_redirects=False)

        stats = client.get(f"/api/stats/{code}").json()
        assert stats["click_count"] == 3


class TestStatsEndpoint:
    """Tests for GET /api/stats/{short_code}."""

    def test_stats_success(self, client):
        """Test stats report every field of the record."""
        expires_at = datetime.now(timezone.utc) + timedelta(days=1)
        code = shorten(client, "https://example.com/stats", expires_at).json()["short_code"]

        response = client.get(f"/api/stats/{code}")
        assert response.status_code == 200
        data = response.json()
        assert data["short_code"] == code
        assert data["original_url"] == "https://example.com/stats"
        assert data["click_count"] == 0
        assert data["created_at"]
        parsed = datetime.fromisoformat(data["expires_at"].replace("Z", "+00:00"))
        assert abs(parsed - expires_at) < timedelta(seconds=1)

    def test_stats_no_expiry(self, client):
        """Test links without expiration report null."""
        code = shorten(client, "https://example.com/forever").json()["short_code"]
        assert client.get(f"/api/stats/{code}").json()["expires_at"] is None

    def test_stats_not_found(self, client):
        """Test stats for an unknown code."""
        response = client.get("/api/stats/nonexistent")
        assert response.status_code == 404
        assert response.json() == {"detail": "Not found"}


class TestQRCodeEndpoint:
    """Tests for GET /api/qr/{short_code}."""

    def test_qr_code_png(self, client):
        """Test a PNG image is returned."""
        code = shorten(client, "https://example.com/qr").json()["short_code"]
        response = client.get(f"/api/qr/{code}")
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content.startswith(b"\x89PNG\r\n\x1a\n")

    def test_qr_code_encodes_short_url(self, client, monkeypatch):
        """Test the QR image encodes the full public short URL."""
        rendered = []

        def fake_render(data):
            rendered.append(data)
            return b"\x89PNG\r\n\x1a\n"

        monkeypatch.setattr("shortlinks.api.routes.urls.render_qr_png", fake_render)
        response = client.get("/api/qr/abc1234")
        assert response.status_code == 200
        assert rendered == [f"{settings.public_base_url}/abc1234"]

    def test_qr_code_invalid_code(self, client):
        """Test malformed codes are rejected."""
        response = client.get("/api/qr/a")
        assert response.status_code == 404


class TestDebugListEndpoint:
    """Tests for GET /api/debug/urls."""

    def test_list_urls(self, client):
        """Test every stored link is listed, expired ones included."""
        past = datetime.now(timezone.utc) - timedelta(days=1)
        codes = {
            shorten(client, "https://example1.com").json()["short_code"],
            shorten(client, "https://example2.com").json()["short_code"],
            shorten(client, "https://example3.com", past).json()["short_code"],
        }

        response = client.get("/api/debug/urls")
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 3
        assert {item["short_code"] for item in data} == codes
        assert set(data[0]) == {"short_code", "original_url"}

    def test_list_urls_empty(self, client):
        """Test an empty store lists nothing."""
        assert client.get("/api/debug/urls").json() == []

    def test_list_urls_store_failure(self, failing_client, mock_db):
        """Test store errors answer a generic 500."""
        mock_db.get_all_urls.side_effect = StoreFailureError("no such table: urls")
        response = failing_client.get("/api/debug/urls")
        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
