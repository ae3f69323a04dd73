"""
Tests unitaires pour les routes de l'API d'images.

L'application est construite avec le container de test ; le CDN est
simule par respx (le transport de TestClient n'est pas intercepte).
"""

import re
from pathlib import Path

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from cinecache.container import Container
from cinecache.web.app import create_app
from tests.fixtures.image_bytes import GIF_BYTES, JPEG_BYTES, PNG_BYTES, make_jpeg

POSTER_URL = "https://image.tmdb.org/t/p/w500/abc123.jpg"


@pytest.fixture
def client(container: Container):
    with TestClient(create_app(container)) as test_client:
        yield test_client


class TestStartup:
    """Tests du demarrage de l'application."""

    def test_category_directories_are_created(self, client: TestClient, upload_root: Path) -> None:
        assert (upload_root / "posters").is_dir()
        assert (upload_root / "backdrops").is_dir()


class TestCacheRoute:
    """Tests pour POST /api/images/cache."""

    @respx.mock
    def test_cache_then_serve(self, client: TestClient) -> None:
        respx.get(POSTER_URL).mock(return_value=httpx.Response(200, content=JPEG_BYTES))

        resp = client.post("/api/images/cache", json={"url": POSTER_URL})

        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["cached"] is False
        assert re.fullmatch(r"/uploads/posters/[0-9a-f]{64}\.jpg", data["path"])

        served = client.get(data["path"])
        assert served.status_code == 200
        assert served.content == JPEG_BYTES

    @respx.mock
    def test_second_call_reports_cache_hit(self, client: TestClient) -> None:
        route = respx.get(POSTER_URL).mock(return_value=httpx.Response(200, content=JPEG_BYTES))

        client.post("/api/images/cache", json={"url": POSTER_URL})
        resp = client.post("/api/images/cache", json={"url": POSTER_URL})

        assert resp.json()["cached"] is True
        assert route.call_count == 1

    def test_disallowed_host_returns_fallback(self, client: TestClient) -> None:
        url = "https://evil.example.com/a.jpg"

        resp = client.post("/api/images/cache", json={"url": url, "category": "backdrop"})

        assert resp.status_code == 422
        assert resp.json() == {
            "success": False,
            "error": "invalid_source",
            "fallback_url": url,
        }

    @respx.mock
    def test_upstream_error_is_bad_gateway(self, client: TestClient) -> None:
        respx.get(POSTER_URL).mock(return_value=httpx.Response(503))

        resp = client.post("/api/images/cache", json={"url": POSTER_URL})

        assert resp.status_code == 502
        assert resp.json()["error"] == "network_failure"


class TestDeleteRoute:
    """Tests pour DELETE /api/images."""

    def test_delete_existing_and_missing(self, client: TestClient, upload_root: Path) -> None:
        (upload_root / "posters" / "a.jpg").write_bytes(JPEG_BYTES)

        first = client.delete("/api/images", params={"path": "/uploads/posters/a.jpg"})
        second = client.delete("/api/images", params={"path": "/uploads/posters/a.jpg"})

        assert first.json() == {"success": True}
        assert second.status_code == 200
        assert not (upload_root / "posters" / "a.jpg").exists()

    def test_delete_outside_root_is_refused(self, client: TestClient) -> None:
        resp = client.delete("/api/images", params={"path": "/uploads/../../etc/passwd"})

        assert resp.status_code == 400
        assert resp.json() == {"success": False}

    def test_delete_with_null_byte_is_refused(self, client: TestClient) -> None:
        resp = client.delete("/api/images", params={"path": "/uploads/posters/a\x00b.jpg"})

        assert resp.status_code == 400
        assert resp.json() == {"success": False}


class TestUploadRoute:
    """Tests pour POST /api/movies/{target_id}/poster."""

    def test_upload_png(self, client: TestClient, upload_root: Path) -> None:
        resp = client.post(
            "/api/movies/550/poster",
            data={"owner_id": "7"},
            files={"poster": ("affiche.png", PNG_BYTES, "image/png")},
        )

        assert resp.status_code == 200
        poster_url = resp.json()["poster_url"]
        assert re.fullmatch(r"/uploads/posters/u7_m550_\d+_[0-9a-f]{16}\.png", poster_url)

    def test_missing_file(self, client: TestClient) -> None:
        resp = client.post("/api/movies/550/poster", data={"owner_id": "7"})

        assert resp.status_code == 400
        assert resp.json()["error"] == "Aucun fichier envoyé"

    def test_declared_mime_is_not_trusted(self, client: TestClient) -> None:
        resp = client.post(
            "/api/movies/550/poster",
            data={"owner_id": "7"},
            files={"poster": ("affiche.jpg", GIF_BYTES, "image/jpeg")},
        )

        assert resp.status_code == 400
        assert resp.json()["error"].startswith("Type d'image non supporté")

    def test_oversized_file(self, client: TestClient) -> None:
        resp = client.post(
            "/api/movies/550/poster",
            data={"owner_id": "7"},
            files={"poster": ("affiche.jpg", make_jpeg(6 * 1024 * 1024), "image/jpeg")},
        )

        assert resp.status_code == 400
        assert resp.json()["error"].startswith("Fichier trop volumineux")

    def test_invalid_target(self, client: TestClient) -> None:
        resp = client.post(
            "/api/movies/0/poster",
            data={"owner_id": "7"},
            files={"poster": ("affiche.png", PNG_BYTES, "image/png")},
        )

        assert resp.status_code == 400
