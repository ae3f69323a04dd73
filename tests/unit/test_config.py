"""
Tests unitaires pour Settings (pydantic-settings).
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cinecache.config import Settings


class TestSettings:
    """Tests pour la configuration de l'application."""

    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.allowed_hosts == ["image.tmdb.org"]
        assert settings.allowed_schemes == ["https"]
        assert settings.max_image_bytes == 5_242_880
        assert settings.connect_timeout == 5.0
        assert settings.request_timeout == 10.0
        assert settings.public_prefix == "/uploads"
        assert settings.temp_dir is None
        assert settings.tmdb_enabled is False

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("CINECACHE_UPLOAD_ROOT", str(tmp_path / "uploads"))
        monkeypatch.setenv("CINECACHE_MAX_IMAGE_BYTES", "1024")
        monkeypatch.setenv("CINECACHE_ALLOWED_HOSTS", '["Image.TMDB.org", "cdn.test"]')

        settings = Settings(_env_file=None)

        assert settings.upload_root == tmp_path / "uploads"
        assert settings.max_image_bytes == 1024
        assert settings.allowed_hosts == ["image.tmdb.org", "cdn.test"]

    def test_home_is_expanded(self) -> None:
        settings = Settings(_env_file=None, upload_root="~/uploads")
        assert settings.upload_root == Path.home() / "uploads"

    @pytest.mark.parametrize("prefix", ["uploads", "/uploads/", "uploads/"])
    def test_public_prefix_is_normalized(self, prefix: str) -> None:
        assert Settings(_env_file=None, public_prefix=prefix).public_prefix == "/uploads"

    def test_tmdb_enabled_with_key(self) -> None:
        assert Settings(_env_file=None, tmdb_api_key="abcd1234").tmdb_enabled is True

    def test_invalid_cap_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_image_bytes=0)
