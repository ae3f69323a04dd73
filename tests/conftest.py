"""
Fixtures pytest partagees pour les tests CineCache.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec chemins temporaires
- Store, fetcher et service reels branches sur tmp_path
- Capture des enregistrements loguru
"""

from pathlib import Path

import pytest
from dependency_injector import providers
from loguru import logger

from cinecache.adapters.api.image_fetcher import HttpImageFetcher
from cinecache.adapters.file_system import FileSystemImageStore
from cinecache.config import Settings
from cinecache.container import Container
from cinecache.services.image_cache import ImageCacheService

TEST_HOSTS = ["image.tmdb.org", "allowlisted.test"]


@pytest.fixture
def upload_root(tmp_path: Path) -> Path:
    """Racine d'upload temporaire (non creee)."""
    return tmp_path / "public" / "uploads"


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Repertoire des fichiers temporaires de telechargement."""
    path = tmp_path / "tmp"
    path.mkdir()
    return path


@pytest.fixture
def settings(upload_root: Path, temp_dir: Path, tmp_path: Path) -> Settings:
    """Settings de test, independants de l'environnement et du .env."""
    return Settings(
        _env_file=None,
        upload_root=upload_root,
        temp_dir=temp_dir,
        allowed_hosts=TEST_HOSTS,
        log_file=tmp_path / "logs" / "test.log",
    )


@pytest.fixture
def store(upload_root: Path) -> FileSystemImageStore:
    return FileSystemImageStore(upload_root=upload_root, public_prefix="/uploads")


@pytest.fixture
def fetcher(temp_dir: Path) -> HttpImageFetcher:
    """Fetcher reel (httpx) ; les requetes sont interceptees par respx."""
    return HttpImageFetcher(allowed_hosts=TEST_HOSTS, temp_dir=temp_dir)


@pytest.fixture
def service(fetcher: HttpImageFetcher, store: FileSystemImageStore, temp_dir: Path) -> ImageCacheService:
    return ImageCacheService(fetcher=fetcher, store=store, temp_dir=temp_dir)


@pytest.fixture
def container(settings: Settings) -> Container:
    """Container DI avec configuration de test."""
    container = Container()
    container.config.override(providers.Object(settings))
    return container


@pytest.fixture
def log_records() -> list[dict]:
    """Collecte les enregistrements loguru emis pendant le test."""
    records: list[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
