"""
Tests unitaires pour le container DI.
"""

from pathlib import Path

from cinecache.adapters.api.image_fetcher import HttpImageFetcher
from cinecache.adapters.file_system import FileSystemImageStore
from cinecache.container import Container
from cinecache.services.image_cache import ImageCacheService


def test_services_are_wired_from_settings(container: Container, upload_root: Path) -> None:
    service = container.image_cache_service()

    assert isinstance(service, ImageCacheService)
    assert service is container.image_cache_service()
    assert isinstance(container.image_fetcher(), HttpImageFetcher)
    store = container.image_store()
    assert isinstance(store, FileSystemImageStore)
    assert store.upload_root == upload_root
    assert store.public_prefix == "/uploads"


def test_fetcher_uses_configured_allowlist(container: Container) -> None:
    fetcher = container.image_fetcher()

    assert fetcher.validate_source("https://allowlisted.test/a.jpg") == "allowlisted.test"
