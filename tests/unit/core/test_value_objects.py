"""
Tests unitaires pour les objets valeur et entites du cache d'images.
"""

import pytest

from cinecache.core.entities.image import ImageCategory
from cinecache.core.value_objects import CacheFailure, CacheOutcome, ImageFormat


class TestImageFormat:
    """Tests pour ImageFormat."""

    @pytest.mark.parametrize(
        "image_format,mime,extension",
        [
            (ImageFormat.JPEG, "image/jpeg", "jpg"),
            (ImageFormat.PNG, "image/png", "png"),
            (ImageFormat.WEBP, "image/webp", "webp"),
        ],
    )
    def test_mime_and_extension(self, image_format, mime, extension) -> None:
        assert image_format.mime_type == mime
        assert image_format.extension == extension

    @pytest.mark.parametrize("ext", ["jpg", ".JPG", "Jpg"])
    def test_from_extension_is_case_insensitive(self, ext: str) -> None:
        assert ImageFormat.from_extension(ext) is ImageFormat.JPEG

    def test_from_extension_unknown(self) -> None:
        assert ImageFormat.from_extension("gif") is None


class TestImageCategory:
    """Tests pour ImageCategory."""

    def test_directories(self) -> None:
        assert ImageCategory.POSTER.directory == "posters"
        assert ImageCategory.BACKDROP.directory == "backdrops"

    def test_parse_from_value(self) -> None:
        assert ImageCategory("backdrop") is ImageCategory.BACKDROP


class TestCacheOutcome:
    """Tests pour CacheOutcome."""

    def test_success(self) -> None:
        outcome = CacheOutcome.success("/uploads/posters/a.jpg", from_cache=True)

        assert outcome.ok
        assert outcome.failure is None
        assert outcome.from_cache is True

    def test_failed(self) -> None:
        outcome = CacheOutcome.failed(CacheFailure.SIZE_EXCEEDED, "trop gros")

        assert not outcome.ok
        assert outcome.public_path is None
        assert outcome.failure is CacheFailure.SIZE_EXCEEDED
        assert outcome.reason == "trop gros"

    def test_is_immutable(self) -> None:
        outcome = CacheOutcome.success("/uploads/posters/a.jpg")
        with pytest.raises(AttributeError):
            outcome.public_path = "/autre"  # type: ignore[misc]
