"""
Objet valeur pour les formats d'image supportes.

Le format est toujours determine par les premiers octets du fichier,
jamais par le Content-Type annonce ou l'extension de l'URL.
"""

from enum import Enum


class ImageFormat(str, Enum):
    """Formats d'image acceptes, indexes par type MIME."""

    JPEG = "image/jpeg"
    PNG = "image/png"
    WEBP = "image/webp"

    @property
    def mime_type(self) -> str:
        """Type MIME canonique du format."""
        return self.value

    @property
    def extension(self) -> str:
        """Extension de fichier utilisee pour le stockage (sans point)."""
        return _EXTENSIONS[self]

    @classmethod
    def from_extension(cls, extension: str) -> "ImageFormat | None":
        """Retrouve le format a partir d'une extension (jpg, png, webp)."""
        ext = extension.lower().lstrip(".")
        for image_format, candidate in _EXTENSIONS.items():
            if candidate == ext:
                return image_format
        return None


_EXTENSIONS: dict[ImageFormat, str] = {
    ImageFormat.JPEG: "jpg",
    ImageFormat.PNG: "png",
    ImageFormat.WEBP: "webp",
}
