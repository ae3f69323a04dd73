"""
Detection du format reel d'une image par ses octets de tete.

Le Content-Type HTTP et le type MIME declare par le navigateur sont
consideres comme indicatifs : seule la signature binaire decide du
format et donc de l'extension de stockage.

Signatures reconnues :
    - JPEG : FF D8 FF
    - PNG  : 89 50 4E 47 0D 0A 1A 0A
    - WebP : RIFF....WEBP
"""

from pathlib import Path
from typing import Optional

from cinecache.core.errors import ImageCacheError
from cinecache.core.value_objects import CacheFailure, ImageFormat
from cinecache.utils.constants import (
    JPEG_SIGNATURE,
    PNG_SIGNATURE,
    RIFF_SIGNATURE,
    SIGNATURE_LENGTH,
    WEBP_SIGNATURE,
)


def sniff_image_format(header: bytes) -> Optional[ImageFormat]:
    """
    Identifie le format a partir des premiers octets.

    Args :
        header : Au moins les 12 premiers octets du fichier

    Retourne :
        ImageFormat detecte, ou None si la signature n'est pas supportee
    """
    if header.startswith(JPEG_SIGNATURE):
        return ImageFormat.JPEG
    if header.startswith(PNG_SIGNATURE):
        return ImageFormat.PNG
    if header.startswith(RIFF_SIGNATURE) and header[8:12] == WEBP_SIGNATURE:
        return ImageFormat.WEBP
    return None


def sniff_file(path: Path) -> Optional[ImageFormat]:
    """Lit la signature d'un fichier sur disque et identifie son format."""
    with open(path, "rb") as f:
        header = f.read(SIGNATURE_LENGTH)
    return sniff_image_format(header)


def normalize_declared_type(content_type: Optional[str]) -> Optional[str]:
    """Extrait le type MIME d'un en-tete Content-Type (sans parametres)."""
    if not content_type:
        return None
    mime = content_type.split(";", 1)[0].strip().lower()
    return mime or None


def require_supported_image(path: Path) -> ImageFormat:
    """
    Valide qu'un fichier est une image supportee.

    Raises :
        ImageCacheError : UNSUPPORTED_CONTENT si la signature est inconnue,
                          STORAGE_FAILURE si le fichier est illisible
    """
    try:
        image_format = sniff_file(path)
    except OSError as e:
        raise ImageCacheError(
            CacheFailure.STORAGE_FAILURE, f"Lecture impossible de {path.name}: {e}"
        ) from e
    if image_format is None:
        raise ImageCacheError(
            CacheFailure.UNSUPPORTED_CONTENT,
            "Signature binaire non reconnue (formats acceptes: JPEG, PNG, WEBP)",
        )
    return image_format
