"""
Construction des URL d'images du CDN TMDB.

Le client de metadonnees fournit des chemins relatifs (ex: /abc123.jpg).
Chaque variante de taille produit une URL distincte, donc une entree de
cache distincte.
"""

from typing import Optional

from cinecache.core.entities.image import ImageCategory
from cinecache.utils.constants import (
    TMDB_BACKDROP_SIZES,
    TMDB_IMAGE_BASE_URL,
    TMDB_POSTER_SIZES,
)

# Taille par defaut par categorie (affiche w500, fond d'ecran original)
DEFAULT_SIZES: dict[ImageCategory, str] = {
    ImageCategory.POSTER: "w500",
    ImageCategory.BACKDROP: "original",
}

_KNOWN_SIZES: dict[ImageCategory, frozenset[str]] = {
    ImageCategory.POSTER: TMDB_POSTER_SIZES,
    ImageCategory.BACKDROP: TMDB_BACKDROP_SIZES,
}


def build_image_url(
    path: Optional[str],
    size: Optional[str] = None,
    category: ImageCategory = ImageCategory.POSTER,
    base_url: str = TMDB_IMAGE_BASE_URL,
) -> Optional[str]:
    """
    Construit l'URL complete d'une image TMDB.

    Args :
        path : Chemin relatif fourni par l'API (poster_path, backdrop_path)
        size : Variante de taille (defaut selon la categorie)
        category : Categorie de l'image
        base_url : URL de base du CDN

    Retourne :
        L'URL complete, ou None si le chemin est vide

    Raises :
        ValueError : Si la taille n'existe pas pour la categorie
    """
    if not path:
        return None

    size = size or DEFAULT_SIZES[category]
    if size not in _KNOWN_SIZES[category]:
        allowed = ", ".join(sorted(_KNOWN_SIZES[category]))
        raise ValueError(f"Taille '{size}' inconnue pour {category.value} (valeurs: {allowed})")

    return f"{base_url.rstrip('/')}/{size}/{path.lstrip('/')}"
