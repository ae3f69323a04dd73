"""
Entites du domaine.

Exports :
- ImageCategory : Categorie d'image (POSTER, BACKDROP)
- StoredImage : Image stockee dans l'arborescence geree
"""

from cinecache.core.entities.image import ImageCategory, StoredImage

__all__ = [
    "ImageCategory",
    "StoredImage",
]
