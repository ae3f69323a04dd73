"""
Entites du domaine pour les images mises en cache.

Une image stockee est identifiee pour les appelants uniquement par son
chemin public (ex: /uploads/posters/<cle>.jpg). Les chemins absolus
internes ne sortent jamais du composant.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from cinecache.core.value_objects.image_format import ImageFormat


class ImageCategory(str, Enum):
    """Categorie d'image : determine le sous-repertoire de stockage."""

    POSTER = "poster"
    BACKDROP = "backdrop"

    @property
    def directory(self) -> str:
        """Nom du sous-repertoire sous la racine d'upload (posters, backdrops)."""
        return f"{self.value}s"


@dataclass(frozen=True)
class StoredImage:
    """
    Fichier image present dans l'arborescence geree.

    Attributs :
        category : Categorie (affiche ou fond d'ecran)
        image_format : Format detecte par signature binaire
        path : Chemin absolu du fichier sur disque
        public_path : Chemin public retourne aux appelants
        size : Taille en octets
    """

    category: ImageCategory
    image_format: ImageFormat
    path: Path
    public_path: str
    size: int
