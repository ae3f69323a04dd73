"""
Interface port pour le stockage des images.

Le store possede exclusivement l'arborescence d'upload :
    {upload_root}/posters/{fichier}
    {upload_root}/backdrops/{fichier}
Toutes les ecritures passent par un renommage atomique.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, Optional

from cinecache.core.entities.image import ImageCategory
from cinecache.core.value_objects.image_format import ImageFormat


class IImageStore(ABC):
    """Interface pour l'arborescence des images stockees."""

    @property
    @abstractmethod
    def upload_root(self) -> Path:
        """Racine geree de l'arborescence d'upload."""
        ...

    @abstractmethod
    def ensure_directory(self, category: ImageCategory) -> Path:
        """
        Cree le repertoire de la categorie si necessaire.

        Raises :
            ImageCacheError : STORAGE_FAILURE si la creation echoue
        """
        ...

    @abstractmethod
    def public_path_for(self, category: ImageCategory, filename: str) -> str:
        """Construit le chemin public d'un fichier de la categorie."""
        ...

    @abstractmethod
    def destination_for(
        self, category: ImageCategory, stem: str, image_format: ImageFormat
    ) -> Path:
        """Chemin absolu de destination pour un nom de base et un format."""
        ...

    @abstractmethod
    def find_cached(self, category: ImageCategory, stem: str) -> Optional[str]:
        """
        Cherche un fichier lisible existant pour ce nom de base.

        Retourne :
            Le chemin public si une image existe deja (quel que soit le format), None sinon
        """
        ...

    @abstractmethod
    def place(self, temp_path: Path, destination: Path, replace: bool = False) -> bool:
        """
        Deplace atomiquement un fichier temporaire vers sa destination.

        Args :
            temp_path : Fichier temporaire valide
            destination : Chemin final dans l'arborescence geree
            replace : Si False, une destination existante est conservee

        Retourne :
            True si le fichier a ete deplace, False si la destination existait deja
            (le fichier temporaire est alors supprime)

        Raises :
            ImageCacheError : STORAGE_FAILURE si le deplacement echoue
        """
        ...

    @abstractmethod
    def resolve_public_path(self, public_path: str) -> Path:
        """
        Convertit un chemin public en chemin absolu sous la racine.

        Raises :
            ImageCacheError : PATH_ESCAPE si le chemin sort de la racine geree
        """
        ...

    @abstractmethod
    def public_path_of(self, path: Path) -> Optional[str]:
        """Chemin public d'un fichier de l'arborescence (None si hors categories)."""
        ...

    @abstractmethod
    def delete(self, path: Path) -> bool:
        """
        Supprime un fichier.

        Retourne :
            True si le fichier est absent apres l'appel
        """
        ...

    @abstractmethod
    def iter_files(self, category: Optional[ImageCategory] = None) -> Iterator[Path]:
        """Liste les fichiers stockes (hors fichiers caches de transit)."""
        ...
