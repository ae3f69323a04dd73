"""
Interface port pour le telechargement d'images distantes.

L'adaptateur concret valide l'URL (schema, liste blanche d'hotes),
telecharge le contenu en flux vers un fichier temporaire et borne
la taille et la duree du transfert.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class DownloadedImage:
    """
    Fichier temporaire produit par un telechargement reussi.

    Attributs :
        temp_path : Fichier temporaire contenant le corps de la reponse
        size : Nombre d'octets recus
        declared_type : Content-Type annonce par le serveur (indicatif uniquement)
        final_url : URL effectivement servie apres redirections
    """

    temp_path: Path
    size: int
    declared_type: Optional[str] = None
    final_url: str = ""


class IImageFetcher(ABC):
    """
    Interface pour la recuperation d'images distantes.

    Toute erreur est signalee par ImageCacheError (INVALID_SOURCE,
    NETWORK_FAILURE, SIZE_EXCEEDED, STORAGE_FAILURE). En cas d'erreur,
    aucun fichier temporaire ne subsiste.
    """

    @abstractmethod
    def validate_source(self, url: str) -> str:
        """
        Verifie le schema et l'hote d'une URL sans acces reseau.

        Retourne :
            L'hote normalise (minuscules)
        """
        ...

    @abstractmethod
    async def download(self, url: str) -> DownloadedImage:
        """
        Telecharge l'URL vers un fichier temporaire.

        L'appelant est responsable du fichier temporaire retourne.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Libere les ressources reseau."""
        ...
