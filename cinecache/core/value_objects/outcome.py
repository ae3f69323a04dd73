"""
Resultat explicite des operations du cache d'images.

Aucune exception ne traverse la frontiere du service pour les echecs
prevus : chaque echec est converti en CacheOutcome portant une raison
de la taxonomie CacheFailure.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CacheFailure(str, Enum):
    """Taxonomie des echecs du cache d'images."""

    INVALID_SOURCE = "invalid_source"
    NETWORK_FAILURE = "network_failure"
    SIZE_EXCEEDED = "size_exceeded"
    UNSUPPORTED_CONTENT = "unsupported_content"
    STORAGE_FAILURE = "storage_failure"
    PATH_ESCAPE = "path_escape"


@dataclass(frozen=True)
class CacheOutcome:
    """
    Resultat d'une mise en cache ou d'un upload.

    Attributs :
        public_path : Chemin public de l'image (None en cas d'echec)
        failure : Raison de l'echec (None en cas de succes)
        reason : Message de diagnostic lisible
        from_cache : True si l'image etait deja presente (aucun telechargement)
    """

    public_path: Optional[str] = None
    failure: Optional[CacheFailure] = None
    reason: str = ""
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        """Vrai si l'operation a produit un chemin public."""
        return self.public_path is not None

    @classmethod
    def success(cls, public_path: str, from_cache: bool = False) -> "CacheOutcome":
        return cls(public_path=public_path, from_cache=from_cache)

    @classmethod
    def failed(cls, failure: CacheFailure, reason: str = "") -> "CacheOutcome":
        return cls(failure=failure, reason=reason)
