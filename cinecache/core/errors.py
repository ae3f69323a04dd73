"""
Exception interne du cache d'images.

Levee par les adaptateurs (fetcher, store) et le validateur de contenu,
puis convertie en CacheOutcome par le service. Ne doit jamais sortir
du composant.
"""

from cinecache.core.value_objects.outcome import CacheFailure


class ImageCacheError(Exception):
    """
    Echec d'une etape du cache d'images.

    Attributes:
        failure: Categorie d'echec (CacheFailure)
        message: Description lisible de l'echec
    """

    def __init__(self, failure: CacheFailure, message: str) -> None:
        self.failure = failure
        self.message = message
        super().__init__(f"{failure.value}: {message}")
