"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- ImageFormat : Format d'image supporte (JPEG, PNG, WEBP)
- CacheFailure : Taxonomie des echecs du cache
- CacheOutcome : Resultat explicite d'une operation de cache
"""

from cinecache.core.value_objects.image_format import ImageFormat
from cinecache.core.value_objects.outcome import CacheFailure, CacheOutcome

__all__ = [
    "ImageFormat",
    "CacheFailure",
    "CacheOutcome",
]
