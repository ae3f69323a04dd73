"""
Utilitaires et constantes pour CineCache.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from cinecache.utils.constants import (
    CHUNK_SIZE,
    MAX_IMAGE_BYTES,
    PUBLIC_PREFIX,
)
from cinecache.utils.helpers import bytes_human, mask_secret

__all__ = [
    "CHUNK_SIZE",
    "MAX_IMAGE_BYTES",
    "PUBLIC_PREFIX",
    "bytes_human",
    "mask_secret",
]
