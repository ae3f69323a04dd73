"""
Clients HTTP externes.

Ce module fournit :
- HttpImageFetcher : telechargement borne des images (liste blanche, plafond, timeouts)
- build_image_url : construction des URL du CDN TMDB par variante de taille
"""

from cinecache.adapters.api.image_fetcher import HttpImageFetcher
from cinecache.adapters.api.tmdb_images import build_image_url

__all__ = [
    "HttpImageFetcher",
    "build_image_url",
]
