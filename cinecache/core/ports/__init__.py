"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Port réseau :
- IImageFetcher : Téléchargement borné d'images distantes
- DownloadedImage : Fichier temporaire produit par un téléchargement

Port stockage :
- IImageStore : Arborescence des images stockées (placement atomique, suppression)
"""

from cinecache.core.ports.image_fetcher import DownloadedImage, IImageFetcher
from cinecache.core.ports.image_store import IImageStore

__all__ = [
    "DownloadedImage",
    "IImageFetcher",
    "IImageStore",
]
