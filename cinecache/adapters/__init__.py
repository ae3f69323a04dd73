"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- api/ : Téléchargement HTTP des images et URL du CDN TMDB
- cli/ : Interface ligne de commande (Typer)
- file_system : Arborescence des images stockées

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""

from cinecache.adapters.file_system import FileSystemImageStore

__all__ = [
    "FileSystemImageStore",
]
