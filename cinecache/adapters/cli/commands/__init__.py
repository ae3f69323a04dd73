"""Sous-package CLI commands - re-exporte les commandes publiques."""

from cinecache.adapters.cli.commands.image_commands import (
    cache,
    remove,
    upload,
)
from cinecache.adapters.cli.commands.maintenance_commands import (
    prune,
    stats,
)

__all__ = [
    # Cache d'images
    "cache",
    "remove",
    "upload",
    # Maintenance
    "prune",
    "stats",
]
