"""
Service de maintenance du cache d'images.

Statistiques d'occupation et purge des fichiers orphelins (non references
par le manifeste des chemins en usage) ou anciens. Un fichier reference
n'est jamais supprime. Les ecritures du cache ne modifiant jamais un
fichier en place (renommage atomique uniquement), la purge peut tourner
pendant que le service de cache ecrit.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from cinecache.core.entities.image import ImageCategory, StoredImage
from cinecache.core.ports.image_store import IImageStore
from cinecache.core.value_objects import ImageFormat
from cinecache.infrastructure.hash_service import is_cache_key

SECONDS_PER_DAY = 86400


@dataclass
class CacheStats:
    """Occupation du cache par categorie.

    overrides compte les affiches personnalisees (fichiers non nommes par
    une cle de cache), incluses dans posters.
    """

    posters: int = 0
    backdrops: int = 0
    overrides: int = 0
    total_bytes: int = 0

    @property
    def total(self) -> int:
        return self.posters + self.backdrops


@dataclass
class PruneReport:
    """Resultat d'une purge (ou d'une simulation)."""

    dry_run: bool
    candidates: list[Path] = field(default_factory=list)
    deleted: list[Path] = field(default_factory=list)
    freed_bytes: int = 0


def load_manifest(manifest_path: Path) -> set[str]:
    """
    Lit le manifeste des chemins publics en usage.

    Une entree par ligne ; les lignes vides et les commentaires (#) sont ignores.
    """
    referenced: set[str] = set()
    for line in manifest_path.read_text(encoding="utf-8").splitlines():
        entry = line.strip()
        if entry and not entry.startswith("#"):
            referenced.add(entry)
    return referenced


class CacheMaintenanceService:
    """
    Statistiques et purge de l'arborescence d'images.

    Example:
        maintenance = CacheMaintenanceService(store)
        referenced = load_manifest(Path("in_use.txt"))
        report = maintenance.prune_orphans(referenced, dry_run=True)
    """

    def __init__(self, store: IImageStore) -> None:
        self._store = store

    def list_images(self, category: Optional[ImageCategory] = None) -> list[StoredImage]:
        """Images stockees (les fichiers sans extension d'image connue sont ignores)."""
        categories = [category] if category else list(ImageCategory)
        images: list[StoredImage] = []
        for current in categories:
            for path in self._store.iter_files(current):
                image_format = ImageFormat.from_extension(path.suffix)
                public_path = self._store.public_path_of(path)
                if image_format is None or public_path is None:
                    continue
                images.append(
                    StoredImage(
                        category=current,
                        image_format=image_format,
                        path=path,
                        public_path=public_path,
                        size=_file_size(path),
                    )
                )
        return images

    def stats(self) -> CacheStats:
        """Compte les images par categorie, les affiches personnalisees et la taille totale."""
        stats = CacheStats()
        for image in self.list_images():
            if image.category is ImageCategory.POSTER:
                stats.posters += 1
                if not is_cache_key(image.path.stem):
                    stats.overrides += 1
            else:
                stats.backdrops += 1
            stats.total_bytes += image.size
        return stats

    def find_orphans(self, referenced: Iterable[str]) -> list[Path]:
        """Fichiers dont le chemin public n'apparait pas dans referenced."""
        in_use = set(referenced)
        return [
            path
            for path in self._store.iter_files()
            if self._store.public_path_of(path) not in in_use
        ]

    def prune_orphans(self, referenced: Iterable[str], dry_run: bool = False) -> PruneReport:
        """Supprime les fichiers non references."""
        return self._prune(self.find_orphans(referenced), dry_run)

    def prune_older_than(
        self,
        days: int,
        referenced: Iterable[str] = (),
        dry_run: bool = False,
        now: Optional[float] = None,
    ) -> PruneReport:
        """
        Supprime les fichiers non references modifies il y a plus de days jours.

        Raises:
            ValueError: Si days n'est pas strictement positif
        """
        if days <= 0:
            raise ValueError("days doit etre strictement positif")
        cutoff = (now if now is not None else time.time()) - days * SECONDS_PER_DAY
        candidates = [
            path for path in self.find_orphans(referenced) if 0 < _mtime(path) < cutoff
        ]
        return self._prune(candidates, dry_run)

    def _prune(self, candidates: list[Path], dry_run: bool) -> PruneReport:
        report = PruneReport(dry_run=dry_run, candidates=candidates)
        if dry_run:
            return report

        for path in candidates:
            size = _file_size(path)
            if self._store.delete(path):
                report.deleted.append(path)
                report.freed_bytes += size
        logger.info(
            "Purge du cache d'images",
            deleted=len(report.deleted),
            freed=report.freed_bytes,
        )
        return report


def _file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


def _mtime(path: Path) -> float:
    try:
        return path.stat().st_mtime
    except OSError:
        return 0.0
