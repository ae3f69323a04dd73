"""
Service de cache d'images (affiches et fonds d'ecran).

Orchestration :
    cache_image : URL distante -> chemin public local (idempotent)
        1. Validation de l'URL (schema, liste blanche) sans acces reseau
        2. Cle de cache = sha256(URL) ; si un fichier existe deja -> retour immediat
        3. Telechargement en flux vers un fichier temporaire (plafond 5 Mo)
        4. Detection du format par signature binaire (JPEG, PNG, WEBP)
        5. Renommage atomique vers {categorie}/{cle}.{ext}
    remove_image : suppression idempotente par chemin public
    upload_override : affiche personnalisee envoyee par l'utilisateur

Aucune exception ne sort du service pour les echecs prevus : chaque echec
est journalise puis converti en CacheOutcome (ou None / False).
"""

import tempfile
from pathlib import Path
from typing import BinaryIO, Optional

from loguru import logger

from cinecache.core.entities.image import ImageCategory
from cinecache.core.errors import ImageCacheError
from cinecache.core.ports.image_fetcher import IImageFetcher
from cinecache.core.ports.image_store import IImageStore
from cinecache.core.value_objects import CacheFailure, CacheOutcome
from cinecache.infrastructure.hash_service import (
    compute_cache_key,
    generate_override_stem,
    override_prefix,
)
from cinecache.services.content_validator import require_supported_image
from cinecache.utils.constants import CHUNK_SIZE, MAX_IMAGE_BYTES, TEMP_PREFIX


class ImageCacheService:
    """
    Service applicatif du cache d'images.

    Sans etat partage en memoire : seul le systeme de fichiers est partage
    entre appels concurrents. Construit une fois au demarrage (container DI)
    puis injecte dans les commandes CLI et les routes web.

    Example:
        service = ImageCacheService(fetcher=fetcher, store=store)
        path = await service.cache_image(url, ImageCategory.POSTER)
        if path is None:
            path = url  # repli sur l'image distante
    """

    def __init__(
        self,
        fetcher: IImageFetcher,
        store: IImageStore,
        max_bytes: int = MAX_IMAGE_BYTES,
        temp_dir: Optional[Path] = None,
    ) -> None:
        self._fetcher = fetcher
        self._store = store
        self._max_bytes = max_bytes
        self._temp_dir = temp_dir

    @property
    def max_bytes(self) -> int:
        """Plafond de taille des images (telechargements et uploads)."""
        return self._max_bytes

    # ------------------------------------------------------------------
    # Mise en cache depuis une URL
    # ------------------------------------------------------------------

    async def fetch(self, url: str, category: ImageCategory) -> CacheOutcome:
        """
        Met en cache une image distante et retourne un resultat explicite.

        Args:
            url: URL source exacte (la cle de cache en est derivee octet par octet)
            category: Categorie (determine le repertoire et le chemin public)

        Returns:
            CacheOutcome avec le chemin public, ou la raison de l'echec
        """
        logger.debug("Mise en cache demandee", url=url, category=category.value)
        try:
            self._fetcher.validate_source(url)
            self._store.ensure_directory(category)

            cache_key = compute_cache_key(url)
            existing = self._store.find_cached(category, cache_key)
            if existing is not None:
                logger.debug("Image deja en cache", url=url, path=existing)
                return CacheOutcome.success(existing, from_cache=True)

            downloaded = await self._fetcher.download(url)
            try:
                image_format = require_supported_image(downloaded.temp_path)
            except ImageCacheError:
                downloaded.temp_path.unlink(missing_ok=True)
                raise

            if downloaded.declared_type and downloaded.declared_type != image_format.mime_type:
                logger.info(
                    "Content-Type annonce different du contenu reel",
                    url=url,
                    declared=downloaded.declared_type,
                    detected=image_format.mime_type,
                )

            destination = self._store.destination_for(category, cache_key, image_format)
            moved = self._store.place(downloaded.temp_path, destination)
            public_path = self._store.public_path_for(category, destination.name)

        except ImageCacheError as e:
            self._log_failure(e, url=url, category=category.value)
            return CacheOutcome.failed(e.failure, e.message)
        except OSError as e:
            logger.error(
                "Erreur systeme pendant la mise en cache",
                url=url,
                category=category.value,
                error=str(e),
            )
            return CacheOutcome.failed(CacheFailure.STORAGE_FAILURE, str(e))

        if moved:
            logger.info(
                "Image mise en cache",
                url=url,
                dest=str(destination),
                bytes=downloaded.size,
                mime=image_format.mime_type,
            )
        else:
            logger.debug("Image placee par un appel concurrent", url=url, path=public_path)
        return CacheOutcome.success(public_path, from_cache=not moved)

    async def cache_image(self, url: str, category: ImageCategory) -> Optional[str]:
        """
        Met en cache une image distante.

        Returns:
            Le chemin public (/uploads/posters/<cle>.jpg), ou None en cas d'echec
        """
        outcome = await self.fetch(url, category)
        return outcome.public_path

    # ------------------------------------------------------------------
    # Suppression
    # ------------------------------------------------------------------

    def remove_image(self, public_path: Optional[str]) -> bool:
        """
        Supprime une image par son chemin public.

        - Chemin vide ou None : succes sans effet
        - Fichier absent : succes (suppression idempotente)
        - Chemin hors de la racine geree : echec, evenement de securite journalise

        Returns:
            True si le fichier n'existe plus apres l'appel
        """
        if not public_path:
            return True

        try:
            full_path = self._store.resolve_public_path(public_path)
        except ImageCacheError as e:
            self._log_failure(e, path=public_path)
            return False

        if not full_path.exists():
            logger.info("Image deja absente", path=str(full_path))
            return True

        removed = self._store.delete(full_path)
        if removed:
            logger.info("Image supprimee", path=str(full_path))
        else:
            logger.error("Echec de suppression de l'image", path=str(full_path))
        return removed

    # ------------------------------------------------------------------
    # Affiche personnalisee
    # ------------------------------------------------------------------

    def ingest_upload(
        self,
        stream: Optional[BinaryIO],
        size: Optional[int],
        owner_id: int,
        target_id: int,
        previous_path: Optional[str] = None,
    ) -> CacheOutcome:
        """
        Enregistre une affiche personnalisee envoyee par un utilisateur.

        Le type MIME declare par le client est ignore : le format est detecte
        par signature binaire. La taille declaree et la taille reelle sont
        toutes deux bornees. Chaque upload cree un nouveau fichier ; l'ancienne
        affiche personnalisee du meme couple (utilisateur, film) est supprimee.

        Args:
            stream: Flux binaire du fichier envoye (None si aucun fichier)
            size: Taille declaree en octets (optionnelle)
            owner_id: Identifiant de l'utilisateur
            target_id: Identifiant du film (ID TMDB)
            previous_path: Chemin public actuellement associe au film

        Returns:
            CacheOutcome avec le chemin public de la nouvelle affiche
        """
        context = {"owner_id": owner_id, "target_id": target_id}
        if stream is None:
            logger.warning("Upload sans fichier", **context)
            return CacheOutcome.failed(CacheFailure.INVALID_SOURCE, "Aucun fichier envoye")

        temp_path: Optional[Path] = None
        try:
            if size is not None and size > self._max_bytes:
                raise ImageCacheError(
                    CacheFailure.SIZE_EXCEEDED,
                    f"Taille declaree {size} > {self._max_bytes}",
                )

            temp_path = self._spool_upload(stream)
            image_format = require_supported_image(temp_path)

            category = ImageCategory.POSTER
            self._store.ensure_directory(category)
            stem = generate_override_stem(owner_id, target_id)
            destination = self._store.destination_for(category, stem, image_format)

            if previous_path and self._is_override_of(previous_path, owner_id, target_id):
                self.remove_image(previous_path)

            self._store.place(temp_path, destination, replace=True)
            temp_path = None
            public_path = self._store.public_path_for(category, destination.name)

        except ImageCacheError as e:
            self._log_failure(e, **context)
            return CacheOutcome.failed(e.failure, e.message)
        except OSError as e:
            logger.error("Echec de l'upload d'affiche", error=str(e), **context)
            return CacheOutcome.failed(CacheFailure.STORAGE_FAILURE, str(e))
        finally:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)

        logger.info("Affiche personnalisee enregistree", path=public_path, **context)
        return CacheOutcome.success(public_path)

    def upload_override(
        self,
        stream: Optional[BinaryIO],
        size: Optional[int],
        owner_id: int,
        target_id: int,
        previous_path: Optional[str] = None,
    ) -> Optional[str]:
        """Variante de ingest_upload retournant le chemin public ou None."""
        return self.ingest_upload(stream, size, owner_id, target_id, previous_path).public_path

    def _spool_upload(self, stream: BinaryIO) -> Path:
        """Copie le flux dans un fichier temporaire en appliquant le plafond de taille."""
        try:
            fd, name = tempfile.mkstemp(prefix=TEMP_PREFIX, dir=self._temp_dir)
        except OSError as e:
            raise ImageCacheError(
                CacheFailure.STORAGE_FAILURE, f"Creation du fichier temporaire impossible: {e}"
            ) from e

        temp_path = Path(name)
        received = 0
        try:
            with open(fd, "wb") as f:
                while chunk := stream.read(CHUNK_SIZE):
                    received += len(chunk)
                    if received > self._max_bytes:
                        raise ImageCacheError(
                            CacheFailure.SIZE_EXCEEDED,
                            f"Plus de {self._max_bytes} octets recus",
                        )
                    f.write(chunk)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise
        return temp_path

    def _is_override_of(self, public_path: str, owner_id: int, target_id: int) -> bool:
        """Vrai si le chemin designe une affiche personnalisee du meme couple."""
        filename = public_path.rsplit("/", 1)[-1]
        expected = self._store.public_path_for(ImageCategory.POSTER, filename)
        return public_path == expected and filename.startswith(
            override_prefix(owner_id, target_id)
        )

    @staticmethod
    def _log_failure(error: ImageCacheError, **context) -> None:
        if error.failure is CacheFailure.PATH_ESCAPE:
            logger.warning(
                "Tentative d'acces hors de la racine geree",
                security=True,
                reason=error.message,
                **context,
            )
        elif error.failure is CacheFailure.STORAGE_FAILURE:
            logger.error(
                "Echec de stockage de l'image",
                failure=error.failure.value,
                reason=error.message,
                **context,
            )
        else:
            logger.warning(
                "Image rejetee",
                failure=error.failure.value,
                reason=error.message,
                **context,
            )
