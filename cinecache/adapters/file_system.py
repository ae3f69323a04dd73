"""
Adaptateur pour l'arborescence des images stockees.

Implementation concrete de IImageStore sur le systeme de fichiers local.
Toutes les ecritures passent par un renommage atomique (os.replace) : un
fichier partiellement ecrit n'est jamais visible au chemin public. Si le
fichier temporaire est sur un autre systeme de fichiers, il est d'abord
copie dans un fichier de transit cache du repertoire de destination.
"""

import errno
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterator, Optional

from loguru import logger

from cinecache.core.entities.image import ImageCategory
from cinecache.core.errors import ImageCacheError
from cinecache.core.ports.image_store import IImageStore
from cinecache.core.value_objects import CacheFailure, ImageFormat
from cinecache.utils.constants import (
    IMAGE_DIR_MODE,
    IMAGE_FILE_MODE,
    PUBLIC_PREFIX,
    STAGING_PREFIX,
)


class FileSystemImageStore(IImageStore):
    """
    Implementation de IImageStore pour le systeme de fichiers reel.

    Disposition :
        {upload_root}/posters/{nom}.{jpg|png|webp}
        {upload_root}/backdrops/{nom}.{jpg|png|webp}
    Chemin public :
        {public_prefix}/posters/{nom}.{ext}
    """

    def __init__(self, upload_root: Path, public_prefix: str = PUBLIC_PREFIX) -> None:
        """
        Initialise le store.

        Args :
            upload_root : Racine geree (creee a la demande)
            public_prefix : Prefixe des chemins publics (ex: /uploads)
        """
        self._root = Path(upload_root).expanduser().absolute()
        self._prefix = "/" + public_prefix.strip("/")

    @property
    def upload_root(self) -> Path:
        return self._root

    @property
    def public_prefix(self) -> str:
        return self._prefix

    def category_dir(self, category: ImageCategory) -> Path:
        """Repertoire de stockage d'une categorie."""
        return self._root / category.directory

    def ensure_directory(self, category: ImageCategory) -> Path:
        """Cree le repertoire de la categorie (0755) si necessaire."""
        directory = self.category_dir(category)
        try:
            directory.mkdir(mode=IMAGE_DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise ImageCacheError(
                CacheFailure.STORAGE_FAILURE,
                f"Creation du repertoire {directory} impossible: {e}",
            ) from e
        return directory

    def public_path_for(self, category: ImageCategory, filename: str) -> str:
        return f"{self._prefix}/{category.directory}/{filename}"

    def destination_for(
        self, category: ImageCategory, stem: str, image_format: ImageFormat
    ) -> Path:
        return self.category_dir(category) / f"{stem}.{image_format.extension}"

    def find_cached(self, category: ImageCategory, stem: str) -> Optional[str]:
        """Cherche {stem}.jpg, {stem}.png puis {stem}.webp dans la categorie."""
        for image_format in ImageFormat:
            candidate = self.destination_for(category, stem, image_format)
            if _is_readable_file(candidate):
                return self.public_path_for(category, candidate.name)
        return None

    def place(self, temp_path: Path, destination: Path, replace: bool = False) -> bool:
        """
        Deplace atomiquement temp_path vers destination.

        Les permissions sont appliquees avant le renommage pour que le fichier
        soit lisible des son apparition. Si deux appelants concurrents placent
        la meme URL, le contenu est identique : le dernier renommage gagne
        sans jamais exposer de fichier partiel.
        """
        if not replace and _is_readable_file(destination):
            temp_path.unlink(missing_ok=True)
            return False

        try:
            os.chmod(temp_path, IMAGE_FILE_MODE)
            self._atomic_move(temp_path, destination)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise ImageCacheError(
                CacheFailure.STORAGE_FAILURE,
                f"Deplacement vers {destination} impossible: {e}",
            ) from e
        return True

    def _atomic_move(self, source: Path, destination: Path) -> None:
        """os.replace, avec copie de transit si source et destination different de volume."""
        try:
            os.replace(source, destination)
            return
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise

        fd, staging_name = tempfile.mkstemp(prefix=STAGING_PREFIX, dir=destination.parent)
        os.close(fd)
        staging = Path(staging_name)
        try:
            shutil.copyfile(source, staging)
            os.chmod(staging, IMAGE_FILE_MODE)
            os.replace(staging, destination)
        except BaseException:
            staging.unlink(missing_ok=True)
            raise
        source.unlink(missing_ok=True)

    def resolve_public_path(self, public_path: str) -> Path:
        """
        Convertit un chemin public en chemin absolu sous la racine geree.

        Le chemin doit commencer par le prefixe public et, une fois resolu
        (.. et liens symboliques compris), rester strictement sous la racine.
        """
        prefix = self._prefix + "/"
        if not public_path.startswith(prefix):
            raise ImageCacheError(
                CacheFailure.PATH_ESCAPE,
                f"Chemin hors du prefixe {self._prefix}: {public_path}",
            )

        if "\x00" in public_path:
            raise ImageCacheError(CacheFailure.PATH_ESCAPE, "Octet nul dans le chemin public")

        root = self._root.resolve()
        try:
            candidate = (root / public_path[len(prefix):]).resolve()
        except (OSError, ValueError) as e:
            raise ImageCacheError(
                CacheFailure.PATH_ESCAPE, f"Chemin public invalide: {public_path!r} ({e})"
            ) from e
        if candidate == root or not candidate.is_relative_to(root):
            raise ImageCacheError(
                CacheFailure.PATH_ESCAPE,
                f"Chemin resolu hors de la racine geree: {public_path}",
            )
        return candidate

    def public_path_of(self, path: Path) -> Optional[str]:
        """Chemin public d'un fichier stocke (None s'il n'est pas dans une categorie)."""
        try:
            relative = path.resolve().relative_to(self._root.resolve())
        except ValueError:
            return None
        if len(relative.parts) != 2:
            return None
        directory, filename = relative.parts
        for category in ImageCategory:
            if category.directory == directory:
                return self.public_path_for(category, filename)
        return None

    def delete(self, path: Path) -> bool:
        """Supprime un fichier ; un fichier deja absent compte comme un succes."""
        try:
            path.unlink()
        except FileNotFoundError:
            return True
        except OSError as e:
            logger.error("Suppression impossible", path=str(path), error=str(e))
            return False
        return True

    def iter_files(self, category: Optional[ImageCategory] = None) -> Iterator[Path]:
        """Liste les fichiers stockes, en ignorant les fichiers caches (transit)."""
        categories = [category] if category else list(ImageCategory)
        for current in categories:
            directory = self.category_dir(current)
            if not directory.is_dir():
                continue
            for entry in sorted(directory.iterdir()):
                if entry.name.startswith("."):
                    continue
                if entry.is_file():
                    yield entry


def _is_readable_file(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)
