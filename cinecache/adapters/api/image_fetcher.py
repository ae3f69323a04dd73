"""
Client HTTP de telechargement d'images distantes.

Implemente IImageFetcher avec httpx en mode streaming :
    - Liste blanche de schemas et d'hotes, verifiee avant tout acces reseau
    - Timeouts separes (connexion 5s, total 10s)
    - Redirections suivies manuellement, chaque cible etant revalidee
    - Plafond de taille applique pendant la lecture du flux
    - Ecriture dans un fichier temporaire, jamais directement a la destination

Aucun retry automatique : l'appelant peut relancer l'operation.

Usage:
    fetcher = HttpImageFetcher(allowed_hosts=["image.tmdb.org"])
    downloaded = await fetcher.download("https://image.tmdb.org/t/p/w500/abc.jpg")
    await fetcher.close()
"""

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional

import httpx
from loguru import logger

from cinecache import __version__
from cinecache.core.errors import ImageCacheError
from cinecache.core.ports.image_fetcher import DownloadedImage, IImageFetcher
from cinecache.core.value_objects import CacheFailure
from cinecache.services.content_validator import normalize_declared_type
from cinecache.utils.constants import (
    CHUNK_SIZE,
    CONNECT_TIMEOUT,
    DEFAULT_ALLOWED_HOSTS,
    DEFAULT_ALLOWED_SCHEMES,
    MAX_IMAGE_BYTES,
    MAX_REDIRECTS,
    REQUEST_TIMEOUT,
    TEMP_PREFIX,
)


class HttpImageFetcher(IImageFetcher):
    """
    Telechargeur d'images base sur httpx.AsyncClient.

    Attributes:
        DEFAULT_USER_AGENT: User-Agent envoye au CDN

    Example:
        fetcher = HttpImageFetcher(allowed_hosts=["image.tmdb.org"], max_bytes=5_242_880)
        try:
            downloaded = await fetcher.download(url)
        except ImageCacheError as e:
            print(e.failure, e.message)
    """

    DEFAULT_USER_AGENT = f"CineCache/{__version__}"

    def __init__(
        self,
        allowed_hosts: Iterable[str] = DEFAULT_ALLOWED_HOSTS,
        allowed_schemes: Iterable[str] = DEFAULT_ALLOWED_SCHEMES,
        max_bytes: int = MAX_IMAGE_BYTES,
        connect_timeout: float = CONNECT_TIMEOUT,
        request_timeout: float = REQUEST_TIMEOUT,
        max_redirects: int = MAX_REDIRECTS,
        user_agent: Optional[str] = None,
        temp_dir: Optional[Path] = None,
    ) -> None:
        """
        Initialise le telechargeur.

        Args:
            allowed_hosts: Hotes autorises (comparaison insensible a la casse)
            allowed_schemes: Schemas autorises (https par defaut)
            max_bytes: Taille maximale du corps de reponse
            connect_timeout: Delai maximal d'etablissement de connexion
            request_timeout: Delai maximal total du telechargement
            max_redirects: Nombre de redirections suivies (0 = aucune)
            user_agent: User-Agent HTTP (defaut: CineCache/<version>)
            temp_dir: Repertoire des fichiers temporaires (defaut: tmp systeme)
        """
        self._allowed_hosts = frozenset(host.lower() for host in allowed_hosts)
        self._allowed_schemes = frozenset(scheme.lower() for scheme in allowed_schemes)
        self._max_bytes = max_bytes
        self._connect_timeout = connect_timeout
        self._request_timeout = request_timeout
        self._max_redirects = max_redirects
        self._user_agent = user_agent or self.DEFAULT_USER_AGENT
        self._temp_dir = temp_dir
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def max_bytes(self) -> int:
        """Plafond de taille applique aux telechargements."""
        return self._max_bytes

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Les redirections ne sont jamais suivies par httpx : _follow()
        revalide chaque cible avant de la demander.
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": self._user_agent},
                timeout=httpx.Timeout(self._request_timeout, connect=self._connect_timeout),
                follow_redirects=False,
                verify=True,
            )
        return self._client

    def validate_source(self, url: str) -> str:
        """
        Verifie qu'une URL est absolue, d'un schema autorise et d'un hote autorise.

        Raises:
            ImageCacheError: INVALID_SOURCE si l'URL est rejetee
        """
        try:
            parsed = httpx.URL(url)
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise ImageCacheError(CacheFailure.INVALID_SOURCE, f"URL invalide: {e}") from e

        scheme = parsed.scheme.lower()
        host = parsed.host.lower()
        if not scheme or not host:
            raise ImageCacheError(CacheFailure.INVALID_SOURCE, "URL non absolue")
        if scheme not in self._allowed_schemes:
            raise ImageCacheError(
                CacheFailure.INVALID_SOURCE, f"Schema non autorise: {scheme}"
            )
        if host not in self._allowed_hosts:
            raise ImageCacheError(
                CacheFailure.INVALID_SOURCE, f"Hote hors liste blanche: {host}"
            )
        return host

    async def download(self, url: str) -> DownloadedImage:
        """
        Telecharge une image vers un fichier temporaire.

        L'URL est validee avant la creation du fichier temporaire et avant
        toute requete. En cas d'echec, le fichier temporaire est supprime.

        Returns:
            DownloadedImage decrivant le fichier temporaire

        Raises:
            ImageCacheError: INVALID_SOURCE, NETWORK_FAILURE, SIZE_EXCEEDED
                             ou STORAGE_FAILURE
        """
        self.validate_source(url)
        temp_path = self._create_temp_file()
        try:
            return await self._fetch_to(url, temp_path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    def _create_temp_file(self) -> Path:
        try:
            fd, name = tempfile.mkstemp(prefix=TEMP_PREFIX, dir=self._temp_dir)
        except OSError as e:
            raise ImageCacheError(
                CacheFailure.STORAGE_FAILURE, f"Creation du fichier temporaire impossible: {e}"
            ) from e
        os.close(fd)
        return Path(name)

    async def _fetch_to(self, url: str, temp_path: Path) -> DownloadedImage:
        """Applique le timeout global et traduit les erreurs httpx/OS."""
        try:
            async with asyncio.timeout(self._request_timeout):
                return await self._follow(url, temp_path)
        except TimeoutError as e:
            raise ImageCacheError(
                CacheFailure.NETWORK_FAILURE,
                f"Delai total depasse ({self._request_timeout}s)",
            ) from e
        except httpx.HTTPError as e:
            raise ImageCacheError(
                CacheFailure.NETWORK_FAILURE, f"{type(e).__name__}: {e}"
            ) from e
        except OSError as e:
            raise ImageCacheError(
                CacheFailure.STORAGE_FAILURE, f"Ecriture du fichier temporaire impossible: {e}"
            ) from e

    async def _follow(self, url: str, temp_path: Path) -> DownloadedImage:
        """Suit au plus max_redirects redirections vers des hotes autorises."""
        client = self._get_client()
        current = url

        for _ in range(self._max_redirects + 1):
            async with client.stream("GET", current) as response:
                if response.is_redirect:
                    target = str(response.url.join(response.headers["Location"]))
                    try:
                        self.validate_source(target)
                    except ImageCacheError as e:
                        raise ImageCacheError(
                            CacheFailure.INVALID_SOURCE,
                            f"Redirection refusee vers {target} ({e.message})",
                        ) from e
                    logger.debug("Redirection suivie", url=current, target=target)
                    current = target
                    continue

                if not response.is_success:
                    raise ImageCacheError(
                        CacheFailure.NETWORK_FAILURE,
                        f"Statut HTTP {response.status_code}",
                    )

                declared_length = response.headers.get("Content-Length", "")
                if declared_length.isdigit() and int(declared_length) > self._max_bytes:
                    raise ImageCacheError(
                        CacheFailure.SIZE_EXCEEDED,
                        f"Content-Length annonce {declared_length} > {self._max_bytes}",
                    )

                size = await self._write_body(response, temp_path)
                return DownloadedImage(
                    temp_path=temp_path,
                    size=size,
                    declared_type=normalize_declared_type(
                        response.headers.get("Content-Type")
                    ),
                    final_url=str(response.url),
                )

        raise ImageCacheError(
            CacheFailure.NETWORK_FAILURE,
            f"Trop de redirections (max {self._max_redirects})",
        )

    async def _write_body(self, response: httpx.Response, temp_path: Path) -> int:
        """Ecrit le corps en flux et interrompt des que le plafond est depasse."""
        received = 0
        with open(temp_path, "wb") as f:
            async for chunk in response.aiter_bytes(CHUNK_SIZE):
                received += len(chunk)
                if received > self._max_bytes:
                    raise ImageCacheError(
                        CacheFailure.SIZE_EXCEEDED,
                        f"Plus de {self._max_bytes} octets recus",
                    )
                f.write(chunk)
        return received
