"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web.
Le container est construit une fois au demarrage du processus ; le composant
de cache ne maintient aucun etat global.
"""

from dependency_injector import containers, providers

from .adapters.api.image_fetcher import HttpImageFetcher
from .adapters.file_system import FileSystemImageStore
from .config import Settings
from .services.image_cache import ImageCacheService
from .services.maintenance import CacheMaintenanceService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        service = container.image_cache_service()
        path = await service.cache_image(url, ImageCategory.POSTER)

    Dans les tests, la configuration peut etre remplacee :
        container.config.override(providers.Object(Settings(upload_root=tmp_path)))
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Adapters - implementations concretes des ports
    image_fetcher = providers.Singleton(
        HttpImageFetcher,
        allowed_hosts=config.provided.allowed_hosts,
        allowed_schemes=config.provided.allowed_schemes,
        max_bytes=config.provided.max_image_bytes,
        connect_timeout=config.provided.connect_timeout,
        request_timeout=config.provided.request_timeout,
        max_redirects=config.provided.max_redirects,
        user_agent=config.provided.user_agent,
        temp_dir=config.provided.temp_dir,
    )

    image_store = providers.Singleton(
        FileSystemImageStore,
        upload_root=config.provided.upload_root,
        public_prefix=config.provided.public_prefix,
    )

    # Services (sans etat - Singletons)
    image_cache_service = providers.Singleton(
        ImageCacheService,
        fetcher=image_fetcher,
        store=image_store,
        max_bytes=config.provided.max_image_bytes,
        temp_dir=config.provided.temp_dir,
    )

    maintenance_service = providers.Factory(
        CacheMaintenanceService,
        store=image_store,
    )
