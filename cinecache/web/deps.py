"""
Dépendances partagées de l'application web.

Fournit l'accès au Container DI créé dans le lifespan de l'application.
"""

from fastapi import Request

from ..container import Container
from ..services.image_cache import ImageCacheService


def get_container(request: Request) -> Container:
    """Container DI de l'application."""
    return request.app.state.container


def get_image_cache_service(request: Request) -> ImageCacheService:
    """Service de cache d'images injecté dans les routes."""
    return get_container(request).image_cache_service()
