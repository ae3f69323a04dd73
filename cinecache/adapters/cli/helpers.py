"""
Utilitaires partages pour les commandes CLI de CineCache.

Ce module fournit :
- console : instance Rich Console partagee
- build_container : construction du container DI (point de patch des tests)
- with_container : decorateur injectant un container initialise
- async_command : decorateur transformant une fonction async en commande sync
"""

import asyncio
import inspect
from functools import wraps

from rich.console import Console

from cinecache.container import Container

console = Console()


def build_container() -> Container:
    """Construit le container DI de la commande."""
    return Container()


def with_container(func):
    """
    Decorateur qui injecte un container en premier argument.

    Le client HTTP du fetcher est ferme a la fin de la commande.

    Usage:
        @with_container
        async def my_command(container, ...):
            service = container.image_cache_service()
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        container = build_container()
        try:
            return await func(container, *args, **kwargs)
        finally:
            await container.image_fetcher().close()
    return wrapper


def async_command(func):
    """
    Transforme une fonction async en commande sync via asyncio.run().

    Preserve les annotations Typer pour que les options/arguments soient
    correctement interpretes.

    Usage:
        @async_command
        async def my_command(...):
            ...
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        return asyncio.run(func(*args, **kwargs))
    # Preserver les annotations Typer
    wrapper.__signature__ = inspect.signature(func)
    wrapper.__annotations__ = func.__annotations__
    return wrapper
