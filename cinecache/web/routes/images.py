"""
Routes de l'API d'images : mise en cache, suppression et affiche personnalisée.

Un échec n'est jamais fatal pour l'appelant : la mise en cache renvoie l'URL
distante en repli, l'upload renvoie un message d'erreur affichable.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...core.entities.image import ImageCategory
from ...core.value_objects import CacheFailure
from ...services.image_cache import ImageCacheService
from ...utils.helpers import bytes_human
from ..deps import get_image_cache_service

router = APIRouter(prefix="/api")


class CacheRequest(BaseModel):
    """Corps de la requête de mise en cache."""

    url: str
    category: ImageCategory = ImageCategory.POSTER


def _cache_status(failure: CacheFailure) -> int:
    """Code HTTP associé à un échec de mise en cache."""
    if failure is CacheFailure.INVALID_SOURCE:
        return 422
    if failure is CacheFailure.STORAGE_FAILURE:
        return 500
    return 502


@router.post("/images/cache")
async def cache_image(
    payload: CacheRequest,
    service: ImageCacheService = Depends(get_image_cache_service),
):
    """Met en cache une image distante et retourne son chemin public."""
    outcome = await service.fetch(payload.url, payload.category)
    if outcome.ok:
        return {
            "success": True,
            "path": outcome.public_path,
            "cached": outcome.from_cache,
        }
    return JSONResponse(
        {
            "success": False,
            "error": outcome.failure.value,
            "fallback_url": payload.url,
        },
        status_code=_cache_status(outcome.failure),
    )


@router.delete("/images")
def delete_image(
    path: str,
    service: ImageCacheService = Depends(get_image_cache_service),
):
    """Supprime une image stockée par son chemin public."""
    removed = service.remove_image(path)
    return JSONResponse({"success": removed}, status_code=200 if removed else 400)


@router.post("/movies/{target_id}/poster")
def upload_poster(
    target_id: int,
    owner_id: int = Form(...),
    previous_path: Optional[str] = Form(None),
    poster: Optional[UploadFile] = File(None),
    service: ImageCacheService = Depends(get_image_cache_service),
):
    """Remplace l'affiche d'un film par un fichier envoyé par l'utilisateur."""
    if target_id <= 0:
        return JSONResponse({"success": False, "error": "ID de film invalide"}, status_code=400)

    outcome = service.ingest_upload(
        poster.file if poster else None,
        poster.size if poster else None,
        owner_id=owner_id,
        target_id=target_id,
        previous_path=previous_path,
    )
    if outcome.ok:
        return {"success": True, "poster_url": outcome.public_path}

    if outcome.failure is CacheFailure.INVALID_SOURCE:
        error, status = "Aucun fichier envoyé", 400
    elif outcome.failure is CacheFailure.UNSUPPORTED_CONTENT:
        error, status = "Type d'image non supporté. Formats acceptés : JPG, PNG, WEBP", 400
    elif outcome.failure is CacheFailure.SIZE_EXCEEDED:
        error, status = f"Fichier trop volumineux (max {bytes_human(service.max_bytes)})", 400
    else:
        error, status = "Échec de l'upload", 500
    return JSONResponse({"success": False, "error": error}, status_code=status)
