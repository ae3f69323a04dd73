"""
Service de nommage des images stockees.

Deux strategies coexistent :
    - Images en cache : le nom de base est l'empreinte SHA-256 de l'URL source
      exacte (octet par octet, sans normalisation). Une meme URL donne toujours
      le meme nom, ce qui rend la mise en cache idempotente.
    - Affiches personnalisees : le nom est imprevisible et unique par upload
      (proprietaire, film, horodatage, suffixe aleatoire). Chaque upload cree
      un nouveau fichier.

Les variantes de taille TMDB (w342, original...) ont des URL distinctes et
donc des entrees de cache independantes.
"""

import hashlib
import re
import secrets
import time
from typing import Optional

# Longueur du suffixe aleatoire des uploads (octets -> 2x caracteres hex)
UPLOAD_TOKEN_BYTES = 8

_CACHE_KEY_PATTERN = re.compile(r"^[0-9a-f]{64}$")


def compute_cache_key(url: str) -> str:
    """
    Calcule la cle de cache d'une URL source.

    Args :
        url : URL source exacte telle que fournie par l'appelant

    Retourne :
        Empreinte hexadecimale de 64 caracteres (sha256)
    """
    return hashlib.sha256(url.encode("utf-8")).hexdigest()


def is_cache_key(stem: str) -> bool:
    """Vrai si le nom de base correspond a une cle de cache."""
    return bool(_CACHE_KEY_PATTERN.match(stem))


def override_prefix(owner_id: int, target_id: int) -> str:
    """Prefixe commun a toutes les affiches personnalisees d'un couple (utilisateur, film)."""
    return f"u{owner_id}_m{target_id}_"


def generate_override_stem(
    owner_id: int,
    target_id: int,
    timestamp: Optional[float] = None,
    token: Optional[str] = None,
) -> str:
    """
    Genere un nom de base unique pour une affiche personnalisee.

    Format : u{owner}_m{target}_{timestamp}_{suffixe hex}

    Args :
        owner_id : Identifiant de l'utilisateur
        target_id : Identifiant du film (ID TMDB)
        timestamp : Horodatage Unix (defaut: maintenant)
        token : Suffixe aleatoire (defaut: 16 caracteres hex de secrets)
    """
    ts = int(timestamp if timestamp is not None else time.time())
    suffix = token if token is not None else secrets.token_hex(UPLOAD_TOKEN_BYTES)
    return f"{override_prefix(owner_id, target_id)}{ts}_{suffix}"
