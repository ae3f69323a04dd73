"""
Constantes globales pour CineCache.

Ce module contient les constantes utilisees dans l'application:
- Limites de taille et de temps pour les telechargements
- Hotes et schemas autorises par defaut
- Signatures binaires des formats d'image supportes
- Tailles d'image TMDB connues
"""

# Taille maximale d'une image (5 Mo)
MAX_IMAGE_BYTES = 5_242_880

# Timeouts HTTP (secondes)
CONNECT_TIMEOUT = 5.0
REQUEST_TIMEOUT = 10.0

# Nombre maximal de redirections suivies manuellement
MAX_REDIRECTS = 3

# Taille des blocs lus depuis le flux HTTP ou l'upload
CHUNK_SIZE = 64 * 1024

# CDN d'images TMDB
DEFAULT_ALLOWED_HOSTS = ("image.tmdb.org",)
DEFAULT_ALLOWED_SCHEMES = ("https",)
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"

# Prefixe public et sous-repertoires
PUBLIC_PREFIX = "/uploads"

# Prefixes des fichiers temporaires
TEMP_PREFIX = "imgcache_"
STAGING_PREFIX = ".incoming_"

# Permissions des images stockees (lecture pour tous, pas d'execution)
IMAGE_FILE_MODE = 0o644
IMAGE_DIR_MODE = 0o755

# Nombre d'octets lus pour la detection du format
SIGNATURE_LENGTH = 12

# Signatures binaires
JPEG_SIGNATURE = b"\xff\xd8\xff"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
RIFF_SIGNATURE = b"RIFF"
WEBP_SIGNATURE = b"WEBP"

# Tailles servies par le CDN TMDB
TMDB_POSTER_SIZES = frozenset({
    "w92",
    "w154",
    "w185",
    "w342",
    "w500",
    "w780",
    "original",
})

TMDB_BACKDROP_SIZES = frozenset({
    "w300",
    "w780",
    "w1280",
    "original",
})
