"""
Configuration du logging de l'application via loguru.

Fournit un logging structuré avec :
- Sortie console : lisible par l'humain, colorée, pour la surveillance en temps réel
- Sortie fichier : sérialisée en JSON, avec rotation, pour l'analyse historique

Les secrets (clés API, jetons) sont masqués à la frontière des sinks par un
patcher loguru, et non au cas par cas dans le code appelant.
"""

import re
import sys
from pathlib import Path

from loguru import logger

REDACTED = "***"

# Clés de contexte dont la valeur est entièrement masquée
SECRET_KEYS = frozenset({"api_key", "access_token", "token", "authorization", "password"})

_QUERY_SECRET_PATTERN = re.compile(
    r"(?P<key>api_key|access_token|token)=(?P<value>[^&\s\"']+)", re.IGNORECASE
)
_BEARER_PATTERN = re.compile(r"(?P<key>Bearer\s+)(?P<value>[A-Za-z0-9._~+/=-]+)", re.IGNORECASE)


def redact_text(text: str) -> str:
    """Masque les paramètres secrets et les jetons Bearer d'une chaîne."""
    text = _QUERY_SECRET_PATTERN.sub(lambda m: f"{m.group('key')}={REDACTED}", text)
    return _BEARER_PATTERN.sub(lambda m: f"{m.group('key')}{REDACTED}", text)


def redact_secrets(record: dict) -> None:
    """
    Patcher loguru : masque les secrets du message et du contexte.

    Appliqué à chaque enregistrement avant son émission vers les sinks.
    """
    record["message"] = redact_text(record["message"])
    extra = record["extra"]
    for key, value in list(extra.items()):
        if key.lower() in SECRET_KEYS and value:
            extra[key] = REDACTED
        elif isinstance(value, str):
            extra[key] = redact_text(value)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/cinecache.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau de log minimum pour la sortie console (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin vers le fichier de log
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB", "1 GB")
        retention_count : Nombre de fichiers rotatifs à conserver

    Le handler console produit des logs colorés lisibles pour la surveillance temps réel.
    Le handler fichier produit des logs sérialisés JSON avec rotation pour l'analyse historique.
    """
    # Supprime le handler par défaut
    logger.remove()
    logger.configure(patcher=redact_secrets)

    # Handler console - lisible par l'humain
    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level> {extra}"
        ),
        colorize=True,
    )

    # Handler fichier - JSON pour l'analyse
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,  # Sortie JSON
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,  # Workers web multi-threads
    )

    logger.debug("Logging configuré", log_file=str(log_file), rotation=rotation_size)
