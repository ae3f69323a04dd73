"""
Fonctions utilitaires partagees dans le projet CineCache.

Ce module centralise les fonctions reutilisees a travers le codebase :
- bytes_human : formatage lisible d'une taille en octets
- mask_secret : masquage d'une cle API pour l'affichage
"""


def bytes_human(size: int) -> str:
    """
    Formate une taille en octets avec l'unite adaptee.

    Exemple : bytes_human(1536) -> "1.50 KB"
    """
    units = ("B", "KB", "MB", "GB", "TB")
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{value:.2f} {units[index]}"


def mask_secret(value: str | None) -> str:
    """Masque une clé API en ne montrant que les 4 derniers caractères."""
    if not value:
        return ""
    if len(value) <= 4:
        return "••••"
    return "••••" + value[-4:]
