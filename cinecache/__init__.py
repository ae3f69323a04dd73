"""
CineCache - Cache local des affiches et fonds d'ecran de films.

Ce package telecharge les images depuis le CDN TMDB (liste blanche d'hotes),
valide leur contenu par signature binaire et les stocke sous un nom derive
de l'URL source. Il gere aussi les affiches personnalisees envoyees par
les utilisateurs.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur)
- services/ : Couche application (cas d'utilisation, orchestration)
- adapters/ : Couche infrastructure (HTTP, systeme de fichiers, CLI)
- web/ : API FastAPI
"""

__version__ = "0.1.0"
