"""
Couche infrastructure.

Contient les services techniques partages :
- hash_service : Nommage des images (cle de cache, noms d'upload)
"""
