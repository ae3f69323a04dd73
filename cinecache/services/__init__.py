"""
Couche services applicatifs (cas d'utilisation).

Les services orchestrent la logique du domaine :
- image_cache : mise en cache, suppression et affiches personnalisees
- content_validator : detection du format par signature binaire
- maintenance : statistiques et purge de l'arborescence

Les services dependent des ports (interfaces) de core/, jamais des
implementations concretes de adapters/.
"""
