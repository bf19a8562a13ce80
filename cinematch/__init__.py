"""
CineMatch - Rapprochement interactif de fichiers video avec le catalogue TMDB.

Ce package derive des requetes de recherche depuis les noms de fichiers,
guide l'utilisateur dans le choix du film ou de l'episode correspondant,
puis range les fichiers sous une arborescence normalisee.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports)
- services/ : Couche application (requetes, selection, placement)
- adapters/ : Couche infrastructure (CLI, client API, systeme de fichiers)
"""

__version__ = "0.1.0"
