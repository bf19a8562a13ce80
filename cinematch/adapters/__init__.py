"""
Couche infrastructure (adaptateurs).

Implementations concretes des ports : client TMDB, systeme de fichiers,
affichage et saisie en console.
"""
