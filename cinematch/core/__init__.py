"""
Couche domaine (core).

Contient les entites metier et les ports (interfaces abstraites).
Cette couche n'a AUCUNE dependance vers l'infrastructure (adapters, frameworks).

Sous-packages :
- entities/ : Entites du catalogue (Movie, Show, Episode, Season)
- ports/ : Interfaces abstraites definissant les contrats pour les adaptateurs
"""
