"""Adaptateurs CLI : affichage Rich, saisie et commandes Typer."""
