"""Services metier : construction des requetes, selection, placement et workflow."""
