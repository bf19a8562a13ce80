"""
Construction des requetes de recherche a partir des noms de fichiers.

Decoupe un texte en tokens alphanumeriques minuscules, retire les mots vides
et les caracteres isoles sans signification, puis derive la requete d'un
fichier video a partir de son nom (ou de son chemin relatif si le nom seul
ne contient que des indices saison/episode/annee).
"""

import re
from pathlib import Path
from typing import Iterable

from cinematch.services.hints import extract_hints
from cinematch.utils.constants import VALID_SINGLE_CHAR_TOKENS

# Toute suite de caracteres non alphanumeriques separe deux tokens
_SEPARATOR_PATTERN = re.compile(r"[^a-zA-Z0-9]+")


def is_query_token(token: str, stop_words: Iterable[str]) -> bool:
    """
    Indique si un token merite de figurer dans une requete.

    Args:
        token: Token en minuscules
        stop_words: Mots vides a exclure

    Returns:
        False pour un mot vide ou un caractere isole hors liste blanche.
    """
    if token in stop_words:
        return False
    return len(token) > 1 or token in VALID_SINGLE_CHAR_TOKENS


def query_tokens(text: str, stop_words: Iterable[str] = ()) -> list[str]:
    """
    Decoupe un texte en tokens de requete.

    L'ordre d'apparition est conserve et les doublons ne sont pas retires.

    Args:
        text: Texte brut (nom de fichier, saisie utilisateur)
        stop_words: Mots vides a exclure

    Returns:
        Liste ordonnee des tokens retenus (vide pour un texte vide).
    """
    stop_words = frozenset(stop_words)
    cleaned = _SEPARATOR_PATTERN.sub(" ", text).lower()
    return [word for word in cleaned.split() if is_query_token(word, stop_words)]


def build_query(text: str, stop_words: Iterable[str] = ()) -> str:
    """Construit la requete textuelle (tokens joints par des espaces)."""
    return " ".join(query_tokens(text, stop_words))


def sort_uniq(words: Iterable[str]) -> list[str]:
    """Trie et dedoublonne une liste de mots."""
    return sorted(set(words))


def split_sort_uniq(text: str) -> list[str]:
    """Decoupe un texte en mots minuscules tries et dedoublonnes."""
    return sort_uniq(_SEPARATOR_PATTERN.sub(" ", text).lower().split())


def strip_extension(media_path: Path) -> Path:
    """Retire l'extension (derniere seulement) d'un chemin."""
    return media_path.with_suffix("") if media_path.suffix else media_path


def derive_query(
    media_path: Path,
    in_dir: Path,
    stop_words: Iterable[str] = (),
) -> str:
    """
    Derive la requete initiale d'un fichier video.

    La requete est construite depuis le nom de fichier sans extension. Si,
    une fois les indices saison/episode/annee retires, il ne reste rien
    (ex: "S01E02.mkv"), la requete est reconstruite depuis le chemin relatif
    au repertoire d'entree, qui contient alors le nom de la serie.

    Args:
        media_path: Chemin du fichier video
        in_dir: Repertoire d'entree scanne
        stop_words: Mots vides a exclure

    Returns:
        Requete brute (indices encore inclus).
    """
    stop_words = frozenset(stop_words)
    name = strip_extension(Path(media_path))
    query = build_query(name.name, stop_words)

    if not extract_hints(query).query:
        try:
            relative_name = name.relative_to(in_dir)
        except ValueError:
            relative_name = name
        query = build_query(str(relative_name), stop_words)

    return query
