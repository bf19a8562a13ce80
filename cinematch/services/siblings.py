"""
Tokens communs a un fichier et a ses voisins de repertoire.

Quand les episodes d'une serie sont ranges dans un meme repertoire, les
tokens partages par tous les noms de fichiers donnent generalement le titre
de la serie, debarrasse du bruit propre a chaque episode.
"""

from bisect import bisect_left
from pathlib import Path
from typing import Iterable, Sequence

from cinematch.services.query_builder import query_tokens, sort_uniq, strip_extension


def sorted_intersect(a: Sequence[str], b: Sequence[str]) -> list[str]:
    """
    Intersection de deux listes triees, en O(n log n).

    Args:
        a: Liste triee
        b: Liste triee

    Returns:
        Elements de a presents dans b, dans l'ordre de a.
    """
    result = []
    for element in a:
        idx = bisect_left(b, element)
        if idx < len(b) and b[idx] == element:
            result.append(element)
    return result


def _base_tokens(path: Path, stop_words: frozenset[str]) -> list[str]:
    return query_tokens(strip_extension(path).name, stop_words)


def common_tokens(
    target: Path,
    peers: Iterable[Path],
    stop_words: Iterable[str] = (),
) -> list[str]:
    """
    Tokens partages par un fichier et tous les fichiers de son repertoire.

    Args:
        target: Fichier video de reference
        peers: Liste des fichiers du lot (seuls ceux du meme repertoire comptent)
        stop_words: Mots vides a exclure

    Returns:
        Intersection des tokens, dans l'ordre du nom de target ; liste vide
        des qu'un voisin ne partage aucun token.
    """
    stop_words = frozenset(stop_words)
    target = Path(target).absolute()
    directory = target.parent

    original_tokens = _base_tokens(target, stop_words)
    common = sort_uniq(original_tokens)

    for peer in peers:
        peer = Path(peer).absolute()
        if peer.parent != directory:
            continue
        common = sorted_intersect(common, sort_uniq(_base_tokens(peer, stop_words)))
        if not common:
            return []

    # Reprojection sur l'ordre d'origine
    kept = set(common)
    return [token for token in original_tokens if token in kept]
