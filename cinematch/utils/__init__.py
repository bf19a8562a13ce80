"""
Utilitaires et constantes pour CineMatch.

Ce module contient les constantes partagees.
"""

from cinematch.utils.constants import (
    DEFAULT_MEDIA_EXTENSIONS,
    DEFAULT_STOP_WORDS,
    VALID_SINGLE_CHAR_TOKENS,
)

__all__ = [
    "DEFAULT_MEDIA_EXTENSIONS",
    "DEFAULT_STOP_WORDS",
    "VALID_SINGLE_CHAR_TOKENS",
]
