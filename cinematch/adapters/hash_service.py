"""
Service de calcul de hash XXHash pour la detection des doublons.

Deux niveaux de comparaison :
    - compute_file_hash : empreinte rapide par echantillons (debut, fin et
      taille du fichier), utilisee comme premier filtre
    - compute_full_hash : empreinte du contenu complet, lue par blocs, qui
      confirme qu'un fichier deja place est bien identique a la source

Deux fichiers peuvent partager debut, fin et taille tout en differant au
milieu : seule l'empreinte complete permet de conclure a un doublon.
"""

import os
from pathlib import Path

import xxhash

# Taille de l'echantillon : 1 Mo
SAMPLE_SIZE = 1024 * 1024

# Taille des blocs de lecture pour le hash complet : 4 Mo
CHUNK_SIZE = 4 * 1024 * 1024


def compute_file_hash(file_path: Path, sample_size: int = SAMPLE_SIZE) -> str:
    """
    Calcule un hash XXH3-64 par echantillonnage du fichier.

    L'algorithme hash le debut, la fin (si fichier assez grand) et la taille
    du fichier. Deux hash differents prouvent que les contenus different ;
    deux hash egaux doivent etre confirmes par compute_full_hash.

    Args :
        file_path : Chemin vers le fichier a hasher
        sample_size : Taille de chaque echantillon en octets (defaut 1 Mo)

    Retourne :
        Hash hexadecimal de 16 caracteres (xxh3_64)

    Raises :
        FileNotFoundError : Si le fichier n'existe pas
        PermissionError : Si le fichier n'est pas lisible
    """
    hasher = xxhash.xxh3_64()
    file_size = file_path.stat().st_size

    with open(file_path, "rb") as f:
        # Debut du fichier
        hasher.update(f.read(sample_size))

        # Fin du fichier, si elle ne recouvre pas le debut
        if file_size > 2 * sample_size:
            f.seek(-sample_size, os.SEEK_END)
            hasher.update(f.read(sample_size))

        hasher.update(str(file_size).encode())

    return hasher.hexdigest()


def compute_full_hash(file_path: Path, chunk_size: int = CHUNK_SIZE) -> str:
    """
    Calcule un hash XXH3-128 sur l'integralite du fichier, lu par blocs.

    Args :
        file_path : Chemin vers le fichier a hasher
        chunk_size : Taille des blocs de lecture en octets (defaut 4 Mo)

    Retourne :
        Hash hexadecimal de 32 caracteres (xxh3_128)

    Raises :
        FileNotFoundError : Si le fichier n'existe pas
        PermissionError : Si le fichier n'est pas lisible
    """
    hasher = xxhash.xxh3_128()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            hasher.update(chunk)
    return hasher.hexdigest()
