"""
Constantes globales pour CineMatch.

Ce module contient les constantes utilisees dans l'application:
- Extensions video reconnues par defaut
- Mots vides exclus des requetes (tags de resolution, groupes de release)
- Tokens d'un seul caractere conserves dans les requetes
"""

# Extensions video reconnues
DEFAULT_MEDIA_EXTENSIONS = (
    ".mp4",
    ".avi",
    ".mov",
    ".flv",
    ".wmv",
    ".mkv",
    ".m4v",
    ".mpg",
    ".webm",
)

# Mots vides (bruit des noms de release), tries
DEFAULT_STOP_WORDS = tuple(sorted({
    "1080p", "2hd", "720p", "ac", "ac3", "batv", "bd", "blueray", "bluray",
    "brrip", "cm8", "cmrg", "d3fil3r", "d3g", "dd5", "dl", "dsc", "dvdrip",
    "dvds", "dvdscr", "evo", "flawl3ss", "h264", "hc", "hdrip", "hdtv",
    "hevc", "hive", "hq", "ipt", "misc", "mtg", "proper", "rip", "srt",
    "tv", "tvnrg", "web", "x0r", "x264", "x265", "xvid",
}))

# Tokens d'un caractere qui gardent un sens dans un titre
VALID_SINGLE_CHAR_TOKENS = frozenset({
    "a", "i", "0", "1", "2", "3", "4", "5", "6", "7", "8", "9",
})

# Agent HTTP annonce au catalogue
USER_AGENT = "cinematch/0.1.0"
