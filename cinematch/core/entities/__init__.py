"""
Catalog entities representing core domain concepts.

Exports:
- MediaRecord: Shared interface of selectable catalog records
- Movie: Movie metadata from TMDB
- Show: TV show metadata from TMDB
- Episode: Individual episode of a show
- Season: A show season with its episodes
"""

from cinematch.core.entities.media import Episode, MediaRecord, Movie, Season, Show

__all__ = [
    "MediaRecord",
    "Movie",
    "Show",
    "Episode",
    "Season",
]
