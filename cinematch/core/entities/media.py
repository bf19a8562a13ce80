"""
Catalog entities.

Immutable records for movies, TV shows, seasons and episodes as returned
by the remote catalog (TMDB). Movie, Show and Episode share the
MediaRecord capability set so the selection engine and the placement
stage never need to switch on concrete types.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


def _year_of(date: str) -> str:
    """Return the year part of an ISO date ("" when unknown)."""
    return date.split("-")[0] if date else ""


def _safe(name: str) -> str:
    """Replace path separators so a title stays a single path segment."""
    return name.replace("/", "-").replace("\\", "-").strip()


def _folder(name: str, date: str) -> str:
    year = _year_of(date)
    return f"{_safe(name)} ({year})" if year else _safe(name)


class MediaRecord(ABC):
    """
    Common interface of every catalog record.

    Attributes exposed by all records:
        id: Catalog identifier
        name: Display name
        date: Release or air date (ISO "YYYY-MM-DD", may be empty)
        overview: Synopsis
        media_type: Type tag ("movie", "tv", "tv_episode")
    """

    id: int
    name: str
    date: str
    overview: str

    @property
    @abstractmethod
    def media_type(self) -> str:
        """Type tag of the record."""
        ...

    @abstractmethod
    def destination_path(self) -> str:
        """Relative destination path (without extension) for the record."""
        ...


@dataclass(frozen=True)
class Movie(MediaRecord):
    """
    Movie from the catalog.

    Attributes:
        id: TMDB movie id
        name: Localized title
        date: Release date
        overview: Plot summary
        original_title: Original language title
    """

    id: int
    name: str
    date: str = ""
    overview: str = ""
    original_title: Optional[str] = None

    @property
    def media_type(self) -> str:
        return "movie"

    def destination_path(self) -> str:
        """Path "Title (Year)/Title (Year)"."""
        folder = _folder(self.name, self.date)
        return f"{folder}/{folder}"


@dataclass(frozen=True)
class Show(MediaRecord):
    """
    TV show from the catalog.

    Attributes:
        id: TMDB tv id
        name: Show name
        date: First air date
        overview: Show description
        original_name: Original language name
    """

    id: int
    name: str
    date: str = ""
    overview: str = ""
    original_name: Optional[str] = None

    @property
    def media_type(self) -> str:
        return "tv"

    def destination_path(self) -> str:
        """The show folder, "Name (Year)"."""
        return _folder(self.name, self.date)


@dataclass(frozen=True)
class Episode(MediaRecord):
    """
    Individual episode of a TV show.

    The show name and first air date are copied onto the episode when the
    season is fetched, so the destination path can be derived without the
    parent show.

    Attributes:
        id: TMDB episode id
        name: Episode title
        date: Episode air date
        overview: Episode description
        season_number: Season number
        episode_number: Episode number within the season
        show_name: Parent show name
        show_date: Parent show first air date
        season_name: Season display name
    """

    id: int
    name: str
    date: str = ""
    overview: str = ""
    season_number: int = 0
    episode_number: int = 0
    show_name: str = ""
    show_date: str = ""
    season_name: str = ""

    @property
    def media_type(self) -> str:
        return "tv_episode"

    def destination_path(self) -> str:
        """Path "Show (Year)/Show (Year) SxxEyy"."""
        folder = _folder(self.show_name, self.show_date)
        return (
            f"{folder}/{folder} "
            f"S{self.season_number:02d}E{self.episode_number:02d}"
        )


@dataclass(frozen=True)
class Season:
    """
    One season of a TV show with its ordered episode list.

    Attributes:
        id: TMDB season id
        name: Season display name
        date: Season air date
        season_number: Season number
        show_id: Parent show id
        show_name: Parent show name
        episodes: Episodes in catalog order
    """

    id: int
    name: str = ""
    date: str = ""
    season_number: int = 0
    show_id: int = 0
    show_name: str = ""
    episodes: tuple[Episode, ...] = ()
