"""
Tests unitaires pour MatchWorkflow.

Le moteur de selection est remplace par un mock ; le placement utilise le
vrai systeme de fichiers dans tmp_path.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from cinematch.adapters.file_system import FileSystemAdapter
from cinematch.core.entities.media import Episode, Movie
from cinematch.services.placement import PlacementResult, PlacementService
from cinematch.services.selector import Quit, Resolved, SelectionEngine, Skip
from cinematch.services.workflow import MatchWorkflow, WorkflowOptions
from tests.fixtures.console_doubles import RecordingDisplay, ScriptedReader

HEAT = Movie(id=949, name="Heat", date="1995-12-15")
EPISODE = Episode(
    id=62085,
    name="Seven Thirty-Seven",
    season_number=2,
    episode_number=1,
    show_name="Breaking Bad",
    show_date="2008-01-20",
)


@pytest.fixture
def dirs(tmp_path: Path) -> dict[str, Path]:
    paths = {name: tmp_path / name for name in ("in", "movies", "tv")}
    for path in paths.values():
        path.mkdir()
    return paths


@pytest.fixture
def engine() -> MagicMock:
    return MagicMock(spec=SelectionEngine)


def _media(directory: Path, name: str, content: bytes = b"video") -> Path:
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


def make_workflow(
    engine,
    dirs,
    display,
    lines=(),
    placement=None,
    **options,
) -> MatchWorkflow:
    fs = FileSystemAdapter()
    return MatchWorkflow(
        engine=engine,
        placement=placement or PlacementService(fs),
        file_system=fs,
        display=display,
        reader=ScriptedReader(lines),
        options=WorkflowOptions(
            in_dir=dirs["in"],
            movie_out_dir=dirs["movies"],
            tv_out_dir=dirs["tv"],
            **options,
        ),
    )


class TestMatchWorkflow:
    """Tests pour MatchWorkflow.run()."""

    def test_places_movie_and_episode_by_type(self, engine, dirs, display) -> None:
        movie = _media(dirs["in"], "Heat.1995.mkv")
        episode = _media(dirs["in"], "bb/Breaking.Bad.S02E01.mkv")
        engine.resolve.side_effect = [Resolved(HEAT), Resolved(EPISODE)]

        summary = make_workflow(engine, dirs, display).run([movie, episode])

        movie_out = dirs["movies"] / "Heat (1995)" / "Heat (1995).mkv"
        episode_out = dirs["tv"] / "Breaking Bad (2008)" / "Breaking Bad (2008) S02E01.mkv"
        assert summary.placed == [movie_out, episode_out]
        assert movie_out.exists()
        assert episode_out.exists()
        assert movie.exists()
        assert display.lines[-1] == "\nGoodbye!"

    def test_engine_receives_header_and_sibling_tokens(self, engine, dirs, display) -> None:
        first = _media(dirs["in"], "show/Show.Name.S01E01.mkv")
        second = _media(dirs["in"], "show/Show.Name.S01E02.mkv")
        engine.resolve.side_effect = [Skip(), Skip()]

        make_workflow(engine, dirs, display).run([first, second])

        path, common, info = engine.resolve.call_args_list[0].args
        assert path == first
        assert common == ["show", "name"]
        assert "1/2" in info
        assert "show/Show.Name.S01E01.mkv" in info

    def test_quit_stops_batch(self, engine, dirs, display) -> None:
        files = [_media(dirs["in"], "a.mkv"), _media(dirs["in"], "b.mkv")]
        engine.resolve.side_effect = [Quit()]

        summary = make_workflow(engine, dirs, display).run(files)

        assert summary.quit
        assert engine.resolve.call_count == 1
        assert display.lines[-1] == "\nGoodbye!"

    def test_skip_moves_on(self, engine, dirs, display) -> None:
        files = [_media(dirs["in"], "a.mkv"), _media(dirs["in"], "Heat.mkv")]
        engine.resolve.side_effect = [Skip(), Resolved(HEAT)]

        summary = make_workflow(engine, dirs, display).run(files)

        assert summary.skipped == [files[0]]
        assert len(summary.placed) == 1

    def test_dry_run_places_nothing(self, engine, dirs, display) -> None:
        movie = _media(dirs["in"], "Heat.mkv")
        engine.resolve.side_effect = [Resolved(HEAT)]

        summary = make_workflow(engine, dirs, display, dry_run=True).run([movie])

        assert len(summary.placed) == 1
        assert not summary.placed[0].exists()
        assert any(line.startswith("Copier ") for line in display.lines)

    def test_move_removes_source(self, engine, dirs, display) -> None:
        movie = _media(dirs["in"], "Heat.mkv")
        engine.resolve.side_effect = [Resolved(HEAT)]

        summary = make_workflow(engine, dirs, display, move=True).run([movie])

        assert summary.placed[0].exists()
        assert not movie.exists()
        assert any(line.startswith("Deplacer ") for line in display.lines)

    def test_duplicate_is_not_copied_again(self, engine, dirs, display) -> None:
        movie = _media(dirs["in"], "Heat.mkv", b"same")
        existing = _media(dirs["movies"], "Heat (1995)/Heat (1995).mkv", b"same")
        engine.resolve.side_effect = [Resolved(HEAT)]

        summary = make_workflow(engine, dirs, display).run([movie])

        assert summary.duplicates == [existing]
        assert summary.placed == []
        assert "meme contenu" in "\n".join(display.lines)

    def test_collision_declined(self, engine, dirs, display) -> None:
        movie = _media(dirs["in"], "Heat.mkv", b"new cut")
        existing = _media(dirs["movies"], "Heat (1995)/Heat (1995).mkv", b"old")
        engine.resolve.side_effect = [Resolved(HEAT)]

        summary = make_workflow(engine, dirs, display, lines=["n"]).run([movie])

        assert summary.skipped == [movie]
        assert existing.read_bytes() == b"old"
        assert display.prompts == ["Copier ? \\[yN] ➜ "]
        assert "contenu different" in display.text

    def test_collision_accepted_overwrites(self, engine, dirs, display) -> None:
        movie = _media(dirs["in"], "Heat.mkv", b"new cut")
        existing = _media(dirs["movies"], "Heat (1995)/Heat (1995).mkv", b"old")
        engine.resolve.side_effect = [Resolved(HEAT)]

        summary = make_workflow(engine, dirs, display, lines=["y"]).run([movie])

        assert summary.placed == [existing]
        assert existing.read_bytes() == b"new cut"

    def test_confirm_declined(self, engine, dirs, display) -> None:
        movie = _media(dirs["in"], "Heat.mkv")
        engine.resolve.side_effect = [Resolved(HEAT)]

        summary = make_workflow(engine, dirs, display, lines=[""], confirm=True).run([movie])

        assert summary.skipped == [movie]
        assert summary.placed == []

    def test_placement_failure_stops_batch(self, engine, dirs, display) -> None:
        files = [_media(dirs["in"], "Heat.mkv"), _media(dirs["in"], "Other.mkv")]
        engine.resolve.side_effect = [Resolved(HEAT), Resolved(HEAT)]
        placement = MagicMock(spec=PlacementService)
        placement.check_conflict.return_value = None
        placement.place.return_value = PlacementResult(success=False, error="Erreur de copie: disque plein")

        summary = make_workflow(engine, dirs, display, placement=placement).run(files)

        assert summary.failed == [files[0]]
        assert engine.resolve.call_count == 1
        assert "disque plein" in display.text
