"""
Tests unitaires pour les tokens communs aux fichiers voisins.
"""

from pathlib import Path

from cinematch.services.siblings import common_tokens, sorted_intersect


class TestSortedIntersect:
    """Tests pour sorted_intersect()."""

    def test_intersection(self) -> None:
        assert sorted_intersect(["a", "b", "c"], ["b", "c", "d"]) == ["b", "c"]

    def test_disjoint(self) -> None:
        assert sorted_intersect(["a"], ["b"]) == []

    def test_empty(self) -> None:
        assert sorted_intersect([], ["a"]) == []
        assert sorted_intersect(["a"], []) == []


class TestCommonTokens:
    """Tests pour common_tokens()."""

    def test_episodes_share_show_name(self, tmp_path: Path) -> None:
        """Les episodes d'un meme repertoire partagent le nom de la serie."""
        files = [
            tmp_path / "show" / "Show.Name.S01E01.Pilot.mkv",
            tmp_path / "show" / "Show.Name.S01E02.Second.mkv",
            tmp_path / "show" / "Show.Name.S01E03.Third.mkv",
        ]
        assert common_tokens(files[0], files) == ["show", "name"]

    def test_peers_in_other_directories_ignored(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "Show.S01E01.mkv"
        files = [target, tmp_path / "b" / "Other.S01E01.mkv"]
        assert common_tokens(target, files) == ["show", "s01e01"]

    def test_nested_directory_not_a_peer(self, tmp_path: Path) -> None:
        """Un fichier d'un sous-repertoire n'est pas un voisin."""
        target = tmp_path / "Show.S01E01.mkv"
        files = [target, tmp_path / "sub" / "Unrelated.mkv"]
        assert common_tokens(target, files) == ["show", "s01e01"]

    def test_no_common_token_gives_empty(self, tmp_path: Path) -> None:
        target = tmp_path / "Heat.mkv"
        files = [target, tmp_path / "Alien.mkv"]
        assert common_tokens(target, files) == []

    def test_result_keeps_target_order_and_duplicates(self, tmp_path: Path) -> None:
        """Le resultat suit l'ordre du nom du fichier, doublons compris."""
        target = tmp_path / "foo.bar.foo.x1.mkv"
        files = [target, tmp_path / "bar.foo.x2.mkv"]
        assert common_tokens(target, files) == ["foo", "bar", "foo"]

    def test_stop_words_ignored(self, tmp_path: Path) -> None:
        target = tmp_path / "Show.720p.S01E01.mkv"
        files = [target, tmp_path / "Show.720p.S01E02.mkv"]
        assert common_tokens(target, files, stop_words=["720p"]) == ["show"]

    def test_alone_in_directory(self, tmp_path: Path) -> None:
        """Sans voisin, tous les tokens du fichier sont communs."""
        target = tmp_path / "Heat.1995.mkv"
        assert common_tokens(target, [target]) == ["heat", "1995"]
