"""Tests for local file ranking."""

from mentionkit.ranking.files import low_scoring_penalty, path_segments, rank_files
from mentionkit.ranking.fuzzy import score

ROOT = "file:///repo/"


def display(uri: str) -> str:
    return uri.removeprefix(ROOT)


def uris(*paths: str) -> list[str]:
    return [ROOT + path for path in paths]


def keys(ranked) -> list[str]:
    return [candidate.key for candidate in ranked]


class TestRankFiles:
    def test_blank_query_returns_nothing(self) -> None:
        files = uris("src/app.py")
        assert rank_files("", files, 10, display_path=display) == []
        assert rank_files("   ", files, 10, display_path=display) == []

    def test_results_capped_and_ordered(self) -> None:
        files = uris(*(f"src/module{i}.py" for i in range(30)))
        ranked = rank_files("mod", files, 10, display_path=display)

        assert len(ranked) == 10
        scores = [c.score for c in ranked]
        assert scores == sorted(scores, reverse=True)
        # Shorter paths score better; ties in natural order
        assert keys(ranked) == [f"src/module{i}.py" for i in range(10)]

    def test_ties_break_in_natural_order(self) -> None:
        ranked = rank_files("x", uris("a10/x.py", "a9b/x.py"), 10, display_path=display)

        assert ranked[0].score == ranked[1].score
        assert keys(ranked) == ["a9b/x.py", "a10/x.py"]

    def test_identical_input_gives_identical_output(self) -> None:
        files = uris("b/util.py", "a/util.py", "a/utils.py", "c/Util.py")
        first = rank_files("util", files, 10, display_path=display)
        second = rank_files("util", list(reversed(files)), 10, display_path=display)
        assert first == second

    def test_bin_directory_ranks_below_equivalent_path(self) -> None:
        ranked = rank_files("tool", uris("bin/tool.js", "src/tool.js"), 10, display_path=display)

        assert keys(ranked) == ["src/tool.js", "bin/tool.js"]
        assert ranked[1].score == ranked[0].score - 100_000

    def test_query_naming_bin_is_not_penalized(self) -> None:
        ranked = rank_files("bin", uris("bin/tool.js"), 10, display_path=display)

        assert len(ranked) == 1
        assert ranked[0].score == score("bin", "bin/tool.js")

    def test_threshold_drops_weak_matches(self) -> None:
        files = uris("ab.py", "a" + "x" * 40 + "b.py")
        ranked = rank_files("ab", files, 10, display_path=display, threshold=-10)
        assert keys(ranked) == ["ab.py"]

    def test_windows_query_separators(self) -> None:
        files = [ROOT + "src/app.py"]

        def windows_display(uri: str) -> str:
            return display(uri).replace("/", "\\")

        assert rank_files("src/app", files, 10, display_path=windows_display) == []
        ranked = rank_files("src/app", files, 10, display_path=windows_display, windows=True)
        assert keys(ranked) == ["src\\app.py"]

    def test_multi_word_query_needs_every_word(self) -> None:
        files = uris("src/context/types.py", "src/other.py", "src/context/uri.py")

        ranked = rank_files("ctx types", files, 10, display_path=display)

        assert keys(ranked) == ["src/context/types.py"]
        assert ranked[0].score == score("ctx", "src/context/types.py") + score(
            "types", "src/context/types.py"
        )

    def test_multi_word_query_penalty_checks_whole_query(self) -> None:
        ranked = rank_files("tool bin", uris("bin/tool.js"), 10, display_path=display)

        assert ranked[0].score == score("tool bin", "bin/tool.js")

    def test_returns_uris(self) -> None:
        ranked = rank_files("app", uris("src/app.py"), 10, display_path=display)
        assert ranked[0].obj == "file:///repo/src/app.py"


class TestLowScoringPenalty:
    def test_segments_split_on_both_separators(self) -> None:
        assert path_segments("a/b\\c//d") == ["a", "b", "c", "d"]

    def test_penalty_only_for_whole_segments(self) -> None:
        assert low_scoring_penalty("cabinet/x.py", "x", ("bin",), 100) == 0.0
        assert low_scoring_penalty("obj/bin/x.dll", "x", ("bin",), 100) == 100
