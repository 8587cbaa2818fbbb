"""Tests for the context item model and URI helpers."""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from mentionkit.context.types import (
    ContextItemFile,
    ContextItemOpenCtx,
    ContextItemSource,
    ContextItemSymbol,
    ContextItemWithContent,
    Position,
    Range,
)
from mentionkit.context.uri import file_uri, split_remote_path, uri_fs_path, uri_path
from mentionkit.search.remote import remote_uri


@dataclass
class NativePosition:
    line: int
    character: int


@dataclass
class NativeRange:
    start: NativePosition
    end: NativePosition


class TestRange:
    def test_from_native_passes_none_and_ranges_through(self) -> None:
        r = Range.lines(1, 3)
        assert Range.from_native(None) is None
        assert Range.from_native(r) is r

    def test_from_native_accepts_editor_objects(self) -> None:
        native = NativeRange(NativePosition(2, 4), NativePosition(5, 0))
        assert Range.from_native(native) == Range(Position(2, 4), Position(5, 0))

    def test_from_native_accepts_mappings_and_pairs(self) -> None:
        expected = Range(Position(1, 2), Position(3, 4))
        mapping = {"start": {"line": 1, "character": 2}, "end": {"line": 3, "character": 4}}
        assert Range.from_native(mapping) == expected
        assert Range.from_native(((1, 2), (3, 4))) == expected

    def test_from_native_rejects_unknown_shapes(self) -> None:
        with pytest.raises(TypeError):
            Range.from_native("1-3")

    @pytest.mark.parametrize(
        "value",
        [
            {"start": {"line": 1}},
            {"start": {"character": 0}, "end": {"line": 2}},
            {"start": {"line": "one"}, "end": {"line": 2}},
            ((), (2, 0)),
            NativeRange(object(), NativePosition(1, 0)),
        ],
    )
    def test_from_native_malformed_positions_raise_type_error(self, value) -> None:
        with pytest.raises(TypeError):
            Range.from_native(value)

    def test_contains_lines_compares_lines_only(self) -> None:
        parent = Range(Position(0, 10), Position(10, 0))
        assert parent.contains_lines(Range(Position(5, 0), Position(9, 99)))
        assert parent.contains_lines(Range(Position(0, 0), Position(10, 5)))
        assert not Range.lines(6, 8).contains_lines(Range.lines(5, 9))


class TestContextItems:
    def test_sources(self) -> None:
        assert [source.value for source in ContextItemSource] == [
            "user",
            "editor",
            "search",
            "initial",
            "unified",
            "selection",
            "terminal",
            "history",
            "uri",
        ]

    def test_variants_carry_their_type_tag(self) -> None:
        assert ContextItemFile(uri="file:///a.py").type == "file"
        assert ContextItemSymbol(uri="file:///a.py", symbol_name="f", kind="function").type == "symbol"
        assert ContextItemOpenCtx(uri="https://x", provider_uri="p").type == "openctx"

    def test_items_are_frozen(self) -> None:
        item = ContextItemFile(uri="file:///a.py")
        with pytest.raises(FrozenInstanceError):
            item.size = 3  # type: ignore[misc]

    def test_defaults(self) -> None:
        item = ContextItemFile(uri="file:///a.py")
        assert item.source is ContextItemSource.USER
        assert item.is_ignored is False
        assert item.size is None
        assert item.range is None

    def test_to_json_uses_camel_case(self) -> None:
        item = ContextItemSymbol(
            uri="file:///a.py",
            symbol_name="parse",
            kind="class",
            range=Range.lines(1, 2),
            remote_repository_name="github.com/o/r",
        )
        data = item.to_json()
        assert data["type"] == "symbol"
        assert data["symbolName"] == "parse"
        assert data["remoteRepositoryName"] == "github.com/o/r"
        assert data["range"]["start"] == {"line": 1, "character": 0}

    def test_with_content_exposes_item_fields(self) -> None:
        item = ContextItemFile(uri="file:///a.py", range=Range.lines(0, 1))
        resolved = ContextItemWithContent(item=item, content="x = 1\n", size=3)
        assert resolved.type == "file"
        assert resolved.uri == "file:///a.py"
        assert resolved.range == Range.lines(0, 1)
        assert resolved.to_json()["content"] == "x = 1\n"
        assert resolved.to_json()["size"] == 3


class TestUris:
    def test_file_uri_quotes_and_roots_paths(self) -> None:
        assert file_uri("/home/me/a b.py") == "file:///home/me/a%20b.py"
        assert file_uri("relative/x.py") == "file:///relative/x.py"

    def test_fs_path_round_trip(self) -> None:
        assert uri_fs_path(file_uri("/home/me/a b.py")) == "/home/me/a b.py"

    def test_fs_path_strips_slash_before_drive_letter(self) -> None:
        assert uri_fs_path("file:///C:/src/app.py") == "C:/src/app.py"

    def test_remote_uri_path_prefixed_with_repository(self) -> None:
        uri = remote_uri("github.com/o/r", "/src/a.py")
        assert uri_path(uri) == "/github.com/o/r/src/a.py"

    @pytest.mark.parametrize("path", ["/src/a.py", "src/a.py"])
    def test_split_remote_path_undoes_remote_uri(self, path: str) -> None:
        repo = "github.com/o/r"
        assert split_remote_path(remote_uri(repo, path), repo) == path
