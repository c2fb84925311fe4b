"""Tests for topwords.analysis.source module."""

import io
from pathlib import Path

import pytest

from topwords.analysis.errors import InputReadError
from topwords.analysis.source import describe_source, iter_lines


class TestDescribeSource:
    """Tests for describe_source function."""

    def test_path_string(self) -> None:
        """Test that a path string is shown as-is."""
        assert describe_source("data/book.txt") == "data/book.txt"

    def test_path_object(self) -> None:
        """Test that a Path is shown as its string form."""
        assert describe_source(Path("data/book.txt")) == str(Path("data/book.txt"))

    def test_named_stream(self, tmp_path: Path) -> None:
        """Test that an open file is shown by its name."""
        path = tmp_path / "a.txt"
        path.write_text("x")
        with open(path) as f:
            assert describe_source(f) == str(path)

    def test_anonymous_iterable(self) -> None:
        """Test that unnamed iterables are shown by type."""
        assert describe_source(["a"]) == "<list>"
        assert describe_source(io.StringIO("a")) == "<StringIO>"


class TestIterLines:
    """Tests for iter_lines function."""

    def test_list_of_lines(self) -> None:
        """Test that an iterable of strings is yielded in order."""
        assert list(iter_lines(["one\n", "two\r\n", "three"])) == ["one", "two", "three"]

    def test_text_stream(self) -> None:
        """Test that a text stream is split into lines."""
        assert list(iter_lines(io.StringIO("a b\nc\n"))) == ["a b", "c"]

    def test_file_path_string_and_object(self, tmp_path: Path) -> None:
        """Test that both str and Path sources are opened and read."""
        path = tmp_path / "text.txt"
        path.write_text("first line\nsecond line\n")

        assert list(iter_lines(path)) == ["first line", "second line"]
        assert list(iter_lines(str(path))) == ["first line", "second line"]

    def test_keeps_inner_whitespace(self, tmp_path: Path) -> None:
        """Test that only the line terminator is stripped."""
        path = tmp_path / "text.txt"
        path.write_text("  padded  \n")

        assert list(iter_lines(path)) == ["  padded  "]

    def test_missing_file_raises_on_iteration(self, tmp_path: Path) -> None:
        """Test that a missing file raises InputReadError when read."""
        lines = iter_lines(tmp_path / "missing.txt")

        with pytest.raises(InputReadError) as exc_info:
            next(lines)

        assert exc_info.value.lines_read == 0
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_directory_raises(self, tmp_path: Path) -> None:
        """Test that a directory cannot be read as a source."""
        with pytest.raises(InputReadError):
            list(iter_lines(tmp_path))

    def test_stream_failure_reports_lines_read(self) -> None:
        """Test that a mid-stream failure carries the number of lines consumed."""

        def broken():
            yield "one"
            yield "two"
            raise OSError("connection reset")

        with pytest.raises(InputReadError) as exc_info:
            list(iter_lines(broken()))

        assert exc_info.value.lines_read == 2
        assert "connection reset" in str(exc_info.value)

    def test_url_string_is_read_as_local_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a URL-looking string is treated as a file path, never fetched."""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(InputReadError) as exc_info:
            list(iter_lines("https://example.com/book.txt"))

        assert exc_info.value.source == "https://example.com/book.txt"
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_unknown_encoding_raises(self, tmp_path: Path) -> None:
        """Test that an unknown codec name surfaces as InputReadError."""
        path = tmp_path / "text.txt"
        path.write_text("words\n")

        with pytest.raises(InputReadError) as exc_info:
            list(iter_lines(path, encoding="no-such-codec"))

        assert isinstance(exc_info.value.__cause__, LookupError)

    def test_closed_stream_raises(self) -> None:
        """Test that reading a closed stream surfaces as InputReadError."""
        stream = io.StringIO("a\nb\n")
        stream.close()

        with pytest.raises(InputReadError) as exc_info:
            list(iter_lines(stream))

        assert exc_info.value.lines_read == 0
        assert isinstance(exc_info.value.__cause__, ValueError)
