"""Tests for LogDocument and Position."""

import pytest

from ds_log_viewer.models.document import Line, LogDocument, Position


class TestFromText:
    """Tests for splitting raw text."""

    @pytest.mark.parametrize("separator", ["\n", "\r\n", "\r"])
    def test_line_breaks(self, separator: str) -> None:
        """Test every supported line ending."""
        document = LogDocument.from_text(separator.join(["a", "b", "c"]))

        assert document.line_count == 3
        assert document.line_text(2) == "b"

    def test_trailing_newline_adds_empty_line(self) -> None:
        """Test that a trailing break yields a trailing empty line."""
        document = LogDocument.from_text("a\nb\n")

        assert document.line_count == 3
        assert document.line_text(3) == ""

    def test_empty_text(self) -> None:
        """Test that empty text is one empty line."""
        document = LogDocument.from_text("")

        assert document.line_count == 1
        assert document.line_text(1) == ""


class TestAccess:
    """Tests for line access."""

    def test_line_text_out_of_range(self) -> None:
        """Test that line numbers are 1-based and bounded."""
        document = LogDocument(["a", "b"])

        with pytest.raises(IndexError):
            document.line_text(0)
        with pytest.raises(IndexError):
            document.line_text(3)

    def test_lines_iterates_with_numbers(self) -> None:
        """Test iteration yields numbered lines."""
        document = LogDocument(["a", "bc"])

        assert list(document.lines()) == [Line(1, "a"), Line(2, "bc")]
        assert Line(2, "bc").max_column == 3

    def test_text_between(self) -> None:
        """Test joining an inclusive line range."""
        document = LogDocument(["a", "b", "c", "d"])

        assert document.text_between(2, 3) == "b\nc"
        assert document.text_between(4, 4) == "d"
        assert document.text_between(3, 2) == ""

    def test_clamp(self) -> None:
        """Test clamping positions into the document."""
        document = LogDocument(["abc", "de"])

        assert document.clamp(Position(0, 0)) == Position(1, 1)
        assert document.clamp(Position(9, 9)) == Position(2, 3)
        assert document.clamp(Position(1, 4)) == Position(1, 4)

    def test_equality(self) -> None:
        """Test documents compare by content."""
        assert LogDocument(["a"]) == LogDocument.from_text("a")
        assert LogDocument(["a"]) != LogDocument(["b"])
        assert len(LogDocument(["a", "b"])) == 2


class TestSearch:
    """Tests for the non-wrapping search primitive."""

    @pytest.fixture
    def document(self) -> LogDocument:
        """Return a document with repeated markers."""
        return LogDocument(["xx AB AB", "none", "AB"])

    def test_find_next_same_line(self, document: LogDocument) -> None:
        """Test that a match strictly right of the cursor is found."""
        assert document.find_next("AB", Position(1, 1)) == Position(1, 4)
        assert document.find_next("AB", Position(1, 4)) == Position(1, 7)

    def test_find_next_later_line(self, document: LogDocument) -> None:
        """Test that the search continues on later lines."""
        assert document.find_next("AB", Position(1, 7)) == Position(3, 1)
        assert document.find_next("AB", Position(3, 1)) is None

    def test_find_previous(self, document: LogDocument) -> None:
        """Test searching strictly before the cursor."""
        assert document.find_previous("AB", Position(3, 1)) == Position(1, 7)
        assert document.find_previous("AB", Position(1, 7)) == Position(1, 4)
        assert document.find_previous("AB", Position(1, 4)) is None

    def test_search_is_case_sensitive(self, document: LogDocument) -> None:
        """Test that case must match exactly."""
        assert document.find_next("ab", Position(1, 1)) is None

    def test_empty_needle(self, document: LogDocument) -> None:
        """Test that an empty needle never matches."""
        assert document.find_next("", Position(1, 1)) is None
        assert document.find_previous("", Position(3, 1)) is None


class TestPosition:
    """Tests for Position ordering."""

    def test_ordering(self) -> None:
        """Test positions order by line then column."""
        assert Position(1, 9) < Position(2, 1)
        assert Position(2, 1) < Position(2, 2)
        assert Position(3) == Position(3, 1)
