"""Tests for TXT handler."""

from pathlib import Path

from type_harvest.formats.txt_handler import TXTHandler, parse_emphasis, tokenize_emphasis
from type_harvest.formatting.ir import FONT_ATTRIBUTES, RENDER_ATTRIBUTES


class TestTokenizeEmphasis:
    """Tests for emphasis markup tokenization."""

    def test_plain_text(self):
        """Test a line without markup."""
        assert tokenize_emphasis("Hello, world!") == [("Hello, world!", "Regular")]

    def test_bold_and_italic(self):
        """Test bold and italic spans."""
        assert tokenize_emphasis("This is **bold** and *it*") == [
            ("This is ", "Regular"),
            ("bold", "Bold"),
            (" and ", "Regular"),
            ("it", "Italic"),
        ]

    def test_bold_italic(self):
        """Test triple asterisks."""
        assert tokenize_emphasis("***both***") == [("both", "Bold Italic")]

    def test_bullet_marker_is_literal(self):
        """Test that "* " is not an emphasis opener."""
        assert tokenize_emphasis("* item") == [("* item", "Regular")]

    def test_unclosed_marker_is_literal(self):
        """Test an asterisk without a closing partner."""
        assert tokenize_emphasis("5 *stars") == [("5 *stars", "Regular")]


class TestParseEmphasis:
    """Tests for building characters and runs."""

    def test_markup_removed_from_characters(self):
        """Test the character buffer has no markup."""
        characters, runs = parse_emphasis("a **b**\n*c*")

        assert characters == "a b\nc"
        assert [(r.start, r.end) for r in runs] == [(0, 2), (2, 3), (3, 4), (4, 5)]
        assert runs[1].is_bold
        assert runs[3].is_italic

    def test_runs_cover_every_character(self):
        """Test runs are contiguous and cover the buffer."""
        characters, runs = parse_emphasis("x\n\n**y** z\n")

        assert runs[0].start == 0
        assert runs[-1].end == len(characters)
        for previous, current in zip(runs, runs[1:]):
            assert previous.end == current.start


class TestTXTHandler:
    """Tests for the TXT format handler."""

    def test_supported_extensions(self):
        """Test that handler supports .txt extension."""
        handler = TXTHandler()
        assert ".txt" in handler.supported_extensions

    def test_read_single_block(self, tmp_text_file: Path):
        """Test the file becomes one block named after the file."""
        source = TXTHandler().read(tmp_text_file)
        blocks = source.selection()

        assert len(blocks) == 1
        assert blocks[0].id == "notes"
        assert blocks[0].characters == "Hello world\n- one\n- two"

    def test_windows_line_endings(self, tmp_path: Path):
        """Test CRLF files split into the same paragraphs."""
        path = tmp_path / "crlf.txt"
        path.write_bytes(b"one\r\ntwo")

        block = TXTHandler().read(path).selection()[0]

        assert block.characters == "one\ntwo"

    def test_font_query_merges_runs(self, tmp_text_file: Path):
        """Test runs covering the whole block for both attribute sets."""
        source = TXTHandler().read(tmp_text_file)
        characters = source.selection()[0].characters

        for attributes in (RENDER_ATTRIBUTES, FONT_ATTRIBUTES):
            runs = source.query_runs("notes", attributes)
            assert runs[0].start == 0
            assert runs[-1].end == len(characters)
