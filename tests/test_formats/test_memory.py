"""Tests for the in-memory host document."""

from type_harvest.formats.memory import InMemorySource
from type_harvest.formatting.ir import (
    FONT_ATTRIBUTES,
    RENDER_ATTRIBUTES,
    ListKind,
    TextBlock,
)


class TestInMemorySource:
    """Tests for InMemorySource."""

    def test_duplicate_blocks_keep_first(self):
        """Test that block ids are unique."""
        source = InMemorySource(
            [TextBlock(id="1", characters="a"), TextBlock(id="1", characters="b")]
        )

        assert [b.characters for b in source.selection()] == ["a"]

    def test_blocks_print_with_their_id(self):
        """Test a block prints as its fields rather than its bare text."""
        block = TextBlock(id="7:3", characters="Title")

        assert "id='7:3'" in str(block)
        assert str(block) == repr(block)

    def test_default_run_covers_block(self):
        """Test blocks without runs get one plain run."""
        source = InMemorySource([TextBlock(id="1", characters="hello")])

        runs = source.query_runs("1", RENDER_ATTRIBUTES)

        assert len(runs) == 1
        assert (runs[0].start, runs[0].end) == (0, 5)
        assert runs[0].is_bold is False

    def test_empty_block_has_no_runs(self):
        source = InMemorySource([TextBlock(id="1", characters="")])

        assert source.query_runs("1", RENDER_ATTRIBUTES) == []

    def test_unrequested_attributes_are_absent(self, run):
        """Test projection onto the requested attributes."""
        source = InMemorySource(
            [TextBlock(id="1", characters="abc")],
            {"1": [run(0, 3, weight=700, href="http://a.b", list_kind=ListKind.ORDERED)]},
        )

        font_run = source.query_runs("1", FONT_ATTRIBUTES)[0]

        assert font_run.is_bold
        assert font_run.family == "Inter"
        assert font_run.href is None
        assert font_run.list_kind is None

    def test_runs_merge_when_attributes_match(self, run):
        """Test neighbours identical on the requested attributes merge."""
        source = InMemorySource(
            [TextBlock(id="1", characters="abcdef")],
            {"1": [run(0, 3), run(3, 6, href="http://a.b")]},
        )

        assert len(source.query_runs("1", RENDER_ATTRIBUTES)) == 2

        merged = source.query_runs("1", FONT_ATTRIBUTES)
        assert [(r.start, r.end) for r in merged] == [(0, 6)]

    def test_runs_sorted_by_start(self, run):
        """Test runs come back in character order."""
        source = InMemorySource(
            [TextBlock(id="1", characters="abcd")],
            {"1": [run(2, 4, weight=700), run(0, 2)]},
        )

        runs = source.query_runs("1", RENDER_ATTRIBUTES)

        assert [r.start for r in runs] == [0, 2]

    def test_unknown_attributes_ignored(self, run):
        """Test unknown attribute names behave like absent ones."""
        source = InMemorySource(
            [TextBlock(id="1", characters="ab")], {"1": [run(0, 2, weight=700)]}
        )

        runs = source.query_runs("1", ["letter_spacing"])

        assert runs[0].is_bold is False

    def test_add_block(self, run):
        """Test adding blocks after construction."""
        source = InMemorySource()
        source.add_block(TextBlock(id="x", characters="hi"), [run(0, 2)])
        source.add_block(TextBlock(id="x", characters="ignored"))

        assert source.get_block("x").characters == "hi"
        assert len(source.selection()) == 1
