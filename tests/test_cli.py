"""Tests for the CLI interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from type_harvest import config
from type_harvest.cli import app, build_options, group_title
from type_harvest.core.extractor import EMPTY_SELECTION_MESSAGE
from type_harvest.formatting.ir import FontGroup, RenderedCard


runner = CliRunner()


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop cached settings so each test reads the environment again."""
    monkeypatch.setattr(config, "_settings", None)


class TestBuildOptions:
    """Tests for merging settings with command-line flags."""

    def test_defaults_from_settings(self):
        """Test unset flags keep the configured defaults."""
        options = build_options(bold=None, lists=None)

        assert options["bold"] == "span"
        assert options["lists"] == "native"

    def test_flags_override_settings(self, monkeypatch: pytest.MonkeyPatch):
        """Test an explicit flag wins over the environment."""
        monkeypatch.setenv("TYPE_HARVEST_BOLD", "none")

        assert build_options()["bold"] == "none"
        assert build_options(bold="strong")["bold"] == "strong"

    def test_false_flag_is_kept(self):
        """Test --no-italic is not mistaken for an unset flag."""
        assert build_options(italic=False)["italic"] is False


class TestGroupTitle:
    """Tests for font group panel titles."""

    def test_singular_and_variable(self):
        card = RenderedCard("1:1", "x", "Inter", "Variable", True)
        group = FontGroup("Inter", True, [card])

        assert group_title(group) == "Inter (variable) - 1 block"

    def test_plural(self):
        cards = [RenderedCard(str(i), "x", "Roboto", "Regular", False) for i in range(2)]

        assert group_title(FontGroup("Roboto", False, cards)) == "Roboto - 2 blocks"


class TestCLI:
    """Tests for CLI commands."""

    def test_version_flag(self):
        """Test --version flag."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "Type Harvest" in result.stdout

    def test_help_flag(self):
        """Test --help flag."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "--bold" in result.stdout

    def test_missing_file_error(self, tmp_path: Path):
        """Test error when file doesn't exist."""
        fake_path = tmp_path / "nonexistent.json"
        result = runner.invoke(app, [str(fake_path)])

        assert result.exit_code != 0

    def test_unsupported_format(self, tmp_path: Path):
        """Test unsupported file formats are reported as errors."""
        unsupported = tmp_path / "file.xyz"
        unsupported.write_text("content")

        result = runner.invoke(app, [str(unsupported)])

        assert result.exit_code == 1
        assert "Unsupported format" in result.stdout

    def test_unreadable_export(self, tmp_path: Path):
        """Test malformed JSON is reported as an error."""
        broken = tmp_path / "broken.json"
        broken.write_text("{", encoding="utf-8")

        result = runner.invoke(app, [str(broken)])

        assert result.exit_code == 1
        assert "Could not read broken.json" in result.stdout

    def test_flat_output(self, export_file: Path):
        """Test --flat prints the fragments in reading order."""
        result = runner.invoke(app, [str(export_file), "--flat"])

        assert result.exit_code == 0
        lines = [line for line in result.stdout.splitlines() if line.startswith("<")]
        assert lines[:2] == [
            '<span class="bold">Welcome</span>',
            "<ol><li>One</li><li>Two</li></ol>",
        ]
        assert "Complete: 3 block(s), 3 font group(s)" in result.stdout

    def test_flat_output_with_flags(self, export_file: Path):
        """Test rendering flags reach the renderer."""
        result = runner.invoke(
            app,
            [
                str(export_file),
                "--flat",
                "--bold",
                "strong",
                "--links",
                "same-tab",
                "--lists",
                "pattern",
            ],
        )

        assert result.exit_code == 0
        assert "<strong>Welcome</strong>" in result.stdout
        assert '<a href="https://x.com/a&amp;b">docs</a>' in result.stdout
        assert "One<br>Two" in result.stdout

    def test_grouped_output(self, export_file: Path):
        """Test the default view shows one panel per font group."""
        result = runner.invoke(app, [str(export_file)])

        assert result.exit_code == 0
        assert "Inter (variable)" in result.stdout
        assert "Roboto" in result.stdout

    def test_output_file(self, export_file: Path, tmp_path: Path):
        """Test --output writes items and groups as JSON."""
        output = tmp_path / "result.json"

        result = runner.invoke(app, [str(export_file), "--output", str(output)])

        assert result.exit_code == 0
        assert "Saved:" in result.stdout
        payload = json.loads(output.read_text(encoding="utf-8"))
        assert len(payload["items"]) == 3
        assert payload["groups"][0]["fontFamily"] == "Inter"
        assert payload["groups"][0]["isVariable"] is True
        assert "error" not in payload

    def test_text_file(self, tmp_text_file: Path):
        """Test plain text with emphasis markers and list lines."""
        result = runner.invoke(app, [str(tmp_text_file), "--flat", "--bold", "strong"])

        assert result.exit_code == 0
        assert (
            "Hello <strong>world</strong><ul><li>one</li><li>two</li></ul>"
            in result.stdout
        )

    def test_empty_selection(self, export_file: Path):
        """Test an empty selection prints guidance and exits cleanly."""
        result = runner.invoke(app, [str(export_file), "--select", "nope"])

        assert result.exit_code == 0
        assert EMPTY_SELECTION_MESSAGE in result.stdout
