# ABOUTME: End-to-end tests for the bookcore CLI.
# ABOUTME: Runs commands via Click's CliRunner against book files written to tmp_path.

from pathlib import Path

from click.testing import CliRunner

from bookcore.cli import cli


class TestCliInspect:
    """E2e tests for `bookcore inspect`."""

    def test_inspect_shows_metadata(self, sample_epub: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", str(sample_epub)])
        assert result.exit_code == 0
        assert "The Name of the Rose" in result.output
        assert "Umberto Eco" in result.output
        assert "Harcourt" in result.output

    def test_inspect_lists_chapters(self, tmp_path: Path, sample_fb2: bytes) -> None:
        path = tmp_path / "picnic.fb2"
        path.write_bytes(sample_fb2)
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", str(path)])
        assert result.exit_code == 0
        assert "Part One" in result.output
        assert "Part Two" in result.output

    def test_inspect_zipped_fb2(self, tmp_path: Path, zipped_fb2: bytes) -> None:
        path = tmp_path / "picnic.fb2.zip"
        path.write_bytes(zipped_fb2)
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", str(path)])
        assert result.exit_code == 0
        assert "Roadside Picnic" in result.output

    def test_inspect_pdf_page_hint(self, tmp_path: Path) -> None:
        path = tmp_path / "scan.pdf"
        path.write_bytes(b"%PDF-1.7")
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", str(path), "--page-hint", "321"])
        assert result.exit_code == 0
        assert "321" in result.output

    def test_inspect_corrupt_epub_reports_error(self, corrupt_epub: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", str(corrupt_epub)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_inspect_nonexistent_file_fails(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "/nonexistent/path.epub"])
        assert result.exit_code != 0

    def test_inspect_unknown_extension_needs_type(self, tmp_path: Path) -> None:
        path = tmp_path / "book.mobi"
        path.write_bytes(b"data")
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", str(path)])
        assert result.exit_code == 2
        assert "--type" in result.output

    def test_inspect_explicit_type(self, tmp_path: Path) -> None:
        path = tmp_path / "story.dat"
        path.write_bytes(b"A Short Story\nThe end.")
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", str(path), "--type", "txt"])
        assert result.exit_code == 0
        assert "A Short Story" in result.output


class TestCliText:
    """E2e tests for `bookcore text`."""

    def test_prints_content(self, tmp_path: Path, two_chapter_epub: bytes) -> None:
        path = tmp_path / "two.epub"
        path.write_bytes(two_chapter_epub)
        runner = CliRunner()
        result = runner.invoke(cli, ["text", str(path)])
        assert result.exit_code == 0
        assert result.output == "Intro Hello\n\nMiddle World\n"

    def test_failure_exit_code(self, corrupt_epub: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["text", str(corrupt_epub)])
        assert result.exit_code == 1


class TestCliVersion:
    """E2e tests for version flag."""

    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_verbose_flag(self, sample_epub: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--verbose", "inspect", str(sample_epub)])
        assert result.exit_code == 0
