"""Tests for the command-line interface."""

from pathlib import Path

from typer.testing import CliRunner

from blog_data.cli import app
from sitefiles import front_matter, write_markdown

runner = CliRunner()


def test_generate_command_writes_files(tmp_path: Path):
    """The generate command writes data files under the given root."""
    write_markdown(tmp_path / "_posts" / "2012-04-01-intro.md", front_matter(title="Intro"))

    result = runner.invoke(
        app,
        ["generate", "--root", str(tmp_path), "--no-progress", "--base-url", "https://example.com"],
    )

    assert result.exit_code == 0, result.output
    assert (tmp_path / "_data" / "archives.yaml").exists()
    assert "https://example.com/posts/intro/" in (tmp_path / "sitemap.xml").read_text(encoding="utf-8")


def test_generate_command_fails_without_posts(tmp_path: Path):
    """A missing posts folder exits with status 1."""
    result = runner.invoke(app, ["generate", "--root", str(tmp_path), "--no-progress"])

    assert result.exit_code == 1


def test_check_images_strict_exit_code(tmp_path: Path):
    """Only --strict turns missing images into a failing exit code."""
    write_markdown(tmp_path / "content" / "page.md", "![x](missing.png)\n")

    lenient = runner.invoke(app, ["check-images", "--root", str(tmp_path)])
    strict = runner.invoke(app, ["check-images", "--root", str(tmp_path), "--strict"])

    assert lenient.exit_code == 0
    assert strict.exit_code == 1
