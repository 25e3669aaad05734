"""
Tests for CLI module.

Tests command-line interface commands and output.
"""

import json
from pathlib import Path

import httpx
import pytest
import yaml
from typer.testing import CliRunner

from page_digest import __version__
from page_digest.cli import app


@pytest.fixture
def runner() -> CliRunner:
    """Provide a CLI test runner."""
    return CliRunner()


@pytest.fixture
def html_file(temp_dir: Path, rich_html: str) -> Path:
    """Write the rich sample page to disk."""
    path = temp_dir / "article.html"
    path.write_text(rich_html, encoding="utf-8")
    return path


class TestCLI:
    """Tests for global CLI behavior."""

    def test_cli_help(self, runner: CliRunner):
        """CLI should show help."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_version(self, runner: CliRunner):
        """--version should print the package version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_extract_help(self, runner: CliRunner):
        """Extract command should show help."""
        result = runner.invoke(app, ["extract", "--help"])

        assert result.exit_code == 0
        assert "source" in result.output.lower()

    def test_invalid_config_file(self, runner: CliRunner, temp_dir: Path, html_file: Path):
        """An invalid config file should exit with an error."""
        config_path = temp_dir / "bad.yaml"
        config_path.write_text("extraction:\n  max_images: 99\n")

        result = runner.invoke(app, ["--config", str(config_path), "extract", str(html_file)])

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestExtractCommand:
    """Tests for the extract command."""

    def test_extract_file_json(self, runner: CliRunner, html_file: Path):
        """A local file should be summarized as JSON."""
        result = runner.invoke(
            app,
            ["extract", str(html_file), "--url", "https://garden.example.com/articles/tomatoes", "--json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["title"] == "Growing Tomatoes Indoors"
        assert data["brand_colors"] == {"primary": "#2e7d32", "secondary": "#4c915a"}
        assert data["images"][0] == "https://garden.example.com/media/tomato-hero.jpg"

    def test_extract_without_url_drops_relative_images(self, runner: CliRunner, html_file: Path):
        """Relative images cannot be resolved without a page URL."""
        result = runner.invoke(app, ["extract", str(html_file), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["images"] == []

    def test_extract_report_json(self, runner: CliRunner, html_file: Path):
        """--report should include metrics and state."""
        result = runner.invoke(app, ["extract", str(html_file), "--json", "--report"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["state"] == "assembled"
        assert data["metrics"]["word_count"] > 0
        assert data["summary"]["title"] == "Growing Tomatoes Indoors"

    def test_extract_stdin(self, runner: CliRunner, degenerate_html: str):
        """'-' should read the page from stdin."""
        result = runner.invoke(app, ["extract", "-", "--json"], input=degenerate_html)

        assert result.exit_code == 0
        assert json.loads(result.stdout)["title"] == "Content Page"

    def test_extract_rich_output(self, runner: CliRunner, html_file: Path):
        """Default output should render the summary."""
        result = runner.invoke(app, ["extract", str(html_file), "--report"])

        assert result.exit_code == 0
        assert "Growing Tomatoes Indoors" in result.output
        assert "Key Points" in result.output
        assert "#2e7d32" in result.output
        assert "Extraction Report" in result.output

    def test_extract_missing_file(self, runner: CliRunner, temp_dir: Path):
        """An unreadable file should exit with an error."""
        result = runner.invoke(app, ["extract", str(temp_dir / "missing.html")])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_extract_url(self, runner: CliRunner, monkeypatch, rich_html: str):
        """http(s) sources should be fetched and used as the base URL."""
        calls = []

        def fake_get(url, **kwargs):
            calls.append((url, kwargs))
            return httpx.Response(200, text=rich_html, request=httpx.Request("GET", url))

        monkeypatch.setattr(httpx, "get", fake_get)
        result = runner.invoke(app, ["extract", "https://garden.example.com/articles/tomatoes", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["url"] == "https://garden.example.com/articles/tomatoes"
        assert data["images"][0] == "https://garden.example.com/media/tomato-hero.jpg"
        assert calls[0][1]["headers"]["User-Agent"] == "page-digest/0.1"
        assert calls[0][1]["follow_redirects"] is True

    def test_extract_url_http_error(self, runner: CliRunner, monkeypatch):
        """Error statuses should exit with an error."""
        def fake_get(url, **kwargs):
            return httpx.Response(404, request=httpx.Request("GET", url))

        monkeypatch.setattr(httpx, "get", fake_get)
        result = runner.invoke(app, ["extract", "https://example.com/missing"])

        assert result.exit_code == 1
        assert "404" in result.output

    def test_extract_url_connection_error(self, runner: CliRunner, monkeypatch):
        """Network failures should exit with an error."""
        def fake_get(url, **kwargs):
            raise httpx.ConnectError("connection refused")

        monkeypatch.setattr(httpx, "get", fake_get)
        result = runner.invoke(app, ["extract", "https://example.com/"])

        assert result.exit_code == 1
        assert "Failed to fetch page" in result.output


class TestConfigCommand:
    """Tests for the config command."""

    def test_config_show(self, runner: CliRunner):
        """Config show command should display settings."""
        result = runner.invoke(app, ["config", "--show"])

        assert result.exit_code == 0
        assert "extraction" in result.output
        assert "max_key_points" in result.output

    def test_config_without_flags(self, runner: CliRunner):
        """Config without flags should print usage hints."""
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "--show" in result.output

    def test_config_init(self, runner: CliRunner, temp_dir: Path):
        """--init should write a loadable default configuration."""
        output = temp_dir / "page_digest.yaml"
        result = runner.invoke(app, ["config", "--init", "--output", str(output)])

        assert result.exit_code == 0
        data = yaml.safe_load(output.read_text())
        assert data["extraction"]["max_images"] == 5

        reloaded = runner.invoke(app, ["--config", str(output), "config", "--show"])
        assert reloaded.exit_code == 0
