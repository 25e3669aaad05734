"""
CLI module for page-digest.

Provides command-line interface using Typer:
- extract: Summarize a page from a file, stdin or URL
- config: Configuration management
"""

from page_digest.cli.main import app

__all__ = ["app"]
