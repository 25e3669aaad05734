"""
Shared pytest fixtures for page-digest tests.

Provides reusable fixtures for:
- Configuration and settings
- Sample pages
- Temporary resources
"""

import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest
from bs4 import BeautifulSoup

from page_digest.config import ExtractionSettings, reset_settings
from page_digest.extraction.traversal import ClassifiedBuckets, TraversalEngine
from page_digest.utils.logging import reset_logging


@pytest.fixture(autouse=True)
def reset_global_state():
    """
    Reset cached settings and logging before and after each test.

    This ensures tests are isolated and don't share global state.
    """
    reset_settings()
    reset_logging()
    yield
    reset_settings()
    reset_logging()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that's cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def extraction_settings() -> ExtractionSettings:
    """Provide default extraction settings."""
    return ExtractionSettings()


@pytest.fixture
def page_url() -> str:
    """URL the sample pages are served from."""
    return "https://garden.example.com/articles/tomatoes"


@pytest.fixture
def traverse() -> Callable[[str], ClassifiedBuckets]:
    """Parse HTML and run a traversal over it."""
    engine = TraversalEngine()

    def _traverse(html: str) -> ClassifiedBuckets:
        return engine.traverse(BeautifulSoup(html, "html.parser"))

    return _traverse


@pytest.fixture
def rich_html() -> str:
    """Provide a well-structured article page."""
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <title>Growing Tomatoes Indoors | Garden Weekly</title>
        <meta name="description" content="A practical guide to growing tomatoes indoors all year round.">
        <meta property="og:image" content="/media/tomato-hero.jpg">
        <meta name="theme-color" content="#2E7D32">
        <script>window.analytics = {enabled: true};</script>
    </head>
    <body>
        <header style="background-color: #1b5e20">
            <nav class="menu">
                <ul>
                    <li><a href="/archive">Archive of past issues and columns</a></li>
                    <li><a href="/seasons">Seasonal planting calendars</a></li>
                </ul>
            </nav>
        </header>
        <main>
            <article>
                <h1>Growing Tomatoes Indoors</h1>
                <p>Tomatoes can thrive indoors when they get enough light, warmth
                and steady attention to watering throughout the season.</p>
                <h2>How to choose the right variety</h2>
                <h2>Lighting requirements for seedlings</h2>
                <ul>
                    <li>Use a 6500K LED grow light for 14 hours a day. Raise it as plants grow.</li>
                    <li>Water deeply when the top inch of soil feels dry.</li>
                </ul>
                <p><strong>Hand pollinate flowers every morning</strong> to improve fruit set.</p>
                <img src="/media/seedlings.jpg" width="640" height="480" alt="Seedlings">
                <img src="/media/site-logo.png" width="300" height="300" alt="Garden Weekly">
                <img src="/media/thumb.jpg" width="100" height="100" alt="Thumbnail">
                <div style="display: none"><h2>Hidden bonus chapter for subscribers</h2></div>
            </article>
        </main>
        <footer>
            <p>Copyright 2026 Garden Weekly. All rights reserved by the publisher.</p>
        </footer>
    </body>
    </html>
    """


@pytest.fixture
def degenerate_html() -> str:
    """Provide a page with no metadata and a single chrome-like heading."""
    return "<html><body><h1>Skip to content</h1></body></html>"
