"""
Main CLI application for page-digest.

Provides the command-line interface for:
- Extracting a summary from a file, stdin or URL
- Managing configuration
"""

import sys
from pathlib import Path
from typing import Optional

import httpx
import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from page_digest import __version__
from page_digest.config import FetchSettings, Settings, get_default_config_path, load_config
from page_digest.core.exceptions import ConfigurationError, FetchError
from page_digest.extraction import ContentExtractor, ExtractionReport, PageSummary
from page_digest.utils.logging import get_logger, setup_logging

# Initialize Typer app
app = typer.Typer(
    name="page-digest",
    help="Page Digest - Summarize webpages into title, key points, images and colors",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]Page Digest[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """
    Page Digest - Single-pass webpage content extraction.

    Use 'page-digest --help' for command list.
    """
    try:
        settings = load_config(config_file or get_default_config_path())
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    setup_logging(settings.logging, level="DEBUG" if verbose else None)
    ctx.obj = settings


def _settings(ctx: typer.Context) -> Settings:
    if isinstance(ctx.obj, Settings):
        return ctx.obj
    return Settings()


@app.command()
def extract(
    ctx: typer.Context,
    source: str = typer.Argument(
        ...,
        help="HTML file path, '-' for stdin, or an http(s) URL",
    ),
    url: Optional[str] = typer.Option(
        None,
        "--url",
        "-u",
        help="Page URL used to resolve relative image links",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the summary as JSON",
    ),
    report: bool = typer.Option(
        False,
        "--report",
        "-r",
        help="Include metrics and timing",
    ),
) -> None:
    """
    Extract a summary from a webpage.

    Examples:
        page-digest extract ./article.html --url https://example.com/post
        page-digest extract https://example.com --json
        curl -s https://example.com | page-digest extract -
    """
    settings = _settings(ctx)

    try:
        html, source_url = _read_source(source, settings.fetch)
    except FetchError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    extractor = ContentExtractor(settings.extraction)
    result = extractor.extract_with_report(html, url or source_url)

    if as_json:
        console.print_json(data=result.to_dict() if report else result.summary.to_dict())
        return

    _print_summary(result.summary)
    if report:
        _print_report(result)


def _read_source(source: str, fetch: FetchSettings) -> tuple[str, str]:
    """
    Read HTML from stdin, a URL or a file.

    Returns:
        Tuple of (html, page URL); the URL is empty for local input

    Raises:
        FetchError: If the source cannot be read
    """
    if source == "-":
        return sys.stdin.read(), ""

    if source.startswith(("http://", "https://")):
        return _fetch(source, fetch)

    path = Path(source)
    try:
        return path.read_text(encoding="utf-8", errors="replace"), ""
    except OSError as e:
        raise FetchError(f"Cannot read file: {e.strerror or e}", details={"path": str(path)}) from e


def _fetch(url: str, fetch: FetchSettings) -> tuple[str, str]:
    """Fetch a page over HTTP."""
    logger.debug(f"Fetching {url}")
    try:
        response = httpx.get(
            url,
            timeout=fetch.timeout_seconds,
            headers={"User-Agent": fetch.user_agent},
            follow_redirects=fetch.follow_redirects,
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        raise FetchError(f"Server returned HTTP {status}", url=url, status_code=status) from e
    except httpx.HTTPError as e:
        raise FetchError(f"Failed to fetch page: {e}", url=url) from e

    return response.text, str(response.url)


def _print_summary(summary: PageSummary) -> None:
    """Render a summary as a panel plus tables."""
    body = f"[bold]{escape(summary.title)}[/bold]\n\n{escape(summary.description)}"
    if summary.url:
        body += f"\n\n[dim]{escape(summary.url)}[/dim]"
    console.print(Panel(body, title="Page Digest", border_style="blue"))

    if summary.key_points:
        table = Table(title="Key Points", show_header=True)
        table.add_column("#", style="dim", width=3)
        table.add_column("Point", style="white")
        for i, point in enumerate(summary.key_points, 1):
            table.add_row(str(i), escape(point))
        console.print(table)
    else:
        console.print("[yellow]No key points found[/yellow]")

    if summary.images:
        console.print("\n[bold]Images:[/bold]")
        for image in summary.images:
            console.print(f"  {image}", markup=False, highlight=False)

    colors = summary.brand_colors
    console.print(
        f"\n[bold]Brand colors:[/bold] "
        f"[on {colors.primary}]    [/] {colors.primary}  "
        f"[on {colors.secondary}]    [/] {colors.secondary}"
    )


def _print_report(result: ExtractionReport) -> None:
    """Render extraction metrics and timing."""
    table = Table(title="Extraction Report", show_header=False, box=None)
    table.add_column("Metric", style="dim")
    table.add_column("Value")

    metrics = result.metrics
    table.add_row("State", result.state.value)
    table.add_row("Nodes processed", str(result.nodes_processed))
    table.add_row("Duration", f"{result.duration_ms:.1f} ms")
    table.add_row("Word count", str(metrics.word_count))
    table.add_row("Readability", f"{metrics.readability_score:.2f}")
    table.add_row("Semantic density", f"{metrics.semantic_density:.2f}")

    console.print()
    console.print(table)


@app.command()
def config(
    ctx: typer.Context,
    show: bool = typer.Option(
        False,
        "--show",
        "-s",
        help="Show current configuration",
    ),
    init: bool = typer.Option(
        False,
        "--init",
        help="Create default configuration file",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path for config file",
    ),
) -> None:
    """
    Configuration management.

    View or initialize configuration files.

    Examples:
        page-digest config --show
        page-digest config --init --output ./page_digest.yaml
    """
    if init:
        _init_config(output)
    elif show:
        _show_config(_settings(ctx))
    else:
        console.print("Use --show to view config or --init to create default config")


def _show_config(settings: Settings) -> None:
    """Show current configuration."""
    console.print(Panel("[bold]Current Configuration[/bold]", border_style="blue"))

    for section, values in settings.model_dump(mode="json").items():
        console.print(f"\n[bold cyan]{section}:[/bold cyan]")
        for key, value in values.items():
            console.print(f"  {key}: [dim]{value}[/dim]")


def _init_config(output: Optional[Path]) -> None:
    """Create default configuration file."""
    config_dict = Settings().model_dump(mode="json")
    output_path = output or Path("page_digest.yaml")

    if output_path.exists():
        if not typer.confirm(f"File {output_path} exists. Overwrite?"):
            raise typer.Exit(0)

    with open(output_path, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)

    console.print(f"[green]✓[/green] Configuration saved to: {output_path}")


if __name__ == "__main__":
    app()
