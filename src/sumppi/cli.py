"""CLI entry point for Sumppi."""

import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sumppi.config.logging import setup_logging
from sumppi.config.manager import ConfigManager
from sumppi.config.schema import SeriesEntry
from sumppi.feeds.fetcher import SeriesFetcher, load_series_file
from sumppi.feeds.generator import generate_feed
from sumppi.feeds.latest import latest_episode_date
from sumppi.feeds.models import SeriesData
from sumppi.storage.local import feed_filename, write_feed
from sumppi.storage.s3 import create_uploader, parse_s3_path, public_url
from sumppi.ui.theme import get_theme, set_theme
from sumppi.utils.errors import ConfigError, SumppiError

app = typer.Typer(
    name="sumppi",
    help="Generate podcast RSS feeds from series API data",
    no_args_is_help=True,
)
console = Console()


def _fail(message: str) -> None:
    console.print(get_theme().error_text(escape(message)))
    sys.exit(1)


def _load_series(guid: str, from_file: Path | None, config_manager: ConfigManager) -> SeriesData:
    if from_file is not None:
        return load_series_file(from_file)
    config = config_manager.load_config_or_default()
    return SeriesFetcher(url_template=config.api_url_template).fetch(guid)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file"
    ),
) -> None:
    """Sumppi - turn podcast series data into RSS feeds."""
    level = "WARNING"
    try:
        level = ConfigManager().load_config_or_default().log_level
    except ConfigError:
        # The command that needs the config reports the error itself
        pass

    setup_logging(verbose=verbose, log_file=log_file, level=level)


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from sumppi import __version__

    console.print(f"[bold magenta]Sumppi[/bold magenta] v{__version__}")


@app.command("generate")
def generate_command(
    guid: str = typer.Argument(..., help="Series GUID"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output file (default: <guid>.rss)"
    ),
    upload: str | None = typer.Option(
        None, "--upload", "-u", help="Upload to an S3 path instead (s3://bucket/key)"
    ),
    publish: bool = typer.Option(
        False, "--publish", "-p", help="Upload to the S3 path configured for this series"
    ),
    from_file: Path | None = typer.Option(
        None, "--from-file", help="Read the series JSON from a file instead of the API"
    ),
) -> None:
    """Generate the RSS feed for a series.

    Examples:
        sumppi generate 0b6a1f9e-4c3d-4f6e-9d2a-3b1c5e7f9a11

        sumppi generate <guid> --upload s3://my-bucket/feeds/show.rss

        sumppi generate <guid> --publish
    """
    if upload and publish:
        _fail("Error: use either --upload or --publish, not both")
        return

    try:
        config_manager = ConfigManager()
        if publish:
            upload = config_manager.get_series(guid).s3_path

        series = _load_series(guid, from_file, config_manager)
        rss_xml = generate_feed(series)
        summary = f"{series.title} by {series.author}, {len(series.episodes)} episodes"

        if upload:
            config = config_manager.load_config_or_default()
            uploader = create_uploader(region=config.s3_region)
            if uploader is None:
                _fail("Error: S3 client could not be initialized")
                return
            uploader.upload_feed(rss_xml, upload)
            message = f"RSS feed uploaded to {upload} ({summary})"
        else:
            path = write_feed(rss_xml, output or Path(feed_filename(series.guid)))
            message = f"RSS feed written to {path} ({summary})"

        console.print(get_theme().success_text(escape(message)))

    except SumppiError as e:
        _fail(f"Error: {e}")


@app.command("latest")
def latest_command(
    guid: str = typer.Argument(..., help="Series GUID"),
    from_file: Path | None = typer.Option(
        None, "--from-file", help="Read the series JSON from a file instead of the API"
    ),
) -> None:
    """Show the publication date of the latest episode."""
    try:
        series = _load_series(guid, from_file, ConfigManager())
        console.print(f"Latest episode date: {latest_episode_date(series.episodes)}")
    except SumppiError as e:
        _fail(f"Error finding latest episode: {e}")


@app.command("url")
def url_command(
    s3_path: str = typer.Argument(..., help="S3 path (s3://bucket/key)"),
) -> None:
    """Print the public URL of a feed uploaded to S3."""
    try:
        config = ConfigManager().load_config_or_default()
        console.print(public_url(s3_path, region=config.s3_region), soft_wrap=True)
    except SumppiError as e:
        _fail(f"Error generating URL: {e}")


@app.command("add")
def add_series(
    guid: str = typer.Argument(..., help="Series GUID"),
    s3_path: str = typer.Argument(..., help="Where the feed is published (s3://bucket/key)"),
) -> None:
    """Add a series to the configuration.

    Examples:
        sumppi add 0b6a1f9e-4c3d-4f6e-9d2a-3b1c5e7f9a11 s3://my-bucket/feeds/show.rss
    """
    if not guid.strip():
        _fail("Error: series GUID must not be empty")
        return

    try:
        parse_s3_path(s3_path)
        manager = ConfigManager()
        entry = SeriesEntry(guid=guid, s3_path=s3_path)
        manager.add_series(entry)
    except SumppiError as e:
        _fail(f"Error: {e}")
        return

    console.print(
        get_theme().success_text(escape(f"Series '{guid}' added as {entry.name}"))
    )
    console.print(f"  Config: [cyan]{escape(str(manager.config_file))}[/cyan]")


@app.command("list")
def list_series() -> None:
    """List configured series."""
    try:
        manager = ConfigManager()
        config = manager.load_config()
    except ConfigError as e:
        _fail(str(e))
        return

    if not config.series:
        console.print("[yellow]No series configured yet.[/yellow]")
        console.print(f"\nAdd series to [cyan]{manager.config_file}[/cyan]")
        return

    theme = get_theme()
    table = Table(title="[bold]Configured Series[/bold]")
    table.add_column("Name", style=theme.header, no_wrap=True)
    table.add_column("GUID", style="dim")
    table.add_column("S3 Path", style=theme.data_url)

    for entry in config.series:
        table.add_row(escape(entry.name), escape(entry.guid), escape(entry.s3_path))

    console.print(table)
    console.print(f"\n[dim]Total: {len(config.series)} series[/dim]")


@app.command("menu")
def menu_command(
    config_file: Path | None = typer.Option(
        None, "--config", "-c", help="Config file (default: $SUMPPI_CONFIG or series.yaml)"
    ),
) -> None:
    """Open the interactive series menu."""
    from sumppi.ui.menu import ActionRunner, MenuState, run_menu

    try:
        config = ConfigManager(config_file).load_config()
    except ConfigError as e:
        _fail(f"Error loading config: {e}")
        return

    theme = set_theme(config.theme)
    uploader = create_uploader(region=config.s3_region)
    runner = ActionRunner(
        fetcher=SeriesFetcher(url_template=config.api_url_template),
        uploader=uploader,
        s3_region=config.s3_region,
    )
    state = MenuState(series=config.series, upload_enabled=uploader is not None)

    run_menu(state, runner, console=console, theme=theme)


if __name__ == "__main__":
    app()
