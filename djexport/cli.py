"""Command-line interface for DJ Export."""

import logging
import sys
from pathlib import Path
from typing import Optional

# Configure logging BEFORE any imports - default to WARNING for normal runs
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("djexport")

# Suppress noisy third-party loggers
logging.getLogger("urllib3").setLevel(logging.WARNING)
logging.getLogger("requests").setLevel(logging.WARNING)
logging.getLogger("spotipy").setLevel(logging.WARNING)

import typer
from rich.console import Console
from rich.table import Table

from djexport import DJExport, DJExportConfig, __version__
from djexport.core.camelot import MINOR, camelot_wheel, key_name
from djexport.export.sinks import Notifier
from djexport.models import ExportOutcome
from djexport.providers.spotify import normalize_playlist_ref

app = typer.Typer(help="DJ Export - Spotify playlists to DJ-software CSV")
console = Console()


def debug_callback(value: bool):
    """Enable debug mode."""
    if value:
        logging.getLogger("djexport").setLevel(logging.DEBUG)
        console.print("[dim]Debug mode enabled[/dim]")


@app.callback()
def common_options(
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
        callback=debug_callback,
        is_eager=True,
    ),
):
    """DJ Export - Spotify playlists to DJ-software CSV."""
    pass


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]DJ Export[/bold] v{__version__}")


@app.command()
def export(
    playlist: str = typer.Argument(..., help="Playlist URI, open.spotify.com URL or id"),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory to write the CSV into (overrides config)",
    ),
) -> None:
    """Export a playlist's tempo, key, energy, ISRC and genres to CSV.

    Examples:
        djexport export spotify:playlist:37i9dQZF1DXcBWIGoYBM5M
        djexport export https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M -o ~/Music/DJ
    """
    try:
        playlist_ref = normalize_playlist_ref(playlist)
        config = DJExportConfig.from_file(config_path) if config_path else DJExportConfig.default()
        if output_dir:
            config.export.output_dir = output_dir
        exporter = DJExport(config, notifier=Notifier(console))
    except Exception as e:
        console.print(f"[red]✗[/red] Export failed: {e}")
        sys.exit(1)

    result = exporter.export(playlist_ref)
    if result.outcome is ExportOutcome.EXPORTED:
        console.print(f"  {result.path}")
    elif result.outcome is ExportOutcome.FAILED:
        sys.exit(1)


@app.command()
def keys() -> None:
    """Print the Camelot wheel for every Spotify key and mode."""
    wheel = camelot_wheel()
    table = Table(title="Camelot wheel")
    table.add_column("Key", justify="right")
    table.add_column("Mode", justify="right")
    table.add_column("Name")
    table.add_column("Camelot", style="bold")

    for (pitch_class, mode), code in sorted(wheel.items(), key=lambda entry: (int(entry[1][:-1]), entry[1][-1])):
        table.add_row(str(pitch_class), "minor" if mode == MINOR else "major", key_name(pitch_class, mode), code)

    console.print(table)


@app.command()
def init_config(
    config_path: str = typer.Argument("djexport.yaml", help="Where to write the config"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write a config file with default settings."""
    config = DJExportConfig.default()
    try:
        if Path(config_path).exists() and not force:
            console.print(f"[yellow]⚠[/yellow] {config_path} already exists (use --force to overwrite)")
            sys.exit(1)
        config.save(config_path)
        console.print(f"[green]✓[/green] Wrote default configuration to {config_path}")
    except OSError as e:
        console.print(f"[red]✗[/red] Could not write config: {e}")
        sys.exit(1)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
