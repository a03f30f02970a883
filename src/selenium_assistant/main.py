"""
Command-line interface for selenium_assistant
"""

import io
import logging
from pathlib import Path
from typing import Iterable, Optional

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .core.browsers import BrowserEntity, BrowserRegistry, RELEASES, UNKNOWN_VERSION
from .core.config_loader import ConfigLoader, DEFAULT_SETTINGS_FILE
from .core.exceptions import UnsupportedPlatformError
from .data_models import AssistantSettings
from .utils.logger import setup_logger

logger = logging.getLogger(__name__)

console = Console()


def build_browser_table(browsers: Iterable[BrowserEntity], show_validity: bool = False) -> Table:
    table = Table(show_lines=False)
    table.add_column("Browser Name", style="bold")
    table.add_column("Browser Version", style="blue")
    table.add_column("Path", style="blue")
    if show_validity:
        table.add_column("Usable")

    for browser in browsers:
        version = browser.get_version_number()
        row = [
            browser.get_pretty_name(),
            str(version) if version != UNKNOWN_VERSION else "unknown",
            browser.get_executable_path() or "-",
        ]
        if show_validity:
            row.append("[green]yes[/green]" if browser.is_valid() else "[red]no[/red]")
        table.add_row(*row)
    return table


def format_browser_table(browsers: Iterable[BrowserEntity], show_validity: bool = False) -> str:
    """Renders the browser table to plain text instead of the terminal."""
    buffer = io.StringIO()
    Console(file=buffer, width=160, color_system=None).print(build_browser_table(browsers, show_validity))
    return buffer.getvalue()


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              default=DEFAULT_SETTINGS_FILE, show_default=True, help="Settings JSON file")
@click.option("--install-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Where downloaded browsers live (overrides settings)")
@click.pass_context
def main(ctx: click.Context, config_path: Path, install_dir: Optional[Path]) -> None:
    """Find browsers for Selenium tests on this machine."""
    config_loader = ConfigLoader(config_path)
    setup_logger(config_loader)
    settings = AssistantSettings.from_config_loader(config_loader)
    if install_dir is not None:
        settings.install_dir = install_dir
    ctx.obj = BrowserRegistry(settings)


@main.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include browsers that can't be used")
@click.pass_obj
def list_browsers(registry: BrowserRegistry, show_all: bool) -> None:
    """Print a table of the browsers available on this machine."""
    try:
        if show_all:
            browsers = registry.list_local_browsers()
        else:
            browsers = registry.list_valid_local_browsers()
    except UnsupportedPlatformError as e:
        raise click.ClickException(str(e)) from e

    if not browsers:
        console.print("[yellow]No usable browsers found.[/yellow]")
        return
    console.print(build_browser_table(browsers, show_validity=show_all))


@main.command()
@click.argument("browser_id")
@click.argument("release", type=click.Choice(RELEASES), default="stable")
@click.pass_obj
def info(registry: BrowserRegistry, browser_id: str, release: str) -> None:
    """Show what is known about one local browser."""
    browser = registry.create_local_browser(browser_id, release)
    if browser is None:
        raise click.ClickException(f"Unknown browser id '{browser_id}'.")
    console.print_json(browser.to_info().model_dump_json())


if __name__ == "__main__":
    main()
