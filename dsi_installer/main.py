#!/usr/bin/env python3
"""DSI Toolkit Installer - Main entry point"""

import functools
import sys

from rich.console import Console

# Rich-Click: colored help output
import rich_click as click

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.MAX_WIDTH = 100
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_ARGUMENT = "bold yellow"
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_HELPTEXT_FIRST_LINE = "bold white"
click.rich_click.STYLE_EPILOG_TEXT = "dim"

from dsi_installer.constants import MSG_INSTALL_COMPLETE
from dsi_installer.core.arguments import parse_arguments
from dsi_installer.core.config_loader import load_settings
from dsi_installer.core.modes import Standalone
from dsi_installer.core.orchestrator import DeploymentOrchestrator
from dsi_installer.exceptions import ConfigurationError
from dsi_installer.logger import InstallerLogger

console = Console()

EPILOG = """
Flags:
  --verbose                        Verbose output
  --launched-from-addin            Skip manifests (launched by the toolkit itself)
  --deploy-install                 Stage 1 of the remote push (needs -u, -p and -d)
  --deploy-manifest                Stage 2 of the remote push (manifests only)
  --deploy-as-admin MACHINE USER   Push files and manifests to another machine
  --app-data-directory PATH        App data root used in the manifests
  --version YEAR                   Only handle this Revit version
  --debug                          Use the debug build paths
  -u/--username, -p/--password, -d/--domain   Relaunch credentials
"""


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            console.print(f"\n[bold red]✗ Configuration error:[/bold red] {e.message}")
            if e.context:
                console.print(f"  [dim]{e.context}[/dim]\n")
            sys.exit(1)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)

    return wrapper


@click.command(
    epilog=EPILOG,
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
        "help_option_names": ["-h", "--help"],
    },
)
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
@handle_cli_errors
def cli(tokens):
    """
    Install the DSI Toolkit for every supported Revit version and register it.

    Waits for Revit to exit, copies the toolkit into local app data and writes
    the Revit .addin manifests.
    """
    settings = load_settings()

    with InstallerLogger(log_directory=settings.log_directory) as logger:
        config = parse_arguments(tokens, logger)
        try:
            report = DeploymentOrchestrator(settings, logger).run(config)
        finally:
            if config.password is not None:
                config.password.clear()

        if isinstance(report.mode, Standalone) and report.completed:
            logger.log(MSG_INSTALL_COMPLETE)
            click.pause(info="")

    sys.exit(report.exit_code)


def main():
    cli(prog_name="dsi-installer")


if __name__ == "__main__":
    main()
