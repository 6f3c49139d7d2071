#!/usr/bin/env python3
"""WowzaDeploy CLI - Main entry point"""

import os
import sys

from rich.console import Console

# Rich-Click: CLI help with colors
import rich_click as click

from wowzadeploy import __version__
from wowzadeploy.commands.create import create
from wowzadeploy.commands.remove import remove
from wowzadeploy.commands.servers import (
    servers_add,
    servers_disable,
    servers_enable,
    servers_list,
)
from wowzadeploy.commands.update import update

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100
click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_ARGUMENT = "bold yellow"
click.rich_click.STYLE_REQUIRED_SHORT = "bold red"
click.rich_click.STYLE_REQUIRED_LONG = "bold red"
click.rich_click.STYLE_OPTION_DEFAULT = "dim cyan"

console = Console()


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""
    import functools
    from click.exceptions import ClickException

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")

            if os.environ.get("DEBUG") or os.environ.get("VERBOSE"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """
    WowzaDeploy - Deploy Wowza Streaming Engine application configuration over SSH.

    \b
    Applications:
      wowzadeploy create NAME --host IP -p PASS   # Write config files
      wowzadeploy update NAME --host IP -b 6000   # Change limits
      wowzadeploy remove NAME --host IP           # Delete config + content

    \b
    Servers:
      wowzadeploy servers:add IP --port 22        # Register credential
      wowzadeploy servers:list                    # List servers
      wowzadeploy servers:disable IP              # Block deployments
    """


cli.add_command(create)
cli.add_command(remove)
cli.add_command(update)
cli.add_command(servers_add)
cli.add_command(servers_list)
cli.add_command(servers_enable)
cli.add_command(servers_disable)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli()


if __name__ == "__main__":
    main()
