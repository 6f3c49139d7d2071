"""
Remove Command

Delete an application's Wowza configuration and streaming directory.
"""

import click
from dataclasses import dataclass

from wowzadeploy.base import BaseCommand
from wowzadeploy.models import validate_app_name


@dataclass
class RemoveOptions:
    """Options for remove command."""

    name: str
    host: str
    yes: bool = False


class RemoveCommand(BaseCommand):
    """Remove Wowza application configuration from a server."""

    def __init__(self, options: RemoveOptions, verbose: bool = False, json_output: bool = False, settings=None):
        super().__init__(verbose=verbose, json_output=json_output, settings=settings)
        self.options = options

    def execute(self) -> None:
        """Execute remove command."""
        name = validate_app_name(self.options.name)

        self.show_header(title="Remove Configuration", app=name, host=self.options.host)

        if not self.options.yes and not self.json_output:
            if not self.confirm(f"Delete all configuration and content of [bold]{name}[/bold]?"):
                self.print_dim("Aborted")
                return

        self.init_logger(name, "remove")
        service = self.get_config_service()
        service.remove_config(name, self.options.host)

        if self.json_output:
            self.output_json({"status": "removed", "name": name, "host": self.options.host})
        else:
            self.console.print(f"\n[dim]Logs saved to:[/dim] {self.logger.log_path}\n")


@click.command(name="remove")
@click.argument("name")
@click.option("--host", "-H", required=True, help="Streaming server IP")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def remove(name, host, yes, verbose, json_output):
    """
    Remove Wowza configuration for an application

    Deletes the application directory under the Wowza conf directory and
    its streaming home directory. Missing directories are ignored.

    Examples:
        wowzadeploy remove clienteA --host 10.0.0.5 --yes
    """
    options = RemoveOptions(name=name, host=host, yes=yes)
    cmd = RemoveCommand(options, verbose=verbose, json_output=json_output)
    cmd.run()
