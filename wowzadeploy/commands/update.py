"""
Update Command

Change bitrate and viewer limits of a deployed application.
"""

import click
from dataclasses import dataclass
from typing import Optional

from wowzadeploy.base import BaseCommand
from wowzadeploy.models import ConfigUpdate


@dataclass
class UpdateOptions:
    """Options for update command."""

    name: str
    host: str
    bitrate: Optional[int] = None
    viewers: Optional[int] = None


class UpdateCommand(BaseCommand):
    """Patch limits in an existing Application.xml."""

    def __init__(self, options: UpdateOptions, verbose: bool = False, json_output: bool = False, settings=None):
        super().__init__(verbose=verbose, json_output=json_output, settings=settings)
        self.options = options

    def execute(self) -> None:
        """Execute update command."""
        updates = ConfigUpdate(max_bitrate=self.options.bitrate, max_viewers=self.options.viewers)
        details = {}
        if updates.max_bitrate is not None:
            details["Bitrate"] = updates.max_bitrate
        if updates.max_viewers is not None:
            details["Viewers"] = updates.max_viewers

        self.show_header(
            title="Update Configuration",
            app=self.options.name,
            host=self.options.host,
            details=details,
        )

        self.init_logger(self.options.name, "update")
        service = self.get_config_service()
        service.update_config(self.options.name, self.options.host, updates)

        if self.json_output:
            self.output_json(
                {
                    "status": "updated",
                    "name": self.options.name,
                    "host": self.options.host,
                    "max_bitrate": updates.max_bitrate,
                    "max_viewers": updates.max_viewers,
                }
            )
        else:
            self.console.print(f"\n[dim]Logs saved to:[/dim] {self.logger.log_path}\n")


@click.command(name="update")
@click.argument("name")
@click.option("--host", "-H", required=True, help="Streaming server IP")
@click.option("--bitrate", "-b", type=int, default=None, help="New maximum bitrate (kbps)")
@click.option("--viewers", "-n", type=int, default=None, help="New maximum viewers")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def update(name, host, bitrate, viewers, verbose, json_output):
    """
    Update limits of an existing application

    Rewrites both bitrate properties and/or both viewer properties in
    Application.xml. The rest of the file is left untouched.

    Examples:
        wowzadeploy update clienteA --host 10.0.0.5 --bitrate 8000

        wowzadeploy update clienteA --host 10.0.0.5 -n 1000
    """
    if bitrate is None and viewers is None:
        raise click.UsageError("Nothing to update: pass --bitrate and/or --viewers")

    options = UpdateOptions(name=name, host=host, bitrate=bitrate, viewers=viewers)
    cmd = UpdateCommand(options, verbose=verbose, json_output=json_output)
    cmd.run()
