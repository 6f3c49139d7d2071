"""
Create Command

Deploy the Wowza configuration files for a new application.
"""

import posixpath

import click
from dataclasses import dataclass
from rich.markup import escape

from wowzadeploy.base import BaseCommand
from wowzadeploy.constants import DEFAULT_MAX_BITRATE, DEFAULT_MAX_VIEWERS
from wowzadeploy.models import DeploymentSpec
from wowzadeploy.templates import render_files


@dataclass
class CreateOptions:
    """Options for create command."""

    name: str
    host: str
    password: str
    bitrate: int = DEFAULT_MAX_BITRATE
    viewers: int = DEFAULT_MAX_VIEWERS
    dry_run: bool = False


class CreateCommand(BaseCommand):
    """
    Create Wowza application configuration on a server.

    Features:
    - Application.xml, publish.password and alias maps
    - Streaming content directory
    - Dry run rendering
    """

    def __init__(self, options: CreateOptions, verbose: bool = False, json_output: bool = False, settings=None):
        super().__init__(verbose=verbose, json_output=json_output, settings=settings)
        self.options = options

    def execute(self) -> None:
        """Execute create command."""
        spec = DeploymentSpec(
            name=self.options.name,
            host_address=self.options.host,
            publish_password=self.options.password,
            max_bitrate=self.options.bitrate,
            max_viewers=self.options.viewers,
        )

        if self.options.dry_run:
            self._print_rendered(spec)
            return

        self.show_header(
            title="Create Configuration",
            app=spec.name,
            host=spec.host_address,
            details={"Bitrate": spec.max_bitrate, "Viewers": spec.max_viewers},
        )

        self.init_logger(spec.name, "create")
        service = self.get_config_service()
        service.create_config(spec)

        if self.json_output:
            self.output_json(
                {
                    "status": "created",
                    "name": spec.name,
                    "host": spec.host_address,
                    "app_dir": service.app_dir(spec.name),
                    "streaming_dir": service.streaming_dir(spec.name),
                }
            )
        else:
            self.console.print(f"\n[dim]Logs saved to:[/dim] {self.logger.log_path}\n")

    def _print_rendered(self, spec: DeploymentSpec) -> None:
        files = render_files(
            spec,
            posixpath.join(self.settings.wowza_base_path, spec.name),
            storage_dir=posixpath.join(self.settings.streaming_home, spec.name),
        )

        if self.json_output:
            self.output_json({"files": {f.path: f.content for f in files}})
            return

        for remote_file in files:
            self.console.print(f"[bold cyan]==> {escape(remote_file.path)}[/bold cyan]")
            self.console.print(remote_file.content, markup=False, highlight=False)
            self.console.print()


@click.command(name="create")
@click.argument("name")
@click.option("--host", "-H", required=True, help="Streaming server IP")
@click.option("--password", "-p", required=True, help="Publish password")
@click.option("--bitrate", "-b", type=int, default=DEFAULT_MAX_BITRATE, show_default=True, help="Maximum bitrate (kbps)")
@click.option("--viewers", "-n", type=int, default=DEFAULT_MAX_VIEWERS, show_default=True, help="Maximum viewers")
@click.option("--dry-run", is_flag=True, help="Print rendered files instead of deploying")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def create(name, host, password, bitrate, viewers, dry_run, verbose, json_output):
    """
    Create Wowza configuration for an application

    Writes Application.xml, publish.password, aliasmap.play.txt and
    aliasmap.stream.txt under the Wowza conf directory and creates the
    streaming home directory.

    Examples:
        wowzadeploy create clienteA --host 10.0.0.5 -p s3cr3t -b 6000 -n 500

        wowzadeploy create clienteA --host 10.0.0.5 -p s3cr3t --dry-run
    """
    options = CreateOptions(
        name=name,
        host=host,
        password=password,
        bitrate=bitrate,
        viewers=viewers,
        dry_run=dry_run,
    )
    cmd = CreateCommand(options, verbose=verbose, json_output=json_output)
    cmd.run()
