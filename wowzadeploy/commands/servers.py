"""WowzaDeploy CLI - Server credential commands"""

import click
from rich.markup import escape
from rich.table import Table

from wowzadeploy.base import BaseCommand
from wowzadeploy.constants import (
    DEFAULT_SSH_PORT,
    SERVER_STATUS_ACTIVE,
    SERVER_STATUS_INACTIVE,
)
from wowzadeploy.database import configure, init_db
from wowzadeploy.exceptions import ConfigurationError
from wowzadeploy.services import DatabaseCredentialStore


class ServerCommand(BaseCommand):
    """Base for commands that talk to the credential store."""

    def get_store(self) -> DatabaseCredentialStore:
        session_factory = configure(self.settings.database_url)
        init_db()
        return DatabaseCredentialStore(
            session_factory=session_factory, ssh_user=self.settings.ssh_user
        )


class ServersAddCommand(ServerCommand):
    """Register a streaming server (or replace its credential)."""

    def __init__(self, ip: str, password: str, port: int, verbose: bool = False, json_output: bool = False, settings=None):
        super().__init__(verbose=verbose, json_output=json_output, settings=settings)
        self.ip = ip
        self.password = password
        self.port = port

    def execute(self) -> None:
        """Execute servers:add command."""
        server = self.get_store().register_server(self.ip, self.password, self.port)

        if self.json_output:
            self.output_json(server)
        else:
            self.print_success(f"Server {server['ip']} registered (port {server['ssh_port']})")


class ServersStatusCommand(ServerCommand):
    """Enable or disable deployments to a server."""

    def __init__(self, ip: str, status: str, verbose: bool = False, json_output: bool = False, settings=None):
        super().__init__(verbose=verbose, json_output=json_output, settings=settings)
        self.ip = ip
        self.status = status

    def execute(self) -> None:
        """Execute servers:enable / servers:disable command."""
        if not self.get_store().set_status(self.ip, self.status):
            raise ConfigurationError(
                f"Server '{self.ip}' not found",
                context="Run: wowzadeploy servers:list",
            )

        if self.json_output:
            self.output_json({"ip": self.ip, "status": self.status})
        else:
            self.print_success(f"Server {self.ip} is now {self.status}")


class ServersListCommand(ServerCommand):
    """List registered servers."""

    def execute(self) -> None:
        """Execute servers:list command."""
        servers = self.get_store().list_servers()

        if self.json_output:
            self.output_json({"servers": servers})
            return

        if not servers:
            self.print_dim("No servers registered")
            return

        table = Table(title="Streaming Servers", title_style="bold cyan")
        table.add_column("IP", style="cyan")
        table.add_column("SSH Port", justify="right")
        table.add_column("Status")

        for server in servers:
            status = str(server["status"])
            color = "green" if status == SERVER_STATUS_ACTIVE else "dim"
            table.add_row(
                escape(str(server["ip"])),
                str(server["ssh_port"]),
                f"[{color}]{escape(status)}[/{color}]",
            )

        self.console.print(table)


@click.command(name="servers:add")
@click.argument("ip")
@click.option("--password", "-p", prompt=True, hide_input=True, help="Root SSH password")
@click.option("--port", "-P", type=int, default=DEFAULT_SSH_PORT, show_default=True, help="SSH port")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def servers_add(ip, password, port, json_output):
    """
    Register a streaming server

    Examples:
        wowzadeploy servers:add 10.0.0.5 --port 2222
    """
    cmd = ServersAddCommand(ip, password, port, json_output=json_output)
    cmd.run()


@click.command(name="servers:list")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def servers_list(json_output):
    """List registered streaming servers"""
    cmd = ServersListCommand(json_output=json_output)
    cmd.run()


@click.command(name="servers:enable")
@click.argument("ip")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def servers_enable(ip, json_output):
    """Allow deployments to a server"""
    cmd = ServersStatusCommand(ip, SERVER_STATUS_ACTIVE, json_output=json_output)
    cmd.run()


@click.command(name="servers:disable")
@click.argument("ip")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def servers_disable(ip, json_output):
    """Block deployments to a server"""
    cmd = ServersStatusCommand(ip, SERVER_STATUS_INACTIVE, json_output=json_output)
    cmd.run()
