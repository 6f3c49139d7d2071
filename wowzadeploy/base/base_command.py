"""
Base Command Class

Abstract base for all WowzaDeploy CLI commands.
Provides common functionality and structure.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from rich.console import Console
from rich.markup import escape

from wowzadeploy.exceptions import WowzaDeployError
from wowzadeploy.logger import DeployLogger
from wowzadeploy.services import WowzaConfigService
from wowzadeploy.settings import Settings
from wowzadeploy.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Settings and logger initialization
    - Header display
    - Error handling
    - JSON output support
    """

    def __init__(
        self,
        verbose: bool = False,
        json_output: bool = False,
        settings: Optional[Settings] = None,
    ):
        self.verbose = verbose
        self.json_output = json_output
        self.console = Console()
        self.settings = settings or Settings.from_env()
        self.logger: Optional[DeployLogger] = None

    def init_logger(self, app_name: str, command_name: str) -> DeployLogger:
        """
        Initialize command logger (console output muted in JSON mode).

        Args:
            app_name: Application name (use "servers" for server commands)
            command_name: Command name

        Returns:
            DeployLogger instance
        """
        self.logger = DeployLogger(
            app_name,
            command_name,
            log_dir=self.settings.log_dir,
            verbose=self.verbose,
            quiet=self.json_output,
        )
        return self.logger

    def get_config_service(self) -> WowzaConfigService:
        """Build the deployer bound to this command's settings and logger."""
        return WowzaConfigService.from_settings(self.settings, logger=self.logger)

    def output_json(self, data: Dict[str, Any], exit_code: int = 0) -> None:
        """
        Output data as JSON and exit.

        Args:
            data: Data to output as JSON
            exit_code: Exit code (0 for success, non-zero for error)
        """
        print(json.dumps(data, indent=2))
        if exit_code != 0:
            raise SystemExit(exit_code)

    def output_json_error(
        self, error: str, details: Optional[Dict[str, Any]] = None, exit_code: int = 1
    ) -> None:
        """Output error as JSON and exit."""
        error_data: Dict[str, Any] = {"error": error}
        if details:
            error_data["details"] = details
        self.output_json(error_data, exit_code=exit_code)

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        app: Optional[str] = None,
        host: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in JSON or verbose mode)."""
        if not self.verbose and not self.json_output:
            show_header(
                title=title,
                subtitle=subtitle,
                app=app,
                host=host,
                details=details,
                console=self.console,
            )

    def print_success(self, message: str) -> None:
        """Print success message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[green]✓ {escape(message)}[/green]")

    def print_error(self, message: str) -> None:
        """Print error message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[red]✗ {escape(message)}[/red]")

    def print_dim(self, message: str) -> None:
        """Print dim message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def confirm(self, question: str, default: bool = False) -> bool:
        """
        Ask for user confirmation.

        Args:
            question: Question to ask
            default: Default answer

        Returns:
            True if confirmed
        """
        default_str = "y" if default else "n"
        self.console.print(
            f"{question} [bold bright_white]\\[y/n][/bold bright_white] [dim]({default_str})[/dim]: ",
            end="",
        )
        answer = input().strip().lower()

        if not answer:
            return default

        return answer in ["y", "yes"]

    @abstractmethod
    def execute(self) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self) -> None:
        """Run command with error handling."""
        try:
            self.execute()
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            self._close_logger()
            raise SystemExit(130)
        except SystemExit:
            self._close_logger()
            raise
        except WowzaDeployError as e:
            self._fail(type(e).__name__, e.message, e.context)
        except Exception as e:
            self._fail(type(e).__name__, str(e), None)
        else:
            self._close_logger()

    def _fail(self, error_type: str, message: str, context: Optional[str]) -> None:
        if self.json_output:
            details = {"type": error_type}
            if context:
                details["context"] = context
            self._close_logger(message, context)
            self.output_json_error(message, details=details)

        if self.logger:
            self.logger.log_error(message, context=context)
            self.console.print(f"\n[dim]Logs saved to:[/dim] {self.logger.log_path}\n")
        else:
            self.print_error(message)
            if context:
                self.print_dim(f"Context: {context}")
        self._close_logger()
        raise SystemExit(1)

    def _close_logger(self, error: Optional[str] = None, context: Optional[str] = None) -> None:
        if self.logger:
            if error:
                self.logger.log_error(error, context=context)
            self.logger.close()
