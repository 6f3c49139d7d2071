"""
Logging system for WowzaDeploy
Provides real-time logging to files with clean console output
"""

import re
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from rich.console import Console
from rich.markup import escape

from wowzadeploy.constants import LOG_DATE_FORMAT, LOG_TIME_FORMAT

console = Console()

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


class DeployLogger:
    """
    Manages logging for deployment operations
    - Writes all output to log files in real-time
    - Shows clean progress UI in console (unless verbose)
    - Captures errors with context
    """

    def __init__(
        self,
        app_name: str,
        operation: str,
        log_dir: Path,
        verbose: bool = False,
        quiet: bool = False,
    ):
        """
        Initialize logger

        Args:
            app_name: Name of the Wowza application (or 'servers')
            operation: Operation name (e.g., 'create', 'remove', 'update')
            log_dir: Root directory for log files
            verbose: If True, show all output in console
            quiet: If True, never print to console (JSON mode)
        """
        self.app_name = app_name
        self.operation = operation
        self.verbose = verbose
        self.quiet = quiet
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.current_step = ""
        self.has_errors = False
        self._secrets: list[str] = []
        self._lock = threading.Lock()

        # Structure: {log_dir}/{app}/{date}/{time}_{operation}.log
        now = datetime.now()
        app_logs_dir = Path(log_dir) / app_name / now.strftime(LOG_DATE_FORMAT)
        app_logs_dir.mkdir(parents=True, exist_ok=True)

        self.log_path = app_logs_dir / f"{now.strftime(LOG_TIME_FORMAT)}_{operation}.log"

        # Line buffered for real-time tailing
        self.log_file = open(self.log_path, "w", buffering=1, encoding="utf-8")

        self._write_log_header()

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
WowzaDeploy Log
{"=" * 80}
Application: {self.app_name}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def _print(self, message: str) -> None:
        if not self.quiet:
            console.print(message)

    def add_secret(self, secret: str) -> None:
        """Mask this value in everything written from now on."""
        if secret:
            self._secrets.append(secret)

    def mask(self, text: str) -> str:
        """Replace registered secrets with ***."""
        for secret in self._secrets:
            text = text.replace(secret, "***")
        return text

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        message = self.mask(message)
        timestamp = datetime.now().strftime("%H:%M:%S")
        log_line = f"[{timestamp}] [{level}] {message}\n"

        with self._lock:
            if self.log_file:
                self.log_file.write(log_line)
                self.log_file.flush()

        if self.verbose:
            safe = escape(message)
            if level == "ERROR":
                self._print(f"[red]{safe}[/red]")
            elif level == "WARNING":
                self._print(f"[yellow]{safe}[/yellow]")
            elif level == "DEBUG":
                self._print(f"[dim]{safe}[/dim]")
            else:
                self._print(safe)

    def log_command(self, command: str, host: str = ""):
        """Log a command being executed"""
        target = f" on {host}" if host else ""
        self.log(f"Executing{target}: {command}", "DEBUG")

    def log_output(self, output: str, stream: str = "stdout"):
        """
        Log command output to file (console only if verbose)

        Args:
            output: Command output (single line or multiline)
            stream: Stream name (stdout, stderr)
        """
        if not output:
            return

        clean_output = self.mask(ANSI_ESCAPE.sub("", output))

        with self._lock:
            if self.log_file:
                for line in clean_output.splitlines():
                    self.log_file.write(f"  [{stream}] {line}\n")
                self.log_file.flush()

        if self.verbose:
            self._print(escape(clean_output))

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., command that failed)
        """
        self.has_errors = True
        error = self.mask(error)
        context = self.mask(context) if context else context

        error_block = f"""
{"!" * 80}
ERROR OCCURRED
{"!" * 80}
{error}
"""
        if context:
            error_block += f"\nContext: {context}\n"

        error_block += f"{'!' * 80}\n\n"

        if self.log_file:
            self.log_file.write(error_block)
            self.log_file.flush()

        if not self.verbose:
            self._print("")

        self._print(f"[bold red]✗ {escape(error)}[/bold red]")
        if context:
            self._print(f"  [color(208)]{escape(context)}[/color(208)]")

    def step(self, step_name: str):
        """
        Start a new step

        Args:
            step_name: Name of the step
        """
        if self.current_step and not self.verbose:
            self._print("")

        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

        if not self.verbose:
            self._print(f"[color(214)]▶[/color(214)] [white]{escape(step_name)}[/white]")

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

        if not self.verbose:
            self._print(f"  [dim]✓ {escape(self.mask(message))}[/dim]")

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

        if not self.verbose:
            self._print(f"  [yellow]⚠[/yellow] [dim]{escape(self.mask(message))}[/dim]")

    def debug(self, message: str):
        """Log a debug message (file only unless verbose)"""
        self.log(message, "DEBUG")

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        """Context manager exit"""
        if exc_type is not None and exc_type is not SystemExit:
            self.log_error(
                str(exc_val) if exc_val else "Operation failed",
                context=f"{exc_type.__name__}",
            )
        self.close()
        return False
