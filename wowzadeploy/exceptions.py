"""
WowzaDeploy Exception Hierarchy

Clean exception hierarchy for consistent error handling across the deployer and CLI.
"""

from typing import Optional


class WowzaDeployError(Exception):
    """Base exception for all WowzaDeploy errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(WowzaDeployError):
    """Raised when configuration is invalid or missing."""

    pass


class ValidationError(WowzaDeployError):
    """Raised when deployment parameters fail validation."""

    pass


class SSHError(WowzaDeployError):
    """Raised when the remote shell session cannot be established."""

    pass


class HostNotFoundError(ConfigurationError):
    """Raised when no active credential exists for a host."""

    def __init__(self, host: str):
        self.host = host
        message = f"Server not found or inactive: {host}"
        context = "Register it with: wowzadeploy servers:add <ip> --password <root-password>"
        super().__init__(message, context)


class RemoteCommandError(SSHError):
    """Raised when a remote command exits with a non-zero status."""

    def __init__(self, host: str, command: str, returncode: int, stderr: str = ""):
        self.host = host
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"Remote command failed on {host} (exit {returncode})"
        context = stderr.strip() or f"Command: {command}"
        super().__init__(message, context)


class ConfigNotFoundError(WowzaDeployError):
    """Raised when updating an application that has no descriptor file."""

    def __init__(self, app_name: str, host: str):
        self.app_name = app_name
        self.host = host
        message = f"Configuration not found for: {app_name}"
        context = f"Run: wowzadeploy create {app_name} --host {host}"
        super().__init__(message, context)
