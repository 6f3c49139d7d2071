"""
Deployment Models

Dataclass models describing a Wowza application deployment.
"""

import posixpath
import re
from dataclasses import dataclass
from typing import Optional

from wowzadeploy.constants import DEFAULT_MAX_BITRATE, DEFAULT_MAX_VIEWERS
from wowzadeploy.exceptions import ValidationError

# Application names become directory names and shell arguments on the server
APP_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


def validate_app_name(name: str) -> str:
    """
    Validate an application name.

    Args:
        name: Application name (e.g. 'clienteA')

    Returns:
        The name, unchanged

    Raises:
        ValidationError: If the name is empty or not a single path segment
    """
    if not name or not APP_NAME_PATTERN.match(name):
        raise ValidationError(
            f"Invalid application name: {name!r}",
            context="Use letters, digits, '.', '_' or '-' (must not start with '.')",
        )
    return name


def _validate_limit(field_name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{field_name} must be a positive integer, got {value!r}")


@dataclass
class DeploymentSpec:
    """Parameters for one application deployment."""

    name: str
    host_address: str
    publish_password: str
    max_bitrate: int = DEFAULT_MAX_BITRATE
    max_viewers: int = DEFAULT_MAX_VIEWERS

    def __post_init__(self):
        validate_app_name(self.name)
        if not self.host_address:
            raise ValidationError("Host address cannot be empty")
        _validate_limit("max_bitrate", self.max_bitrate)
        _validate_limit("max_viewers", self.max_viewers)
        if not self.publish_password:
            raise ValidationError("Publish password cannot be empty")
        if "\n" in self.publish_password or "\r" in self.publish_password:
            raise ValidationError("Publish password cannot contain line breaks")

    def __repr__(self) -> str:
        return (
            f"DeploymentSpec(name={self.name}, host={self.host_address}, "
            f"bitrate={self.max_bitrate}, viewers={self.max_viewers})"
        )


@dataclass
class ConfigUpdate:
    """Limits to change on an existing deployment. None leaves a limit as is."""

    max_bitrate: Optional[int] = None
    max_viewers: Optional[int] = None

    def __post_init__(self):
        if self.max_bitrate is not None:
            _validate_limit("max_bitrate", self.max_bitrate)
        if self.max_viewers is not None:
            _validate_limit("max_viewers", self.max_viewers)

    @property
    def is_empty(self) -> bool:
        """Check if no limit was supplied."""
        return self.max_bitrate is None and self.max_viewers is None


@dataclass
class RemoteFile:
    """A file to materialize on the remote host."""

    path: str
    content: str

    @property
    def name(self) -> str:
        """Get file name without directory."""
        return posixpath.basename(self.path)

    def __repr__(self) -> str:
        return f"RemoteFile(path={self.path}, size={len(self.content)})"
