"""
Runtime settings

Environment-driven configuration for the deployer and CLI.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from wowzadeploy.constants import (
    DEFAULT_DATABASE_URL,
    DEFAULT_LOG_DIR,
    DEFAULT_SSH_USER,
    DEFAULT_STREAMING_HOME,
    DEFAULT_WOWZA_BASE_PATH,
)
from wowzadeploy.exceptions import ConfigurationError


@dataclass
class Settings:
    """Deployer settings (remote layout, SSH and credential store)."""

    wowza_base_path: str = DEFAULT_WOWZA_BASE_PATH
    streaming_home: str = DEFAULT_STREAMING_HOME
    ssh_user: str = DEFAULT_SSH_USER
    ssh_timeout: Optional[int] = None
    database_url: str = DEFAULT_DATABASE_URL
    log_dir: Path = field(default_factory=lambda: Path(DEFAULT_LOG_DIR).expanduser())

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        Raises:
            ConfigurationError: If a numeric variable is malformed
        """
        timeout = os.getenv("WOWZADEPLOY_SSH_TIMEOUT")
        if timeout:
            try:
                timeout_value: Optional[int] = int(timeout)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid WOWZADEPLOY_SSH_TIMEOUT: {timeout!r}",
                    context="Expected a number of seconds",
                )
            if timeout_value <= 0:
                raise ConfigurationError(
                    f"Invalid WOWZADEPLOY_SSH_TIMEOUT: {timeout!r}",
                    context="Expected a positive number of seconds",
                )
        else:
            timeout_value = None

        return cls(
            wowza_base_path=os.getenv("WOWZA_BASE_PATH", DEFAULT_WOWZA_BASE_PATH),
            streaming_home=os.getenv("WOWZADEPLOY_STREAMING_HOME", DEFAULT_STREAMING_HOME),
            ssh_user=os.getenv("WOWZADEPLOY_SSH_USER", DEFAULT_SSH_USER),
            ssh_timeout=timeout_value,
            database_url=os.getenv("WOWZADEPLOY_DB_URL", DEFAULT_DATABASE_URL),
            log_dir=Path(os.getenv("WOWZADEPLOY_LOG_DIR", DEFAULT_LOG_DIR)).expanduser(),
        )
