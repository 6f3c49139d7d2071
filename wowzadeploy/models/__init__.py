"""
WowzaDeploy Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .results import SSHResult
from .deployment import (
    DeploymentSpec,
    ConfigUpdate,
    RemoteFile,
    validate_app_name,
)
from .ssh import (
    HostCredential,
    RemoteCommand,
)

__all__ = [
    # Results
    "SSHResult",
    # Deployment
    "DeploymentSpec",
    "ConfigUpdate",
    "RemoteFile",
    "validate_app_name",
    # SSH
    "HostCredential",
    "RemoteCommand",
]
