"""
WowzaDeploy Services Layer

Credential lookup, SSH execution and Wowza configuration deployment.
"""

from .credential_service import CredentialStore, DatabaseCredentialStore
from .ssh_service import SSHService
from .wowza_config_service import WowzaConfigService

__all__ = [
    "CredentialStore",
    "DatabaseCredentialStore",
    "SSHService",
    "WowzaConfigService",
]
