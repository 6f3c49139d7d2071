"""Pytest configuration and fixtures."""

import subprocess
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from wowzadeploy.models import DeploymentSpec, HostCredential, RemoteCommand, SSHResult
from wowzadeploy.services import WowzaConfigService
from wowzadeploy.settings import Settings


class FakeCredentialStore:
    """In-memory credential store keyed by host address."""

    def __init__(self, credentials: Optional[Dict[str, HostCredential]] = None):
        self.credentials = credentials or {}
        self.lookups: List[str] = []

    def lookup(self, host_address: str) -> Optional[HostCredential]:
        self.lookups.append(host_address)
        return self.credentials.get(host_address)


class RecordingSSHService:
    """Records commands and answers them with a responder (success by default)."""

    def __init__(self, responder: Optional[Callable[[RemoteCommand], SSHResult]] = None):
        self.responder = responder
        self.calls: List[Tuple[HostCredential, RemoteCommand]] = []

    def execute_command(self, credential: HostCredential, command: RemoteCommand) -> SSHResult:
        self.calls.append((credential, command))
        if self.responder:
            return self.responder(command)
        return SSHResult(returncode=0, host=credential.host, command=command.render())

    @property
    def commands(self) -> List[RemoteCommand]:
        return [command for _, command in self.calls]


class LocalShellService:
    """Runs remote commands through the local sh, as the remote login shell would."""

    def __init__(self, timeout: Optional[int] = None):
        self.timeout = timeout
        self.commands: List[RemoteCommand] = []

    def execute_command(self, credential: HostCredential, command: RemoteCommand) -> SSHResult:
        self.commands.append(command)
        result = subprocess.run(
            ["sh", "-c", command.render()],
            capture_output=True,
        )
        return SSHResult(
            returncode=result.returncode,
            stdout=result.stdout.decode("utf-8"),
            stderr=result.stderr.decode("utf-8", errors="replace"),
            host=credential.host,
            command=command.render(),
        )


HOST = "10.0.0.5"


@pytest.fixture
def credential() -> HostCredential:
    return HostCredential(host=HOST, ssh_password="r00t'pw", ssh_port=2222)


@pytest.fixture
def credential_store(credential) -> FakeCredentialStore:
    return FakeCredentialStore({HOST: credential})


@pytest.fixture
def spec() -> DeploymentSpec:
    return DeploymentSpec(
        name="clienteA",
        host_address=HOST,
        max_bitrate=6000,
        max_viewers=500,
        publish_password="s3cr3t",
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        wowza_base_path=str(tmp_path / "conf"),
        streaming_home=str(tmp_path / "streaming"),
        database_url=f"sqlite:///{tmp_path / 'servers.db'}",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def local_service(settings, credential_store) -> WowzaConfigService:
    """Deployer whose 'remote host' is the local filesystem under tmp_path."""
    return WowzaConfigService(
        credential_store=credential_store,
        ssh_service=LocalShellService(),
        base_path=settings.wowza_base_path,
        streaming_home=settings.streaming_home,
    )
