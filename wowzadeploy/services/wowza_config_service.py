"""
Wowza Configuration Service

Materializes, patches and removes Wowza Streaming Engine application
configuration on remote servers over SSH.
"""

import posixpath
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from wowzadeploy.constants import (
    APPLICATION_XML,
    BITRATE_PROPERTIES,
    DEFAULT_STREAMING_HOME,
    DEFAULT_WOWZA_BASE_PATH,
    REMOTE_EXISTS,
    REMOTE_NOT_FOUND,
    SSH_BENIGN_STDERR_MARKER,
    SSH_TRANSPORT_FAILURE_CODE,
    SSHPASS_FAILURE_MESSAGES,
    SUCCESS_CONFIG_CREATED,
    SUCCESS_CONFIG_REMOVED,
    SUCCESS_CONFIG_UPDATED,
    VIEWER_PROPERTIES,
)
from wowzadeploy.database import configure
from wowzadeploy.exceptions import (
    ConfigNotFoundError,
    HostNotFoundError,
    RemoteCommandError,
    SSHError,
)
from wowzadeploy.logger import DeployLogger
from wowzadeploy.models.deployment import (
    ConfigUpdate,
    DeploymentSpec,
    RemoteFile,
    validate_app_name,
)
from wowzadeploy.models.ssh import (
    RemoteCommand,
    file_exists_probe,
    make_directory,
    read_file,
    remove_tree,
    write_file,
)
from wowzadeploy.settings import Settings
from wowzadeploy.templates import patch_property, render_files

from .credential_service import CredentialStore, DatabaseCredentialStore
from .ssh_service import SSHService


class WowzaConfigService:
    """
    Remote Wowza configuration deployer.

    Responsibilities:
    - Create the application directory, its four config files and the streaming home
    - Patch bitrate/viewer limits in an existing Application.xml
    - Remove an application's directories
    - Resolve credentials and run every command over SSH

    Nothing is cached: each remote command resolves its credential again.
    """

    def __init__(
        self,
        credential_store: CredentialStore,
        ssh_service: Optional[SSHService] = None,
        base_path: str = DEFAULT_WOWZA_BASE_PATH,
        streaming_home: str = DEFAULT_STREAMING_HOME,
        logger: Optional[DeployLogger] = None,
    ):
        """
        Initialize configuration service.

        Args:
            credential_store: Maps host address to credential
            ssh_service: Remote command executor
            base_path: Wowza conf directory holding one directory per application
            streaming_home: Directory holding one content directory per application
            logger: Optional operation logger
        """
        self.credential_store = credential_store
        self.ssh_service = ssh_service or SSHService()
        self.base_path = base_path
        self.streaming_home = streaming_home
        self.logger = logger

    @classmethod
    def from_settings(
        cls, settings: Settings, logger: Optional[DeployLogger] = None
    ) -> "WowzaConfigService":
        """Build a service wired to the database credential store."""
        session_factory = configure(settings.database_url)
        return cls(
            credential_store=DatabaseCredentialStore(
                session_factory=session_factory, ssh_user=settings.ssh_user
            ),
            ssh_service=SSHService(timeout=settings.ssh_timeout),
            base_path=settings.wowza_base_path,
            streaming_home=settings.streaming_home,
            logger=logger,
        )

    def app_dir(self, name: str) -> str:
        """Get remote application directory."""
        return posixpath.join(self.base_path, validate_app_name(name))

    def streaming_dir(self, name: str) -> str:
        """Get remote streaming content directory."""
        return posixpath.join(self.streaming_home, validate_app_name(name))

    def render(self, spec: DeploymentSpec) -> List[RemoteFile]:
        """Render the four configuration files without touching the server."""
        return render_files(
            spec, self.app_dir(spec.name), storage_dir=self.streaming_dir(spec.name)
        )

    def create_config(self, spec: DeploymentSpec) -> bool:
        """
        Create the Wowza configuration for an application.

        The application directory is created first, then the four files are
        written in parallel, then the streaming directory is created. A failure
        leaves whatever was already written in place.

        Args:
            spec: Deployment parameters

        Returns:
            True on success

        Raises:
            HostNotFoundError: If the server has no active credential
            SSHError: If a remote command fails
        """
        if self.logger:
            self.logger.add_secret(spec.publish_password)
            self.logger.step(f"Creating {spec.name} on {spec.host_address}")

        self.run_remote(make_directory(self.app_dir(spec.name)), spec.host_address)

        files = self.render(spec)
        with ThreadPoolExecutor(max_workers=len(files)) as executor:
            futures = [
                executor.submit(self.write_remote, f.path, f.content, spec.host_address)
                for f in files
            ]

        # Re-raise the first failure in submission order
        for future in futures:
            future.result()

        self.run_remote(make_directory(self.streaming_dir(spec.name)), spec.host_address)

        if self.logger:
            self.logger.success(SUCCESS_CONFIG_CREATED.format(name=spec.name))
        return True

    def remove_config(self, name: str, host_address: str) -> bool:
        """
        Remove an application's configuration and streaming directories.

        Missing directories are not an error.

        Returns:
            True on success
        """
        app_dir = self.app_dir(name)
        streaming_dir = self.streaming_dir(name)

        if self.logger:
            self.logger.step(f"Removing {name} from {host_address}")

        self.run_remote(remove_tree(app_dir), host_address)
        self.run_remote(remove_tree(streaming_dir), host_address)

        if self.logger:
            self.logger.success(SUCCESS_CONFIG_REMOVED.format(name=name))
        return True

    def config_exists(self, name: str, host_address: str) -> bool:
        """Check if the application's Application.xml exists on the server."""
        xml_path = posixpath.join(self.app_dir(name), APPLICATION_XML)
        output = self.run_remote(
            file_exists_probe(xml_path, REMOTE_EXISTS, REMOTE_NOT_FOUND), host_address
        )
        return output.strip() == REMOTE_EXISTS

    def update_config(self, name: str, host_address: str, updates: ConfigUpdate) -> bool:
        """
        Update bitrate and/or viewer limits of an existing application.

        Each limit is written to both properties that carry it. Everything
        else in Application.xml is left byte-identical.

        Args:
            name: Application name
            host_address: Server IP
            updates: Limits to change

        Returns:
            True on success

        Raises:
            ConfigNotFoundError: If Application.xml does not exist (nothing is written)
        """
        xml_path = posixpath.join(self.app_dir(name), APPLICATION_XML)

        if self.logger:
            self.logger.step(f"Updating {name} on {host_address}")

        if not self.config_exists(name, host_address):
            raise ConfigNotFoundError(name, host_address)

        if updates.is_empty:
            if self.logger:
                self.logger.warning("No limits supplied, nothing to update")
            return True

        original = self.read_remote(xml_path, host_address)
        patched = original

        if updates.max_bitrate is not None:
            for property_name in BITRATE_PROPERTIES:
                patched = self._patch(patched, xml_path, property_name, updates.max_bitrate)

        if updates.max_viewers is not None:
            for property_name in VIEWER_PROPERTIES:
                patched = self._patch(patched, xml_path, property_name, updates.max_viewers)

        if patched != original:
            self.write_remote(xml_path, patched, host_address)
        elif self.logger:
            self.logger.log(f"{xml_path} already up to date")

        if self.logger:
            self.logger.success(SUCCESS_CONFIG_UPDATED.format(name=name))
        return True

    def _patch(self, xml: str, xml_path: str, property_name: str, value: int) -> str:
        patched, count = patch_property(xml, property_name, value)
        if count == 0 and self.logger:
            self.logger.warning(f"Property {property_name} not found in {xml_path}")
        return patched

    def read_remote(self, path: str, host_address: str) -> str:
        """Read a remote file."""
        return self.run_remote(read_file(path), host_address)

    def write_remote(self, path: str, content: str, host_address: str) -> None:
        """
        Write content to a remote file, replacing it.

        Content is passed as a single quoted shell argument (single quotes
        become '"'"') and stored byte-for-byte.
        """
        self.run_remote(write_file(path, content), host_address)
        if self.logger:
            self.logger.log(f"Wrote {path} ({len(content)} chars)")

    def run_remote(self, command: RemoteCommand, host_address: str) -> str:
        """
        Run a command on a server.

        Diagnostic output of a successful command is logged, never raised.

        Args:
            command: Remote command
            host_address: Server IP

        Returns:
            Captured stdout

        Raises:
            HostNotFoundError: If the server is unknown or inactive
            SSHError: If the SSH login or session fails (sshpass exit 5/6, ssh exit 255)
            RemoteCommandError: If the command exits non-zero
        """
        credential = self.credential_store.lookup(host_address)
        if credential is None:
            raise HostNotFoundError(host_address)

        if self.logger:
            self.logger.log_command(command.describe(), host_address)

        result = self.ssh_service.execute_command(credential, command)

        if self.logger:
            self.logger.log_output(result.stdout)
            self.logger.log_output(result.stderr, "stderr")

        if result.returncode in SSHPASS_FAILURE_MESSAGES:
            raise SSHError(
                f"SSH login to {host_address} failed: {SSHPASS_FAILURE_MESSAGES[result.returncode]}",
                context=result.stderr.strip() or f"Command: {command.describe()}",
            )
        if result.returncode == SSH_TRANSPORT_FAILURE_CODE:
            raise SSHError(
                f"SSH connection to {host_address} failed",
                context=result.stderr.strip() or f"Command: {command.describe()}",
            )
        if result.is_failure:
            raise RemoteCommandError(
                host_address, command.describe(), result.returncode, result.stderr
            )

        self._report_stderr(result.stderr)
        return result.stdout

    def _report_stderr(self, stderr: str) -> None:
        if not stderr or not self.logger:
            return
        if SSH_BENIGN_STDERR_MARKER in stderr:
            self.logger.debug(stderr.strip())
        else:
            self.logger.warning(f"SSH Warning: {stderr.strip()}")
