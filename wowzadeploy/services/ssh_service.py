"""SSH service for executing commands on streaming servers."""

import os
import subprocess
import time
from typing import Optional

from wowzadeploy.constants import SSH_PASSWORD_ENV
from wowzadeploy.exceptions import SSHError
from wowzadeploy.models.results import SSHResult
from wowzadeploy.models.ssh import HostCredential, RemoteCommand


class SSHService:
    """Service for password-authenticated SSH operations."""

    def __init__(self, timeout: Optional[int] = None):
        """
        Initialize SSH service.

        Args:
            timeout: Command timeout in seconds (None waits indefinitely)
        """
        self.timeout = timeout

    def execute_command(self, credential: HostCredential, command: RemoteCommand) -> SSHResult:
        """
        Execute command on remote host via sshpass + ssh.

        Non-zero exits are reported in the result, not raised.

        Args:
            credential: Host credential
            command: Command to execute

        Returns:
            SSHResult with execution details

        Raises:
            SSHError: If ssh cannot be started or the timeout expires
        """
        ssh_cmd = credential.build_command(command.render())
        env = {**os.environ, SSH_PASSWORD_ENV: credential.ssh_password}

        start_time = time.time()

        try:
            result = subprocess.run(
                ssh_cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                env=env,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise SSHError(
                f"SSH command timed out after {self.timeout}s",
                context=f"Host: {credential.host}, Command: {command.describe()}",
            )
        except OSError as e:
            raise SSHError(
                f"SSH command failed: {e}",
                context=f"Host: {credential.host}, Command: {command.describe()}",
            )

        # Decode bytes ourselves so \r\n and \r survive
        try:
            stdout = result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SSHError(
                f"SSH command returned non-UTF-8 output: {e}",
                context=f"Host: {credential.host}, Command: {command.describe()}",
            )

        return SSHResult(
            returncode=result.returncode,
            stdout=stdout,
            stderr=result.stderr.decode("utf-8", errors="replace"),
            host=credential.host,
            command=command.describe(),
            duration_seconds=time.time() - start_time,
        )
