"""
SSH Models

Dataclass models for remote command execution.
"""

import shlex
from dataclasses import dataclass, field
from typing import Optional

from wowzadeploy.constants import DEFAULT_SSH_PORT, DEFAULT_SSH_USER


@dataclass
class HostCredential:
    """Password credential for a streaming server."""

    host: str
    ssh_password: str
    ssh_port: int = DEFAULT_SSH_PORT
    user: str = DEFAULT_SSH_USER

    @property
    def connection_string(self) -> str:
        """Get SSH connection string (user@host)."""
        return f"{self.user}@{self.host}"

    @property
    def ssh_command_prefix(self) -> list[str]:
        """
        Get sshpass/ssh command prefix for subprocess.

        The password is read by sshpass from the SSHPASS environment
        variable, so it never shows up in the argv.
        """
        return [
            "sshpass",
            "-e",
            "ssh",
            "-o",
            "StrictHostKeyChecking=no",
            "-o",
            "LogLevel=ERROR",
            "-p",
            str(self.ssh_port),
            self.connection_string,
        ]

    def build_command(self, remote_command: str) -> list[str]:
        """Build full SSH command with remote command."""
        return self.ssh_command_prefix + [remote_command]

    def __repr__(self) -> str:
        return f"HostCredential(host={self.host}, user={self.user}, port={self.ssh_port})"


@dataclass
class RemoteCommand:
    """
    A command to run on a remote host.

    Each argv element is quoted on its own when the command is rendered for
    the remote shell, so names, paths and file contents are never spliced
    into the command line unescaped.
    """

    argv: list[str] = field(default_factory=list)
    stdout_path: Optional[str] = None

    def render(self) -> str:
        """Render the command line for the remote shell."""
        line = shlex.join(self.argv)
        if self.stdout_path:
            line += f" > {shlex.quote(self.stdout_path)}"
        return line

    def describe(self, max_length: int = 120) -> str:
        """Short form for logs (file contents can be long)."""
        rendered = self.render()
        if len(rendered) <= max_length:
            return rendered
        return rendered[:max_length] + "..."

    def __str__(self) -> str:
        return self.render()


def make_directory(path: str) -> RemoteCommand:
    """mkdir -p <path>"""
    return RemoteCommand(["mkdir", "-p", path])


def remove_tree(path: str) -> RemoteCommand:
    """rm -rf <path>"""
    return RemoteCommand(["rm", "-rf", path])


def write_file(path: str, content: str) -> RemoteCommand:
    """printf %s <content> > <path> (stores content byte-for-byte)."""
    return RemoteCommand(["printf", "%s", content], stdout_path=path)


def read_file(path: str) -> RemoteCommand:
    """cat <path>"""
    return RemoteCommand(["cat", path])


def file_exists_probe(path: str, found: str, missing: str) -> RemoteCommand:
    """Print `found` if <path> is a regular file, `missing` otherwise."""
    script = 'if test -f "$1"; then echo "$2"; else echo "$3"; fi'
    return RemoteCommand(["sh", "-c", script, "sh", path, found, missing])
