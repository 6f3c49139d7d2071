"""
Credential Store

Resolves a streaming server IP to the root SSH credential used for deployments.
"""

from typing import Callable, Dict, List, Optional, Protocol

from wowzadeploy.constants import (
    DEFAULT_SSH_PORT,
    DEFAULT_SSH_USER,
    SERVER_STATUS_ACTIVE,
)
from wowzadeploy.database import WowzaServer, get_db_session
from wowzadeploy.exceptions import ValidationError
from wowzadeploy.models.ssh import HostCredential


class CredentialStore(Protocol):
    """Anything that can map a host address to an active credential."""

    def lookup(self, host_address: str) -> Optional[HostCredential]:
        ...


class DatabaseCredentialStore:
    """
    Credential store backed by the `wowza_servers` table.

    Responsibilities:
    - Active credential lookup by IP
    - Server registration and status changes
    - Server listing (passwords never leave the store)
    """

    def __init__(
        self,
        session_factory: Optional[Callable] = None,
        ssh_user: str = DEFAULT_SSH_USER,
    ):
        """
        Initialize credential store.

        Args:
            session_factory: Callable returning a SQLAlchemy session
            ssh_user: Account used for every SSH session
        """
        self.session_factory = session_factory or get_db_session
        self.ssh_user = ssh_user

    def lookup(self, host_address: str) -> Optional[HostCredential]:
        """
        Get credential for an active server.

        Args:
            host_address: Server IP

        Returns:
            HostCredential or None if the server is unknown or inactive
        """
        db = self.session_factory()
        try:
            server = (
                db.query(WowzaServer)
                .filter(
                    WowzaServer.ip == host_address,
                    WowzaServer.status == SERVER_STATUS_ACTIVE,
                )
                .first()
            )
            if not server:
                return None

            return HostCredential(
                host=server.ip,
                ssh_password=server.ssh_password,
                ssh_port=server.ssh_port or DEFAULT_SSH_PORT,
                user=self.ssh_user,
            )
        finally:
            db.close()

    def register_server(
        self,
        ip: str,
        ssh_password: str,
        ssh_port: int = DEFAULT_SSH_PORT,
        status: str = SERVER_STATUS_ACTIVE,
    ) -> Dict[str, object]:
        """
        Add a server or replace its credential.

        Args:
            ip: Server IP
            ssh_password: Root password
            ssh_port: SSH port
            status: Server status

        Returns:
            Server summary dict (without password)
        """
        if not ip:
            raise ValidationError("Server IP cannot be empty")
        if not ssh_password:
            raise ValidationError("SSH password cannot be empty")
        if not 1 <= ssh_port <= 65535:
            raise ValidationError(f"SSH port must be between 1 and 65535, got {ssh_port}")

        db = self.session_factory()
        try:
            server = db.query(WowzaServer).filter(WowzaServer.ip == ip).first()
            if server is None:
                server = WowzaServer(ip=ip)
                db.add(server)

            server.ssh_password = ssh_password
            server.ssh_port = ssh_port
            server.status = status
            db.commit()
            return self._summary(server)
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def set_status(self, ip: str, status: str) -> bool:
        """
        Change a server status.

        Returns:
            True if the server exists
        """
        db = self.session_factory()
        try:
            server = db.query(WowzaServer).filter(WowzaServer.ip == ip).first()
            if server is None:
                return False
            server.status = status
            db.commit()
            return True
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def list_servers(self) -> List[Dict[str, object]]:
        """List all servers ordered by IP."""
        db = self.session_factory()
        try:
            servers = db.query(WowzaServer).order_by(WowzaServer.ip).all()
            return [self._summary(server) for server in servers]
        finally:
            db.close()

    @staticmethod
    def _summary(server: WowzaServer) -> Dict[str, object]:
        return {
            "ip": server.ip,
            "ssh_port": server.ssh_port,
            "status": server.status,
        }
