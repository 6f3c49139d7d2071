"""
Database connection for the credential store.

Server credentials live in the `wowza_servers` table shared with the
streaming control panel; rows are keyed by server IP.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, Integer, String, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from wowzadeploy.constants import (
    DEFAULT_SSH_PORT,
    SERVER_STATUS_ACTIVE,
    SERVERS_TABLE,
)
from wowzadeploy.settings import Settings

Base = declarative_base()

_engine = None
_session_factory = None


class WowzaServer(Base):
    """Streaming server and its root SSH credential."""

    __tablename__ = SERVERS_TABLE

    id = Column(Integer, primary_key=True, index=True)
    ip = Column(String(45), unique=True, nullable=False, index=True)
    # Column names follow the control panel schema
    ssh_password = Column("senha_root", String(255), nullable=False)
    ssh_port = Column("porta_ssh", Integer, nullable=False, default=DEFAULT_SSH_PORT)
    status = Column(String(20), nullable=False, default=SERVER_STATUS_ACTIVE, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self) -> str:
        return f"WowzaServer(ip={self.ip}, port={self.ssh_port}, status={self.status})"


def configure(database_url: Optional[str] = None):
    """
    (Re)bind the module session factory to a database URL.

    Args:
        database_url: SQLAlchemy URL (defaults to Settings.from_env().database_url)

    Returns:
        The session factory
    """
    global _engine, _session_factory

    _engine = create_engine(database_url or Settings.from_env().database_url)
    _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    return _session_factory


def get_engine():
    """Get database engine, creating it on first use."""
    if _engine is None:
        configure()
    return _engine


def get_db_session():
    """Get database session."""
    if _session_factory is None:
        configure()
    return _session_factory()


def init_db() -> None:
    """Create missing tables."""
    Base.metadata.create_all(bind=get_engine())
