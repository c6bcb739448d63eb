import logging
import sqlite3
from typing import Iterator, Optional

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from catalog_api.core.config import settings

logger = logging.getLogger(__name__)

# Global tunnel instance
_tunnel = None
_engine = None


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless enabled per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _mysql_url(host: str, port: int) -> str:
    return (
        f"mysql+pymysql://{settings.DB_USER}:{settings.DB_PASSWORD}"
        f"@{host}:{port}/{settings.DB_NAME}?charset=utf8mb4"
    )


# Handle SSH Tunnel if needed
def get_engine() -> Engine:
    global _tunnel, _engine

    if _engine is not None:
        return _engine

    if settings.USE_SSH:
        from sshtunnel import SSHTunnelForwarder

        if _tunnel is None:
            _tunnel = SSHTunnelForwarder(
                (settings.SSH_HOST, settings.SSH_PORT),
                ssh_username=settings.SSH_USER,
                ssh_password=settings.SSH_PASSWORD,
                remote_bind_address=(settings.DB_HOST, settings.DB_PORT),
                set_keepalive=60  # Send keepalive packets every 60 seconds
            )
            _tunnel.start()
            logger.info("SSH tunnel open on local port %s", _tunnel.local_bind_port)

        # Update connection URL for local port
        _engine = create_engine(_mysql_url("127.0.0.1", _tunnel.local_bind_port), pool_pre_ping=True)
        return _engine

    if settings.DATABASE_URL:
        db_url = settings.DATABASE_URL
    elif settings.mysql_configured:
        db_url = _mysql_url(settings.DB_HOST, settings.DB_PORT)
    else:
        db_url = "sqlite:///./catalog.db"

    # SQLite fix for multithreading
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}

    _engine = create_engine(db_url, connect_args=connect_args, pool_pre_ping=not db_url.startswith("sqlite"))
    return _engine


engine = get_engine()


def init_db(bind: Optional[Engine] = None) -> None:
    """Create missing tables and constraints for every registered model."""
    # Register table metadata before create_all
    from catalog_api import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


def get_db() -> Iterator[Session]:
    with Session(engine) as session:
        yield session
