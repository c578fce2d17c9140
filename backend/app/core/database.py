"""
Database configuration and session management for Clipper LMS.

Sets up the SQLAlchemy declarative base and the ``Database`` object that owns
the engine and session factory. A ``Database`` is built once per application
(see ``app.main.create_app``), kept on ``app.state`` and handed to request
handlers through ``get_db``.
"""

from typing import Generator, Optional, TYPE_CHECKING
from sqlalchemy import create_engine, event, MetaData, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi import Request
import logging

from .config import Settings

if TYPE_CHECKING:
    from app.models.user import User


# Configure logging
logger = logging.getLogger(__name__)


# SQLAlchemy metadata conventions for better constraint naming
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=convention)


# Base class for models
Base = declarative_base(metadata=metadata)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, *, echo: bool = False, pool_size: int = 10, max_overflow: int = 20) -> Engine:
    """
    Create an engine suited to the database behind ``url``.

    In-memory SQLite shares a single connection across threads; file-backed
    SQLite and other backends get a regular pool.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}, "echo": echo}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=pool_size,
        max_overflow=max_overflow,
        echo=echo,
    )


class Database:
    """
    Owns the engine and session factory for one application instance.
    """

    def __init__(self, url: str, *, echo: bool = False, pool_size: int = 10, max_overflow: int = 20):
        self.url = url
        self.engine = build_engine(url, echo=echo, pool_size=pool_size, max_overflow=max_overflow)
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            echo=settings.DEBUG,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )

    def session(self) -> Session:
        return self.session_factory()

    def create_all_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("All database tables created successfully")

    def drop_all_tables(self) -> None:
        """Drop all database tables. USE WITH CAUTION!"""
        Base.metadata.drop_all(bind=self.engine)
        logger.warning("All database tables dropped")

    def check_connection(self) -> bool:
        """
        Check if database is accessible.

        Returns:
            bool: True if database is accessible, False otherwise
        """
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database connection pool disposed")


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency to get database session.

    Yields:
        Session: SQLAlchemy session bound to the application's database
    """
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(db: Session, settings: Settings) -> Optional["User"]:
    """
    Initialize database with required data.

    Creates the bootstrap admin user when ``FIRST_ADMIN_EMAIL`` and
    ``FIRST_ADMIN_PASSWORD`` are configured and no such user exists yet.

    Args:
        db: Database session
        settings: Application settings

    Returns:
        The admin user that was created, if any
    """
    from app.models.user import User, UserRole
    from app.core.security import get_password_hash

    if not settings.admin_bootstrap_enabled:
        return None

    admin_user = db.query(User).filter(
        User.email == settings.FIRST_ADMIN_EMAIL
    ).first()
    if admin_user:
        return None

    admin_user = User(
        email=settings.FIRST_ADMIN_EMAIL,
        name=settings.FIRST_ADMIN_NAME,
        hashed_password=get_password_hash(settings.FIRST_ADMIN_PASSWORD, settings),
        role=UserRole.ADMIN.value,
    )
    db.add(admin_user)
    db.commit()
    db.refresh(admin_user)
    logger.info(f"Admin user created: {settings.FIRST_ADMIN_EMAIL}")
    return admin_user
