"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import StaticPool, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, create_engine

from src.users_api.runtime.config.config_data import DatabaseConfig


class DbSessionService:
    """Owns the engine (and its connection pool) for one application instance."""

    def __init__(self, db_config: DatabaseConfig):
        """Initialize the shared database engine and session factory."""
        self._config = db_config
        engine_kwargs = self._engine_kwargs(db_config)
        logger.info(
            "Initializing {} database engine (in-memory: {})",
            db_config.backend,
            db_config.is_memory,
        )
        self._engine = create_engine(db_config.url, **engine_kwargs)

    @staticmethod
    def _engine_kwargs(db_config: DatabaseConfig) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"echo": db_config.echo}

        if db_config.backend == "sqlite":
            kwargs["connect_args"] = {
                "check_same_thread": False,  # sessions are used from the threadpool
                "timeout": 20,  # lock timeout
            }
            if db_config.is_memory:
                # One shared connection, otherwise every checkout sees an empty database.
                kwargs["poolclass"] = StaticPool
            return kwargs

        kwargs.update(
            {
                "pool_size": db_config.pool_size,
                "max_overflow": db_config.max_overflow,
                "pool_timeout": db_config.pool_timeout,
                "pool_recycle": db_config.pool_recycle,
                "pool_pre_ping": True,
            }
        )
        return kwargs

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # entities are built after commit
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(
                "Database transaction failed: {}: {}", type(e).__name__, e
            )
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except SQLAlchemyError as e:
            logger.error("Database health check failed: {}: {}", type(e).__name__, e)
            return False

    def dispose(self) -> None:
        """Close every pooled connection."""
        self._engine.dispose()
