"""Database initialization script."""

from src.users_api.core.services.database.db_manage import DbManageService
from src.users_api.core.services.database.db_session import DbSessionService
from src.users_api.runtime.context import get_config


def init_db() -> None:
    """Create all database tables for the configured database."""
    database_service = DbSessionService(get_config().database)
    try:
        DbManageService(database_service.engine).create_all()
    finally:
        database_service.dispose()


if __name__ == "__main__":
    init_db()
