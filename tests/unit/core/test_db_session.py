"""Unit tests for the database session and schema services."""

from sqlalchemy import StaticPool, inspect
from sqlmodel import select

from src.users_api.core.services import DbManageService, DbSessionService
from src.users_api.entities.core.user import UserTable
from src.users_api.runtime.config.config_data import ConfigData, DatabaseConfig
from src.users_api.runtime.context import with_context
from src.users_api.runtime.init_db import init_db


def _memory_service() -> DbSessionService:
    return DbSessionService(DatabaseConfig(url="sqlite://"))


class TestDbSessionService:
    def test_in_memory_sqlite_shares_one_connection(self):
        service = _memory_service()
        try:
            assert isinstance(service.engine.pool, StaticPool)
            DbManageService(service.engine).create_all()

            with service.session_scope() as session:
                session.add(UserTable(name="Ann", email="ann@x.com"))

            with service.session_scope() as session:
                assert len(session.exec(select(UserTable)).all()) == 1
        finally:
            service.dispose()

    def test_file_sqlite_uses_default_pool(self, tmp_path):
        service = DbSessionService(DatabaseConfig(url=f"sqlite:///{tmp_path / 'users.db'}"))
        try:
            assert not isinstance(service.engine.pool, StaticPool)
            assert service.health_check() is True
        finally:
            service.dispose()

    def test_session_scope_rolls_back_on_error(self):
        service = _memory_service()
        try:
            DbManageService(service.engine).create_all()
            try:
                with service.session_scope() as session:
                    session.add(UserTable(name="Ann", email="ann@x.com"))
                    session.flush()
                    raise RuntimeError("boom")
            except RuntimeError:
                pass

            with service.session_scope() as session:
                assert session.exec(select(UserTable)).all() == []
        finally:
            service.dispose()

    def test_health_check(self):
        service = _memory_service()
        try:
            assert service.health_check() is True
        finally:
            service.dispose()

    def test_health_check_failure(self, tmp_path):
        missing_dir = tmp_path / "missing" / "users.db"
        service = DbSessionService(DatabaseConfig(url=f"sqlite:///{missing_dir}"))
        try:
            assert service.health_check() is False
        finally:
            service.dispose()


class TestDbManageService:
    def test_create_all_is_idempotent(self):
        service = _memory_service()
        try:
            manage = DbManageService(service.engine)

            manage.create_all()
            manage.create_all()

            assert "users" in inspect(service.engine).get_table_names()
        finally:
            service.dispose()


def test_init_db_creates_tables_for_configured_database(tmp_path):
    url = f"sqlite:///{tmp_path / 'init.db'}"

    with with_context(ConfigData(database=DatabaseConfig(url=url))):
        init_db()

    service = DbSessionService(DatabaseConfig(url=url))
    try:
        assert "users" in inspect(service.engine).get_table_names()
    finally:
        service.dispose()
