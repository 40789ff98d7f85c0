"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.users_api.api.http.app_data import ApplicationDependencies
from src.users_api.core.services import DbSessionService, UserService
from src.users_api.entities.core.user import UserRepository
from src.users_api.runtime.config.config_data import PaginationConfig


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the dependencies built at application startup."""
    return request.app.state.app_dependencies


def get_database_service(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> DbSessionService:
    """Get the database service instance."""
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield a session for the duration of one request."""
    session = database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_pagination_config(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> PaginationConfig:
    """Get the list pagination defaults."""
    return app_deps.config.pagination


def get_user_repository(db: Session = Depends(get_db_session)) -> UserRepository:
    return UserRepository(db)


def get_user_service(
    repository: UserRepository = Depends(get_user_repository),
) -> UserService:
    return UserService(repository)
