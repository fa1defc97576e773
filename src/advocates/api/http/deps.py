"""FastAPI dependency implementations."""

from fastapi import Request

from src.advocates.api.http.app_data import ApplicationDependencies
from src.advocates.core.services import DbSessionService
from src.advocates.entities.advocate import AdvocateRepository


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the dependencies built once at startup."""
    return request.app.state.app_dependencies


def get_database_service(request: Request) -> DbSessionService:
    """Get the database session service instance."""
    return get_app_dependencies(request).database_service


def get_advocate_repository(request: Request) -> AdvocateRepository:
    """Get the shared advocate repository instance."""
    return get_app_dependencies(request).advocate_repository
