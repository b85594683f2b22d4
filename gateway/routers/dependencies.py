# gateway/routers/dependencies.py
# Request-scoped dependencies shared by the routers

from fastapi import Request

from gateway.config import Settings
from gateway.exceptions import UnauthorizedError
from gateway.repositories.view_repository import ViewRepository


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_view_repository(request: Request) -> ViewRepository:
    return request.app.state.view_repository


def get_username(request: Request) -> str:
    """Username established by the upstream session layer.

    Token validation happens before the request reaches this service.
    """
    header = get_app_settings(request).AUTH_USERNAME_HEADER
    username = (request.headers.get(header) or "").strip()
    if not username:
        raise UnauthorizedError(details={"header": header})
    return username
