"""
API dependencies for dependency injection.

Handlers never touch module globals: the application context lives on
``app.state.context`` and is handed out from here.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header, Request

from storage_gateway.application.auth_gate import AuthGate
from storage_gateway.context import AppContext
from storage_gateway.domain.entities import AuthenticatedUser
from storage_gateway.infra.auth.cookies import extract_session_id
from storage_gateway.infra.config.logging_config import bind_context
from storage_gateway.infra.storage.object_storage import ObjectStorage


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_auth_gate(context: AppContext = Depends(get_context)) -> AuthGate:
    return context.auth


def get_storage(context: AppContext = Depends(get_context)) -> ObjectStorage:
    return context.storage


async def get_current_user(
    context: AppContext = Depends(get_context),
    cookie: Annotated[Optional[str], Header()] = None,
) -> AuthenticatedUser:
    """
    Resolve the session cookie of the request to a user.

    Raises:
        MissingSessionError: no session cookie (401)
        InvalidSessionError: unknown session or deleted user (403)
    """
    session_id = extract_session_id(cookie, context.settings.session_cookie_name)
    user = await context.auth.resolve_session(session_id)
    bind_context(username=user.username)
    return user


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
