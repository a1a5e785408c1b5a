"""
Login, logout and identity endpoints.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storage_gateway.api.dependencies import CurrentUser, get_context
from storage_gateway.api.schemas import (
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    WhoAmIResponse,
)
from storage_gateway.context import AppContext
from storage_gateway.domain.exceptions import InvalidCredentialsError
from storage_gateway.infra.auth.cookies import clear_cookie_header, session_cookie_header
from storage_gateway.infra.config.logging_config import get_logger

router = APIRouter(tags=["auth"])
log = get_logger("api.auth")


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest, context: AppContext = Depends(get_context)
) -> JSONResponse:
    """Exchange a username/token pair for a session cookie."""
    if not await context.auth.verify_credentials(payload.username, payload.token):
        log.info("auth.login.failed", username=payload.username)
        raise InvalidCredentialsError()

    session_id = await context.auth.create_session(payload.username)
    user = context.credentials.get(payload.username)
    log.info("auth.login.success", username=payload.username)

    return JSONResponse(
        content=LoginResponse(name=user.name).model_dump(),
        headers={"Set-Cookie": session_cookie_header(session_id, context.settings)},
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    user: CurrentUser, context: AppContext = Depends(get_context)
) -> JSONResponse:
    """End every session of the current user, not only this one."""
    await context.auth.end_sessions_for_user(user.username)
    return JSONResponse(
        content=LogoutResponse().model_dump(),
        headers={
            "Set-Cookie": clear_cookie_header(context.settings.session_cookie_name)
        },
    )


@router.get("/whoami", response_model=WhoAmIResponse)
async def whoami(user: CurrentUser) -> WhoAmIResponse:
    return WhoAmIResponse(username=user.username, name=user.name)
