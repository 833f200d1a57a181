"""
Form login and logout.

``POST /login`` checks the submitted credentials and stores a signed
session token in an HttpOnly cookie; ``/logout`` revokes the token and
removes the cookie. Neither route requires a CSRF token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordRequestForm

from carmaint.api.dependencies import AuthenticatorDep
from carmaint.core.config import settings
from carmaint.core.logging_config import get_logger
from carmaint.core.security import create_session_token
from carmaint.schemas.auth import LoginResponse, LogoutResponse


router = APIRouter(tags=["auth"])
logger = get_logger(__name__)


@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
async def login(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    authenticator: AuthenticatorDep,
    response: Response,
) -> LoginResponse:
    """
    Authenticate with username and password form fields.

    Example:
        POST /login
        Content-Type: application/x-www-form-urlencoded

        username=user&password=secret

        Response (Set-Cookie: SESSION=eyJ...; HttpOnly; SameSite=lax):
        {"username": "user", "authenticated": true}

    Raises:
        HTTPException 401: If the credentials are wrong; the message does
            not reveal whether the username exists
    """
    principal = await authenticator.authenticate(form_data.username, form_data.password)

    if principal is None:
        logger.warning("Login failed", extra={"principal": form_data.username})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Bad credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_token(principal.username),
        max_age=settings.session_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    logger.info("Login succeeded", extra={"principal": principal.username})
    return LoginResponse(username=principal.username)


@router.api_route("/logout", methods=["GET", "POST"], response_model=LogoutResponse)
async def logout(
    request: Request,
    response: Response,
    authenticator: AuthenticatorDep,
) -> LogoutResponse:
    """Revoke the session token, if any, and clear the cookie. Always succeeds."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        authenticator.revoke_session(token)

    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return LogoutResponse()
