"""
Security module for authentication.

Provides password hashing (bcrypt), signed session tokens for form login
(python-jose) and the ``Authenticator`` that turns a request's HTTP Basic
header or session cookie into a ``Principal``.
"""

import base64
import binascii
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Literal, Optional

import bcrypt
from fastapi.security.utils import get_authorization_scheme_param
from jose import JWTError, jwt
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request

from carmaint.core.config import settings
from carmaint.repositories.user import UserRepository

logger = logging.getLogger(__name__)

# JWT Algorithm
ALGORITHM = "HS256"

# bcrypt ignores everything past 72 bytes
_BCRYPT_MAX_BYTES = 72


class Principal(BaseModel):
    """
    The authenticated identity attached to a request.

    Attributes:
        username: Login name of the user
        auth_method: How the identity was established
    """
    username: str
    auth_method: Literal["basic", "session"]


class SessionTokenData(BaseModel):
    """Claims carried by the form login session cookie."""
    username: str
    token_id: Optional[str] = None
    exp: Optional[datetime] = None


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The bcrypt hash to compare against

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    if isinstance(hashed_password, str):
        hashed_bytes = hashed_password.encode("utf-8")
    else:
        hashed_bytes = hashed_password

    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_bytes)
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def get_password_hash(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password to hash
        rounds: Cost factor (defaults to ``settings.bcrypt_rounds``)

    Returns:
        Hashed password string
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    hashed = bcrypt.hashpw(_password_bytes(password), salt)
    return hashed.decode("utf-8")


def create_session_token(username: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create the signed token stored in the session cookie.

    Args:
        username: Subject of the token
        expires_delta: Optional custom lifetime

    Returns:
        Encoded JWT string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.session_expire_minutes)

    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"sub": username, "exp": expire, "jti": uuid.uuid4().hex}

    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_session_token(token: str) -> Optional[SessionTokenData]:
    """
    Decode and validate a session token.

    Args:
        token: JWT string taken from the session cookie

    Returns:
        SessionTokenData if valid, None if malformed, forged or expired
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None

    username = payload.get("sub")
    if not username:
        return None

    exp = payload.get("exp")
    return SessionTokenData(
        username=username,
        token_id=payload.get("jti"),
        exp=datetime.fromtimestamp(exp, tz=timezone.utc) if exp is not None else None,
    )


def parse_basic_credentials(authorization: str) -> Optional[tuple[str, str]]:
    """
    Extract username and password from a Basic ``Authorization`` header.

    Args:
        authorization: Raw header value, e.g. ``"Basic dXNlcjpwYXNz"``

    Returns:
        (username, password), or None if the header is not valid Basic
    """
    scheme, param = get_authorization_scheme_param(authorization)
    if scheme.lower() != "basic" or not param:
        return None

    try:
        decoded = base64.b64decode(param, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None

    username, separator, password = decoded.partition(":")
    if not separator or not username:
        return None
    return username, password


class Authenticator:
    """
    Resolves the principal behind a request.

    HTTP Basic credentials take precedence: when an ``Authorization: Basic``
    header is present it alone decides the outcome. Otherwise the session
    cookie set by form login is checked. Users are looked up in their own
    short-lived session from ``session_factory``.

    Session tokens passed to ``revoke_session`` are refused until they
    expire. The revocation list lives in this process only.

    Example:
        authenticator = Authenticator(async_session_maker)
        principal = await authenticator.resolve(request)
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cookie_name: str = settings.session_cookie_name,
    ):
        self.session_factory = session_factory
        self.cookie_name = cookie_name
        self._revoked: dict[str, datetime] = {}

    async def authenticate(self, username: str, password: str) -> Optional[Principal]:
        """
        Check a username/password pair against the users table.

        Returns:
            A ``basic`` Principal on success, None otherwise
        """
        async with self.session_factory() as session:
            user = await UserRepository(session).find_by_username(username)

        if user is None:
            return None

        if not await run_in_threadpool(verify_password, password, user.hashed_password):
            return None

        return Principal(username=user.username, auth_method="basic")

    async def resolve(self, request: Request) -> Optional[Principal]:
        """
        Establish the principal for a request.

        Args:
            request: Incoming request

        Returns:
            Principal, or None if the request carries no valid credentials
        """
        authorization = request.headers.get("Authorization")
        if authorization and authorization.lower().startswith("basic"):
            credentials = parse_basic_credentials(authorization)
            if credentials is None:
                return None
            return await self.authenticate(*credentials)

        token = request.cookies.get(self.cookie_name)
        if token:
            return await self._resolve_session(token)

        return None

    async def _resolve_session(self, token: str) -> Optional[Principal]:
        token_data = decode_session_token(token)
        if token_data is None:
            return None

        if token_data.token_id is None or token_data.token_id in self._revoked:
            return None

        # The account may have been removed after the cookie was issued.
        async with self.session_factory() as session:
            user = await UserRepository(session).find_by_username(token_data.username)
        if user is None:
            return None

        return Principal(username=user.username, auth_method="session")

    def revoke_session(self, token: str) -> bool:
        """
        Refuse ``token`` for the rest of its lifetime.

        Args:
            token: Session cookie value presented at logout

        Returns:
            True if the token was valid and is now revoked
        """
        token_data = decode_session_token(token)
        if token_data is None or token_data.token_id is None:
            return False

        now = datetime.now(timezone.utc)
        self._revoked = {
            token_id: expires
            for token_id, expires in self._revoked.items()
            if expires > now
        }
        self._revoked[token_data.token_id] = token_data.exp or now + timedelta(
            minutes=settings.session_expire_minutes
        )
        logger.info("Session revoked", extra={"principal": token_data.username})
        return True
