"""
Access control middleware.

Classifies every request by path and demands an authenticated principal
on the protected prefixes. Rules are checked in order:

1. Public allow-list (front page and its assets): always permitted.
2. Protected prefixes (cars, maintenance): principal required, else 401.
3. Anything else (login, logout, health, docs): permitted.

Patterns ending in ``/**`` match the prefix itself and everything below it.

CSRF protection is intentionally not enforced here; form login and
logout accept requests without a token.
"""

import enum
from typing import Callable, Optional, Protocol, Sequence

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from carmaint.core.logging_config import get_logger, log_with_context
from carmaint.core.security import Principal


logger = get_logger(__name__)

PUBLIC_PATHS: tuple[str, ...] = ("/", "/index.html", "/css/**", "/js/**")
PROTECTED_PATHS: tuple[str, ...] = ("/cars/**", "/maintenance/**")

REALM = "carmaint"


class AccessRule(str, enum.Enum):
    """Outcome of classifying a request path."""
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    OPEN = "open"


class PrincipalResolver(Protocol):
    async def resolve(self, request: Request) -> Optional[Principal]: ...


def path_matches(pattern: str, path: str) -> bool:
    """
    Match a path against an exact or ``/**`` pattern.

    Example:
        >>> path_matches("/cars/**", "/cars")
        True
        >>> path_matches("/cars/**", "/cars/1")
        True
        >>> path_matches("/cars/**", "/carsales")
        False
    """
    if pattern.endswith("/**"):
        base = pattern[:-3]
        return path == base or path.startswith(base + "/")
    return path == pattern


def classify_path(
    path: str,
    public_paths: Sequence[str] = PUBLIC_PATHS,
    protected_paths: Sequence[str] = PROTECTED_PATHS,
) -> AccessRule:
    """Return the first rule whose patterns match ``path``."""
    if any(path_matches(p, path) for p in public_paths):
        return AccessRule.PUBLIC
    if any(path_matches(p, path) for p in protected_paths):
        return AccessRule.AUTHENTICATED
    return AccessRule.OPEN


class AccessControlMiddleware(BaseHTTPMiddleware):
    """
    Middleware that gates protected paths behind an authenticated principal.

    On success the principal is stored in ``request.state.principal`` for
    route handlers. Failures return 401 with a Basic challenge so command
    line clients know to send credentials.

    Example:
        app.add_middleware(
            AccessControlMiddleware,
            authenticator=Authenticator(async_session_maker),
        )
    """

    def __init__(
        self,
        app,
        authenticator: PrincipalResolver,
        public_paths: Sequence[str] = PUBLIC_PATHS,
        protected_paths: Sequence[str] = PROTECTED_PATHS,
    ):
        super().__init__(app)
        self.authenticator = authenticator
        self.public_paths = tuple(public_paths)
        self.protected_paths = tuple(protected_paths)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        request.state.principal = None

        rule = classify_path(path, self.public_paths, self.protected_paths)
        if rule is not AccessRule.AUTHENTICATED:
            return await call_next(request)

        principal = await self.authenticator.resolve(request)
        if principal is None:
            log_with_context(
                logger,
                "warning",
                "Access denied: authentication required",
                request_id=getattr(request.state, "request_id", None),
                path=path,
                method=request.method,
                status_code=401,
            )
            return JSONResponse(
                status_code=401,
                content={"detail": "Full authentication is required to access this resource"},
                headers={"WWW-Authenticate": f'Basic realm="{REALM}"'},
            )

        request.state.principal = principal
        return await call_next(request)
