"""
Security headers middleware.

Adds the OWASP-recommended response headers to every response, static
pages included:
- X-Content-Type-Options: nosniff
- X-Frame-Options: DENY
- Referrer-Policy
- Permissions-Policy
- Content-Security-Policy (optional)

The bundled front page loads its script and stylesheet from /js and /css,
so the default policy allows no inline code.

References:
- OWASP Secure Headers Project: https://owasp.org/www-project-secure-headers/
"""

from typing import Callable
import logging

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


DEFAULT_CSP_POLICY = (
    "default-src 'self'; "
    "script-src 'self'; "
    "style-src 'self'; "
    "img-src 'self' data:; "
    "connect-src 'self'; "
    "frame-ancestors 'none'; "
    "form-action 'self'; "
    "base-uri 'self'; "
    "object-src 'none'"
)

PERMISSIONS_POLICY = (
    "geolocation=(), "
    "microphone=(), "
    "camera=(), "
    "payment=(), "
    "usb=()"
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers to all HTTP responses.

    Headers are also set on 401 responses produced by
    AccessControlMiddleware, which runs inside this one.

    Example:
        app.add_middleware(SecurityHeadersMiddleware)
        app.add_middleware(SecurityHeadersMiddleware, enable_csp=False)
    """

    def __init__(
        self,
        app,
        enable_csp: bool = True,
        csp_policy: str | None = None,
    ):
        """
        Args:
            app: ASGI application
            enable_csp: Whether to include Content-Security-Policy header
            csp_policy: Custom CSP policy (defaults to DEFAULT_CSP_POLICY)
        """
        super().__init__(app)
        self.enable_csp = enable_csp
        self.csp_policy = csp_policy or DEFAULT_CSP_POLICY

        logger.info(
            "Security headers middleware initialized",
            extra={"enable_csp": enable_csp},
        )

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        # Legacy clickjacking guard; frame-ancestors covers modern browsers
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = PERMISSIONS_POLICY

        if self.enable_csp:
            response.headers["Content-Security-Policy"] = self.csp_policy

        return response
