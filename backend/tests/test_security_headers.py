"""
Tests for SecurityHeadersMiddleware.

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from carmaint.middleware.security_headers import (
    DEFAULT_CSP_POLICY,
    SecurityHeadersMiddleware,
)


def build_client(**middleware_kwargs) -> TestClient:
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware, **middleware_kwargs)

    @app.get("/test")
    async def test_endpoint():
        return {"ok": True}

    return TestClient(app)


class TestSecurityHeaders:

    def test_default_headers_present(self):
        # Act
        response = build_client().get("/test")

        # Assert
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
        assert "camera=()" in response.headers["Permissions-Policy"]
        assert response.headers["Content-Security-Policy"] == DEFAULT_CSP_POLICY

    def test_default_csp_disallows_inline_script(self):
        assert "unsafe-inline" not in DEFAULT_CSP_POLICY
        assert "frame-ancestors 'none'" in DEFAULT_CSP_POLICY

    def test_csp_can_be_disabled(self):
        # Act
        response = build_client(enable_csp=False).get("/test")

        # Assert
        assert "Content-Security-Policy" not in response.headers
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_custom_csp(self):
        # Act
        response = build_client(csp_policy="default-src 'none'").get("/test")

        # Assert
        assert response.headers["Content-Security-Policy"] == "default-src 'none'"

    def test_headers_on_error_responses(self):
        # Act
        response = build_client().get("/missing")

        # Assert
        assert response.status_code == 404
        assert response.headers["X-Content-Type-Options"] == "nosniff"
