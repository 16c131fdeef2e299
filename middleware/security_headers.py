"""Security Headers Middleware

Adds security headers to HTTP responses of the storefront API.

Installed by app.py when SECURITY_HEADERS_ENABLED is set.
HSTS is added only with HSTS_ENABLED (HTTPS deployments).
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import config


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that adds security headers to all HTTP responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"

        if config.HSTS_ENABLED:
            # 1 year
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        # Handoff links leave the shop, don't leak order pages to wa.me
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        response.headers["Permissions-Policy"] = (
            "geolocation=(), microphone=(), camera=(), "
            "usb=(), magnetometer=(), gyroscope=()"
        )

        return response
