from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

ALLOWED_HEADERS = (
    "authorization, x-client-info, apikey, content-type, x-supabase-client-platform, "
    "x-supabase-client-platform-version, x-supabase-client-runtime, "
    "x-supabase-client-runtime-version"
)


def cors_headers(allow_origin: str = "*") -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }


class PermissiveCORSMiddleware(BaseHTTPMiddleware):
    """Answers every preflight with an empty 200 and stamps CORS headers on all responses.

    Starlette's ``CORSMiddleware`` answers preflights with a body and only
    decorates responses whose request carried an ``Origin`` header.
    """

    def __init__(self, app, allow_origins: list[str] | None = None):
        super().__init__(app)
        self.allow_origins = allow_origins or ["*"]

    def _allow_origin(self, request: Request) -> str:
        if "*" in self.allow_origins:
            return "*"
        origin = request.headers.get("origin", "")
        return origin if origin in self.allow_origins else "null"

    async def dispatch(self, request: Request, call_next):
        headers = cors_headers(self._allow_origin(request))

        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response
