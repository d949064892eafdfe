"""
Route guard for page requests.

Only the presence of the session cookie is checked here; the API routes
validate the token itself.
"""
from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"

# Paths the guard never redirects
OPEN_PREFIXES = ("/api", "/health", "/docs", "/redoc", "/openapi.json")


def _is_open(path: str) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in OPEN_PREFIXES)


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """
    Sends visitors without a session cookie to the login page and
    logged-in visitors of the login page to the dashboard.
    """

    def __init__(self, app, cookie_name: str = "session"):
        super().__init__(app)
        self.cookie_name = cookie_name

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        has_session = bool(request.cookies.get(self.cookie_name))

        if path == LOGIN_PATH:
            if has_session:
                return RedirectResponse(url=DASHBOARD_PATH)
        elif not has_session and not _is_open(path):
            return RedirectResponse(url=LOGIN_PATH)

        return await call_next(request)
