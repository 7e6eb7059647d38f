"""
Session gate for the browser-facing admin area.

Raw ASGI middleware that runs before any admin handler:

    login page, valid cookie     -> redirect to the admin home
    login page, otherwise        -> login page is served
    other admin page, no cookie  -> redirect to the login page
    other admin page, bad cookie -> redirect to the login page, cookie deleted
    other admin page, valid      -> request passes through

Only the session cookie is consulted; the copy of the token a browser keeps in
its own storage is never trusted here.
"""

from enum import Enum

from starlette.requests import Request
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from app.services.token_service import TokenService
from app.utils.logger import setup_logger

logger = setup_logger("session_gate")


class GateState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    LOGIN_PAGE = "login_page"


def _normalize_path(path: str) -> str:
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def is_under_prefix(path: str, prefix: str) -> bool:
    """Segment-aware prefix match: '/admin' covers '/admin/x' but not '/administrator'."""
    path = _normalize_path(path)
    prefix = _normalize_path(prefix)
    return path == prefix or path.startswith(prefix + "/")


class SessionGateMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        token_service: TokenService,
        protected_prefix: str = "/admin",
        login_path: str = "/admin/login",
        home_path: str | None = None,
        cookie_name: str = "auth-token",
    ):
        self.app = app
        self.token_service = token_service
        self.protected_prefix = _normalize_path(protected_prefix)
        self.login_path = _normalize_path(login_path)
        self.home_path = home_path or self.protected_prefix
        self.cookie_name = cookie_name

    def evaluate(self, path: str, token: str | None) -> GateState:
        """Decide the gate state for a request to a protected ``path``."""
        authenticated = bool(token) and self.token_service.verify(token) is not None
        if authenticated:
            return GateState.AUTHENTICATED
        if _normalize_path(path) == self.login_path:
            return GateState.LOGIN_PAGE
        return GateState.UNAUTHENTICATED

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path") or "/"
        if not is_under_prefix(path, self.protected_prefix):
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        token = request.cookies.get(self.cookie_name)
        state = self.evaluate(path, token)
        on_login_page = _normalize_path(path) == self.login_path

        if on_login_page:
            if state is GateState.AUTHENTICATED:
                logger.debug("Already authenticated, redirecting away from login page")
                response = RedirectResponse(self.home_path)
                await response(scope, receive, send)
                return
            await self.app(scope, receive, send)
            return

        if state is GateState.AUTHENTICATED:
            await self.app(scope, receive, send)
            return

        response = RedirectResponse(self.login_path)
        if token:
            logger.info(f"Invalid session cookie on {path}, clearing it")
            response.delete_cookie(self.cookie_name, path="/")
        else:
            logger.debug(f"No session cookie on {path}, redirecting to login")
        await response(scope, receive, send)
