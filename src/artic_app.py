import secrets
from collections.abc import Awaitable, Callable

from fasthtml.common import RedirectResponse, fast_app, serve
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from artic_core import __version__
from artic_core.config_manager import get_config_manager
from artic_core.logger import get_logger, setup_logging
from artic_ui.routes.artworks import setup_artwork_routes

# Initialize logging
setup_logging()
logger = get_logger(__name__)

# Initialize configuration
config = get_config_manager()

# Without a configured secret, sessions (and their selections) last as long as the process.
_session_secret = str(config.get_setting("security.session_secret", "") or "") or secrets.token_hex(32)

# Create FastHTML app
app, rt = fast_app(
    pico=False,
    secret_key=_session_secret,
    session_cookie="artic_session",
)


# Request Logging Middleware
class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log incoming requests."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Dispatch the request and log the response."""
        path = request.url.path or ""
        if request.headers.get("HX-Request") == "true":
            logger.debug(f"HTMX: [{request.method}] {path}")
        else:
            logger.info(f"🌐 [{request.method}] {path}")
        return await call_next(request)


app.add_middleware(LoggingMiddleware)

logger.info("🔧 Setting up routes...")
setup_artwork_routes(app)


# Root redirect
@rt("/")
def index():
    """Redirect root to the artwork table."""
    return RedirectResponse(url="/artworks")


# Health check
@rt("/health")
def health():
    """Simple health check endpoint."""
    return {"status": "ok", "version": __version__}


def main():
    """Entry point for the artic-studio command."""
    logger.info("🚀 Starting Artwork Table Studio (FastHTML + HTMX)")
    logger.info(f"📍 Catalog API: {config.get_setting('api.base_url')}")

    # "artic_app:app" as a string so reload can re-import the module.
    serve(
        appname="artic_app",
        app="app",
        port=int(config.get_setting("server.port", 8000) or 8000),
        reload=True,
        reload_includes=["*.py"],
    )


if __name__ == "__main__":
    main()
