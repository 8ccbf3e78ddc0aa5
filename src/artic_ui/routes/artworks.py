"""Artwork table route registration.

This module keeps a single responsibility: register the artwork routes using
top-level handlers defined in `artic_ui.routes.artworks_handlers`.
"""

from artic_core.logger import get_logger
from artic_ui.routes import artworks_handlers

logger = get_logger(__name__)


def setup_artwork_routes(app):
    """Register artwork table routes.

    Args:
        app: FastHTML app instance
    """
    app.get("/artworks")(artworks_handlers.artworks_page)
    app.get("/api/artworks/table")(artworks_handlers.artworks_table)
    app.post("/api/artworks/toggle/{artwork_id}")(artworks_handlers.toggle_row)
    app.post("/api/artworks/toggle_page")(artworks_handlers.toggle_page)
    app.post("/api/artworks/custom_selection")(artworks_handlers.custom_selection)
    app.post("/api/artworks/clear_selection")(artworks_handlers.clear_selection)
    logger.debug("Artwork routes registered")
