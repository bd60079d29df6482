"""Route handlers for the API."""

from resume_layout.api.routes import health, layout

__all__ = [
    "health",
    "layout",
]
