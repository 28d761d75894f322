"""FastAPI dependency injection providers."""

from fastapi import Request

from pathcast.config import Settings


def get_settings(request: Request) -> Settings:
    """Get application settings from app state."""
    return request.app.state.settings
