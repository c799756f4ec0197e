"""Pokemon catalog and team-building REST service."""

from .config import Settings, get_settings
from .web_server import create_app

__all__ = [
    "Settings",
    "create_app",
    "get_settings",
]
