"""Business operations behind the REST routes."""

from .accounts import AccountService
from .ai_assistant import AIAssistant
from .catalog import CatalogService
from .teams import TeamService

__all__ = [
    "AIAssistant",
    "AccountService",
    "CatalogService",
    "TeamService",
]
