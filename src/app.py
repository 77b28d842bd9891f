"""Wire the application together: settings --> logging --> storage --> service."""

from typing import Optional

from src.core.config import Settings, get_settings
from src.core.logging import setup_logging
from src.services.session_service import SessionService
from src.storage.memory_repository import InMemorySessionRepository


def create_service(settings: Optional[Settings] = None) -> SessionService:
    settings = settings or get_settings()
    setup_logging(settings)
    return SessionService(InMemorySessionRepository())
