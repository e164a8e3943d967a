from app.core.config import settings
from app.core.base import Base
from app.core.db import build_engine, build_session_factory

__all__ = ["settings", "Base", "build_engine", "build_session_factory"]
