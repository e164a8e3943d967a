import logging

from app.core.config import STORAGE_BACKENDS, Settings, settings as default_settings
from app.storage.base import IStorage
from app.storage.memory import MemoryStorage

logger = logging.getLogger(__name__)


def create_storage(settings: Settings = None) -> IStorage:
    """
    Создать хранилище по настройкам (STORAGE_BACKEND / USE_MONGODB).

    Подключение не открывается: connect() вызывается на старте приложения.
    """
    settings = settings or default_settings
    backend = settings.storage_backend

    if backend not in STORAGE_BACKENDS:
        raise ValueError(f"Unknown storage backend '{backend}', expected one of {', '.join(STORAGE_BACKENDS)}")

    logger.info(f"Выбрано хранилище: {backend}")

    if backend == "mongo":
        from app.storage.mongo import MongoStorage
        return MongoStorage(url=settings.MONGODB_URL, db_name=settings.MONGODB_DB_NAME)

    if backend == "sql":
        from app.storage.sql import SqlStorage
        return SqlStorage(database_url=settings.async_database_url, echo=settings.SQL_ECHO)

    return MemoryStorage()
