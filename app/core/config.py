from typing import List

from pydantic_settings import BaseSettings

STORAGE_BACKENDS = ("memory", "mongo", "sql")


class Settings(BaseSettings):
    # memory | mongo | sql; если пусто, выбор по USE_MONGODB
    STORAGE_BACKEND: str = ""
    USE_MONGODB: bool = False
    # Если бэкенд не смог подключиться при старте, работаем в памяти
    STORAGE_FALLBACK_TO_MEMORY: bool = False

    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "fitness_app"

    DATABASE_URL: str = "postgresql://fittrack_user:fittrack_password@db:5432/fittrack_db"
    SQL_ECHO: bool = False

    PORT: int = 5000
    NODE_ENV: str = "production"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @property
    def storage_backend(self) -> str:
        """Итоговый бэкенд хранилища с учетом USE_MONGODB."""
        backend = self.STORAGE_BACKEND.strip().lower()
        if backend:
            return backend
        return "mongo" if self.USE_MONGODB else "memory"

    @property
    def async_database_url(self) -> str:
        return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://")

    @property
    def is_development(self) -> bool:
        return self.NODE_ENV.lower() == "development"


settings = Settings()
