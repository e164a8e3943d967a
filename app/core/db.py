from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings


def build_engine(database_url: str = None, echo: bool = None) -> AsyncEngine:
    """Создать async-движок SQLAlchemy для ORM-хранилища"""
    url = database_url or settings.async_database_url
    kwargs = {
        "echo": settings.SQL_ECHO if echo is None else echo,
        "future": True,
    }
    # pool_pre_ping не нужен для sqlite (в тестах используется aiosqlite)
    if not url.startswith("sqlite"):
        kwargs["pool_pre_ping"] = True
    return create_async_engine(url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False
    )
