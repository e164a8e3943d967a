import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging
from app.storage.factory import create_storage
from app.storage.memory import MemoryStorage

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(title="FitTrack - workouts, nutrition and progress tracker")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.on_event("startup")
    async def startup_event():
        # Тесты подкладывают свое хранилище заранее
        if getattr(app.state, "storage", None) is None:
            app.state.storage = create_storage(settings)

        storage = app.state.storage
        try:
            await storage.connect()
        except Exception as e:
            if not settings.STORAGE_FALLBACK_TO_MEMORY or isinstance(storage, MemoryStorage):
                raise
            logger.warning(f"Хранилище {storage.backend_name} недоступно ({e}), работаем в памяти")
            app.state.storage = MemoryStorage()
            await app.state.storage.connect()

        logger.info(f"Приложение запущено, хранилище: {app.state.storage.backend_name}")

    @app.on_event("shutdown")
    async def shutdown_event():
        storage = getattr(app.state, "storage", None)
        if storage is not None:
            await storage.disconnect()
        logger.info("Приложение остановлено")

    @app.get("/health")
    async def health():
        storage = getattr(app.state, "storage", None)
        return {
            "status": "ok",
            "storage": storage.backend_name if storage else None,
            "connected": bool(storage and storage.is_connected)
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
