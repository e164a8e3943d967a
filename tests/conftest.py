"""
Общие фикстуры для всех тестов FitTrack backend.

Стратегия:
- Тестовое FastAPI-приложение создаётся без startup-событий (нет подключения к БД).
- Зависимость get_storage заменяется на MemoryStorage без стартовых данных
  (или с ними, фикстура seeded_storage), так что каждый тест начинает с чистого листа.
- Для проверки 500 используется клиент, который не пробрасывает исключения приложения.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from typing import AsyncGenerator

from app.api.router import api_router
from app.core.dependencies import get_storage
from app.core.errors import register_exception_handlers
from app.storage.memory import MemoryStorage


# ---------------------------------------------------------------------------
# Вспомогательные функции
# ---------------------------------------------------------------------------

def create_test_app(storage) -> FastAPI:
    """Тестовое FastAPI-приложение без startup-событий."""
    test_app = FastAPI(title="FitTrack Test App")
    register_exception_handlers(test_app)
    test_app.include_router(api_router)
    test_app.dependency_overrides[get_storage] = lambda: storage
    return test_app


def build_workout_payload(exercise_id: str, **overrides) -> dict:
    """Тело POST /api/workouts с одним упражнением и двумя подходами."""
    payload = {
        "name": "Push day",
        "date": "2024-01-15T10:00:00Z",
        "duration": 45,
        "notes": "felt strong",
        "exercises": [
            {
                "exerciseId": exercise_id,
                "sets": [
                    {"weight": "100", "reps": 5, "completed": 1},
                    {"weight": "62.50", "reps": 8, "completed": 0},
                ],
            }
        ],
    }
    payload.update(overrides)
    return payload


# ---------------------------------------------------------------------------
# Фикстуры хранилища
# ---------------------------------------------------------------------------

@pytest.fixture
async def storage() -> AsyncGenerator[MemoryStorage, None]:
    """Пустое in-memory хранилище."""
    memory = MemoryStorage(seed=False)
    await memory.connect()
    yield memory
    await memory.disconnect()


@pytest.fixture
async def seeded_storage() -> AsyncGenerator[MemoryStorage, None]:
    """In-memory хранилище со стартовыми упражнениями, рецептами, цитатами и челленджами."""
    memory = MemoryStorage()
    await memory.connect()
    yield memory
    await memory.disconnect()


# ---------------------------------------------------------------------------
# HTTP-клиенты
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(storage) -> AsyncGenerator[AsyncClient, None]:
    """Клиент поверх пустого хранилища."""
    app = create_test_app(storage)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def seeded_client(seeded_storage) -> AsyncGenerator[AsyncClient, None]:
    """Клиент поверх хранилища со стартовыми данными."""
    app = create_test_app(seeded_storage)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def workout_payload():
    """Фабрика тела POST /api/workouts (см. build_workout_payload)."""
    return build_workout_payload


@pytest.fixture
def app_factory():
    """Сборка тестового приложения поверх произвольного хранилища (например, мока)."""
    return create_test_app
