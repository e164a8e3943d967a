"""
Контрактные тесты MongoStorage на живой базе.

Запускаются только если задан MONGODB_TEST_URL; каждая сессия работает
в отдельной базе, которая удаляется после теста.
"""

import os
import uuid
from datetime import datetime

import pytest
from motor.motor_asyncio import AsyncIOMotorClient

from app.schemas.exercise import ExerciseCreate
from app.schemas.nutrition import NutritionGoalUpdate
from app.schemas.workout import WorkoutCreate
from app.storage.base import ExerciseNotFoundError
from app.storage.mongo import MongoStorage

MONGODB_TEST_URL = os.getenv("MONGODB_TEST_URL")

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not MONGODB_TEST_URL, reason="MONGODB_TEST_URL не задан"),
]


@pytest.fixture
async def mongo_storage():
    db_name = f"fitness_test_{uuid.uuid4().hex[:8]}"
    client = AsyncIOMotorClient(MONGODB_TEST_URL)
    storage = MongoStorage(db_name=db_name, client=client)
    await storage.connect()
    yield storage
    await storage.disconnect()
    await client.drop_database(db_name)
    client.close()


@pytest.mark.asyncio
async def test_seeded_on_first_connect(mongo_storage):
    exercises = await mongo_storage.get_all_exercises()
    assert len(exercises) == 5
    assert await mongo_storage.get_todays_challenge() is not None

    # Повторная заливка не дублирует данные
    await mongo_storage._seed()
    assert len(await mongo_storage.get_all_exercises()) == 5


@pytest.mark.asyncio
async def test_workout_round_trip_and_cascade_delete(mongo_storage):
    exercise = await mongo_storage.create_exercise(ExerciseCreate(name="Dips", category="chest"))
    workout = await mongo_storage.create_workout(WorkoutCreate(
        name="Push",
        date=datetime(2024, 1, 15, 10, 0),
        exercises=[{"exercise_id": exercise.id, "sets": [{"weight": "62.50", "reps": 8}]}],
    ))

    assert workout.exercises[0].exercise.name == "Dips"
    assert workout.exercises[0].sets[0].weight == "62.50"
    assert (await mongo_storage.get_workout_stats()).total_weight == 500

    assert await mongo_storage.delete_workout(workout.id) is True
    assert await mongo_storage.get_workout_by_id(workout.id) is None


@pytest.mark.asyncio
async def test_unknown_exercise_writes_nothing(mongo_storage):
    with pytest.raises(ExerciseNotFoundError):
        await mongo_storage.create_workout(WorkoutCreate(
            name="Ghost",
            date=datetime(2024, 1, 15),
            exercises=[{"exercise_id": "65a4f0c2e1b2c3d4e5f60718", "sets": []}],
        ))
    assert await mongo_storage.get_all_workouts() == []


@pytest.mark.asyncio
async def test_nutrition_goals_upsert(mongo_storage):
    first = await mongo_storage.update_nutrition_goals(NutritionGoalUpdate(
        daily_calories=2000, daily_protein=150, daily_carbs=200, daily_fat=70
    ))
    second = await mongo_storage.update_nutrition_goals(NutritionGoalUpdate(
        daily_calories=2400, daily_protein=170, daily_carbs=260, daily_fat=80
    ))

    assert second.id == first.id
    assert (await mongo_storage.get_nutrition_goals()).daily_calories == 2400
