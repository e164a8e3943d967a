"""
Общий контракт IStorage: одни и те же сценарии для in-memory и SQL-хранилища.

SQL-хранилище поднимается на sqlite+aiosqlite во временной папке, поэтому
внешняя база не нужна. Тесты не полагаются на стартовые данные: SQL заливает
их при подключении, in-memory создаётся пустым.
"""

from datetime import date, datetime, timedelta

import pytest

from app.schemas.exercise import ExerciseCreate
from app.schemas.motivation import DailyChallengeCreate
from app.schemas.nutrition import MealCreate, NutritionGoalUpdate, RecipeCreate
from app.schemas.progress import UserProfileUpdate, WeightEntryCreate
from app.schemas.workout import WorkoutCreate, WorkoutUpdate
from app.storage.base import ExerciseNotFoundError
from app.storage.memory import MemoryStorage
from app.storage.sql import SqlStorage

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Фикстуры и фабрики
# ---------------------------------------------------------------------------

@pytest.fixture(params=["memory", "sql"])
async def backend(request, tmp_path):
    if request.param == "memory":
        storage = MemoryStorage(seed=False)
    else:
        storage = SqlStorage(database_url=f"sqlite+aiosqlite:///{tmp_path / 'fittrack.db'}", echo=False)
    await storage.connect()
    yield storage
    await storage.disconnect()


async def create_exercise(backend, name="Bench Press"):
    return await backend.create_exercise(ExerciseCreate(
        name=name,
        category="chest",
        instructions="Press",
        difficulty="intermediate",
        muscle_groups=["chest", "triceps"],
        equipment=["barbell"],
    ))


def make_workout(exercise_ids, day=datetime(2024, 1, 15, 10, 0), **overrides) -> WorkoutCreate:
    data = {
        "name": "Push day",
        "date": day,
        "duration": 45,
        "exercises": [
            {
                "exercise_id": exercise_id,
                "sets": [
                    {"weight": "100", "reps": 5, "completed": 1},
                    {"weight": "62.50", "reps": 8, "completed": 0},
                ],
            }
            for exercise_id in exercise_ids
        ],
    }
    data.update(overrides)
    return WorkoutCreate(**data)


# ---------------------------------------------------------------------------
# Подключение
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_connect_is_idempotent(backend):
    assert backend.is_connected
    await backend.connect()
    assert backend.is_connected


# ---------------------------------------------------------------------------
# Упражнения
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_and_get_exercise(backend):
    exercise = await create_exercise(backend)

    found = await backend.get_exercise_by_id(exercise.id)
    assert found == exercise
    assert found.muscle_groups == ["chest", "triceps"]
    assert found.difficulty.value == "intermediate"
    assert exercise in await backend.get_all_exercises()


MALFORMED_IDS = ["999999", "abc", "", "1.5", "01", " 1", "²", "99999999999999999999"]


@pytest.mark.asyncio
@pytest.mark.parametrize("missing_id", MALFORMED_IDS)
async def test_get_exercise_unknown_or_malformed_id_returns_none(backend, missing_id):
    # Запись с id "1" существует, "01" и " 1" все равно не найдены
    await create_exercise(backend)
    assert await backend.get_exercise_by_id(missing_id) is None


@pytest.mark.asyncio
async def test_create_exercise_defaults_to_beginner(backend):
    created = await backend.create_exercise(ExerciseCreate(name="Plank", category="core"))

    found = await backend.get_exercise_by_id(created.id)
    assert created.difficulty.value == "beginner"
    assert found.difficulty.value == "beginner"
    assert found.muscle_groups == []
    assert found.equipment == []


# ---------------------------------------------------------------------------
# Тренировки
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_workout_stores_exercises_and_sets_in_order(backend):
    bench = await create_exercise(backend, "Bench Press")
    squat = await create_exercise(backend, "Squat")

    workout = await backend.create_workout(make_workout([squat.id, bench.id]))

    assert workout.name == "Push day"
    assert workout.date == datetime(2024, 1, 15, 10, 0)
    assert [entry.exercise_id for entry in workout.exercises] == [squat.id, bench.id]
    assert [entry.order_index for entry in workout.exercises] == [0, 1]
    assert workout.exercises[0].exercise.name == "Squat"

    sets = workout.exercises[0].sets
    assert [s.set_number for s in sets] == [1, 2]
    # Вес возвращается ровно в том виде, в котором пришел
    assert [s.weight for s in sets] == ["100", "62.50"]
    assert [s.completed for s in sets] == [1, 0]

    assert await backend.get_workout_by_id(workout.id) == workout


@pytest.mark.asyncio
async def test_create_workout_with_unknown_exercise_writes_nothing(backend):
    bench = await create_exercise(backend)
    before = await backend.get_all_workouts()

    with pytest.raises(ExerciseNotFoundError) as exc_info:
        await backend.create_workout(make_workout([bench.id, "424242"]))

    assert exc_info.value.exercise_id == "424242"
    assert await backend.get_all_workouts() == before


@pytest.mark.asyncio
async def test_workouts_are_returned_newest_first(backend):
    base = datetime(2024, 1, 1, 9, 0)
    for offset in (2, 0, 5, 1):
        await backend.create_workout(make_workout([], day=base + timedelta(days=offset), name=f"day {offset}"))

    workouts = await backend.get_all_workouts()
    assert [w.name for w in workouts] == ["day 5", "day 2", "day 1", "day 0"]

    recent = await backend.get_recent_workouts(limit=2)
    assert [w.name for w in recent] == ["day 5", "day 2"]


@pytest.mark.asyncio
async def test_update_workout_changes_only_given_fields(backend):
    workout = await backend.create_workout(make_workout([]))

    updated = await backend.update_workout(workout.id, WorkoutUpdate(name="Leg day"))

    assert updated.name == "Leg day"
    assert updated.duration == 45
    assert updated.date == workout.date
    assert await backend.update_workout("999999", WorkoutUpdate(name="x")) is None


@pytest.mark.asyncio
async def test_delete_workout_removes_exercises_and_sets(backend):
    bench = await create_exercise(backend)
    workout = await backend.create_workout(make_workout([bench.id]))

    assert await backend.delete_workout(workout.id) is True
    assert await backend.get_workout_by_id(workout.id) is None
    assert await backend.delete_workout(workout.id) is False

    stats = await backend.get_workout_stats()
    assert stats.total_weight == 0


@pytest.mark.asyncio
async def test_workout_stats_use_completed_sets(backend):
    bench = await create_exercise(backend)
    await backend.create_workout(make_workout([bench.id], day=datetime.utcnow(), duration=40))
    await backend.create_workout(make_workout([], day=datetime.utcnow() - timedelta(days=30), duration=None))

    stats = await backend.get_workout_stats()

    # Только первый подход выполнен: 100 × 5
    assert stats.total_weight == 500
    assert stats.weekly_workouts == 1
    assert stats.avg_duration == 40


# ---------------------------------------------------------------------------
# Питание
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_meals_by_date_match_calendar_day(backend):
    for name, when in [
        ("Oats", datetime(2024, 1, 15, 0, 0)),
        ("Salad", datetime(2024, 1, 15, 23, 59)),
        ("Pizza", datetime(2024, 1, 16, 0, 0)),
    ]:
        await backend.create_meal(MealCreate(name=name, type="lunch", date=when, calories=500))

    meals = await backend.get_meals_by_date(date(2024, 1, 15))
    assert sorted(m.name for m in meals) == ["Oats", "Salad"]
    assert len(await backend.get_all_meals()) == 3


@pytest.mark.asyncio
async def test_create_recipe(backend):
    recipe = await backend.create_recipe(RecipeCreate(
        name="Oat pancakes",
        instructions="Mix and fry",
        protein=20.5,
        ingredients=["oats", "eggs"],
        tags=["breakfast"],
    ))
    assert recipe.servings == 1
    assert recipe in await backend.get_all_recipes()


@pytest.mark.asyncio
async def test_nutrition_goals_upsert_keeps_single_record(backend):
    assert await backend.get_nutrition_goals() is None

    first = await backend.update_nutrition_goals(NutritionGoalUpdate(
        daily_calories=2000, daily_protein=150, daily_carbs=200, daily_fat=70
    ))
    second = await backend.update_nutrition_goals(NutritionGoalUpdate(
        daily_calories=2500, daily_protein=180, daily_carbs=250, daily_fat=80,
        weight_goal="gain", activity_level="active"
    ))

    assert second.id == first.id
    assert second.created_at == first.created_at
    goals = await backend.get_nutrition_goals()
    assert goals.daily_calories == 2500
    assert goals.weight_goal.value == "gain"
    assert goals.activity_level.value == "active"


# ---------------------------------------------------------------------------
# Вес и профиль
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_weight_entries_newest_first(backend):
    assert await backend.get_latest_weight() is None

    await backend.create_weight_entry(WeightEntryCreate(weight=180, date=datetime(2024, 1, 1)))
    await backend.create_weight_entry(WeightEntryCreate(weight=176, unit="lbs", date=datetime(2024, 1, 20)))
    await backend.create_weight_entry(WeightEntryCreate(weight=178, date=datetime(2024, 1, 10)))

    entries = await backend.get_weight_entries()
    assert [e.weight for e in entries] == [176, 178, 180]
    latest = await backend.get_latest_weight()
    assert latest.weight == 176


@pytest.mark.asyncio
async def test_user_profile_upsert(backend):
    assert await backend.get_user_profile() is None

    first = await backend.update_user_profile(UserProfileUpdate(height=70, age=30))
    second = await backend.update_user_profile(UserProfileUpdate(height=178, height_unit="cm", age=31, gender="female"))

    assert second.id == first.id
    profile = await backend.get_user_profile()
    assert profile.height == 178
    assert profile.height_unit.value == "cm"
    assert profile.gender.value == "female"


# ---------------------------------------------------------------------------
# Мотивация
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_todays_challenge_and_challenge_list(backend):
    challenge = await backend.create_challenge(DailyChallengeCreate(
        title="Plank",
        description="Hold a plank for 3 minutes",
        type="workout",
        difficulty="hard",
        date=datetime.utcnow(),
    ))
    await backend.create_challenge(DailyChallengeCreate(
        title="Old",
        description="Yesterday's challenge",
        type="habit",
        difficulty="easy",
        date=datetime.utcnow() - timedelta(days=2),
    ))

    todays = await backend.get_todays_challenge()
    assert todays is not None
    assert todays.date.date() == datetime.utcnow().date()
    assert challenge in await backend.get_all_challenges()


@pytest.mark.asyncio
async def test_quotes_by_unknown_category_are_empty(backend):
    assert await backend.get_quotes_by_category("nonexistent") == []


# ---------------------------------------------------------------------------
# Некорректные id тренировок
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
@pytest.mark.parametrize("missing_id", MALFORMED_IDS)
async def test_workout_operations_with_malformed_id_are_not_found(backend, missing_id):
    workout = await backend.create_workout(make_workout([]))

    assert await backend.get_workout_by_id(missing_id) is None
    assert await backend.update_workout(missing_id, WorkoutUpdate(name="x")) is None
    assert await backend.delete_workout(missing_id) is False
    assert await backend.get_workout_by_id(workout.id) is not None
