"""
MongoDB хранилище на драйвере motor (без ODM).

Документы лежат в отдельных коллекциях, связи между ними хранятся
строковыми id (workout_id, workout_exercise_id, exercise_id). Наружу
id отдается как hex ObjectId.

Упражнения, записанные старыми скриптами импорта (exercise_name,
muscle_group, difficulty_level, primary_function), приводятся к схеме
Exercise при чтении.
"""

import asyncio
import logging
import random
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ReturnDocument

from app.core.config import settings
from app.core.seed_data import INITIAL_EXERCISES, INITIAL_QUOTES, INITIAL_RECIPES, build_initial_challenges
from app.schemas.exercise import Exercise, ExerciseCreate
from app.schemas.motivation import DailyChallenge, DailyChallengeCreate, MotivationalQuote
from app.schemas.nutrition import Meal, MealCreate, NutritionGoal, NutritionGoalUpdate, Recipe, RecipeCreate
from app.schemas.progress import UserProfile, UserProfileUpdate, WeightEntry, WeightEntryCreate
from app.schemas.workout import (
    Workout,
    WorkoutCreate,
    WorkoutExercise,
    WorkoutSet,
    WorkoutStats,
    WorkoutUpdate,
    WorkoutWithExercises,
)
from app.services.workout_stats import calculate_workout_stats
from app.storage.base import (
    ExerciseNotFoundError,
    IStorage,
    StorageNotConnectedError,
    day_bounds,
    plain_values,
)

logger = logging.getLogger(__name__)

EXERCISES = "exercises"
WORKOUTS = "workouts"
WORKOUT_EXERCISES = "workout_exercises"
SETS = "sets"
MEALS = "meals"
RECIPES = "recipes"
NUTRITION_GOALS = "nutrition_goals"
QUOTES = "motivational_quotes"
CHALLENGES = "daily_challenges"
WEIGHT_ENTRIES = "weight_entries"
USER_PROFILES = "user_profiles"

# BSON хранит целые не длиннее 8 байт
MAX_LEGACY_ID = 2 ** 63 - 1

# Порядок важен: первая подходящая подстрока определяет категорию
CATEGORY_KEYWORDS = [
    ("chest", ("chest", "pectoral")),
    ("back", ("back", "lats", "rhomboids", "trap")),
    ("shoulders", ("shoulder", "deltoid")),
    ("arms", ("bicep", "tricep", "forearm")),
    ("legs", ("quad", "hamstring", "glute", "calf")),
    ("core", ("abs", "core", "oblique")),
    ("cardio", ("cardio", "aerobic")),
]


def map_category(muscle_group) -> str:
    """Категория упражнения по основной (первой) мышечной группе"""
    if not muscle_group:
        return "general"
    primary = muscle_group[0] if isinstance(muscle_group, list) else muscle_group
    primary = str(primary or "").lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in primary for keyword in keywords):
            return category
    return "general"


def map_difficulty(level) -> str:
    if not level:
        return "beginner"
    level = str(level).lower()
    if any(word in level for word in ("advanced", "expert", "hard")):
        return "advanced"
    if any(word in level for word in ("intermediate", "medium")):
        return "intermediate"
    return "beginner"


def as_list(value) -> List[str]:
    if not value:
        return []
    return value if isinstance(value, list) else [value]


def id_filter(raw_id) -> Optional[Dict[str, Any]]:
    """
    Фильтр поиска по id.

    Валидный ObjectId ищется по _id. Целое в каноническом виде ищется по
    числовому полю id (так хранились записи старой версии). Все остальное,
    включая числа больше int64, не найдено.
    """
    raw_id = str(raw_id)
    try:
        return {"_id": ObjectId(raw_id)}
    except (InvalidId, TypeError):
        pass
    if not (raw_id.isascii() and raw_id.isdecimal()):
        return None
    value = int(raw_id)
    if str(value) != raw_id or value > MAX_LEGACY_ID:
        return None
    return {"id": value}


def from_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    data = {key: value for key, value in doc.items() if key not in ("_id", "id")}
    data["id"] = str(doc["_id"])
    return data


def exercise_from_document(doc: Dict[str, Any]) -> Exercise:
    muscle_groups = doc.get("muscle_groups") or as_list(doc.get("muscle_group"))
    return Exercise(
        id=str(doc["_id"]),
        name=doc.get("name") or doc.get("exercise_name") or "Unknown Exercise",
        category=doc.get("category") or map_category(doc.get("muscle_group")),
        instructions=doc.get("instructions") or doc.get("primary_function"),
        difficulty=map_difficulty(doc.get("difficulty") or doc.get("difficulty_level")),
        muscle_groups=muscle_groups,
        equipment=as_list(doc.get("equipment")),
    )


class MongoStorage(IStorage):
    backend_name = "mongo"

    def __init__(self, url: str = None, db_name: str = None, client: Optional[AsyncIOMotorClient] = None):
        self.url = url or settings.MONGODB_URL
        self.db_name = db_name or settings.MONGODB_DB_NAME
        self._client = client
        self._owns_client = client is None
        self._db = None
        self._connect_lock = asyncio.Lock()

    # ==========================
    # ПОДКЛЮЧЕНИЕ
    # ==========================

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    async def connect(self) -> None:
        # Стартовые данные заливаются один раз и при параллельных вызовах
        async with self._connect_lock:
            if self._db is not None:
                return

            if self._client is None:
                self._client = AsyncIOMotorClient(self.url)
            try:
                await self._client.admin.command("ping")
            except Exception as e:
                logger.error(f"Не удалось подключиться к MongoDB: {e}")
                if self._owns_client:
                    self._client.close()
                    self._client = None
                raise

            self._db = self._client[self.db_name]
            logger.info(f"Подключено к MongoDB, база '{self.db_name}'")
            await self._seed()

    async def disconnect(self) -> None:
        if self._db is None:
            return
        self._db = None
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None
        logger.info("Отключено от MongoDB")

    def _collection(self, name: str):
        if self._db is None:
            raise StorageNotConnectedError(self.backend_name)
        return self._db[name]

    async def _seed(self) -> None:
        now = datetime.utcnow()
        initial = [
            (EXERCISES, INITIAL_EXERCISES),
            (RECIPES, [{**recipe, "created_at": now} for recipe in INITIAL_RECIPES]),
            (QUOTES, INITIAL_QUOTES),
            (CHALLENGES, build_initial_challenges(now)),
        ]
        for name, rows in initial:
            collection = self._collection(name)
            if await collection.count_documents({}) > 0:
                continue
            # insert_many дописывает _id в переданные словари
            await collection.insert_many([dict(row) for row in rows])
            logger.info(f"Коллекция {name}: добавлено {len(rows)} документов")

    # ==========================
    # УПРАЖНЕНИЯ
    # ==========================

    async def get_all_exercises(self) -> List[Exercise]:
        docs = await self._collection(EXERCISES).find({}).to_list(length=None)
        return [exercise_from_document(doc) for doc in docs]

    async def _find_exercise_document(self, exercise_id) -> Optional[Dict[str, Any]]:
        query = id_filter(exercise_id)
        if query is None:
            return None
        return await self._collection(EXERCISES).find_one(query)

    async def get_exercise_by_id(self, exercise_id: str) -> Optional[Exercise]:
        doc = await self._find_exercise_document(exercise_id)
        return exercise_from_document(doc) if doc else None

    async def create_exercise(self, data: ExerciseCreate) -> Exercise:
        doc = plain_values(data)
        result = await self._collection(EXERCISES).insert_one(doc)
        return exercise_from_document({**doc, "_id": result.inserted_id})

    # ==========================
    # ТРЕНИРОВКИ
    # ==========================

    async def get_all_workouts(self) -> List[Workout]:
        docs = await self._collection(WORKOUTS).find({}).sort("date", -1).to_list(length=None)
        return [Workout(**from_document(doc)) for doc in docs]

    async def get_recent_workouts(self, limit: int = 5) -> List[Workout]:
        docs = await self._collection(WORKOUTS).find({}).sort("date", -1).limit(limit).to_list(length=limit)
        return [Workout(**from_document(doc)) for doc in docs]

    async def _build_workout(self, doc: Dict[str, Any]) -> WorkoutWithExercises:
        workout_id = str(doc["_id"])
        entries = await self._collection(WORKOUT_EXERCISES).find(
            {"workout_id": workout_id}
        ).sort("order_index", 1).to_list(length=None)

        exercises = []
        for entry in entries:
            entry_id = str(entry["_id"])
            sets = await self._collection(SETS).find(
                {"workout_exercise_id": entry_id}
            ).sort("set_number", 1).to_list(length=None)
            exercise_doc = await self._find_exercise_document(entry["exercise_id"])
            exercises.append(WorkoutExercise(
                **from_document(entry),
                exercise=exercise_from_document(exercise_doc) if exercise_doc else None,
                sets=[WorkoutSet(**from_document(s)) for s in sets]
            ))
        return WorkoutWithExercises(**from_document(doc), exercises=exercises)

    async def get_workout_by_id(self, workout_id: str) -> Optional[WorkoutWithExercises]:
        query = id_filter(workout_id)
        if query is None:
            return None
        doc = await self._collection(WORKOUTS).find_one(query)
        return await self._build_workout(doc) if doc else None

    async def create_workout(self, data: WorkoutCreate) -> WorkoutWithExercises:
        exercise_ids = []
        for entry in data.exercises:
            exercise_doc = await self._find_exercise_document(entry.exercise_id)
            if exercise_doc is None:
                raise ExerciseNotFoundError(entry.exercise_id)
            exercise_ids.append(str(exercise_doc["_id"]))

        # Транзакций нет: при ошибке удаляем уже вставленное и пробрасываем исключение
        inserted = []
        try:
            workout_doc = {**plain_values(data, exclude={"exercises"}), "created_at": datetime.utcnow()}
            result = await self._collection(WORKOUTS).insert_one(workout_doc)
            workout_id = str(result.inserted_id)
            inserted.append((WORKOUTS, [result.inserted_id]))

            for order_index, (entry, exercise_id) in enumerate(zip(data.exercises, exercise_ids)):
                result = await self._collection(WORKOUT_EXERCISES).insert_one({
                    "workout_id": workout_id,
                    "exercise_id": exercise_id,
                    "order_index": order_index,
                })
                inserted.append((WORKOUT_EXERCISES, [result.inserted_id]))
                if not entry.sets:
                    continue

                set_docs = [
                    {
                        "workout_exercise_id": str(result.inserted_id),
                        "set_number": set_number,
                        "weight": set_data.weight,
                        "reps": set_data.reps,
                        "completed": set_data.completed,
                    }
                    for set_number, set_data in enumerate(entry.sets, start=1)
                ]
                sets_result = await self._collection(SETS).insert_many(set_docs)
                inserted.append((SETS, list(sets_result.inserted_ids)))
        except Exception as e:
            logger.error(f"Ошибка создания тренировки, откатываем {len(inserted)} вставок: {e}")
            await self._rollback(inserted)
            raise

        return await self.get_workout_by_id(workout_id)

    async def _rollback(self, inserted) -> None:
        for name, ids in reversed(inserted):
            try:
                await self._collection(name).delete_many({"_id": {"$in": ids}})
            except Exception as e:
                logger.error(f"Не удалось удалить {len(ids)} документов из {name}: {e}")

    async def update_workout(self, workout_id: str, data: WorkoutUpdate) -> Optional[Workout]:
        query = id_filter(workout_id)
        if query is None:
            return None
        changes = plain_values(data, exclude_unset=True)
        collection = self._collection(WORKOUTS)
        if changes:
            doc = await collection.find_one_and_update(
                query, {"$set": changes}, return_document=ReturnDocument.AFTER
            )
        else:
            doc = await collection.find_one(query)
        return Workout(**from_document(doc)) if doc else None

    async def delete_workout(self, workout_id: str) -> bool:
        query = id_filter(workout_id)
        if query is None:
            return False
        doc = await self._collection(WORKOUTS).find_one(query)
        if doc is None:
            return False

        workout_id = str(doc["_id"])
        entries = await self._collection(WORKOUT_EXERCISES).find({"workout_id": workout_id}).to_list(length=None)
        entry_ids = [str(entry["_id"]) for entry in entries]
        if entry_ids:
            await self._collection(SETS).delete_many({"workout_exercise_id": {"$in": entry_ids}})
        await self._collection(WORKOUT_EXERCISES).delete_many({"workout_id": workout_id})
        await self._collection(WORKOUTS).delete_one({"_id": doc["_id"]})
        return True

    async def get_workout_stats(self) -> WorkoutStats:
        docs = await self._collection(WORKOUTS).find({}).to_list(length=None)
        workouts = [await self._build_workout(doc) for doc in docs]
        return calculate_workout_stats(workouts)

    # ==========================
    # ПИТАНИЕ
    # ==========================

    async def create_meal(self, data: MealCreate) -> Meal:
        doc = {**plain_values(data), "created_at": datetime.utcnow()}
        result = await self._collection(MEALS).insert_one(doc)
        return Meal(**from_document({**doc, "_id": result.inserted_id}))

    async def get_meals_by_date(self, day: date) -> List[Meal]:
        start, end = day_bounds(day)
        docs = await self._collection(MEALS).find({"date": {"$gte": start, "$lt": end}}).to_list(length=None)
        return [Meal(**from_document(doc)) for doc in docs]

    async def get_all_meals(self) -> List[Meal]:
        docs = await self._collection(MEALS).find({}).to_list(length=None)
        return [Meal(**from_document(doc)) for doc in docs]

    async def get_all_recipes(self) -> List[Recipe]:
        docs = await self._collection(RECIPES).find({}).to_list(length=None)
        return [Recipe(**from_document(doc)) for doc in docs]

    async def create_recipe(self, data: RecipeCreate) -> Recipe:
        doc = {**plain_values(data), "created_at": datetime.utcnow()}
        result = await self._collection(RECIPES).insert_one(doc)
        return Recipe(**from_document({**doc, "_id": result.inserted_id}))

    async def _upsert_single(self, name: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Коллекции с единственным документом (цель питания, профиль)"""
        now = datetime.utcnow()
        return await self._collection(name).find_one_and_update(
            {},
            {"$set": {**changes, "updated_at": now}, "$setOnInsert": {"created_at": now}},
            upsert=True,
            return_document=ReturnDocument.AFTER
        )

    async def get_nutrition_goals(self) -> Optional[NutritionGoal]:
        doc = await self._collection(NUTRITION_GOALS).find_one({})
        return NutritionGoal(**from_document(doc)) if doc else None

    async def update_nutrition_goals(self, data: NutritionGoalUpdate) -> NutritionGoal:
        doc = await self._upsert_single(NUTRITION_GOALS, plain_values(data))
        return NutritionGoal(**from_document(doc))

    # ==========================
    # ВЕС И ПРОФИЛЬ
    # ==========================

    async def create_weight_entry(self, data: WeightEntryCreate) -> WeightEntry:
        doc = {**plain_values(data), "created_at": datetime.utcnow()}
        result = await self._collection(WEIGHT_ENTRIES).insert_one(doc)
        return WeightEntry(**from_document({**doc, "_id": result.inserted_id}))

    async def get_weight_entries(self) -> List[WeightEntry]:
        docs = await self._collection(WEIGHT_ENTRIES).find({}).sort("date", -1).to_list(length=None)
        return [WeightEntry(**from_document(doc)) for doc in docs]

    async def get_latest_weight(self) -> Optional[WeightEntry]:
        doc = await self._collection(WEIGHT_ENTRIES).find_one({}, sort=[("date", -1), ("_id", -1)])
        return WeightEntry(**from_document(doc)) if doc else None

    async def get_user_profile(self) -> Optional[UserProfile]:
        doc = await self._collection(USER_PROFILES).find_one({})
        return UserProfile(**from_document(doc)) if doc else None

    async def update_user_profile(self, data: UserProfileUpdate) -> UserProfile:
        doc = await self._upsert_single(USER_PROFILES, plain_values(data))
        return UserProfile(**from_document(doc))

    # ==========================
    # МОТИВАЦИЯ
    # ==========================

    async def get_random_quote(self) -> Optional[MotivationalQuote]:
        collection = self._collection(QUOTES)
        total = await collection.count_documents({})
        if total == 0:
            return None
        docs = await collection.find({}).skip(random.randrange(total)).limit(1).to_list(length=1)
        return MotivationalQuote(**from_document(docs[0])) if docs else None

    async def get_quotes_by_category(self, category: str) -> List[MotivationalQuote]:
        docs = await self._collection(QUOTES).find({"category": category}).to_list(length=None)
        return [MotivationalQuote(**from_document(doc)) for doc in docs]

    async def get_todays_challenge(self) -> Optional[DailyChallenge]:
        start, end = day_bounds(datetime.utcnow().date())
        doc = await self._collection(CHALLENGES).find_one({"date": {"$gte": start, "$lt": end}})
        return DailyChallenge(**from_document(doc)) if doc else None

    async def get_all_challenges(self) -> List[DailyChallenge]:
        docs = await self._collection(CHALLENGES).find({}).to_list(length=None)
        return [DailyChallenge(**from_document(doc)) for doc in docs]

    async def create_challenge(self, data: DailyChallengeCreate) -> DailyChallenge:
        doc = plain_values(data)
        result = await self._collection(CHALLENGES).insert_one(doc)
        return DailyChallenge(**from_document({**doc, "_id": result.inserted_id}))
