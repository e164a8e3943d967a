"""
SQL-хранилище на SQLAlchemy ORM (async).

Первичные ключи целочисленные, наружу отдаются строками. Id не в каноническом
виде целого означает «не найдено». Тренировка с упражнениями и
подходами создается в одной транзакции.
"""

import logging
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import selectinload

from app import models
from app.core.base import Base
from app.core.db import build_engine, build_session_factory
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

ID_FIELDS = ("id", "workout_id", "exercise_id", "workout_exercise_id")

# Верхняя граница Integer-колонки (int4 в PostgreSQL)
MAX_ID = 2 ** 31 - 1


def parse_id(raw_id) -> Optional[int]:
    """
    Id в каноническом виде ("1", "42") в целое, иначе None.

    "01", " 1", "²" и числа за пределами Integer-колонки не найдены,
    как и в in-memory хранилище.
    """
    raw_id = str(raw_id)
    if not (raw_id.isascii() and raw_id.isdecimal()):
        return None
    value = int(raw_id)
    if str(value) != raw_id or value > MAX_ID:
        return None
    return value


def row_to_dict(row) -> dict:
    data = {column.key: getattr(row, column.key) for column in row.__table__.columns}
    for key in ID_FIELDS:
        if data.get(key) is not None:
            data[key] = str(data[key])
    return data


def workout_to_schema(workout: models.Workout) -> WorkoutWithExercises:
    exercises = []
    for entry in workout.exercises:
        exercises.append(WorkoutExercise(
            **row_to_dict(entry),
            exercise=Exercise(**row_to_dict(entry.exercise)) if entry.exercise else None,
            sets=[WorkoutSet(**row_to_dict(s)) for s in entry.sets]
        ))
    return WorkoutWithExercises(**row_to_dict(workout), exercises=exercises)


class SqlStorage(IStorage):
    backend_name = "sql"

    def __init__(self, database_url: str = None, echo: bool = None):
        self.database_url = database_url
        self.echo = echo
        self.engine = None
        self.session_factory = None

    # ==========================
    # ПОДКЛЮЧЕНИЕ
    # ==========================

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    async def connect(self) -> None:
        if self.engine is not None:
            return

        engine = build_engine(self.database_url, self.echo)
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception as e:
            logger.error(f"Не удалось подключиться к SQL базе: {e}")
            await engine.dispose()
            raise

        self.engine = engine
        self.session_factory = build_session_factory(engine)
        await self._seed()
        logger.info("SQL хранилище подключено")

    async def disconnect(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("SQL хранилище отключено")

    def _session(self):
        if self.session_factory is None:
            raise StorageNotConnectedError(self.backend_name)
        return self.session_factory()

    async def _seed(self) -> None:
        """Залить стартовый контент в пустые таблицы"""
        now = datetime.utcnow()
        initial = [
            (models.Exercise, INITIAL_EXERCISES),
            (models.Recipe, INITIAL_RECIPES),
            (models.MotivationalQuote, INITIAL_QUOTES),
            (models.DailyChallenge, build_initial_challenges(now)),
        ]
        async with self._session() as session:
            for model, rows in initial:
                existing = await session.scalar(select(func.count()).select_from(model))
                if existing:
                    continue
                session.add_all([model(**row) for row in rows])
                logger.info(f"Таблица {model.__tablename__}: добавлено {len(rows)} записей")
            await session.commit()

    # ==========================
    # УПРАЖНЕНИЯ
    # ==========================

    async def get_all_exercises(self) -> List[Exercise]:
        async with self._session() as session:
            result = await session.execute(select(models.Exercise).order_by(models.Exercise.id))
            return [Exercise(**row_to_dict(row)) for row in result.scalars().all()]

    async def get_exercise_by_id(self, exercise_id: str) -> Optional[Exercise]:
        pk = parse_id(exercise_id)
        if pk is None:
            return None
        async with self._session() as session:
            exercise = await session.get(models.Exercise, pk)
            return Exercise(**row_to_dict(exercise)) if exercise else None

    async def create_exercise(self, data: ExerciseCreate) -> Exercise:
        async with self._session() as session:
            exercise = models.Exercise(**plain_values(data))
            session.add(exercise)
            await session.commit()
            await session.refresh(exercise)
            return Exercise(**row_to_dict(exercise))

    # ==========================
    # ТРЕНИРОВКИ
    # ==========================

    @staticmethod
    def _workout_query():
        return select(models.Workout).options(
            selectinload(models.Workout.exercises).selectinload(models.WorkoutExercise.exercise),
            selectinload(models.Workout.exercises).selectinload(models.WorkoutExercise.sets),
        )

    async def get_all_workouts(self) -> List[Workout]:
        async with self._session() as session:
            result = await session.execute(select(models.Workout).order_by(models.Workout.date.desc()))
            return [Workout(**row_to_dict(row)) for row in result.scalars().all()]

    async def get_recent_workouts(self, limit: int = 5) -> List[Workout]:
        async with self._session() as session:
            result = await session.execute(
                select(models.Workout).order_by(models.Workout.date.desc()).limit(limit)
            )
            return [Workout(**row_to_dict(row)) for row in result.scalars().all()]

    async def get_workout_by_id(self, workout_id: str) -> Optional[WorkoutWithExercises]:
        pk = parse_id(workout_id)
        if pk is None:
            return None
        async with self._session() as session:
            result = await session.execute(self._workout_query().where(models.Workout.id == pk))
            workout = result.scalar_one_or_none()
            return workout_to_schema(workout) if workout else None

    async def create_workout(self, data: WorkoutCreate) -> WorkoutWithExercises:
        exercise_ids = []
        for entry in data.exercises:
            pk = parse_id(entry.exercise_id)
            if pk is None:
                raise ExerciseNotFoundError(entry.exercise_id)
            exercise_ids.append(pk)

        async with self._session() as session:
            async with session.begin():
                if exercise_ids:
                    result = await session.execute(
                        select(models.Exercise.id).where(models.Exercise.id.in_(exercise_ids))
                    )
                    known = set(result.scalars().all())
                    for entry, pk in zip(data.exercises, exercise_ids):
                        if pk not in known:
                            raise ExerciseNotFoundError(entry.exercise_id)

                workout = models.Workout(**plain_values(data, exclude={"exercises"}))
                for order_index, (entry, pk) in enumerate(zip(data.exercises, exercise_ids)):
                    workout_exercise = models.WorkoutExercise(exercise_id=pk, order_index=order_index)
                    workout_exercise.sets = [
                        models.WorkoutSet(
                            set_number=set_number,
                            weight=set_data.weight,
                            reps=set_data.reps,
                            completed=set_data.completed
                        )
                        for set_number, set_data in enumerate(entry.sets, start=1)
                    ]
                    workout.exercises.append(workout_exercise)
                session.add(workout)
                await session.flush()
                workout_id = workout.id

        created = await self.get_workout_by_id(str(workout_id))
        return created

    async def update_workout(self, workout_id: str, data: WorkoutUpdate) -> Optional[Workout]:
        pk = parse_id(workout_id)
        if pk is None:
            return None
        async with self._session() as session:
            workout = await session.get(models.Workout, pk)
            if workout is None:
                return None
            for key, value in plain_values(data, exclude_unset=True).items():
                setattr(workout, key, value)
            await session.commit()
            await session.refresh(workout)
            return Workout(**row_to_dict(workout))

    async def delete_workout(self, workout_id: str) -> bool:
        pk = parse_id(workout_id)
        if pk is None:
            return False
        async with self._session() as session:
            async with session.begin():
                entry_ids = select(models.WorkoutExercise.id).where(models.WorkoutExercise.workout_id == pk)
                await session.execute(
                    delete(models.WorkoutSet).where(models.WorkoutSet.workout_exercise_id.in_(entry_ids))
                )
                await session.execute(
                    delete(models.WorkoutExercise).where(models.WorkoutExercise.workout_id == pk)
                )
                result = await session.execute(delete(models.Workout).where(models.Workout.id == pk))
                return result.rowcount > 0

    async def get_workout_stats(self) -> WorkoutStats:
        async with self._session() as session:
            result = await session.execute(self._workout_query())
            workouts = [workout_to_schema(w) for w in result.scalars().all()]
        return calculate_workout_stats(workouts)

    # ==========================
    # ПИТАНИЕ
    # ==========================

    async def create_meal(self, data: MealCreate) -> Meal:
        async with self._session() as session:
            meal = models.Meal(**plain_values(data), created_at=datetime.utcnow())
            session.add(meal)
            await session.commit()
            await session.refresh(meal)
            return Meal(**row_to_dict(meal))

    async def get_meals_by_date(self, day: date) -> List[Meal]:
        start, end = day_bounds(day)
        async with self._session() as session:
            result = await session.execute(
                select(models.Meal)
                .where(models.Meal.date >= start, models.Meal.date < end)
                .order_by(models.Meal.id)
            )
            return [Meal(**row_to_dict(row)) for row in result.scalars().all()]

    async def get_all_meals(self) -> List[Meal]:
        async with self._session() as session:
            result = await session.execute(select(models.Meal).order_by(models.Meal.id))
            return [Meal(**row_to_dict(row)) for row in result.scalars().all()]

    async def get_all_recipes(self) -> List[Recipe]:
        async with self._session() as session:
            result = await session.execute(select(models.Recipe).order_by(models.Recipe.id))
            return [Recipe(**row_to_dict(row)) for row in result.scalars().all()]

    async def create_recipe(self, data: RecipeCreate) -> Recipe:
        async with self._session() as session:
            recipe = models.Recipe(**plain_values(data), created_at=datetime.utcnow())
            session.add(recipe)
            await session.commit()
            await session.refresh(recipe)
            return Recipe(**row_to_dict(recipe))

    async def get_nutrition_goals(self) -> Optional[NutritionGoal]:
        async with self._session() as session:
            goal = await session.scalar(select(models.NutritionGoal).order_by(models.NutritionGoal.id).limit(1))
            return NutritionGoal(**row_to_dict(goal)) if goal else None

    async def update_nutrition_goals(self, data: NutritionGoalUpdate) -> NutritionGoal:
        now = datetime.utcnow()
        async with self._session() as session:
            goal = await session.scalar(select(models.NutritionGoal).order_by(models.NutritionGoal.id).limit(1))
            if goal is None:
                goal = models.NutritionGoal(created_at=now)
                session.add(goal)
            for key, value in plain_values(data).items():
                setattr(goal, key, value)
            goal.updated_at = now
            await session.commit()
            await session.refresh(goal)
            return NutritionGoal(**row_to_dict(goal))

    # ==========================
    # ВЕС И ПРОФИЛЬ
    # ==========================

    async def create_weight_entry(self, data: WeightEntryCreate) -> WeightEntry:
        async with self._session() as session:
            entry = models.WeightEntry(**plain_values(data), created_at=datetime.utcnow())
            session.add(entry)
            await session.commit()
            await session.refresh(entry)
            return WeightEntry(**row_to_dict(entry))

    async def get_weight_entries(self) -> List[WeightEntry]:
        async with self._session() as session:
            result = await session.execute(
                select(models.WeightEntry).order_by(models.WeightEntry.date.desc(), models.WeightEntry.id.desc())
            )
            return [WeightEntry(**row_to_dict(row)) for row in result.scalars().all()]

    async def get_latest_weight(self) -> Optional[WeightEntry]:
        async with self._session() as session:
            entry = await session.scalar(
                select(models.WeightEntry)
                .order_by(models.WeightEntry.date.desc(), models.WeightEntry.id.desc())
                .limit(1)
            )
            return WeightEntry(**row_to_dict(entry)) if entry else None

    async def get_user_profile(self) -> Optional[UserProfile]:
        async with self._session() as session:
            profile = await session.scalar(select(models.UserProfile).order_by(models.UserProfile.id).limit(1))
            return UserProfile(**row_to_dict(profile)) if profile else None

    async def update_user_profile(self, data: UserProfileUpdate) -> UserProfile:
        now = datetime.utcnow()
        async with self._session() as session:
            profile = await session.scalar(select(models.UserProfile).order_by(models.UserProfile.id).limit(1))
            if profile is None:
                profile = models.UserProfile(created_at=now)
                session.add(profile)
            for key, value in plain_values(data).items():
                setattr(profile, key, value)
            profile.updated_at = now
            await session.commit()
            await session.refresh(profile)
            return UserProfile(**row_to_dict(profile))

    # ==========================
    # МОТИВАЦИЯ
    # ==========================

    async def get_random_quote(self) -> Optional[MotivationalQuote]:
        async with self._session() as session:
            quote = await session.scalar(select(models.MotivationalQuote).order_by(func.random()).limit(1))
            return MotivationalQuote(**row_to_dict(quote)) if quote else None

    async def get_quotes_by_category(self, category: str) -> List[MotivationalQuote]:
        async with self._session() as session:
            result = await session.execute(
                select(models.MotivationalQuote)
                .where(models.MotivationalQuote.category == category)
                .order_by(models.MotivationalQuote.id)
            )
            return [MotivationalQuote(**row_to_dict(row)) for row in result.scalars().all()]

    async def get_todays_challenge(self) -> Optional[DailyChallenge]:
        start, end = day_bounds(datetime.utcnow().date())
        async with self._session() as session:
            challenge = await session.scalar(
                select(models.DailyChallenge)
                .where(models.DailyChallenge.date >= start, models.DailyChallenge.date < end)
                .order_by(models.DailyChallenge.id)
                .limit(1)
            )
            return DailyChallenge(**row_to_dict(challenge)) if challenge else None

    async def get_all_challenges(self) -> List[DailyChallenge]:
        async with self._session() as session:
            result = await session.execute(select(models.DailyChallenge).order_by(models.DailyChallenge.id))
            return [DailyChallenge(**row_to_dict(row)) for row in result.scalars().all()]

    async def create_challenge(self, data: DailyChallengeCreate) -> DailyChallenge:
        async with self._session() as session:
            challenge = models.DailyChallenge(**plain_values(data))
            session.add(challenge)
            await session.commit()
            await session.refresh(challenge)
            return DailyChallenge(**row_to_dict(challenge))
