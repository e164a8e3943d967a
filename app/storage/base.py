"""
Контракт хранилища.

Роуты работают только с IStorage и не знают, какой бэкенд под ним:
память, MongoDB (motor) или SQL через ORM. Все реализации обязаны вести
себя одинаково: одинаковые сигнатуры, поиск по несуществующему или
кривому id возвращает None/False и никогда не бросает исключение.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from app.schemas.exercise import Exercise, ExerciseCreate
from app.schemas.motivation import DailyChallenge, DailyChallengeCreate, MotivationalQuote
from app.schemas.nutrition import Meal, MealCreate, NutritionGoal, NutritionGoalUpdate, Recipe, RecipeCreate
from app.schemas.progress import UserProfile, UserProfileUpdate, WeightEntry, WeightEntryCreate
from app.schemas.workout import (
    Workout,
    WorkoutCreate,
    WorkoutStats,
    WorkoutUpdate,
    WorkoutWithExercises,
)


class StorageError(Exception):
    """Базовая ошибка слоя хранения"""


class StorageNotConnectedError(StorageError):
    def __init__(self, backend: str):
        super().__init__(f"{backend} storage is not connected")


class ExerciseNotFoundError(StorageError):
    """Тренировка ссылается на упражнение, которого нет в хранилище"""

    def __init__(self, exercise_id: str):
        self.exercise_id = exercise_id
        super().__init__(f"Exercise {exercise_id} not found")


def day_bounds(day: date):
    """Границы календарного дня [начало, начало следующего дня) в naive UTC"""
    start = datetime(day.year, day.month, day.day)
    return start, start + timedelta(days=1)


def plain_values(model: BaseModel, **dump_kwargs) -> dict:
    """Дамп схемы в словарь с enum, развернутыми в строки (для драйверов БД)"""
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in model.model_dump(**dump_kwargs).items()
    }


class IStorage(ABC):
    backend_name = "abstract"

    # ==========================
    # ПОДКЛЮЧЕНИЕ
    # ==========================

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        ...

    @abstractmethod
    async def connect(self) -> None:
        """Идемпотентно: повторный вызов не открывает второе подключение"""

    @abstractmethod
    async def disconnect(self) -> None:
        """Идемпотентно: без подключения ничего не делает"""

    # ==========================
    # УПРАЖНЕНИЯ
    # ==========================

    @abstractmethod
    async def get_all_exercises(self) -> List[Exercise]:
        ...

    @abstractmethod
    async def get_exercise_by_id(self, exercise_id: str) -> Optional[Exercise]:
        ...

    @abstractmethod
    async def create_exercise(self, data: ExerciseCreate) -> Exercise:
        ...

    # ==========================
    # ТРЕНИРОВКИ
    # ==========================

    @abstractmethod
    async def get_all_workouts(self) -> List[Workout]:
        """Все тренировки, новые первыми, без упражнений"""

    @abstractmethod
    async def get_recent_workouts(self, limit: int = 5) -> List[Workout]:
        ...

    @abstractmethod
    async def get_workout_by_id(self, workout_id: str) -> Optional[WorkoutWithExercises]:
        ...

    @abstractmethod
    async def create_workout(self, data: WorkoutCreate) -> WorkoutWithExercises:
        """
        Создать тренировку, затем ее упражнения, затем подходы.

        Все упражнения проверяются до первой записи: неизвестный id дает
        ExerciseNotFoundError, и ничего не сохраняется.
        """

    @abstractmethod
    async def update_workout(self, workout_id: str, data: WorkoutUpdate) -> Optional[Workout]:
        ...

    @abstractmethod
    async def delete_workout(self, workout_id: str) -> bool:
        """Удаляет тренировку вместе с упражнениями и подходами"""

    @abstractmethod
    async def get_workout_stats(self) -> WorkoutStats:
        """Считается заново при каждом вызове, без кэша"""

    # ==========================
    # ПИТАНИЕ
    # ==========================

    @abstractmethod
    async def create_meal(self, data: MealCreate) -> Meal:
        ...

    @abstractmethod
    async def get_meals_by_date(self, day: date) -> List[Meal]:
        """Приемы пищи за календарный день (UTC)"""

    @abstractmethod
    async def get_all_meals(self) -> List[Meal]:
        ...

    @abstractmethod
    async def get_all_recipes(self) -> List[Recipe]:
        ...

    @abstractmethod
    async def create_recipe(self, data: RecipeCreate) -> Recipe:
        ...

    @abstractmethod
    async def get_nutrition_goals(self) -> Optional[NutritionGoal]:
        ...

    @abstractmethod
    async def update_nutrition_goals(self, data: NutritionGoalUpdate) -> NutritionGoal:
        """Upsert: цель питания всегда одна"""

    # ==========================
    # ВЕС И ПРОФИЛЬ
    # ==========================

    @abstractmethod
    async def create_weight_entry(self, data: WeightEntryCreate) -> WeightEntry:
        ...

    @abstractmethod
    async def get_weight_entries(self) -> List[WeightEntry]:
        """Новые записи первыми"""

    @abstractmethod
    async def get_latest_weight(self) -> Optional[WeightEntry]:
        ...

    @abstractmethod
    async def get_user_profile(self) -> Optional[UserProfile]:
        ...

    @abstractmethod
    async def update_user_profile(self, data: UserProfileUpdate) -> UserProfile:
        """Upsert: профиль всегда один"""

    # ==========================
    # МОТИВАЦИЯ
    # ==========================

    @abstractmethod
    async def get_random_quote(self) -> Optional[MotivationalQuote]:
        ...

    @abstractmethod
    async def get_quotes_by_category(self, category: str) -> List[MotivationalQuote]:
        ...

    @abstractmethod
    async def get_todays_challenge(self) -> Optional[DailyChallenge]:
        """Челлендж, дата которого приходится на текущий день (UTC)"""

    @abstractmethod
    async def get_all_challenges(self) -> List[DailyChallenge]:
        ...

    @abstractmethod
    async def create_challenge(self, data: DailyChallengeCreate) -> DailyChallenge:
        ...
