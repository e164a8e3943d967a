"""
In-memory хранилище для локальной разработки и тестов.

Данные живут в словарях процесса и пропадают при перезапуске.
Не подходит для нескольких процессов. При создании заливает три
упражнения-примера, рецепты, цитаты и челленджи; постоянные бэкенды
этого не делают, поэтому полагаться на эти данные нельзя.
"""

import logging
import random
from datetime import date, datetime
from itertools import count
from typing import Dict, List, Optional

from app.core.seed_data import DEV_EXERCISES, INITIAL_QUOTES, INITIAL_RECIPES, build_initial_challenges
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
from app.storage.base import ExerciseNotFoundError, IStorage, day_bounds

logger = logging.getLogger(__name__)


class MemoryStorage(IStorage):
    backend_name = "memory"

    def __init__(self, seed: bool = True):
        self._connected = False
        self._ids: Dict[str, count] = {}

        self.exercises: Dict[str, dict] = {}
        self.workouts: Dict[str, dict] = {}
        self.workout_exercises: Dict[str, dict] = {}
        self.sets: Dict[str, dict] = {}
        self.meals: Dict[str, dict] = {}
        self.recipes: Dict[str, dict] = {}
        self.weight_entries: Dict[str, dict] = {}
        self.quotes: Dict[str, dict] = {}
        self.challenges: Dict[str, dict] = {}
        self.nutrition_goal: Optional[dict] = None
        self.user_profile: Optional[dict] = None

        if seed:
            self._seed()

    def _next_id(self, collection: str) -> str:
        if collection not in self._ids:
            self._ids[collection] = count(1)
        return str(next(self._ids[collection]))

    def _insert(self, collection: str, data: dict) -> dict:
        record = {**data, "id": self._next_id(collection)}
        getattr(self, collection)[record["id"]] = record
        return record

    def _seed(self) -> None:
        now = datetime.utcnow()
        for exercise in DEV_EXERCISES:
            self._insert("exercises", exercise)
        for recipe in INITIAL_RECIPES:
            self._insert("recipes", {**recipe, "created_at": now})
        for quote in INITIAL_QUOTES:
            self._insert("quotes", quote)
        for challenge in build_initial_challenges(now):
            self._insert("challenges", challenge)

    # ==========================
    # ПОДКЛЮЧЕНИЕ
    # ==========================

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        if self._connected:
            return
        self._connected = True
        logger.info("In-memory хранилище готово (данные не сохраняются между запусками)")

    async def disconnect(self) -> None:
        self._connected = False

    # ==========================
    # УПРАЖНЕНИЯ
    # ==========================

    async def get_all_exercises(self) -> List[Exercise]:
        return [Exercise(**exercise) for exercise in self.exercises.values()]

    async def get_exercise_by_id(self, exercise_id: str) -> Optional[Exercise]:
        exercise = self.exercises.get(str(exercise_id))
        return Exercise(**exercise) if exercise else None

    async def create_exercise(self, data: ExerciseCreate) -> Exercise:
        record = self._insert("exercises", data.model_dump())
        return Exercise(**record)

    # ==========================
    # ТРЕНИРОВКИ
    # ==========================

    def _sorted_workouts(self) -> List[dict]:
        return sorted(self.workouts.values(), key=lambda w: w["date"], reverse=True)

    async def get_all_workouts(self) -> List[Workout]:
        return [Workout(**workout) for workout in self._sorted_workouts()]

    async def get_recent_workouts(self, limit: int = 5) -> List[Workout]:
        return [Workout(**workout) for workout in self._sorted_workouts()[:limit]]

    def _build_workout(self, workout: dict) -> WorkoutWithExercises:
        entries = sorted(
            (we for we in self.workout_exercises.values() if we["workout_id"] == workout["id"]),
            key=lambda we: we["order_index"]
        )
        exercises = []
        for entry in entries:
            entry_sets = sorted(
                (s for s in self.sets.values() if s["workout_exercise_id"] == entry["id"]),
                key=lambda s: s["set_number"]
            )
            exercise = self.exercises.get(entry["exercise_id"])
            exercises.append(WorkoutExercise(
                **entry,
                exercise=Exercise(**exercise) if exercise else None,
                sets=[WorkoutSet(**s) for s in entry_sets]
            ))
        return WorkoutWithExercises(**workout, exercises=exercises)

    async def get_workout_by_id(self, workout_id: str) -> Optional[WorkoutWithExercises]:
        workout = self.workouts.get(str(workout_id))
        if not workout:
            return None
        return self._build_workout(workout)

    async def create_workout(self, data: WorkoutCreate) -> WorkoutWithExercises:
        for entry in data.exercises:
            if entry.exercise_id not in self.exercises:
                raise ExerciseNotFoundError(entry.exercise_id)

        # Между записями нет await, поэтому читатели не увидят полусозданную тренировку
        workout = self._insert("workouts", {
            **data.model_dump(exclude={"exercises"}),
            "created_at": datetime.utcnow(),
        })
        for order_index, entry in enumerate(data.exercises):
            workout_exercise = self._insert("workout_exercises", {
                "workout_id": workout["id"],
                "exercise_id": entry.exercise_id,
                "order_index": order_index,
            })
            for set_number, set_data in enumerate(entry.sets, start=1):
                self._insert("sets", {
                    "workout_exercise_id": workout_exercise["id"],
                    "set_number": set_number,
                    "weight": set_data.weight,
                    "reps": set_data.reps,
                    "completed": set_data.completed,
                })

        return self._build_workout(workout)

    async def update_workout(self, workout_id: str, data: WorkoutUpdate) -> Optional[Workout]:
        workout = self.workouts.get(str(workout_id))
        if not workout:
            return None
        workout.update(data.model_dump(exclude_unset=True))
        return Workout(**workout)

    async def delete_workout(self, workout_id: str) -> bool:
        workout_id = str(workout_id)
        if workout_id not in self.workouts:
            return False

        entry_ids = {we_id for we_id, we in self.workout_exercises.items() if we["workout_id"] == workout_id}
        for set_id in [s_id for s_id, s in self.sets.items() if s["workout_exercise_id"] in entry_ids]:
            del self.sets[set_id]
        for entry_id in entry_ids:
            del self.workout_exercises[entry_id]
        del self.workouts[workout_id]
        return True

    async def get_workout_stats(self) -> WorkoutStats:
        return calculate_workout_stats(self._build_workout(w) for w in self.workouts.values())

    # ==========================
    # ПИТАНИЕ
    # ==========================

    async def create_meal(self, data: MealCreate) -> Meal:
        record = self._insert("meals", {**data.model_dump(), "created_at": datetime.utcnow()})
        return Meal(**record)

    async def get_meals_by_date(self, day: date) -> List[Meal]:
        start, end = day_bounds(day)
        return [Meal(**meal) for meal in self.meals.values() if start <= meal["date"] < end]

    async def get_all_meals(self) -> List[Meal]:
        return [Meal(**meal) for meal in self.meals.values()]

    async def get_all_recipes(self) -> List[Recipe]:
        return [Recipe(**recipe) for recipe in self.recipes.values()]

    async def create_recipe(self, data: RecipeCreate) -> Recipe:
        record = self._insert("recipes", {**data.model_dump(), "created_at": datetime.utcnow()})
        return Recipe(**record)

    async def get_nutrition_goals(self) -> Optional[NutritionGoal]:
        return NutritionGoal(**self.nutrition_goal) if self.nutrition_goal else None

    async def update_nutrition_goals(self, data: NutritionGoalUpdate) -> NutritionGoal:
        now = datetime.utcnow()
        created_at = self.nutrition_goal["created_at"] if self.nutrition_goal else now
        self.nutrition_goal = {**data.model_dump(), "id": "1", "created_at": created_at, "updated_at": now}
        return NutritionGoal(**self.nutrition_goal)

    # ==========================
    # ВЕС И ПРОФИЛЬ
    # ==========================

    async def create_weight_entry(self, data: WeightEntryCreate) -> WeightEntry:
        record = self._insert("weight_entries", {**data.model_dump(), "created_at": datetime.utcnow()})
        return WeightEntry(**record)

    async def get_weight_entries(self) -> List[WeightEntry]:
        entries = sorted(self.weight_entries.values(), key=lambda e: e["date"], reverse=True)
        return [WeightEntry(**entry) for entry in entries]

    async def get_latest_weight(self) -> Optional[WeightEntry]:
        entries = await self.get_weight_entries()
        return entries[0] if entries else None

    async def get_user_profile(self) -> Optional[UserProfile]:
        return UserProfile(**self.user_profile) if self.user_profile else None

    async def update_user_profile(self, data: UserProfileUpdate) -> UserProfile:
        now = datetime.utcnow()
        created_at = self.user_profile["created_at"] if self.user_profile else now
        self.user_profile = {**data.model_dump(), "id": "1", "created_at": created_at, "updated_at": now}
        return UserProfile(**self.user_profile)

    # ==========================
    # МОТИВАЦИЯ
    # ==========================

    async def get_random_quote(self) -> Optional[MotivationalQuote]:
        if not self.quotes:
            return None
        return MotivationalQuote(**random.choice(list(self.quotes.values())))

    async def get_quotes_by_category(self, category: str) -> List[MotivationalQuote]:
        return [MotivationalQuote(**q) for q in self.quotes.values() if q["category"] == category]

    async def get_todays_challenge(self) -> Optional[DailyChallenge]:
        start, end = day_bounds(datetime.utcnow().date())
        for challenge in self.challenges.values():
            if start <= challenge["date"] < end:
                return DailyChallenge(**challenge)
        return None

    async def get_all_challenges(self) -> List[DailyChallenge]:
        return [DailyChallenge(**challenge) for challenge in self.challenges.values()]

    async def create_challenge(self, data: DailyChallengeCreate) -> DailyChallenge:
        record = self._insert("challenges", data.model_dump())
        return DailyChallenge(**record)
