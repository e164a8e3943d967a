from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from app.schemas.common import CamelModel, UtcDatetime
from app.schemas.exercise import Exercise


class Gender(str, Enum):
    male = "male"
    female = "female"


class SetInput(CamelModel):
    # Вес хранится строкой ровно в том виде, в котором пришел ("62.50" != "62.5")
    weight: Optional[str] = None
    reps: Optional[int] = Field(default=None, ge=0)
    completed: int = Field(default=1, ge=0, le=1)

    @field_validator("weight", mode="before")
    @classmethod
    def validate_weight(cls, value):
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValueError("weight must be a decimal number")
        if isinstance(value, (int, float)):
            value = str(value)
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            try:
                parsed = Decimal(value)
            except InvalidOperation:
                raise ValueError("weight must be a decimal number")
            if not parsed.is_finite() or parsed < 0:
                raise ValueError("weight must be a non-negative decimal number")
        return value


class WorkoutExerciseInput(CamelModel):
    exercise_id: str
    sets: List[SetInput] = []

    @field_validator("exercise_id", mode="before")
    @classmethod
    def coerce_exercise_id(cls, value):
        # Клиент in-memory версии присылает числовые id
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class WorkoutBase(CamelModel):
    name: str = Field(min_length=1)
    date: UtcDatetime
    duration: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None
    gender: Gender = Gender.male


class WorkoutCreate(WorkoutBase):
    exercises: List[WorkoutExerciseInput] = []


class WorkoutUpdate(CamelModel):
    """Частичное обновление шапки тренировки (упражнения и подходы не меняются)"""
    name: Optional[str] = Field(default=None, min_length=1)
    date: Optional[UtcDatetime] = None
    duration: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None
    gender: Optional[Gender] = None


class Workout(WorkoutBase):
    id: str
    created_at: datetime


class WorkoutSet(CamelModel):
    id: str
    workout_exercise_id: str
    set_number: int
    weight: Optional[str] = None
    reps: Optional[int] = None
    completed: int = 1


class WorkoutExercise(CamelModel):
    id: str
    workout_id: str
    exercise_id: str
    order_index: int
    exercise: Optional[Exercise] = None
    sets: List[WorkoutSet] = []


class WorkoutWithExercises(Workout):
    exercises: List[WorkoutExercise] = []


class WorkoutStats(CamelModel):
    weekly_workouts: int
    total_weight: int
    avg_duration: int
