from enum import Enum
from typing import List, Optional

from pydantic import Field

from app.schemas.common import CamelModel


class DifficultyLevel(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class ExerciseCreate(CamelModel):
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    instructions: Optional[str] = None
    difficulty: DifficultyLevel = DifficultyLevel.beginner
    muscle_groups: List[str] = []
    equipment: List[str] = []


class Exercise(ExerciseCreate):
    id: str
