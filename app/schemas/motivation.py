from enum import Enum
from typing import Optional

from pydantic import Field

from app.schemas.common import CamelModel, UtcDatetime


class QuoteCategory(str, Enum):
    motivation = "motivation"
    fitness = "fitness"
    nutrition = "nutrition"
    mindset = "mindset"


class ChallengeType(str, Enum):
    workout = "workout"
    nutrition = "nutrition"
    mindset = "mindset"
    habit = "habit"


class ChallengeDifficulty(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class MotivationalQuote(CamelModel):
    id: str
    quote: str
    author: Optional[str] = None
    category: QuoteCategory


class DailyChallengeCreate(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    type: ChallengeType
    difficulty: ChallengeDifficulty
    points: int = Field(default=10, ge=0)
    date: UtcDatetime


class DailyChallenge(DailyChallengeCreate):
    id: str
