from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from app.schemas.common import CamelModel, UtcDatetime
from app.schemas.nutrition import ActivityLevel, WeightGoal
from app.schemas.workout import Gender


class WeightUnit(str, Enum):
    lbs = "lbs"
    kg = "kg"


class HeightUnit(str, Enum):
    inches = "inches"
    cm = "cm"


class WeightEntryCreate(CamelModel):
    weight: float = Field(gt=0)
    unit: WeightUnit = WeightUnit.lbs
    date: UtcDatetime
    notes: Optional[str] = None


class WeightEntry(WeightEntryCreate):
    id: str
    created_at: datetime


class UserProfileUpdate(CamelModel):
    height: Optional[float] = Field(default=None, gt=0)
    height_unit: HeightUnit = HeightUnit.inches
    age: Optional[int] = Field(default=None, ge=1, le=120)
    gender: Gender = Gender.male


class UserProfile(UserProfileUpdate):
    id: str
    created_at: datetime
    updated_at: datetime


class BMIResponse(CamelModel):
    bmi: float  # округлено до 0.1
    category: str
    weight: float
    weight_unit: WeightUnit
    height: float
    height_unit: HeightUnit


class MaintenanceCaloriesResponse(CamelModel):
    maintenance_calories: int
    recommended_calories: int
    weight_goal: WeightGoal
    activity_level: ActivityLevel
    protein: int
    carbs: int
    fat: int
