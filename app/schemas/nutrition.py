from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from app.schemas.common import CamelModel, UtcDatetime


class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class WeightGoal(str, Enum):
    lose = "lose"
    maintain = "maintain"
    gain = "gain"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    light = "light"
    moderate = "moderate"
    active = "active"
    very_active = "very_active"


class MealCreate(CamelModel):
    name: str = Field(min_length=1)
    type: MealType
    date: UtcDatetime
    calories: Optional[int] = Field(default=None, ge=0)
    protein: Optional[float] = Field(default=None, ge=0)
    carbs: Optional[float] = Field(default=None, ge=0)
    fat: Optional[float] = Field(default=None, ge=0)


class Meal(MealCreate):
    id: str
    created_at: datetime


class RecipeCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    instructions: str
    servings: int = Field(default=1, ge=1)
    prep_time: Optional[int] = Field(default=None, ge=0)
    cook_time: Optional[int] = Field(default=None, ge=0)
    calories: Optional[int] = Field(default=None, ge=0)
    protein: Optional[float] = Field(default=None, ge=0)
    carbs: Optional[float] = Field(default=None, ge=0)
    fat: Optional[float] = Field(default=None, ge=0)
    ingredients: List[str] = []
    tags: List[str] = []


class Recipe(RecipeCreate):
    id: str
    created_at: datetime


class NutritionGoalUpdate(CamelModel):
    daily_calories: int = Field(ge=0)
    daily_protein: float = Field(ge=0)
    daily_carbs: float = Field(ge=0)
    daily_fat: float = Field(ge=0)
    maintenance_calories: Optional[int] = Field(default=None, ge=0)
    weight_goal: WeightGoal = WeightGoal.maintain
    activity_level: ActivityLevel = ActivityLevel.moderate


class NutritionGoal(NutritionGoalUpdate):
    id: str
    created_at: datetime
    updated_at: datetime
