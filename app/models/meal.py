from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, DateTime, JSON, Text
from app.core.base import Base

class Meal(Base):
    __tablename__ = "meals"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    calories = Column(Integer, nullable=True)
    protein = Column(Float, nullable=True)
    carbs = Column(Float, nullable=True)
    fat = Column(Float, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    instructions = Column(Text, nullable=False)
    servings = Column(Integer, default=1, nullable=False)
    prep_time = Column(Integer, nullable=True)
    cook_time = Column(Integer, nullable=True)
    calories = Column(Integer, nullable=True)
    protein = Column(Float, nullable=True)
    carbs = Column(Float, nullable=True)
    fat = Column(Float, nullable=True)
    ingredients = Column(JSON, default=list, nullable=False)
    tags = Column(JSON, default=list, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

class NutritionGoal(Base):
    __tablename__ = "nutrition_goals"

    id = Column(Integer, primary_key=True)
    daily_calories = Column(Integer, nullable=False)
    daily_protein = Column(Float, nullable=False)
    daily_carbs = Column(Float, nullable=False)
    daily_fat = Column(Float, nullable=False)
    maintenance_calories = Column(Integer, nullable=True)
    weight_goal = Column(String, default="maintain", nullable=False)
    activity_level = Column(String, default="moderate", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
