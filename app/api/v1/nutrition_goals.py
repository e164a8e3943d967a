from typing import Optional

from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_storage
from app.schemas.nutrition import NutritionGoal, NutritionGoalUpdate
from app.storage.base import IStorage

router = APIRouter(prefix="/nutrition-goals", tags=["nutrition"])


@router.get("", response_model=Optional[NutritionGoal])
async def get_nutrition_goals(storage: IStorage = Depends(get_storage)):
    """Цель питания или null, если ее еще не задавали"""
    return await storage.get_nutrition_goals()


@router.post("", response_model=NutritionGoal, status_code=status.HTTP_201_CREATED)
async def update_nutrition_goals(data: NutritionGoalUpdate, storage: IStorage = Depends(get_storage)):
    return await storage.update_nutrition_goals(data)
