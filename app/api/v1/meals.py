from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.core.dependencies import get_storage
from app.schemas.nutrition import Meal, MealCreate
from app.storage.base import IStorage

router = APIRouter(prefix="/meals", tags=["meals"])


@router.post("", response_model=Meal, status_code=status.HTTP_201_CREATED)
async def create_meal(data: MealCreate, storage: IStorage = Depends(get_storage)):
    return await storage.create_meal(data)


@router.get("", response_model=List[Meal])
async def list_meals(
        day: Optional[date] = Query(default=None, alias="date"),
        storage: IStorage = Depends(get_storage)
):
    if day is None:
        return await storage.get_all_meals()
    return await storage.get_meals_by_date(day)


@router.get("/{day}", response_model=List[Meal])
async def meals_by_date(day: date, storage: IStorage = Depends(get_storage)):
    return await storage.get_meals_by_date(day)
