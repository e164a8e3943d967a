from fastapi import APIRouter, Depends

from app.core.dependencies import get_storage
from app.schemas.workout import WorkoutStats
from app.storage.base import IStorage

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=WorkoutStats)
async def workout_stats(storage: IStorage = Depends(get_storage)):
    return await storage.get_workout_stats()
