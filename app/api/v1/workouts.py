import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.core.dependencies import get_storage
from app.schemas.workout import Workout, WorkoutCreate, WorkoutUpdate, WorkoutWithExercises
from app.storage.base import IStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.get("", response_model=List[WorkoutWithExercises])
async def list_workouts(storage: IStorage = Depends(get_storage)):
    """Все тренировки (новые первыми) вместе с упражнениями и подходами"""
    workouts = await storage.get_all_workouts()
    detailed = []
    for workout in workouts:
        full = await storage.get_workout_by_id(workout.id)
        # Тренировку могли удалить между двумя запросами
        if full:
            detailed.append(full)
    return detailed


@router.get("/recent", response_model=List[Workout])
async def recent_workouts(
        limit: int = Query(default=5, ge=1, le=50),
        storage: IStorage = Depends(get_storage)
):
    return await storage.get_recent_workouts(limit)


@router.get("/{workout_id}", response_model=WorkoutWithExercises)
async def get_workout(workout_id: str, storage: IStorage = Depends(get_storage)):
    workout = await storage.get_workout_by_id(workout_id)
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


@router.post("", response_model=WorkoutWithExercises, status_code=status.HTTP_201_CREATED)
async def create_workout(data: WorkoutCreate, storage: IStorage = Depends(get_storage)):
    workout = await storage.create_workout(data)
    logger.info(f"Создана тренировка {workout.id}: {len(workout.exercises)} упражнений")
    return workout


@router.patch("/{workout_id}", response_model=Workout)
async def update_workout(workout_id: str, data: WorkoutUpdate, storage: IStorage = Depends(get_storage)):
    workout = await storage.update_workout(workout_id, data)
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout(workout_id: str, storage: IStorage = Depends(get_storage)):
    deleted = await storage.delete_workout(workout_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Workout not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
