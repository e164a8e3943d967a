from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.dependencies import get_storage
from app.schemas.exercise import Exercise, ExerciseCreate
from app.storage.base import IStorage

router = APIRouter(prefix="/exercises", tags=["exercises"])


@router.get("", response_model=List[Exercise])
async def list_exercises(storage: IStorage = Depends(get_storage)):
    return await storage.get_all_exercises()


@router.get("/{exercise_id}", response_model=Exercise)
async def get_exercise(exercise_id: str, storage: IStorage = Depends(get_storage)):
    exercise = await storage.get_exercise_by_id(exercise_id)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.post("", response_model=Exercise, status_code=status.HTTP_201_CREATED)
async def create_exercise(data: ExerciseCreate, storage: IStorage = Depends(get_storage)):
    return await storage.create_exercise(data)
