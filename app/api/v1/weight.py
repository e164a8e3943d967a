from typing import List, Optional

from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_storage
from app.schemas.progress import WeightEntry, WeightEntryCreate
from app.storage.base import IStorage

router = APIRouter(prefix="/weight", tags=["progress"])


@router.post("", response_model=WeightEntry, status_code=status.HTTP_201_CREATED)
async def create_weight_entry(data: WeightEntryCreate, storage: IStorage = Depends(get_storage)):
    return await storage.create_weight_entry(data)


@router.get("", response_model=List[WeightEntry])
async def list_weight_entries(storage: IStorage = Depends(get_storage)):
    return await storage.get_weight_entries()


@router.get("/latest", response_model=Optional[WeightEntry])
async def latest_weight(storage: IStorage = Depends(get_storage)):
    return await storage.get_latest_weight()
