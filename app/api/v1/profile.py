from typing import Optional

from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_storage
from app.schemas.progress import UserProfile, UserProfileUpdate
from app.storage.base import IStorage

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=Optional[UserProfile])
async def get_profile(storage: IStorage = Depends(get_storage)):
    return await storage.get_user_profile()


@router.post("", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
async def update_profile(data: UserProfileUpdate, storage: IStorage = Depends(get_storage)):
    return await storage.update_user_profile(data)
