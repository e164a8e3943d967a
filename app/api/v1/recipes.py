from typing import List

from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_storage
from app.schemas.nutrition import Recipe, RecipeCreate
from app.storage.base import IStorage

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.get("", response_model=List[Recipe])
async def list_recipes(storage: IStorage = Depends(get_storage)):
    return await storage.get_all_recipes()


@router.post("", response_model=Recipe, status_code=status.HTTP_201_CREATED)
async def create_recipe(data: RecipeCreate, storage: IStorage = Depends(get_storage)):
    return await storage.create_recipe(data)
