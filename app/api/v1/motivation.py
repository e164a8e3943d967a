from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.core.dependencies import get_storage
from app.schemas.motivation import DailyChallenge, DailyChallengeCreate, MotivationalQuote
from app.storage.base import IStorage

router = APIRouter(prefix="/motivation", tags=["motivation"])


@router.get("/quote", response_model=Optional[MotivationalQuote])
async def get_quote(
        category: Optional[str] = Query(default=None),
        storage: IStorage = Depends(get_storage)
):
    """Первая цитата категории, без категории случайная. null, если цитат нет"""
    if category:
        quotes = await storage.get_quotes_by_category(category)
        return quotes[0] if quotes else None
    return await storage.get_random_quote()


@router.get("/challenge", response_model=Optional[DailyChallenge])
async def todays_challenge(storage: IStorage = Depends(get_storage)):
    return await storage.get_todays_challenge()


@router.get("/challenges", response_model=List[DailyChallenge])
async def list_challenges(storage: IStorage = Depends(get_storage)):
    return await storage.get_all_challenges()


@router.post("/challenges", response_model=DailyChallenge, status_code=status.HTTP_201_CREATED)
async def create_challenge(data: DailyChallengeCreate, storage: IStorage = Depends(get_storage)):
    return await storage.create_challenge(data)
