"""
Расчетные показатели по последнему взвешиванию и профилю: ИМТ и калории.

Ничего не сохраняют, считаются при каждом запросе.
"""

from fastapi import APIRouter, Depends, HTTPException

from app.core.dependencies import get_storage
from app.schemas.nutrition import ActivityLevel, WeightGoal
from app.schemas.progress import BMIResponse, MaintenanceCaloriesResponse
from app.services.nutrition_calculator import NutritionCalculator, round_half_up
from app.storage.base import IStorage

router = APIRouter(tags=["metrics"])


@router.get("/bmi", response_model=BMIResponse)
async def get_bmi(storage: IStorage = Depends(get_storage)):
    latest = await storage.get_latest_weight()
    profile = await storage.get_user_profile()
    if not latest or not profile or not profile.height:
        raise HTTPException(status_code=404, detail="Weight and height data required")

    bmi = NutritionCalculator.calculate_bmi(latest.weight, profile.height, latest.unit, profile.height_unit)
    return BMIResponse(
        bmi=round_half_up(bmi * 10) / 10,
        category=NutritionCalculator.bmi_category(bmi),
        weight=latest.weight,
        weight_unit=latest.unit,
        height=profile.height,
        height_unit=profile.height_unit
    )


@router.get("/maintenance-calories", response_model=MaintenanceCaloriesResponse)
async def get_maintenance_calories(storage: IStorage = Depends(get_storage)):
    latest = await storage.get_latest_weight()
    profile = await storage.get_user_profile()
    if not latest or not profile:
        raise HTTPException(status_code=404, detail="Weight and profile data required")

    # Уровень активности и цель берем из целей питания, без них: moderate / maintain
    goals = await storage.get_nutrition_goals()
    activity_level = goals.activity_level if goals else ActivityLevel.moderate
    weight_goal = goals.weight_goal if goals else WeightGoal.maintain

    maintenance = NutritionCalculator.calculate_maintenance_calories(
        profile, latest.weight, latest.unit, activity_level
    )
    recommended = NutritionCalculator.calculate_recommended_calories(maintenance, weight_goal)
    macros = NutritionCalculator.calculate_macros(recommended)

    return MaintenanceCaloriesResponse(
        maintenance_calories=maintenance,
        recommended_calories=recommended,
        weight_goal=weight_goal,
        activity_level=activity_level,
        **macros
    )
