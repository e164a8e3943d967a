from fastapi import APIRouter
from app.api.v1.exercises import router as exercises_router
from app.api.v1.workouts import router as workouts_router
from app.api.v1.stats import router as stats_router
from app.api.v1.meals import router as meals_router
from app.api.v1.recipes import router as recipes_router
from app.api.v1.nutrition_goals import router as nutrition_goals_router
from app.api.v1.weight import router as weight_router
from app.api.v1.profile import router as profile_router
from app.api.v1.metrics import router as metrics_router
from app.api.v1.motivation import router as motivation_router

api_router = APIRouter(prefix="/api")

api_router.include_router(exercises_router)
api_router.include_router(workouts_router)
api_router.include_router(stats_router)
api_router.include_router(meals_router)
api_router.include_router(recipes_router)
api_router.include_router(nutrition_goals_router)
api_router.include_router(weight_router)
api_router.include_router(profile_router)
api_router.include_router(metrics_router)
api_router.include_router(motivation_router)
