from app.models.workout import Exercise, Workout, WorkoutExercise, WorkoutSet
from app.models.meal import Meal, Recipe, NutritionGoal
from app.models.progress import WeightEntry, UserProfile
from app.models.motivation import MotivationalQuote, DailyChallenge

__all__ = [
    "Exercise", "Workout", "WorkoutExercise", "WorkoutSet",
    "Meal", "Recipe", "NutritionGoal",
    "WeightEntry", "UserProfile",
    "MotivationalQuote", "DailyChallenge"
]
