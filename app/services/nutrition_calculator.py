import math
from typing import Dict, Optional

from app.schemas.progress import UserProfile

LBS_TO_KG = 0.453592
INCH_TO_M = 0.0254
INCH_TO_CM = 2.54

CALORIE_ADJUSTMENT = 500


def round_half_up(value: float) -> int:
    """Округление «как в школе»: 0.5 всегда вверх (round() в Python банковский)"""
    return int(math.floor(value + 0.5))


class NutritionCalculator:
    ACTIVITY_MULTIPLIERS = {
        "sedentary": 1.2,
        "light": 1.375,
        "moderate": 1.55,
        "active": 1.725,
        "very_active": 1.9
    }

    # Доли калорий для БЖУ, которые показывает клиент
    MACRO_RATIOS = {"protein": 0.25, "carbs": 0.45, "fat": 0.30}

    @staticmethod
    def _value(enum_or_str) -> Optional[str]:
        return getattr(enum_or_str, "value", enum_or_str)

    @classmethod
    def to_kg(cls, weight: float, unit: str = "lbs") -> float:
        return weight * LBS_TO_KG if cls._value(unit) == "lbs" else weight

    @classmethod
    def to_cm(cls, height: float, unit: str = "inches") -> float:
        return height * INCH_TO_CM if cls._value(unit) == "inches" else height

    @classmethod
    def calculate_bmi(cls, weight: float, height: float, weight_unit: str, height_unit: str) -> float:
        """ИМТ = вес(кг) / рост(м)². Без округления: клиенту отдаем с точностью 0.1"""
        weight_kg = cls.to_kg(weight, weight_unit)
        if cls._value(height_unit) == "inches":
            height_m = height * INCH_TO_M
        else:
            height_m = height / 100
        return weight_kg / (height_m * height_m)

    @staticmethod
    def bmi_category(bmi: float) -> str:
        if bmi < 18.5:
            return "Underweight"
        if bmi < 25:
            return "Normal"
        if bmi < 30:
            return "Overweight"
        return "Obese"

    @classmethod
    def calculate_bmr(cls, weight: float, height: float, age: int, gender: str) -> float:
        """Формула Миффлина–Сан Жеора: вес в кг, рост в см"""
        if cls._value(gender) == "female":
            return 10 * weight + 6.25 * height - 5 * age - 161
        else:
            return 10 * weight + 6.25 * height - 5 * age + 5

    @classmethod
    def calculate_tdee(cls, bmr: float, activity_level: str = "moderate") -> float:
        multiplier = cls.ACTIVITY_MULTIPLIERS.get(cls._value(activity_level), cls.ACTIVITY_MULTIPLIERS["moderate"])
        return bmr * multiplier

    @classmethod
    def calculate_maintenance_calories(
            cls,
            profile: UserProfile,
            weight: float,
            weight_unit: str = "lbs",
            activity_level: str = "moderate"
    ) -> int:
        """
        Калории поддержки: BMR по профилю и весу, умноженный на коэффициент активности.

        Без возраста или роста в профиле возвращает 0.
        """
        if not profile.age or not profile.height:
            return 0

        weight_kg = cls.to_kg(weight, weight_unit)
        height_cm = cls.to_cm(profile.height, profile.height_unit)
        bmr = cls.calculate_bmr(weight_kg, height_cm, profile.age, profile.gender)
        return round_half_up(cls.calculate_tdee(bmr, activity_level))

    @classmethod
    def calculate_recommended_calories(cls, maintenance_calories: int, weight_goal: str = "maintain") -> int:
        goal = cls._value(weight_goal)
        if goal == "lose":
            return maintenance_calories - CALORIE_ADJUSTMENT
        if goal == "gain":
            return maintenance_calories + CALORIE_ADJUSTMENT
        return maintenance_calories

    @classmethod
    def calculate_macros(cls, calories: int) -> Dict[str, int]:
        return {
            "protein": round_half_up(calories * cls.MACRO_RATIOS["protein"] / 4),
            "carbs": round_half_up(calories * cls.MACRO_RATIOS["carbs"] / 4),
            "fat": round_half_up(calories * cls.MACRO_RATIOS["fat"] / 9)
        }
