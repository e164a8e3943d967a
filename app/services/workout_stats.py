"""
Статистика тренировок: недельное количество, суммарный тоннаж, средняя длительность.

Считается заново при каждом вызове по полным тренировкам (с подходами),
которые собирает хранилище. Все три бэкенда используют эти функции,
поэтому числа совпадают независимо от хранилища.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional

from app.schemas.workout import WorkoutStats, WorkoutWithExercises
from app.services.nutrition_calculator import round_half_up

WEEK = timedelta(days=7)


def calculate_workout_volume(workout: WorkoutWithExercises) -> float:
    """Тоннаж тренировки: сумма вес × повторы по выполненным подходам"""
    volume = 0.0
    for entry in workout.exercises:
        for workout_set in entry.sets:
            if workout_set.completed != 1:
                continue
            if workout_set.weight and workout_set.reps:
                volume += float(workout_set.weight) * workout_set.reps
    return volume


def calculate_workout_stats(
        workouts: Iterable[WorkoutWithExercises],
        now: Optional[datetime] = None
) -> WorkoutStats:
    now = now or datetime.utcnow()
    week_ago = now - WEEK

    weekly_workouts = 0
    total_weight = 0.0
    total_duration = 0
    timed_workouts = 0

    for workout in workouts:
        if workout.date >= week_ago:
            weekly_workouts += 1

        # Среднее только по тренировкам с указанной длительностью
        if workout.duration is not None:
            total_duration += workout.duration
            timed_workouts += 1

        total_weight += calculate_workout_volume(workout)

    avg_duration = round_half_up(total_duration / timed_workouts) if timed_workouts else 0

    return WorkoutStats(
        weekly_workouts=weekly_workouts,
        total_weight=round_half_up(total_weight),
        avg_duration=avg_duration
    )
