"""
Начальный контент приложения: упражнения, рецепты, цитаты и челленджи.

Хранилища MongoDB и SQL заливают эти данные при первом подключении,
только если соответствующая коллекция/таблица пуста.
In-memory хранилище берет первые три упражнения и остальной контент при создании.
"""

INITIAL_EXERCISES = [
    {
        "name": "Bench Press",
        "category": "chest",
        "instructions": "Lie on bench, lower bar to chest, press up",
        "muscle_groups": ["chest", "triceps", "shoulders"],
        "difficulty": "intermediate",
        "equipment": ["barbell", "bench"]
    },
    {
        "name": "Squats",
        "category": "legs",
        "instructions": "Stand with feet shoulder-width apart, squat down, stand up",
        "muscle_groups": ["quadriceps", "glutes", "hamstrings", "calves"],
        "difficulty": "beginner",
        "equipment": ["barbell", "squat rack"]
    },
    {
        "name": "Deadlift",
        "category": "back",
        "instructions": "Stand over bar, grip with both hands, lift with legs and back",
        "muscle_groups": ["hamstrings", "glutes", "erector_spinae", "traps", "lats"],
        "difficulty": "advanced",
        "equipment": ["barbell", "plates"]
    },
    {
        "name": "Pull-ups",
        "category": "back",
        "instructions": "Hang from bar, pull body up until chin over bar",
        "muscle_groups": ["lats", "rhomboids", "biceps", "traps"],
        "difficulty": "intermediate",
        "equipment": ["pull-up bar"]
    },
    {
        "name": "Overhead Press",
        "category": "shoulders",
        "instructions": "Press weight overhead from shoulder height",
        "muscle_groups": ["shoulders", "triceps", "traps"],
        "difficulty": "intermediate",
        "equipment": ["barbell", "dumbbells"]
    },
]

# Для локальной разработки без базы достаточно трех упражнений
DEV_EXERCISES = INITIAL_EXERCISES[:3]

INITIAL_RECIPES = [
    {
        "name": "Protein Power Bowl",
        "description": "High-protein breakfast bowl perfect for muscle building",
        "instructions": (
            "1. Cook quinoa according to package instructions\n"
            "2. Scramble eggs with spinach\n"
            "3. Add Greek yogurt and berries\n"
            "4. Top with nuts and seeds"
        ),
        "servings": 1,
        "prep_time": 15,
        "cook_time": 10,
        "calories": 520,
        "protein": 35.5,
        "carbs": 45.2,
        "fat": 18.3,
        "ingredients": [
            "1 cup cooked quinoa", "2 eggs", "1/2 cup Greek yogurt",
            "1 cup spinach", "1/2 cup berries", "2 tbsp nuts"
        ],
        "tags": ["high-protein", "breakfast", "muscle-building"]
    },
    {
        "name": "Post-Workout Smoothie",
        "description": "Perfect recovery smoothie with optimal protein-carb ratio",
        "instructions": "1. Add all ingredients to blender\n2. Blend until smooth\n3. Serve immediately",
        "servings": 1,
        "prep_time": 5,
        "cook_time": 0,
        "calories": 380,
        "protein": 28.0,
        "carbs": 52.0,
        "fat": 8.5,
        "ingredients": [
            "1 scoop protein powder", "1 banana", "1 cup almond milk",
            "1 tbsp peanut butter", "1 cup ice"
        ],
        "tags": ["post-workout", "smoothie", "recovery"]
    },
]

INITIAL_QUOTES = [
    {
        "quote": "The body achieves what the mind believes.",
        "author": "Napoleon Hill",
        "category": "motivation"
    },
    {
        "quote": "Champions train, losers complain.",
        "author": "Unknown",
        "category": "fitness"
    },
    {
        "quote": "Your body can do it. It's your mind you need to convince.",
        "author": "Unknown",
        "category": "mindset"
    },
]

# Дата челленджа проставляется в момент заливки (см. build_initial_challenges)
INITIAL_CHALLENGES = [
    {
        "title": "Perfect Push-Up Day",
        "description": "Complete 100 push-ups throughout the day in any rep scheme",
        "type": "workout",
        "difficulty": "medium",
        "points": 15
    },
    {
        "title": "Hydration Hero",
        "description": "Drink at least 3 liters of water today",
        "type": "habit",
        "difficulty": "easy",
        "points": 10
    },
]


def build_initial_challenges(now):
    """Челленджи с датой заливки: именно они станут челленджами «на сегодня»"""
    return [{**challenge, "date": now} for challenge in INITIAL_CHALLENGES]
