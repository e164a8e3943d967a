"""
Интеграционные тесты эндпоинтов питания.

- POST /meals, GET /meals?date=, GET /meals/{date}
- GET/POST /recipes
- GET/POST /nutrition-goals: null до первой записи, затем upsert
"""

import pytest

pytestmark = pytest.mark.integration


MEAL = {"name": "Oatmeal", "type": "breakfast", "date": "2024-01-15T08:30:00Z", "calories": 350, "protein": 12.5}


# ---------------------------------------------------------------------------
# /meals
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_meal(client):
    response = await client.post("/api/meals", json=MEAL)

    assert response.status_code == 201
    meal = response.json()
    assert meal["id"] == "1"
    assert meal["type"] == "breakfast"
    assert meal["protein"] == 12.5
    assert "createdAt" in meal


@pytest.mark.asyncio
async def test_create_meal_invalid_type_returns_400(client):
    response = await client.post("/api/meals", json={**MEAL, "type": "brunch"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_meals_by_date(client):
    await client.post("/api/meals", json=MEAL)
    await client.post("/api/meals", json={**MEAL, "name": "Dinner", "type": "dinner", "date": "2024-01-15T23:00:00Z"})
    await client.post("/api/meals", json={**MEAL, "name": "Next day", "date": "2024-01-16T07:00:00Z"})

    response = await client.get("/api/meals/2024-01-15")
    assert response.status_code == 200
    assert sorted(m["name"] for m in response.json()) == ["Dinner", "Oatmeal"]

    response = await client.get("/api/meals", params={"date": "2024-01-16"})
    assert [m["name"] for m in response.json()] == ["Next day"]

    response = await client.get("/api/meals")
    assert len(response.json()) == 3


@pytest.mark.asyncio
async def test_meals_by_invalid_date_returns_400(client):
    response = await client.get("/api/meals/not-a-date")
    assert response.status_code == 400


# ---------------------------------------------------------------------------
# /recipes
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_seeded_recipes(seeded_client):
    response = await seeded_client.get("/api/recipes")

    assert response.status_code == 200
    recipes = response.json()
    assert [r["name"] for r in recipes] == ["Protein Power Bowl", "Post-Workout Smoothie"]
    assert recipes[0]["prepTime"] == 15


@pytest.mark.asyncio
async def test_create_recipe(client):
    response = await client.post("/api/recipes", json={
        "name": "Chicken & rice",
        "instructions": "Cook rice, grill chicken",
        "servings": 2,
        "cookTime": 25,
        "ingredients": ["chicken", "rice"],
    })

    assert response.status_code == 201
    recipe = response.json()
    assert recipe["servings"] == 2
    assert recipe["cookTime"] == 25
    assert recipe["tags"] == []


@pytest.mark.asyncio
async def test_create_recipe_without_instructions_returns_400(client):
    response = await client.post("/api/recipes", json={"name": "Mystery"})
    assert response.status_code == 400


# ---------------------------------------------------------------------------
# /nutrition-goals
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_nutrition_goals_null_before_first_update(client):
    response = await client.get("/api/nutrition-goals")

    assert response.status_code == 200
    assert response.json() is None


@pytest.mark.asyncio
async def test_nutrition_goals_upsert(client):
    goals = {"dailyCalories": 2200, "dailyProtein": 160, "dailyCarbs": 220, "dailyFat": 70}

    first = await client.post("/api/nutrition-goals", json=goals)
    second = await client.post("/api/nutrition-goals", json={**goals, "weightGoal": "lose"})

    assert first.status_code == 201
    assert second.json()["id"] == first.json()["id"]

    response = await client.get("/api/nutrition-goals")
    body = response.json()
    assert body["weightGoal"] == "lose"
    assert body["activityLevel"] == "moderate"
    assert body["dailyCalories"] == 2200


@pytest.mark.asyncio
async def test_nutrition_goals_invalid_activity_level_returns_400(client):
    response = await client.post("/api/nutrition-goals", json={
        "dailyCalories": 2200, "dailyProtein": 160, "dailyCarbs": 220, "dailyFat": 70,
        "activityLevel": "extreme"
    })
    assert response.status_code == 400
