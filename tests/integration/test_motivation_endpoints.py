"""
Интеграционные тесты мотивационного контента.

- GET /motivation/quote: случайная цитата или первая из категории
- GET /motivation/challenge: челлендж на сегодня
- GET/POST /motivation/challenges
"""

from datetime import datetime, timedelta

import pytest

pytestmark = pytest.mark.integration


@pytest.mark.asyncio
async def test_random_quote(seeded_client):
    response = await seeded_client.get("/api/motivation/quote")

    assert response.status_code == 200
    quote = response.json()
    assert quote["quote"]
    assert quote["category"] in {"motivation", "fitness", "mindset"}


@pytest.mark.asyncio
async def test_quote_by_category(seeded_client):
    response = await seeded_client.get("/api/motivation/quote", params={"category": "mindset"})

    assert response.json()["quote"] == "Your body can do it. It's your mind you need to convince."


@pytest.mark.asyncio
async def test_quote_null_when_category_empty(seeded_client):
    response = await seeded_client.get("/api/motivation/quote", params={"category": "nutrition"})

    assert response.status_code == 200
    assert response.json() is None


@pytest.mark.asyncio
async def test_todays_challenge(seeded_client):
    response = await seeded_client.get("/api/motivation/challenge")

    assert response.status_code == 200
    assert response.json()["title"] == "Perfect Push-Up Day"


@pytest.mark.asyncio
async def test_no_challenge_today(client):
    yesterday = (datetime.utcnow() - timedelta(days=1)).isoformat()
    await client.post("/api/motivation/challenges", json={
        "title": "Stretch", "description": "10 minutes", "type": "habit", "difficulty": "easy", "date": yesterday
    })

    response = await client.get("/api/motivation/challenge")
    assert response.json() is None

    response = await client.get("/api/motivation/challenges")
    assert [c["title"] for c in response.json()] == ["Stretch"]


@pytest.mark.asyncio
async def test_create_challenge_invalid_type_returns_400(client):
    response = await client.post("/api/motivation/challenges", json={
        "title": "X", "description": "Y", "type": "party", "difficulty": "easy",
        "date": datetime.utcnow().isoformat()
    })
    assert response.status_code == 400
