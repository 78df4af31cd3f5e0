import json

import httpx
import pytest

from dietplan.api.api_run import create_app
from dietplan.infra.Recipe_Catalog import load_catalog


@pytest.mark.asyncio
async def test_concurrent_style_requests_share_catalog():
    app = create_app(load_catalog())
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        types = await client.get("/api/diet-types")
        weekly = await client.get("/api/weekly-meal-plan", params={"dietType": "Vegetarian", "calorieTarget": 1700})
        detail = await client.get("/api/recipe/1")

    assert types.status_code == 200
    assert "Vegetarian" in types.json()["dietTypes"]
    week = weekly.json()["weeklyPlan"]
    assert len(week) == 7
    # single-recipe dinner bucket
    assert {day["dinner"]["name"] for day in week.values()} == {"Eggplant Parmesan"}
    assert detail.json()["recipe"]["dietType"] == "Vegan"


@pytest.mark.asyncio
async def test_custom_catalog_and_offline_ai(tmp_path, monkeypatch):
    """App built from a temporary recipe file, with the model server switched off."""
    from dietplan.api import api_ai

    # Use a temporary recipes.json (don't rely on the bundled one)
    table = {
        "Paleo": {
            slot: [{"id": i + 1, "name": f"Paleo {slot}", "calories": 300, "cookTime": 10}]
            for i, slot in enumerate(("breakfast", "lunch", "dinner", "snacks"))
        }
    }
    fake_recipes = tmp_path / "recipes.json"
    fake_recipes.write_text(json.dumps(table), encoding="utf-8")
    monkeypatch.setattr(api_ai, "_get_model_client", lambda: None)

    app = create_app(load_catalog(fake_recipes))
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        daily = await ac.get("/api/meal-suggestions", params={"dietType": "Paleo", "calorieTarget": 1500})
        missing = await ac.get("/api/recipes/Vegan")
        ai_plan = await ac.post("/ai-meal-plan", json={"dietPreference": "Paleo", "calorieLimit": 1500})

    assert daily.status_code == 200, daily.text
    assert daily.json()["totalCalories"] == 1200
    assert daily.json()["calorieBalance"] == 300
    assert missing.status_code == 404
    body = ai_plan.json()
    assert body["source"] == "fallback"
    assert body["plan"]["totalCalories"] == 1500
