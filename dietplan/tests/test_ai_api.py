import json
import unittest
from types import SimpleNamespace
from unittest.mock import patch

import httpx
from fastapi.testclient import TestClient
from openai import APIConnectionError

from dietplan.api import api_ai
from dietplan.api.api_run import create_app
from dietplan.domain.Goals import GoalOutputs
from dietplan.infra.Recipe_Catalog import load_catalog


class FakeClient:
    """Stands in for the OpenAI client: replies with canned text or raises."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.prompts = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, model, messages, **kwargs):
        self.prompts.append(messages[-1]["content"])
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _connection_error():
    return APIConnectionError(request=httpx.Request("POST", "http://localhost:11434/v1/chat/completions"))


class TestExtractJsonObject(unittest.TestCase):

    def test_pure_json(self):
        self.assertEqual(api_ai.extract_json_object('{"goalWeight": 65}'), {"goalWeight": 65})

    def test_embedded_and_fenced(self):
        text = 'Sure! Here is your plan:\n```json\n{"breakfast": {"name": "Eggs", "calories": 300},}\n```\nEnjoy.'
        self.assertEqual(api_ai.extract_json_object(text), {"breakfast": {"name": "Eggs", "calories": 300}})

    def test_braces_inside_strings(self):
        text = 'plan -> {"lunch": {"name": "Soup {hot}", "calories": 250}} done'
        self.assertEqual(api_ai.extract_json_object(text)["lunch"]["name"], "Soup {hot}")

    def test_nothing_usable(self):
        for text in (None, "", "no json here", "[1, 2, 3]", '{"broken": ', 42):
            with self.subTest(text=text):
                self.assertIsNone(api_ai.extract_json_object(text))


class TestCreateMealPlan(unittest.TestCase):

    def test_model_plan_is_normalized(self):
        reply = json.dumps({
            "breakfast": {"name": "Tofu Scramble", "calories": 450},
            "lunch": {"name": "Lentil Soup", "calories": "600"},
            "dinner": {"calories": -3},
            "snacks": [],
            "totalCalories": 1,
        })
        fake = FakeClient(reply)
        with patch.object(api_ai, "_get_model_client", return_value=fake):
            plan, source = api_ai.create_meal_plan("Vegan", 2000, bmi=23.1, goal_weight="68")
        self.assertEqual(source, "ai")
        self.assertEqual(plan.breakfast.name, "Tofu Scramble")
        self.assertEqual(plan.lunch.calories, 600)
        self.assertEqual(plan.dinner.calories, 40)
        self.assertEqual(plan.snacks[0].calories, 200)
        self.assertEqual(plan.total_calories, 450 + 600 + 40 + 200)
        self.assertIn("Diet preference: Vegan", fake.prompts[0])
        self.assertIn("Target calories (daily): 2000", fake.prompts[0])
        self.assertIn("BMI (if helpful): 23.1", fake.prompts[0])
        self.assertIn("Goal weight (kg, if provided): 68", fake.prompts[0])

    def test_connection_failure_falls_back(self):
        with patch.object(api_ai, "_get_model_client", return_value=FakeClient(error=_connection_error())):
            plan, source = api_ai.create_meal_plan("Keto", 1800)
        self.assertEqual(source, "fallback")
        self.assertEqual([m.calories for m in plan.meals()], [504, 612, 504, 180])

    def test_prose_reply_falls_back(self):
        with patch.object(api_ai, "_get_model_client", return_value=FakeClient("I cannot help with that.")):
            _, source = api_ai.create_meal_plan("Keto", 1800)
        self.assertEqual(source, "fallback")

    def test_ai_disabled(self):
        with patch.object(api_ai, "_get_model_client", return_value=None):
            plan, source = api_ai.create_meal_plan(None, None)
        self.assertEqual(source, "fallback")
        self.assertEqual(plan.calorie_target, 1800)

    def test_calorie_guardrails(self):
        fake = FakeClient("{}")
        with patch.object(api_ai, "_get_model_client", return_value=fake):
            low, _ = api_ai.create_meal_plan("Vegan", 200)
            high, _ = api_ai.create_meal_plan("Vegan", "9000")
        self.assertEqual(low.calorie_target, 1000)
        self.assertEqual(high.calorie_target, 3500)
        self.assertIn("BMI (if helpful): unknown", fake.prompts[0])


class TestCreateGoals(unittest.TestCase):
    body = {"gender": "male", "age": 30, "heightCm": 180, "weightKg": 80, "activity": 1.55, "dietPreference": "keto"}

    def test_valid_model_goals(self):
        fake = FakeClient('{"goalWeight": 75, "dailyCalories": 2400}')
        with patch.object(api_ai, "_get_model_client", return_value=fake):
            goals, source = api_ai.create_goals(self.body)
        self.assertEqual((goals, source), (GoalOutputs(75, 2400), "ai"))
        self.assertIn("gender=male, age=30, height_cm=180, weight_kg=80, activity=1.55, diet=keto", fake.prompts[0])

    def test_out_of_range_model_goals_use_local(self):
        fake = FakeClient('{"goalWeight": 500, "dailyCalories": "2400"}')
        with patch.object(api_ai, "_get_model_client", return_value=fake):
            goals, source = api_ai.create_goals(self.body)
        self.assertEqual(goals, GoalOutputs(73, 2400))
        self.assertEqual(source, "ai")

    def test_failure_uses_local(self):
        with patch.object(api_ai, "_get_model_client", return_value=FakeClient(error=_connection_error())):
            goals, source = api_ai.create_goals(self.body)
        self.assertEqual((goals, source), (GoalOutputs(73, 2559), "fallback"))


class TestAiRoutes(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(create_app(load_catalog()))

    def test_ai_meal_plan_route(self):
        with patch.object(api_ai, "_get_model_client", return_value=None):
            resp = self.client.post('/ai-meal-plan', json={'dietPreference': 'Gluten-Free', 'calorieLimit': '2200'})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data['source'], 'fallback')
        self.assertEqual(data['plan']['calorieTarget'], 2200)
        self.assertEqual(data['plan']['totalCalories'], 2200)
        self.assertEqual(len(data['plan']['snacks']), 1)

    def test_ai_goals_route(self):
        fake = FakeClient('```json\n{"goalWeight": 70, "dailyCalories": 1900}\n```')
        with patch.object(api_ai, "_get_model_client", return_value=fake):
            resp = self.client.post('/ai-goals', json={'heightCm': 175, 'weightKg': 72})
        data = resp.json()
        self.assertEqual((data['goalWeight'], data['goalWeightKg'], data['dailyCalories']), (70, 70, 1900))
        self.assertEqual(data['source'], 'ai')

    def test_ai_routes_without_body(self):
        with patch.object(api_ai, "_get_model_client", return_value=None):
            plan = self.client.post('/ai-meal-plan')
            goals = self.client.post('/ai-goals')
        self.assertEqual(plan.status_code, 200)
        self.assertEqual(goals.json()['goalWeightKg'], 65)

    def test_ai_goals_route_with_huge_activity(self):
        with patch.object(api_ai, "_get_model_client", return_value=None):
            resp = self.client.post('/ai-goals', json={'activity': 1e308})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual((data['dailyCalories'], data['source']), (3500, 'fallback'))


if __name__ == '__main__':
    unittest.main()
