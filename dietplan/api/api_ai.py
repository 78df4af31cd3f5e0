import re
import json
import random
import logging
from json import JSONDecodeError
from typing import Any, Optional, Tuple

import httpx
from openai import OpenAI, OpenAIError
from fastapi import APIRouter

from dietplan.domain.Goals import GoalInputs, GoalOutputs
from dietplan.domain.Plan import DailyPlan
from dietplan.logic.goals.calculator import clamp_calorie_limit, compute_goals, resolve_goals
from dietplan.logic.planning.fallback import local_fallback_plan
from dietplan.logic.planning.normalizer import normalize_plan
from dietplan.utilities.config import (
    AI_ENABLED, AI_TIMEOUT_SECONDS, DEFAULT_AI_CALORIE_LIMIT, OLLAMA_BASE_URL, OLLAMA_MODEL
)
from dietplan.utilities.constants import (
    DEFAULT_DIET_PREFERENCE, GOAL_HINTS, GOALS_PROMPT_TEMPLATE, MEAL_PLAN_HINTS, MEAL_PLAN_PROMPT_TEMPLATE
)
from dietplan.utilities.validators import GoalRequest, MealPlanRequest, non_empty_str, to_number

logger = logging.getLogger(__name__)

SOURCE_AI = "ai"
SOURCE_FALLBACK = "fallback"


# === Helper: Get Model Client ===
def _get_model_client():
    """Return a client for the local Ollama server, or None when AI is switched off."""
    if not AI_ENABLED:
        return None
    # Ollama ignores the key but the client requires one
    return OpenAI(
        base_url=OLLAMA_BASE_URL,
        api_key="ollama",
        timeout=httpx.Timeout(AI_TIMEOUT_SECONDS, connect=5.0),
        max_retries=0,
    )


# === Text Cleaning Helpers ===
def _strip_code_fences(text: str) -> str:
    """Remove common markdown code fences and leading/trailing whitespace."""
    text = re.sub(r"```(?:json)?\n(.*?)```", r"\1", text, flags=re.S)
    text = re.sub(r"^```|```$", "", text)
    return text.strip()


def _remove_trailing_commas(text: str) -> str:
    """Remove common trailing commas in JSON-like text to help json.loads succeed."""
    return re.sub(r",\s*(\}|\])", r"\1", text)


def _extract_json_by_balancing(text: str) -> Optional[str]:
    """Extract the first JSON object by balancing braces/brackets."""
    start = None
    stack = []
    in_string = False
    escape = False

    for i, ch in enumerate(text):
        if ch == '"' and not escape:
            in_string = not in_string
        if in_string and ch == "\\" and not escape:
            escape = True
            continue
        else:
            escape = False

        if not in_string:
            if ch == "{" or (ch == "[" and start is not None):
                if start is None:
                    start = i
                stack.append(ch)
            elif ch in "}]":
                if not stack:
                    continue
                opening = stack.pop()
                if (opening == "{" and ch != "}") or (opening == "[" and ch != "]"):
                    return None
                if not stack and start is not None:
                    return text[start:i + 1]
    return None


def extract_json_object(text: Any) -> Optional[dict]:
    """Parse a model reply that is pure JSON or has one JSON object somewhere inside it.

    Returns the object, or None when no JSON object can be recovered.
    """
    if not isinstance(text, str) or not text.strip():
        return None
    try:
        parsed = json.loads(text)
    except JSONDecodeError:
        cleaned = _remove_trailing_commas(_strip_code_fences(text))
        candidate = _extract_json_by_balancing(cleaned)
        if candidate is None:
            return None
        try:
            parsed = json.loads(_remove_trailing_commas(candidate))
        except JSONDecodeError:
            logger.debug("Extracted block is still not valid JSON: %r", candidate[:200])
            return None
    return parsed if isinstance(parsed, dict) else None


# === Model Call ===
def request_model_json(prompt: str) -> Optional[dict]:
    """Send one prompt to the model and return the JSON object it answered with.

    Transport errors, timeouts and unparseable replies are logged and give None;
    callers always have a local fallback.
    """
    client = _get_model_client()
    if client is None:
        logger.info("AI disabled; skipping model call")
        return None
    try:
        response = client.chat.completions.create(
            model=OLLAMA_MODEL,
            messages=[{"role": "user", "content": prompt}],
            response_format={"type": "json_object"},
        )
    except (OpenAIError, httpx.HTTPError) as e:
        logger.warning("Model request to %s failed: %s", OLLAMA_BASE_URL, e)
        return None

    content = ""
    if response.choices:
        content = (response.choices[0].message.content or "").strip()
    if not content:
        logger.warning("Model returned an empty reply")
        return None

    parsed = extract_json_object(content)
    if parsed is None:
        logger.warning("Model reply is not a JSON object: %r", content[:200])
    return parsed


# === Prompts ===
def _or_unknown(value) -> str:
    return "unknown" if value is None else f"{value:g}"


def build_meal_plan_prompt(diet_preference: str, calorie_limit: int, bmi: Optional[float] = None,
                           goal_weight: Optional[float] = None, hint: Optional[str] = None) -> str:
    return MEAL_PLAN_PROMPT_TEMPLATE % {
        "diet": diet_preference,
        "calories": calorie_limit,
        "bmi": _or_unknown(bmi),
        "goal_weight": _or_unknown(goal_weight),
        "hint": hint or random.choice(MEAL_PLAN_HINTS),
    }


def build_goals_prompt(inputs: GoalInputs, hint: Optional[str] = None) -> str:
    return GOALS_PROMPT_TEMPLATE % {
        "gender": inputs.gender,
        "age": f"{inputs.age_years:g}",
        "height": f"{inputs.height_cm:g}",
        "weight": f"{inputs.weight_kg:g}",
        "activity": f"{inputs.activity_multiplier:g}",
        "diet": inputs.diet_preference,
        "bmi": _or_unknown(inputs.bmi),
        "hint": hint or random.choice(GOAL_HINTS),
    }


# === Plan and Goal Generation ===
def create_meal_plan(diet_preference: Any = None, calorie_limit: Any = None, bmi: Any = None,
                     goal_weight: Any = None) -> Tuple[DailyPlan, str]:
    """Ask the model for a day plan; repair whatever comes back, or build one locally."""
    diet = non_empty_str(diet_preference) or DEFAULT_DIET_PREFERENCE
    limit = clamp_calorie_limit(calorie_limit, DEFAULT_AI_CALORIE_LIMIT)
    prompt = build_meal_plan_prompt(diet, limit, to_number(bmi), to_number(goal_weight))

    candidate = request_model_json(prompt)
    if candidate is None:
        logger.warning("No usable AI meal plan; using local fallback for %s @ %s kcal", diet, limit)
        return local_fallback_plan(diet, limit), SOURCE_FALLBACK
    return normalize_plan(candidate, limit), SOURCE_AI


def create_goals(data: Any) -> Tuple[GoalOutputs, str]:
    """Model-suggested goals, each field checked against the local calculation."""
    inputs = data if isinstance(data, GoalInputs) else GoalInputs.from_dict(data)
    local = compute_goals(inputs)

    candidate = request_model_json(build_goals_prompt(inputs))
    if candidate is None:
        logger.warning("No usable AI goals; using local calculation for %s", inputs)
        return local, SOURCE_FALLBACK
    return resolve_goals(candidate, local), SOURCE_AI


# === FastAPI Endpoints ===
router = APIRouter()


@router.post("/ai-meal-plan")
def ai_meal_plan(payload: Optional[MealPlanRequest] = None):
    payload = payload or MealPlanRequest()
    plan, source = create_meal_plan(
        payload.diet_preference, payload.calorie_limit, payload.bmi, payload.goal_weight
    )
    return {"plan": plan.to_dict(), "source": source}


@router.post("/ai-goals")
def ai_goals(payload: Optional[GoalRequest] = None):
    payload = payload or GoalRequest()
    goals, source = create_goals(payload.to_goal_dict())
    return {"goalWeight": goals.goal_weight_kg, **goals.to_dict(), "source": source}
