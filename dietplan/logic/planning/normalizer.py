"""Repair an untrusted, model-produced plan into a complete DailyPlan.

normalize_plan is total: any input, including None, a list or a dict with
garbage values, comes back as a plan with every slot filled and totals
recomputed from the repaired values.
"""
from typing import Any, List

from dietplan.domain.Plan import DailyPlan, MealEntry
from dietplan.utilities.constants import (
    DEFAULT_MEAL_NAMES, DEFAULT_SNACK_NAME, FALLBACK_CALORIE_LIMIT, MEAL_SHARES, MIN_MEAL_CALORIES
)
from dietplan.utilities.validators import non_empty_str, round_half_up, to_number, to_positive_number


def _share(calorie_target: float, meal_type: str) -> int:
    return round_half_up(calorie_target * MEAL_SHARES[meal_type])


def _calories(value: Any, default: int) -> int:
    n = to_number(value)
    if n is None:
        return default
    return max(MIN_MEAL_CALORIES, round_half_up(n))


def _repair(raw: Any, default_name: str, default_calories: int) -> MealEntry:
    raw = raw if isinstance(raw, dict) else {}
    name = non_empty_str(raw.get("name")) or default_name
    return MealEntry(name, _calories(raw.get("calories"), default_calories))


def _repair_snacks(raw: Any, calorie_target: float) -> List[MealEntry]:
    share = _share(calorie_target, "snacks")
    if not isinstance(raw, list) or not raw:
        return [MealEntry(DEFAULT_MEAL_NAMES["snacks"], share)]
    return [_repair(s, DEFAULT_SNACK_NAME, share) for s in raw]


def normalize_plan(candidate: Any, calorie_target: Any) -> DailyPlan:
    target = to_positive_number(calorie_target) or FALLBACK_CALORIE_LIMIT
    data = candidate if isinstance(candidate, dict) else {}
    breakfast, lunch, dinner = (
        _repair(data.get(slot), DEFAULT_MEAL_NAMES[slot], _share(target, slot))
        for slot in ("breakfast", "lunch", "dinner")
    )
    snacks = _repair_snacks(data.get("snacks"), target)
    return DailyPlan(breakfast, lunch, dinner, snacks, round_half_up(target))


def default_plan(calorie_target: Any) -> DailyPlan:
    """The neutral plan: default dishes at the proportional calorie shares."""
    return normalize_plan(None, calorie_target)


__all__ = ["default_plan", "normalize_plan"]
