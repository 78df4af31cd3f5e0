"""Goal weight and daily calorie calculation.

Goal weight targets a BMI of 22.5 for the person's height. Daily calories
are Mifflin-St Jeor BMR times the activity multiplier, nudged by diet and
clamped to a sane range. resolve_goals merges an external suggestion
(e.g. from the model server) with the local result field by field.
"""
import math
from typing import Any, Mapping, Optional, Union

from dietplan.domain.Goals import GoalInputs, GoalOutputs
from dietplan.utilities.constants import (
    BMI_CALORIE_LIMITS, CALORIE_MAX, CALORIE_MIN, DIET_CALORIE_ADJUSTMENTS, FALLBACK_CALORIE_LIMIT,
    GOAL_WEIGHT_MAX, GOAL_WEIGHT_MIN, OBESE_BMI, TARGET_BMI, UNDERWEIGHT_BMI
)
from dietplan.utilities.validators import round_half_up, to_number, to_positive_number


def _clamp(value, low, high):
    # NaN compares false both ways; treat it as the low bound
    if value != value:
        return low
    return min(high, max(low, value))


def goal_weight_for_height(height_cm: float) -> int:
    height_m = height_cm / 100
    return round_half_up(_clamp(TARGET_BMI * height_m * height_m, GOAL_WEIGHT_MIN, GOAL_WEIGHT_MAX))


def basal_metabolic_rate(gender: str, weight_kg: float, height_cm: float, age_years: float) -> float:
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    return base + 5 if gender == "male" else base - 161


def diet_adjustment(diet_preference: Optional[str]) -> int:
    diet = (diet_preference or "").lower()
    for needle, delta in DIET_CALORIE_ADJUSTMENTS:
        if needle in diet:
            return delta
    return 0


def compute_goals(inputs: Union[GoalInputs, Mapping[str, Any]]) -> GoalOutputs:
    if not isinstance(inputs, GoalInputs):
        inputs = GoalInputs.from_dict(inputs)
    bmr = basal_metabolic_rate(inputs.gender, inputs.weight_kg, inputs.height_cm, inputs.age_years)
    # Bounds are whole numbers, so clamping before rounding matches round-then-clamp
    daily = bmr * inputs.activity_multiplier + diet_adjustment(inputs.diet_preference)
    return GoalOutputs(
        goal_weight_kg=goal_weight_for_height(inputs.height_cm),
        daily_calories=round_half_up(_clamp(daily, CALORIE_MIN, CALORIE_MAX)),
    )


def _accept(value: Any, low: float, high: float) -> Optional[int]:
    n = to_number(value)
    if n is None or not low <= n <= high:
        return None
    return round_half_up(n)


def resolve_goals(candidate: Any, local: GoalOutputs) -> GoalOutputs:
    """Take each candidate field only if it is a usable number in range, else the local one.

    The candidate may be None or any shape; both ``goalWeight`` and
    ``goalWeightKg`` are accepted for the weight.
    """
    data = candidate if isinstance(candidate, dict) else {}
    weight_raw = data.get("goalWeight", data.get("goalWeightKg"))
    weight = _accept(weight_raw, GOAL_WEIGHT_MIN, GOAL_WEIGHT_MAX)
    calories = _accept(data.get("dailyCalories"), CALORIE_MIN, CALORIE_MAX)
    return GoalOutputs(
        goal_weight_kg=weight if weight is not None else local.goal_weight_kg,
        daily_calories=calories if calories is not None else local.daily_calories,
    )


def body_mass_index(weight_kg: Any, height_cm: Any) -> Optional[float]:
    weight = to_positive_number(weight_kg)
    height = to_positive_number(height_cm)
    if weight is None or height is None:
        return None
    height_m = height / 100
    squared = height_m * height_m
    if squared == 0:
        return None
    scaled = weight / squared * 10
    if not math.isfinite(scaled):
        return None
    return round_half_up(scaled) / 10


def suggest_calorie_limit(bmi: Any) -> int:
    value = to_number(bmi)
    if value is None:
        return BMI_CALORIE_LIMITS["normal"]
    if value < UNDERWEIGHT_BMI:
        return BMI_CALORIE_LIMITS["underweight"]
    if value > OBESE_BMI:
        return BMI_CALORIE_LIMITS["obese"]
    return BMI_CALORIE_LIMITS["normal"]


def clamp_calorie_limit(value: Any, default: int = FALLBACK_CALORIE_LIMIT) -> int:
    """Request guardrail for meal plans: unusable -> default, then clamp into range."""
    n = to_positive_number(value)
    limit = round_half_up(n) if n is not None else default
    return _clamp(limit, CALORIE_MIN, CALORIE_MAX)


__all__ = [
    "basal_metabolic_rate", "body_mass_index", "clamp_calorie_limit", "compute_goals",
    "diet_adjustment", "goal_weight_for_height", "resolve_goals", "suggest_calorie_limit",
]
