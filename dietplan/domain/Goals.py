"""Goal domain entities: biometric/activity inputs and the resulting weight + calorie goals."""
from typing import Any, Dict, Optional
from dietplan.utilities.constants import (
    DEFAULT_ACTIVITY_MULTIPLIER, DEFAULT_AGE_YEARS, DEFAULT_DIET_PREFERENCE,
    DEFAULT_HEIGHT_CM, DEFAULT_WEIGHT_KG
)
from dietplan.utilities.validators import non_empty_str, to_number, to_positive_number


def _first(data: Dict[str, Any], keys, convert):
    for key in keys:
        value = convert(data.get(key))
        if value is not None:
            return value
    return None


def _positive_or(value, default):
    n = to_positive_number(value)
    return n if n is not None else default


class GoalInputs:
    """Biometric inputs. Every field is coerced on construction; unusable values take the defaults."""

    def __init__(self, gender: str = "female", age_years: float = DEFAULT_AGE_YEARS,
                 height_cm: float = DEFAULT_HEIGHT_CM, weight_kg: float = DEFAULT_WEIGHT_KG,
                 activity_multiplier: float = DEFAULT_ACTIVITY_MULTIPLIER,
                 diet_preference: str = DEFAULT_DIET_PREFERENCE, bmi: Optional[float] = None):
        self.gender = "male" if isinstance(gender, str) and gender.strip().lower() == "male" else "female"
        self.age_years = _positive_or(age_years, DEFAULT_AGE_YEARS)
        self.height_cm = _positive_or(height_cm, DEFAULT_HEIGHT_CM)
        self.weight_kg = _positive_or(weight_kg, DEFAULT_WEIGHT_KG)
        self.activity_multiplier = _positive_or(activity_multiplier, DEFAULT_ACTIVITY_MULTIPLIER)
        self.diet_preference = non_empty_str(diet_preference) or DEFAULT_DIET_PREFERENCE
        self.bmi = to_number(bmi)

    def __str__(self) -> str:
        return (f"{self.gender}, {self.age_years}y, {self.height_cm}cm, {self.weight_kg}kg, "
                f"activity x{self.activity_multiplier}, diet {self.diet_preference}")

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Builds inputs from a raw request body, reading camelCase, snake_case and short keys.'''
        d = data if isinstance(data, dict) else {}
        return GoalInputs(
            gender=d.get("gender"),
            age_years=_first(d, ("ageYears", "age_years", "age"), to_positive_number),
            height_cm=_first(d, ("heightCm", "height_cm", "height"), to_positive_number),
            weight_kg=_first(d, ("weightKg", "weight_kg", "weight"), to_positive_number),
            activity_multiplier=_first(d, ("activityMultiplier", "activity_multiplier", "activity"), to_positive_number),
            diet_preference=_first(d, ("dietPreference", "diet_preference", "dietType"), non_empty_str),
            bmi=d.get("bmi"),
        )

    def to_dict(self):
        return {
            "gender": self.gender,
            "ageYears": self.age_years,
            "heightCm": self.height_cm,
            "weightKg": self.weight_kg,
            "activityMultiplier": self.activity_multiplier,
            "dietPreference": self.diet_preference,
            "bmi": self.bmi,
        }


class GoalOutputs:
    def __init__(self, goal_weight_kg: int, daily_calories: int):
        self.goal_weight_kg = goal_weight_kg
        self.daily_calories = daily_calories

    def __str__(self) -> str:
        return f"Goal weight: {self.goal_weight_kg} kg - Daily calories: {self.daily_calories} kcal"

    __repr__ = __str__

    def __eq__(self, other):
        return (isinstance(other, GoalOutputs)
                and (other.goal_weight_kg, other.daily_calories) == (self.goal_weight_kg, self.daily_calories))

    def to_dict(self):
        return {"goalWeightKg": self.goal_weight_kg, "dailyCalories": self.daily_calories}
