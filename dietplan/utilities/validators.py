"""
Input coercion helpers and request schemas (Pydantic).

The engine never rejects a request for bad numbers: schemas below accept
any JSON value per field and the domain layer applies its own defaults.
"""
import math
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


def to_number(value: Any) -> Optional[float]:
    """Return a finite float for numbers and numeric strings, otherwise None.

    Booleans and None are treated as missing.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        n = float(value)
    elif isinstance(value, str):
        try:
            n = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return n if math.isfinite(n) else None


def to_positive_number(value: Any) -> Optional[float]:
    n = to_number(value)
    return n if n is not None and n > 0 else None


def round_half_up(value: float) -> int:
    """Round halves towards +inf (2.5 -> 3, -2.5 -> -2); builtin round() rounds halves to even."""
    return int(math.floor(value + 0.5))


def non_empty_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class MealPlanRequest(BaseModel):
    """Schema for AI meal plan requests."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    bmi: Any = None
    goal_weight: Any = Field(None, alias="goalWeight")
    diet_preference: Any = Field(None, alias="dietPreference")
    calorie_limit: Any = Field(None, alias="calorieLimit")


class GoalRequest(BaseModel):
    """Schema for goal requests; accepts both the form names and the engine names."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    gender: Any = None
    age: Any = None
    height_cm: Any = Field(None, alias="heightCm")
    weight_kg: Any = Field(None, alias="weightKg")
    activity: Any = None
    diet_preference: Any = Field(None, alias="dietPreference")
    bmi: Any = None

    def to_goal_dict(self) -> dict:
        data = dict(self.model_extra or {})
        data.update({
            "gender": self.gender,
            "age": self.age,
            "heightCm": self.height_cm,
            "weightKg": self.weight_kg,
            "activity": self.activity,
            "dietPreference": self.diet_preference,
            "bmi": self.bmi,
        })
        return data


class RegenerateRequest(BaseModel):
    """Schema for plan regeneration."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    plan_type: str = Field("daily", alias="planType")
    diet_type: Optional[str] = Field(None, alias="dietType")
    calorie_target: Any = Field(None, alias="calorieTarget")

    @field_validator("plan_type", mode="before")
    @classmethod
    def normalize_plan_type(cls, v):
        """Anything other than 'weekly' means a daily plan."""
        return "weekly" if isinstance(v, str) and v.strip().lower() == "weekly" else "daily"

    @field_validator("diet_type", mode="before")
    @classmethod
    def strip_diet_type(cls, v):
        return non_empty_str(v)
