"""Nutrition aggregation logic for generated plans."""
from collections import defaultdict
from typing import Dict, Any

from dietplan.utilities.constants import KCAL_PER_GRAM

_FIELDS = ('calories', 'protein', 'carbs', 'fat', 'fiber')


def _meal_nutrition(meal) -> Dict[str, Any]:
    # MealEntry carries calories only; placeholders are all zero
    return {field: getattr(meal, field, 0) or 0 for field in _FIELDS}


def compute_day_nutrition(plan) -> Dict[str, Any]:
    """Sum calories and macros over every slot of a DailyPlan."""
    totals = dict.fromkeys(_FIELDS, 0)
    for meal in plan.meals():
        for field, value in _meal_nutrition(meal).items():
            totals[field] += value
    return totals


def compute_week_nutrition(weekly) -> Dict[str, Any]:
    """Aggregate nutrition stats for the given week plan.

    Returns structure:
    {
      'days': {
         'Monday': {'calories': int, 'protein': g, 'carbs': g, 'fat': g, 'fiber': g,
                    'calorieTarget': int,
                    'meals': { 'breakfast': { 'name': str, 'calories': int, ... }, 'snacks': [ ... ] }},
         ...
      },
      'week_totals': { 'calories': int, 'protein': g, 'carbs': g, 'fat': g, 'fiber': g }
    }
    """
    days_result = {}
    totals = defaultdict(int)

    for day, plan in weekly.items():
        day_totals = compute_day_nutrition(plan)
        meal_details = {
            slot: {'name': meal.name, **_meal_nutrition(meal)}
            for slot, meal in (('breakfast', plan.breakfast), ('lunch', plan.lunch), ('dinner', plan.dinner))
        }
        meal_details['snacks'] = [{'name': s.name, **_meal_nutrition(s)} for s in plan.snacks]
        days_result[day] = {**day_totals, 'calorieTarget': plan.calorie_target, 'meals': meal_details}
        for field in _FIELDS:
            totals[field] += day_totals[field]

    return {
        'days': days_result,
        'week_totals': {field: totals[field] for field in _FIELDS},
    }


def macro_split(day: Dict[str, Any]) -> Dict[str, float]:
    """Share of macro energy (percent, one decimal) from protein, carbs and fat."""
    energy = {macro: (day.get(macro, 0) or 0) * kcal for macro, kcal in KCAL_PER_GRAM.items()}
    total = sum(energy.values())
    if not total:
        return {macro: 0 for macro in KCAL_PER_GRAM}
    return {macro: round(value * 100 / total, 1) for macro, value in energy.items()}


__all__ = ["compute_day_nutrition", "compute_week_nutrition", "macro_split"]
