"""Daily and weekly meal plans drawn at random from the recipe catalog."""
import logging
from typing import Optional

from dietplan.domain.Plan import WEEK_DAYS, DailyPlan, WeeklyPlan
from dietplan.domain.Recipe import Placeholder
from dietplan.infra.Recipe_Catalog import RecipeCatalog
from dietplan.logic.planning.selection import RandomSource, pick
from dietplan.utilities.constants import SLOT_PICK_COUNTS

logger = logging.getLogger(__name__)


def _fill_slot(catalog: RecipeCatalog, diet_type: str, meal_type: str, rng: Optional[RandomSource]):
    chosen = pick(catalog.recipes_for(diet_type, meal_type), SLOT_PICK_COUNTS[meal_type], rng)
    if not chosen:
        logger.debug("No %s recipes for diet '%s'; using placeholder", meal_type, diet_type)
        return [Placeholder(meal_type)]
    return chosen


def generate_daily(catalog: RecipeCatalog, diet_type: str, calorie_target: int,
                   rng: Optional[RandomSource] = None) -> DailyPlan:
    """One breakfast, lunch and dinner plus two snacks for ``diet_type``.

    Missing buckets (or an unknown diet) turn into zero-calorie placeholders,
    so this never fails. ``remaining_calories`` may come out negative.
    """
    breakfast = _fill_slot(catalog, diet_type, "breakfast", rng)[0]
    lunch = _fill_slot(catalog, diet_type, "lunch", rng)[0]
    dinner = _fill_slot(catalog, diet_type, "dinner", rng)[0]
    snacks = _fill_slot(catalog, diet_type, "snacks", rng)
    return DailyPlan(breakfast, lunch, dinner, snacks, calorie_target)


def generate_weekly(catalog: RecipeCatalog, diet_type: str, calorie_target: int,
                    rng: Optional[RandomSource] = None) -> WeeklyPlan:
    # Days are independent; the same recipe may show up on several days.
    return WeeklyPlan({day: generate_daily(catalog, diet_type, calorie_target, rng) for day in WEEK_DAYS})


__all__ = ["generate_daily", "generate_weekly"]
