"""Offline meal plan used when the model server gives nothing usable.

Dish names come from a static per-diet table; calories are the standard
slot shares of the target.
"""
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from dietplan.domain.Plan import DailyPlan, MealEntry
from dietplan.domain.Recipe import MEAL_TYPES
from dietplan.infra.Recipe_Catalog import CatalogError
from dietplan.infra.paths import FALLBACK_DISHES_FILE
from dietplan.logic.planning.selection import RandomSource, pick
from dietplan.utilities.constants import (
    DEFAULT_DIET_PREFERENCE, FALLBACK_CALORIE_LIMIT, MEAL_SHARES, MIN_MEAL_CALORIES
)
from dietplan.utilities.validators import round_half_up, to_positive_number

logger = logging.getLogger(__name__)


DishTable = Dict[str, Dict[str, Tuple[str, ...]]]


def validate_fallback_dishes(raw) -> DishTable:
    """Check the dish table shape: every diet owns the four slots, each a non-empty list of names.

    The default diet must be present since unknown diets fall back to it.
    """
    if not isinstance(raw, dict) or not raw:
        raise CatalogError("Fallback dish table must be a non-empty object keyed by diet type")
    table: DishTable = {}
    for diet, slots in raw.items():
        if not isinstance(slots, dict):
            raise CatalogError(f"Fallback diet '{diet}' must map meal types to dish names")
        table[diet] = {}
        for slot in MEAL_TYPES:
            names = slots.get(slot)
            if not isinstance(names, list) or not names:
                raise CatalogError(f"Fallback diet '{diet}' needs a non-empty '{slot}' list")
            if not all(isinstance(n, str) and n.strip() for n in names):
                raise CatalogError(f"Fallback diet '{diet}' has a blank or non-text dish in '{slot}'")
            table[diet][slot] = tuple(n.strip() for n in names)
    if DEFAULT_DIET_PREFERENCE not in table:
        raise CatalogError(f"Fallback dish table has no '{DEFAULT_DIET_PREFERENCE}' entry")
    return table


@lru_cache(maxsize=4)
def _read_dishes(path: Path) -> DishTable:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        logger.error("Fallback dishes file not found: %s", path)
        raise CatalogError(f"Fallback dishes file not found: {path}") from e
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in fallback dishes file %s: %s", path, e)
        raise CatalogError(f"Invalid JSON in fallback dishes file: {e}") from e
    try:
        return validate_fallback_dishes(raw)
    except CatalogError as e:
        logger.error("Fallback dish table rejected: %s", e)
        raise


def load_fallback_dishes(path: Union[str, Path, None] = None) -> DishTable:
    """Read and validate the dish table once per file. Any problem is raised as CatalogError."""
    return _read_dishes(Path(path) if path is not None else FALLBACK_DISHES_FILE)


def _slot_calories(calorie_target: float, meal_type: str) -> int:
    return max(MIN_MEAL_CALORIES, round_half_up(calorie_target * MEAL_SHARES[meal_type]))


def local_fallback_plan(diet_preference: str, calorie_target, rng: Optional[RandomSource] = None) -> DailyPlan:
    """One dish per slot for the diet (unknown diets use the Vegan table), a single snack."""
    target = to_positive_number(calorie_target) or FALLBACK_CALORIE_LIMIT
    dishes = load_fallback_dishes()
    table = dishes.get(diet_preference)
    if table is None:
        logger.debug("No fallback dishes for diet '%s'; using %s", diet_preference, DEFAULT_DIET_PREFERENCE)
        table = dishes[DEFAULT_DIET_PREFERENCE]

    def entry(meal_type: str) -> MealEntry:
        name = pick(table[meal_type], 1, rng)[0]
        return MealEntry(name, _slot_calories(target, meal_type))

    return DailyPlan(
        entry("breakfast"),
        entry("lunch"),
        entry("dinner"),
        [entry("snacks")],
        round_half_up(target),
    )


__all__ = ["load_fallback_dishes", "local_fallback_plan", "validate_fallback_dishes"]
