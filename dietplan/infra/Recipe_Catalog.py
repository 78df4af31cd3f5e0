"""Recipe catalog: read-only dietType -> mealType -> recipes lookup, loaded once from JSON."""
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, NamedTuple, Optional, Tuple, Union
from pydantic import ValidationError

from dietplan.domain.Recipe import MEAL_TYPES, Recipe
from dietplan.infra.paths import RECIPES_FILE

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """The static recipe table is missing or malformed. Not recoverable at request time."""


class CatalogEntry(NamedTuple):
    recipe: Recipe
    diet_type: str
    meal_type: str


class RecipeCatalog:
    def __init__(self, table: Mapping[str, Mapping[str, Tuple[Recipe, ...]]]):
        self._table = MappingProxyType({
            diet: MappingProxyType({slot: tuple(table[diet][slot]) for slot in MEAL_TYPES})
            for diet in table
        })
        self._by_id: Dict[int, CatalogEntry] = {}
        for diet, buckets in self._table.items():
            for slot, recipes in buckets.items():
                for recipe in recipes:
                    self._by_id[recipe.id] = CatalogEntry(recipe, diet, slot)

    def recipes_for(self, diet_type: str, meal_type: str) -> Tuple[Recipe, ...]:
        """Recipes for one diet/slot. Unknown diet or slot gives an empty tuple."""
        buckets = self._table.get(diet_type)
        if buckets is None:
            return ()
        return buckets.get(meal_type, ())

    def buckets_for(self, diet_type: str) -> Dict[str, Tuple[Recipe, ...]]:
        return {slot: self.recipes_for(diet_type, slot) for slot in MEAL_TYPES}

    def diet_types(self) -> Tuple[str, ...]:
        return tuple(self._table.keys())

    def find_recipe(self, recipe_id: int) -> Optional[CatalogEntry]:
        return self._by_id.get(recipe_id)

    def __contains__(self, diet_type) -> bool:
        return diet_type in self._table

    def __len__(self) -> int:
        return len(self._by_id)

    def __repr__(self) -> str:
        return f"RecipeCatalog({len(self._table)} diets, {len(self)} recipes)"

    @classmethod
    def from_dict(cls, raw) -> "RecipeCatalog":
        """Validate the raw table and build the catalog.

        Every diet must own the four meal slots, each a non-empty list of
        valid recipes, and recipe ids must be unique across the catalog.
        """
        if not isinstance(raw, dict) or not raw:
            raise CatalogError("Recipe table must be a non-empty object keyed by diet type")
        table: Dict[str, Dict[str, Tuple[Recipe, ...]]] = {}
        seen_ids: Dict[int, str] = {}
        for diet, buckets in raw.items():
            if not isinstance(diet, str) or not diet.strip():
                raise CatalogError(f"Invalid diet type key: {diet!r}")
            if not isinstance(buckets, dict):
                raise CatalogError(f"Diet '{diet}' must map meal types to recipe lists")
            unknown = set(buckets) - set(MEAL_TYPES)
            if unknown:
                raise CatalogError(f"Diet '{diet}' has unknown meal types: {', '.join(sorted(unknown))}")
            table[diet] = {}
            for slot in MEAL_TYPES:
                entries = buckets.get(slot)
                if not isinstance(entries, list) or not entries:
                    raise CatalogError(f"Diet '{diet}' needs a non-empty '{slot}' list")
                recipes = []
                for entry in entries:
                    try:
                        recipe = Recipe.from_dict(entry)
                    except ValidationError as e:
                        raise CatalogError(f"Invalid recipe in {diet}/{slot}: {e}") from e
                    where = f"{diet}/{slot}"
                    if recipe.id in seen_ids:
                        raise CatalogError(f"Duplicate recipe id {recipe.id} in {where} (already in {seen_ids[recipe.id]})")
                    seen_ids[recipe.id] = where
                    recipes.append(recipe)
                table[diet][slot] = tuple(recipes)
        return cls(table)


def load_catalog(path: Union[str, Path, None] = None) -> RecipeCatalog:
    """Read and validate the recipe table. Any problem is raised as CatalogError."""
    catalog_path = Path(path) if path is not None else RECIPES_FILE
    try:
        with open(catalog_path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        logger.error("Recipes file not found: %s", catalog_path)
        raise CatalogError(f"Recipes file not found: {catalog_path}") from e
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in recipes file %s: %s", catalog_path, e)
        raise CatalogError(f"Invalid JSON in recipes file: {e}") from e
    try:
        catalog = RecipeCatalog.from_dict(raw)
    except CatalogError as e:
        logger.error("Recipe catalog rejected: %s", e)
        raise
    logger.info("Loaded %s from %s", catalog, catalog_path)
    return catalog


__all__ = ['CatalogEntry', 'CatalogError', 'RecipeCatalog', 'load_catalog']
