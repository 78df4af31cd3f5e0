import json
import tempfile
import unittest
from pathlib import Path
from dietplan.domain.Recipe import MEAL_TYPES
from dietplan.infra.Recipe_Catalog import CatalogError, RecipeCatalog, load_catalog


def _recipe(recipe_id, calories=200):
    return {"id": recipe_id, "name": f"Dish {recipe_id}", "calories": calories,
            "cookTime": 10, "difficulty": "Easy", "image": f"dish-{recipe_id}.jpg"}


def _diet(start_id):
    return {slot: [_recipe(start_id + i)] for i, slot in enumerate(MEAL_TYPES)}


class TestBundledCatalog(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.catalog = load_catalog()

    def test_diet_types_in_file_order(self):
        self.assertEqual(self.catalog.diet_types(), ("Vegan", "Non-Veg", "Vegetarian", "Keto", "Gluten-Free"))
        self.assertEqual(len(self.catalog), 44)

    def test_bucket_sizes(self):
        self.assertEqual(len(self.catalog.recipes_for("Vegan", "breakfast")), 5)
        self.assertEqual(len(self.catalog.recipes_for("Vegetarian", "dinner")), 1)
        self.assertEqual(self.catalog.recipes_for("Vegetarian", "dinner")[0].name, "Eggplant Parmesan")
        self.assertEqual([r.calories for r in self.catalog.recipes_for("Gluten-Free", "snacks")], [160])

    def test_unknown_lookups_are_empty(self):
        self.assertEqual(self.catalog.recipes_for("Carnivore-XYZ", "lunch"), ())
        self.assertEqual(self.catalog.recipes_for("Vegan", "brunch"), ())
        # case-sensitive keys
        self.assertEqual(self.catalog.recipes_for("vegan", "lunch"), ())
        self.assertNotIn("vegan", self.catalog)
        self.assertIn("Keto", self.catalog)

    def test_buckets_for_unknown_diet(self):
        self.assertEqual(self.catalog.buckets_for("Paleo"), {slot: () for slot in MEAL_TYPES})

    def test_find_recipe(self):
        entry = self.catalog.find_recipe(35)
        self.assertEqual(entry.recipe.name, "Cheese and Whole Grain Crackers")
        self.assertEqual((entry.diet_type, entry.meal_type), ("Vegetarian", "snacks"))
        self.assertIsNone(self.catalog.find_recipe(999))

    def test_buckets_are_read_only(self):
        bucket = self.catalog.recipes_for("Keto", "breakfast")
        self.assertIsInstance(bucket, tuple)
        with self.assertRaises(TypeError):
            self.catalog._table["Keto"] = {}


class TestCatalogValidation(unittest.TestCase):

    def test_valid_table(self):
        catalog = RecipeCatalog.from_dict({"A": _diet(1), "B": _diet(10)})
        self.assertEqual(catalog.diet_types(), ("A", "B"))
        self.assertEqual(len(catalog), 8)

    def test_rejects_malformed_tables(self):
        missing_slot = _diet(1)
        del missing_slot["snacks"]
        empty_slot = _diet(1)
        empty_slot["lunch"] = []
        extra_slot = _diet(1)
        extra_slot["brunch"] = [_recipe(50)]
        bad_recipe = _diet(1)
        bad_recipe["dinner"] = [{"id": 3, "name": ""}]
        cases = {
            "empty": {},
            "not a mapping": [],
            "diet not a mapping": {"A": ["x"]},
            "missing slot": {"A": missing_slot},
            "empty slot": {"A": empty_slot},
            "unknown slot": {"A": extra_slot},
            "bad recipe": {"A": bad_recipe},
            "duplicate id": {"A": _diet(1), "B": _diet(4)},
        }
        for label, raw in cases.items():
            with self.subTest(label):
                with self.assertRaises(CatalogError):
                    RecipeCatalog.from_dict(raw)

    def test_load_errors_become_catalog_errors(self):
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "nope.json"
            with self.assertRaises(CatalogError):
                load_catalog(missing)
            broken = Path(tmp) / "broken.json"
            broken.write_text("{not json", encoding="utf-8")
            with self.assertRaises(CatalogError):
                load_catalog(broken)

    def test_load_custom_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "recipes.json"
            path.write_text(json.dumps({"Paleo": _diet(100)}), encoding="utf-8")
            catalog = load_catalog(path)
            self.assertEqual(catalog.diet_types(), ("Paleo",))
            # pure function of the file
            self.assertEqual(load_catalog(path).diet_types(), catalog.diet_types())


if __name__ == '__main__':
    unittest.main()
