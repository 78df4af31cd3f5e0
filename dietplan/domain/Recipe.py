"""Recipe domain entity: id, name, nutrition values, ingredients, cook time, difficulty, image."""
from typing import ClassVar, Dict, Literal, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

MEAL_TYPES: Tuple[str, ...] = ("breakfast", "lunch", "dinner", "snacks")
DIFFICULTIES: Tuple[str, ...] = ("Easy", "Medium", "Hard")

Number = Union[int, float]


class Recipe(BaseModel):
    """Immutable catalog record. Wire keys follow the static table (cookTime, image)."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    is_placeholder: ClassVar[bool] = False

    id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1)
    calories: int = Field(..., ge=0)
    protein: Number = 0
    carbs: Number = 0
    fat: Number = 0
    fiber: Number = 0
    ingredients: Tuple[str, ...] = ()
    cook_time_minutes: int = Field(..., gt=0, alias="cookTime")
    difficulty: Literal["Easy", "Medium", "Hard"] = "Easy"
    image_ref: str = Field("", alias="image")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        """Names are stored trimmed; blank names are rejected."""
        v = v.strip()
        if not v:
            raise ValueError("Recipe name cannot be empty")
        return v

    @field_validator("protein", "carbs", "fat", "fiber")
    @classmethod
    def non_negative(cls, v):
        if v < 0:
            raise ValueError("Nutrition values cannot be negative")
        return v

    def __str__(self) -> str:
        macros_str = f"Protein: {self.protein}g, Carbs: {self.carbs}g, Fat: {self.fat}g, Fiber: {self.fiber}g"
        return f"{self.name} - {self.calories} kcal - {self.cook_time_minutes} min ({self.difficulty}) - Macros: {macros_str}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Validates a catalog entry. Raises pydantic.ValidationError if it is malformed.'''
        return Recipe.model_validate(data)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "fiber": self.fiber,
            "ingredients": list(self.ingredients),
            "cookTime": self.cook_time_minutes,
            "difficulty": self.difficulty,
            "image": self.image_ref,
            "placeholder": False,
        }


class Placeholder:
    """Zero-calorie stand-in used when a diet/slot combination has no recipe.

    Carries the same attributes as Recipe so summation and rendering code
    never has to special-case it; is_placeholder tells the two apart.
    """
    is_placeholder = True

    def __init__(self, meal_type: str):
        self.meal_type = meal_type
        self.id: Optional[int] = None
        self.name = f"No {meal_type} available"
        self.calories = 0
        self.protein = 0
        self.carbs = 0
        self.fat = 0
        self.fiber = 0
        self.ingredients: Tuple[str, ...] = ()
        self.cook_time_minutes = 0
        self.difficulty = ""
        self.image_ref = ""

    def __str__(self) -> str:
        return f"{self.name} - 0 kcal"

    __repr__ = __str__

    def __eq__(self, other):
        return isinstance(other, Placeholder) and other.meal_type == self.meal_type

    def __hash__(self):
        return hash(("placeholder", self.meal_type))

    def to_dict(self) -> Dict:
        return {
            "id": None,
            "name": self.name,
            "calories": 0,
            "protein": 0,
            "carbs": 0,
            "fat": 0,
            "fiber": 0,
            "ingredients": [],
            "cookTime": 0,
            "difficulty": "",
            "image": "",
            "placeholder": True,
        }
