"""Plan domain entities: a day's meals with calorie accounting, and a seven-day week of them."""
from typing import Dict, Iterator, List, Tuple

WEEK_DAYS: Tuple[str, ...] = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class MealEntry:
    """Name + calories only; produced by the normalizer and the local fallback plan."""
    is_placeholder = False

    def __init__(self, name: str, calories: int):
        self.name = name
        self.calories = calories

    def __str__(self) -> str:
        return f"{self.name} - {self.calories} kcal"

    __repr__ = __str__

    def __eq__(self, other):
        return isinstance(other, MealEntry) and (other.name, other.calories) == (self.name, self.calories)

    def __hash__(self):
        return hash((self.name, self.calories))

    def to_dict(self) -> Dict:
        return {"name": self.name, "calories": self.calories}


class DailyPlan:
    """One day of meals.

    Slots hold a Recipe, a Placeholder or a MealEntry; all of them expose
    ``name``, ``calories`` and ``to_dict()``. The totals are derived on
    access so they always match the slots the object currently holds.
    """

    def __init__(self, breakfast, lunch, dinner, snacks, calorie_target: int):
        self.breakfast = breakfast
        self.lunch = lunch
        self.dinner = dinner
        self.snacks = list(snacks)
        self.calorie_target = calorie_target

    def meals(self) -> List:
        '''All slot entries in display order: breakfast, lunch, dinner, then snacks.'''
        return [self.breakfast, self.lunch, self.dinner, *self.snacks]

    @property
    def total_calories(self) -> int:
        return sum(m.calories for m in self.meals())

    @property
    def remaining_calories(self) -> int:
        return self.calorie_target - self.total_calories

    def __str__(self) -> str:
        snacks = ", ".join(s.name for s in self.snacks)
        return (f"Breakfast: {self.breakfast.name} | Lunch: {self.lunch.name} | Dinner: {self.dinner.name} | "
                f"Snacks: {snacks} | {self.total_calories}/{self.calorie_target} kcal")

    __repr__ = __str__

    def to_dict(self) -> Dict:
        total = self.total_calories
        return {
            "breakfast": self.breakfast.to_dict(),
            "lunch": self.lunch.to_dict(),
            "dinner": self.dinner.to_dict(),
            "snacks": [s.to_dict() for s in self.snacks],
            "totalCalories": total,
            "calorieTarget": self.calorie_target,
            "remainingCalories": self.calorie_target - total,
        }


class WeeklyPlan:
    """Monday..Sunday mapped to independently generated DailyPlans."""

    def __init__(self, days: Dict[str, DailyPlan]):
        missing = [d for d in WEEK_DAYS if d not in days]
        if missing:
            raise ValueError(f"Weekly plan is missing days: {', '.join(missing)}")
        self.days: Dict[str, DailyPlan] = {d: days[d] for d in WEEK_DAYS}

    def __getitem__(self, day: str) -> DailyPlan:
        return self.days[day]

    def __iter__(self) -> Iterator[str]:
        return iter(self.days)

    def __len__(self) -> int:
        return len(self.days)

    def items(self):
        return self.days.items()

    @property
    def total_calories(self) -> int:
        return sum(plan.total_calories for plan in self.days.values())

    def to_dict(self) -> Dict:
        return {day: plan.to_dict() for day, plan in self.days.items()}
