from typing import Final

# Meal plan generation
SLOT_PICK_COUNTS: Final[dict[str, int]] = {"breakfast": 1, "lunch": 1, "dinner": 1, "snacks": 2}
MEAL_SHARES: Final[dict[str, float]] = {"breakfast": 0.28, "lunch": 0.34, "dinner": 0.28, "snacks": 0.10}
MIN_MEAL_CALORIES: Final[int] = 40
DEFAULT_MEAL_NAMES: Final[dict[str, str]] = {
    "breakfast": "Oatmeal with Berries",
    "lunch": "Grain Bowl with Beans and Veg",
    "dinner": "Tofu/Paneer Stir-Fry with Veg",
    "snacks": "Fruit and Nuts",
}
DEFAULT_SNACK_NAME: Final[str] = "Snack"

# Calorie targets
CALORIE_MIN: Final[int] = 1000
CALORIE_MAX: Final[int] = 3500
FALLBACK_CALORIE_LIMIT: Final[int] = 1800

# Goal calculation
TARGET_BMI: Final[float] = 22.5
GOAL_WEIGHT_MIN: Final[int] = 30
GOAL_WEIGHT_MAX: Final[int] = 300
DEFAULT_HEIGHT_CM: Final[float] = 170
DEFAULT_AGE_YEARS: Final[float] = 25
DEFAULT_WEIGHT_KG: Final[float] = 70
DEFAULT_ACTIVITY_MULTIPLIER: Final[float] = 1.2
DEFAULT_DIET_PREFERENCE: Final[str] = "Vegan"
# Checked in order, first substring match wins
DIET_CALORIE_ADJUSTMENTS: Final[tuple[tuple[str, int], ...]] = (
    ("keto", -200),
    ("vegan", -100),
    ("vegetarian", 50),
    ("non", 100),
    ("gluten", -50),
)
# BMI bands used to suggest a calorie limit when none is given
UNDERWEIGHT_BMI: Final[float] = 18.5
OBESE_BMI: Final[float] = 29.9
BMI_CALORIE_LIMITS: Final[dict[str, int]] = {"underweight": 2200, "normal": 1800, "obese": 1600}

# Energy per gram of macronutrient
KCAL_PER_GRAM: Final[dict[str, int]] = {"protein": 4, "carbs": 4, "fat": 9}

MEAL_PLAN_PROMPT_TEMPLATE: Final[str] = (
    """You are a creative nutrition planner. Generate a unique one-day meal plan as strict JSON.
Return ONLY JSON, no prose, in this exact shape:
{"breakfast":{"name":"...","calories":123},"lunch":{"name":"...","calories":456},"dinner":{"name":"...","calories":789},"snacks":[{"name":"...","calories":120}]}
Rules:
- Diet preference: %(diet)s. Respect it strictly.
- Target calories (daily): %(calories)s.
- Calorie allocation guideline: 25-30%% breakfast, 30-35%% lunch, 25-30%% dinner, 10-15%% snacks.
- BMI (if helpful): %(bmi)s.
- Goal weight (kg, if provided): %(goal_weight)s.
- Names should be concise real foods. Calories are integers. No macros required.
- %(hint)s
"""
)
GOALS_PROMPT_TEMPLATE: Final[str] = (
    """You are an experienced nutrition coach. Suggest personalized goal weight and daily calories.
Return ONLY JSON with this exact shape: {"goalWeight": 65, "dailyCalories": 1850}
Rules:
- Inputs: gender=%(gender)s, age=%(age)s, height_cm=%(height)s, weight_kg=%(weight)s, activity=%(activity)s, diet=%(diet)s, bmi=%(bmi)s.
- Goal weight should correspond to a healthy BMI range (roughly 20-24.9), rounded to whole kg.
- Daily calories should be a realistic maintenance or mild-deficit value (1000-3500 range), integer only.
- %(hint)s
- No text besides JSON.
"""
)
MEAL_PLAN_HINTS: Final[tuple[str, ...]] = (
    "Be creative and suggest unique, interesting meal combinations.",
    "Focus on seasonal and fresh ingredients.",
    "Include international cuisine influences.",
    "Emphasize protein-rich options.",
    "Suggest quick and easy preparation methods.",
    "Emphasize balanced macronutrients.",
)
GOAL_HINTS: Final[tuple[str, ...]] = (
    "Consider sustainable weight management approach.",
    "Emphasize gradual, maintainable progress.",
    "Consider activity level and lifestyle.",
    "Focus on realistic, achievable goals.",
)
