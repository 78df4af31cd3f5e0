from fastapi import (
    FastAPI,
    Request,
    Query,
    APIRouter,
    Depends,
    HTTPException,
    Response,
)

from typing import Optional
import logging

from dietplan.domain.Goals import GoalInputs
from dietplan.domain.Recipe import MEAL_TYPES
from dietplan.infra.Recipe_Catalog import RecipeCatalog, load_catalog
from dietplan.infra.pdf_utils import generate_pdf_for_week
from dietplan.logic.goals.calculator import body_mass_index, compute_goals, suggest_calorie_limit
from dietplan.logic.planning.fallback import load_fallback_dishes
from dietplan.logic.planning.generator import generate_daily, generate_weekly
from dietplan.logic.reporting.nutrition import compute_week_nutrition, macro_split
from dietplan.utilities.config import DEFAULT_CALORIE_TARGET
from dietplan.utilities.constants import DEFAULT_DIET_PREFERENCE
from dietplan.utilities.validators import GoalRequest, RegenerateRequest, round_half_up, to_positive_number

# Routers
from dietplan.api.api_ai import router as ai_router

# Logging
logger = logging.getLogger("dietplan_app")

router = APIRouter()


def get_catalog(request: Request) -> RecipeCatalog:
    return request.app.state.catalog


def _calorie_target(value) -> int:
    """Query/body calorie target; anything unusable means the default."""
    n = to_positive_number(value)
    return round_half_up(n) if n is not None else DEFAULT_CALORIE_TARGET


def _daily_payload(catalog: RecipeCatalog, diet_type: str, calorie_target: int) -> dict:
    plan = generate_daily(catalog, diet_type, calorie_target)
    return {
        "success": True,
        "dietType": diet_type,
        "calorieTarget": calorie_target,
        "dailyPlan": plan.to_dict(),
        "totalCalories": plan.total_calories,
        "suggestedCalories": calorie_target,
        "calorieBalance": plan.remaining_calories,
    }


def _weekly_payload(catalog: RecipeCatalog, diet_type: str, calorie_target: int) -> dict:
    weekly = generate_weekly(catalog, diet_type, calorie_target)
    return {
        "success": True,
        "dietType": diet_type,
        "calorieTarget": calorie_target,
        "weeklyPlan": weekly.to_dict(),
    }


# -------------------- API: Catalog --------------------
@router.get("/api/diet-types")
def api_diet_types(catalog: RecipeCatalog = Depends(get_catalog)):
    return {"success": True, "dietTypes": list(catalog.diet_types()), "totalRecipes": len(catalog)}


@router.get("/api/recipes/{diet_type}")
def api_recipes(diet_type: str, meal_type: Optional[str] = Query(default=None, alias="mealType"),
                catalog: RecipeCatalog = Depends(get_catalog)):
    if diet_type not in catalog:
        raise HTTPException(status_code=404, detail="Diet type not found")
    if meal_type in MEAL_TYPES:
        recipes = [r.to_dict() for r in catalog.recipes_for(diet_type, meal_type)]
    else:
        recipes = {slot: [r.to_dict() for r in bucket] for slot, bucket in catalog.buckets_for(diet_type).items()}
    return {"success": True, "dietType": diet_type, "recipes": recipes}


@router.get("/api/recipe/{recipe_id}")
def api_recipe(recipe_id: int, catalog: RecipeCatalog = Depends(get_catalog)):
    entry = catalog.find_recipe(recipe_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {
        "success": True,
        "recipe": {**entry.recipe.to_dict(), "dietType": entry.diet_type, "mealType": entry.meal_type},
    }


# -------------------- API: Plans --------------------
@router.get("/api/meal-suggestions")
def api_meal_suggestions(diet_type: str = Query(default=DEFAULT_DIET_PREFERENCE, alias="dietType"),
                         calorie_target: Optional[str] = Query(default=None, alias="calorieTarget"),
                         catalog: RecipeCatalog = Depends(get_catalog)):
    return _daily_payload(catalog, diet_type, _calorie_target(calorie_target))


@router.get("/api/weekly-meal-plan")
def api_weekly_meal_plan(diet_type: str = Query(default=DEFAULT_DIET_PREFERENCE, alias="dietType"),
                         calorie_target: Optional[str] = Query(default=None, alias="calorieTarget"),
                         catalog: RecipeCatalog = Depends(get_catalog)):
    return _weekly_payload(catalog, diet_type, _calorie_target(calorie_target))


@router.post("/api/regenerate-meals")
def api_regenerate_meals(payload: Optional[RegenerateRequest] = None,
                         catalog: RecipeCatalog = Depends(get_catalog)):
    payload = payload or RegenerateRequest()
    diet_type = payload.diet_type or DEFAULT_DIET_PREFERENCE
    calorie_target = _calorie_target(payload.calorie_target)
    if payload.plan_type == "weekly":
        result = _weekly_payload(catalog, diet_type, calorie_target)
    else:
        result = _daily_payload(catalog, diet_type, calorie_target)
    result["planType"] = payload.plan_type
    logger.info("Regenerated %s plan for %s @ %s kcal", payload.plan_type, diet_type, calorie_target)
    return result


# -------------------- API: Goals --------------------
@router.post("/api/goals")
def api_goals(payload: Optional[GoalRequest] = None):
    """Local goal calculation, plus BMI and the calorie limit it suggests."""
    payload = payload or GoalRequest()
    inputs = GoalInputs.from_dict(payload.to_goal_dict())
    goals = compute_goals(inputs)
    bmi = body_mass_index(inputs.weight_kg, inputs.height_cm)
    return {
        **goals.to_dict(),
        "bmi": bmi,
        "suggestedCalorieLimit": suggest_calorie_limit(bmi),
        "inputs": inputs.to_dict(),
    }


# -------------------- API: Nutrition --------------------
@router.get("/api/nutrition")
def api_nutrition(diet_type: str = Query(default=DEFAULT_DIET_PREFERENCE, alias="dietType"),
                  calorie_target: Optional[str] = Query(default=None, alias="calorieTarget"),
                  catalog: RecipeCatalog = Depends(get_catalog)):
    """Generate a week for the diet and return its nutrition aggregation."""
    target = _calorie_target(calorie_target)
    weekly = generate_weekly(catalog, diet_type, target)
    nutrition = compute_week_nutrition(weekly)
    return {
        "dietType": diet_type,
        "calorieTarget": target,
        "weeklyPlan": weekly.to_dict(),
        "macroSplit": macro_split(nutrition["week_totals"]),
        **nutrition,
    }


@router.get("/export_pdf")
def export_pdf(diet_type: str = Query(default=DEFAULT_DIET_PREFERENCE, alias="dietType"),
               calorie_target: Optional[str] = Query(default=None, alias="calorieTarget"),
               catalog: RecipeCatalog = Depends(get_catalog)):
    weekly = generate_weekly(catalog, diet_type, _calorie_target(calorie_target))
    pdf_bytes = generate_pdf_for_week(weekly, diet_type)
    safe_name = "".join(ch if ch.isalnum() else "_" for ch in diet_type)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=meal_plan_{safe_name}.pdf"
        },
    )


def create_app(catalog: Optional[RecipeCatalog] = None) -> FastAPI:
    """Build the application. The recipe catalog and the fallback dish table are loaded here, once;
    a bad table aborts start-up with CatalogError.
    """
    application = FastAPI(title="Diet Planner API")
    application.state.catalog = catalog if catalog is not None else load_catalog()
    application.state.fallback_dishes = load_fallback_dishes()
    logger.info("Diet planner ready with %s and %d fallback diets",
                application.state.catalog, len(application.state.fallback_dishes))

    # Include routers
    application.include_router(router)
    application.include_router(ai_router)
    return application


# Initialize FastAPI app
app = create_app()
