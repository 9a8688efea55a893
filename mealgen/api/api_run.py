from fastapi import Body, Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from typing import Any, Dict
import logging

from mealgen.api import actions
from mealgen.api.routes import profile
from mealgen.api.routes.profile import current_user_id
from mealgen.infra.Profile_Repository import ProfileRepository, get_profile_repository
from mealgen.logic.generation.client import GenerationClient
from mealgen.utilities.config import TEMPLATES_DIR
from mealgen.utilities.constants import ACTIVITY_LEVELS, CUISINES, HEALTH_GOALS, SCHEMA_VERSION

# Logging
logger = logging.getLogger("mealgen_app")

# Initialize FastAPI app
app = FastAPI(title="MealGen AI Planner")

# Include routers
app.include_router(profile.router, prefix="/api")

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def get_generation_client() -> GenerationClient:
    return GenerationClient()


def _tagged(result: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=200 if result.get("success") else 400, content=result)


# -------------------- UI PAGES --------------------
@app.get("/", response_class=HTMLResponse)
def main_page(request: Request):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "activity_levels": ACTIVITY_LEVELS,
            "health_goals": HEALTH_GOALS,
            "cuisines": CUISINES,
        },
    )


# -------------------- API --------------------
@app.get("/api/health")
def health():
    return {"status": "ok", "schemaVersion": SCHEMA_VERSION}


@app.post("/api/meal-plan")
def api_generate_meal_plan(payload: dict = Body(...),
                           client: GenerationClient = Depends(get_generation_client)):
    result = actions.generate_meal_plan(payload, client=client)
    if result["success"]:
        logger.info("Meal plan generated with %d day(s)", len(result["data"].get("mealPlan", [])))
    return _tagged(result)


@app.post("/api/shopping-list")
def api_generate_shopping_list(payload: dict = Body(...),
                               client: GenerationClient = Depends(get_generation_client)):
    return _tagged(actions.generate_shopping_list(payload.get("mealPlan"), client=client))


@app.post("/api/analyze")
def api_analyze_meal_plan(payload: dict = Body(...),
                          user_id: str = Depends(current_user_id),
                          repository: ProfileRepository = Depends(get_profile_repository),
                          client: GenerationClient = Depends(get_generation_client)):
    user_profile = payload.get("userProfile")
    if user_profile is None:
        # Fall back to the saved profile of the requesting user
        user_profile = actions.get_profile(user_id, repository=repository)
    return _tagged(actions.analyze_meal_plan(
        payload.get("mealPlan"), payload.get("userFeedback"), user_profile, client=client,
    ))
