"""UI-facing actions.

Each action runs one validated round trip to a collaborator (model or profile
store) and returns a tagged result ``{"success": bool, "data"?, "error"?}``.
Nothing raises past this module: failures become a single readable message.
"""
import logging
from typing import Any, Dict, Optional

from mealgen.domain.Errors import (
    ContractValidationError,
    EmptyResponseError,
    MealGenError,
    SchemaMismatchError,
    StoreError,
    TransportError,
)
from mealgen.infra.Profile_Repository import ProfileRepository, get_profile_repository
from mealgen.logic.generation.client import GenerationClient
from mealgen.logic.generation.tools import default_tools
from mealgen.logic.parsing.plan_text import interpret_plan_reply
from mealgen.logic.prompting.builder import PromptTask, output_schema_for, render_prompt, request_schema_for
from mealgen.utilities import config
from mealgen.utilities.constants import GENERIC_TRANSPORT_MESSAGE, UNKNOWN_ERROR_MESSAGE
from mealgen.utilities.validators import validate

logger = logging.getLogger(__name__)


def _ok(data: Any) -> Dict[str, Any]:
    return {"success": True, "data": data}


def _fail(error: str) -> Dict[str, Any]:
    return {"success": False, "error": error or UNKNOWN_ERROR_MESSAGE}


def error_message(exc: Exception) -> str:
    """Map an exception to the message shown to the user."""
    if isinstance(exc, TransportError):
        return GENERIC_TRANSPORT_MESSAGE
    if isinstance(exc, (ContractValidationError, SchemaMismatchError, EmptyResponseError, StoreError)):
        return str(exc) or UNKNOWN_ERROR_MESSAGE
    return UNKNOWN_ERROR_MESSAGE


def _run_task(task: PromptTask, payload: Any, client: Optional[GenerationClient], tools=None):
    request = validate(request_schema_for(task), payload)
    prompt = render_prompt(task, request)
    return (client or GenerationClient()).invoke(prompt, output_schema_for(task), tools=tools)


def generate_meal_plan(payload: Any, *, client: Optional[GenerationClient] = None,
                       allow_text_fallback: Optional[bool] = None) -> Dict[str, Any]:
    """Generate a 7-day MealPlanReport from a MealPlanRequest payload."""
    if allow_text_fallback is None:
        allow_text_fallback = config.ALLOW_TEXT_FALLBACK
    try:
        try:
            report = _run_task(PromptTask.GENERATE_PLAN, payload, client, tools=default_tools())
        except SchemaMismatchError as e:
            recovered = interpret_plan_reply(e.raw_text) if allow_text_fallback else None
            if recovered is None:
                raise
            logger.warning("Structured meal plan invalid (%s); using text fallback", e.path or "not JSON")
            report = recovered
        return _ok(report.to_dict())
    except MealGenError as e:
        logger.warning("Meal plan generation failed: %s", e)
        return _fail(error_message(e))
    except Exception as e:
        logger.exception("Unexpected error while generating meal plan")
        return _fail(error_message(e))


def generate_shopping_list(meal_plan: Any, *, client: Optional[GenerationClient] = None) -> Dict[str, Any]:
    """Build a categorized shopping list for a MealPlanReport."""
    try:
        result = _run_task(PromptTask.GENERATE_SHOPPING_LIST, {"mealPlan": meal_plan}, client)
        return _ok(result.to_dict())
    except MealGenError as e:
        logger.warning("Shopping list generation failed: %s", e)
        return _fail(error_message(e))
    except Exception as e:
        logger.exception("Unexpected error while generating shopping list")
        return _fail(error_message(e))


def analyze_meal_plan(meal_plan: Any, feedback: Any, profile: Any = None, *,
                      client: Optional[GenerationClient] = None) -> Dict[str, Any]:
    """Analyze a MealPlanReport against the user's feedback (and profile, if any)."""
    payload = {"mealPlan": meal_plan, "userFeedback": feedback}
    if profile is not None:
        payload["userProfile"] = profile
    try:
        result = _run_task(PromptTask.ANALYZE_PLAN, payload, client)
        return _ok(result.to_dict())
    except MealGenError as e:
        logger.warning("Meal plan analysis failed: %s", e)
        return _fail(error_message(e))
    except Exception as e:
        logger.exception("Unexpected error while analyzing meal plan")
        return _fail(error_message(e))


def get_profile(user_id: str = config.DEFAULT_USER_ID, *,
                repository: Optional[ProfileRepository] = None) -> Optional[Dict[str, Any]]:
    """Return the user's saved profile as a dict, or None."""
    try:
        profile = (repository or get_profile_repository()).get_profile(user_id)
    except Exception:
        logger.exception("Unexpected error while reading profile")
        return None
    return profile.to_dict() if profile is not None else None


def save_profile(profile: Any, user_id: str = config.DEFAULT_USER_ID, *,
                 repository: Optional[ProfileRepository] = None) -> Dict[str, Any]:
    """Overwrite the user's profile. Returns ``{"success": True}`` or a failure result."""
    try:
        (repository or get_profile_repository()).save_profile(user_id, profile)
        return {"success": True}
    except MealGenError as e:
        logger.warning("Saving profile failed: %s", e)
        return _fail(error_message(e))
    except Exception as e:
        logger.exception("Unexpected error while saving profile")
        return _fail(error_message(e))


__all__ = [
    'generate_meal_plan', 'generate_shopping_list', 'analyze_meal_plan',
    'get_profile', 'save_profile', 'error_message',
]
