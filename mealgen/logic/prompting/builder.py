"""Prompt construction.

Provides render_prompt(task, request): validates the request against the
task's input contract and renders the task template. Rendering is pure: the
same request always yields the same text.
"""
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from jinja2 import DictLoader, Environment

from mealgen.logic.prompting.templates import TEMPLATES
from mealgen.utilities.constants import UNSAFE_COMBINATIONS_TOOL
from mealgen.utilities.validators import (
    AnalysisReport,
    AnalysisRequest,
    ContractModel,
    MealPlanReport,
    MealPlanRequest,
    ShoppingList,
    ShoppingListRequest,
    UserProfile,
    validate,
)

logger = logging.getLogger(__name__)


class PromptTask(str, Enum):
    GENERATE_PLAN = "generate-plan"
    GENERATE_SHOPPING_LIST = "generate-shopping-list"
    ANALYZE_PLAN = "analyze-plan"


# task -> (input contract, output contract)
TASK_CONTRACTS: Dict[PromptTask, tuple[Type[ContractModel], Type[ContractModel]]] = {
    PromptTask.GENERATE_PLAN: (MealPlanRequest, MealPlanReport),
    PromptTask.GENERATE_SHOPPING_LIST: (ShoppingListRequest, ShoppingList),
    PromptTask.ANALYZE_PLAN: (AnalysisRequest, AnalysisReport),
}


def _finalize(value):
    # Never print "None" for a missing value
    return "" if value is None else value


_env = Environment(
    loader=DictLoader(TEMPLATES),
    trim_blocks=True,
    lstrip_blocks=True,
    autoescape=False,
    finalize=_finalize,
)


def _health_goals(profile: Optional[UserProfile]) -> List[str]:
    if profile is None:
        return []
    goals = list(profile.health_goals or [])
    if profile.other_health_goal and profile.other_health_goal.strip():
        goals.append(profile.other_health_goal.strip())
    return goals


def _cuisines(req: MealPlanRequest) -> List[str]:
    cuisines = list(req.meal_preferences or [])
    if req.other_meal_preference and req.other_meal_preference.strip():
        cuisines.append(req.other_meal_preference.strip())
    return cuisines


def _plan_json(plan: MealPlanReport) -> str:
    return plan.model_dump_json(by_alias=True, indent=2)


def _context(task: PromptTask, req) -> Dict[str, Any]:
    profile = getattr(req, "user_profile", None)
    context: Dict[str, Any] = {
        "req": req,
        "profile": profile,
        "goals": _health_goals(profile),
    }
    if task is PromptTask.GENERATE_PLAN:
        context["cuisines"] = _cuisines(req)
        context["tool_name"] = UNSAFE_COMBINATIONS_TOOL
    else:
        context["plan_json"] = _plan_json(req.meal_plan)
    return context


def request_schema_for(task) -> Type[ContractModel]:
    return TASK_CONTRACTS[PromptTask(task)][0]


def output_schema_for(task) -> Type[ContractModel]:
    return TASK_CONTRACTS[PromptTask(task)][1]


def render_prompt(task, request) -> str:
    """Render the instruction document for ``task``.

    Args:
        task: PromptTask or its string value ("generate-plan", ...).
        request: the task's request model, or a dict that validates into it.

    Raises:
        ValueError: unknown task.
        ContractValidationError: request does not match the task's input contract.
    """
    task = PromptTask(task)
    req = validate(request_schema_for(task), request)
    text = _env.get_template(task.value).render(**_context(task, req)).strip()
    logger.debug("Rendered %s prompt (%d chars)", task.value, len(text))
    return text


__all__ = ['PromptTask', 'TASK_CONTRACTS', 'render_prompt', 'request_schema_for', 'output_schema_for']
