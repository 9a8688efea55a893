"""
Schema contracts for every payload exchanged with the model and the profile store.

Attributes are snake_case, the JSON wire names are camelCase (``userProfile``,
``menuItems`` ...). ``validate`` is the single entry point used by the prompt
and generation layers; it converts pydantic errors into
``ContractValidationError`` carrying the dotted path of the offending field.
"""
from typing import Any, Dict, List, Literal, Optional, Type, TypeVar, Union
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from mealgen.domain.Errors import ContractValidationError

Number = Union[StrictInt, StrictFloat]
ActivityLevel = Literal["Sedentary", "Lightly Active", "Moderately Active", "Very Active", "Extra Active"]

ModelT = TypeVar("ModelT", bound="ContractModel")


class ContractModel(BaseModel):
    """Base for all contracts: camelCase aliases, snake_case attributes."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict using wire names; unset optionals are left out."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _clean_tags(v):
    if v is None:
        return v
    return [tag.strip() for tag in v if isinstance(tag, str) and tag.strip()]


# === Profile ===
class UserProfile(ContractModel):
    age: StrictInt = Field(..., gt=0, description="User's age")
    gender: str = Field(..., description="User's gender")
    activity_level: ActivityLevel = Field(
        ..., description="User's activity level (e.g., Sedentary, Lightly Active, Moderately Active)"
    )
    location: Optional[str] = Field(
        None, description="User's location to suggest locally available ingredients."
    )
    health_goals: Optional[List[str]] = Field(
        None, description="User's health goals (e.g., Weight Management, Increasing Energy Levels)."
    )
    other_health_goal: Optional[str] = Field(
        None, description="Other specific health goal provided by the user."
    )

    @field_validator('health_goals')
    @classmethod
    def strip_goals(cls, v):
        """Drop blank tags."""
        return _clean_tags(v)


# === Meal plan generation ===
class MealPlanRequest(ContractModel):
    dietary_restrictions: str = Field(
        ..., description="A comma-separated list of dietary restrictions, e.g., allergies, vegetarian, gluten-free."
    )
    meal_preferences: Optional[List[str]] = Field(None, description="A list of preferred cuisines.")
    other_meal_preference: Optional[str] = Field(
        None, description="Other specific meal preference provided by the user."
    )
    favorite_ingredients: Optional[str] = Field(
        None, description="A comma-separated list of favorite ingredients."
    )
    disliked_ingredients: Optional[str] = Field(
        None, description="A comma-separated list of ingredients to avoid."
    )
    user_profile: Optional[UserProfile] = Field(None, description="The user's health profile.")

    @field_validator('dietary_restrictions', mode='before')
    @classmethod
    def join_restriction_tags(cls, v):
        """Accept a list of tags and store it comma-joined; blank means missing."""
        if isinstance(v, (list, tuple)):
            v = ", ".join(t.strip() for t in v if isinstance(t, str) and t.strip())
        if isinstance(v, str) and not v.strip():
            raise ValueError("Dietary restrictions are required (use \"none\" if there are none)")
        return v

    @field_validator('meal_preferences')
    @classmethod
    def strip_preferences(cls, v):
        return _clean_tags(v)


class MealItem(ContractModel):
    time: str = Field(..., description="The time for the meal (e.g., 9 AM).")
    menu_items: str = Field(
        ..., description="The food items for the meal, including portion sizes. Use markdown for lists."
    )
    calories: Number = Field(..., description="Estimated calories for the meal.")
    protein: Number = Field(..., description="Estimated protein in grams for the meal.")
    carbs: Number = Field(..., description="Estimated carbohydrates in grams for the meal.")
    fat: Number = Field(..., description="Estimated fat in grams for the meal.")


class DailyTotals(ContractModel):
    calories: Number
    protein: Number
    carbs: Number
    fat: Number

    @field_validator('calories', 'protein', 'carbs', 'fat')
    @classmethod
    def non_negative(cls, v):
        if v < 0:
            raise ValueError('Daily totals cannot be negative')
        return v


class DayPlan(ContractModel):
    day: str = Field(..., description="The day of the week (e.g., Monday).")
    meals: List[MealItem] = Field(..., description="A list of meals and snacks for the day.")
    totals: DailyTotals = Field(..., description="Total nutritional information for the day.")
    daily_rationale: str = Field(
        ..., description="A brief explanation of why the day's meals meet the user's goals."
    )


class MealPlanReport(ContractModel):
    title: str = Field(..., description="A catchy title for the meal plan report.")
    summary: str = Field(..., description="A brief summary of the meal plan's goals and approach.")
    nutritional_targets: str = Field(
        ...,
        description="A description of the calorie, protein, carbohydrate, and fat targets. Use markdown for lists.",
    )
    meal_plan: List[DayPlan] = Field(
        ...,
        description="A detailed 7-day meal plan based on the provided dietary restrictions and preferences.",
    )


# === Shopping list ===
class ShoppingListRequest(ContractModel):
    meal_plan: MealPlanReport = Field(..., description="The structured meal plan to generate a shopping list for.")


class ShoppingListItem(ContractModel):
    name: str = Field(..., description="The name of the shopping list item.")
    link: Optional[str] = Field(None, description="An affiliate link to purchase the item online.")

    @field_validator('link')
    @classmethod
    def validate_link(cls, v):
        """Only absolute http(s) URLs are accepted."""
        if v is None:
            return v
        parsed = urlparse(v.strip())
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ValueError('Link must be an absolute http(s) URL')
        return v.strip()


class ShoppingListCategory(ContractModel):
    category: str = Field(..., description="The category of the shopping list items (e.g., 'Produce', 'Dairy').")
    items: List[ShoppingListItem] = Field(..., description="The items in this category.")


class ShoppingList(ContractModel):
    shopping_list: List[ShoppingListCategory] = Field(
        ..., description="A shopping list organized by category (e.g., Produce, Dairy, Meat, Pantry)."
    )


# === Analysis ===
class AnalysisRequest(ContractModel):
    meal_plan: MealPlanReport = Field(..., description="The meal plan to be analyzed.")
    user_feedback: str = Field(..., description="The user's feedback on the meal plan.")
    user_profile: Optional[UserProfile] = Field(None, description="The user's health profile.")


class AnalysisReport(ContractModel):
    analysis: str = Field(
        ..., description="A brief analysis of the meal plan based on user feedback and goals."
    )
    suggestions: List[str] = Field(
        ..., description="A list of actionable suggestions for the next meal plan."
    )
    consistency_score: Number = Field(
        ..., description="A score from 0-100 indicating how consistent the daily nutritional totals are."
    )
    consistency_rationale: str = Field(..., description="A brief explanation for the consistency score.")


# === Validation helpers ===
def _error_paths(exc: ValidationError):
    out = []
    for err in exc.errors():
        loc = err.get('loc', ())
        # Union members add their type name to the location; keep only real fields/indexes
        parts = [str(p) for p in loc if not (isinstance(p, str) and p.startswith(('int', 'float')))]
        out.append((".".join(parts), err.get('msg', 'invalid value')))
    return out


def validate(schema: Type[ModelT], value: Any) -> ModelT:
    """Validate ``value`` against ``schema`` and return the model instance.

    Raises ContractValidationError whose ``path`` points at the first offending field.
    """
    if isinstance(value, schema):
        return value
    try:
        return schema.model_validate(value)
    except ValidationError as e:
        raise ContractValidationError(schema.__name__, _error_paths(e)) from e


def output_json_schema(schema: Type[ContractModel]) -> Dict[str, Any]:
    """JSON Schema (wire names) declared to the model for structured output."""
    return schema.model_json_schema(by_alias=True)


__all__ = [
    'ContractModel', 'UserProfile', 'MealPlanRequest', 'MealItem', 'DailyTotals', 'DayPlan',
    'MealPlanReport', 'ShoppingListRequest', 'ShoppingListItem', 'ShoppingListCategory',
    'ShoppingList', 'AnalysisRequest', 'AnalysisReport', 'validate', 'output_json_schema',
]
