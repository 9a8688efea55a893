"""Fallback parser for free-text meal plans.

Older model contracts returned the week as plain text::

    Monday
    Breakfast: Oatmeal
    Lunch: Salad
    ...

This module recovers day -> breakfast/lunch/dinner records from such text by
line-prefix matching and can lift them into the structured MealPlanReport.
It is lossy on purpose: any line that is neither a day heading nor a
``breakfast:``/``lunch:``/``dinner:`` line is dropped.
"""
import json
import logging
from typing import Dict, List, Optional

from mealgen.domain.DayMenu import DayMenu
from mealgen.utilities.constants import DAY_NAMES, MEAL_SLOTS
from mealgen.utilities.validators import DailyTotals, DayPlan, MealItem, MealPlanReport

logger = logging.getLogger(__name__)

_SLOT_PREFIXES = [(slot, slot + ":") for slot in MEAL_SLOTS]


def _match_day(line: str) -> Optional[str]:
    # Case-sensitive prefix match, e.g. "Monday", "Monday:", "Monday - light day"
    for day in DAY_NAMES:
        if line.startswith(day):
            return day
    return None


def parse_meal_plan_text(text: Optional[str]) -> List[DayMenu]:
    """Split a free-text plan into DayMenu records in first-seen order."""
    if not text:
        return []
    days: Dict[str, DayMenu] = {}
    current: Optional[DayMenu] = None

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        day = _match_day(line)
        if day is not None:
            if day not in days:
                days[day] = DayMenu(day)
            current = days[day]
            continue
        if current is None:
            continue
        lowered = line.lower()
        for slot, prefix in _SLOT_PREFIXES:
            if lowered.startswith(prefix):
                current.set_slot(slot, line[len(prefix):].strip())
                break

    # dicts keep insertion order -> first-seen order of days
    return list(days.values())


def report_from_day_menus(days: List[DayMenu], title: str = "Your Weekly Meal Plan",
                          summary: str = "Meal plan recovered from a text reply.") -> MealPlanReport:
    """Lift legacy DayMenu records into the current structured report (no nutrition data)."""
    day_plans = []
    for menu in days:
        meals = [
            MealItem(time=slot.capitalize(), menu_items=text, calories=0, protein=0, carbs=0, fat=0)
            for slot, text in menu.slots() if text
        ]
        day_plans.append(DayPlan(
            day=menu.day,
            meals=meals,
            totals=DailyTotals(calories=0, protein=0, carbs=0, fat=0),
            daily_rationale="",
        ))
    return MealPlanReport(
        title=title,
        summary=summary,
        nutritional_targets="Not available for text-only plans.",
        meal_plan=day_plans,
    )


def interpret_plan_reply(raw_text: Optional[str]) -> Optional[MealPlanReport]:
    """Best-effort interpretation of a reply that failed structured validation.

    Accepts plain text or the legacy ``{"mealPlan": "<text>"}`` payload.
    Returns None when no day heading could be found.
    """
    if not raw_text:
        return None
    text = raw_text
    try:
        legacy = json.loads(raw_text)
    except (TypeError, ValueError):
        legacy = None
    if isinstance(legacy, dict) and isinstance(legacy.get("mealPlan"), str):
        text = legacy["mealPlan"]

    days = parse_meal_plan_text(text)
    if not days:
        return None
    logger.info("Recovered %d day(s) from an unstructured meal plan reply", len(days))
    return report_from_day_menus(days)


__all__ = ['parse_meal_plan_text', 'report_from_day_menus', 'interpret_plan_reply']
