"""Test doubles for the OpenAI client plus sample payloads."""
import copy
import json
from types import SimpleNamespace

DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

SAMPLE_PROFILE = {
    "age": 34,
    "gender": "Female",
    "activityLevel": "Moderately Active",
    "location": "Lisbon",
    "healthGoals": ["Weight Management", "Heart Health"],
    "otherHealthGoal": "Sleep better",
}

SAMPLE_REQUEST = {
    "dietaryRestrictions": "vegetarian, nut allergy",
    "mealPreferences": ["Italian", "Thai"],
    "favoriteIngredients": "chickpeas, spinach",
    "dislikedIngredients": "mushrooms",
    "userProfile": SAMPLE_PROFILE,
}


def sample_report(days=7):
    return {
        "title": "Green Week",
        "summary": "A balanced vegetarian week.",
        "nutritionalTargets": "- 1900 kcal\n- 90 g protein",
        "mealPlan": [
            {
                "day": day,
                "meals": [
                    {"time": "8 AM", "menuItems": "- Oats\n- Berries", "calories": 400,
                     "protein": 15, "carbs": 60, "fat": 9.5},
                    {"time": "1 PM", "menuItems": "- Chickpea salad", "calories": 650,
                     "protein": 30, "carbs": 70, "fat": 20},
                ],
                "totals": {"calories": 1050, "protein": 45, "carbs": 130, "fat": 29.5},
                "dailyRationale": "Fibre-rich and steady energy.",
            }
            for day in DAYS[:days]
        ],
    }


SAMPLE_SHOPPING_LIST = {
    "shoppingList": [
        {"category": "Produce", "items": [
            {"name": "Spinach (300 g)"},
            {"name": "Berries (500 g)", "link": "https://shop.example.com/berries"},
        ]},
        {"category": "Pantry", "items": [{"name": "Rolled oats (1 kg)"}]},
    ]
}

SAMPLE_ANALYSIS = {
    "analysis": "The plan matches your goals well.",
    "suggestions": ["Add a protein-rich snack", "Swap one salad for soup", "Prep lunches on Sunday"],
    "consistencyScore": 92,
    "consistencyRationale": "Daily totals barely vary.",
}


def tool_call(call_id, name, arguments):
    return SimpleNamespace(id=call_id, type="function",
                           function=SimpleNamespace(name=name, arguments=arguments))


def reply(content=None, tool_calls=None, refusal=None):
    message = SimpleNamespace(content=content, tool_calls=tool_calls, refusal=refusal)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def json_reply(payload):
    return reply(json.dumps(payload))


class FakeCompletions:
    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(copy.deepcopy(kwargs))
        item = self.replies.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class FakeOpenAI:
    """Stands in for openai.OpenAI: replies are returned (or raised) in order."""

    def __init__(self, *replies):
        self.chat = SimpleNamespace(completions=FakeCompletions(replies))

    @property
    def calls(self):
        return self.chat.completions.calls
