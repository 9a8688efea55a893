"""Prompt templates, one per task (Jinja2 syntax).

Every optional input sits inside an ``{% if %}`` block so an absent field
drops its whole section instead of rendering an empty label.
"""
from typing import Final

PROFILE_SECTION: Final[str] = """\
{% if profile %}
**User Profile:**
- Age: {{ profile.age }}
- Gender: {{ profile.gender }}
- Activity Level: {{ profile.activity_level }}
{% if profile.location %}
- Location: {{ profile.location }}
{% endif %}
{% if goals %}
- Health Goals: {{ goals | join(", ") }}
{% endif %}
{% endif %}
"""

GENERATE_PLAN_TEMPLATE: Final[str] = """\
You are an expert nutritionist and meal planner. Create a detailed, personalized 7-day meal plan (Monday through Sunday) based on the user's dietary restrictions, preferences and health profile.

**Dietary Restrictions:**
{{ req.dietary_restrictions }}
{% if cuisines %}

**Preferred Cuisines:**
{{ cuisines | join(", ") }}
{% endif %}
{% if req.favorite_ingredients %}

**Favorite Ingredients (use them often):**
{{ req.favorite_ingredients }}
{% endif %}
{% if req.disliked_ingredients %}

**Ingredients to Avoid:**
{{ req.disliked_ingredients }}
{% endif %}
{% if profile %}

{% include "profile" %}
{% endif %}

**Instructions:**
1. Respect every dietary restriction strictly; never use an ingredient the user wants to avoid.
2. Set daily calorie, protein, carbohydrate and fat targets that fit the user's profile and goals, and describe them in "nutritionalTargets" (use markdown for lists).
{% if profile and profile.location %}
3. Prefer ingredients that are locally available and in season around {{ profile.location }}.
{% else %}
3. Prefer ingredients that are easy to find in a regular grocery store.
{% endif %}
4. For each day list every meal and snack with its time, the menu items with portion sizes (markdown list), and estimated calories, protein, carbs and fat.
5. Give the nutritional totals of each day and a short "dailyRationale" explaining how the day supports the user's goals.
6. Before finalizing, call the {{ tool_name }} tool with the ingredients you plan to use and only keep the ingredients it returns.

**Response Format:**
- Return a single JSON object with "title", "summary", "nutritionalTargets" and "mealPlan".
- "mealPlan" must contain exactly 7 days in order from Monday to Sunday.
- Numbers must be plain numbers without units. Do not add any text outside the JSON.
"""

GENERATE_SHOPPING_LIST_TEMPLATE: Final[str] = """\
You are a shopping list generator. Based on the following meal plan, create a comprehensive shopping list.
Organize the list by category (e.g., Produce, Dairy, Meat, Pantry, Spices, etc.) to make shopping easier.
Assume standard pantry items like salt, pepper, and basic cooking oils are already available and don't include them unless specified for a particular recipe.

**Meal Plan:**
{{ plan_json }}

**Response Format:**
- Return a JSON object with a "shoppingList" array, where each entry has a "category" and an array of "items".
- Each item has a "name" (include the total quantity needed for the week) and, only when you know a real product page, a "link" with an absolute https URL.
- Do not add any text outside the JSON.
"""

ANALYZE_PLAN_TEMPLATE: Final[str] = """\
You are an expert nutritionist and health coach. Analyze the provided 7-day meal plan and the user's feedback on it.

**Meal Plan:**
{{ plan_json }}

**User Feedback:**
"{{ req.user_feedback }}"

{% if profile %}
{% include "profile" %}
{% else %}
**User Profile:**
No specific user profile provided.
{% endif %}

**Instructions:**
1. **Analyze Feedback:** Carefully consider the user's feedback in the context of their profile and the provided meal plan.
2. **Provide Overall Analysis:** Write a brief, encouraging, and insightful analysis of the meal plan's alignment with the user's goals and feedback.
3. **Generate Actionable Suggestions:** Create a list of 3-5 clear, concise, and actionable suggestions for how the user could adjust their next meal plan. Frame these as positive changes.
4. **Nutritional Consistency Score:** Based on the meal plan's daily totals, calculate a "Nutritional Consistency Score" out of 100. A high score means the daily totals for calories, protein, etc., are very consistent day-to-day. A low score means they fluctuate a lot. Provide a brief explanation for the score.

**Response Format:**
- Return a JSON object with "analysis", "suggestions", "consistencyScore" and "consistencyRationale".
- Do not add any text outside the JSON.
"""

TEMPLATES: Final[dict[str, str]] = {
    "profile": PROFILE_SECTION,
    "generate-plan": GENERATE_PLAN_TEMPLATE,
    "generate-shopping-list": GENERATE_SHOPPING_LIST_TEMPLATE,
    "analyze-plan": ANALYZE_PLAN_TEMPLATE,
}

SYSTEM_MESSAGE: Final[str] = (
    "You are a careful nutrition assistant. Always answer with JSON that matches the requested schema."
)
