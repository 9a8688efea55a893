import copy
import unittest
from typing import get_args

from mealgen.domain.Errors import ContractValidationError
from mealgen.utilities.constants import ACTIVITY_LEVELS
from mealgen.utilities.validators import (
    ActivityLevel,
    MealPlanReport,
    MealPlanRequest,
    ShoppingList,
    ShoppingListRequest,
    UserProfile,
    output_json_schema,
    validate,
)
from fakes import SAMPLE_PROFILE, SAMPLE_REQUEST, SAMPLE_SHOPPING_LIST, sample_report


class TestMealPlanRequestContract(unittest.TestCase):

    def test_valid_request(self):
        req = validate(MealPlanRequest, SAMPLE_REQUEST)
        self.assertEqual(req.dietary_restrictions, "vegetarian, nut allergy")
        self.assertEqual(req.user_profile.activity_level, "Moderately Active")

    def test_minimal_request(self):
        req = validate(MealPlanRequest, {"dietaryRestrictions": "none"})
        self.assertIsNone(req.user_profile)
        self.assertIsNone(req.meal_preferences)

    def test_missing_restrictions_points_at_field(self):
        payload = copy.deepcopy(SAMPLE_REQUEST)
        del payload["dietaryRestrictions"]
        with self.assertRaises(ContractValidationError) as ctx:
            validate(MealPlanRequest, payload)
        self.assertEqual(ctx.exception.path, "dietaryRestrictions")
        self.assertIn("dietaryRestrictions", str(ctx.exception))

    def test_restriction_tags_are_joined(self):
        req = validate(MealPlanRequest, {"dietaryRestrictions": ["vegan", " gluten-free ", ""]})
        self.assertEqual(req.dietary_restrictions, "vegan, gluten-free")


    def test_blank_restrictions_are_missing(self):
        for value in ([], ["  ", ""], "   "):
            with self.subTest(value=value):
                with self.assertRaises(ContractValidationError) as ctx:
                    validate(MealPlanRequest, {"dietaryRestrictions": value})
                self.assertEqual(ctx.exception.path, "dietaryRestrictions")

    def test_nested_profile_errors(self):
        payload = copy.deepcopy(SAMPLE_REQUEST)
        payload["userProfile"]["age"] = "34"
        with self.assertRaises(ContractValidationError) as ctx:
            validate(MealPlanRequest, payload)
        self.assertEqual(ctx.exception.path, "userProfile.age")

        payload["userProfile"]["age"] = 34
        payload["userProfile"]["activityLevel"] = "Couch Potato"
        with self.assertRaises(ContractValidationError) as ctx:
            validate(MealPlanRequest, payload)
        self.assertEqual(ctx.exception.path, "userProfile.activityLevel")

    def test_not_a_mapping(self):
        with self.assertRaises(ContractValidationError):
            validate(MealPlanRequest, None)


class TestUserProfileContract(unittest.TestCase):

    def test_age_must_be_positive(self):
        for age in (0, -3):
            with self.subTest(age=age):
                with self.assertRaises(ContractValidationError) as ctx:
                    validate(UserProfile, dict(SAMPLE_PROFILE, age=age))
                self.assertEqual(ctx.exception.path, "age")

    def test_to_dict_uses_wire_names_and_skips_unset(self):
        profile = validate(UserProfile, {"age": 50, "gender": "Male", "activityLevel": "Sedentary"})
        self.assertEqual(profile.to_dict(), {"age": 50, "gender": "Male", "activityLevel": "Sedentary"})

    def test_accepts_attribute_names(self):
        profile = UserProfile(age=20, gender="Female", activity_level="Very Active", health_goals=[" ", "Muscle Gain"])
        self.assertEqual(profile.health_goals, ["Muscle Gain"])

    def test_activity_levels_match_constants(self):
        self.assertEqual(get_args(ActivityLevel), ACTIVITY_LEVELS)


class TestReportContracts(unittest.TestCase):

    def test_full_report(self):
        report = validate(MealPlanReport, sample_report())
        self.assertEqual([d.day for d in report.meal_plan][0], "Monday")
        self.assertEqual(len(report.meal_plan), 7)
        self.assertEqual(report.to_dict(), sample_report())

    def test_fewer_than_seven_days_is_accepted(self):
        report = validate(MealPlanReport, sample_report(days=3))
        self.assertEqual(len(report.meal_plan), 3)

    def test_negative_totals_rejected(self):
        payload = sample_report(days=1)
        payload["mealPlan"][0]["totals"]["fat"] = -1
        with self.assertRaises(ContractValidationError) as ctx:
            validate(MealPlanReport, payload)
        self.assertEqual(ctx.exception.path, "mealPlan.0.totals.fat")

    def test_string_number_rejected(self):
        payload = sample_report(days=1)
        payload["mealPlan"][0]["meals"][0]["calories"] = "400 kcal"
        with self.assertRaises(ContractValidationError) as ctx:
            validate(MealPlanReport, payload)
        self.assertTrue(ctx.exception.path.startswith("mealPlan.0.meals.0.calories"))

    def test_shopping_request_requires_plan(self):
        with self.assertRaises(ContractValidationError) as ctx:
            validate(ShoppingListRequest, {"mealPlan": {"title": "x", "summary": "y", "nutritionalTargets": "z"}})
        self.assertEqual(ctx.exception.path, "mealPlan.mealPlan")

    def test_shopping_links(self):
        shopping = validate(ShoppingList, SAMPLE_SHOPPING_LIST)
        self.assertIsNone(shopping.shopping_list[0].items[0].link)
        bad = copy.deepcopy(SAMPLE_SHOPPING_LIST)
        bad["shoppingList"][0]["items"][0]["link"] = "not a url"
        with self.assertRaises(ContractValidationError) as ctx:
            validate(ShoppingList, bad)
        self.assertEqual(ctx.exception.path, "shoppingList.0.items.0.link")

    def test_output_schema_uses_wire_names(self):
        schema = output_json_schema(MealPlanReport)
        self.assertIn("mealPlan", schema["properties"])
        self.assertIn("nutritionalTargets", schema["required"])


if __name__ == '__main__':
    unittest.main()
