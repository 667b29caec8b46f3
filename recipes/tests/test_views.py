import json
from unittest.mock import patch

from django.test import TestCase
from django.urls import reverse

from recipes.models import Ingredient, Recipe
from recipes.services.llm import GenerationError

GENERATE_TEXT = "recipes.services.llm.generate_text"


def make_recipe(**overrides):
    fields = {
        "name": "Penne Arrabbiata",
        "cuisine": "italian",
        "tags": ["italian pasta"],
        "ingredients": [{"ingredient": "Penne", "amount": "400", "unit": "g"}],
        "instructions": ["Boil pasta.", "Make sauce."],
        "nutrition": {"calories": 480, "protein": 15, "carbs": 80, "fat": 9, "fiber": 6},
        "prep_time": 10,
        "cook_time": 20,
        "difficulty": "easy",
    }
    fields.update(overrides)
    return Recipe.objects.create(**fields)


GENERATED_RECIPE = {
    "name": "Pad Thai",
    "cuisine": "thai",
    "ingredients": [
        {"ingredient": "Rice noodles", "amount": "200", "unit": "g"},
        {"ingredient": "Shrimp", "amount": "150", "unit": "g"},
    ],
    "instructions": ["Soak noodles.", "Stir-fry everything."],
    "nutrition": {"calories": 600, "protein": 30, "carbs": 70, "fat": 20, "fiber": 3},
    "prepTime": 20,
    "cookTime": 10,
    "servings": 2,
    "difficulty": "medium",
}


class RecipeOptionsTests(TestCase):
    url = reverse("recipes:recipe_options")

    @patch(GENERATE_TEXT)
    def test_stored_match_is_projected_without_generation(self, mock_generate):
        recipe = make_recipe()
        r = self.client.get(self.url, {"cuisine": "italian", "dishType": "pasta"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), [{
            "id": recipe.id,
            "name": "Penne Arrabbiata",
            "nutrition": recipe.nutrition,
            "prepTime": 10,
            "difficulty": "easy",
        }])
        mock_generate.assert_not_called()

    @patch(GENERATE_TEXT)
    def test_miss_generates_options_and_appends_create_own(self, mock_generate):
        mock_generate.return_value = (
            'Here are some ideas:\n[{"name": "Tom Yum", "description": "Hot and sour soup"}]'
        )
        r = self.client.get(self.url, {"cuisine": "Thai"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), [
            {"name": "Tom Yum", "description": "Hot and sour soup"},
            {"name": "Create my own recipe", "description": "Customize your own dish"},
        ])
        self.assertIn("List 5 popular Thai recipes", mock_generate.call_args.args[0])
        # generated options are not saved
        self.assertEqual(Recipe.objects.count(), 0)

    @patch(GENERATE_TEXT)
    def test_unparseable_generation_returns_empty_list(self, mock_generate):
        mock_generate.return_value = "Sorry, I don't know any."
        r = self.client.get(self.url, {"dishType": "soup"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), [])

    @patch(GENERATE_TEXT)
    def test_generator_failure_returns_empty_list(self, mock_generate):
        mock_generate.side_effect = GenerationError("unreachable")
        r = self.client.get(self.url, {"cuisine": "thai"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), [])

    def test_requires_cuisine_or_dish_type(self):
        r = self.client.get(self.url)
        self.assertEqual(r.status_code, 400)
        self.assertIn("error", r.json())


class RecipeByNameTests(TestCase):
    def _get(self, name):
        return self.client.get(reverse("recipes:recipe_by_name", args=[name]))

    @patch(GENERATE_TEXT)
    def test_lookup_is_case_insensitive(self, mock_generate):
        recipe = make_recipe(name="Pad Thai", tags=["thai"])
        upper = self._get("Pad Thai").json()
        lower = self._get("pad thai").json()
        self.assertEqual(upper["id"], recipe.id)
        self.assertEqual(upper, lower)
        mock_generate.assert_not_called()

    @patch(GENERATE_TEXT)
    def test_miss_generates_defaults_and_saves(self, mock_generate):
        partial = {k: v for k, v in GENERATED_RECIPE.items() if k not in ("difficulty", "prepTime")}
        mock_generate.return_value = "```json\n" + json.dumps(partial) + "\n```"

        r = self._get("pad thai")
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual(body["name"], "Pad Thai")
        self.assertEqual(body["difficulty"], "medium")
        self.assertEqual(body["prepTime"], 15)
        self.assertEqual(body["cookTime"], 10)
        self.assertIsNotNone(body["id"])

        saved = Recipe.objects.get(pk=body["id"])
        self.assertEqual(saved.cuisine, "thai")

        # the saved record now answers both spellings without generating again
        mock_generate.reset_mock()
        self.assertEqual(self._get("PAD THAI").json()["id"], saved.id)
        mock_generate.assert_not_called()

    @patch(GENERATE_TEXT)
    def test_non_finite_numbers_in_reply_get_defaults(self, mock_generate):
        mock_generate.return_value = (
            '{"name": "Stew", "cookTime": 1e400, "servings": NaN,'
            ' "nutrition": {"calories": Infinity}}'
        )
        r = self._get("Stew")
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual(body["cookTime"], 30)
        self.assertEqual(body["servings"], 4)
        self.assertEqual(body["nutrition"]["calories"], 0)
        saved = Recipe.objects.get(pk=body["id"])
        self.assertEqual(saved.ingredients, [{"ingredient": "Unknown ingredient", "amount": "1", "unit": ""}])

    @patch(GENERATE_TEXT)
    def test_generator_unreachable_returns_static_fallback(self, mock_generate):
        mock_generate.side_effect = GenerationError("connection refused")
        r = self._get("Mystery Stew")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {
            "name": "Mystery Stew",
            "type": "complete",
            "cuisine": "any",
            "tags": [],
            "ingredients": [
                {"ingredient": "Main ingredient", "amount": "500", "unit": "g"},
                {"ingredient": "Secondary ingredient", "amount": "200", "unit": "g"},
                {"ingredient": "Seasoning", "amount": "2", "unit": "tsp"},
            ],
            "instructions": [
                "Prepare all ingredients.",
                "Cook main ingredients until done.",
                "Add seasonings and serve.",
            ],
            "nutrition": {"calories": 350, "protein": 25, "carbs": 30, "fat": 15, "fiber": 5},
            "prepTime": 15,
            "cookTime": 30,
            "servings": 4,
            "difficulty": "medium",
        })
        self.assertEqual(Recipe.objects.count(), 0)

    @patch(GENERATE_TEXT)
    def test_unparseable_generation_returns_static_fallback(self, mock_generate):
        mock_generate.return_value = "I'd rather not."
        body = self._get("Mystery Stew").json()
        self.assertEqual(body["name"], "Mystery Stew")
        self.assertEqual(body["nutrition"]["calories"], 350)

    @patch("recipes.views.Recipe.full_clean")
    @patch(GENERATE_TEXT)
    def test_failed_save_still_returns_generated_recipe(self, mock_generate, mock_clean):
        from django.core.exceptions import ValidationError

        mock_generate.return_value = json.dumps(GENERATED_RECIPE)
        mock_clean.side_effect = ValidationError({"name": "nope"})

        r = self._get("pad thai")
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertNotIn("id", body)
        self.assertEqual(body["name"], "Pad Thai")
        self.assertEqual(body["servings"], 2)
        self.assertEqual(Recipe.objects.count(), 0)


class CustomizeRecipeTests(TestCase):
    def setUp(self):
        self.recipe = make_recipe()
        self.url = reverse("recipes:customize_recipe", args=[self.recipe.id])

    def _post(self, url, payload, method="post"):
        return getattr(self.client, method)(url, data=json.dumps(payload), content_type="application/json")

    def test_empty_customizations_rejected(self):
        r = self._post(self.url, {"customizations": []})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json(), {"error": "Customizations are required"})

        r = self._post(self.url, {})
        self.assertEqual(r.status_code, 400)

    def test_unknown_recipe_is_404(self):
        url = reverse("recipes:customize_recipe", args=[self.recipe.id + 999])
        r = self._post(url, {"customizations": ["make it vegan"]})
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.json(), {"error": "Recipe not found"})

    @patch(GENERATE_TEXT)
    def test_returns_generated_output_without_saving(self, mock_generate):
        mock_generate.return_value = '{"name": "Vegan Penne Arrabbiata", "servings": "lots"}'
        r = self._post(self.url, {"customizations": ["make it vegan"]}, method="put")
        self.assertEqual(r.status_code, 200)
        # raw model output, no defaulting pass
        self.assertEqual(r.json(), {"name": "Vegan Penne Arrabbiata", "servings": "lots"})
        self.assertEqual(Recipe.objects.count(), 1)

        prompt = mock_generate.call_args.args[0]
        self.assertIn("Penne Arrabbiata", prompt)
        self.assertIn("make it vegan", prompt)

    @patch(GENERATE_TEXT)
    def test_generation_failure_is_500(self, mock_generate):
        mock_generate.side_effect = GenerationError("timeout")
        r = self._post(self.url, {"customizations": ["extra garlic"]})
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {"error": "Failed to customize recipe"})


class IngredientOptionsTests(TestCase):
    @patch(GENERATE_TEXT)
    def test_stored_category_returns_names(self, mock_generate):
        tofu = Ingredient.objects.create(name="Tofu", category="protein")
        Ingredient.objects.create(name="Rice", category="base")
        r = self.client.get(reverse("recipes:ingredient_options", args=["protein"]))
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), [{"id": tofu.id, "name": "Tofu"}])
        mock_generate.assert_not_called()

    @patch(GENERATE_TEXT)
    def test_miss_generates(self, mock_generate):
        mock_generate.return_value = '[{"name": "Lentils", "description": "Earthy legume"}]'
        r = self.client.get(reverse("recipes:ingredient_options", args=["legume"]))
        self.assertEqual(r.json(), [{"name": "Lentils", "description": "Earthy legume"}])
        self.assertIn("List 8 common legume ingredients", mock_generate.call_args.args[0])

    @patch(GENERATE_TEXT)
    def test_unparseable_generation_returns_empty_list(self, mock_generate):
        mock_generate.return_value = "no idea"
        r = self.client.get(reverse("recipes:ingredient_options", args=["legume"]))
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), [])


class IngredientRecommendationsTests(TestCase):
    url = reverse("recipes:ingredient_recommendations")

    @patch(GENERATE_TEXT)
    def test_always_generates(self, mock_generate):
        Ingredient.objects.create(name="Broccoli", category="vegetable")
        mock_generate.return_value = '[{"name": "Snap peas", "description": "Crunch"}]'
        r = self.client.get(self.url, {
            "base": "rice", "category": "vegetable", "currentIngredients": "chicken, garlic",
        })
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), [{"name": "Snap peas", "description": "Crunch"}])
        prompt = mock_generate.call_args.args[0]
        self.assertIn("Recommend 5 vegetable options that go well with rice and chicken, garlic", prompt)

    @patch(GENERATE_TEXT)
    def test_failure_returns_empty_list(self, mock_generate):
        mock_generate.side_effect = GenerationError("down")
        r = self.client.get(self.url, {"base": "rice", "category": "vegetable"})
        self.assertEqual(r.json(), [])

    def test_requires_base_and_category(self):
        r = self.client.get(self.url, {"base": "rice"})
        self.assertEqual(r.status_code, 400)


class CreateCustomRecipeTests(TestCase):
    url = reverse("recipes:create_custom_recipe")
    payload = {
        "base": "Rice",
        "protein": "Chicken",
        "vegetables": ["Broccoli", "Carrot"],
        "seasonings": ["Garlic"],
        "cookingMethod": "Stir-fry",
        "nutritionalTargets": {"calories": 600},
        "allergies": ["peanuts"],
    }

    def _post(self, payload):
        return self.client.post(self.url, data=json.dumps(payload), content_type="application/json")

    @patch(GENERATE_TEXT)
    def test_saves_tagged_recipe(self, mock_generate):
        body = {k: v for k, v in GENERATED_RECIPE.items() if k != "cuisine"}
        body["name"] = "Chicken Veggie Rice"
        mock_generate.return_value = "Enjoy!\n```json\n" + json.dumps(body) + "\n```"

        r = self._post(self.payload)
        self.assertEqual(r.status_code, 201)
        data = r.json()
        self.assertEqual(data["name"], "Chicken Veggie Rice")
        self.assertEqual(data["type"], "complete")
        self.assertEqual(
            data["tags"],
            ["custom", "rice", "chicken", "broccoli", "carrot", "garlic", "stir-fry"],
        )
        self.assertTrue(Recipe.objects.filter(pk=data["id"]).exists())

        prompt = mock_generate.call_args.args[0]
        self.assertIn("- Base: Rice", prompt)
        self.assertIn("- Vegetables: Broccoli, Carrot", prompt)
        self.assertIn('- Nutritional targets: {"calories": 600}', prompt)
        self.assertIn("- Avoid these ingredients: peanuts", prompt)

    @patch(GENERATE_TEXT)
    def test_saved_custom_recipe_is_findable_by_option_lookup(self, mock_generate):
        mock_generate.return_value = json.dumps(GENERATED_RECIPE)
        self._post(self.payload)
        r = self.client.get(reverse("recipes:recipe_options"), {"dishType": "Broccoli"})
        self.assertEqual([o["name"] for o in r.json()], ["Pad Thai"])

    @patch(GENERATE_TEXT)
    def test_non_finite_numbers_in_reply_get_defaults(self, mock_generate):
        mock_generate.return_value = '{"name": "Chicken Rice", "prepTime": 1e400, "servings": NaN}'
        r = self._post(self.payload)
        self.assertEqual(r.status_code, 201)
        data = r.json()
        self.assertEqual(data["prepTime"], 15)
        self.assertEqual(data["servings"], 4)

    @patch(GENERATE_TEXT)
    def test_unparseable_reply_is_500_with_raw_text(self, mock_generate):
        mock_generate.return_value = "A lovely stir-fry, but no JSON, sorry."
        r = self._post(self.payload)
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {
            "error": "Failed to parse recipe",
            "rawResponse": "A lovely stir-fry, but no JSON, sorry.",
        })
        self.assertEqual(Recipe.objects.count(), 0)

    @patch(GENERATE_TEXT)
    def test_generator_failure_is_500(self, mock_generate):
        mock_generate.side_effect = GenerationError("down")
        r = self._post(self.payload)
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {"error": "Failed to create custom recipe"})

    def test_missing_fields_are_400(self):
        r = self._post({"base": "Rice"})
        self.assertEqual(r.status_code, 400)
        self.assertIn("protein", r.json()["fields"])
