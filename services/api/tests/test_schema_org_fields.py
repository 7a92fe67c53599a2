from app.parsing import (
    map_schema_recipe,
    parse_cuisine,
    parse_duration,
    parse_instructions,
    parse_servings,
)


def test_parse_duration():
    assert parse_duration("PT45M") == 45
    assert parse_duration("PT1H30M") == 90
    assert parse_duration("PT2H") == 120
    assert parse_duration(None) == 0
    assert parse_duration(30) == 0
    assert parse_duration("") == 0


def test_parse_duration_ignores_date_part():
    assert parse_duration("P1DT15M") == 15


def test_parse_servings():
    assert parse_servings("4 servings") == 4
    assert parse_servings(["Serves 6-8"]) == 6
    assert parse_servings(4) == 4
    assert parse_servings(None) is None
    assert parse_servings("a few") is None
    assert parse_servings([]) is None


def test_instructions_plain_string():
    assert parse_instructions("  <p>Mix <b>well</b>.</p> ") == "Mix well."


def test_instructions_list_of_strings():
    assert parse_instructions(["Boil water. ", "Add pasta."]) == "Boil water.\n\nAdd pasta."


def test_instructions_step_objects():
    steps = [
        {"@type": "HowToStep", "text": "<span>Preheat oven.</span>"},
        {"@type": "HowToStep", "name": "Bake 20 minutes."},
        {"@type": "HowToStep"},
    ]
    assert parse_instructions(steps) == "Preheat oven.\n\nBake 20 minutes."


def test_instructions_other_shapes():
    assert parse_instructions({"text": "Stir"}) == ""
    assert parse_instructions(None) == ""
    assert parse_instructions(42) == ""


def test_parse_cuisine():
    assert parse_cuisine(["Italian", "Mediterranean"]) == "Italian"
    assert parse_cuisine("Mexican") == "Mexican"
    assert parse_cuisine(None) == ""
    assert parse_cuisine([]) == ""


def test_map_schema_recipe():
    recipe = map_schema_recipe({
        "@type": "Recipe",
        "name": "Weeknight Chili",
        "description": "<p>Hearty.</p>",
        "recipeCuisine": ["Tex-Mex"],
        "prepTime": "PT15M",
        "cookTime": "PT1H",
        "recipeYield": ["6 servings"],
        "recipeInstructions": [{"text": "Brown the beef."}, {"text": "Simmer."}],
        "recipeIngredient": ["1 lb ground beef", "1 onion, diced", "   "],
    })

    assert recipe.name == "Weeknight Chili"
    assert recipe.description == "Hearty."
    assert recipe.cuisine_type == "Tex-Mex"
    assert recipe.difficulty == "Easy"
    assert recipe.prep_time_minutes == 15
    assert recipe.cook_time_minutes == 60
    assert recipe.servings == 6
    assert recipe.instructions == "Brown the beef.\n\nSimmer."
    assert [i.name for i in recipe.ingredients] == ["ground beef", "onion"]
    assert recipe.ingredients[1].notes == "diced"


def test_map_schema_recipe_missing_fields():
    recipe = map_schema_recipe({"@type": "Recipe", "name": "Toast"})
    assert recipe.ingredients == []
    assert recipe.servings is None
    assert recipe.prep_time_minutes == 0
    assert recipe.instructions == ""
