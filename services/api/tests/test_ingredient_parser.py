import pytest

from app.parsing import parse_ingredient_line, parse_quantity


def test_quantity_unit_name_and_notes():
    assert parse_ingredient_line("2 cups flour, sifted") == {
        "quantity": "2", "unit": "cups", "name": "flour", "notes": "sifted",
    }


def test_fraction_quantity_kept_verbatim():
    assert parse_ingredient_line("1/2 tsp salt") == {
        "quantity": "1/2", "unit": "tsp", "name": "salt", "notes": "",
    }


def test_unknown_word_stays_in_name():
    assert parse_ingredient_line("3 large eggs") == {
        "quantity": "3", "unit": "", "name": "large eggs", "notes": "",
    }


def test_line_without_quantity_is_all_name():
    assert parse_ingredient_line("Salt to taste") == {
        "quantity": "", "unit": "", "name": "Salt to taste", "notes": "",
    }


def test_unicode_fraction_and_mixed_number():
    result = parse_ingredient_line("1 ½ cups milk")
    assert result["quantity"] == "1 ½"
    assert result["unit"] == "cups"
    assert result["name"] == "milk"


def test_parenthetical_becomes_notes():
    result = parse_ingredient_line("1 can tomatoes (14 oz)")
    assert result["unit"] == "can"
    assert result["name"] == "tomatoes"
    assert result["notes"] == "14 oz"


def test_unit_with_trailing_period():
    result = parse_ingredient_line("2 Tbsp. olive oil")
    assert result["unit"] == "Tbsp"
    assert result["name"] == "olive oil"


def test_html_is_stripped_first():
    result = parse_ingredient_line("<b>2</b> cloves garlic, minced")
    assert result == {"quantity": "2", "unit": "cloves", "name": "garlic", "notes": "minced"}


def test_range_quantity():
    result = parse_ingredient_line("2-3 stalks celery")
    assert result["quantity"] == "2-3"
    assert result["unit"] == "stalks"
    assert result["name"] == "celery"


def test_empty_name_falls_back_to_line():
    result = parse_ingredient_line("2 cups")
    assert result["quantity"] == "2"
    assert result["unit"] == "cups"
    assert result["name"] == "2 cups"


@pytest.mark.parametrize("text,expected", [
    ("2", 2.0),
    ("1/2", 0.5),
    ("1 1/2", 1.5),
    ("½", 0.5),
    ("1½", 1.5),
    ("1 ½", 1.5),
    ("0.25", 0.25),
    ("2-3", 2.0),
    ("", 0.0),
    ("a pinch", 0.0),
    ("1/0", 0.0),
])
def test_parse_quantity(text, expected):
    assert parse_quantity(text) == pytest.approx(expected)
