import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.models import Ingredient, Recipe, RecipeIngredient
from app.schemas import RecipeCreate
from app.services.ingestion import IngestionService


def _payload(**overrides):
    data = {
        "name": "Chicken Curry",
        "cuisine_type": "Indian",
        "prep_time_minutes": 15,
        "cook_time_minutes": 40,
        "servings": 4,
        "instructions": "Brown chicken.\n\nSimmer in sauce.",
        "source_url": "https://example.com/curry",
        "ingredients": [
            {"name": "chicken thighs", "quantity": "1 1/2", "unit": "lb"},
            {"name": "onion", "quantity": "1", "notes": "diced"},
            {"name": "coconut milk", "quantity": "1", "unit": "can"},
        ],
    }
    data.update(overrides)
    return data


def test_create_recipe(client):
    res = client.post("/api/recipes", json=_payload())
    assert res.status_code == 201

    data = res.json()
    assert data["name"] == "Chicken Curry"
    assert data["difficulty"] == "Easy"
    assert data["source_url"] == "https://example.com/curry"
    by_name = {i["name"]: i for i in data["ingredients"]}
    assert by_name["chicken thighs"]["quantity"] == 1.5
    assert by_name["chicken thighs"]["unit"] == "lb"
    assert by_name["onion"]["notes"] == "diced"
    assert by_name["onion"]["store_section"] == "other"


def test_new_ingredients_get_catalog_defaults(client, db_session):
    client.post("/api/recipes", json=_payload())

    onion = db_session.query(Ingredient).filter(Ingredient.name == "onion").one()
    assert onion.category == "pantry"
    assert onion.storage_location == "pantry"
    assert onion.shelf_life_type == "pantry_months"
    assert onion.shelf_life_value == 12
    assert onion.purchase_frequency == "weekly"
    assert onion.store_section == "other"


def test_existing_ingredient_is_reused(client, db_session):
    client.post("/api/recipes", json=_payload())
    client.post("/api/recipes", json=_payload(name="Onion Soup", ingredients=[{"name": "onion", "quantity": "4"}]))

    assert db_session.query(Ingredient).filter(Ingredient.name == "onion").count() == 1
    assert db_session.query(RecipeIngredient).count() == 4


def test_duplicate_and_blank_lines(client):
    res = client.post("/api/recipes", json=_payload(ingredients=[
        {"name": "garlic", "quantity": "2", "unit": "cloves"},
        {"name": "garlic", "quantity": "3", "unit": "cloves"},
        {"name": "   "},
    ]))
    assert res.status_code == 201
    ingredients = res.json()["ingredients"]
    assert len(ingredients) == 1
    assert ingredients[0]["quantity"] == 2


def test_unparseable_quantity_is_zero(client):
    res = client.post("/api/recipes", json=_payload(ingredients=[{"name": "salt", "quantity": "to taste"}]))
    assert res.json()["ingredients"][0]["quantity"] == 0


def test_blank_name_rejected(client):
    res = client.post("/api/recipes", json=_payload(name="   "))
    assert res.status_code == 400


def test_list_get_and_delete(client):
    created = client.post("/api/recipes", json=_payload()).json()
    client.post("/api/recipes", json=_payload(name="Apple Crumble", ingredients=[]))

    listing = client.get("/api/recipes").json()
    assert [r["name"] for r in listing] == ["Apple Crumble", "Chicken Curry"]
    assert [r["name"] for r in client.get("/api/recipes", params={"search": "curry"}).json()] == ["Chicken Curry"]

    fetched = client.get(f"/api/recipes/{created['id']}")
    assert fetched.status_code == 200
    assert len(fetched.json()["ingredients"]) == 3

    assert client.delete(f"/api/recipes/{created['id']}").status_code == 204
    assert client.get(f"/api/recipes/{created['id']}").status_code == 404


def test_get_unknown_recipe(client):
    assert client.get("/api/recipes/does-not-exist").status_code == 404


def test_save_rolls_back_on_failure(db_session, monkeypatch):
    service = IngestionService(db_session)

    def broken_commit():
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(db_session, "commit", broken_commit)

    with pytest.raises(SQLAlchemyError):
        service.save_recipe(RecipeCreate(**_payload()))

    monkeypatch.undo()
    assert db_session.query(Recipe).count() == 0
    assert db_session.query(Ingredient).count() == 0
    assert db_session.query(RecipeIngredient).count() == 0
