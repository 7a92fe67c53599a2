import json
from unittest.mock import Mock

import pytest
import requests

from app.deps import get_extractor
from app.main import app
from app.services.recipe_import import RecipeExtractor

RECIPE_HTML = (
    '<script type="application/ld+json">'
    + json.dumps({
        "@context": "https://schema.org",
        "@graph": [{
            "@type": "Recipe",
            "name": "Black Bean Tacos",
            "recipeCuisine": "Mexican",
            "prepTime": "PT10M",
            "cookTime": "PT15M",
            "recipeYield": ["4"],
            "recipeIngredient": ["1 can black beans, drained", "8 corn tortillas"],
            "recipeInstructions": [{"@type": "HowToStep", "text": "Warm beans."}],
        }],
    })
    + "</script>"
)


@pytest.fixture
def fake_session():
    session = Mock()
    session.get.return_value = Mock(status_code=200, text=RECIPE_HTML)
    app.dependency_overrides[get_extractor] = lambda: RecipeExtractor(session=session)
    yield session
    app.dependency_overrides.pop(get_extractor, None)


def test_parse_returns_recipe_preview(client, fake_session):
    res = client.post("/api/recipes/parse", json={"url": "https://example.com/tacos"})

    assert res.status_code == 200
    recipe = res.json()["recipe"]
    assert recipe["name"] == "Black Bean Tacos"
    assert recipe["cuisine_type"] == "Mexican"
    assert recipe["difficulty"] == "Easy"
    assert recipe["prep_time_minutes"] == 10
    assert recipe["cook_time_minutes"] == 15
    assert recipe["servings"] == 4
    assert recipe["instructions"] == "Warm beans."
    assert recipe["ingredients"][0] == {
        "quantity": "1", "unit": "can", "name": "black beans", "notes": "drained",
    }


def test_parse_does_not_save(client, fake_session):
    client.post("/api/recipes/parse", json={"url": "https://example.com/tacos"})
    assert client.get("/api/recipes").json() == []


def test_parse_invalid_url(client, fake_session):
    res = client.post("/api/recipes/parse", json={"url": "javascript:alert(1)"})
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid URL"}
    fake_session.get.assert_not_called()


def test_parse_missing_url(client, fake_session):
    res = client.post("/api/recipes/parse", json={})
    assert res.status_code == 400
    assert "error" in res.json()


def test_parse_non_json_body(client, fake_session):
    res = client.post("/api/recipes/parse", content=b"url=https://example.com", headers={"Content-Type": "text/plain"})
    assert res.status_code == 400


def test_parse_no_structured_data(client, fake_session):
    fake_session.get.return_value = Mock(status_code=200, text="<html><p>Just a blog</p></html>")
    res = client.post("/api/recipes/parse", json={"url": "https://example.com/blog"})
    assert res.status_code == 422
    assert res.json()["error"].startswith("No structured recipe data")


def test_parse_upstream_rejected(client, fake_session):
    fake_session.get.return_value = Mock(status_code=403, text="Forbidden")
    res = client.post("/api/recipes/parse", json={"url": "https://example.com/tacos"})
    assert res.status_code == 422
    assert "HTTP 403" in res.json()["error"]


def test_parse_fetch_failed(client, fake_session):
    fake_session.get.side_effect = requests.ConnectionError("connection refused")
    res = client.post("/api/recipes/parse", json={"url": "https://example.com/tacos"})
    assert res.status_code == 502
    body = res.json()
    assert body["error"] == "Failed to fetch recipe page"
    assert "connection refused" in body["detail"]


def test_parse_wrong_method(client):
    res = client.get("/api/recipes/parse")
    assert res.status_code == 405
    assert res.json() == {"error": "Method not allowed"}
