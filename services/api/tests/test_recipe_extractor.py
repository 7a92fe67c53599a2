import json
from unittest.mock import Mock

import pytest
import requests

from app.core.errors import FetchFailed, InvalidInput, NoStructuredData, UpstreamRejected
from app.services.recipe_import import RecipeExtractor, validate_url

RECIPE_HTML = (
    '<html><head><script type="application/ld+json">'
    + json.dumps({
        "@type": "Recipe",
        "name": "Lemon Pasta",
        "recipeYield": "4 servings",
        "cookTime": "PT20M",
        "recipeIngredient": ["8 oz spaghetti", "1 lemon, zested"],
    })
    + "</script></head><body></body></html>"
)


def _session(status_code=200, text=RECIPE_HTML):
    session = Mock()
    session.get.return_value = Mock(status_code=status_code, text=text)
    return session


@pytest.mark.parametrize("url", [None, "", "not a url", "ftp://example.com/r", "http://", "/recipes/1"])
def test_invalid_urls_rejected_before_fetch(url):
    session = _session()
    extractor = RecipeExtractor(session=session)

    with pytest.raises(InvalidInput):
        extractor.extract(url)
    session.get.assert_not_called()


def test_validate_url_trims():
    assert validate_url("  https://example.com/r  ") == "https://example.com/r"


def test_extract_success_sends_browser_headers():
    session = _session()
    extractor = RecipeExtractor(session=session, timeout=5, user_agent="PantryPlanTest/1.0")

    recipe = extractor.extract("https://example.com/lemon-pasta")

    assert recipe.name == "Lemon Pasta"
    assert recipe.servings == 4
    assert recipe.cook_time_minutes == 20
    assert [i.name for i in recipe.ingredients] == ["spaghetti", "lemon"]

    _, kwargs = session.get.call_args
    assert kwargs["headers"]["User-Agent"] == "PantryPlanTest/1.0"
    assert kwargs["headers"]["Accept-Language"] == "en-US,en;q=0.9"
    assert kwargs["timeout"] == 5
    assert kwargs["allow_redirects"] is True


def test_timeout_is_fetch_failed():
    session = Mock()
    session.get.side_effect = requests.Timeout("read timed out")
    extractor = RecipeExtractor(session=session)

    with pytest.raises(FetchFailed) as exc:
        extractor.extract("https://example.com/slow")
    assert exc.value.status_code == 502
    assert "timed out" in exc.value.detail
    assert session.get.call_count == 1


@pytest.mark.parametrize("status", [403, 404, 500, 301])
def test_non_2xx_is_upstream_rejected(status):
    extractor = RecipeExtractor(session=_session(status_code=status))

    with pytest.raises(UpstreamRejected) as exc:
        extractor.extract("https://example.com/blocked")
    assert exc.value.upstream_status == status
    assert f"HTTP {status}" in exc.value.message


def test_page_without_recipe():
    extractor = RecipeExtractor(session=_session(text="<html><body>No data</body></html>"))
    with pytest.raises(NoStructuredData):
        extractor.extract("https://example.com/blog")
