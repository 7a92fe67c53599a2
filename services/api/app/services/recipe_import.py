"""URL -> ParsedRecipe extraction.

Validates the URL, fetches the page once (no retries) and hands the HTML to a
RecipeParser. Every failure surfaces as one of the RecipeImportError types.
"""

import logging
from typing import Optional
from urllib.parse import urlsplit

import requests

from ..core.errors import FetchFailed, InvalidInput, UpstreamRejected
from ..parsing import JsonLdRecipeParser, ParsedRecipe, RecipeParser
from ..settings import settings

logger = logging.getLogger("pantryplan.recipe_import")


def validate_url(url) -> str:
    if not url or not isinstance(url, str):
        raise InvalidInput("URL is required")
    url = url.strip()
    try:
        parts = urlsplit(url)
    except ValueError:
        raise InvalidInput()
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise InvalidInput()
    return url


class RecipeExtractor:
    def __init__(
        self,
        session: Optional[requests.Session] = None,
        parser: Optional[RecipeParser] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        self.session = session or requests.Session()
        self.parser = parser or JsonLdRecipeParser()
        self.timeout = timeout if timeout is not None else settings.fetch_timeout_sec
        self.headers = {
            "User-Agent": user_agent or settings.fetch_user_agent,
            "Accept": "text/html,application/xhtml+xml",
            "Accept-Language": "en-US,en;q=0.9",
        }

    def fetch(self, url: str) -> str:
        try:
            resp = self.session.get(
                url, headers=self.headers, timeout=self.timeout, allow_redirects=True
            )
        except requests.RequestException as e:
            logger.warning("Fetch failed for %s: %s", url, e)
            raise FetchFailed(detail=str(e)) from e

        if not 200 <= resp.status_code < 300:
            logger.info("Upstream rejected %s with HTTP %s", url, resp.status_code)
            raise UpstreamRejected(resp.status_code)
        return resp.text

    def extract_html(self, html: str) -> ParsedRecipe:
        return self.parser.parse(html)

    def extract(self, url: str) -> ParsedRecipe:
        url = validate_url(url)
        html = self.fetch(url)
        recipe = self.extract_html(html)
        logger.info(
            "Extracted recipe %r from %s (%d ingredients)",
            recipe.name, url, len(recipe.ingredients),
        )
        return recipe
