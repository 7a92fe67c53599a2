"""Failure taxonomy for recipe import.

Every error carries the HTTP status the API answers with and a message that is
safe to show to the person who pasted the URL.
"""

from typing import Optional


class RecipeImportError(Exception):
    status_code: int = 422
    default_message: str = "Recipe import failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(RecipeImportError):
    """Malformed or non-HTTP(S) URL. Rejected before any network call."""
    status_code = 400
    default_message = "Invalid URL"


class FetchFailed(RecipeImportError):
    """Network, transport or timeout failure. The caller may retry."""
    status_code = 502
    default_message = "Failed to fetch recipe page"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.detail = detail


class UpstreamRejected(RecipeImportError):
    """The recipe site answered with a non-2xx status."""
    status_code = 422

    def __init__(self, upstream_status: int):
        self.upstream_status = upstream_status
        super().__init__(
            f"Could not fetch page (HTTP {upstream_status}). The site may block automated access."
        )


class NoStructuredData(RecipeImportError):
    """The page has no schema.org Recipe JSON-LD."""
    status_code = 422
    default_message = (
        "No structured recipe data found on this page. "
        "Try AllRecipes, Food Network, Serious Eats, or BBC Good Food."
    )
