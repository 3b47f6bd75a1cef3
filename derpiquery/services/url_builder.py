"""Search URL construction for the Derpibooru ``search.json`` endpoint.

Query text only has its spaces replaced with ``+``. Characters such as
``&``, ``=``, ``#`` or non-ASCII text are passed through untouched and will
produce a malformed URL; callers that need them must encode the query
themselves.
"""

import logging

from derpiquery.models.search import SearchSettings

logger = logging.getLogger(__name__)

DERPIBOORU_URL = "https://derpibooru.org"
SEARCH_ENDPOINT = f"{DERPIBOORU_URL}/search.json"

# Order matters: parameters are emitted in this order
USER_CONSTRAINT_PARAMS = ("faves", "upvotes", "uploads", "watched")


def _mask_key(url: str, api_key: str) -> str:
    """Hide the API key before a URL is logged."""
    if not api_key:
        return url
    return url.replace(f"&key={api_key}", "&key=***")


def build_search_url(settings: SearchSettings) -> str:
    """Build the search URL for the given settings. Never fails."""
    url = f"{SEARCH_ENDPOINT}?q={settings.query.replace(' ', '+')}"
    url += f"&page={settings.page}"
    url += f"&perpage={settings.per_page}"
    if settings.show_comments:
        url += "&comments="
    if settings.show_favorites:
        url += "&fav="
    url += f"&sf={settings.search_format.value}"
    url += f"&sd={settings.search_direction.value}"

    if settings.api_key:
        url += f"&key={settings.api_key}"
        for name in USER_CONSTRAINT_PARAMS:
            url += f"&{name}={getattr(settings, name).value}"

    if settings.score_constraint:
        url += f"&min_score={settings.min_score}"
        url += f"&max_score={settings.max_score}"

    if settings.filter_id != -1:
        url += f"&filter_id={settings.filter_id}"

    logger.debug("build_search_url: %s", _mask_key(url, settings.api_key))
    return url
