"""School search: query building and cached fetch"""

import re
from typing import Any, Dict, Optional

from scorecard_gateway.config import settings
from scorecard_gateway.domain.exceptions import InvalidInputError
from scorecard_gateway.domain.records import NAME, SEARCH_FIELDS, STATE
from scorecard_gateway.infrastructure.cache import QueryCache
from scorecard_gateway.infrastructure.clients.scorecard import ScorecardClient

STATE_CODE_PATTERN = re.compile(r"^[A-Za-z]{2}$")
SORT_BY_NAME = f"{NAME}:asc"


def build_search_params(term: Optional[str]) -> Dict[str, str]:
    """
    Translate a search term into Scorecard filter parameters.

    - Two letters ("ga", "MD"): exact state filter, upper-cased
    - Any other text: substring match on the school name ("~" operator)
    - Empty: no filter
    """
    term = (term or "").strip()
    if not term:
        return {}
    if STATE_CODE_PATTERN.match(term):
        return {STATE: term.upper()}
    return {NAME: f"~{term}"}


def normalize_per_page(per_page: Any, default: int, maximum: int) -> int:
    """Page size from a query string value; absent means default, oversize is capped"""
    if per_page is None or (isinstance(per_page, str) and not per_page.strip()):
        return default
    if isinstance(per_page, bool):
        raise InvalidInputError(f"per_page must be a positive integer, got {per_page!r}")
    try:
        size = int(str(per_page).strip())
    except ValueError as e:
        raise InvalidInputError(f"per_page must be a positive integer, got {per_page!r}") from e
    if size <= 0:
        raise InvalidInputError(f"per_page must be a positive integer, got {per_page!r}")
    return min(size, maximum)


def cache_key(term: str, per_page: int) -> str:
    return f"schools:{term}:{per_page}"


class SchoolSearchService:
    """Search schools by name or state, ordered by name, through the query cache"""

    def __init__(
        self,
        client: ScorecardClient,
        cache: QueryCache,
        default_per_page: int | None = None,
        max_per_page: int | None = None,
    ):
        self.client = client
        self.cache = cache
        self.default_per_page = default_per_page or settings.default_per_page
        self.max_per_page = max_per_page or settings.max_per_page

    async def search(self, term: Optional[str] = None, per_page: Any = None) -> Dict[str, Any]:
        """
        Return the raw Scorecard result page for a search term.

        Raises:
            ConfigError: If no API key is configured (checked before the cache)
            InvalidInputError: If per_page is not a positive integer
            UpstreamError: If the Scorecard API fails
        """
        self.client.require_api_key()
        term = (term or "").strip()
        size = normalize_per_page(per_page, self.default_per_page, self.max_per_page)
        params = build_search_params(term)

        async def fetch() -> Dict[str, Any]:
            return await self.client.query(SEARCH_FIELDS, params, per_page=size, sort=SORT_BY_NAME)

        return await self.cache.get_or_fetch(cache_key(term, size), fetch)
