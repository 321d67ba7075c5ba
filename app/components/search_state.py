"""Search UI state for the Q&A forum.

Holds the filter selections, loading status and result list of the search
page. Filter edits only mutate state; queries run when a search is requested
explicitly, or once on mount when the page URL carries a tag.

Usage:
    machine = SearchStateMachine(fetch=client.search_questions)
    await machine.mount({"tag": ["memory"]})   # searches immediately
    machine.set_keyword("paging")
    await machine.search()
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Union

from config.constants import (
    PARAM_TAG,
    PARAM_KEYWORD,
    PARAM_IS_RESOLVED,
    LIST_SEPARATOR,
    SEARCH_ERROR_DISPLAY,
    parse_resolved,
    format_resolved,
)
from config.logging_config import get_logger

logger = get_logger("ui.search")

QueryParams = Mapping[str, Union[str, Iterable[str]]]


class SearchStatus(str, Enum):
    """Lifecycle of the search page."""
    IDLE = "idle"  # no search executed yet
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class ControlsLockedError(RuntimeError):
    """A filter edit was attempted while a search is in flight."""


def _param_values(params: QueryParams, name: str) -> List[str]:
    value = params.get(name)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


@dataclass
class FilterState:
    """Current filter selections of the search page."""

    keyword: str = ""
    selected_tags: set = field(default_factory=set)
    resolved: Optional[bool] = None  # None = unset, both states shown

    @property
    def is_empty(self) -> bool:
        """Check if no filter is active (search returns everything)."""
        return not self.keyword.strip() and not self.selected_tags and self.resolved is None

    @property
    def active_filter_count(self) -> int:
        """Count of active filters."""
        count = 0
        if self.keyword.strip():
            count += 1
        if self.selected_tags:
            count += 1
        if self.resolved is not None:
            count += 1
        return count

    def copy(self) -> "FilterState":
        """Create a copy of this filter state."""
        return FilterState(
            keyword=self.keyword,
            selected_tags=set(self.selected_tags),
            resolved=self.resolved,
        )

    def to_query_params(self) -> Dict[str, str]:
        """
        Convert filter state to query parameters for the search endpoint.

        Inactive filters are omitted; tags are comma-joined in name order.
        """
        params = {}

        if self.selected_tags:
            params[PARAM_TAG] = LIST_SEPARATOR.join(sorted(self.selected_tags))
        keyword = self.keyword.strip()
        if keyword:
            params[PARAM_KEYWORD] = keyword
        resolved = format_resolved(self.resolved)
        if resolved is not None:
            params[PARAM_IS_RESOLVED] = resolved

        return params

    @classmethod
    def from_query_params(cls, params: QueryParams) -> "FilterState":
        """
        Create filter state from URL query parameters.

        The tag parameter may be repeated and each value may itself be
        comma-separated.
        """
        tags = set()
        for value in _param_values(params, PARAM_TAG):
            tags.update(name.strip() for name in value.split(LIST_SEPARATOR) if name.strip())

        keywords = _param_values(params, PARAM_KEYWORD)
        resolved = _param_values(params, PARAM_IS_RESOLVED)

        return cls(
            keyword=keywords[-1] if keywords else "",
            selected_tags=tags,
            resolved=parse_resolved(resolved[-1]) if resolved else None,
        )

    def get_summary(self) -> str:
        """Get a human-readable summary of active filters."""
        parts = []

        if self.keyword.strip():
            parts.append(f"キーワード: {self.keyword.strip()}")
        if self.selected_tags:
            parts.append(f"タグ: {', '.join(sorted(self.selected_tags))}")
        if self.resolved is not None:
            parts.append("解決済" if self.resolved else "未解決")

        return " | ".join(parts) if parts else "すべての質問"


class SearchStateMachine:
    """Search page state: filters, status and results.

    The fetch callable performs the network round trip for a FilterState
    snapshot. Any exception it raises (or a timeout) moves the machine to
    ERROR and discards the previous results.

    At most one search is expected in flight because controls report
    disabled while LOADING. Overlapping searches started by calling
    search() directly are not sequenced; the last one to finish wins.
    """

    def __init__(
        self,
        fetch: Callable[[FilterState], Awaitable[list]],
        timeout: Optional[float] = None,
        filters: Optional[FilterState] = None,
    ):
        self._fetch = fetch
        self.timeout = timeout
        self.filters = filters or FilterState()
        self.status = SearchStatus.IDLE
        self.results: list = []
        self.error_message: Optional[str] = None
        self._pending: Optional[FilterState] = None

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    @property
    def controls_disabled(self) -> bool:
        """Keyword box, tag selector, resolved radio and search button."""
        return self.status is SearchStatus.LOADING

    @property
    def has_results(self) -> bool:
        return self.status is SearchStatus.LOADED and bool(self.results)

    # -------------------------------------------------------------------------
    # Filter edits (never trigger a query)
    # -------------------------------------------------------------------------

    def _check_editable(self) -> None:
        if self.controls_disabled:
            raise ControlsLockedError("Filters cannot change while a search is loading")

    def set_keyword(self, keyword: str) -> None:
        self._check_editable()
        self.filters.keyword = keyword

    def toggle_tag(self, name: str) -> None:
        self._check_editable()
        if name in self.filters.selected_tags:
            self.filters.selected_tags.discard(name)
        else:
            self.filters.selected_tags.add(name)

    def set_tags(self, names: Iterable[str]) -> None:
        self._check_editable()
        self.filters.selected_tags = set(names)

    def set_resolved(self, resolved: Optional[bool]) -> None:
        self._check_editable()
        self.filters.resolved = resolved

    # -------------------------------------------------------------------------
    # Searching
    # -------------------------------------------------------------------------

    def seed_from_query_params(self, params: QueryParams) -> bool:
        """Derive the initial state from URL parameters.

        Returns:
            True if the URL carried a tag and a search was requested.
        """
        self.filters = FilterState.from_query_params(params)
        if not self.filters.selected_tags:
            return False

        self.request_search()
        return True

    def request_search(self) -> FilterState:
        """Enter LOADING and snapshot the filters to query with."""
        self.status = SearchStatus.LOADING
        self.error_message = None
        self._pending = self.filters.copy()
        return self._pending

    async def run_pending(self) -> None:
        """Execute the search requested by request_search()."""
        snapshot = self._pending or self.filters.copy()
        self._pending = None
        await self._execute(snapshot)

    async def search(self) -> None:
        """Run a search with the current filters."""
        snapshot = self.request_search()
        self._pending = None
        await self._execute(snapshot)

    async def mount(self, params: QueryParams) -> None:
        """Initial page load: search immediately if the URL names a tag."""
        if self.seed_from_query_params(params):
            await self.run_pending()

    async def _execute(self, snapshot: FilterState) -> None:
        try:
            if self.timeout is not None:
                results = await asyncio.wait_for(self._fetch(snapshot), self.timeout)
            else:
                results = await self._fetch(snapshot)
        except asyncio.TimeoutError:
            logger.warning(f"Search timed out after {self.timeout}s ({snapshot.get_summary()})")
            self._fail()
        except Exception:
            logger.exception(f"Search failed ({snapshot.get_summary()})")
            self._fail()
        else:
            self.results = list(results)
            self.status = SearchStatus.LOADED
            logger.info(f"Search loaded {len(self.results)} questions ({snapshot.get_summary()})")

    def _fail(self) -> None:
        self.results = []
        self.error_message = SEARCH_ERROR_DISPLAY
        self.status = SearchStatus.ERROR
