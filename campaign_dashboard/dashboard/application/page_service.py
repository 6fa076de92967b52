"""Page-scoped load lifecycle and filter/sort state for dashboard views."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Collection, Generic, TypeVar

from dashboard.application.reporting.selectors import DEFAULT_CAMPAIGN_SORT, SortDescriptor
from dashboard.application.view_service import (
    build_campaign_view,
    build_device_view,
    build_region_view,
    build_weekly_view,
)
from dashboard.domain.errors import FetchError
from dashboard.domain.models import MarketingData

logger = logging.getLogger(__name__)

V = TypeVar("V")


class LoadState(str, Enum):
    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass
class PageContext:
    """Everything one page owns between mount and unmount."""

    data: MarketingData | None = None
    state: LoadState = LoadState.NOT_LOADED
    error: str | None = None
    name_query: str = ""
    type_selection: frozenset[str] = field(default_factory=frozenset)
    sort: SortDescriptor = DEFAULT_CAMPAIGN_SORT
    mounted: bool = True


@dataclass(frozen=True)
class PageSnapshot(Generic[V]):
    state: LoadState
    error: str | None
    view: V | None


class DashboardPage(Generic[V]):
    """One dashboard page: fetches its bundle once and renders from context."""

    def __init__(
        self,
        name: str,
        fetch: Callable[[], Awaitable[MarketingData]],
        build_view: Callable[[PageContext], V],
    ) -> None:
        self.name = name
        self._fetch = fetch
        self._build_view = build_view
        self.context = PageContext()

    async def load(self) -> None:
        context = self.context
        if context.state is not LoadState.NOT_LOADED:
            return
        context.state = LoadState.LOADING
        try:
            data = await self._fetch()
        except FetchError as exc:
            if not context.mounted:
                logger.debug("Discarding fetch failure for unmounted %s page: %s", self.name, exc)
                return
            logger.error("Failed to load marketing data for %s page: %s", self.name, exc)
            context.error = str(exc) or "Failed to load data"
            context.state = LoadState.FAILED
            return

        if not context.mounted:
            logger.debug("Discarding marketing data for unmounted %s page", self.name)
            return
        context.data = data
        context.state = LoadState.LOADED
        logger.info("Loaded %d campaigns for %s page", len(data.campaigns), self.name)

    def unmount(self) -> None:
        self.context.mounted = False

    def set_name_query(self, name_query: str) -> None:
        self.context.name_query = name_query

    def set_type_selection(self, type_selection: Collection[str]) -> None:
        self.context.type_selection = frozenset(type_selection)

    def toggle_type(self, objective: str) -> None:
        selection = set(self.context.type_selection)
        if objective in selection:
            selection.remove(objective)
        else:
            selection.add(objective)
        self.context.type_selection = frozenset(selection)

    def sort_by(self, key: str) -> None:
        self.context.sort = self.context.sort.toggled(key)

    def render(self) -> PageSnapshot[V]:
        context = self.context
        view = self._build_view(context) if context.state is LoadState.LOADED else None
        return PageSnapshot(state=context.state, error=context.error, view=view)


def _loaded_data(context: PageContext) -> MarketingData:
    if context.data is None:
        raise RuntimeError("Page context has no loaded data")
    return context.data


def campaign_page(fetch: Callable[[], Awaitable[MarketingData]]) -> DashboardPage[Any]:
    return DashboardPage(
        "campaign",
        fetch,
        lambda context: build_campaign_view(
            _loaded_data(context),
            name_query=context.name_query,
            type_selection=context.type_selection,
            sort=context.sort,
        ),
    )


def device_page(fetch: Callable[[], Awaitable[MarketingData]]) -> DashboardPage[Any]:
    return DashboardPage("device", fetch, lambda context: build_device_view(_loaded_data(context)))


def region_page(fetch: Callable[[], Awaitable[MarketingData]]) -> DashboardPage[Any]:
    return DashboardPage("region", fetch, lambda context: build_region_view(_loaded_data(context)))


def weekly_page(fetch: Callable[[], Awaitable[MarketingData]]) -> DashboardPage[Any]:
    return DashboardPage("weekly", fetch, lambda context: build_weekly_view(_loaded_data(context)))
