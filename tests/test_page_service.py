"""
Tests for the page load lifecycle.

NotLoaded -> Loading -> (Loaded | Failed), single attempt, and results that
arrive after unmount are discarded.
"""
import asyncio

from dashboard.application.page_service import (
    DashboardPage,
    LoadState,
    campaign_page,
    device_page,
)
from dashboard.application.reporting.selectors import SortDescriptor
from dashboard.domain.errors import FetchError


def _fetch_returning(data, calls=None):
    async def _fetch():
        if calls is not None:
            calls.append(1)
        return data

    return _fetch


def _fetch_failing(message):
    async def _fetch():
        raise FetchError(message)

    return _fetch


class TestLoadLifecycle:
    def test_starts_not_loaded_and_renders_nothing(self, marketing_data):
        page = device_page(_fetch_returning(marketing_data))
        snapshot = page.render()
        assert snapshot.state is LoadState.NOT_LOADED
        assert snapshot.view is None

    def test_successful_load(self, marketing_data):
        page = device_page(_fetch_returning(marketing_data))
        asyncio.run(page.load())
        snapshot = page.render()
        assert snapshot.state is LoadState.LOADED
        assert snapshot.error is None
        assert snapshot.view.best_device == "Desktop"

    def test_state_is_loading_while_fetch_is_pending(self, marketing_data):
        observed = []

        async def _scenario():
            gate = asyncio.Event()

            async def _fetch():
                await gate.wait()
                return marketing_data

            page = device_page(_fetch)
            task = asyncio.create_task(page.load())
            await asyncio.sleep(0)
            observed.append(page.render().state)
            gate.set()
            await task
            observed.append(page.render().state)

        asyncio.run(_scenario())
        assert observed == [LoadState.LOADING, LoadState.LOADED]

    def test_failure_is_surfaced_once(self):
        page = device_page(_fetch_failing("network down"))
        asyncio.run(page.load())
        snapshot = page.render()
        assert snapshot.state is LoadState.FAILED
        assert snapshot.error == "network down"
        assert snapshot.view is None

    def test_second_load_does_not_refetch(self, marketing_data):
        calls = []
        page = device_page(_fetch_returning(marketing_data, calls))
        asyncio.run(page.load())
        asyncio.run(page.load())
        assert calls == [1]

    def test_result_after_unmount_is_discarded(self, marketing_data):
        async def _scenario():
            gate = asyncio.Event()

            async def _fetch():
                await gate.wait()
                return marketing_data

            page = device_page(_fetch)
            task = asyncio.create_task(page.load())
            await asyncio.sleep(0)
            page.unmount()
            gate.set()
            await task
            return page

        page = asyncio.run(_scenario())
        assert page.context.data is None
        assert page.context.state is LoadState.LOADING
        assert page.render().view is None

    def test_failure_after_unmount_is_discarded(self):
        page = device_page(_fetch_failing("late"))
        page.unmount()
        asyncio.run(page.load())
        assert page.context.error is None
        assert page.context.state is not LoadState.FAILED


class TestCampaignPageState:
    def test_filters_and_sort_feed_the_view(self, marketing_data):
        page = campaign_page(_fetch_returning(marketing_data))
        asyncio.run(page.load())

        page.set_name_query("SALE")
        page.toggle_type("Conversion")
        view = page.render().view
        assert [c.name for c in view.filtered] == ["Winter Sale - Search"]

        page.toggle_type("Conversion")
        page.sort_by("revenue")
        view = page.render().view
        assert view.sort == SortDescriptor("revenue", "asc")
        assert [row["name"] for row in view.table_rows] == ["Summer Sale - Stories", "Winter Sale - Search"]

    def test_type_selection_replaces_previous(self, marketing_data):
        page = campaign_page(_fetch_returning(marketing_data))
        asyncio.run(page.load())
        page.set_type_selection(["Awareness"])
        assert page.render().view.filtered_count == 1
        page.set_type_selection([])
        assert page.render().view.filtered_count == 2

    def test_pages_own_separate_context(self, marketing_data):
        fetch = _fetch_returning(marketing_data)
        first = DashboardPage("a", fetch, lambda context: context.name_query)
        second = DashboardPage("b", fetch, lambda context: context.name_query)
        asyncio.run(first.load())
        first.set_name_query("x")
        assert first.render().view == "x"
        assert second.render().view is None
