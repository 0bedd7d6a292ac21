"""Smoke tests for MultiContextApp table rows.

These run the Textual event loop with a mocked controller and check that
row keys route row actions back to the owning context.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from textual.widgets import DataTable

from kubemc.app import DescribeScreen, MultiContextApp
from kubemc.models.core.context_object import ContextObject


def _pod(name: str, namespace: str = "default") -> dict:
    return {"kind": "Pod", "metadata": {"name": name, "namespace": namespace}}


def _node(name: str) -> dict:
    return {"kind": "Node", "metadata": {"name": name}}


def _controller(contexts: list[str], objects: list[ContextObject]) -> MagicMock:
    controller = MagicMock()
    controller.target_contexts.return_value = contexts
    controller.list_across_contexts = AsyncMock(return_value=objects)
    controller.describe = AsyncMock(return_value="Name: p1")
    return controller


async def _loaded(app: MultiContextApp) -> DataTable:
    await app.workers.wait_for_complete()
    return app.query_one("#resources", DataTable)


class TestMultiContextRows:
    """Rows keyed by composite id when several contexts are targeted."""

    @pytest.fixture
    def app(self) -> MultiContextApp:
        objects = [
            ContextObject("a", _pod("p1")),
            ContextObject("b", _pod("p1")),
            ContextObject("b", _node("n1")),
        ]
        return MultiContextApp(_controller(["a", "b"], objects), supervise=False)

    @pytest.mark.asyncio
    async def test_rows_keyed_by_composite_id(self, app: MultiContextApp) -> None:
        async with app.run_test() as pilot:
            table = await _loaded(app)
            await pilot.pause()
            assert [key.value for key in table.rows] == [
                "a@@default/p1",
                "b@@default/p1",
                "b@@n1",
            ]
            assert app.sub_title == "pods: 3 object(s) across 2 context(s)"

    @pytest.mark.asyncio
    async def test_selected_row_follows_cursor(self, app: MultiContextApp) -> None:
        async with app.run_test() as pilot:
            table = await _loaded(app)
            await pilot.pause()
            assert app.selected_row_id() == "a@@default/p1"
            table.move_cursor(row=1)
            await pilot.pause()
            assert app.selected_row_id() == "b@@default/p1"

    @pytest.mark.asyncio
    async def test_describe_routes_selected_row(self, app: MultiContextApp) -> None:
        async with app.run_test() as pilot:
            table = await _loaded(app)
            table.move_cursor(row=1)
            await pilot.pause()
            app.action_describe()
            await app.workers.wait_for_complete()
            await pilot.pause()
            app.controller.describe.assert_awaited_once_with("b@@default/p1", "pods")
            assert isinstance(app.screen, DescribeScreen)


class TestSingleContextRows:
    """Rows keyed by bare resource path when one context is targeted."""

    @pytest.fixture
    def app(self) -> MultiContextApp:
        objects = [ContextObject("a", _pod("p1")), ContextObject("a", _node("n1"))]
        return MultiContextApp(_controller(["a"], objects), supervise=False)

    @pytest.mark.asyncio
    async def test_rows_keyed_by_path(self, app: MultiContextApp) -> None:
        async with app.run_test() as pilot:
            table = await _loaded(app)
            await pilot.pause()
            assert [key.value for key in table.rows] == ["default/p1", "n1"]
            assert app.selected_row_id() == "default/p1"

    @pytest.mark.asyncio
    async def test_empty_table_has_no_selection(self) -> None:
        app = MultiContextApp(_controller(["a"], []), supervise=False)
        async with app.run_test() as pilot:
            await _loaded(app)
            await pilot.pause()
            assert app.selected_row_id() is None
