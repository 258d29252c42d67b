"""
Tests for the navigation state machine.

Tests cover:
1. Initial state
2. Drill-down by node click (Year -> Month -> Day -> select)
3. Zoom controls (set_resolution, drill_up)
4. Filter persistence across resolution changes
"""

import pytest

from memora.core.graph import GraphBuilder, NavigationState
from memora.models import ActiveFilter, FilterKind, Resolution


@pytest.fixture
def graphs(sample_records):
    builder = GraphBuilder()
    return {resolution: builder.build(sample_records, resolution) for resolution in Resolution}


class TestInitialState:
    """Tests for a freshly created navigation state."""

    def test_defaults(self):
        state = NavigationState()

        assert state.resolution == Resolution.DAY
        assert state.active_filter.kind == FilterKind.NONE
        assert state.selected_record is None


class TestNodeClick:
    """Tests for drill-down and selection."""

    def test_full_drill_path(self, graphs):
        state = NavigationState(resolution=Resolution.YEAR)

        transition = state.on_node_click(graphs[Resolution.YEAR].node("2024"))
        assert transition.previous == Resolution.YEAR
        assert transition.current == Resolution.MONTH
        assert transition.rebuild_required is True
        assert state.resolution == Resolution.MONTH

        transition = state.on_node_click(graphs[Resolution.MONTH].node("2024-02"))
        assert transition.current == Resolution.DAY
        assert transition.rebuild_required is True
        assert state.selected_record is None

        transition = state.on_node_click(graphs[Resolution.DAY].node("C"))
        assert transition.rebuild_required is False
        assert transition.selected.id == "C"
        assert state.selected_record.id == "C"
        assert state.resolution == Resolution.DAY

    def test_day_click_replaces_selection(self, graphs):
        state = NavigationState()

        state.on_node_click(graphs[Resolution.DAY].node("A"))
        state.on_node_click(graphs[Resolution.DAY].node("D"))

        assert state.selected_record.id == "D"

    def test_coarse_node_at_day_is_noop(self, graphs):
        state = NavigationState()
        state.on_node_click(graphs[Resolution.DAY].node("A"))

        transition = state.on_node_click(graphs[Resolution.MONTH].node("2024-01"))

        assert transition.rebuild_required is False
        assert state.resolution == Resolution.DAY
        assert state.selected_record.id == "A"

    def test_drill_down_clears_selection(self, graphs):
        state = NavigationState()
        state.on_node_click(graphs[Resolution.DAY].node("A"))
        state.set_resolution(Resolution.MONTH)

        state.on_node_click(graphs[Resolution.MONTH].node("2024-01"))

        assert state.resolution == Resolution.DAY
        assert state.selected_record is None

    def test_canvas_click_clears_selection(self, graphs):
        state = NavigationState()
        state.on_node_click(graphs[Resolution.DAY].node("B"))

        transition = state.on_canvas_click()

        assert state.selected_record is None
        assert transition.rebuild_required is False


class TestZoomControls:
    """Tests for direct resolution changes."""

    def test_set_resolution_jumps_any_level(self):
        state = NavigationState()

        transition = state.set_resolution(Resolution.YEAR)

        assert transition.previous == Resolution.DAY
        assert transition.current == Resolution.YEAR
        assert state.resolution == Resolution.YEAR

    def test_set_same_resolution_clears_selection(self, graphs):
        state = NavigationState()
        state.on_node_click(graphs[Resolution.DAY].node("A"))

        transition = state.set_resolution(Resolution.DAY)

        assert transition.rebuild_required is False
        assert state.selected_record is None

    def test_drill_up(self):
        state = NavigationState()

        state.drill_up()
        assert state.resolution == Resolution.MONTH
        state.drill_up()
        assert state.resolution == Resolution.YEAR
        state.drill_up()
        assert state.resolution == Resolution.YEAR


class TestFilterPersistence:
    """Tests for the active filter across navigation."""

    def test_filter_survives_resolution_changes(self, graphs):
        state = NavigationState()
        state.set_filter(ActiveFilter.mood("happy"))

        state.set_resolution(Resolution.YEAR)
        state.on_node_click(graphs[Resolution.YEAR].node("2024"))
        state.on_node_click(graphs[Resolution.MONTH].node("2024-01"))

        assert state.resolution == Resolution.DAY
        assert state.active_filter == ActiveFilter.mood("happy")

    def test_filters_replace_each_other(self):
        state = NavigationState()

        state.set_filter(ActiveFilter.mood("happy"))
        state.set_filter(ActiveFilter.tag("travel"))

        assert state.active_filter.kind == FilterKind.TAG
        assert state.active_filter.value == "travel"

    def test_clear_filter(self):
        state = NavigationState()
        state.set_filter(ActiveFilter.mood("happy"))

        state.clear_filter()

        assert state.active_filter.is_none is True

    def test_reset(self, graphs):
        state = NavigationState(resolution=Resolution.MONTH, active_filter=ActiveFilter.tag("x"))

        state.reset()

        assert state.resolution == Resolution.DAY
        assert state.active_filter.is_none is True
        assert state.selected_record is None
