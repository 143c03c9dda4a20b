"""Dashboard navigation state and its transitions.

``step`` is the only way the state changes once the initial load is done. It
never touches a terminal, so navigation can be exercised directly in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Dict, Optional, Tuple

from core.aggregate import top_services_across_months
from core.config import DEFAULT_CONFIG, DashboardConfig
from core.models import CostSummary


class Tab(IntEnum):
    CURRENT_MONTH = 0
    PREVIOUS_MONTH = 1
    TREND = 2


class NavEvent(Enum):
    QUIT = "quit"
    NEXT_TAB = "next_tab"
    PREV_TAB = "prev_tab"
    ROW_DOWN = "row_down"
    ROW_UP = "row_up"
    TOP = "top"
    BOTTOM = "bottom"


# Key names as Textual reports them.
KEY_BINDINGS: Dict[NavEvent, Tuple[str, ...]] = {
    NavEvent.QUIT: ("q", "escape"),
    NavEvent.NEXT_TAB: ("tab", "right"),
    NavEvent.PREV_TAB: ("shift+tab", "left"),
    NavEvent.ROW_DOWN: ("down", "j"),
    NavEvent.ROW_UP: ("up", "k"),
    NavEvent.TOP: ("home", "g"),
    NavEvent.BOTTOM: ("end", "G"),
}


@dataclass(frozen=True)
class DashboardState:
    selected_tab: Tab = Tab.CURRENT_MONTH
    selected_row: int = 0
    current: Optional[CostSummary] = None
    previous: Optional[CostSummary] = None
    trend: Tuple[CostSummary, ...] = ()
    error: Optional[str] = None
    loading: bool = True
    quit_requested: bool = False


def visible_rows(state: DashboardState, config: DashboardConfig = DEFAULT_CONFIG) -> int:
    if state.selected_tab == Tab.CURRENT_MONTH:
        return len(state.current.breakdown) if state.current is not None else 0
    if state.selected_tab == Tab.PREVIOUS_MONTH:
        return len(state.previous.breakdown) if state.previous is not None else 0
    return len(top_services_across_months(state.trend, config.top_n))


def step(
    state: DashboardState,
    event: Optional[NavEvent],
    config: DashboardConfig = DEFAULT_CONFIG,
) -> DashboardState:
    """Apply one navigation event and return the resulting state.

    ``None`` stands for an unrecognized key and leaves the state as it is.
    Row moves are clamped against the active tab's current row count; a row
    left out of range by a data change is only corrected by the next move.
    """
    tab_count = len(Tab)
    if event is NavEvent.QUIT:
        return replace(state, quit_requested=True)
    if event is NavEvent.NEXT_TAB:
        return replace(state, selected_tab=Tab((state.selected_tab + 1) % tab_count), selected_row=0)
    if event is NavEvent.PREV_TAB:
        return replace(state, selected_tab=Tab((state.selected_tab + tab_count - 1) % tab_count), selected_row=0)
    if event is NavEvent.ROW_DOWN:
        if state.selected_row < visible_rows(state, config) - 1:
            return replace(state, selected_row=state.selected_row + 1)
        return state
    if event is NavEvent.ROW_UP:
        if state.selected_row > 0:
            return replace(state, selected_row=state.selected_row - 1)
        return state
    if event is NavEvent.TOP:
        return replace(state, selected_row=0)
    if event is NavEvent.BOTTOM:
        return replace(state, selected_row=max(visible_rows(state, config) - 1, 0))
    return state
