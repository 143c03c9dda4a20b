from __future__ import annotations

import logging
from typing import List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from core.config import DEFAULT_CONFIG, DashboardConfig
from core.errors import DashboardError
from core.state import KEY_BINDINGS, DashboardState, NavEvent, step
from ui.views import render_content, render_footer, render_header, render_tabs

logger = logging.getLogger(__name__)


def navigation_bindings() -> List[Binding]:
    # Priority bindings so tab/shift+tab never reach Textual's focus navigation.
    return [
        Binding(",".join(keys), f"navigate('{event.value}')", event.value, show=False, priority=True)
        for event, keys in KEY_BINDINGS.items()
    ]


class CostDashboardApp(App):
    """Three-tab cost dashboard; every key press goes through ``step``."""

    CSS = """
    Screen {
        background: transparent;
    }

    #header, #tabs, #footer {
        height: 3;
    }

    #content {
        height: 1fr;
    }
    """

    BINDINGS = navigation_bindings()

    def __init__(self, state: DashboardState, config: DashboardConfig = DEFAULT_CONFIG):
        super().__init__()
        self.dashboard_state = state
        self.dashboard_config = config
        self.failure: Optional[Exception] = None

    def compose(self) -> ComposeResult:
        yield Static(render_header(), id="header")
        yield Static("", id="tabs")
        yield Static("", id="content")
        yield Static(render_footer(), id="footer")

    def on_mount(self) -> None:
        self.refresh_view()

    def refresh_view(self) -> None:
        self.query_one("#tabs", Static).update(render_tabs(self.dashboard_state, self.dashboard_config))
        self.query_one("#content", Static).update(render_content(self.dashboard_state, self.dashboard_config))

    def _handle_exception(self, error: Exception) -> None:
        self.failure = error
        super()._handle_exception(error)

    def action_navigate(self, name: str) -> None:
        self.dashboard_state = step(self.dashboard_state, NavEvent(name), self.dashboard_config)
        if self.dashboard_state.quit_requested:
            self.exit()
            return
        self.refresh_view()


def run_dashboard(state: DashboardState, config: DashboardConfig = DEFAULT_CONFIG) -> DashboardState:
    """Run the dashboard until quit and return the final state.

    Textual restores the terminal before ``run`` returns, including when a
    handler raised; such failures are re-raised here as ``DashboardError``.
    """
    app = CostDashboardApp(state, config)
    try:
        app.run()
    except Exception as exc:
        logger.exception("Dashboard stopped unexpectedly")
        raise DashboardError(str(exc)) from exc
    if app.failure is not None:
        raise DashboardError(str(app.failure)) from app.failure
    if app.return_code:
        raise DashboardError(f"Dashboard exited with status {app.return_code}")
    return app.dashboard_state
