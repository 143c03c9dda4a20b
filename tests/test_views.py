"""
Unit tests for per-tab view composition, rendered to plain text.
"""
from dataclasses import replace

import pytest
from rich.console import Console

from core.config import DEFAULT_CONFIG, SERVICE_COLORS, Palette, color_for
from core.models import CostSummary
from core.state import DashboardState, Tab
from tests.conftest import make_summary
from ui.views import (
    BAR_EMPTY,
    BAR_FULL,
    SELECTED_ROW_STYLE,
    bar_lines,
    create_bar,
    render_breakdown_table,
    render_content,
    render_footer,
    render_header,
    render_tabs,
    render_text_report,
    short_month,
)


def render_text(renderable, width: int = 120) -> str:
    console = Console(record=True, width=width, color_system=None)
    console.print(renderable)
    return console.export_text()


class TestPalette:
    def test_twelve_colors_cycle(self):
        assert len(SERVICE_COLORS) == 12
        assert color_for(0) == Palette.CORAL_RED.value
        assert color_for(12) == color_for(0)
        assert color_for(13) == color_for(1)


class TestMonthTabs:
    """Test the current and previous month layouts."""

    def test_loading_placeholder(self):
        text = render_text(render_content(DashboardState(), DEFAULT_CONFIG))
        assert "Loading cost data" in text

    def test_loading_placeholder_on_previous_tab(self):
        text = render_text(render_content(DashboardState(selected_tab=Tab.PREVIOUS_MONTH), DEFAULT_CONFIG))
        assert "Loading cost data" in text

    def test_error_panel_with_checklist(self):
        state = DashboardState(loading=False, error="Failed to load current month: access denied")
        text = render_text(render_content(state, DEFAULT_CONFIG))
        assert "Failed to load current month: access denied" in text
        assert "Make sure you have" in text
        assert "ce:GetCostAndUsage" in text

    def test_previous_tab_never_shows_error(self):
        state = DashboardState(selected_tab=Tab.PREVIOUS_MONTH, loading=False, error="boom")
        text = render_text(render_content(state, DEFAULT_CONFIG))
        assert "boom" not in text
        assert "No data available" in text

    def test_no_data_is_distinct_from_loading(self):
        text = render_text(render_content(DashboardState(loading=False), DEFAULT_CONFIG))
        assert "No data available" in text
        assert "Loading" not in text

    def test_breakdown(self, loaded_state):
        text = render_text(render_content(loaded_state, DEFAULT_CONFIG))
        assert "October 2026" in text
        assert "$300.00" in text
        assert "USD" in text
        assert "(2 services)" in text
        assert "#1" in text and "#2" in text
        assert "EC2" in text and "Amazon EC2" not in text
        assert "66.7%" in text and "33.3%" in text
        assert BAR_FULL * 13 + BAR_EMPTY * 7 in text

    def test_previous_month_breakdown(self, loaded_state):
        state = replace(loaded_state, selected_tab=Tab.PREVIOUS_MONTH)
        text = render_text(render_content(state, DEFAULT_CONFIG))
        assert "September 2026" in text
        assert "Lambda" in text
        assert "(4 services)" in text

    def test_selected_row_highlighted(self, ec2_s3_summary):
        panel = render_breakdown_table(ec2_s3_summary, 1, DEFAULT_CONFIG)
        rows = panel.renderable.rows
        assert rows[0].style is None
        assert rows[1].style == SELECTED_ROW_STYLE


class TestTrendTab:
    """Test the trend layout."""

    def test_loading_placeholder_on_trend_tab(self):
        text = render_text(render_content(DashboardState(selected_tab=Tab.TREND), DEFAULT_CONFIG))
        assert "Loading cost data" in text
        assert "No data available" not in text

    def test_empty_trend(self, loaded_state):
        state = replace(loaded_state, selected_tab=Tab.TREND, trend=())
        assert "No data available" in render_text(render_content(state, DEFAULT_CONFIG))

    def test_trend_layout(self, loaded_state):
        state = replace(loaded_state, selected_tab=Tab.TREND)
        text = render_text(render_content(state, DEFAULT_CONFIG), width=140)

        assert "Monthly Cost Trend by Service" in text
        assert "Services" in text
        assert "Monthly Totals" in text
        for label in ("Aug", "Sep", "Oct"):
            assert label in text
        assert "RDS" in text and "Lambda" in text
        assert "+10.0%" in text
        assert "+36.4%" in text
        assert "—" in text

    def test_bar_lines_shape(self, trend_summaries):
        services = ["Amazon EC2", "Amazon S3"]
        lines = bar_lines(trend_summaries, services, 4)

        assert len(lines) == 5
        assert lines[-1].plain.split() == ["Aug", "Sep", "Oct"]
        # Only the tallest bar (October EC2) reaches the top row.
        assert lines[0].plain == " " * 14 + "██" + "  "

    def test_bar_lines_round_half_eighths_up(self):
        # 1/16 of the peak on a one-row chart is exactly half an eighth.
        trend = [make_summary("October 2026", {"Amazon EC2": 16.0, "Amazon S3": 1.0})]
        lines = bar_lines(trend, ["Amazon EC2", "Amazon S3"], 1)
        assert lines[0].plain == "██▁▁"

    def test_bar_lines_with_zero_costs(self):
        trend = [CostSummary("October 2026", 0.0)]
        lines = bar_lines(trend, [], 3)
        assert [line.plain.strip() for line in lines] == ["", "", "", "Oct"]

    def test_service_absent_from_month_draws_empty_bar(self):
        trend = [
            make_summary("September 2026", {"Amazon RDS": 80.0}),
            make_summary("October 2026", {"Amazon EC2": 80.0}),
        ]
        lines = bar_lines(trend, ["Amazon RDS", "Amazon EC2"], 2, group_gap=1)
        top = lines[0].plain
        assert top[:4] == "██  "
        assert top[5:9] == "  ██"


class TestChrome:
    def test_tabs_show_all_titles(self, loaded_state):
        text = render_text(render_tabs(loaded_state, DEFAULT_CONFIG))
        assert "Current Month" in text
        assert "Previous Month" in text
        assert "6-Month Trend" in text

    def test_header_and_footer(self):
        assert "Cost Explorer" in render_text(render_header())
        footer = render_text(render_footer())
        assert "Quit" in footer and "Top/Bottom" in footer


class TestHelpers:
    @pytest.mark.parametrize("pct,filled", [(0.0, 0), (100.0, 20), (33.3, 7)])
    def test_create_bar(self, pct, filled):
        bar = create_bar(pct, 20)
        assert len(bar) == 20
        assert bar.count(BAR_FULL) == filled

    def test_short_month(self):
        assert short_month("September 2026") == "Sep"
        assert short_month("May") == "May"

    def test_text_report(self, ec2_s3_summary):
        text = render_text(render_text_report(ec2_s3_summary, DEFAULT_CONFIG))
        assert "October 2026" in text
        assert "200.00" in text
        assert "66.7%" in text
        assert "$300.00 USD" in text
