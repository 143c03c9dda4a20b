"""Rich renderables for each region and tab of the dashboard.

Everything here is a function of ``DashboardState`` and ``DashboardConfig``, so
a view can be rendered into a recording ``Console`` without a live terminal.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from rich.console import Group, RenderableType
from rich.padding import Padding
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.aggregate import (
    ChangeBand,
    Severity,
    classify_change,
    compute_percentages,
    cost_severity,
    month_over_month_change,
    proportional_fill,
    round_half_up,
    service_cost_in,
    top_services_across_months,
    truncate_service_name,
)
from core.config import DashboardConfig, Palette, color_for
from core.models import CostSummary
from core.state import DashboardState, Tab

AWS_ORANGE = "#ff9900"
HEADER_STYLE = f"bold {Palette.YELLOW.value}"
SELECTED_ROW_STYLE = "on #3c3c50"
BAR_FULL = "█"
BAR_EMPTY = "░"
SWATCH = "██"
BAR_EIGHTHS = " ▁▂▃▄▅▆▇█"
NO_CHANGE = "—"

SEVERITY_COLORS: Dict[Severity, str] = {
    Severity.CRITICAL: Palette.CORAL_RED.value,
    Severity.HIGH: Palette.ORANGE.value,
    Severity.MODERATE: Palette.YELLOW.value,
    Severity.LOW: Palette.LIME_GREEN.value,
}

CHANGE_STYLES: Dict[ChangeBand, str] = {
    ChangeBand.INCREASE: Palette.CORAL_RED.value,
    ChangeBand.DECREASE: Palette.LIME_GREEN.value,
    ChangeBand.NEUTRAL: "yellow",
}

TAB_ACCENTS: Dict[Tab, str] = {
    Tab.CURRENT_MONTH: Palette.LIME_GREEN.value,
    Tab.PREVIOUS_MONTH: Palette.PURPLE.value,
    Tab.TREND: Palette.ORANGE.value,
}

REMEDIATION_CHECKLIST = (
    "Valid AWS credentials configured",
    "Cost Explorer API access (ce:GetCostAndUsage)",
)


def severity_color(cost: float, config: DashboardConfig) -> str:
    return SEVERITY_COLORS[cost_severity(cost, config)]


def format_cost(cost: float) -> str:
    return f"${cost:.2f}"


def short_month(period: str) -> str:
    return period.split(" ")[0][:3]


def create_bar(percentage: float, width: int) -> str:
    filled = proportional_fill(percentage, width)
    return BAR_FULL * filled + BAR_EMPTY * (width - filled)


def tab_title(tab: Tab, config: DashboardConfig) -> str:
    if tab == Tab.CURRENT_MONTH:
        return "Current Month"
    if tab == Tab.PREVIOUS_MONTH:
        return "Previous Month"
    return f"{config.trend_months}-Month Trend"


# ---------- chrome ----------
def render_header() -> Panel:
    title = Text.assemble(
        ("☁️  ", ""),
        ("AWS", f"bold {AWS_ORANGE}"),
        (" Cost Explorer ", "bold white"),
        ("TUI", f"bold {Palette.TURQUOISE.value}"),
    )
    return Panel(title, border_style=AWS_ORANGE)


def render_tabs(state: DashboardState, config: DashboardConfig) -> Panel:
    line = Text()
    for tab in Tab:
        if tab:
            line.append(" │ ", style="bright_black")
        if tab == state.selected_tab:
            line.append(tab_title(tab, config), style="bold underline white")
        else:
            line.append(tab_title(tab, config), style=TAB_ACCENTS[tab])
    return Panel(line, title=Text(" Views ", style="bold white"), title_align="left", border_style="grey39")


def render_footer() -> Panel:
    shortcuts = [
        ("q", "Quit", Palette.CORAL_RED.value),
        ("←→", "Tab", Palette.TURQUOISE.value),
        ("↑↓", "Navigate", Palette.YELLOW.value),
        ("g/G", "Top/Bottom", Palette.PURPLE.value),
    ]
    line = Text()
    for keys, text, color in shortcuts:
        line.append(f" {keys} ", style=f"black on {color}")
        line.append(f" {text}  ", style="grey70")
    return Panel(line, title=Text(" Shortcuts ", style="bright_black"), title_align="left", border_style="grey30")


# ---------- placeholders ----------
def render_loading() -> Panel:
    body = Text.assemble(
        "\n",
        ("⏳ Loading cost data from AWS...", f"bold {Palette.YELLOW.value}"),
        "\n\n",
        ("This may take a few seconds", "bright_black"),
    )
    return Panel(body, border_style=Palette.YELLOW.value)


def render_error(message: str) -> Panel:
    body = Text()
    body.append("❌ Error\n\n", style=f"bold {Palette.CORAL_RED.value}")
    body.append(f"{message}\n\n", style="white")
    body.append("💡 Make sure you have:\n", style=Palette.YELLOW.value)
    body.append("\n".join(f"   • {item}" for item in REMEDIATION_CHECKLIST), style="grey70")
    return Panel(
        body,
        title=Text(" Error ", style=f"bold {Palette.CORAL_RED.value}"),
        title_align="left",
        border_style=Palette.CORAL_RED.value,
    )


def render_no_data() -> Panel:
    return Panel(Text("\n📭 No data available", style="grey70"), border_style="bright_black")


# ---------- month tabs ----------
def render_cost_summary(summary: CostSummary, accent: str, config: DashboardConfig) -> Panel:
    body = Text.assemble(
        ("📅 Period: ", "grey70"),
        (summary.period, "bold white"),
        "\n",
        ("💰 Total Cost: ", "grey70"),
        (format_cost(summary.total_cost), f"bold {severity_color(summary.total_cost, config)}"),
        (f" {summary.currency}", "bright_black"),
        (f"  ({len(summary.breakdown)} services)", "#aaaaaa"),
    )
    return Panel(
        Padding(body, (0, 1)),
        title=Text(" 💵 Cost Summary ", style=f"bold {accent}"),
        title_align="left",
        border_style=accent,
    )


def render_breakdown_table(summary: CostSummary, selected_row: int, config: DashboardConfig) -> Panel:
    table = Table(box=None, expand=True, header_style=HEADER_STYLE, pad_edge=False)
    table.add_column("#", width=4, style="bright_black")
    table.add_column("", width=3)
    table.add_column("Service", ratio=2, no_wrap=True)
    table.add_column("Cost", width=12, justify="right")
    table.add_column("%", width=8, justify="right", style="#aaaaaa")
    table.add_column("Distribution", min_width=config.bar_width)

    for i, s in enumerate(compute_percentages(summary)):
        color = color_for(i)
        table.add_row(
            f"#{i + 1}",
            Text(SWATCH, style=color),
            Text(truncate_service_name(s.service, config.name_max_len), style="white"),
            Text(format_cost(s.cost), style=f"bold {severity_color(s.cost, config)}"),
            f"{s.percentage:.1f}%",
            Text(create_bar(s.percentage, config.bar_width), style=color),
            style=SELECTED_ROW_STYLE if i == selected_row else None,
        )
    return Panel(
        table,
        title=Text(" 📋 Service Breakdown ", style=f"bold {Palette.TURQUOISE.value}"),
        title_align="left",
        border_style=Palette.TURQUOISE.value,
    )


def render_cost_breakdown(summary: CostSummary, selected_row: int, accent: str, config: DashboardConfig) -> Group:
    return Group(
        render_cost_summary(summary, accent, config),
        render_breakdown_table(summary, selected_row, config),
    )


def render_current_month(state: DashboardState, config: DashboardConfig) -> RenderableType:
    if state.loading:
        return render_loading()
    if state.error:
        return render_error(state.error)
    if state.current is None:
        return render_no_data()
    return render_cost_breakdown(state.current, state.selected_row, TAB_ACCENTS[Tab.CURRENT_MONTH], config)


def render_previous_month(state: DashboardState, config: DashboardConfig) -> RenderableType:
    # The fatal error belongs to the current month only.
    if state.loading:
        return render_loading()
    if state.previous is None:
        return render_no_data()
    return render_cost_breakdown(state.previous, state.selected_row, TAB_ACCENTS[Tab.PREVIOUS_MONTH], config)


# ---------- trend tab ----------
def bar_lines(
    trend: Sequence[CostSummary],
    services: Sequence[str],
    height: int,
    *,
    bar_width: int = 2,
    group_gap: int = 3,
) -> List[Text]:
    """Grouped vertical bars, one group per month, one bar per service.

    Bars are drawn in eighth-block steps and scaled to the largest single bar.
    The last line carries the month labels.
    """
    values = [[service_cost_in(month, name) for name in services] for month in trend]
    peak = max((v for group in values for v in group), default=0.0)
    units = [[int(round_half_up(v / peak * height * 8)) if peak > 0 else 0 for v in group] for group in values]
    group_width = max(len(services) * bar_width, 3)

    lines: List[Text] = []
    for level in range(height - 1, -1, -1):
        line = Text()
        for g, group in enumerate(units):
            if g:
                line.append(" " * group_gap)
            drawn = 0
            for i, u in enumerate(group):
                eighths = max(0, min(8, u - level * 8))
                line.append(BAR_EIGHTHS[eighths] * bar_width, style=color_for(i))
                drawn += bar_width
            line.append(" " * (group_width - drawn))
        lines.append(line)

    labels = Text()
    for g, month in enumerate(trend):
        if g:
            labels.append(" " * group_gap)
        labels.append(short_month(month.period).center(group_width), style="bold white")
    lines.append(labels)
    return lines


def render_trend_chart(trend: Sequence[CostSummary], services: Sequence[str], config: DashboardConfig) -> Panel:
    peak = max((service_cost_in(m, s) for m in trend for s in services), default=0.0)
    accent = Palette.ORANGE.value
    return Panel(
        Text("\n").join(bar_lines(trend, services, config.chart_height)),
        title=Text(" 📊 Monthly Cost Trend by Service ", style=f"bold {accent}"),
        title_align="left",
        subtitle=Text(f" peak {format_cost(peak)} ", style="bright_black"),
        subtitle_align="right",
        border_style=accent,
    )


def render_legend(services: Sequence[str], selected_row: int, config: DashboardConfig) -> Panel:
    table = Table.grid(padding=(0, 1))
    table.add_column(width=2)
    table.add_column(no_wrap=True)
    for i, name in enumerate(services):
        table.add_row(
            Text(SWATCH, style=color_for(i)),
            Text(truncate_service_name(name, config.name_max_len), style="white"),
            style=SELECTED_ROW_STYLE if i == selected_row else None,
        )
    accent = Palette.TURQUOISE.value
    return Panel(
        Padding(table, (0, 1)),
        title=Text(" 🎨 Services ", style=f"bold {accent}"),
        title_align="left",
        border_style=accent,
    )


def render_monthly_totals(trend: Sequence[CostSummary], config: DashboardConfig) -> Panel:
    accent = Palette.YELLOW.value
    table = Table(box=None, expand=True, header_style=f"bold {accent}")
    table.add_column("Period", ratio=45)
    table.add_column("Total", ratio=30)
    table.add_column("Change", ratio=25)

    last = len(trend) - 1
    for i, month in enumerate(trend):
        if i > 0:
            change = month_over_month_change(trend, i)
            change_cell = Text(
                f"{change:+.1f}%",
                style=CHANGE_STYLES[classify_change(change, config.change_threshold)],
            )
        else:
            change_cell = Text(NO_CHANGE, style=CHANGE_STYLES[ChangeBand.NEUTRAL])
        table.add_row(
            Text(month.period, style="white"),
            Text(format_cost(month.total_cost), style=f"bold {severity_color(month.total_cost, config)}"),
            change_cell,
            style=f"bold {Palette.LIME_GREEN.value}" if i == last else None,
        )
    return Panel(
        table,
        title=Text(" 📋 Monthly Totals ", style=f"bold {accent}"),
        title_align="left",
        border_style=accent,
    )


def render_trend(state: DashboardState, config: DashboardConfig) -> RenderableType:
    if state.loading:
        return render_loading()
    if not state.trend:
        return render_no_data()
    services = top_services_across_months(state.trend, config.top_n)
    bottom = Table.grid(expand=True)
    bottom.add_column(ratio=40)
    bottom.add_column(ratio=60)
    bottom.add_row(
        render_legend(services, state.selected_row, config),
        render_monthly_totals(state.trend, config),
    )
    return Group(render_trend_chart(state.trend, services, config), bottom)


def render_content(state: DashboardState, config: DashboardConfig) -> RenderableType:
    if state.selected_tab == Tab.CURRENT_MONTH:
        return render_current_month(state, config)
    if state.selected_tab == Tab.PREVIOUS_MONTH:
        return render_previous_month(state, config)
    return render_trend(state, config)


def render_text_report(summary: Optional[CostSummary], config: DashboardConfig) -> RenderableType:
    """Plain breakdown used by the non-interactive mode."""
    if summary is None:
        return render_no_data()
    table = Table(title=f"📅 {summary.period}", caption=f"💰 Total: {format_cost(summary.total_cost)} {summary.currency}")
    table.add_column("Service", no_wrap=True)
    table.add_column("Cost", justify="right")
    table.add_column("%", justify="right")
    for s in compute_percentages(summary):
        table.add_row(truncate_service_name(s.service, config.name_max_len), f"{s.cost:.2f}", f"{s.percentage:.1f}%")
    return table
