from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Palette(Enum):
    CORAL_RED = "#ff6b6b"
    TURQUOISE = "#4ecdc4"
    YELLOW = "#ffe66d"
    PURPLE = "#aa80ff"
    PINK = "#ff9ff3"
    LIME_GREEN = "#6cff6c"
    ORANGE = "#ffb84d"
    SKY_BLUE = "#4db6ff"
    SALMON = "#ff8a65"
    CYAN = "#81ecec"
    LAVENDER = "#a29bfe"
    TEAL = "#00b894"


SERVICE_COLORS: Tuple[str, ...] = tuple(c.value for c in Palette)


def color_for(index: int) -> str:
    """Palette color for a row or service position, cycling past the end."""
    return SERVICE_COLORS[index % len(SERVICE_COLORS)]


@dataclass(frozen=True)
class DashboardConfig:
    top_n: int = 8
    trend_months: int = 6
    name_max_len: int = 30
    bar_width: int = 20
    change_threshold: float = 10.0
    severity_breakpoints: Tuple[float, float, float] = (1000.0, 100.0, 10.0)
    min_service_cost: float = 0.001
    chart_height: int = 10


DEFAULT_CONFIG = DashboardConfig()
