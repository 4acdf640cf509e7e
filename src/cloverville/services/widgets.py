"""Decorative widgets: community points progress bar and CO2 pie.

The points bar is data-driven; the CO2 pie renders fixed display
constants and never reads the village record.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cloverville.services._helpers import format_number

if TYPE_CHECKING:
    from cloverville.config.models import PageConfig, WidgetsConfig
    from cloverville.infrastructure.dom import Document


def progress_percent(points: int | float, points_max: int | float) -> float:
    """Bar fill in percent, capped at 100 so the bar never overflows."""
    return min(points / points_max * 100, 100)


def progress_label(points: int | float, points_max: int | float) -> str:
    """Label text; shows the raw points even above the cap."""
    return f"{format_number(points)} / {format_number(points_max)} points"


def co2_degrees(saved: int | float, maximum: int | float) -> float:
    return saved / maximum * 360


def conic_gradient(degrees: float, fill: str, rest: str) -> str:
    deg = format_number(degrees)
    return f"conic-gradient({fill} 0deg {deg}deg, {rest} {deg}deg 360deg)"


def update_points_widget(
    document: Document,
    points: int | float | None,
    *,
    page: PageConfig,
    widgets: WidgetsConfig,
) -> bool:
    """Update the progress bar and its label.

    Both elements must be present; returns whether anything changed.
    """
    bar = document.get_element_by_id(page.progress_bar)
    text = document.get_element_by_id(page.progress_text)
    if bar is None or text is None:
        return False

    value = points or 0
    bar.style["width"] = f"{format_number(progress_percent(value, widgets.points_max))}%"
    text.inner_text = progress_label(value, widgets.points_max)
    return True


def update_co2_widget(document: Document, *, page: PageConfig, widgets: WidgetsConfig) -> bool:
    """Paint the CO2 pie and its label, each if present."""
    degrees = co2_degrees(widgets.co2_saved, widgets.co2_max)
    changed = False

    pie = document.query_selector(page.co2_pie)
    if pie is not None:
        pie.style["background"] = conic_gradient(degrees, widgets.co2_fill, widgets.co2_rest)
        changed = True

    text = document.get_element_by_id(page.co2_text)
    if text is not None:
        text.inner_text = f"{format_number(widgets.co2_saved)}%"
        changed = True

    return changed
