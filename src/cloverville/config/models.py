"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, cloverville.toml only contains
overrides. A site that follows the stock page layout needs no config file.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- cloverville.toml sections ---


class DataConfig(BaseModel):
    """[data] section."""

    model_config = {"frozen": True}

    source: str = "../village.json"
    timeout: float | None = None


class WidgetsConfig(BaseModel):
    """[widgets] section.

    The CO2 figures are fixed display constants; they are never read from
    the village record.
    """

    model_config = {"frozen": True}

    points_max: int = Field(default=5000, gt=0)
    co2_saved: int = 80
    co2_max: int = Field(default=100, gt=0)
    co2_fill: str = "#00ff37"
    co2_rest: str = "rgba(10, 57, 2, 0.7)"


class PageConfig(BaseModel):
    """[page] section — element ids and selectors the page provides."""

    model_config = {"frozen": True}

    green_actions_container: str = "green-actions-container"
    trade_offers_container: str = "trade-offers-container"
    communal_tasks_container: str = "communal-tasks-container"
    progress_bar: str = "progress-bar"
    progress_text: str = "progress-text"
    co2_pie: str = ".co2-pie"
    co2_text: str = "co2-text"
    menu_toggle: str = ".menu-toggle"
    nav_links: str = ".nav-links"
    nav_link_selector: str = "a, span"
