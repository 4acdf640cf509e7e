"""Shared pytest fixtures and test helpers for cloverville tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from cloverville.config.settings import CloverSettings
from cloverville.infrastructure.dom import Document

PAGE_HTML = """\
<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>CloverVille</title></head>
<body>
  <nav>
    <button class="menu-toggle">Menu</button>
    <ul class="nav-links">
      <li><a href="index.html">Home</a></li>
      <li><a href="market.html">Market</a></li>
      <li><span>Community</span></li>
    </ul>
  </nav>
  <div class="progress"><div id="progress-bar" class="bar"></div></div>
  <p id="progress-text">Loading points...</p>
  <div class="co2-pie"></div>
  <p id="co2-text">--</p>
  <section id="green-actions-container"><p>Loading green actions...</p></section>
  <section id="trade-offers-container"><p>Loading trade offers...</p></section>
  <section id="communal-tasks-container"><p>Loading tasks...</p></section>
</body>
</html>
"""


def village_data() -> dict[str, Any]:
    """A fresh copy of a complete village document."""
    return {
        "communityPoints": 2500,
        "greenActions": [
            {"name": "Compost Drive", "description": "Collect kitchen scraps", "points": 50},
            {"name": "Bike to Work", "description": "Leave the car at home", "points": 20},
        ],
        "tradeOffers": [
            {
                "name": "Fresh Eggs",
                "description": "A dozen free-range eggs",
                "points": 30,
                "seller": "Farmer Joe",
            },
        ],
        "tasks": [
            {"name": "Fix the Fence", "description": "North pasture fence", "points": 100},
            {"name": "Plant Trees", "description": "Along the river", "points": 80},
            {"name": "Clean the Pond", "description": "Remove litter", "points": 40},
        ],
    }


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def document() -> Document:
    """A freshly parsed copy of the stock page."""
    return Document.from_html(PAGE_HTML)


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary site: ``village.json`` at the root, the page under ``pages/``.

    The default data source ``../village.json`` resolves from the page to
    the root document.
    """
    (tmp_path / "pages").mkdir()
    (tmp_path / "pages" / "index.html").write_text(PAGE_HTML, encoding="utf-8")
    write_village(tmp_path, village_data())
    return tmp_path


@pytest.fixture
def page_path(site_root: Path) -> Path:
    return site_root / "pages" / "index.html"


@pytest.fixture
def settings(site_root: Path) -> CloverSettings:
    return CloverSettings.from_cli(site_root=site_root)


@pytest.fixture
def _isolated_site(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp site root so the CLI discovers it.

    Use via ``@pytest.mark.usefixtures("_isolated_site")`` on command test
    classes.
    """
    monkeypatch.delenv("CLOVERVILLE_CONFIG", raising=False)
    monkeypatch.chdir(site_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_village(root: Path, data: Any, name: str = "village.json") -> Path:
    """Write *data* as JSON under *root* and return the path."""
    path = root / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
