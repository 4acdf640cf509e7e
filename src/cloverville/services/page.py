"""PageService — bootstraps one page: navigation, data load, rendering.

Order is fixed: bind navigation, await the data load, then (only when a
record arrived) update the widgets and render the three sections.  The
loaded record travels in an explicit :class:`PageContext`; nothing is held
in module state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cloverville.infrastructure.sources import resolve_source
from cloverville.infrastructure.templates import build_template_environment
from cloverville.services.loader import load_village_data, summarize_record
from cloverville.services.navigation import NavigationController
from cloverville.services.result import ServiceError, ServiceResult
from cloverville.services.sections import build_sections, render_section
from cloverville.services.widgets import (
    progress_label,
    progress_percent,
    update_co2_widget,
    update_points_widget,
)

if TYPE_CHECKING:
    import httpx
    from jinja2 import Environment

    from cloverville.config.settings import CloverSettings
    from cloverville.domain.records import VillageRecord
    from cloverville.infrastructure.dom import Document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageContext:
    """Everything the renderers need for one hydration."""

    document: Document
    record: VillageRecord


class PageService:
    """Hydrates parsed pages from the village record.

    Usage::

        svc = PageService(settings)
        result = await svc.hydrate(document, page_location=page_path)
    """

    def __init__(
        self,
        settings: CloverSettings,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._client = client
        self._env: Environment | None = None

    @property
    def env(self) -> Environment:
        """Card template environment (built lazily)."""
        if self._env is None:
            self._env = build_template_environment("cards", site_root=self._settings.site_root)
        return self._env

    def data_location(
        self,
        page_location: str | Path | None = None,
        *,
        source: str | None = None,
    ) -> str | Path:
        """Resolve the data source for a page.

        Without a page, relative sources resolve from the site root.
        """
        location = resolve_source(source or self._settings.data.source, page_location)
        if isinstance(location, Path) and not location.is_absolute():
            location = (self._settings.site_root / location).resolve()
        return location

    async def _load(self, location: str | Path) -> VillageRecord | None:
        return await load_village_data(
            location,
            client=self._client,
            timeout=self._settings.data.timeout,
        )

    async def hydrate(
        self,
        document: Document,
        *,
        page_location: str | Path | None = None,
        source: str | None = None,
    ) -> ServiceResult:
        """Run the full page bootstrap against *document*."""
        nav = NavigationController.bind(document, self._settings.page)

        location = self.data_location(page_location, source=source)
        record = await self._load(location)

        data: dict[str, Any] = {
            "source": str(location),
            "navigation": nav is not None,
            "loaded": record is not None,
        }
        if record is None:
            return ServiceResult(
                ok=True,
                op="render_page",
                data=data,
                warnings=[f"Village data unavailable from {location}; page left unchanged"],
            )

        data.update(self.apply(PageContext(document=document, record=record)))
        return ServiceResult(ok=True, op="render_page", data=data)

    def apply(self, context: PageContext) -> dict[str, Any]:
        """Update widgets then sections; runs without suspension."""
        page = self._settings.page
        widgets = self._settings.widgets

        points_updated = update_points_widget(
            context.document,
            context.record.community_points,
            page=page,
            widgets=widgets,
        )
        co2_updated = update_co2_widget(context.document, page=page, widgets=widgets)

        sections: dict[str, int | None] = {}
        for spec in build_sections(page):
            sections[spec.key] = render_section(context.document, context.record, spec, self.env)

        logger.debug("Page hydrated: %s", sections)
        return {
            "widgets": {"points": points_updated, "co2": co2_updated},
            "sections": sections,
        }

    async def inspect(
        self,
        page_location: str | Path | None = None,
        *,
        source: str | None = None,
    ) -> ServiceResult:
        """Load the record and summarize it without touching a page."""
        location = self.data_location(page_location, source=source)
        record = await self._load(location)
        if record is None:
            return ServiceResult(
                ok=False,
                op="inspect_data",
                error=ServiceError(
                    code="load_failed",
                    message=f"Could not load village data from {location}",
                    detail={"source": str(location)},
                ),
            )

        points = record.community_points or 0
        points_max = self._settings.widgets.points_max
        return ServiceResult(
            ok=True,
            op="inspect_data",
            data={
                "source": str(location),
                "counts": summarize_record(record),
                "progress": {
                    "label": progress_label(points, points_max),
                    "percent": progress_percent(points, points_max),
                },
            },
        )
