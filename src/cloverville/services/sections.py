"""Card sections: green actions, trade offers, communal tasks.

One generic renderer driven by three declarative :class:`SectionSpec`
entries.  A section replaces its container's content in a single
assignment, so re-rendering the same list is idempotent.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from cloverville.services._helpers import format_number

if TYPE_CHECKING:
    from jinja2 import Environment
    from pydantic import BaseModel

    from cloverville.config.models import PageConfig
    from cloverville.domain.records import VillageRecord
    from cloverville.infrastructure.dom import Document

logger = logging.getLogger(__name__)

PLACEHOLDER_TEMPLATE = "placeholder.html"
NO_DESCRIPTION = "No description"
NO_SELLER = "N/A"


@dataclass(frozen=True)
class SectionSpec:
    """How one record list maps onto one page container."""

    key: str
    container_id: str
    field: str
    template: str
    empty_message: str
    fallback_name: str


def build_sections(page: PageConfig) -> tuple[SectionSpec, ...]:
    """Return the three sections in render order."""
    return (
        SectionSpec(
            key="green_actions",
            container_id=page.green_actions_container,
            field="green_actions",
            template="green_action.html",
            empty_message="No green actions recorded yet.",
            fallback_name="Unnamed Action",
        ),
        SectionSpec(
            key="trade_offers",
            container_id=page.trade_offers_container,
            field="trade_offers",
            template="trade_offer.html",
            empty_message="No trade offers available at the moment.",
            fallback_name="Unnamed Offer",
        ),
        SectionSpec(
            key="communal_tasks",
            container_id=page.communal_tasks_container,
            field="tasks",
            template="communal_task.html",
            empty_message="No communal tasks available at the moment.",
            fallback_name="Unnamed Task",
        ),
    )


def card_context(entry: BaseModel, spec: SectionSpec) -> dict[str, Any]:
    """Template variables for one card, with fallbacks for missing fields."""
    points = getattr(entry, "points", None) or 0
    context: dict[str, Any] = {
        "name": getattr(entry, "name", None) or spec.fallback_name,
        "description": getattr(entry, "description", None) or NO_DESCRIPTION,
        # Non-numeric points print as given.
        "points": points if isinstance(points, str) else format_number(points),
    }
    if "seller" in type(entry).model_fields:
        context["seller"] = getattr(entry, "seller", None) or NO_SELLER
    return context


def render_section(
    document: Document,
    record: VillageRecord,
    spec: SectionSpec,
    env: Environment,
) -> int | None:
    """Render *spec*'s list from *record* into its container.

    Returns the number of cards written, ``0`` when the placeholder was
    written, or ``None`` when the container or the list is absent and
    nothing changed.
    """
    container = document.get_element_by_id(spec.container_id)
    if container is None:
        logger.debug("Section %s skipped: no #%s on page", spec.key, spec.container_id)
        return None

    entries: Sequence[BaseModel] | None = getattr(record, spec.field)
    if entries is None:
        logger.debug("Section %s skipped: record has no %s", spec.key, spec.field)
        return None

    if not entries:
        container.inner_html = env.get_template(PLACEHOLDER_TEMPLATE).render(
            message=spec.empty_message
        )
        return 0

    template = env.get_template(spec.template)
    container.inner_html = "".join(template.render(**card_context(e, spec)) for e in entries)
    return len(entries)
