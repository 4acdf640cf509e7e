"""Village data loading.

One asynchronous read per page.  Every failure (transport, status,
unreadable file, malformed document) collapses into ``None`` and is only
logged; the page keeps its markup defaults.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import httpx
from pydantic import ValidationError

from cloverville.domain.records import VillageRecord
from cloverville.infrastructure.sources import read_json

logger = logging.getLogger(__name__)


async def load_village_data(
    location: str | Path,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> VillageRecord | None:
    """Load the village record from an already-resolved *location*.

    Returns None when the document cannot be obtained or parsed.
    """
    try:
        payload = await read_json(location, client=client, timeout=timeout)
        record = VillageRecord.model_validate(payload)
    except (httpx.HTTPError, httpx.InvalidURL, OSError, ValidationError, ValueError) as exc:
        logger.warning("Error loading village data from %s: %s", location, exc)
        return None

    logger.debug(
        "Village data loaded from %s (%s)",
        location,
        ", ".join(f"{k}={v}" for k, v in summarize_record(record).items()),
    )
    return record


def summarize_record(record: VillageRecord) -> dict[str, object]:
    """Entry counts per list field (None when the field is absent)."""
    return {
        "communityPoints": record.community_points,
        "greenActions": _count(record.green_actions),
        "tradeOffers": _count(record.trade_offers),
        "tasks": _count(record.tasks),
    }


def _count(items: Sequence[object] | None) -> int | None:
    return None if items is None else len(items)
