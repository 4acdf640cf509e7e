"""Village record models parsed from the static JSON document.

Every field is optional. Absence means "no data" and is masked by a
fallback literal at render time, never rejected here. Keys use the
camelCase names of the JSON document via aliases.

Leaf values are tolerated rather than validated: a scalar of an
unexpected type is carried as text, and a value that cannot be printed
(an object or a list where a scalar belongs) counts as missing. Only a
root that is not an object, or a collection that is not a list, makes
the document malformed.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, model_validator


def _printable(value: Any) -> Any:
    """Scalars print as themselves; ``true`` prints, ``false`` is missing."""
    if isinstance(value, bool):
        return "true" if value else None
    if isinstance(value, str | int | float):
        return value
    return None


def _numeric(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value


Text = Annotated[str | None, BeforeValidator(_printable)]
Points = Annotated[int | float | str | None, BeforeValidator(_printable)]
Number = Annotated[int | float | None, BeforeValidator(_numeric)]


class _Entry(BaseModel):
    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "coerce_numbers_to_str": True,
    }

    @model_validator(mode="before")
    @classmethod
    def _non_object_is_blank(cls, data: Any) -> Any:
        # A list item that is not an object renders with every fallback.
        return data if isinstance(data, dict) else {}


class Action(_Entry):
    """A green action a villager performed."""

    name: Text = None
    description: Text = None
    points: Points = None


class Offer(_Entry):
    """A trade offer on the village market."""

    name: Text = None
    description: Text = None
    points: Points = None
    seller: Text = None


class Task(_Entry):
    """A communal task open to villagers."""

    name: Text = None
    description: Text = None
    points: Points = None


class VillageRecord(BaseModel):
    """Root document describing village state.

    A list field is ``None`` when the key is missing from the document,
    which renderers treat differently from an empty list.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    community_points: Number = Field(default=None, alias="communityPoints")
    green_actions: list[Action] | None = Field(default=None, alias="greenActions")
    trade_offers: list[Offer] | None = Field(default=None, alias="tradeOffers")
    tasks: list[Task] | None = None
