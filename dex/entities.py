"""Pydantic models describing dex entities (species, moves, items ...)."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def to_id(text: Any) -> str:
    """Normalise a display name into a lookup id.

    ``"Focus Sash"`` and ``"focus-sash"`` both become ``"focussash"``.
    Non-string values (``None``, numbers coming from loose JSON) are
    tolerated so that malformed team payloads never raise.
    """

    if text is None:
        return ""
    return _NON_ALNUM_RE.sub("", str(text).lower())


class EntityKind(str, Enum):
    """Kinds of records the dex can resolve."""

    SPECIES = "species"
    MOVE = "move"
    ITEM = "item"
    ABILITY = "ability"
    TYPE = "type"


class Entity(BaseModel):
    """A resolved dex record.

    Only ``name`` is mandatory in payloads; ``id`` is derived from it.
    Lookups that miss return an entity with ``exists`` set to ``False``
    instead of raising, so callers can turn misses into legality problems.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = ""
    name: str = Field(..., min_length=1)
    exists: bool = True
    num: int = 0
    gen: int = Field(default=1, ge=0)
    is_nonstandard: bool = Field(default=False, alias="isNonstandard")
    is_unreleased: bool = Field(default=False, alias="isUnreleased")
    tier: Optional[str] = None
    base_species: Optional[str] = Field(default=None, alias="baseSpecies")
    types: List[str] = Field(default_factory=list)
    prevo: Optional[str] = None
    nfe: bool = False
    base_power: Optional[int] = Field(default=None, alias="basePower", ge=0)
    ohko: bool = False
    on_plate: Optional[str] = Field(default=None, alias="onPlate")

    @model_validator(mode="before")
    @classmethod
    def _derive_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("id") and data.get("name"):
            data = {**data, "id": to_id(data["name"])}
        return data

    @classmethod
    def missing(cls, name: Any) -> "Entity":
        """Placeholder returned for names the dex does not know."""

        label = str(name) if name not in (None, "") else "(empty)"
        return cls(name=label, exists=False, gen=0)


__all__ = ["Entity", "EntityKind", "to_id"]
