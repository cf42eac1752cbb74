"""Pydantic models describing the JSON format table and ruleset entries."""

from __future__ import annotations

from enum import Enum
from typing import AbstractSet, Annotated, Any, Dict, FrozenSet, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel, model_validator

from dex.entities import to_id

from .errors import InvalidRuleReferenceError

COMPLEX_BAN_SEPARATOR = " ++ "


class RuleKind(str, Enum):
    """What a registered definition is, mirroring the format table's ``effect_type``."""

    FORMAT = "Format"
    BANLIST = "Banlist"
    RULE = "Rule"


class FormatDefinition(BaseModel):
    """One entry of the format table as it appears on disk."""

    model_config = ConfigDict(extra="forbid", frozen=True)
    id: Optional[str] = Field(default=None, description="Defaults to the normalised name")
    name: str = Field(..., min_length=1)
    effect_type: RuleKind = RuleKind.FORMAT
    section: Optional[str] = None
    gen: int = Field(default=5, ge=1)
    max_team_size: int = Field(default=6, ge=1)
    max_level: int = Field(default=100, ge=1)
    default_level: Optional[int] = Field(default=None, ge=1)
    max_forced_level: Optional[int] = Field(default=None, ge=1)
    game_type: Literal["singles", "doubles"] = "singles"
    team: Optional[str] = Field(default=None, description="Random team generator name, if any")
    rated: bool = False
    search_show: bool = False
    challenge_show: bool = False
    teambuilder: bool = False
    ruleset: List[str] = Field(default_factory=list)
    banlist: List[str] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _validate_levels(self) -> "FormatDefinition":
        if self.default_level is not None and self.default_level > self.max_level:
            raise ValueError("default_level cannot exceed max_level")
        if not to_id(self.id or self.name):
            raise ValueError("format id must contain at least one alphanumeric character")
        return self

    @property
    def format_id(self) -> str:
        return to_id(self.id or self.name)


class FormatDefinitionCollection(RootModel[List[FormatDefinition]]):
    """Helper root model to validate arrays of definitions."""


class FormatTable(BaseModel):
    """Versioned wrapper written by the bundled ``formats.json``."""

    model_config = ConfigDict(extra="forbid")
    version: str = Field(..., min_length=1)
    formats: List[FormatDefinition] = Field(default_factory=list)


class FormatReference(BaseModel):
    """Ruleset entry naming another registered format, rule or banlist."""

    model_config = ConfigDict(extra="forbid", frozen=True)
    kind: Literal["reference"] = "reference"
    target: str = Field(..., min_length=1)


class ComplexBan(BaseModel):
    """Two-part ban; fires only when a single set carries both halves."""

    model_config = ConfigDict(extra="forbid", frozen=True)
    kind: Literal["complex"] = "complex"
    left: str = Field(..., min_length=1)
    right: str = Field(..., min_length=1)

    @property
    def pair(self) -> FrozenSet[str]:
        return frozenset((self.left, self.right))


class EntityBan(BaseModel):
    """Bare identifier: a species, move, item, ability or category tag."""

    model_config = ConfigDict(extra="forbid", frozen=True)
    kind: Literal["entity"] = "entity"
    target: str = Field(..., min_length=1)


RuleRef = Annotated[
    Union[FormatReference, ComplexBan, EntityBan],
    Field(discriminator="kind"),
]

BanEntry = Union[ComplexBan, EntityBan]


def classify_ban(format_id: str, entry: str) -> BanEntry:
    """Turn a banlist string into a :class:`ComplexBan` or :class:`EntityBan`."""

    if COMPLEX_BAN_SEPARATOR in entry:
        halves = entry.split(COMPLEX_BAN_SEPARATOR)
        if len(halves) != 2:
            raise InvalidRuleReferenceError(format_id, entry, "a complex ban joins exactly two parts")
        left, right = (to_id(half) for half in halves)
        if not left or not right:
            raise InvalidRuleReferenceError(format_id, entry, "both halves of a complex ban are required")
        if left == right:
            raise InvalidRuleReferenceError(format_id, entry, "a complex ban needs two different parts")
        return ComplexBan(left=left, right=right)
    target = to_id(entry)
    if not target:
        raise InvalidRuleReferenceError(format_id, entry, "entry has no identifier characters")
    return EntityBan(target=target)


def classify_ruleset_entry(format_id: str, entry: str, known_ids: AbstractSet[str]) -> RuleRef:
    """Decide once, at registration, what a ruleset string means."""

    target = to_id(entry)
    if COMPLEX_BAN_SEPARATOR not in entry and target in known_ids:
        return FormatReference(target=target)
    return classify_ban(format_id, entry)


def get_format_json_schema() -> Dict[str, Any]:
    """Return the JSON schema used to validate format table payloads."""

    return FormatTable.model_json_schema()


__all__ = [
    "BanEntry",
    "COMPLEX_BAN_SEPARATOR",
    "ComplexBan",
    "EntityBan",
    "FormatDefinition",
    "FormatDefinitionCollection",
    "FormatReference",
    "FormatTable",
    "RuleKind",
    "RuleRef",
    "classify_ban",
    "classify_ruleset_entry",
    "get_format_json_schema",
]
