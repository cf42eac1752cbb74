"""Immutable registry of format, rule and banlist definitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from dex.entities import to_id

from .errors import DuplicateFormatError, FormatNotFoundError, FormatSchemaError, RulesetError
from .library import Capability, Rule, RuleLibrary
from .schema import (
    BanEntry,
    FormatDefinition,
    FormatDefinitionCollection,
    FormatTable,
    RuleKind,
    RuleRef,
    classify_ban,
    classify_ruleset_entry,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Format:
    """A registered definition with its entries already classified.

    Formats, banlists and rules share this shape; ``rule`` carries the hook
    implementation when the rule library provides one for the same id.
    """

    id: str
    name: str
    kind: RuleKind
    refs: Tuple[RuleRef, ...]
    bans: Tuple[BanEntry, ...]
    definition: FormatDefinition
    rule: Optional[Rule] = None

    @property
    def capabilities(self) -> Capability:
        return self.rule.capabilities if self.rule is not None else Capability.NONE

    def has(self, capability: Capability) -> bool:
        return capability in self.capabilities

    @property
    def gen(self) -> int:
        return self.definition.gen

    @property
    def max_team_size(self) -> int:
        return self.definition.max_team_size

    @property
    def max_level(self) -> int:
        return self.definition.max_level

    @property
    def max_forced_level(self) -> Optional[int]:
        return self.definition.max_forced_level

    @property
    def selectable(self) -> bool:
        return self.kind is RuleKind.FORMAT


class FormatRegistry:
    """Holds every definition known to one catalog snapshot.

    Definitions from the rule library are registered first so that tables
    can reference built-in clauses by name. A table entry with the same id
    as a library rule replaces the rule's default definition but keeps its
    hooks.
    """

    def __init__(
        self,
        definitions: Iterable[FormatDefinition] = (),
        *,
        library: Optional[RuleLibrary] = None,
        version: Optional[str] = None,
    ) -> None:
        self.version = version
        self._library = library if library is not None else RuleLibrary()
        merged: Dict[str, FormatDefinition] = {
            definition.format_id: definition for definition in self._library.definitions()
        }
        seen: set[str] = set()
        for definition in definitions:
            format_id = definition.format_id
            if format_id in seen:
                raise DuplicateFormatError(format_id)
            seen.add(format_id)
            merged[format_id] = definition
        known_ids = frozenset(merged)
        self._formats: Dict[str, Format] = {}
        self.rejected: Dict[str, RulesetError] = {}
        for format_id, definition in merged.items():
            try:
                self._formats[format_id] = self._compile(definition, known_ids)
            except RulesetError as exc:
                LOGGER.error("Rejecting definition %s: %s", format_id, exc)
                self.rejected[format_id] = exc

    # ------------------------------------------------------------------ loading
    @classmethod
    def from_payload(cls, payload: Any, *, library: Optional[RuleLibrary] = None) -> "FormatRegistry":
        """Validate a JSON payload (versioned table or bare list) and register it."""

        try:
            if isinstance(payload, Mapping):
                table = FormatTable.model_validate(payload)
                return cls(table.formats, library=library, version=table.version)
            collection = FormatDefinitionCollection.model_validate(payload)
        except ValidationError as exc:
            raise FormatSchemaError(f"Invalid format table: {exc}") from exc
        return cls(collection.root, library=library)

    def _compile(self, definition: FormatDefinition, known_ids: frozenset) -> Format:
        format_id = definition.format_id
        refs = tuple(classify_ruleset_entry(format_id, entry, known_ids) for entry in definition.ruleset)
        bans = tuple(classify_ban(format_id, entry) for entry in definition.banlist)
        return Format(
            id=format_id,
            name=definition.name,
            kind=definition.effect_type,
            refs=refs,
            bans=bans,
            definition=definition,
            rule=self._library.get(format_id),
        )

    # ------------------------------------------------------------------- access
    def get(self, format_id: str) -> Format:
        key = to_id(format_id)
        if key in self.rejected:
            raise self.rejected[key]
        try:
            return self._formats[key]
        except KeyError as exc:
            raise FormatNotFoundError(format_id) from exc

    def ids(self) -> List[str]:
        return list(self._formats)

    def formats(self, *, selectable_only: bool = False) -> List[Format]:
        return [fmt for fmt in self._formats.values() if fmt.selectable or not selectable_only]

    def __contains__(self, format_id: object) -> bool:
        return isinstance(format_id, str) and to_id(format_id) in self._formats

    def __iter__(self) -> Iterator[Format]:
        return iter(self._formats.values())

    def __len__(self) -> int:
        return len(self._formats)


__all__ = ["Format", "FormatRegistry"]
