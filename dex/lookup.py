"""In-memory entity lookup used by the validator."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from pydantic import ValidationError

from .entities import Entity, EntityKind, to_id

LOGGER = logging.getLogger(__name__)

_PAYLOAD_KEYS = {
    EntityKind.SPECIES: "species",
    EntityKind.MOVE: "moves",
    EntityKind.ITEM: "items",
    EntityKind.ABILITY: "abilities",
    EntityKind.TYPE: "types",
}


class DexLoadError(ValueError):
    """Raised when a dex payload cannot be parsed into entities."""


class Dex:
    """Keeps one table per :class:`EntityKind`, keyed by normalised id.

    The dex is populated once and only read afterwards, which keeps every
    lookup free of I/O and safe to share between concurrent validations.
    """

    def __init__(self) -> None:
        self._tables: Dict[EntityKind, Dict[str, Entity]] = {kind: {} for kind in EntityKind}

    # ------------------------------------------------------------------ loading
    @classmethod
    def from_mappings(cls, **tables: Iterable[Union[Entity, Mapping[str, Any]]]) -> "Dex":
        """Build a dex from keyword tables (``species=[...]``, ``moves=[...]``)."""

        dex = cls()
        by_key = {key: kind for kind, key in _PAYLOAD_KEYS.items()}
        for key, records in tables.items():
            kind = by_key.get(key)
            if kind is None:
                raise DexLoadError(f"Unknown dex table '{key}'")
            dex.add_all(kind, records)
        return dex

    @classmethod
    def load_from_json(cls, path: Union[str, Path]) -> "Dex":
        path = Path(path)
        payload = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(payload, Mapping):
            raise DexLoadError(f"{path}: dex payload must be a JSON object")
        dex = cls.from_mappings(**{key: value for key, value in payload.items() if key != "version"})
        LOGGER.info("Loaded dex from %s (%d species)", path, len(dex._tables[EntityKind.SPECIES]))
        return dex

    def add_all(self, kind: EntityKind, records: Iterable[Union[Entity, Mapping[str, Any]]]) -> None:
        for record in records:
            self.add(kind, record)

    def add(self, kind: EntityKind, record: Union[Entity, Mapping[str, Any]]) -> Entity:
        if isinstance(record, Entity):
            entity = record
        else:
            try:
                entity = Entity.model_validate(record)
            except ValidationError as exc:
                raise DexLoadError(f"Invalid {kind.value} record {record!r}: {exc}") from exc
        self._tables[kind][entity.id] = entity
        return entity

    # ------------------------------------------------------------------- access
    def lookup(self, kind: Union[EntityKind, str], name: Any) -> Entity:
        """Resolve ``name`` to an entity, returning a miss placeholder if unknown."""

        kind = EntityKind(kind)
        entity = self._tables[kind].get(to_id(name))
        if entity is None:
            return Entity.missing(name)
        return entity

    def get_species(self, name: Any) -> Entity:
        return self.lookup(EntityKind.SPECIES, name)

    def get_move(self, name: Any) -> Entity:
        return self.lookup(EntityKind.MOVE, name)

    def get_item(self, name: Any) -> Entity:
        return self.lookup(EntityKind.ITEM, name)

    def get_ability(self, name: Any) -> Entity:
        return self.lookup(EntityKind.ABILITY, name)


__all__ = ["Dex", "DexLoadError"]
