"""Entity metadata lookup (species, moves, items, abilities, types)."""

from .entities import Entity, EntityKind, to_id
from .lookup import Dex, DexLoadError

__all__ = ["Dex", "DexLoadError", "Entity", "EntityKind", "to_id"]
