"""Team and set containers submitted for validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Union


@dataclass
class PokemonSet:
    """One roster entry.

    Sets are owned by the validation request. When legality enforcement is
    active the validator rewrites ``moves``, ``species`` and ``ability`` in
    place, and it always fills in the derived ``tier``.
    """

    species: str = ""
    name: Optional[str] = None
    moves: List[str] = field(default_factory=list)
    ability: Optional[str] = None
    item: Optional[str] = None
    level: Optional[int] = None
    tier: Optional[str] = None
    forced_level: Optional[int] = None

    @property
    def label(self) -> str:
        return self.name or self.species or "(no species)"

    @classmethod
    def from_mapping(cls, data: Any) -> "PokemonSet":
        """Build a set from loosely shaped JSON without raising.

        Unknown keys are ignored and wrongly typed values are dropped, so a
        malformed entry degrades into legality problems later on.
        """

        if isinstance(data, PokemonSet):
            return data
        if not isinstance(data, Mapping):
            return cls()
        raw_moves = data.get("moves") or []
        if isinstance(raw_moves, str):
            raw_moves = [raw_moves]
        if not isinstance(raw_moves, (list, tuple)):
            raw_moves = []
        moves = [move.strip() for move in raw_moves if isinstance(move, str) and move.strip()]
        return cls(
            species=_optional_text(data.get("species")) or "",
            name=_optional_text(data.get("name")),
            moves=moves,
            ability=_optional_text(data.get("ability")),
            item=_optional_text(data.get("item")),
            level=_optional_int(data.get("level")),
        )


def team_from_payload(payload: Union[Mapping[str, Any], Iterable[Any]]) -> List[PokemonSet]:
    """Accept either a bare list of sets or ``{"team": [...]}``."""

    if isinstance(payload, Mapping):
        payload = payload.get("team") or []
    if not isinstance(payload, (list, tuple)):
        return []
    return [PokemonSet.from_mapping(entry) for entry in payload]


def _optional_text(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _optional_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdecimal():
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


__all__ = ["PokemonSet", "team_from_payload"]
