"""Expansion of a format's ruleset into its effective policy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Set, Tuple

from dex.entities import to_id

from .errors import RulesetCycleError, RulesetError
from .library import Capability, LEGALITY_MARKER
from .registry import Format, FormatRegistry
from .schema import BanEntry, ComplexBan, EntityBan, FormatReference

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class EffectiveRuleset:
    """Flattened view of a format: ordered rules plus normalised bans."""

    format_id: str
    rules: Tuple[Format, ...]
    bans: FrozenSet[str]
    complex_bans: FrozenSet[FrozenSet[str]]

    @property
    def rule_ids(self) -> Tuple[str, ...]:
        return tuple(rule.id for rule in self.rules)

    @property
    def enforces_legality(self) -> bool:
        return LEGALITY_MARKER in self.bans

    def rules_with(self, capability: Capability) -> Tuple[Format, ...]:
        return tuple(rule for rule in self.rules if rule.has(capability))

    def sorted_complex_bans(self) -> List[Tuple[str, str]]:
        """Complex bans in a stable order, each pair sorted."""

        return sorted(tuple(sorted(pair)) for pair in self.complex_bans)


class _Expansion:
    """Mutable accumulator for a single depth-first expansion."""

    def __init__(self) -> None:
        self.rules: List[Format] = []
        self.visited: Set[str] = set()
        self.stack: List[str] = []
        self.bans: Set[str] = set()
        self.complex_bans: Set[FrozenSet[str]] = set()

    def add_ban(self, entry: BanEntry) -> None:
        if isinstance(entry, ComplexBan):
            self.complex_bans.add(entry.pair)
        elif isinstance(entry, EntityBan):
            self.bans.add(entry.target)
        else:  # pragma: no cover - exhaustive guard
            raise RulesetError(f"Unsupported ban entry: {entry!r}")


class RulesetResolver:
    """Resolves and memoises :class:`EffectiveRuleset` objects per format id.

    The cache is append-only and uses insert-if-absent, so two threads
    resolving the same format at once simply compute the same value twice.
    A resolver is bound to one registry; reloading means building a new one.
    """

    def __init__(self, registry: FormatRegistry) -> None:
        self._registry = registry
        self._cache: Dict[str, EffectiveRuleset] = {}

    @property
    def registry(self) -> FormatRegistry:
        return self._registry

    def resolve(self, format_id: str) -> EffectiveRuleset:
        key = to_id(format_id)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        root = self._registry.get(key)
        expansion = _Expansion()
        self._expand(root, expansion)
        ruleset = EffectiveRuleset(
            format_id=root.id,
            rules=tuple(expansion.rules),
            bans=frozenset(expansion.bans),
            complex_bans=frozenset(expansion.complex_bans),
        )
        LOGGER.debug(
            "Resolved %s: %d rules, %d bans, %d complex bans",
            root.id,
            len(ruleset.rules),
            len(ruleset.bans),
            len(ruleset.complex_bans),
        )
        return self._cache.setdefault(key, ruleset)

    def _expand(self, fmt: Format, expansion: _Expansion) -> None:
        expansion.stack.append(fmt.id)
        expansion.visited.add(fmt.id)
        expansion.rules.append(fmt)
        for ref in fmt.refs:
            if isinstance(ref, FormatReference):
                if ref.target in expansion.stack:
                    raise RulesetCycleError(expansion.stack + [ref.target])
                if ref.target in expansion.visited:
                    continue
                self._expand(self._registry.get(ref.target), expansion)
            else:
                expansion.add_ban(ref)
        for ban in fmt.bans:
            expansion.add_ban(ban)
        expansion.stack.pop()

    def validate_all(self) -> Dict[str, RulesetError]:
        """Resolve every registered definition, returning the ones that fail."""

        failures: Dict[str, RulesetError] = {}
        for fmt in self._registry:
            try:
                self.resolve(fmt.id)
            except RulesetError as exc:
                LOGGER.error("Excluding format %s: %s", fmt.id, exc)
                failures[fmt.id] = exc
        return failures


__all__ = ["EffectiveRuleset", "RulesetResolver"]
