"""Team legality validation against a resolved format."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from dex.lookup import Dex

from .clauses import PokemonRule
from .legality import banlist_problems, check_team_shape
from .library import Capability, Rule, ValidationContext
from .registry import FormatRegistry
from .resolver import RulesetResolver
from .team import PokemonSet

LOGGER = logging.getLogger(__name__)


class TeamValidator:
    """Applies a format's effective ruleset to teams and single sets.

    Problems come back as a list of messages in the order they were found:
    team shape, the generic per-set pass, per-set rules, banlists and
    finally team-level rules. Nothing short-circuits, so callers can show
    every problem at once.
    """

    def __init__(
        self,
        registry: FormatRegistry,
        dex: Dex,
        *,
        resolver: Optional[RulesetResolver] = None,
        generic_rule: Optional[Rule] = None,
    ) -> None:
        self._registry = registry
        self._dex = dex
        self._resolver = resolver or RulesetResolver(registry)
        self._generic = generic_rule or PokemonRule()

    def context_for(self, format_id: str) -> ValidationContext:
        ruleset = self._resolver.resolve(format_id)
        return ValidationContext(dex=self._dex, format=self._registry.get(ruleset.format_id), ruleset=ruleset)

    def validate_team(self, team: Iterable[Any], format_id: str) -> List[str]:
        context = self.context_for(format_id)
        sets = [PokemonSet.from_mapping(entry) for entry in team] if isinstance(team, (list, tuple)) else []
        problems = check_team_shape(sets, context)
        for pokemon_set in sets:
            problems.extend(self._generic.validate_set(pokemon_set, context))
        for pokemon_set in sets:
            problems.extend(self._dispatch_set_rules(pokemon_set, context))
        for pokemon_set in sets:
            problems.extend(banlist_problems(pokemon_set, context))
        for fmt in context.ruleset.rules_with(Capability.VALIDATE_TEAM):
            problems.extend(fmt.rule.validate_team(sets, context) or [])
        LOGGER.debug("Validated %d sets for %s: %d problems", len(sets), context.format.id, len(problems))
        return problems

    def validate_set(self, entry: Any, format_id: str) -> List[str]:
        context = self.context_for(format_id)
        pokemon_set = PokemonSet.from_mapping(entry)
        problems = self._generic.validate_set(pokemon_set, context)
        problems.extend(self._dispatch_set_rules(pokemon_set, context))
        problems.extend(banlist_problems(pokemon_set, context))
        return problems

    def _dispatch_set_rules(self, pokemon_set: PokemonSet, context: ValidationContext) -> List[str]:
        problems: List[str] = []
        for fmt in context.ruleset.rules_with(Capability.VALIDATE_SET):
            if fmt.id == self._generic.rule_id:
                continue
            problems.extend(fmt.rule.validate_set(pokemon_set, context) or [])
        return problems


__all__ = ["TeamValidator"]
