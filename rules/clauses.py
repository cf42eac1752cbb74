"""Built-in rules and clauses referenced by the format table."""

from __future__ import annotations

import re
from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple

from dex.entities import to_id

from .legality import check_set, dedupe_moves, derive_forced_level, derive_tier, normalize_set
from .library import (
    BattleContext,
    Capability,
    Rule,
    RuleLibrary,
    StatusEvent,
    ValidationContext,
)
from .points import PointSystem
from .schema import RuleKind
from .team import PokemonSet

_ARCEUS_FORME_RE = re.compile(r"Arceus(-[a-zA-Z?]+)?")


class PokemonRule(Rule):
    """The generic per-set pass every format runs first.

    The validator invokes this rule itself before any other dispatch, so a
    format does not need to list it for the checks to happen.
    """

    rule_id = "pokemon"
    name = "Pokemon"
    kind = RuleKind.BANLIST
    capabilities = Capability.VALIDATE_SET

    def validate_set(self, pokemon_set: PokemonSet, context: ValidationContext) -> List[str]:
        problems = check_set(pokemon_set, context)
        if context.enforces_legality:
            normalize_set(pokemon_set, context.dex)
        derive_tier(pokemon_set, context.dex)
        derive_forced_level(pokemon_set, context)
        return problems


class CapPokemonRule(Rule):
    """Pokemon rule variant for Create-A-Pokemon formats.

    Runs its base rule for the forme rewrites, then drops duplicate moves
    even when legality enforcement is off.
    """

    rule_id = "cappokemon"
    name = "CAP Pokemon"
    capabilities = Capability.VALIDATE_SET

    def __init__(self, base: Optional[Rule] = None) -> None:
        self.base = base or PokemonRule()

    def validate_set(self, pokemon_set: PokemonSet, context: ValidationContext) -> List[str]:
        # Base problems are already reported by the generic pass.
        self.base.validate_set(pokemon_set, context)
        dedupe_moves(pokemon_set, context.dex)
        return []


class AnnouncedRule(Rule):
    """Rule whose only behaviour is announcing itself at battle start."""

    capabilities = Capability.ON_START

    def __init__(
        self,
        rule_id: str,
        name: str,
        announcement: str,
        *,
        kind: RuleKind = RuleKind.RULE,
        banlist: Sequence[str] = (),
    ) -> None:
        self.rule_id = rule_id
        self.name = name
        self.kind = kind
        self.banlist = tuple(banlist)
        self.announcement = announcement

    def on_start(self, battle: BattleContext) -> None:
        battle.add("rule", f"{self.name}: {self.announcement}")


class HpPercentageMod(AnnouncedRule):
    def __init__(self) -> None:
        super().__init__("hppercentagemod", "HP Percentage Mod", "HP is reported as percentages")

    def on_start(self, battle: BattleContext) -> None:
        super().on_start(battle)
        battle.report_percentages = True


class PokemonOfTheDay(Rule):
    rule_id = "potd"
    name = "PotD"
    capabilities = Capability.ON_START

    def __init__(self, species: Optional[str] = None) -> None:
        self.species = species

    def on_start(self, battle: BattleContext) -> None:
        if self.species:
            battle.add("rule", f"Pokemon of the Day: {self.species}")


class TeamPreview(Rule):
    """Shows both teams before the battle and asks each side to pick."""

    capabilities = Capability.ON_START | Capability.ON_TEAM_PREVIEW
    start_priority = -10

    def __init__(self, rule_id: str, name: str, picks: Optional[int] = None) -> None:
        self.rule_id = rule_id
        self.name = name
        self.picks = picks

    def on_start(self, battle: BattleContext) -> None:
        battle.add("clearpoke")
        for side_id, details in battle.sides:
            for detail in details:
                battle.add("poke", side_id, _ARCEUS_FORME_RE.sub("Arceus-*", detail))

    def team_preview_picks(self) -> Optional[int]:
        return self.picks


class LittleCup(Rule):
    rule_id = "littlecup"
    name = "Little Cup"
    capabilities = Capability.VALIDATE_SET

    def validate_set(self, pokemon_set: PokemonSet, context: ValidationContext) -> List[str]:
        species = context.dex.get_species(pokemon_set.species or pokemon_set.name)
        if not species.exists:
            return []
        if species.prevo:
            return [f"{pokemon_set.species} isn't the first in its evolution family."]
        if not species.nfe:
            return [f"{pokemon_set.species} doesn't have an evolution family."]
        return []


class SpeciesClause(AnnouncedRule):
    capabilities = Capability.ON_START | Capability.VALIDATE_TEAM

    def __init__(self) -> None:
        super().__init__("speciesclause", "Species Clause", "Limit one of each Pokemon")

    def validate_team(self, team: Sequence[PokemonSet], context: ValidationContext) -> List[str]:
        seen: Dict[int, str] = {}
        for pokemon_set in team:
            species = context.dex.get_species(pokemon_set.species)
            if not species.exists:
                continue
            if species.num in seen:
                return [
                    "You are limited to one of each Pokemon by Species Clause "
                    f"(you have more than one {seen[species.num]})."
                ]
            seen[species.num] = species.name
        return []


class ItemClause(AnnouncedRule):
    capabilities = Capability.ON_START | Capability.VALIDATE_TEAM

    def __init__(self) -> None:
        super().__init__("itemclause", "Item Clause", "Limit one of each item")

    def validate_team(self, team: Sequence[PokemonSet], context: ValidationContext) -> List[str]:
        seen = set()
        for pokemon_set in team:
            item_id = to_id(pokemon_set.item)
            if not item_id:
                continue
            if item_id in seen:
                item = context.dex.get_item(pokemon_set.item)
                return [f"You are limited to one of each item by Item Clause (you have more than one {item.name})."]
            seen.add(item_id)
        return []


class OhkoClause(AnnouncedRule):
    capabilities = Capability.ON_START | Capability.VALIDATE_SET

    def __init__(self) -> None:
        super().__init__("ohkoclause", "OHKO Clause", "OHKO moves are banned")

    def validate_set(self, pokemon_set: PokemonSet, context: ValidationContext) -> List[str]:
        problems = []
        for move_name in pokemon_set.moves:
            move = context.dex.get_move(move_name)
            if move.exists and move.ohko:
                problems.append(f"{move.name} is banned by OHKO Clause.")
        return problems


class SameTypeClause(AnnouncedRule):
    capabilities = Capability.ON_START | Capability.VALIDATE_TEAM

    def __init__(self) -> None:
        super().__init__("sametypeclause", "Same Type Clause", "Pokemon in a team must share a type")

    def validate_team(self, team: Sequence[PokemonSet], context: ValidationContext) -> List[str]:
        if not team:
            return []
        type_counts: Counter = Counter()
        for pokemon_set in team:
            species = context.dex.get_species(pokemon_set.species)
            type_counts.update(set(species.types))
        if any(count >= len(team) for count in type_counts.values()):
            return []
        return ["Your team must share a type."]


class SashClause(AnnouncedRule):
    capabilities = Capability.ON_START | Capability.VALIDATE_TEAM

    def __init__(self) -> None:
        super().__init__("sashclause", "Sash Clause", "Limit one Focus Sash")

    def validate_team(self, team: Sequence[PokemonSet], context: ValidationContext) -> List[str]:
        holders = sum(1 for pokemon_set in team if to_id(pokemon_set.item) == "focussash")
        if holders > 1:
            return ["You are limited to only one Focus Sash by Sash Clause."]
        return []


class StatusClause(AnnouncedRule):
    """Blocks a second foe-inflicted ``status`` on the same side."""

    capabilities = Capability.ON_START | Capability.ON_SET_STATUS

    def __init__(
        self,
        rule_id: str,
        name: str,
        announcement: str,
        status: str,
        *,
        foe_inflicted_only: bool,
    ) -> None:
        super().__init__(rule_id, name, announcement)
        self.status = status
        self.foe_inflicted_only = foe_inflicted_only

    def on_set_status(self, event: StatusEvent, battle: BattleContext) -> bool:
        if event.self_inflicted or event.status != self.status:
            return True
        for battler in event.target_side:
            if battler.status != self.status:
                continue
            if self.foe_inflicted_only and not battler.inflicted_by_foe:
                continue
            battle.add("-message", f"{self.name} activated.")
            return False
        return True


def _clause_banlists() -> Tuple[AnnouncedRule, ...]:
    return (
        AnnouncedRule(
            "evasionabilitiesclause",
            "Evasion Abilities Clause",
            "Evasion abilities are banned",
            kind=RuleKind.BANLIST,
            banlist=("Sand Veil", "Snow Cloak"),
        ),
        AnnouncedRule(
            "evasionmovesclause",
            "Evasion Moves Clause",
            "Evasion moves are banned",
            kind=RuleKind.BANLIST,
            banlist=("Minimize", "Double Team"),
        ),
        AnnouncedRule(
            "moodyclause",
            "Moody Clause",
            "Moody is banned",
            kind=RuleKind.BANLIST,
            banlist=("Moody",),
        ),
    )


def default_library(*, potd: Optional[str] = None) -> RuleLibrary:
    """Return a fresh library holding every built-in rule."""

    library = RuleLibrary()
    pokemon = library.register(PokemonRule())
    library.register(CapPokemonRule(base=pokemon))
    library.register(PokemonOfTheDay(potd))
    library.register(LittleCup())
    library.register(SpeciesClause())
    library.register(ItemClause())
    library.register(OhkoClause())
    library.register(SameTypeClause())
    library.register(SashClause())
    library.register(HpPercentageMod())
    library.register(
        StatusClause(
            "sleepclausemod",
            "Sleep Clause Mod",
            "Limit one foe put to sleep",
            "slp",
            foe_inflicted_only=True,
        )
    )
    library.register(
        StatusClause(
            "freezeclause",
            "Freeze Clause",
            "Limit one foe frozen",
            "frz",
            foe_inflicted_only=False,
        )
    )
    for banlist in _clause_banlists():
        library.register(banlist)
    library.register(TeamPreview("teampreview", "Team Preview"))
    library.register(TeamPreview("teampreviewvgc", "Team Preview VGC", picks=4))
    library.register(TeamPreview("teampreview1v1", "Team Preview 1v1", picks=1))
    library.register(TeamPreview("teampreviewgbu", "Team Preview GBU", picks=3))
    library.register(PointSystem())
    return library


__all__ = [
    "AnnouncedRule",
    "CapPokemonRule",
    "HpPercentageMod",
    "ItemClause",
    "LittleCup",
    "OhkoClause",
    "PokemonOfTheDay",
    "PokemonRule",
    "SameTypeClause",
    "SashClause",
    "SpeciesClause",
    "StatusClause",
    "TeamPreview",
    "default_library",
]
