"""Per-set legality checks shared by every format.

Three passes live here:

* :func:`check_set` – existence, generation, move-count and level checks
  that every format runs before any clause.
* :func:`normalize_set` – the rewrite applied only while legality
  enforcement is active (duplicate moves dropped, battle-only formes
  reverted). It mutates the set and never reports a problem.
* :func:`banlist_problems` – simple and complex ban matching against the
  resolved ruleset.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from dex.entities import Entity, to_id
from dex.lookup import Dex

from .library import ValidationContext
from .team import PokemonSet

MAX_MOVES = 4


def check_team_shape(team: Sequence[PokemonSet], context: ValidationContext) -> List[str]:
    limit = context.format.max_team_size
    if not team:
        return ["Your team has no Pokemon."]
    if len(team) > limit:
        return [f"You may only bring up to {limit} Pokemon."]
    return []


def check_set(pokemon_set: PokemonSet, context: ValidationContext) -> List[str]:
    """Run the checks every set goes through, collecting all problems."""

    dex = context.dex
    gen = context.gen
    problems: List[str] = []

    species = dex.get_species(pokemon_set.species)
    if not species.exists or species.gen > gen:
        problems.append(f"{pokemon_set.species or '(no species)'} does not exist in gen {gen}.")
    elif species.is_nonstandard:
        problems.append(f"{pokemon_set.species} is not a real Pokemon.")

    if pokemon_set.ability:
        problems.extend(_entity_problems(dex.get_ability(pokemon_set.ability), "ability", gen))
    for move_name in pokemon_set.moves:
        problems.extend(_entity_problems(dex.get_move(move_name), "move", gen))
    if pokemon_set.item:
        problems.extend(_entity_problems(dex.get_item(pokemon_set.item), "item", gen))

    distinct_moves = {to_id(move) for move in pokemon_set.moves}
    if len(distinct_moves) > MAX_MOVES:
        problems.append(f"{pokemon_set.label} has more than four moves.")
    max_level = context.format.max_level
    if pokemon_set.level is not None and pokemon_set.level > max_level:
        problems.append(f"{pokemon_set.label} is higher than level {max_level}.")
    return problems


def _entity_problems(entity: Entity, noun: str, gen: int) -> List[str]:
    if not entity.exists or entity.gen > gen:
        return [f"{entity.name} does not exist in gen {gen}."]
    if entity.is_nonstandard:
        return [f"{entity.name} is not a real {noun}."]
    return []


def derive_tier(pokemon_set: PokemonSet, dex: Dex) -> Optional[str]:
    species = dex.get_species(pokemon_set.species)
    pokemon_set.tier = species.tier if species.exists else None
    return pokemon_set.tier


def derive_forced_level(pokemon_set: PokemonSet, context: ValidationContext) -> Optional[int]:
    """Cap the battle level for formats that force one, e.g. VGC's level 50."""

    cap = context.format.max_forced_level
    level = pokemon_set.level
    if level is None:
        level = context.format.definition.default_level or context.format.max_level
    pokemon_set.forced_level = cap if cap is not None and level >= cap else None
    return pokemon_set.forced_level


# ----------------------------------------------------------------- enforcement
def dedupe_moves(pokemon_set: PokemonSet, dex: Dex) -> None:
    """Keep only the first occurrence of each move."""

    seen = set()
    moves: List[str] = []
    for move_name in pokemon_set.moves:
        move = dex.get_move(move_name)
        move_id = move.id if move.exists else to_id(move_name)
        if move_id in seen:
            continue
        seen.add(move_id)
        moves.append(move_name)
    pokemon_set.moves = moves


FormeRewrite = Callable[[PokemonSet, Entity, Dex], None]


def _base_forme(name: str) -> FormeRewrite:
    def rewrite(pokemon_set: PokemonSet, species: Entity, dex: Dex) -> None:
        pokemon_set.species = name

    return rewrite


def _arceus(pokemon_set: PokemonSet, species: Entity, dex: Dex) -> None:
    item = dex.get_item(pokemon_set.item)
    if to_id(pokemon_set.ability) == "multitype" and item.exists and item.on_plate:
        pokemon_set.species = f"Arceus-{item.on_plate}"
    else:
        pokemon_set.species = "Arceus"


def _giratina(pokemon_set: PokemonSet, species: Entity, dex: Dex) -> None:
    if to_id(pokemon_set.item) == "griseousorb":
        pokemon_set.species = "Giratina-Origin"
        pokemon_set.ability = "Levitate"
    else:
        pokemon_set.species = "Giratina"
        pokemon_set.ability = "Pressure"


def _keldeo(pokemon_set: PokemonSet, species: Entity, dex: Dex) -> None:
    knows_secret_sword = any(to_id(move) == "secretsword" for move in pokemon_set.moves)
    if to_id(pokemon_set.species) == "keldeoresolution" and not knows_secret_sword:
        pokemon_set.species = "Keldeo"


#: Keyed by national dex number so renamed formes are still caught.
FORME_REWRITES: Dict[int, FormeRewrite] = {
    351: _base_forme("Castform"),
    421: _base_forme("Cherrim"),
    487: _giratina,
    493: _arceus,
    555: _base_forme("Darmanitan"),
    647: _keldeo,
    648: _base_forme("Meloetta"),
}


def normalize_set(pokemon_set: PokemonSet, dex: Dex) -> None:
    """Apply the enforcement-only rewrite to ``pokemon_set`` in place."""

    dedupe_moves(pokemon_set, dex)
    species = dex.get_species(pokemon_set.species)
    if not species.exists:
        return
    rewrite = FORME_REWRITES.get(species.num)
    if rewrite is not None:
        rewrite(pokemon_set, species, dex)


# -------------------------------------------------------------------- banlists
UNRELEASED_TAG = "unreleased"


def _set_identifiers(pokemon_set: PokemonSet, dex: Dex) -> List[Tuple[str, str, Optional[str]]]:
    """Return ``(id, display name, tag kind)`` for everything on a set.

    Plain entities carry ``None`` as their kind. Category tags carry
    ``"tier"`` or ``"unreleased"`` so the problem text can say why the
    entity matched.
    """

    entries: List[Tuple[str, str, Optional[str]]] = []
    looked_up: List[Entity] = []
    species = dex.get_species(pokemon_set.species)
    if pokemon_set.species:
        entries.append((species.id if species.exists else to_id(pokemon_set.species), species.name, None))
        looked_up.append(species)
    if species.exists and species.base_species:
        entries.append((to_id(species.base_species), species.base_species, None))
    if pokemon_set.ability:
        ability = dex.get_ability(pokemon_set.ability)
        entries.append((to_id(pokemon_set.ability), ability.name, None))
        looked_up.append(ability)
    for move_name in pokemon_set.moves:
        move = dex.get_move(move_name)
        entries.append((to_id(move_name), move.name, None))
        looked_up.append(move)
    if pokemon_set.item:
        item = dex.get_item(pokemon_set.item)
        entries.append((to_id(pokemon_set.item), item.name, None))
        looked_up.append(item)
    tier = pokemon_set.tier if pokemon_set.tier is not None else species.tier
    if tier:
        entries.append((to_id(tier), tier, "tier"))
    for entity in looked_up:
        if entity.exists and entity.is_unreleased:
            entries.append((UNRELEASED_TAG, entity.name, UNRELEASED_TAG))
    return entries


def banlist_problems(pokemon_set: PokemonSet, context: ValidationContext) -> List[str]:
    ruleset = context.ruleset
    problems: List[str] = []
    identifiers = _set_identifiers(pokemon_set, context.dex)
    names: Dict[str, str] = {}
    reported = set()
    for entity_id, display, kind in identifiers:
        if kind != UNRELEASED_TAG:
            names.setdefault(entity_id, display)
        key = (entity_id, display) if kind == UNRELEASED_TAG else entity_id
        if entity_id not in ruleset.bans or key in reported:
            continue
        reported.add(key)
        if kind == "tier":
            problems.append(f"{pokemon_set.label} is in {display}, which is banned.")
        elif kind == UNRELEASED_TAG:
            problems.append(f"{display} is unreleased, which is banned.")
        else:
            problems.append(f"{display} is banned.")
    for left, right in ruleset.sorted_complex_bans():
        if left in names and right in names:
            problems.append(
                f"{pokemon_set.label} has the combination of {names[left]} + {names[right]}, which is banned."
            )
    return problems


__all__ = [
    "FORME_REWRITES",
    "MAX_MOVES",
    "UNRELEASED_TAG",
    "banlist_problems",
    "check_set",
    "check_team_shape",
    "dedupe_moves",
    "derive_tier",
    "derive_forced_level",
    "normalize_set",
]
