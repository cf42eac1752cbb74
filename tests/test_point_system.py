from typing import List

import pytest

from dex.lookup import Dex
from rules.catalog import FormatCatalog
from rules.clauses import PokemonRule
from rules.library import RuleLibrary
from rules.points import ITEM_POINTS, TIER_POINTS, PointSystem
from rules.schema import FormatDefinition
from rules.team import PokemonSet


def _budget_catalog(dex: Dex, points: PointSystem) -> FormatCatalog:
    def library_factory() -> RuleLibrary:
        library = RuleLibrary()
        library.register(PokemonRule())
        library.register(points)
        return library

    return FormatCatalog(
        dex,
        [FormatDefinition(name="Budget", ruleset=["Pokemon", "Point System"])],
        library_factory=library_factory,
    )


def _team(last_move: str) -> List[PokemonSet]:
    team = [PokemonSet(species="Garchomp", moves=["Earthquake"]) for _ in range(5)]
    team.append(PokemonSet(species="Garchomp", moves=["Earthquake", last_move]))
    return team


@pytest.fixture
def budget(dex: Dex) -> FormatCatalog:
    points = PointSystem(
        tier_points={"OU": 330},
        ability_points={},
        item_points={},
        move_points={"Tackle": 10, "Surf": 30},
    )
    return _budget_catalog(dex, points)


def test_team_under_the_budget_passes(budget: FormatCatalog) -> None:
    assert budget.validate_team(_team("Tackle"), "budget") == []


def test_team_over_the_budget_reports_the_total(budget: FormatCatalog) -> None:
    assert budget.validate_team(_team("Surf"), "budget") == ["You've used 2010/2000 Points."]


def test_set_cost_adds_every_table() -> None:
    points = PointSystem()
    pokemon_set = PokemonSet(species="Politoed", ability="Drizzle", item="Choice Band", tier="OU")

    assert points.set_cost(pokemon_set) == TIER_POINTS["OU"] + 200 + ITEM_POINTS["choiceband"]
    assert points.set_cost(PokemonSet(species="Nobody")) == 0


def test_uber_with_two_status_moves(dex: Dex) -> None:
    catalog = _budget_catalog(dex, PointSystem())
    team = [PokemonSet(species="Mewtwo", moves=["Recover", "Calm Mind", "Psychic"])]

    assert catalog.validate_team(team, "budget") == [
        "You cannot have more than one non-damaging move on an Uber."
    ]


def test_one_status_move_on_an_uber_is_fine(dex: Dex) -> None:
    catalog = _budget_catalog(dex, PointSystem())
    team = [PokemonSet(species="Mewtwo", moves=["Recover", "Psychic"])]

    assert catalog.validate_team(team, "budget") == []


def test_status_moves_on_lower_tiers_are_not_limited(dex: Dex) -> None:
    catalog = _budget_catalog(dex, PointSystem())
    team = [PokemonSet(species="Garchomp", moves=["Swords Dance", "Toxic", "Earthquake"])]

    assert catalog.validate_team(team, "budget") == []


def test_negative_weights_are_rejected() -> None:
    with pytest.raises(ValueError):
        PointSystem(item_points={"Leftovers": -5})


def test_bundled_point_score_format(catalog: FormatCatalog) -> None:
    team = [
        {"species": "Mewtwo", "moves": ["Psychic"], "item": "Leftovers"},
        {"species": "Kyogre", "moves": ["Surf"], "item": "Choice Band"},
        {"species": "Garchomp", "moves": ["Earthquake"], "item": "Life Orb"},
    ]

    assert catalog.validate_team(team, "pointscore") == ["You've used 2250/2000 Points."]


def test_status_moves_are_counted_across_every_uber(dex: Dex) -> None:
    points = PointSystem(tier_points={"Uber": 500, "OU": 330}, ability_points={}, move_points={}, item_points={})
    catalog = _budget_catalog(dex, points)
    team = [
        PokemonSet(species="Mewtwo", moves=["Recover", "Psychic"]),
        PokemonSet(species="Kyogre", moves=["Calm Mind", "Surf"]),
        PokemonSet(species="Giratina", moves=["Toxic", "Earthquake"]),
    ]

    assert catalog.validate_team(team, "budget") == [
        "You cannot have more than one non-damaging move on an Uber."
    ]
