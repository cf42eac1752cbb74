"""Point System: a team-level budget over tiers, abilities, moves and items."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

from dex.entities import to_id

from .library import Capability, Rule, ValidationContext
from .schema import RuleKind
from .team import PokemonSet

MAX_POINTS = 2000

#: Keyed by the tier's display name; only listed tiers carry a cost.
TIER_POINTS: Mapping[str, int] = {
    "Uber": 800,
    "OU": 400,
    "BL": 350,
    "UU": 300,
    "BL2": 250,
    "RU": 200,
    "NU": 150,
    "NFE": 150,
    "LC": 150,
}

ABILITY_POINTS: Mapping[str, int] = {
    "airlock": 200,
    "drizzle": 200,
    "drought": 200,
    "sandstream": 200,
    "snowwarning": 200,
}

# No move carries a cost in the current table.
MOVE_POINTS: Mapping[str, int] = {}

_PREMIUM_ITEMS = ("choiceband", "choicescarf", "choicespecs", "eviolite", "leftovers", "lumberry")

_STANDARD_ITEMS = (
    "aguavberry", "airballoon", "apicotberry", "aspearberry", "babiriberry", "berryjuice", "bigroot",
    "bindingband", "blackbelt", "blacksludge", "blackglasses", "brightpowder", "buggem", "cellbattery",
    "charcoal", "chartiberry", "cheriberry", "chestoberry", "chilanberry", "chopleberry", "cobaberry",
    "colburberry", "custapberry", "damprock", "darkgem", "deepseascale", "deepseatooth", "destinyknot",
    "dracoplate", "dragonfang", "dragongem", "dreadplate", "earthplate", "ejectbutton", "electricgem",
    "enigmaberry", "expertbelt", "fightinggem", "figyberry", "firegem", "fistplate", "flameorb",
    "flameplate", "floatstone", "flyinggem", "focusband", "focussash", "fullincense", "ganlonberry",
    "ghostgem", "grassgem", "gripclaw", "groundgem", "habanberry", "hardstone", "heatrock", "iapapaberry",
    "icegem", "icicleplate", "icyrock", "insectplate", "ironball", "ironplate", "jabocaberry", "kasibberry",
    "kebiaberry", "kingsrock", "laggingtail", "lansatberry", "laxincense", "leppaberry", "liechiberry",
    "lifeorb", "lightball", "lightclay", "luckypunch", "machobrace", "magnet", "magoberry", "meadowplate",
    "mentalherb", "metalcoat", "metalpowder", "metronome", "micleberry", "mindplate", "miracleseed",
    "muscleband", "mysticwater", "nevermeltice", "normalgem", "occaberry", "oddincense", "oranberry",
    "passhoberry", "payapaberry", "pechaberry", "persimberry", "petayaberry", "poisonbarb", "poisongem",
    "powerherb", "psychicgem", "quickclaw", "quickpowder", "rawstberry", "razorclaw", "razorfang",
    "redcard", "rindoberry", "ringtarget", "rockgem", "rockincense", "rockyhelmet", "roseincense",
    "rowapberry", "salacberry", "scopelens", "seaincense", "sharpbeak", "shedshell", "shellbell",
    "shucaberry", "silkscarf", "silverpowder", "sitrusberry", "skyplate", "smoothrock", "softsand",
    "spelltag", "splashplate", "spookyplate", "starfberry", "steelgem", "stick", "stickybarb",
    "stoneplate", "tangaberry", "thickclub", "toxicorb", "twistedspoon", "wacanberry", "watergem",
    "waveincense", "whiteherb", "widelens", "wikiberry", "wiseglasses", "yacheberry", "zapplate",
    "zoomlens",
)

ITEM_POINTS: Mapping[str, int] = {
    **{item_id: 50 for item_id in _STANDARD_ITEMS},
    **{item_id: 100 for item_id in _PREMIUM_ITEMS},
}


class PointSystem(Rule):
    """Caps the summed cost of a team and limits status moves on Ubers.

    Every weight table maps a normalised id to a non-negative cost; ids
    missing from a table cost nothing. Tiers are read from the set, which
    the generic pass fills in before any team-level rule runs.
    """

    rule_id = "pointsystem"
    name = "Point System"
    kind = RuleKind.BANLIST
    capabilities = Capability.VALIDATE_TEAM

    def __init__(
        self,
        *,
        max_points: int = MAX_POINTS,
        tier_points: Optional[Mapping[str, int]] = None,
        ability_points: Optional[Mapping[str, int]] = None,
        move_points: Optional[Mapping[str, int]] = None,
        item_points: Optional[Mapping[str, int]] = None,
    ) -> None:
        self.max_points = max_points
        self.tier_points = _normalised(TIER_POINTS if tier_points is None else tier_points)
        self.ability_points = _normalised(ABILITY_POINTS if ability_points is None else ability_points)
        self.move_points = _normalised(MOVE_POINTS if move_points is None else move_points)
        self.item_points = _normalised(ITEM_POINTS if item_points is None else item_points)
        self.top_tier_points = max(self.tier_points.values(), default=0)

    def tier_weight(self, pokemon_set: PokemonSet) -> int:
        return self.tier_points.get(to_id(pokemon_set.tier), 0)

    def set_cost(self, pokemon_set: PokemonSet) -> int:
        cost = self.tier_weight(pokemon_set)
        cost += self.ability_points.get(to_id(pokemon_set.ability), 0)
        cost += sum(self.move_points.get(to_id(move), 0) for move in pokemon_set.moves)
        cost += self.item_points.get(to_id(pokemon_set.item), 0)
        return cost

    def team_cost(self, team: Sequence[PokemonSet]) -> int:
        return sum(self.set_cost(pokemon_set) for pokemon_set in team)

    def validate_team(self, team: Sequence[PokemonSet], context: ValidationContext) -> List[str]:
        problems: List[str] = []
        if self._too_many_status_moves_on_ubers(team, context):
            problems.append("You cannot have more than one non-damaging move on an Uber.")
        points = self.team_cost(team)
        if points > self.max_points:
            problems.append(f"You've used {points}/{self.max_points} Points.")
        return problems

    def _too_many_status_moves_on_ubers(self, team: Sequence[PokemonSet], context: ValidationContext) -> bool:
        if self.top_tier_points <= 0:
            return False
        non_damaging = 0
        for pokemon_set in team:
            if self.tier_weight(pokemon_set) != self.top_tier_points:
                continue
            for move_name in pokemon_set.moves:
                move = context.dex.get_move(move_name)
                if move.exists and move.base_power == 0:
                    non_damaging += 1
                    if non_damaging > 1:
                        return True
        return False


def _normalised(table: Mapping[str, int]) -> Dict[str, int]:
    weights = {to_id(key): int(value) for key, value in table.items()}
    negative = sorted(key for key, value in weights.items() if value < 0)
    if negative:
        raise ValueError(f"Point weights must be non-negative: {', '.join(negative)}")
    return weights


__all__ = ["ABILITY_POINTS", "ITEM_POINTS", "MAX_POINTS", "MOVE_POINTS", "PointSystem", "TIER_POINTS"]
