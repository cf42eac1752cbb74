import sys
from pathlib import Path

import pytest

# Ensure the project root is available on the Python path when running the tests.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from dex.lookup import Dex  # noqa: E402
from rules.catalog import DEFAULT_FORMATS_PATH, FormatCatalog  # noqa: E402

DEX_TABLES = {
    "species": [
        {"name": "Bulbasaur", "num": 1, "gen": 1, "tier": "LC", "nfe": True, "types": ["Grass", "Poison"]},
        {"name": "Ivysaur", "num": 2, "gen": 1, "tier": "NFE", "prevo": "bulbasaur", "nfe": True, "types": ["Grass", "Poison"]},
        {"name": "Blastoise", "num": 9, "gen": 1, "tier": "UU", "types": ["Water"]},
        {"name": "Pikachu", "num": 25, "gen": 1, "tier": "NFE", "prevo": "pichu", "nfe": True, "types": ["Electric"]},
        {"name": "Starmie", "num": 121, "gen": 1, "tier": "OU", "types": ["Water", "Psychic"]},
        {"name": "Gyarados", "num": 130, "gen": 1, "tier": "OU", "types": ["Water", "Flying"]},
        {"name": "Mewtwo", "num": 150, "gen": 1, "tier": "Uber", "types": ["Psychic"]},
        {"name": "Pichu", "num": 172, "gen": 2, "tier": "LC", "nfe": True, "types": ["Electric"]},
        {"name": "Politoed", "num": 186, "gen": 2, "tier": "OU", "types": ["Water"]},
        {"name": "Kingdra", "num": 230, "gen": 2, "tier": "OU", "types": ["Water", "Dragon"]},
        {"name": "Kyogre", "num": 382, "gen": 3, "tier": "Uber", "types": ["Water"]},
        {"name": "Garchomp", "num": 445, "gen": 4, "tier": "OU", "types": ["Dragon", "Ground"]},
        {"name": "Giratina", "num": 487, "gen": 4, "tier": "Uber", "types": ["Ghost", "Dragon"]},
        {
            "name": "Giratina-Origin",
            "num": 487,
            "gen": 4,
            "tier": "Uber",
            "baseSpecies": "Giratina",
            "types": ["Ghost", "Dragon"],
        },
        {"name": "Arceus", "num": 493, "gen": 4, "tier": "Uber", "types": ["Normal"]},
        {"name": "Arceus-Fire", "num": 493, "gen": 4, "tier": "Uber", "baseSpecies": "Arceus", "types": ["Fire"]},
        {"name": "Victini", "num": 494, "gen": 5, "tier": "BL", "types": ["Psychic", "Fire"]},
        {"name": "Keldeo", "num": 647, "gen": 5, "tier": "OU", "types": ["Water", "Fighting"]},
        {
            "name": "Keldeo-Resolution",
            "num": 647,
            "gen": 5,
            "tier": "OU",
            "baseSpecies": "Keldeo",
            "types": ["Water", "Fighting"],
        },
        {"name": "Missingno", "num": 0, "gen": 1, "isNonstandard": True, "types": ["Bird"]},
    ],
    "moves": [
        {"name": "Tackle", "gen": 1, "basePower": 50},
        {"name": "Scratch", "gen": 1, "basePower": 40},
        {"name": "Swift", "gen": 1, "basePower": 60},
        {"name": "Surf", "gen": 1, "basePower": 95},
        {"name": "Thunderbolt", "gen": 1, "basePower": 95},
        {"name": "Earthquake", "gen": 1, "basePower": 100},
        {"name": "Ice Beam", "gen": 1, "basePower": 95},
        {"name": "Psychic", "gen": 1, "basePower": 90},
        {"name": "Recover", "gen": 1, "basePower": 0},
        {"name": "Toxic", "gen": 1, "basePower": 0},
        {"name": "Double Team", "gen": 1, "basePower": 0},
        {"name": "Fissure", "gen": 1, "basePower": 0, "ohko": True},
        {"name": "Swords Dance", "gen": 1, "basePower": 0},
        {"name": "Calm Mind", "gen": 3, "basePower": 0},
        {"name": "Baton Pass", "gen": 2, "basePower": 0},
        {"name": "Shell Smash", "gen": 5, "basePower": 0},
        {"name": "Secret Sword", "gen": 5, "basePower": 85},
        {"name": "Moonblast", "gen": 6, "basePower": 95},
        {"name": "Sketchy Slam", "gen": 1, "basePower": 80, "isNonstandard": True},
    ],
    "abilities": [
        {"name": "Overgrow", "gen": 3},
        {"name": "Torrent", "gen": 3},
        {"name": "Static", "gen": 3},
        {"name": "Natural Cure", "gen": 3},
        {"name": "Intimidate", "gen": 3},
        {"name": "Swift Swim", "gen": 3},
        {"name": "Drizzle", "gen": 3},
        {"name": "Pressure", "gen": 3},
        {"name": "Levitate", "gen": 3},
        {"name": "Sand Veil", "gen": 3},
        {"name": "Rough Skin", "gen": 3},
        {"name": "Multitype", "gen": 4},
        {"name": "Justified", "gen": 4},
        {"name": "Victory Star", "gen": 5},
        {"name": "Moody", "gen": 5},
    ],
    "items": [
        {"name": "Leftovers", "gen": 2},
        {"name": "Life Orb", "gen": 4},
        {"name": "Choice Band", "gen": 3},
        {"name": "Focus Sash", "gen": 4},
        {"name": "Soul Dew", "gen": 3},
        {"name": "Griseous Orb", "gen": 4},
        {"name": "Flame Plate", "gen": 4, "onPlate": "Fire"},
        {"name": "Eviolite", "gen": 5},
    ],
    "types": [
        {"name": "Normal"},
        {"name": "Fire"},
        {"name": "Water"},
        {"name": "Psychic"},
        {"name": "Dragon"},
    ],
}


@pytest.fixture
def dex() -> Dex:
    return Dex.from_mappings(**DEX_TABLES)


@pytest.fixture
def catalog(dex: Dex) -> FormatCatalog:
    return FormatCatalog.from_json(DEFAULT_FORMATS_PATH, dex)
