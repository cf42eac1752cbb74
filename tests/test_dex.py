import json
from pathlib import Path

import pytest

from dex.entities import Entity, to_id
from dex.lookup import Dex, DexLoadError


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Focus Sash", "focussash"),
        ("Ho-Oh", "hooh"),
        ("Farfetch'd", "farfetchd"),
        ("  MR. MIME ", "mrmime"),
        (None, ""),
        (25, "25"),
    ],
)
def test_to_id(text: object, expected: str) -> None:
    assert to_id(text) == expected


def test_lookup_is_case_and_punctuation_insensitive(dex: Dex) -> None:
    sash = dex.get_item("focus-sash")

    assert sash.exists
    assert sash.name == "Focus Sash"
    assert dex.get_species("GIRATINA origin").name == "Giratina-Origin"


def test_lookup_miss_returns_a_placeholder(dex: Dex) -> None:
    missing = dex.get_move("Hyper Mega Beam")

    assert not missing.exists
    assert missing.name == "Hyper Mega Beam"
    assert dex.get_ability(None).name == "(empty)"


def test_camel_case_aliases_are_accepted() -> None:
    entity = Entity.model_validate({"name": "Arceus-Fire", "baseSpecies": "Arceus", "isNonstandard": False})

    assert entity.id == "arceusfire"
    assert entity.base_species == "Arceus"


def test_load_from_json_ignores_version(tmp_path: Path) -> None:
    path = tmp_path / "dex.json"
    path.write_text(
        json.dumps({"version": "1", "species": [{"name": "Pikachu", "num": 25}], "moves": [{"name": "Surf"}]}),
        encoding="utf-8",
    )

    dex = Dex.load_from_json(path)

    assert dex.get_species("pikachu").num == 25
    assert dex.get_move("surf").exists


def test_unknown_table_is_rejected() -> None:
    with pytest.raises(DexLoadError):
        Dex.from_mappings(pokeballs=[{"name": "Master Ball"}])


def test_invalid_record_is_rejected() -> None:
    with pytest.raises(DexLoadError):
        Dex.from_mappings(species=[{"num": 1}])
