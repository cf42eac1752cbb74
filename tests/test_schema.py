import pytest
from pydantic import ValidationError

from rules.errors import InvalidRuleReferenceError
from rules.schema import (
    ComplexBan,
    EntityBan,
    FormatDefinition,
    FormatReference,
    FormatTable,
    classify_ban,
    classify_ruleset_entry,
    get_format_json_schema,
)


def test_format_id_defaults_to_the_normalised_name() -> None:
    assert FormatDefinition(name="[Gen 4] OU (beta)").format_id == "gen4oubeta"
    assert FormatDefinition(name="Anything", id="Custom-ID").format_id == "customid"


def test_definition_defaults() -> None:
    definition = FormatDefinition(name="OU")

    assert definition.gen == 5
    assert definition.max_team_size == 6
    assert definition.max_level == 100
    assert definition.ruleset == []
    assert definition.game_type == "singles"


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Lvl", "max_level": 5, "default_level": 10},
        {"name": "???"},
        {"name": "OU", "banlists": ["Uber"]},
        {"name": "OU", "effect_type": "Mod"},
        {"name": "OU", "max_team_size": 0},
    ],
)
def test_invalid_definitions_are_rejected(payload: dict) -> None:
    with pytest.raises(ValidationError):
        FormatDefinition.model_validate(payload)


def test_classify_ban() -> None:
    assert classify_ban("ou", "Soul Dew") == EntityBan(target="souldew")
    assert classify_ban("ou", "Drizzle ++ Swift Swim") == ComplexBan(left="drizzle", right="swiftswim")
    assert classify_ban("ou", "Drizzle ++ Swift Swim").pair == frozenset({"drizzle", "swiftswim"})


def test_classify_ban_rejects_bad_entries() -> None:
    with pytest.raises(InvalidRuleReferenceError) as excinfo:
        classify_ban("ou", "Drizzle ++ ")

    assert excinfo.value.format_id == "ou"
    assert excinfo.value.entry == "Drizzle ++ "
    assert excinfo.value.code == "ERR_INVALID_RULE_REF"
    with pytest.raises(InvalidRuleReferenceError):
        classify_ban("ou", "!!!")


def test_classify_ruleset_entry_prefers_known_ids() -> None:
    known = {"standard", "ou"}

    assert classify_ruleset_entry("uu", "OU", known) == FormatReference(target="ou")
    assert classify_ruleset_entry("uu", "Kyogre", known) == EntityBan(target="kyogre")


def test_format_table_schema_is_exported() -> None:
    schema = get_format_json_schema()

    assert "formats" in schema["properties"]
    assert FormatTable.model_validate({"version": "1"}).formats == []
