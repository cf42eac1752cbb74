from rules.catalog import FormatCatalog
from rules.team import PokemonSet


def test_duplicate_moves_are_dropped_silently(catalog: FormatCatalog) -> None:
    pokemon_set = PokemonSet(species="Bulbasaur", moves=["Tackle", "Tackle", "Scratch"], ability="Overgrow")

    problems = catalog.validate_team([pokemon_set], "ou")

    assert problems == []
    assert pokemon_set.moves == ["Tackle", "Scratch"]


def test_duplicates_survive_without_enforcement(catalog: FormatCatalog) -> None:
    pokemon_set = PokemonSet(species="Bulbasaur", moves=["Tackle", "tackle", "Scratch"])

    assert catalog.validate_team([pokemon_set], "hackmons") == []
    assert pokemon_set.moves == ["Tackle", "tackle", "Scratch"]


def test_cap_format_drops_duplicate_moves(catalog: FormatCatalog) -> None:
    pokemon_set = PokemonSet(species="Starmie", moves=["Surf", "Surf", "Recover"], ability="Natural Cure")

    assert catalog.validate_team([pokemon_set], "cap") == []
    assert pokemon_set.moves == ["Surf", "Recover"]


def test_giratina_forme_follows_the_griseous_orb(catalog: FormatCatalog) -> None:
    without_orb = PokemonSet(species="Giratina-Origin", moves=["Surf"], ability="Levitate", item="Leftovers")
    with_orb = PokemonSet(species="Giratina", moves=["Surf"], ability="Pressure", item="Griseous Orb")

    assert catalog.validate_team([without_orb], "ubers") == []
    assert catalog.validate_team([with_orb], "ubers") == []

    assert (without_orb.species, without_orb.ability) == ("Giratina", "Pressure")
    assert (with_orb.species, with_orb.ability) == ("Giratina-Origin", "Levitate")


def test_arceus_forme_follows_its_plate(catalog: FormatCatalog) -> None:
    plated = PokemonSet(species="Arceus", moves=["Surf"], ability="Multitype", item="Flame Plate")
    unplated = PokemonSet(species="Arceus-Fire", moves=["Surf"], ability="Multitype", item="Leftovers")

    catalog.validate_team([plated], "ubers")
    catalog.validate_team([unplated], "ubers")

    assert plated.species == "Arceus-Fire"
    assert unplated.species == "Arceus"


def test_keldeo_resolution_needs_secret_sword(catalog: FormatCatalog) -> None:
    keeps = PokemonSet(species="Keldeo-Resolution", moves=["Secret Sword"], ability="Justified")
    reverts = PokemonSet(species="Keldeo-Resolution", moves=["Surf"], ability="Justified")

    catalog.validate_team([keeps], "ubers")
    catalog.validate_team([reverts], "ubers")

    assert keeps.species == "Keldeo-Resolution"
    assert reverts.species == "Keldeo"


def test_formes_are_left_alone_without_enforcement(catalog: FormatCatalog) -> None:
    pokemon_set = PokemonSet(species="Giratina-Origin", moves=["Surf"], ability="Levitate", item="Leftovers")

    catalog.validate_team([pokemon_set], "hackmons")

    assert pokemon_set.species == "Giratina-Origin"


def test_rewritten_forme_is_checked_against_the_banlist(catalog: FormatCatalog) -> None:
    pokemon_set = PokemonSet(species="Giratina", moves=["Surf"], ability="Pressure", item="Griseous Orb")

    problems = catalog.validate_team([pokemon_set], "gbusingles")

    assert problems == ["Giratina-Origin is banned.", "Giratina is banned."]
