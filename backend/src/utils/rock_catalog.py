"""Built-in rock type reference data."""

from models.rock import RockType

WET_SENSITIVE_GROUP = "Wet-Sensitive Rocks"
FAST_DRYING_GROUP = "Fast-Drying Rocks"
MEDIUM_DRYING_GROUP = "Medium-Drying Rocks"
SLOW_DRYING_GROUP = "Slow-Drying Rocks"

ROCK_TYPES: list[RockType] = [
    RockType(
        name="Sandstone",
        base_drying_hours=36,
        porosity_percent=20,
        is_wet_sensitive=True,
        group_name=WET_SENSITIVE_GROUP,
        description="Porous sedimentary rock, holds are fragile when wet",
    ),
    RockType(
        name="Arkose",
        base_drying_hours=36,
        porosity_percent=18,
        is_wet_sensitive=True,
        group_name=WET_SENSITIVE_GROUP,
        description="Feldspar-rich sandstone",
    ),
    RockType(
        name="Graywacke",
        base_drying_hours=30,
        porosity_percent=15,
        is_wet_sensitive=True,
        group_name=WET_SENSITIVE_GROUP,
        description="Poorly sorted sandstone",
    ),
    RockType(
        name="Granite",
        base_drying_hours=6,
        porosity_percent=1,
        group_name=FAST_DRYING_GROUP,
    ),
    RockType(
        name="Granodiorite",
        base_drying_hours=6,
        porosity_percent=1.2,
        group_name=FAST_DRYING_GROUP,
    ),
    RockType(
        name="Tonalite",
        base_drying_hours=6.5,
        porosity_percent=1.5,
        group_name=FAST_DRYING_GROUP,
    ),
    RockType(
        name="Rhyolite",
        base_drying_hours=8,
        porosity_percent=7,
        group_name=FAST_DRYING_GROUP,
    ),
    RockType(
        name="Basalt",
        base_drying_hours=10,
        porosity_percent=5,
        group_name=MEDIUM_DRYING_GROUP,
    ),
    RockType(
        name="Andesite",
        base_drying_hours=10,
        porosity_percent=6,
        group_name=MEDIUM_DRYING_GROUP,
    ),
    RockType(
        name="Schist",
        base_drying_hours=12,
        porosity_percent=3.5,
        group_name=MEDIUM_DRYING_GROUP,
    ),
    RockType(
        name="Phyllite",
        base_drying_hours=20,
        porosity_percent=10,
        group_name=SLOW_DRYING_GROUP,
    ),
    RockType(
        name="Argillite",
        base_drying_hours=24,
        porosity_percent=12,
        group_name=SLOW_DRYING_GROUP,
    ),
    RockType(
        name="Chert",
        base_drying_hours=14,
        porosity_percent=3,
        group_name=SLOW_DRYING_GROUP,
    ),
    RockType(
        name="Metavolcanic",
        base_drying_hours=14,
        porosity_percent=4,
        group_name=SLOW_DRYING_GROUP,
    ),
]

_ROCK_TYPES_BY_NAME = {rock.name.lower(): rock for rock in ROCK_TYPES}


def get_rock_type(name: str) -> RockType | None:
    """Look up a catalog rock type by name, ignoring case."""
    return _ROCK_TYPES_BY_NAME.get(name.strip().lower())
