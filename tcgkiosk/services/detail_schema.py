"""
Per-game schema registry.

Maps a game directory slug to its type filter configuration and the ordered
list of detail fields shown in the card overlay.

Games are recognized by substring markers in the lowercased slug, checked in
a FIXED order (first match wins):

    1. "pokemon"    -> KnownGame.POKEMON
    2. "one-piece"  -> KnownGame.ONE_PIECE
    3. "riftbound"  -> KnownGame.RIFTBOUND

Anything else gets KnownGame.GENERIC. A slug containing two markers, e.g.
"pokemon-one-piece-crossover", resolves to the one checked first (POKEMON).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from tcgkiosk.models.catalog import MatchMode, TypeOption

DetailSource = Literal["card", "set_name", "card_set_name", "game"]


@dataclass(frozen=True, slots=True)
class TypeFilterConfig:
    """
    How the type filter of a game behaves.

    Attributes:
        label: Filter label shown in the UI ("Type", "Color", "Domain")
        field: Raw card field the values are read from ("" disables the filter)
        options: Fixed choices, empty when choices come from the data
        match_mode: "exact" equality or "contains" substring matching
        case_insensitive: Compare and deduplicate values case-insensitively
    """

    label: str
    field: str
    options: tuple[TypeOption, ...] = ()
    match_mode: MatchMode = "exact"
    case_insensitive: bool = False


@dataclass(frozen=True, slots=True)
class DetailField:
    """
    One detail row definition.

    Attributes:
        source: Where the value comes from (card field, set label, game label)
        label: Row label
        key: Card field name, only for source="card"
        format: "list" joins list values with ", "
    """

    source: DetailSource
    label: str
    key: str = ""
    format: str = ""


@dataclass(frozen=True)
class GameSchema:
    """Immutable per-game configuration."""

    type_filter: TypeFilterConfig
    detail_fields: tuple[DetailField, ...]
    # Game ships sets/en.json with names, codes and release order
    has_set_index: bool = False
    # Only sets declared after this id in the set index are loaded
    set_index_sentinel: str | None = None
    # Card "id" values look like "<set id>-<number>" and are shown as "<code>-<number>"
    hyphenated_identifier: bool = False
    identifier_field: str = "id"
    overlay_asset: str = ""
    extra_overlay_markers: tuple[str, ...] = field(default_factory=tuple)


def _options(*values: str) -> tuple[TypeOption, ...]:
    return tuple(TypeOption(value=v.lower(), label=v) for v in values)


POKEMON_SCHEMA = GameSchema(
    type_filter=TypeFilterConfig(label="Type", field="types"),
    detail_fields=(
        DetailField(source="card", key="name", label="Name"),
        DetailField(source="set_name", label="Source Set"),
        DetailField(source="card", key="id", label="ID"),
        DetailField(source="card", key="supertype", label="Supertype"),
        DetailField(source="card", key="types", label="Types", format="list"),
    ),
    has_set_index=True,
    set_index_sentinel="swshp",
    hyphenated_identifier=True,
    overlay_asset="overlay/pokemon-card-back.png",
)

ONE_PIECE_SCHEMA = GameSchema(
    type_filter=TypeFilterConfig(
        label="Color",
        field="color",
        options=_options("Black", "Blue", "Green", "Purple", "Red", "Yellow"),
        match_mode="contains",
        case_insensitive=True,
    ),
    detail_fields=(
        DetailField(source="card", key="name", label="Name"),
        DetailField(source="card_set_name", label="Source Set"),
        DetailField(source="set_name", label="Source Set"),
        DetailField(source="card", key="code", label="Code"),
        DetailField(source="card", key="rarity", label="Rarity"),
        DetailField(source="card", key="type", label="Type"),
        DetailField(source="card", key="color", label="Color"),
    ),
    overlay_asset="overlay/one-piece-card-back.png",
)

RIFTBOUND_SCHEMA = GameSchema(
    type_filter=TypeFilterConfig(
        label="Domain",
        field="domain",
        options=_options("Body", "Calm", "Chaos", "Fury", "Mind", "Order", "None"),
        match_mode="contains",
        case_insensitive=True,
    ),
    detail_fields=(
        DetailField(source="card", key="name", label="Name"),
        DetailField(source="card_set_name", label="Source Set"),
        DetailField(source="card", key="number", label="Number"),
        DetailField(source="card", key="rarity", label="Rarity"),
        DetailField(source="card", key="cardType", label="Card Type"),
        DetailField(source="card", key="domain", label="Domain"),
    ),
    overlay_asset="overlay/riftbound-card-back.png",
    extra_overlay_markers=("league-of-legends",),
)

GENERIC_SCHEMA = GameSchema(
    type_filter=TypeFilterConfig(label="Type", field=""),
    detail_fields=(
        DetailField(source="card", key="name", label="Name"),
        DetailField(source="set_name", label="Source Set"),
        DetailField(source="card", key="id", label="ID"),
    ),
)


class KnownGame(Enum):
    """Games with a dedicated schema; GENERIC covers everything else."""

    POKEMON = ("pokemon", POKEMON_SCHEMA)
    ONE_PIECE = ("one-piece", ONE_PIECE_SCHEMA)
    RIFTBOUND = ("riftbound", RIFTBOUND_SCHEMA)
    GENERIC = ("", GENERIC_SCHEMA)

    def __init__(self, marker: str, schema: GameSchema) -> None:
        self.marker = marker
        self.schema = schema


# Order matters - check by priority order (first match wins)
MATCH_ORDER: tuple[KnownGame, ...] = (
    KnownGame.POKEMON,
    KnownGame.ONE_PIECE,
    KnownGame.RIFTBOUND,
)


def match_game(game_slug: str) -> KnownGame:
    """Resolve a game directory slug to its known game."""
    slug = (game_slug or "").lower()

    for game in MATCH_ORDER:
        if game.marker in slug:
            return game

    return KnownGame.GENERIC


def get_schema(game_slug: str) -> GameSchema:
    return match_game(game_slug).schema


def type_filter_config(game_slug: str) -> TypeFilterConfig:
    """Type filter configuration for a game slug."""
    return get_schema(game_slug).type_filter


def detail_field_definitions(game_slug: str) -> tuple[DetailField, ...]:
    """Ordered detail field definitions for a game slug."""
    return get_schema(game_slug).detail_fields


def overlay_image_url(game_slug: str, asset_base_url: str) -> str:
    """
    Card-back overlay image for a game, or "" when the game has none.

    Overlay matching also honours each schema's extra markers, so a
    "league-of-legends" directory shares the Riftbound card back.
    """
    slug = (game_slug or "").lower()
    base = asset_base_url if asset_base_url.endswith("/") else asset_base_url + "/"

    for game in MATCH_ORDER:
        markers = (game.marker, *game.schema.extra_overlay_markers)
        if any(marker in slug for marker in markers):
            asset = game.schema.overlay_asset
            return f"{base}{asset}" if asset else ""

    return ""
