"""
Static UI string table.

Translation lookup is owned by the hosting page; this table carries the
English defaults handed to the renderer with every catalog snapshot.
"""

STRINGS: dict[str, str] = {
    "allGames": "All Games",
    "allSets": "All Sets",
    "allTypes": "All Types",
    "selectGame": "Select a game to start browsing.",
    "noCards": "No cards match your filters.",
    "previous": "Previous",
    "next": "Next",
    "pageStatus": "Page %1$s of %2$s",
    "pageSize": "Cards per page",
    "search": "Search cards…",
    "searchLabel": "Search by card name",
    "game": "Trading Card Game",
    "set": "Set",
    "name": "Name",
    "sourceSet": "Source Set",
    "close": "Close",
    "untitled": "Untitled Card",
    "imageAlt": "Trading card image",
    "imageFailed": "Image unavailable",
    "yes": "Yes",
    "no": "No",
}

# Energy types that have a dedicated icon asset
POKEMON_TYPE_ICONS = (
    "Colorless",
    "Darkness",
    "Dragon",
    "Fairy",
    "Fighting",
    "Fire",
    "Grass",
    "Lightning",
    "Metal",
    "Psychic",
    "Water",
)


def translate(key: str) -> str:
    """Look up a UI string, falling back to the key itself."""
    return STRINGS.get(key, key)


def type_icon_map(asset_base_url: str) -> dict[str, str]:
    """Map Pokémon type values to icon URLs under the asset base URL."""
    base = asset_base_url if asset_base_url.endswith("/") else asset_base_url + "/"
    return {name: f"{base}icons/pokemon/{name.lower()}.png" for name in POKEMON_TYPE_ICONS}
