import json
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from tcgkiosk.main import app
from tcgkiosk.services.catalog_loader import CatalogCache, get_catalog_cache


def write_json(path: Path, data: Any) -> Path:
    """Write JSON data, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def make_card(card_id: str, name: str, **fields: Any) -> dict[str, Any]:
    """A raw card record with a small image unless images are given."""
    card: dict[str, Any] = {
        "id": card_id,
        "name": name,
        "images": {"small": f"https://images.example.com/{card_id}.png"},
    }
    card.update(fields)
    return card


@pytest.fixture(autouse=True)
def clear_catalog_cache():
    """Reset the process-wide catalog cache between tests."""
    get_catalog_cache.cache_clear()
    yield
    get_catalog_cache.cache_clear()


@pytest.fixture
def pokemon_sets() -> list[dict[str, Any]]:
    """Pokémon set index in release order; swshp is the restriction sentinel."""
    return [
        {"id": "base1", "name": "Base", "ptcgoCode": "BS"},
        {"id": "swshp", "name": "SWSH Black Star Promos", "ptcgoCode": "PR-SW"},
        {"id": "swsh1", "name": "Sword & Shield", "ptcgoCode": "SSH"},
        {"id": "swsh2", "name": "Rebel Clash", "ptcgoCode": "rcl"},
        {"id": "swsh3"},
    ]


@pytest.fixture
def card_tree(tmp_path: Path, pokemon_sets: list[dict[str, Any]]) -> Path:
    """
    A small card database.

    database/
        pokemon/            set index + swsh1, swsh2 (allowed), base1 (excluded)
        one-piece/          one set
        riftbound/          one set plus a malformed file
        broken-game/        only a malformed file -> omitted
        no-cards/           no cards directory -> omitted
    """
    root = tmp_path / "database"

    write_json(root / "pokemon" / "sets" / "en.json", pokemon_sets)
    write_json(
        root / "pokemon" / "cards" / "en" / "base1.json",
        [make_card("base1-4", "Charizard", number="4", set={"id": "base1"})],
    )
    write_json(
        root / "pokemon" / "cards" / "en" / "swsh1.json",
        [
            make_card(
                "swsh1-1",
                "Celebi V",
                number="1",
                supertype="Pokémon",
                types=["Grass"],
                images={
                    "small": "https://images.pokemontcg.io/swsh1/1.png",
                    "large": "https://images.pokemontcg.io/swsh1/1_hires.png",
                },
            ),
            make_card("swsh1-25", "Charmander", number="25", types=["Fire"]),
            {"id": "swsh1-99", "name": "No Image Card", "types": ["Water"]},
        ],
    )
    write_json(
        root / "pokemon" / "cards" / "en" / "swsh2.json",
        [make_card("swsh2-19", "Charizard", number="19", types=["Fire", "Fire"])],
    )

    write_json(
        root / "one-piece" / "cards" / "op01.json",
        [
            make_card(
                "OP01-001",
                "Roronoa Zoro",
                code="OP01-001",
                rarity="L",
                type="LEADER",
                color="Red",
                set={"name": "Romance Dawn"},
            ),
            make_card(
                "OP01-002",
                "Trafalgar Law",
                code="OP01-002",
                color=["Red", "green", "RED"],
                set={"id": "op01"},
            ),
        ],
    )

    write_json(
        root / "riftbound" / "cards" / "ogn.json",
        [make_card("ogn-001", "Blazing Scorcher", domain="Fury", cardType="Unit")],
    )
    (root / "riftbound" / "cards" / "broken.json").write_text("{ not json", encoding="utf-8")

    (root / "broken-game" / "cards").mkdir(parents=True)
    (root / "broken-game" / "cards" / "set.json").write_text("[", encoding="utf-8")

    (root / "no-cards").mkdir()

    return root


@pytest.fixture
def catalog_cache(card_tree: Path) -> CatalogCache:
    return CatalogCache(card_tree, "/assets/")


@pytest.fixture
async def client(catalog_cache: CatalogCache):
    """Async test client serving the card_tree database."""
    app.dependency_overrides[get_catalog_cache] = lambda: catalog_cache

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
