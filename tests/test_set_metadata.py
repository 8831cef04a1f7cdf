from pathlib import Path
from typing import Any

import pytest
from conftest import write_json

from tcgkiosk.models.set_metadata import EMPTY_SET_METADATA, SetMetadata
from tcgkiosk.services.set_metadata import SetMetadataResolver, parse_set_index


class TestParseSetIndex:
    def test_names_and_codes(self, pokemon_sets: list[dict[str, Any]]) -> None:
        metadata = parse_set_index(pokemon_sets)

        assert metadata.names["base1"] == "Base"
        assert metadata.codes["base1"] == "BS"
        # Codes are upper-cased
        assert metadata.codes["swsh2"] == "RCL"
        # Missing name falls back to the humanized id
        assert metadata.names["swsh3"] == "Swsh3"
        assert "swsh3" not in metadata.codes

    def test_no_sentinel_means_no_restriction(self, pokemon_sets: list[dict[str, Any]]) -> None:
        metadata = parse_set_index(pokemon_sets)

        assert metadata.allowed is None
        assert metadata.order == ()
        assert metadata.permits("base1")

    def test_sentinel_allows_later_sets(self, pokemon_sets: list[dict[str, Any]]) -> None:
        metadata = parse_set_index(pokemon_sets, sentinel="swshp")

        assert metadata.allowed == frozenset({"swsh1", "swsh2", "swsh3"})
        assert metadata.order == ("Sword & Shield", "Rebel Clash", "Swsh3")
        assert not metadata.permits("base1")
        assert not metadata.permits("swshp")

    def test_sentinel_last_yields_empty_allowed(self) -> None:
        metadata = parse_set_index([{"id": "base1"}, {"id": "swshp"}], sentinel="swshp")

        assert metadata.allowed == frozenset()
        assert not metadata.permits("base1")

    def test_ids_are_lowercased(self) -> None:
        metadata = parse_set_index([{"id": "SWSH1", "name": "Sword & Shield", "ptcgoCode": "SSH"}])

        assert metadata.names == {"swsh1": "Sword & Shield"}

    def test_invalid_entries_skipped(self) -> None:
        metadata = parse_set_index(["junk", {"name": "No id"}, {"id": ""}, {"id": "sv1"}])

        assert list(metadata.names) == ["sv1"]


class TestSetMetadataResolver:
    def test_reads_pokemon_index(self, card_tree: Path) -> None:
        resolver = SetMetadataResolver()

        metadata = resolver.resolve("pokemon", card_tree / "pokemon")

        assert metadata.codes["swsh1"] == "SSH"
        assert metadata.allowed == frozenset({"swsh1", "swsh2", "swsh3"})

    def test_cached_per_lowercased_slug(self, card_tree: Path) -> None:
        resolver = SetMetadataResolver()

        first = resolver.resolve("pokemon", card_tree / "pokemon")
        (card_tree / "pokemon" / "sets" / "en.json").unlink()
        second = resolver.resolve("POKEMON", card_tree / "pokemon")

        assert second is first

    def test_clear_forces_reload(self, card_tree: Path) -> None:
        resolver = SetMetadataResolver()
        resolver.resolve("pokemon", card_tree / "pokemon")

        (card_tree / "pokemon" / "sets" / "en.json").unlink()
        resolver.clear()

        assert resolver.resolve("pokemon", card_tree / "pokemon").names == {}

    def test_games_without_set_index_policy(self, tmp_path: Path) -> None:
        """Only games whose schema declares a set index read sets/en.json."""
        write_json(tmp_path / "one-piece" / "sets" / "en.json", [{"id": "op01", "name": "X"}])
        resolver = SetMetadataResolver()

        metadata = resolver.resolve("one-piece", tmp_path / "one-piece")

        assert metadata.names == {}
        assert metadata.allowed is None

    def test_missing_index(self, tmp_path: Path) -> None:
        resolver = SetMetadataResolver()

        metadata = resolver.resolve("pokemon", tmp_path / "pokemon")

        assert metadata.names == {}
        assert metadata.codes == {}
        assert metadata.allowed is None
        assert metadata.order == ()

    def test_malformed_index_treated_as_absent(self, tmp_path: Path) -> None:
        index = tmp_path / "pokemon" / "sets" / "en.json"
        index.parent.mkdir(parents=True)
        index.write_text("[{ broken", encoding="utf-8")
        resolver = SetMetadataResolver()

        metadata = resolver.resolve("pokemon", tmp_path / "pokemon")

        assert metadata.names == {}
        assert metadata.allowed is None

    def test_non_array_index_treated_as_absent(self, tmp_path: Path) -> None:
        write_json(tmp_path / "pokemon" / "sets" / "en.json", {"id": "base1"})
        resolver = SetMetadataResolver()

        assert resolver.resolve("pokemon", tmp_path / "pokemon").names == {}


class TestResolveSetLabel:
    def test_uses_cached_name(self, card_tree: Path) -> None:
        resolver = SetMetadataResolver()
        resolver.resolve("pokemon", card_tree / "pokemon")

        assert resolver.resolve_set_label("pokemon", "SWSH2", "swsh2") == "Rebel Clash"

    def test_humanized_fallback(self) -> None:
        resolver = SetMetadataResolver()

        assert resolver.resolve_set_label("one-piece", "op01", "romance_dawn-op01") == (
            "Romance Dawn Op01"
        )

    def test_humanized_set_id_without_fallback(self) -> None:
        resolver = SetMetadataResolver()

        assert resolver.resolve_set_label("digimon", "bt-01") == "Bt 01"


class TestResolveSetCode:
    def test_known_code(self, card_tree: Path) -> None:
        resolver = SetMetadataResolver()
        resolver.resolve("pokemon", card_tree / "pokemon")

        assert resolver.resolve_set_code("Pokemon", "Base1") == "BS"

    def test_unknown_code(self, card_tree: Path) -> None:
        resolver = SetMetadataResolver()
        resolver.resolve("pokemon", card_tree / "pokemon")

        assert resolver.resolve_set_code("pokemon", "swsh3") == ""
        assert resolver.resolve_set_code("riftbound", "ogn") == ""


class TestSetMetadataImmutability:
    def test_names_and_codes_are_read_only(self, pokemon_sets: list[dict[str, Any]]) -> None:
        metadata = parse_set_index(pokemon_sets)

        with pytest.raises(TypeError):
            metadata.names["base1"] = "Changed"  # type: ignore[index]
        with pytest.raises(TypeError):
            metadata.codes["base1"] = "XX"  # type: ignore[index]

    def test_shared_empty_metadata_cannot_be_mutated(self, tmp_path: Path) -> None:
        """Games without a set index share one metadata object."""
        resolver = SetMetadataResolver()
        first = resolver.resolve("one-piece", tmp_path / "one-piece")
        second = resolver.resolve("riftbound", tmp_path / "riftbound")

        assert first is second is EMPTY_SET_METADATA
        with pytest.raises(TypeError):
            first.names["op01"] = "Romance Dawn"  # type: ignore[index]
        assert second.names == {}

    def test_source_dicts_are_copied(self) -> None:
        names = {"sv1": "Scarlet & Violet"}
        metadata = SetMetadata(names=names)

        names["sv2"] = "Paldea Evolved"

        assert dict(metadata.names) == {"sv1": "Scarlet & Violet"}
