import pytest

from tcgkiosk.services.detail_schema import (
    MATCH_ORDER,
    KnownGame,
    detail_field_definitions,
    match_game,
    overlay_image_url,
    type_filter_config,
)


class TestMatchGame:
    @pytest.mark.parametrize(
        "slug,expected",
        [
            ("pokemon", KnownGame.POKEMON),
            ("pokemon-base-set", KnownGame.POKEMON),
            ("Pokemon-TCG", KnownGame.POKEMON),
            ("one-piece", KnownGame.ONE_PIECE),
            ("one-piece-card-game", KnownGame.ONE_PIECE),
            ("riftbound", KnownGame.RIFTBOUND),
            ("digimon", KnownGame.GENERIC),
            ("onepiece", KnownGame.GENERIC),
            ("", KnownGame.GENERIC),
        ],
    )
    def test_markers(self, slug: str, expected: KnownGame) -> None:
        assert match_game(slug) is expected

    def test_first_marker_wins(self) -> None:
        """Slugs with two markers resolve in the fixed priority order."""
        assert match_game("one-piece-pokemon-crossover") is KnownGame.POKEMON
        assert match_game("riftbound-one-piece") is KnownGame.ONE_PIECE

    def test_match_order_is_fixed(self) -> None:
        assert MATCH_ORDER == (KnownGame.POKEMON, KnownGame.ONE_PIECE, KnownGame.RIFTBOUND)


class TestTypeFilterConfig:
    def test_pokemon(self) -> None:
        config = type_filter_config("pokemon")

        assert config.label == "Type"
        assert config.field == "types"
        assert config.options == ()
        assert config.match_mode == "exact"
        assert config.case_insensitive is False

    def test_one_piece(self) -> None:
        config = type_filter_config("one-piece")

        assert config.label == "Color"
        assert config.field == "color"
        assert [o.value for o in config.options] == [
            "black",
            "blue",
            "green",
            "purple",
            "red",
            "yellow",
        ]
        assert config.match_mode == "contains"
        assert config.case_insensitive is True

    def test_riftbound(self) -> None:
        config = type_filter_config("riftbound")

        assert config.label == "Domain"
        assert config.field == "domain"
        assert "none" in [o.value for o in config.options]
        assert config.options[0].label == "Body"
        assert config.match_mode == "contains"

    def test_unknown_game_gets_generic(self) -> None:
        config = type_filter_config("digimon")

        assert config.label == "Type"
        assert config.field == ""
        assert config.options == ()
        assert config.match_mode == "exact"


class TestDetailFieldDefinitions:
    def test_generic_fields(self) -> None:
        fields = detail_field_definitions("digimon")

        assert [(f.source, f.key) for f in fields] == [
            ("card", "name"),
            ("set_name", ""),
            ("card", "id"),
        ]

    def test_pokemon_types_use_list_format(self) -> None:
        fields = detail_field_definitions("pokemon")

        types_field = next(f for f in fields if f.key == "types")
        assert types_field.format == "list"
        assert [f.label for f in fields] == ["Name", "Source Set", "ID", "Supertype", "Types"]

    def test_one_piece_prefers_card_set_name(self) -> None:
        sources = [f.source for f in detail_field_definitions("one-piece")]

        assert sources.index("card_set_name") < sources.index("set_name")

    def test_riftbound_card_type(self) -> None:
        keys = [f.key for f in detail_field_definitions("riftbound")]

        assert "cardType" in keys
        assert "domain" in keys


class TestOverlayImageUrl:
    def test_known_games(self) -> None:
        assert overlay_image_url("pokemon", "/assets/") == "/assets/overlay/pokemon-card-back.png"
        assert (
            overlay_image_url("one-piece", "/assets") == "/assets/overlay/one-piece-card-back.png"
        )

    def test_league_of_legends_uses_riftbound_back(self) -> None:
        assert (
            overlay_image_url("league-of-legends", "/assets/")
            == "/assets/overlay/riftbound-card-back.png"
        )

    def test_unknown_game_has_no_overlay(self) -> None:
        assert overlay_image_url("digimon", "/assets/") == ""
