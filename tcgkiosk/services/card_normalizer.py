"""
Card normalizer.

Turns one raw JSON card record into a CardView: image sources, deduplicated
type values and the per-game detail rows of the overlay.

INVARIANTS:
- Records without a non-empty "images" object are dropped (None)
- type_values never contains empty strings or duplicate keys
- details only contains rows with a non-empty label AND value
"""

from typing import Any

from tcgkiosk.i18n import translate
from tcgkiosk.models.card import CardView, DetailEntry
from tcgkiosk.services.detail_schema import (
    DetailField,
    TypeFilterConfig,
    get_schema,
)
from tcgkiosk.services.image_sources import resolve_image_sources
from tcgkiosk.services.labels import collapse_whitespace, humanize_label
from tcgkiosk.services.set_metadata import SetMetadataResolver

# Fields whose raw value may only be a list
_LIST_ONLY_TYPE_FIELDS = frozenset({"types"})


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_detail_value(value: Any) -> str:
    """
    Render a raw card value as display text.

    - None -> ""
    - bool -> localized "Yes" / "No"
    - scalars -> trimmed string
    - JSON objects -> "Key: value; Key: value" with humanized keys
    - JSON arrays -> one rendered item per line
    Empty items are skipped at every level.
    """
    if value is None:
        return ""

    if isinstance(value, bool):
        return translate("yes") if value else translate("no")

    if isinstance(value, (str, int, float)):
        return _to_text(value).strip()

    if isinstance(value, dict):
        parts: list[str] = []
        for key, item in value.items():
            rendered = normalize_detail_value(item)
            if not rendered:
                continue
            label = humanize_label(key) if isinstance(key, str) else ""
            parts.append(f"{label}: {rendered}" if label else rendered)
        return "; ".join(parts)

    if isinstance(value, (list, tuple)):
        items = [normalize_detail_value(item) for item in value]
        return "\n".join(item for item in items if item)

    return ""


def extract_type_values(card: dict[str, Any], config: TypeFilterConfig) -> tuple[str, ...]:
    """
    Extract the filterable type values of a card.

    Args:
        card: Raw card record
        config: Type filter configuration of the card's game

    Returns:
        Whitespace-normalized, deduplicated values in first-seen order.
        With case_insensitive, duplicates are detected on lowercased keys and
        the first-seen casing is kept.
    """
    if not config.field:
        return ()

    raw = card.get(config.field)
    if not raw:
        return ()

    if isinstance(raw, list):
        values: list[Any] = raw
    elif config.field in _LIST_ONLY_TYPE_FIELDS:
        return ()
    else:
        values = [raw]

    unique: dict[str, str] = {}
    for value in values:
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            continue

        clean = collapse_whitespace(_to_text(value))
        if not clean:
            continue

        key = clean.lower() if config.case_insensitive else clean
        if key not in unique:
            unique[key] = clean

    return tuple(unique.values())


def _lookup_field(card: dict[str, Any], key: str) -> Any:
    """Case-sensitive field lookup with a case-insensitive fallback."""
    if key in card:
        return card[key]

    target = key.lower()
    for card_key, card_value in card.items():
        if str(card_key).lower() == target:
            return card_value

    return None


class CardNormalizer:
    """Normalizes raw card records of any game into CardViews."""

    def __init__(self, set_metadata: SetMetadataResolver) -> None:
        self.set_metadata = set_metadata

    def normalize(
        self,
        card: Any,
        game_slug: str,
        set_id: str,
        set_display_name: str,
        type_config: TypeFilterConfig,
    ) -> CardView | None:
        """
        Normalize one raw record.

        Args:
            card: Raw JSON card record
            game_slug: Game directory slug
            set_id: Lowercased set id (card file stem)
            set_display_name: Resolved set label for this file
            type_config: Type filter configuration of the game

        Returns:
            CardView, or None when the record has no usable image.
        """
        if not isinstance(card, dict):
            return None

        images = card.get("images")
        if not images or not isinstance(images, dict):
            return None

        sources = resolve_image_sources(images)
        if not sources.primary:
            return None

        game = humanize_label(game_slug)

        return CardView(
            id=_to_text(card.get("id")),
            name=_to_text(card.get("name")),
            game=game,
            set=set_display_name,
            image_url=sources.primary,
            image_full_url=sources.full,
            image_srcset=sources.srcset,
            image_sizes=sources.sizes,
            type_values=extract_type_values(card, type_config),
            details=self.build_details(card, set_display_name, game, game_slug),
        )

    def build_details(
        self,
        card: dict[str, Any],
        set_name: str,
        game: str,
        game_slug: str,
    ) -> tuple[DetailEntry, ...]:
        """Resolve every detail field of the game's schema, keeping full rows only."""
        details: list[DetailEntry] = []

        for definition in get_schema(game_slug).detail_fields:
            label = definition.label.strip()
            if not label:
                continue

            value = self.resolve_detail_value(card, set_name, game, definition, game_slug).strip()
            if not value:
                continue

            details.append(DetailEntry(label=label, value=value))

        return tuple(details)

    def resolve_detail_value(
        self,
        card: dict[str, Any],
        set_name: str,
        game: str,
        definition: DetailField,
        game_slug: str,
    ) -> str:
        if definition.source == "game":
            return game.strip()

        if definition.source == "set_name":
            return set_name.strip()

        if definition.source == "card_set_name":
            return self._card_set_name(card, game_slug)

        if not definition.key:
            return ""

        value = _lookup_field(card, definition.key)
        if value is None:
            return ""

        schema = get_schema(game_slug)
        if schema.hyphenated_identifier and definition.key == schema.identifier_field:
            formatted = self.format_identifier(value, card, game_slug)
            if formatted:
                return formatted

        if definition.format == "list" and isinstance(value, list):
            parts = [normalize_detail_value(item) for item in value]
            return ", ".join(part for part in parts if part)

        return normalize_detail_value(value)

    def _card_set_name(self, card: dict[str, Any], game_slug: str) -> str:
        card_set = card.get("set")
        if not isinstance(card_set, dict):
            return ""

        name = normalize_detail_value(card_set.get("name"))
        if name:
            return name

        set_id = card_set.get("id")
        if set_id is not None:
            label = self.set_metadata.resolve_set_label(game_slug, set_id, _to_text(set_id))
            return normalize_detail_value(label)

        return ""

    def format_identifier(self, value: Any, card: dict[str, Any], game_slug: str) -> str:
        """
        Format a "<set id>-<number>" identifier as "<set code>-<number>".

        The number prefers the record's explicit "number" field over the
        identifier suffix. The set code comes from the set index; unknown
        sets fall back to the upper-cased set id.

        Examples:
            "base1-4" with code BS                -> "BS-4"
            "xy7-54" without a code               -> "XY7-54"
            "55" with set {"id": "sv1"}, number 55 -> "SV1-55"
        """
        if isinstance(value, (dict, list)):
            return ""

        raw = _to_text(value).strip()
        if not raw:
            return ""

        set_identifier = ""
        number = ""

        if "-" in raw:
            prefix, _, suffix = raw.partition("-")
            set_identifier = prefix
            number = suffix.strip()

        explicit_number = _to_text(card.get("number")).strip()
        if explicit_number:
            number = explicit_number

        card_set = card.get("set")
        if not set_identifier and isinstance(card_set, dict) and card_set.get("id") is not None:
            set_identifier = _to_text(card_set["id"])

        if not set_identifier:
            return number or raw

        code = self.set_metadata.resolve_set_code(game_slug, set_identifier)
        if not code:
            upper = set_identifier.upper()
            return f"{upper}-{number}" if number else upper

        return f"{code}-{number}" if number else code
