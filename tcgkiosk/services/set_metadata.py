"""
Set metadata resolver.

Loads the optional per-game set index (sets/en.json) and caches names,
short codes, the allowed-set restriction and display order per game.

A missing, unreadable or malformed index is treated as absent: the game
gets empty metadata, meaning no restriction and alphabetical set order.
"""

import json
import logging
from pathlib import Path
from typing import Any

from tcgkiosk.models.set_metadata import EMPTY_SET_METADATA, SetMetadata
from tcgkiosk.services.detail_schema import get_schema
from tcgkiosk.services.labels import humanize_label

logger = logging.getLogger(__name__)

SET_INDEX_RELATIVE_PATH = Path("sets") / "en.json"


def _scalar_text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def _read_set_index(path: Path) -> list[Any] | None:
    """Read the set index array, or None when it is missing or malformed."""
    if not path.is_file():
        return None

    try:
        with open(path, encoding="utf-8") as f:
            decoded = json.load(f)
    except OSError as e:
        logger.warning("Set index %s is unreadable: %s", path, e)
        return None
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Set index %s is malformed: %s", path, e)
        return None

    if not decoded or not isinstance(decoded, list):
        logger.warning("Set index %s is not a non-empty JSON array", path)
        return None

    return decoded


def parse_set_index(entries: list[Any], sentinel: str | None = None) -> SetMetadata:
    """
    Build SetMetadata from decoded set index entries.

    Args:
        entries: Set index entries in declaration (release) order
        sentinel: Set id marking the restriction threshold; only sets declared
            strictly after it are allowed. No restriction when absent.

    Returns:
        SetMetadata with names, codes, and the allowed set/order when the
        sentinel was found.
    """
    names: dict[str, str] = {}
    codes: dict[str, str] = {}
    declared: list[str] = []
    threshold: int | None = None

    for entry in entries:
        if not isinstance(entry, dict) or "id" not in entry:
            continue

        set_id = _scalar_text(entry["id"]).lower()
        if not set_id:
            continue

        name = _scalar_text(entry.get("name")) or humanize_label(set_id)
        names[set_id] = name

        code = _scalar_text(entry.get("ptcgoCode"))
        if code:
            codes[set_id] = code.upper()

        declared.append(set_id)
        if sentinel is not None and set_id == sentinel:
            threshold = len(declared) - 1

    if threshold is None:
        return SetMetadata(names=names, codes=codes)

    allowed_ids = declared[threshold + 1 :]
    order = tuple(names.get(set_id) or humanize_label(set_id) for set_id in allowed_ids)

    return SetMetadata(
        names=names,
        codes=codes,
        allowed=frozenset(allowed_ids),
        order=order,
    )


class SetMetadataResolver:
    """
    Per-game set metadata, memoized by lowercased game slug.

    Metadata is computed on first access and kept until clear() is called.
    """

    def __init__(self) -> None:
        self._cache: dict[str, SetMetadata] = {}

    def resolve(self, game_slug: str, game_dir: Path) -> SetMetadata:
        """Get (and cache) set metadata for a game directory."""
        slug = game_slug.lower()

        cached = self._cache.get(slug)
        if cached is not None:
            return cached

        metadata = self._load(slug, game_dir)
        self._cache[slug] = metadata
        return metadata

    def _load(self, slug: str, game_dir: Path) -> SetMetadata:
        schema = get_schema(slug)
        if not schema.has_set_index:
            return EMPTY_SET_METADATA

        entries = _read_set_index(game_dir / SET_INDEX_RELATIVE_PATH)
        if entries is None:
            logger.debug("No usable set index for %s", slug)
            return EMPTY_SET_METADATA

        metadata = parse_set_index(entries, schema.set_index_sentinel)
        logger.debug(
            "Loaded %d sets for %s (restricted=%s)",
            len(metadata.names),
            slug,
            metadata.restricts_sets,
        )
        return metadata

    def cached(self, game_slug: str) -> SetMetadata:
        """Cached metadata for a game, empty when not resolved yet."""
        return self._cache.get(game_slug.lower(), EMPTY_SET_METADATA)

    def resolve_set_label(self, game_slug: str, set_id: Any, fallback: str = "") -> str:
        """
        Display name for a set id.

        Uses the cached set index name, else the humanized fallback, else the
        humanized set id.
        """
        set_key = _scalar_text(set_id).lower()

        name = self.cached(game_slug).names.get(set_key)
        if name:
            return name

        if fallback:
            return humanize_label(fallback)

        return humanize_label(set_key)

    def resolve_set_code(self, game_slug: str, set_id: Any) -> str:
        """Short code for a set id, or "" when unknown."""
        set_key = _scalar_text(set_id).lower()
        return self.cached(game_slug).codes.get(set_key, "")

    def clear(self) -> None:
        self._cache.clear()
