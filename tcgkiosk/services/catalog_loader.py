"""
Catalog loader.

Walks the card database tree and builds the immutable Catalog snapshot:

    <root>/<game slug>/cards/**/<set id>.json   (JSON array of card records)
    <root>/<game slug>/sets/en.json             (optional set index)

Every card file is collected, validated and accumulated into a LoadReport.
Defective files are skipped and logged; nothing aborts the build.
"""

import json
import logging
import os
import threading
from functools import lru_cache
from pathlib import Path
from typing import Any

from tcgkiosk.config import settings
from tcgkiosk.models.card import CardView
from tcgkiosk.models.catalog import (
    Catalog,
    GameGroup,
    LoadOutcome,
    LoadReport,
    LoadStatus,
)
from tcgkiosk.models.set_metadata import SetMetadata
from tcgkiosk.services.card_normalizer import CardNormalizer
from tcgkiosk.services.detail_schema import overlay_image_url, type_filter_config
from tcgkiosk.services.labels import humanize_label
from tcgkiosk.services.set_metadata import SetMetadataResolver

logger = logging.getLogger(__name__)

CARDS_DIRNAME = "cards"


def _list_game_directories(root: Path) -> list[Path]:
    try:
        return sorted((p for p in root.iterdir() if p.is_dir()), key=lambda p: p.name)
    except OSError as e:
        logger.warning("Card database %s is unreadable: %s", root, e)
        return []


def _list_card_files(cards_dir: Path) -> list[Path]:
    """All *.json files beneath a cards directory, depth-first and sorted."""
    found: list[Path] = []

    def on_error(error: OSError) -> None:
        logger.warning("Skipping unreadable directory %s: %s", error.filename, error)

    for dirpath, dirnames, filenames in os.walk(cards_dir, onerror=on_error):
        dirnames.sort()
        for filename in sorted(filenames):
            if Path(filename).suffix.lower() == ".json":
                found.append(Path(dirpath) / filename)

    return found


def get_last_modified(root: Path) -> int:
    """Newest modification time (whole seconds) of anything beneath root."""
    if not root.is_dir():
        return 0

    latest = 0.0
    for dirpath, dirnames, filenames in os.walk(root):
        for name in (*dirnames, *filenames):
            try:
                mtime = (Path(dirpath) / name).stat().st_mtime
            except OSError:
                continue
            latest = max(latest, mtime)

    return int(latest)


def _read_card_file(path: Path) -> tuple[list[Any] | None, LoadStatus, str]:
    try:
        with open(path, encoding="utf-8") as f:
            decoded = json.load(f)
    except OSError as e:
        return None, LoadStatus.UNREADABLE, str(e)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return None, LoadStatus.MALFORMED, str(e)

    if not decoded or not isinstance(decoded, list):
        return None, LoadStatus.EMPTY, "not a non-empty JSON array"

    return decoded, LoadStatus.LOADED, ""


class CatalogLoader:
    """
    Builds Catalog snapshots from a card database directory.

    Args:
        set_metadata: Resolver shared with the normalizer for set labels and codes
        asset_base_url: Base URL for overlay images
    """

    def __init__(
        self,
        set_metadata: SetMetadataResolver | None = None,
        asset_base_url: str | None = None,
    ) -> None:
        self.set_metadata = set_metadata or SetMetadataResolver()
        self.normalizer = CardNormalizer(self.set_metadata)
        self.asset_base_url = asset_base_url if asset_base_url is not None else settings.asset_base_url

    def load(self, root: Path) -> Catalog:
        """
        Load every game under root.

        An absent or unreadable root yields an empty catalog. Games without
        any surviving card are omitted.
        """
        root = Path(root)
        last_modified = get_last_modified(root)

        if not root.is_dir():
            logger.warning("Card database not found at %s", root)
            return Catalog(last_modified=last_modified)

        groups: list[GameGroup] = []
        outcomes: list[LoadOutcome] = []

        for game_dir in _list_game_directories(root):
            group, game_outcomes = self.load_game(game_dir)
            outcomes.extend(game_outcomes)
            if group is None:
                logger.debug("Omitting %s: no cards loaded", game_dir.name)
                continue
            groups.append(group)

        report = LoadReport(outcomes=tuple(outcomes))
        logger.info(
            "Loaded %d cards in %d games (%d files loaded, %d skipped, %d records dropped)",
            report.total_cards,
            len(groups),
            report.loaded_files,
            report.skipped_files,
            report.dropped_records,
        )

        return Catalog(groups=tuple(groups), last_modified=last_modified, report=report)

    def load_game(self, game_dir: Path) -> tuple[GameGroup | None, list[LoadOutcome]]:
        """Load one game directory into a GameGroup plus per-file outcomes."""
        slug = game_dir.name
        cards_dir = game_dir / CARDS_DIRNAME

        if not cards_dir.is_dir():
            return None, []

        config = type_filter_config(slug)
        metadata = self.set_metadata.resolve(slug, game_dir)

        cards: list[CardView] = []
        outcomes: list[LoadOutcome] = []

        for path in _list_card_files(cards_dir):
            outcome, file_cards = self._load_card_file(path, slug, metadata)
            outcomes.append(outcome)
            cards.extend(file_cards)

        if not cards:
            return None, outcomes

        group = GameGroup(
            slug=slug,
            label=humanize_label(slug),
            type_label=config.label,
            type_options=config.options,
            type_match_mode=config.match_mode,
            type_case_insensitive=config.case_insensitive,
            overlay_image=overlay_image_url(slug, self.asset_base_url),
            set_order=metadata.order,
            cards=tuple(cards),
        )
        return group, outcomes

    def _load_card_file(
        self,
        path: Path,
        slug: str,
        metadata: SetMetadata,
    ) -> tuple[LoadOutcome, list[CardView]]:
        set_stem = path.stem
        set_id = set_stem.lower()

        if not metadata.permits(set_id):
            logger.debug("Skipping %s: set %s not allowed for %s", path, set_id, slug)
            return (
                LoadOutcome(slug, path, LoadStatus.SKIPPED_SET, reason=f"set {set_id} not allowed"),
                [],
            )

        records, status, reason = _read_card_file(path)
        if records is None:
            if status is LoadStatus.EMPTY:
                logger.debug("Skipping %s: %s", path, reason)
            else:
                logger.warning("Skipping %s card file %s: %s", status.value, path, reason)
            return LoadOutcome(slug, path, status, reason=reason), []

        config = type_filter_config(slug)
        set_name = self.set_metadata.resolve_set_label(slug, set_id, set_stem)

        cards: list[CardView] = []
        dropped = 0
        for record in records:
            card = self.normalizer.normalize(record, slug, set_id, set_name, config)
            if card is None:
                dropped += 1
                continue
            cards.append(card)

        if dropped:
            logger.debug("Dropped %d records without images from %s", dropped, path)

        return LoadOutcome(slug, path, LoadStatus.LOADED, cards=len(cards), dropped=dropped), cards


def load_catalog(root: Path, set_metadata: SetMetadataResolver | None = None) -> Catalog:
    """Build a Catalog for the tree at root."""
    return CatalogLoader(set_metadata).load(root)


class CatalogCache:
    """
    Process-wide memoized Catalog.

    The catalog is built lazily on first access and kept until invalidate()
    is called. Invalidating also drops cached set metadata so a rebuild
    re-reads set indexes.
    """

    def __init__(self, root: Path, asset_base_url: str | None = None) -> None:
        self.root = Path(root)
        self.set_metadata = SetMetadataResolver()
        self.loader = CatalogLoader(self.set_metadata, asset_base_url)
        self._catalog: Catalog | None = None
        self._lock = threading.Lock()

    def get(self) -> Catalog:
        catalog = self._catalog
        if catalog is not None:
            return catalog

        with self._lock:
            if self._catalog is None:
                self._catalog = self.loader.load(self.root)
            return self._catalog

    def invalidate(self) -> None:
        with self._lock:
            self._catalog = None
            self.set_metadata.clear()

    @property
    def is_loaded(self) -> bool:
        return self._catalog is not None


@lru_cache(maxsize=1)
def get_catalog_cache() -> CatalogCache:
    """
    Get the process-wide catalog cache.

    Usage in FastAPI:
        @app.get("/catalog")
        def catalog(cache: CatalogCache = Depends(get_catalog_cache)):
            ...
    """
    return CatalogCache(settings.database_path, settings.asset_base_url)
