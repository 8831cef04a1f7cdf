"""
TCG Kiosk services.

Card database loading, normalization and query evaluation.
"""

from tcgkiosk.services.card_normalizer import (
    CardNormalizer,
    extract_type_values,
    normalize_detail_value,
)
from tcgkiosk.services.catalog_loader import (
    CatalogCache,
    CatalogLoader,
    get_catalog_cache,
    get_last_modified,
    load_catalog,
)
from tcgkiosk.services.detail_schema import (
    DetailField,
    GameSchema,
    KnownGame,
    TypeFilterConfig,
    detail_field_definitions,
    match_game,
    overlay_image_url,
    type_filter_config,
)
from tcgkiosk.services.image_sources import (
    build_proxy_url,
    is_proxyable,
    resolve_image_sources,
    sanitize_url,
)
from tcgkiosk.services.query_engine import (
    evaluate,
    paginate,
    set_options,
    type_options,
    type_value_matches,
)
from tcgkiosk.services.set_metadata import SetMetadataResolver, parse_set_index

__all__ = [
    # Image sources
    "build_proxy_url",
    "is_proxyable",
    "resolve_image_sources",
    "sanitize_url",
    # Per-game schemas
    "DetailField",
    "GameSchema",
    "KnownGame",
    "TypeFilterConfig",
    "detail_field_definitions",
    "match_game",
    "overlay_image_url",
    "type_filter_config",
    # Set metadata
    "SetMetadataResolver",
    "parse_set_index",
    # Normalization
    "CardNormalizer",
    "extract_type_values",
    "normalize_detail_value",
    # Loading
    "CatalogCache",
    "CatalogLoader",
    "get_catalog_cache",
    "get_last_modified",
    "load_catalog",
    # Queries
    "evaluate",
    "paginate",
    "set_options",
    "type_options",
    "type_value_matches",
]
