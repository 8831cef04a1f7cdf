from tcgkiosk.models.card import CardView, DetailEntry, ImageSources
from tcgkiosk.models.catalog import (
    Catalog,
    GameGroup,
    LoadOutcome,
    LoadReport,
    LoadStatus,
    MatchMode,
    TypeOption,
)
from tcgkiosk.models.query import Query, ResultPage
from tcgkiosk.models.set_metadata import EMPTY_SET_METADATA, SetMetadata

__all__ = [
    "Catalog",
    "CardView",
    "DetailEntry",
    "EMPTY_SET_METADATA",
    "GameGroup",
    "ImageSources",
    "LoadOutcome",
    "LoadReport",
    "LoadStatus",
    "MatchMode",
    "Query",
    "ResultPage",
    "SetMetadata",
    "TypeOption",
]
