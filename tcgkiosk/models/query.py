from dataclasses import dataclass, field

from tcgkiosk.models.card import CardView


@dataclass(frozen=True, slots=True)
class Query:
    """
    A browse request over the catalog.

    Attributes:
        game_slug: Selected game directory slug, None for no selection
        set_name: Exact set label to keep, None or "" for all sets
        type_value: Type/color/domain value to match, None or "" for all
        search_text: Case-insensitive substring matched against card names
        page: Requested page, 1-based
        page_size: Cards per page
    """

    game_slug: str | None = None
    set_name: str | None = None
    type_value: str | None = None
    search_text: str = ""
    page: int = 1
    page_size: int = 24

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")


@dataclass(frozen=True, slots=True)
class ResultPage:
    """One page of filtered cards plus pagination metadata."""

    items: tuple[CardView, ...] = field(default_factory=tuple)
    total_pages: int = 0
    page: int = 1
    total_items: int = 0
