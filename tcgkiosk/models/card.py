from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class DetailEntry:
    """A single label/value row shown in the card detail overlay."""

    label: str
    value: str


@dataclass(frozen=True, slots=True)
class ImageSources:
    """
    Image URLs selected for a card.

    Attributes:
        primary: URL shown in the grid
        full: Largest available URL, falls back to primary
        srcset: Responsive source set ("url 1x, url 2x"), may be empty
        sizes: Responsive sizes hint, only set when srcset is non-empty
    """

    primary: str = ""
    full: str = ""
    srcset: str = ""
    sizes: str = ""


@dataclass(frozen=True, slots=True)
class CardView:
    """
    A normalized, presentation-ready card.

    Attributes:
        id: Card identifier from the source record
        name: Card name
        game: Human readable game label
        set: Human readable set label
        image_url: Primary image URL (never empty)
        image_full_url: Largest image URL
        image_srcset: Responsive source set
        image_sizes: Responsive sizes hint
        type_values: Deduplicated type/color/domain values
        details: Ordered detail rows for the overlay
    """

    id: str
    name: str
    game: str
    set: str
    image_url: str
    image_full_url: str
    image_srcset: str = ""
    image_sizes: str = ""
    type_values: tuple[str, ...] = field(default_factory=tuple)
    details: tuple[DetailEntry, ...] = field(default_factory=tuple)
