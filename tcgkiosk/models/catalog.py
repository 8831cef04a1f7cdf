from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Literal

from tcgkiosk.models.card import CardView

MatchMode = Literal["exact", "contains"]


@dataclass(frozen=True, slots=True)
class TypeOption:
    """A fixed choice in a game's type filter."""

    value: str
    label: str


@dataclass(frozen=True)
class GameGroup:
    """All cards of one game directory plus its filter configuration."""

    slug: str
    label: str
    type_label: str
    type_options: tuple[TypeOption, ...]
    type_match_mode: MatchMode
    type_case_insensitive: bool
    overlay_image: str
    set_order: tuple[str, ...]
    cards: tuple[CardView, ...]


class LoadStatus(str, Enum):
    """Outcome of loading one card file."""

    LOADED = "loaded"
    SKIPPED_SET = "skipped_set"
    UNREADABLE = "unreadable"
    MALFORMED = "malformed"
    EMPTY = "empty"


@dataclass(frozen=True, slots=True)
class LoadOutcome:
    """
    What happened to one card file during a catalog build.

    Attributes:
        game_slug: Game directory the file belongs to
        path: Path of the JSON file
        status: Classification of the outcome
        cards: Number of cards normalized from the file
        dropped: Number of records dropped for missing image data
        reason: Human readable explanation for skips
    """

    game_slug: str
    path: Path
    status: LoadStatus
    cards: int = 0
    dropped: int = 0
    reason: str = ""


@dataclass(frozen=True)
class LoadReport:
    """Accumulated per-file outcomes of a catalog build."""

    outcomes: tuple[LoadOutcome, ...] = ()

    @property
    def loaded_files(self) -> int:
        return sum(1 for o in self.outcomes if o.status is LoadStatus.LOADED)

    @property
    def skipped_files(self) -> int:
        return sum(1 for o in self.outcomes if o.status is not LoadStatus.LOADED)

    @property
    def total_cards(self) -> int:
        return sum(o.cards for o in self.outcomes)

    @property
    def dropped_records(self) -> int:
        return sum(o.dropped for o in self.outcomes)


@dataclass(frozen=True)
class Catalog:
    """
    Immutable snapshot of every game group.

    last_modified is the newest mtime in the source tree and is only a
    cache-busting signal for clients.
    """

    groups: tuple[GameGroup, ...] = ()
    last_modified: int = 0
    report: LoadReport = field(default_factory=LoadReport)

    def get_group(self, slug: str) -> GameGroup | None:
        for group in self.groups:
            if group.slug == slug:
                return group
        return None
