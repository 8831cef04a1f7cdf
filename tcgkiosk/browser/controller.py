"""
Browser controller.

Owns the kiosk UI state and re-runs the query engine on every change.
Painting is delegated to a Renderer supplied by the hosting surface.

States:
    NO_GAME_SELECTED -> BROWSING   on the first game selection
    BROWSING -> NO_GAME_SELECTED   when the game selection is cleared

Every filter change resets the page to 1; so does a page-size change.
Each handler completes (query + render) before returning.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Protocol

from tcgkiosk.config import settings
from tcgkiosk.models.catalog import Catalog, GameGroup, TypeOption
from tcgkiosk.models.query import Query, ResultPage
from tcgkiosk.services.query_engine import evaluate, set_options, type_options

logger = logging.getLogger(__name__)


class BrowserState(str, Enum):
    NO_GAME_SELECTED = "no_game_selected"
    BROWSING = "browsing"


@dataclass(frozen=True, slots=True)
class FilterState:
    """Current selections of the filter bar."""

    game_slug: str = ""
    set_name: str = ""
    type_value: str = ""
    search_text: str = ""
    page: int = 1
    page_size: int = 24

    def to_query(self) -> Query:
        return Query(
            game_slug=self.game_slug or None,
            set_name=self.set_name or None,
            type_value=self.type_value or None,
            search_text=self.search_text,
            page=self.page,
            page_size=self.page_size,
        )


@dataclass(frozen=True, slots=True)
class FilterOptions:
    """Choices offered by the set and type selectors for the current game."""

    sets: tuple[str, ...] = ()
    type_label: str = ""
    types: tuple[TypeOption, ...] = ()


class Renderer(Protocol):
    """Paints a result page; provided by the hosting UI."""

    def render(
        self,
        result: ResultPage,
        state: BrowserState,
        filters: FilterState,
        options: FilterOptions,
    ) -> None: ...


class BrowserController:
    """
    Drives one browsing session over a catalog snapshot.

    Args:
        catalog: Immutable catalog snapshot
        renderer: Painting collaborator, called after every change
        page_size: Initial page size, defaults to settings.default_page_size
        require_game: Show nothing until a game is chosen
    """

    def __init__(
        self,
        catalog: Catalog,
        renderer: Renderer,
        page_size: int | None = None,
        require_game: bool | None = None,
    ) -> None:
        self.catalog = catalog
        self.renderer = renderer
        self.require_game = settings.require_game_selection if require_game is None else require_game
        self.filters = FilterState(page_size=page_size or settings.default_page_size)
        self.result = ResultPage()

    @property
    def state(self) -> BrowserState:
        if self.filters.game_slug:
            return BrowserState.BROWSING
        return BrowserState.NO_GAME_SELECTED

    @property
    def selected_group(self) -> GameGroup | None:
        if not self.filters.game_slug:
            return None
        return self.catalog.get_group(self.filters.game_slug)

    def options(self) -> FilterOptions:
        group = self.selected_group
        if group is None:
            return FilterOptions()
        return FilterOptions(
            sets=tuple(set_options(group)),
            type_label=group.type_label,
            types=type_options(group),
        )

    def start(self) -> ResultPage:
        """Initial render."""
        return self._refresh()

    def select_game(self, game_slug: str) -> ResultPage:
        """Choose a game; set and type selections belong to the old game and are cleared."""
        self.filters = replace(
            self.filters,
            game_slug=game_slug,
            set_name="",
            type_value="",
            page=1,
        )
        return self._refresh()

    def select_set(self, set_name: str) -> ResultPage:
        self.filters = replace(self.filters, set_name=set_name, page=1)
        return self._refresh()

    def select_type(self, type_value: str) -> ResultPage:
        self.filters = replace(self.filters, type_value=type_value, page=1)
        return self._refresh()

    def search(self, text: str) -> ResultPage:
        self.filters = replace(self.filters, search_text=text, page=1)
        return self._refresh()

    def set_page_size(self, page_size: int) -> ResultPage:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.filters = replace(self.filters, page_size=page_size, page=1)
        return self._refresh()

    def go_to_page(self, page: int) -> ResultPage:
        self.filters = replace(self.filters, page=max(page, 1))
        return self._refresh()

    def next_page(self) -> ResultPage:
        return self.go_to_page(self.result.page + 1)

    def previous_page(self) -> ResultPage:
        return self.go_to_page(self.result.page - 1)

    def _refresh(self) -> ResultPage:
        self.result = evaluate(self.catalog, self.filters.to_query(), self.require_game)

        # Keep the page selection in step with the clamped result
        if self.result.page != self.filters.page:
            self.filters = replace(self.filters, page=self.result.page)

        logger.debug(
            "Rendering page %d/%d (%d items) for %s",
            self.result.page,
            self.result.total_pages,
            len(self.result.items),
            self.filters.game_slug or "<no game>",
        )
        self.renderer.render(self.result, self.state, self.filters, self.options())
        return self.result
