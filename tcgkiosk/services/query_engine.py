"""
Query engine.

Pure, read-only evaluation of a browse Query over a Catalog snapshot.

Filters are ANDed together and applied in this order:
    game -> set -> type -> name search -> pagination

INVARIANTS:
- No game selected -> no results (unless require_game=False)
- Filtering preserves load order; nothing is re-sorted
- page is always clamped into [1, total_pages] (1 when there are no pages)
"""

import math
from collections.abc import Iterable

from tcgkiosk.models.card import CardView
from tcgkiosk.models.catalog import Catalog, GameGroup, TypeOption
from tcgkiosk.models.query import Query, ResultPage


def type_value_matches(
    card_values: Iterable[str],
    selected: str,
    match_mode: str,
    case_insensitive: bool,
) -> bool:
    """
    Check whether any of a card's type values matches the selected value.

    Args:
        card_values: The card's type values
        selected: Value chosen in the type filter
        match_mode: "exact" for equality, "contains" for substring
        case_insensitive: Compare lowercased values

    Returns:
        True on the first matching value. Cards without values never match.
    """
    needle = selected.lower() if case_insensitive else selected

    for value in card_values:
        candidate = value.lower() if case_insensitive else value
        if match_mode == "contains":
            if needle in candidate:
                return True
        elif candidate == needle:
            return True

    return False


def _filter_group(group: GameGroup, query: Query) -> list[CardView]:
    set_name = query.set_name or ""
    type_value = query.type_value or ""
    search = query.search_text.strip().lower()

    cards: list[CardView] = []
    for card in group.cards:
        if set_name and card.set != set_name:
            continue

        if type_value and not type_value_matches(
            card.type_values,
            type_value,
            group.type_match_mode,
            group.type_case_insensitive,
        ):
            continue

        if search and search not in card.name.lower():
            continue

        cards.append(card)

    return cards


def paginate(cards: list[CardView], page: int, page_size: int) -> ResultPage:
    """Slice one page out of a filtered list, clamping the page number."""
    total = len(cards)
    total_pages = math.ceil(total / page_size) if total else 0

    if total_pages == 0:
        return ResultPage(items=(), total_pages=0, page=1, total_items=0)

    page = min(max(page, 1), total_pages)
    start = (page - 1) * page_size

    return ResultPage(
        items=tuple(cards[start : start + page_size]),
        total_pages=total_pages,
        page=page,
        total_items=total,
    )


def evaluate(catalog: Catalog, query: Query, require_game: bool = True) -> ResultPage:
    """
    Evaluate a query against a catalog.

    Args:
        catalog: Immutable catalog snapshot
        query: Browse request
        require_game: When True (default) an empty game selection shows
            nothing. When False it shows every game's cards, each filtered
            with its own group's type policy.

    Returns:
        ResultPage with the requested (clamped) page.
    """
    if not query.game_slug:
        if require_game:
            return ResultPage()
        groups: Iterable[GameGroup] = catalog.groups
    else:
        group = catalog.get_group(query.game_slug)
        if group is None:
            return ResultPage()
        groups = (group,)

    cards: list[CardView] = []
    for group in groups:
        cards.extend(_filter_group(group, query))

    return paginate(cards, query.page, query.page_size)


def set_options(group: GameGroup) -> list[str]:
    """
    Set names offered by the set selector of a game.

    Sets named in the group's set_order come first, in that order; any other
    set present in the cards follows alphabetically. Without a set_order the
    whole list is alphabetical.
    """
    present = {card.set for card in group.cards if card.set}

    ordered = [name for name in dict.fromkeys(group.set_order) if name in present]
    remaining = sorted(present - set(ordered))

    return ordered + remaining


def type_options(group: GameGroup) -> tuple[TypeOption, ...]:
    """
    Choices for a game's type filter.

    Uses the configured options, else every distinct type value found in
    the group's cards, alphabetically.
    """
    if group.type_options:
        return group.type_options

    seen: dict[str, str] = {}
    for card in group.cards:
        for value in card.type_values:
            key = value.lower() if group.type_case_insensitive else value
            seen.setdefault(key, value)

    return tuple(TypeOption(value=v, label=v) for v in sorted(seen.values()))
