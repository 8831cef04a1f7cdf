"""
Presentation boundary models.

Pydantic models that serialize the catalog snapshot, result pages and load
report with camelCase field names for the browser renderer.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tcgkiosk.config import PAGE_SIZE_CHOICES, Settings, settings
from tcgkiosk.i18n import STRINGS, type_icon_map
from tcgkiosk.models.card import CardView
from tcgkiosk.models.catalog import Catalog, GameGroup, LoadReport, MatchMode, TypeOption
from tcgkiosk.models.query import ResultPage


class CamelModel(BaseModel):
    """Base model serializing fields as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TypeOptionResponse(CamelModel):
    value: str
    label: str


class DetailEntryResponse(CamelModel):
    label: str
    value: str


class CardResponse(CamelModel):
    """A normalized card as handed to the renderer."""

    id: str
    name: str
    game: str
    set: str
    image_url: str
    image_full_url: str
    image_srcset: str = ""
    image_sizes: str = ""
    type_values: list[str] = Field(default_factory=list)
    details: list[DetailEntryResponse] = Field(default_factory=list)


class GameGroupResponse(CamelModel):
    """One game with its filter configuration and cards."""

    slug: str
    label: str
    type_label: str
    type_options: list[TypeOptionResponse] = Field(default_factory=list)
    type_match_mode: MatchMode = "exact"
    type_case_insensitive: bool = False
    overlay_image: str = ""
    set_order: list[str] = Field(default_factory=list)
    cards: list[CardResponse] = Field(default_factory=list)


class ImageProxyResponse(CamelModel):
    base_url: str
    hosts: list[str] = Field(default_factory=list)


class CatalogSnapshotResponse(CamelModel):
    """Everything the browser needs at session start."""

    games: list[GameGroupResponse] = Field(default_factory=list)
    last_modified: int = 0
    # to_camel would emit "i18N"
    i18n: dict[str, str] = Field(default_factory=dict, alias="i18n")
    image_proxy: ImageProxyResponse
    type_icons: dict[str, str] = Field(default_factory=dict)
    page_sizes: list[int] = Field(default_factory=list)
    default_page_size: int
    require_game_selection: bool = True


class ResultPageResponse(CamelModel):
    """One page of query results."""

    items: list[CardResponse] = Field(default_factory=list)
    total_pages: int = 0
    page: int = 1
    total_items: int = 0


class LoadOutcomeResponse(CamelModel):
    game: str
    path: str
    status: str
    cards: int = 0
    dropped: int = 0
    reason: str = ""


class LoadReportResponse(CamelModel):
    """Per-file outcomes of the last catalog build."""

    loaded_files: int = 0
    skipped_files: int = 0
    total_cards: int = 0
    dropped_records: int = 0
    outcomes: list[LoadOutcomeResponse] = Field(default_factory=list)


def type_option_to_response(option: TypeOption) -> TypeOptionResponse:
    return TypeOptionResponse(value=option.value, label=option.label)


def card_to_response(card: CardView) -> CardResponse:
    return CardResponse(
        id=card.id,
        name=card.name,
        game=card.game,
        set=card.set,
        image_url=card.image_url,
        image_full_url=card.image_full_url,
        image_srcset=card.image_srcset,
        image_sizes=card.image_sizes,
        type_values=list(card.type_values),
        details=[DetailEntryResponse(label=d.label, value=d.value) for d in card.details],
    )


def group_to_response(group: GameGroup) -> GameGroupResponse:
    return GameGroupResponse(
        slug=group.slug,
        label=group.label,
        type_label=group.type_label,
        type_options=[type_option_to_response(o) for o in group.type_options],
        type_match_mode=group.type_match_mode,
        type_case_insensitive=group.type_case_insensitive,
        overlay_image=group.overlay_image,
        set_order=list(group.set_order),
        cards=[card_to_response(c) for c in group.cards],
    )


def result_to_response(result: ResultPage) -> ResultPageResponse:
    return ResultPageResponse(
        items=[card_to_response(c) for c in result.items],
        total_pages=result.total_pages,
        page=result.page,
        total_items=result.total_items,
    )


def report_to_response(report: LoadReport) -> LoadReportResponse:
    return LoadReportResponse(
        loaded_files=report.loaded_files,
        skipped_files=report.skipped_files,
        total_cards=report.total_cards,
        dropped_records=report.dropped_records,
        outcomes=[
            LoadOutcomeResponse(
                game=o.game_slug,
                path=str(o.path),
                status=o.status.value,
                cards=o.cards,
                dropped=o.dropped,
                reason=o.reason,
            )
            for o in report.outcomes
        ],
    )


def build_snapshot(catalog: Catalog, config: Settings | None = None) -> CatalogSnapshotResponse:
    """
    Build the session-start snapshot.

    Args:
        catalog: Catalog to serialize
        config: Settings providing asset/proxy URLs, defaults to global settings
    """
    config = config or settings

    return CatalogSnapshotResponse(
        games=[group_to_response(g) for g in catalog.groups],
        last_modified=catalog.last_modified,
        i18n=dict(STRINGS),
        image_proxy=ImageProxyResponse(
            base_url=config.image_proxy_base_url,
            hosts=list(config.image_proxy_hosts),
        ),
        type_icons=type_icon_map(config.asset_base_url),
        page_sizes=list(PAGE_SIZE_CHOICES),
        default_page_size=config.default_page_size,
        require_game_selection=config.require_game_selection,
    )
