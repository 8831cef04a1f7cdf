from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


def _frozen_mapping() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class SetMetadata:
    """
    Set index metadata for one game.

    names and codes are read-only views; instances are shared between
    callers once memoized.

    Attributes:
        names: Lowercased set id -> display name
        codes: Lowercased set id -> short set code (e.g. "BS")
        allowed: Set ids that may be loaded, None when unrestricted
        order: Display names of allowed sets in declaration order
    """

    names: Mapping[str, str] = field(default_factory=_frozen_mapping)
    codes: Mapping[str, str] = field(default_factory=_frozen_mapping)
    allowed: frozenset[str] | None = None
    order: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", MappingProxyType(dict(self.names)))
        object.__setattr__(self, "codes", MappingProxyType(dict(self.codes)))

    @property
    def restricts_sets(self) -> bool:
        return self.allowed is not None

    def permits(self, set_id: str) -> bool:
        """Check whether a lowercased set id survives the allowed-set policy."""
        if self.allowed is None:
            return True
        return set_id in self.allowed


EMPTY_SET_METADATA = SetMetadata()
