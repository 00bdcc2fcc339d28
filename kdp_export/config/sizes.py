# KDP trim sizes (in inches). 72 points = 1 inch
# Values follow KDP's no-bleed interior guidance for activity/coloring books.

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Union

from kdp_export.errors import InvalidTrimSize

INCH = 72.0


class TrimSize(str, Enum):
    LETTER = "8.5x11"
    EIGHT_BY_TEN = "8x10"
    SIX_BY_NINE = "6x9"


@dataclass(frozen=True)
class Margins:
    top: float
    bottom: float
    inside: float  # binding side
    outside: float


@dataclass(frozen=True)
class PageSpec:
    width: float
    height: float
    margins: Margins
    bleed: float

    def __post_init__(self):
        m = self.margins
        values = (self.width, self.height, m.top, m.bottom, m.inside, m.outside, self.bleed)
        if any(v <= 0 for v in values):
            raise ValueError(f"PageSpec values must be positive: {self}")
        if m.inside + m.outside >= self.width or m.top + m.bottom >= self.height:
            raise ValueError(f"Margins leave no usable area: {self}")


_STANDARD_MARGINS = Margins(top=0.5, bottom=0.5, inside=0.5, outside=0.375)

KDP_SPECS: Dict[TrimSize, PageSpec] = {
    TrimSize.LETTER: PageSpec(width=8.5, height=11.0, margins=_STANDARD_MARGINS, bleed=0.125),
    TrimSize.EIGHT_BY_TEN: PageSpec(width=8.0, height=10.0, margins=_STANDARD_MARGINS, bleed=0.125),
    TrimSize.SIX_BY_NINE: PageSpec(width=6.0, height=9.0, margins=_STANDARD_MARGINS, bleed=0.125),
}


def available_trim_sizes() -> List[str]:
    return [t.value for t in TrimSize]


def resolve_trim_size(trim_size: Union[TrimSize, str]) -> TrimSize:
    try:
        return TrimSize(trim_size)
    except ValueError:
        raise InvalidTrimSize(trim_size, available_trim_sizes()) from None


def get_page_spec(trim_size: Union[TrimSize, str]) -> PageSpec:
    return KDP_SPECS[resolve_trim_size(trim_size)]
