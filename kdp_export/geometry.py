"""
Geometry calculator

Unit conversion, spine sizing and placement math. Public dimensions are in
inches; everything handed to the canvas is in points.
"""

from dataclasses import dataclass
from typing import Union

from kdp_export.config.paper import WHITE_PAPER, PaperStock
from kdp_export.config.sizes import INCH, PageSpec, TrimSize, get_page_spec
from kdp_export.errors import InvalidPageCount


def points_from_inches(inches: float) -> float:
    return inches * INCH


def spine_width_inches(page_count: int, paper: PaperStock = WHITE_PAPER) -> float:
    if page_count < 0:
        raise InvalidPageCount(page_count)
    return paper.spine_width(page_count)


@dataclass(frozen=True)
class CoverDimensions:
    width: float
    height: float
    spine_width: float

    @property
    def width_pt(self) -> float:
        return points_from_inches(self.width)

    @property
    def height_pt(self) -> float:
        return points_from_inches(self.height)

    @property
    def spine_width_pt(self) -> float:
        return points_from_inches(self.spine_width)


def compute_cover_dimensions(
    trim_size: Union[TrimSize, str],
    page_count: int,
    paper: PaperStock = WHITE_PAPER,
) -> CoverDimensions:
    spec = get_page_spec(trim_size)
    spine = spine_width_inches(page_count, paper)
    bleed = spec.bleed

    return CoverDimensions(
        # back bleed + back cover + spine + front cover + front bleed
        width=bleed + spec.width + spine + spec.width + bleed,
        height=spec.height + 2 * bleed,
        spine_width=spine,
    )


@dataclass(frozen=True)
class ContentBox:
    """Margin-safe area of an interior page, in points"""
    x: float
    y: float
    width: float
    height: float


def content_box(spec: PageSpec) -> ContentBox:
    m = spec.margins
    return ContentBox(
        x=points_from_inches(m.inside),
        y=points_from_inches(m.bottom),
        width=points_from_inches(spec.width) - points_from_inches(m.inside + m.outside),
        height=points_from_inches(spec.height) - points_from_inches(m.top + m.bottom),
    )


@dataclass(frozen=True)
class Placement:
    x: float
    y: float
    width: float
    height: float
    scale: float


def fit_image(img_width: float, img_height: float, box: ContentBox) -> Placement:
    """
    Scale an image uniformly so it fits inside the box, then centre it.

    The aspect ratio is always preserved, so one axis may leave slack that is
    split evenly on both sides.
    """
    if img_width <= 0 or img_height <= 0:
        raise ValueError(f"Image size must be positive, got {img_width}x{img_height}")

    scale = min(box.width / img_width, box.height / img_height)
    scaled_w = img_width * scale
    scaled_h = img_height * scale

    return Placement(
        x=box.x + (box.width - scaled_w) / 2,
        y=box.y + (box.height - scaled_h) / 2,
        width=scaled_w,
        height=scaled_h,
        scale=scale,
    )


@dataclass(frozen=True)
class CoverPanels:
    """Left edges (points) of each cover band, ordered back to front"""
    back_left: float
    spine_left: float
    front_left: float
    front_right: float
    panel_width: float

    @property
    def spine_width(self) -> float:
        return self.front_left - self.spine_left

    @property
    def back_center_x(self) -> float:
        return self.back_left + self.panel_width / 2

    @property
    def spine_center_x(self) -> float:
        return self.spine_left + self.spine_width / 2

    @property
    def front_center_x(self) -> float:
        return self.front_left + self.panel_width / 2


def cover_panels(trim_size: Union[TrimSize, str], dims: CoverDimensions) -> CoverPanels:
    spec = get_page_spec(trim_size)
    bleed = points_from_inches(spec.bleed)
    trim_w = points_from_inches(spec.width)

    back_left = bleed
    spine_left = back_left + trim_w
    front_left = spine_left + dims.spine_width_pt
    return CoverPanels(
        back_left=back_left,
        spine_left=spine_left,
        front_left=front_left,
        front_right=front_left + trim_w,
        panel_width=trim_w,
    )
