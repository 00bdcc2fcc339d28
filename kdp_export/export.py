"""
Export orchestration

Builds the interior and the cover for one export request. The two builds
share nothing once the image count is known, so they run side by side.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from kdp_export.config.paper import WHITE_PAPER, PaperStock
from kdp_export.config.sizes import TrimSize
from kdp_export.cover.cover_renderer import build_cover
from kdp_export.errors import KDPExportError
from kdp_export.geometry import CoverDimensions, compute_cover_dimensions
from kdp_export.renderer.interior_renderer import (
    ImageInput,
    build_interior,
    interior_page_count,
)

logger = logging.getLogger(__name__)


class CoverColor(BaseModel):
    """RGB color with components in 0..1"""
    r: float = Field(1.0, ge=0.0, le=1.0)
    g: float = Field(1.0, ge=0.0, le=1.0)
    b: float = Field(1.0, ge=0.0, le=1.0)

    @classmethod
    def from_hex(cls, value: str) -> "CoverColor":
        value = value.lstrip("#")
        if len(value) != 6:
            raise ValueError(f"Expected a color like '#RRGGBB', got '{value}'")
        r, g, b = (int(value[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
        return cls(r=r, g=g, b=b)

    def as_tuple(self):
        return (self.r, self.g, self.b)


class ExportRequest(BaseModel):
    """Options for one interior + cover export"""
    trim_size: TrimSize = Field(default=TrimSize.LETTER, description="KDP trim size")
    include_page_numbers: bool = Field(default=True, description="Print page numbers under images")
    include_cover: bool = Field(default=True, description="Also build the wraparound cover")
    cover_title: Optional[str] = Field(default=None, max_length=200)
    cover_author: str = Field(default="Activity Books", max_length=100)
    cover_back_text: Optional[str] = Field(default=None, max_length=500)
    cover_background: Optional[CoverColor] = Field(default=None, description="Cover background color")


@dataclass
class ExportResult:
    interior: bytes
    interior_pages: int
    cover: Optional[bytes] = None
    cover_error: Optional[KDPExportError] = None
    cover_dimensions: Optional[CoverDimensions] = None

    @property
    def ok(self) -> bool:
        return self.cover_error is None


def build_export(
    request: ExportRequest,
    images: Sequence[ImageInput],
    title_fallback: str = "Untitled",
    paper: PaperStock = WHITE_PAPER,
) -> ExportResult:
    """
    Build interior and (optionally) cover PDFs for an export request.

    Geometry is validated before any drawing starts. A cover failure is
    reported on the result and does not discard the interior; an interior
    failure propagates.
    """
    images = list(images)
    image_count = len(images)
    # Spine is sized from the book's image count
    dims = compute_cover_dimensions(request.trim_size, image_count, paper) if request.include_cover else None

    with ThreadPoolExecutor(max_workers=2) as pool:
        interior_future = pool.submit(
            build_interior, request.trim_size, images, request.include_page_numbers
        )
        cover_future = None
        if request.include_cover:
            background = request.cover_background.as_tuple() if request.cover_background else None
            cover_future = pool.submit(
                build_cover,
                request.trim_size,
                image_count,
                request.cover_title or title_fallback,
                request.cover_author,
                request.cover_back_text,
                background,
                paper,
            )

        interior = interior_future.result()
        result = ExportResult(
            interior=interior,
            interior_pages=interior_page_count(image_count),
            cover_dimensions=dims,
        )

        if cover_future is not None:
            try:
                result.cover = cover_future.result()
            except KDPExportError as e:
                logger.error("Cover build failed, returning interior only: %s", e)
                result.cover_error = e

    return result
