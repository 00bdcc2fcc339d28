"""Print-ready interior and wraparound cover PDFs for KDP coloring books"""

from kdp_export.config.sizes import KDP_SPECS, PageSpec, TrimSize
from kdp_export.cover.cover_renderer import build_cover
from kdp_export.errors import (
    CoverBuildFailure,
    ImageEmbedFailure,
    InvalidPageCount,
    InvalidTrimSize,
    KDPExportError,
    SerializationFailure,
)
from kdp_export.export import ExportRequest, ExportResult, build_export
from kdp_export.geometry import (
    CoverDimensions,
    compute_cover_dimensions,
    points_from_inches,
    spine_width_inches,
)
from kdp_export.renderer.interior_renderer import build_interior

__all__ = [
    "KDP_SPECS",
    "PageSpec",
    "TrimSize",
    "build_cover",
    "build_interior",
    "build_export",
    "ExportRequest",
    "ExportResult",
    "CoverDimensions",
    "compute_cover_dimensions",
    "points_from_inches",
    "spine_width_inches",
    "KDPExportError",
    "InvalidTrimSize",
    "InvalidPageCount",
    "ImageEmbedFailure",
    "CoverBuildFailure",
    "SerializationFailure",
]
