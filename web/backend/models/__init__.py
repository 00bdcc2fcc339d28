"""Data models for the KDP export API"""

from web.backend.models.export import (
    TrimSizeInfo,
    TrimSizeListResponse,
    CoverDimensionsResponse,
)

__all__ = [
    "TrimSizeInfo",
    "TrimSizeListResponse",
    "CoverDimensionsResponse",
]
