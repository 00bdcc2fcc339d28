"""
Export API models

Responses for trim size listings and cover dimension previews.
"""

from pydantic import BaseModel, Field
from typing import List


class TrimSizeInfo(BaseModel):
    """One supported trim size with its print specification (inches)"""
    trim_size: str = Field(..., description="Trim size key")
    width: float
    height: float
    margin_top: float
    margin_bottom: float
    margin_inside: float
    margin_outside: float
    bleed: float


class TrimSizeListResponse(BaseModel):
    success: bool
    trim_sizes: List[TrimSizeInfo]


class CoverDimensionsResponse(BaseModel):
    """Full wraparound cover size, including bleed"""
    success: bool
    trim_size: str
    page_count: int
    width_in: float = Field(..., description="Full cover width in inches")
    height_in: float = Field(..., description="Full cover height in inches")
    spine_width_in: float = Field(..., description="Spine width in inches")

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "trim_size": "6x9",
                "page_count": 24,
                "width_in": 12.3041,
                "height_in": 9.25,
                "spine_width_in": 0.0541,
            }
        }
