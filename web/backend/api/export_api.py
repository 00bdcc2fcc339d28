"""
Export API endpoints

Turn uploaded page images into a downloadable KDP package.
"""

import io
import re
import logging
import os
import zipfile
from typing import List, Optional

from fastapi import APIRouter, File, Form, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from kdp_export.config.sizes import KDP_SPECS
from kdp_export.errors import InvalidPageCount, InvalidTrimSize
from kdp_export.export import CoverColor, ExportRequest, ExportResult, build_export
from kdp_export.geometry import compute_cover_dimensions
from kdp_export.renderer.images import SourceImage
from web.backend.config import PROFILES, Profile
from web.backend.models.export import (
    CoverDimensionsResponse,
    TrimSizeInfo,
    TrimSizeListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Upload limits, selected with KDP_EXPORT_PROFILE
profile: Profile = PROFILES[os.getenv("KDP_EXPORT_PROFILE", "default")]


def _readme(request: ExportRequest, result: ExportResult, title: str) -> str:
    spec = KDP_SPECS[request.trim_size]
    lines = [
        f"{title}",
        "",
        "KDP upload package",
        "",
        f"Trim size: {spec.width} x {spec.height} in (no bleed interior)",
        f"Interior: interior.pdf, {result.interior_pages} pages",
    ]
    if result.cover is not None:
        dims = result.cover_dimensions
        lines.append(
            f"Cover: cover.pdf, {dims.width:.3f} x {dims.height:.3f} in, spine {dims.spine_width:.4f} in"
        )
    elif result.cover_error is not None:
        lines.append(f"Cover: NOT GENERATED ({result.cover_error})")
    lines += [
        "",
        "1. In KDP, choose Paperback > Black & white interior > White paper.",
        f"2. Select trim size {spec.width} x {spec.height} in and 'No Bleed' for the interior.",
        "3. Upload interior.pdf as the manuscript.",
        "4. Upload cover.pdf with 'Upload a cover you already have'.",
        "5. Review the previewer before publishing.",
    ]
    return "\n".join(lines) + "\n"


@router.get("/trim-sizes", response_model=TrimSizeListResponse)
async def list_trim_sizes():
    """List supported trim sizes with their margins and bleed."""
    sizes = [
        TrimSizeInfo(
            trim_size=key.value,
            width=spec.width,
            height=spec.height,
            margin_top=spec.margins.top,
            margin_bottom=spec.margins.bottom,
            margin_inside=spec.margins.inside,
            margin_outside=spec.margins.outside,
            bleed=spec.bleed,
        )
        for key, spec in KDP_SPECS.items()
    ]
    return TrimSizeListResponse(success=True, trim_sizes=sizes)


@router.get("/cover-dimensions", response_model=CoverDimensionsResponse)
async def cover_dimensions(trim_size: str = Query(...), page_count: int = Query(...)):
    """
    Preview the full cover size before building.

    Args:
        trim_size: Trim size key
        page_count: Interior page count the spine is sized from
    """
    try:
        dims = compute_cover_dimensions(trim_size, page_count)
    except (InvalidTrimSize, InvalidPageCount) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return CoverDimensionsResponse(
        success=True,
        trim_size=trim_size,
        page_count=page_count,
        width_in=dims.width,
        height_in=dims.height,
        spine_width_in=dims.spine_width,
    )


@router.post("/package")
async def export_package(
    images: List[UploadFile] = File(..., description="Page images in print order"),
    trim_size: str = Form("8.5x11"),
    include_page_numbers: bool = Form(True),
    include_cover: bool = Form(True),
    cover_title: Optional[str] = Form(None),
    cover_author: Optional[str] = Form(None),
    cover_back_text: Optional[str] = Form(None),
    cover_background: Optional[str] = Form(None, description="Hex color, e.g. #FFF4D6"),
):
    """
    Build interior.pdf and cover.pdf and return them zipped with upload notes.

    A cover failure still returns the interior; the error is reported in
    README.txt and the X-Cover-Error header.
    """
    if len(images) > profile.max_images:
        raise HTTPException(status_code=413, detail=f"Too many images ({len(images)} > {profile.max_images})")

    try:
        request = ExportRequest(
            trim_size=trim_size,
            include_page_numbers=include_page_numbers,
            include_cover=include_cover,
            cover_title=cover_title,
            cover_author=cover_author or profile.default_author,
            cover_back_text=cover_back_text,
            cover_background=CoverColor.from_hex(cover_background) if cover_background else None,
        )
    except ValueError as e:  # includes pydantic ValidationError
        raise HTTPException(status_code=400, detail=str(e))

    sources = [SourceImage.from_bytes(await upload.read(), name=upload.filename) for upload in images]
    title = cover_title or "Untitled"

    try:
        result = await run_in_threadpool(build_export, request, sources, title_fallback=title)
    except (InvalidTrimSize, InvalidPageCount) as e:
        raise HTTPException(status_code=400, detail=str(e))

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("interior.pdf", result.interior)
        if result.cover is not None:
            zf.writestr("cover.pdf", result.cover)
        if profile.include_readme:
            zf.writestr("README.txt", _readme(request, result, title))

    safe_name = re.sub(r"[^A-Za-z0-9_-]+", "_", title).strip("_") or "book"
    headers = {"Content-Disposition": f'attachment; filename="{safe_name}_kdp.zip"'}
    if result.cover_error is not None:
        headers["X-Cover-Error"] = str(result.cover_error).replace("\n", " ")

    logger.info("Exported package: %d images, cover=%s", len(sources), result.cover is not None)
    return Response(content=buffer.getvalue(), media_type="application/zip", headers=headers)
