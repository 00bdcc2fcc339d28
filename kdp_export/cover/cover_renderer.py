import logging
from io import BytesIO
from typing import List, Optional, Tuple, Union

from reportlab.lib.colors import Color, black
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from kdp_export.config.paper import WHITE_PAPER, PaperStock
from kdp_export.config.sizes import TrimSize, get_page_spec
from kdp_export.errors import CoverBuildFailure, SerializationFailure
from kdp_export.geometry import (
    CoverDimensions,
    CoverPanels,
    compute_cover_dimensions,
    cover_panels,
    points_from_inches,
)

logger = logging.getLogger(__name__)

RGB = Tuple[float, float, float]

TITLE_FONT = "Helvetica-Bold"
BODY_FONT = "Helvetica"
TITLE_MAX_SIZE = 48.0
TITLE_CHAR_WIDTH = 0.6  # average glyph width as a fraction of font size
AUTHOR_FONT_SIZE = 18.0
BACK_FONT_SIZE = 12.0
BACK_LINE_SPACING = 1.4
BACK_SIDE_PADDING_PT = 40.0
SPINE_TEXT_MIN_IN = 0.5
SPINE_MAX_FONT_SIZE = 12.0
SPINE_END_CLEARANCE_IN = 0.5


def title_font_size(title: str, panel_width_pt: float) -> float:
    """Shrink the title proportionally to its length, capped at 48pt"""
    if not title:
        return TITLE_MAX_SIZE
    return min(TITLE_MAX_SIZE, panel_width_pt / (len(title) * TITLE_CHAR_WIDTH))


def wrap_text(text: str, font_name: str, font_size: float, max_width: float) -> List[str]:
    """
    Greedy word wrap: keep adding words while the line fits in max_width.

    A word wider than max_width on its own still gets its own line.
    """
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and stringWidth(candidate, font_name, font_size) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def _fit_single_line(text: str, font_name: str, font_size: float, max_width: float) -> str:
    if stringWidth(text, font_name, font_size) <= max_width:
        return text
    while text and stringWidth(text + "...", font_name, font_size) > max_width:
        text = text[:-1]
    return text.rstrip() + "..." if text else ""


def _draw_guides(c: canvas.Canvas, panels: CoverPanels, height: float):
    # Proofing aid only; leave off for files sent to print
    c.saveState()
    c.setStrokeColor(Color(0.9, 0.9, 0.9))
    c.setLineWidth(0.5)
    c.setDash(5, 5)
    c.line(panels.spine_left, 0, panels.spine_left, height)
    c.line(panels.front_left, 0, panels.front_left, height)
    c.restoreState()


def _draw_front(c: canvas.Canvas, panels: CoverPanels, height: float, title: str, author: str):
    if title:
        c.setFillColor(black)
        c.setFont(TITLE_FONT, title_font_size(title, panels.panel_width))
        c.drawCentredString(panels.front_center_x, height * 0.65, title)
    if author:
        c.setFillColor(Color(0.3, 0.3, 0.3))
        c.setFont(BODY_FONT, AUTHOR_FONT_SIZE)
        c.drawCentredString(panels.front_center_x, height * 0.35, author)


def _draw_spine(c: canvas.Canvas, panels: CoverPanels, dims: CoverDimensions, trim_height_pt: float, title: str):
    font_size = min(SPINE_MAX_FONT_SIZE, panels.spine_width * 0.6)
    max_len = trim_height_pt - 2 * points_from_inches(SPINE_END_CLEARANCE_IN)
    text = _fit_single_line(title, TITLE_FONT, font_size, max_len)
    if not text:
        return

    c.saveState()
    c.setFillColor(black)
    c.setFont(TITLE_FONT, font_size)
    # Read top-to-bottom when the book lies face up, as on US spines
    c.translate(panels.spine_center_x, dims.height_pt / 2.0)
    c.rotate(-90)
    # Baseline sits a third of the glyph height below the spine centre line
    c.drawCentredString(0, -font_size / 3.0, text)
    c.restoreState()


def _draw_back(c: canvas.Canvas, panels: CoverPanels, height: float, back_text: str):
    max_width = panels.panel_width - BACK_SIDE_PADDING_PT
    lines = wrap_text(back_text, BODY_FONT, BACK_FONT_SIZE, max_width)
    line_height = BACK_FONT_SIZE * BACK_LINE_SPACING
    start_y = height * 0.6 + (len(lines) * line_height) / 2

    c.setFillColor(Color(0.2, 0.2, 0.2))
    c.setFont(BODY_FONT, BACK_FONT_SIZE)
    for i, line in enumerate(lines):
        c.drawCentredString(panels.back_center_x, start_y - i * line_height, line)


def build_cover(
    trim_size: Union[TrimSize, str],
    page_count: int,
    title: str,
    author: str,
    back_text: Optional[str] = None,
    background_color: Optional[RGB] = None,
    paper: PaperStock = WHITE_PAPER,
    show_guides: bool = False,
) -> bytes:
    """
    Build the single-page wraparound cover: back | spine | front.

    Args:
        trim_size: Trim size key, e.g. "6x9"
        page_count: Interior count the spine is sized from
        title: Front cover title (also used on the spine when it is wide enough)
        author: Front cover author line
        back_text: Optional blurb, word-wrapped on the back panel
        background_color: (r, g, b) floats in 0..1, white when omitted
        paper: Paper stock used for the spine width
        show_guides: Draw dashed spine edge guides for proofing

    Returns:
        PDF bytes

    Raises:
        InvalidTrimSize, InvalidPageCount: before any drawing
        CoverBuildFailure: any drawing or text measurement error
        SerializationFailure: the final save fails
    """
    dims = compute_cover_dimensions(trim_size, page_count, paper)
    panels = cover_panels(trim_size, dims)
    width = dims.width_pt
    height = dims.height_pt
    trim_height_pt = points_from_inches(get_page_spec(trim_size).height)

    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=(width, height))
    c.setTitle(title or "Cover")

    try:
        r, g, b = background_color or (1.0, 1.0, 1.0)
        c.setFillColor(Color(r, g, b))
        c.rect(0, 0, width, height, fill=1, stroke=0)

        if show_guides:
            _draw_guides(c, panels, height)

        _draw_front(c, panels, height, title, author)

        if dims.spine_width > SPINE_TEXT_MIN_IN and title:
            _draw_spine(c, panels, dims, trim_height_pt, title)

        if back_text:
            _draw_back(c, panels, height, back_text)

        c.showPage()
    except Exception as e:
        raise CoverBuildFailure(f"Failed to build cover: {e}") from e

    try:
        c.save()
    except Exception as e:
        raise SerializationFailure(f"Failed to serialize cover PDF: {e}") from e

    data = buffer.getvalue()
    logger.debug(
        "Built cover: %.3fx%.3f in, spine %.4f in, bytes=%d",
        dims.width, dims.height, dims.spine_width, len(data),
    )
    return data
