import logging
from io import BytesIO
from typing import Sequence, Union

from PIL import Image
from reportlab.lib.colors import Color, white
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from kdp_export.config.sizes import TrimSize, get_page_spec
from kdp_export.errors import ImageEmbedFailure, SerializationFailure
from kdp_export.geometry import content_box, fit_image, points_from_inches
from kdp_export.renderer.images import SourceImage, load_image

logger = logging.getLogger(__name__)

PLACEHOLDER_TEXT = "Image could not be loaded"
PLACEHOLDER_FONT_SIZE = 12.0
PAGE_NUMBER_FONT_SIZE = 10.0
PAGE_NUMBER_OFFSET_IN = 0.25
TEXT_GRAY = Color(0.5, 0.5, 0.5)

ImageInput = Union[bytes, SourceImage]


def interior_page_count(image_count: int) -> int:
    # leading blank + (image page, blank verso) per image
    return 1 + 2 * image_count


def _as_source(item: ImageInput) -> SourceImage:
    if isinstance(item, SourceImage):
        return item
    return SourceImage.from_bytes(bytes(item))


def _flatten(img: Image.Image) -> Image.Image:
    """Composite transparent images onto white so print output has no alpha"""
    if img.mode in ("RGB", "L", "CMYK"):
        return img
    rgba = img.convert("RGBA")
    background = Image.new("RGB", rgba.size, (255, 255, 255))
    background.paste(rgba, mask=rgba.split()[-1])
    return background


def _blank_page(c: canvas.Canvas, width: float, height: float):
    c.setFillColor(white)
    c.rect(0, 0, width, height, fill=1, stroke=0)
    c.showPage()


def build_interior(
    trim_size: Union[TrimSize, str],
    images: Sequence[ImageInput],
    include_page_numbers: bool = True,
) -> bytes:
    """
    Build the interior PDF for a single-sided coloring book.

    Layout: one leading blank page, then every image on its own page followed
    by a blank verso, so the document always has 1 + 2N pages. Images that
    cannot be decoded are replaced by a placeholder message.

    Args:
        trim_size: Trim size key, e.g. "8.5x11"
        images: Image buffers (PNG or JPEG) in print order
        include_page_numbers: Print the physical page number under each image

    Returns:
        PDF bytes
    """
    spec = get_page_spec(trim_size)
    sources = [_as_source(item) for item in images]

    width = points_from_inches(spec.width)
    height = points_from_inches(spec.height)
    box = content_box(spec)

    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=(width, height))
    c.setTitle("Interior")

    # First leaf stays blank so the first picture lands on a recto
    _blank_page(c, width, height)

    for index, source in enumerate(sources):
        c.setFillColor(white)
        c.rect(0, 0, width, height, fill=1, stroke=0)

        try:
            img = load_image(source, index)
        except ImageEmbedFailure as e:
            logger.warning("%s; drawing placeholder on page %d", e, 2 * index + 2)
            c.saveState()
            c.setFillColor(TEXT_GRAY)
            c.setFont("Helvetica", PLACEHOLDER_FONT_SIZE)
            c.drawCentredString(width / 2.0, height / 2.0, PLACEHOLDER_TEXT)
            c.restoreState()
        else:
            placement = fit_image(img.width, img.height, box)
            c.drawImage(
                ImageReader(_flatten(img)),
                placement.x,
                placement.y,
                width=placement.width,
                height=placement.height,
            )

        if include_page_numbers:
            # Physical page number, counting the leading blank and every verso
            page_num = 2 * index + 2
            c.saveState()
            c.setFillColor(TEXT_GRAY)
            c.setFont("Helvetica", PAGE_NUMBER_FONT_SIZE)
            c.drawCentredString(width / 2.0, points_from_inches(PAGE_NUMBER_OFFSET_IN), str(page_num))
            c.restoreState()

        c.showPage()

        # Blank verso so coloring never bleeds into the next picture
        _blank_page(c, width, height)

    try:
        c.save()
    except Exception as e:
        raise SerializationFailure(f"Failed to serialize interior PDF: {e}") from e

    data = buffer.getvalue()
    logger.debug(
        "Built interior: images=%d pages=%d bytes=%d",
        len(sources), interior_page_count(len(sources)), len(data),
    )
    return data
