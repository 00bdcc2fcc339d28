from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from kdp_export.config.sizes import TrimSize, get_page_spec
from kdp_export.geometry import points_from_inches
from kdp_export.renderer.interior_renderer import interior_page_count
from kdp_export.validator.report import PdfSource, Report, almost_equal, open_pdf

KDP_MIN_PAGES = 24
KDP_MAX_PAGES = 828


@dataclass
class ValidationReport(Report):
    trim_size: str = ""
    page_count: int = 0
    page_size_pt: Tuple[float, float] = (0.0, 0.0)
    image_pages: int = 0


def _has_image(page) -> bool:
    if "/Resources" not in page:
        return False
    resources = page["/Resources"]
    if "/XObject" not in resources:
        return False
    xobjects = resources["/XObject"]
    return any(xobjects[name].get("/Subtype") == "/Image" for name in xobjects)


def validate_interior(
    pdf: PdfSource,
    trim_size: Union[TrimSize, str],
    expected_images: Optional[int] = None,
) -> ValidationReport:
    """
    Check an interior PDF against its trim size and the blank-verso layout.

    Args:
        pdf: PDF bytes or a path
        trim_size: Trim size the interior was built for
        expected_images: When given, the page count must be 1 + 2N
    """
    spec = get_page_spec(trim_size)
    target_w = points_from_inches(spec.width)
    target_h = points_from_inches(spec.height)

    reader = open_pdf(pdf)
    num_pages = len(reader.pages)
    report = ValidationReport(trim_size=str(getattr(trim_size, "value", trim_size)), page_count=num_pages)

    if reader.is_encrypted:
        report.add("error", "PDF is encrypted. KDP requires unencrypted, printable PDFs.")

    if num_pages == 0:
        report.add("error", "PDF has no pages.")
        return report

    if expected_images is not None and num_pages != interior_page_count(expected_images):
        report.add(
            "error",
            f"Expected {interior_page_count(expected_images)} pages for {expected_images} image(s), found {num_pages}.",
        )

    # KDP paperback page count limits
    if num_pages < KDP_MIN_PAGES:
        report.add("warning", f"Page count {num_pages} is below KDP minimum ({KDP_MIN_PAGES}); KDP will pad the book.")
    if num_pages > KDP_MAX_PAGES:
        report.add("error", f"Page count {num_pages} exceeds KDP maximum ({KDP_MAX_PAGES}).")

    first = reader.pages[0].mediabox
    report.page_size_pt = (float(first.width), float(first.height))

    for i, page in enumerate(reader.pages, start=1):
        w = float(page.mediabox.width)
        h = float(page.mediabox.height)
        if not (almost_equal(w, target_w) and almost_equal(h, target_h)):
            report.add(
                "error",
                f"Page {i} size {w:.2f}x{h:.2f} pt does not match trim size ({target_w:.2f}x{target_h:.2f} pt).",
            )
        if _has_image(page):
            report.image_pages += 1
            if i % 2 == 1:
                report.add("warning", f"Page {i} carries an image but should be blank in the single-sided layout.")

    return report
