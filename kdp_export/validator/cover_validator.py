from dataclasses import dataclass
from typing import Union

from kdp_export.config.paper import WHITE_PAPER, PaperStock
from kdp_export.config.sizes import TrimSize
from kdp_export.geometry import compute_cover_dimensions
from kdp_export.validator.report import PdfSource, Report, almost_equal, open_pdf


@dataclass
class CoverReport(Report):
    width_pt: float = 0.0
    height_pt: float = 0.0
    expected_width_pt: float = 0.0
    expected_height_pt: float = 0.0
    expected_spine_pt: float = 0.0


def validate_cover(
    pdf: PdfSource,
    trim_size: Union[TrimSize, str],
    page_count: int,
    paper: PaperStock = WHITE_PAPER,
) -> CoverReport:
    dims = compute_cover_dimensions(trim_size, page_count, paper)
    report = CoverReport(
        expected_width_pt=dims.width_pt,
        expected_height_pt=dims.height_pt,
        expected_spine_pt=dims.spine_width_pt,
    )

    reader = open_pdf(pdf)
    if reader.is_encrypted:
        report.add("error", "PDF is encrypted. Covers must be unencrypted.")

    if len(reader.pages) != 1:
        report.add("error", f"Cover must be a single-page PDF. Found {len(reader.pages)} page(s).")
    if not reader.pages:
        return report

    media = reader.pages[0].mediabox
    report.width_pt = float(media.width)
    report.height_pt = float(media.height)

    if not (almost_equal(report.width_pt, dims.width_pt) and almost_equal(report.height_pt, dims.height_pt)):
        report.add(
            "error",
            f"Page size {report.width_pt:.2f}x{report.height_pt:.2f} pt does not match expected cover "
            f"{dims.width_pt:.2f}x{dims.height_pt:.2f} pt.",
        )

    return report
