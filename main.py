import logging
import os
from pathlib import Path
from typing import Tuple

import click

from kdp_export.config.sizes import available_trim_sizes
from kdp_export.errors import KDPExportError
from kdp_export.export import CoverColor, ExportRequest, build_export
from kdp_export.geometry import compute_cover_dimensions
from kdp_export.renderer.images import SourceImage
from kdp_export.validator.cover_validator import validate_cover
from kdp_export.validator.interior_validator import validate_interior

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg"}


def _collect_images(image_paths: Tuple[str, ...], images_dir: str | None) -> list[SourceImage]:
    paths = [Path(p) for p in image_paths]
    if images_dir:
        paths.extend(sorted(p for p in Path(images_dir).iterdir() if p.suffix.lower() in IMAGE_SUFFIXES))
    return [SourceImage.from_path(p) for p in paths]


def _echo_issues(issues):
    if not issues:
        click.echo("✅ No issues found.")
        return
    for iss in issues:
        click.echo(f"{iss.level.upper()}: {iss.message}")


@click.command(help="Build a KDP interior PDF (and wraparound cover) from coloring page images, or validate existing PDFs.")
@click.option("--image", "image_paths", type=click.Path(exists=True, dir_okay=False), multiple=True, help="Page image (PNG/JPEG), repeat in print order")
@click.option("--images-dir", "images_dir", type=click.Path(exists=True, file_okay=False), default=None, help="Directory of page images, added in filename order")
@click.option("--trim", type=click.Choice(available_trim_sizes()), default="8.5x11", show_default=True, help="Trim size key")
@click.option("--page-numbers/--no-page-numbers", "page_numbers", default=True, show_default=True, help="Print page numbers under each image")
@click.option("--cover/--no-cover", "make_cover", default=True, show_default=True, help="Also build the wraparound cover")
@click.option("--cover-title", "cover_title", type=str, default=None, help="Front cover title (defaults to the output directory name)")
@click.option("--cover-author", "cover_author", type=str, default="Activity Books", show_default=True, help="Front cover author")
@click.option("--cover-back-text", "cover_back_text", type=str, default=None, help="Back cover blurb")
@click.option("--cover-bg", "cover_bg", type=str, default=None, help="Cover background color as hex, e.g. '#FFF4D6'")
@click.option("--out-dir", "out_dir", type=str, default="outputs", show_default=True, help="Directory for interior.pdf and cover.pdf")
@click.option("--dimensions-only", "dimensions_only", is_flag=True, default=False, help="Print cover dimensions for --pages and exit")
@click.option("--pages", type=click.IntRange(min=0), default=None, help="Page count for --dimensions-only and --validate-cover-path")
@click.option("--validate-path", "validate_path", type=str, default=None, help="Validate an interior PDF against --trim and exit")
@click.option("--validate-cover-path", "validate_cover_path", type=str, default=None, help="Validate a cover PDF against --trim and --pages and exit")
@click.option("--verbose", is_flag=True, default=False, help="Debug logging")
def main(image_paths: Tuple[str, ...], images_dir: str | None, trim: str, page_numbers: bool, make_cover: bool, cover_title: str | None,
         cover_author: str, cover_back_text: str | None, cover_bg: str | None, out_dir: str, dimensions_only: bool, pages: int | None,
         validate_path: str | None, validate_cover_path: str | None, verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if dimensions_only:
        if pages is None:
            raise click.UsageError("--dimensions-only requires --pages")
        dims = compute_cover_dimensions(trim, pages)
        click.echo(f"Cover for {trim}, {pages} pages")
        click.echo(f"Width:  {dims.width:.4f} in ({dims.width_pt:.2f} pt)")
        click.echo(f"Height: {dims.height:.4f} in ({dims.height_pt:.2f} pt)")
        click.echo(f"Spine:  {dims.spine_width:.4f} in ({dims.spine_width_pt:.2f} pt)")
        return

    # Validation mode
    if validate_cover_path:
        if pages is None:
            raise click.UsageError("--validate-cover-path requires --pages")
        report = validate_cover(validate_cover_path, trim, pages)
        click.echo(f"Cover validation for {validate_cover_path}")
        click.echo(f"Expected size: {report.expected_width_pt:.2f} x {report.expected_height_pt:.2f} pt (spine {report.expected_spine_pt:.2f} pt)")
        click.echo(f"Actual size:   {report.width_pt:.2f} x {report.height_pt:.2f} pt")
        _echo_issues(report.issues)
        if not report.ok:
            raise SystemExit(1)
        return

    if validate_path:
        report = validate_interior(validate_path, trim)
        click.echo(f"Validation for {validate_path} (trim={report.trim_size})")
        click.echo(f"Pages: {report.page_count} ({report.image_pages} with images)")
        click.echo(f"First page size: {report.page_size_pt[0]:.2f} x {report.page_size_pt[1]:.2f} pt")
        _echo_issues(report.issues)
        if not report.ok:
            raise SystemExit(1)
        return

    # Generation mode
    images = _collect_images(image_paths, images_dir)
    if not images:
        raise click.UsageError("Provide page images with --image or --images-dir")

    try:
        request = ExportRequest(
            trim_size=trim,
            include_page_numbers=page_numbers,
            include_cover=make_cover,
            cover_title=cover_title,
            cover_author=cover_author,
            cover_back_text=cover_back_text,
            cover_background=CoverColor.from_hex(cover_bg) if cover_bg else None,
        )
        result = build_export(request, images, title_fallback=Path(out_dir).name or "Untitled")
    except (KDPExportError, ValueError) as e:
        click.echo(f"❌ Export failed: {e}")
        raise SystemExit(1)

    os.makedirs(out_dir, exist_ok=True)
    interior_path = os.path.join(out_dir, "interior.pdf")
    with open(interior_path, "wb") as f:
        f.write(result.interior)
    click.echo(f"✅ Generated {interior_path} with {result.interior_pages} pages at trim {trim}")

    if result.cover is not None:
        cover_path = os.path.join(out_dir, "cover.pdf")
        with open(cover_path, "wb") as f:
            f.write(result.cover)
        dims = result.cover_dimensions
        click.echo(f"✅ Generated {cover_path} ({dims.width:.3f} x {dims.height:.3f} in, spine {dims.spine_width:.4f} in)")
    elif result.cover_error is not None:
        click.echo(f"❌ Cover failed: {result.cover_error}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
