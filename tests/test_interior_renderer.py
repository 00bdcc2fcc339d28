import logging
from io import BytesIO

import pytest
from pypdf import PdfReader

from kdp_export.errors import ImageEmbedFailure, InvalidTrimSize
from kdp_export.renderer.images import ImageFormat, SourceImage, detect_format, load_image
from kdp_export.renderer.interior_renderer import (
    PLACEHOLDER_TEXT,
    build_interior,
    interior_page_count,
)


def _reader(data: bytes) -> PdfReader:
    return PdfReader(BytesIO(data))


def _has_xobject(page) -> bool:
    return "/Resources" in page and "/XObject" in page["/Resources"]


@pytest.mark.parametrize("count", [0, 1, 3])
@pytest.mark.parametrize("numbers", [True, False])
def test_page_count_is_one_plus_two_n(make_png, count, numbers):
    images = [make_png() for _ in range(count)]
    reader = _reader(build_interior("8.5x11", images, include_page_numbers=numbers))
    assert len(reader.pages) == 1 + 2 * count == interior_page_count(count)


def test_pages_match_trim_size(make_png):
    reader = _reader(build_interior("6x9", [make_png()]))
    for page in reader.pages:
        assert float(page.mediabox.width) == pytest.approx(432)
        assert float(page.mediabox.height) == pytest.approx(648)


def test_page_numbers_count_physical_pages(make_png, make_jpeg):
    reader = _reader(build_interior("8.5x11", [make_png(), make_jpeg()], include_page_numbers=True))
    assert len(reader.pages) == 5
    assert reader.pages[1].extract_text().strip() == "2"
    assert reader.pages[3].extract_text().strip() == "4"
    for blank in (0, 2, 4):
        assert reader.pages[blank].extract_text().strip() == ""


def test_no_page_numbers(make_png):
    reader = _reader(build_interior("8x10", [make_png()], include_page_numbers=False))
    assert reader.pages[1].extract_text().strip() == ""


def test_images_only_on_image_pages(make_png, make_jpeg):
    reader = _reader(build_interior("8.5x11", [make_png(), make_jpeg(600, 200)]))
    assert _has_xobject(reader.pages[1])
    assert _has_xobject(reader.pages[3])
    for blank in (0, 2, 4):
        assert not _has_xobject(reader.pages[blank])


def test_corrupt_image_gets_placeholder(make_png, make_jpeg, corrupt_png, caplog):
    images = [make_png(), corrupt_png, make_jpeg(), make_png(800, 200)]
    with caplog.at_level(logging.WARNING, logger="kdp_export.renderer.interior_renderer"):
        data = build_interior("8.5x11", images, include_page_numbers=True)

    reader = _reader(data)
    assert len(reader.pages) == 9
    assert PLACEHOLDER_TEXT in reader.pages[3].extract_text()
    assert not _has_xobject(reader.pages[3])
    for page_index in (1, 5, 7):
        assert _has_xobject(reader.pages[page_index])
        assert PLACEHOLDER_TEXT not in reader.pages[page_index].extract_text()
    assert any("placeholder" in r.getMessage() for r in caplog.records)


def test_one_corrupt_among_three(make_png, make_jpeg, corrupt_png):
    reader = _reader(build_interior("6x9", [make_png(), corrupt_png, make_jpeg()]))
    assert len(reader.pages) == 7
    assert PLACEHOLDER_TEXT in reader.pages[3].extract_text()


def test_truncated_image_gets_placeholder(make_png):
    data = make_png(500, 500)
    reader = _reader(build_interior("8.5x11", [data[: len(data) // 3]], include_page_numbers=False))
    assert len(reader.pages) == 3
    assert PLACEHOLDER_TEXT in reader.pages[1].extract_text()


def test_transparent_png_is_flattened():
    from PIL import Image

    buf = BytesIO()
    Image.new("RGBA", (120, 80), (0, 0, 0, 0)).save(buf, format="PNG")
    reader = _reader(build_interior("8.5x11", [buf.getvalue()]))
    assert _has_xobject(reader.pages[1])


def test_invalid_trim_size_fails_fast(make_png):
    with pytest.raises(InvalidTrimSize):
        build_interior("A4", [make_png()])


def test_detect_format(make_png, make_jpeg):
    assert detect_format(make_png()) is ImageFormat.PNG
    assert detect_format(make_jpeg()) is ImageFormat.JPEG
    assert detect_format(b"", name="page.PNG") is ImageFormat.PNG
    assert detect_format(b"\xff\xd8\xff", name="page.jpg") is ImageFormat.JPEG


def test_source_image_records_pixel_size(make_jpeg):
    source = SourceImage.from_bytes(make_jpeg(640, 480), name="cat.jpg")
    assert source.format is ImageFormat.JPEG
    assert source.width is None
    load_image(source, 0)
    assert (source.width, source.height) == (640, 480)


def test_mislabelled_image_fails_to_load(make_jpeg):
    source = SourceImage.from_bytes(make_jpeg(), name="page.png")
    assert source.format is ImageFormat.PNG
    with pytest.raises(ImageEmbedFailure) as exc:
        load_image(source, 4)
    assert exc.value.index == 4
    assert exc.value.name == "page.png"


def test_source_image_from_path(tmp_path, make_png):
    path = tmp_path / "p1.png"
    path.write_bytes(make_png())
    source = SourceImage.from_path(path)
    assert source.name == "p1.png"
    assert source.format is ImageFormat.PNG
