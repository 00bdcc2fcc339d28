from click.testing import CliRunner

from main import main


def test_builds_interior_and_cover(tmp_path, make_png, make_jpeg):
    first = tmp_path / "01.png"
    second = tmp_path / "02.jpg"
    first.write_bytes(make_png())
    second.write_bytes(make_jpeg())
    out_dir = tmp_path / "book"

    result = CliRunner().invoke(main, [
        "--image", str(first),
        "--image", str(second),
        "--trim", "6x9",
        "--cover-title", "Pets",
        "--cover-bg", "#FFF4D6",
        "--out-dir", str(out_dir),
    ])

    assert result.exit_code == 0, result.output
    assert (out_dir / "interior.pdf").read_bytes().startswith(b"%PDF")
    assert (out_dir / "cover.pdf").read_bytes().startswith(b"%PDF")
    assert "5 pages" in result.output


def test_images_dir_and_no_cover(tmp_path, make_png):
    images = tmp_path / "pages"
    images.mkdir()
    for i in range(3):
        (images / f"{i:02d}.png").write_bytes(make_png())
    (images / "notes.txt").write_text("skip me")
    out_dir = tmp_path / "out"

    result = CliRunner().invoke(main, ["--images-dir", str(images), "--no-cover", "--out-dir", str(out_dir)])

    assert result.exit_code == 0, result.output
    assert "7 pages" in result.output
    assert not (out_dir / "cover.pdf").exists()


def test_requires_images(tmp_path):
    result = CliRunner().invoke(main, ["--out-dir", str(tmp_path)])
    assert result.exit_code != 0


def test_dimensions_only():
    result = CliRunner().invoke(main, ["--dimensions-only", "--trim", "6x9", "--pages", "24"])
    assert result.exit_code == 0, result.output
    assert "12.3041 in" in result.output
    assert "9.2500 in" in result.output
    assert "0.0541 in" in result.output


def test_validate_paths(tmp_path, make_png):
    out_dir = tmp_path / "book"
    image = tmp_path / "p.png"
    image.write_bytes(make_png())
    CliRunner().invoke(main, ["--image", str(image), "--trim", "8x10", "--out-dir", str(out_dir)])

    ok = CliRunner().invoke(main, ["--validate-path", str(out_dir / "interior.pdf"), "--trim", "8x10"])
    assert ok.exit_code == 0, ok.output

    cover_ok = CliRunner().invoke(main, [
        "--validate-cover-path", str(out_dir / "cover.pdf"), "--trim", "8x10", "--pages", "1",
    ])
    assert cover_ok.exit_code == 0, cover_ok.output

    wrong = CliRunner().invoke(main, ["--validate-path", str(out_dir / "interior.pdf"), "--trim", "6x9"])
    assert wrong.exit_code == 1
