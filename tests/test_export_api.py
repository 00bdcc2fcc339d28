import io
import zipfile

import pytest
from fastapi.testclient import TestClient

from kdp_export import export
from kdp_export.errors import CoverBuildFailure
from web.backend.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_trim_sizes(client):
    body = client.get("/api/export/trim-sizes").json()
    assert body["success"] is True
    assert [t["trim_size"] for t in body["trim_sizes"]] == ["8.5x11", "8x10", "6x9"]
    assert body["trim_sizes"][0]["margin_outside"] == 0.375


def test_cover_dimensions(client):
    response = client.get("/api/export/cover-dimensions", params={"trim_size": "6x9", "page_count": 24})
    assert response.status_code == 200
    body = response.json()
    assert body["spine_width_in"] == pytest.approx(24 / 444)
    assert body["width_in"] == pytest.approx(12.304, abs=1e-3)
    assert body["height_in"] == pytest.approx(9.25)


@pytest.mark.parametrize("params", [
    {"trim_size": "A4", "page_count": 24},
    {"trim_size": "6x9", "page_count": -1},
])
def test_cover_dimensions_rejects_bad_input(client, params):
    assert client.get("/api/export/cover-dimensions", params=params).status_code == 400


def _files(*payloads):
    return [("images", (f"page{i}.png", data, "image/png")) for i, data in enumerate(payloads)]


def test_package_zip(client, make_png):
    response = client.post(
        "/api/export/package",
        files=_files(make_png(), make_png()),
        data={"trim_size": "8x10", "cover_title": "Space Fun", "cover_background": "#DDEEFF"},
    )
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    assert "Space_Fun_kdp.zip" in response.headers["content-disposition"]

    archive = zipfile.ZipFile(io.BytesIO(response.content))
    assert sorted(archive.namelist()) == ["README.txt", "cover.pdf", "interior.pdf"]
    readme = archive.read("README.txt").decode()
    assert "5 pages" in readme
    assert "Space Fun" in readme


def test_package_reports_cover_failure(client, monkeypatch, make_png):
    def broken_cover(*args, **kwargs):
        raise CoverBuildFailure("no fonts")

    monkeypatch.setattr(export, "build_cover", broken_cover)
    response = client.post("/api/export/package", files=_files(make_png()))

    assert response.status_code == 200
    assert "no fonts" in response.headers["x-cover-error"]
    archive = zipfile.ZipFile(io.BytesIO(response.content))
    assert "cover.pdf" not in archive.namelist()
    assert "NOT GENERATED" in archive.read("README.txt").decode()


def test_package_rejects_bad_trim(client, make_png):
    response = client.post("/api/export/package", files=_files(make_png()), data={"trim_size": "A4"})
    assert response.status_code == 400


def test_package_rejects_too_many_images(client, monkeypatch, make_png):
    from web.backend.api import export_api
    from web.backend.config import Profile

    monkeypatch.setattr(export_api, "profile", Profile(max_images=1))
    response = client.post("/api/export/package", files=_files(make_png(), make_png()))
    assert response.status_code == 413
