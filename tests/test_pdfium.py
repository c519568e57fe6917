"""End-to-end conversions through the real PDFium engine."""

import io
from zipfile import ZipFile

import pytest

pytest.importorskip("pypdfium2")

from core.pdf_imager.engine import PdfiumEngine  # noqa: E402
from core.pdf_imager.errors import DocumentLoadError  # noqa: E402

from conftest import PDF_HEADERS, open_image  # noqa: E402

LETTER = (612, 792)
HALF = (300, 200)


def test_engine_reports_page_geometry(tmp_path, pdf_factory) -> None:
    source = tmp_path / "doc.pdf"
    source.write_bytes(pdf_factory([LETTER, HALF]))
    engine = PdfiumEngine.load()
    document = engine.open_document(source)
    try:
        sizes = []
        for page in document.pages():
            sizes.append((round(page.width_points), round(page.height_points)))
            image = engine.render_page(page, 150)
            assert image.mode == "RGB"
            assert image.width == 150
        assert sizes == [LETTER, HALF]
    finally:
        document.close()


def test_corrupt_document_fails_to_load(tmp_path) -> None:
    source = tmp_path / "broken.pdf"
    source.write_bytes(b"%PDF-1.7\nthis is not really a pdf\n")
    with pytest.raises(DocumentLoadError):
        PdfiumEngine.load().open_document(source)


def test_composite_geometry_follows_dpi(client_factory, pdf_factory) -> None:
    client = client_factory()
    payload = pdf_factory([LETTER, HALF])

    response = client.post("/", content=payload, headers=PDF_HEADERS)
    assert response.status_code == 200
    assert open_image(response.content).size == (612, 992)

    response = client.post("/?dpi=144", content=payload, headers=PDF_HEADERS)
    assert response.status_code == 200
    image = open_image(response.content)
    assert image.format == "PNG"
    assert image.size == (1224, 1984)


def test_zip_of_real_pages(client_factory, pdf_factory) -> None:
    client = client_factory()
    payload = pdf_factory([LETTER, HALF, LETTER])
    response = client.post(
        "/?dpi=36", content=payload, headers={**PDF_HEADERS, "Accept": "image/jpeg,application/zip"}
    )
    assert response.status_code == 200
    with ZipFile(io.BytesIO(response.content)) as archive:
        images = [open_image(archive.read(name)) for name in archive.namelist()]
    assert [image.format for image in images] == ["JPEG"] * 3
    assert [image.size for image in images] == [(306, 396), (150, 100), (306, 396)]


def test_rendering_is_deterministic(client_factory, pdf_factory) -> None:
    client = client_factory()
    payload = pdf_factory([LETTER, HALF])
    headers = {**PDF_HEADERS, "Accept": "application/zip"}

    def pixels() -> list[bytes]:
        response = client.post("/?dpi=50", content=payload, headers=headers)
        assert response.status_code == 200
        with ZipFile(io.BytesIO(response.content)) as archive:
            return [open_image(archive.read(name)).tobytes() for name in archive.namelist()]

    assert pixels() == pixels()


def test_zero_page_document(client_factory, pdf_factory) -> None:
    client = client_factory()
    response = client.post("/", content=pdf_factory([]), headers=PDF_HEADERS)
    assert response.status_code == 400
    assert "No pages could be extracted" in response.json()["detail"]


def test_counter_includes_failed_conversions(client_factory) -> None:
    client = client_factory()
    response = client.post("/", content=b"%PDF-1.7\ngarbage\n", headers=PDF_HEADERS)
    assert response.status_code == 500
    assert response.json()["detail"].startswith("Failed loading the document binary")
    assert client.get("/").json() == {"count_conversions": 1}
