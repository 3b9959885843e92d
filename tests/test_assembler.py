"""Unit tests for PDF assembly."""

from __future__ import annotations

from pathlib import Path

import pikepdf
import pytest

from image_pdf.assembler import DocumentBuilder, assemble_pdf, build_document
from image_pdf.errors import (
    ImageNotFoundError,
    ImageProcessingError,
    ImageReadError,
    NoImagesError,
)
from image_pdf.geometry import PageBox
from image_pdf.objects import Name, ObjectId, Stream
from image_pdf.settings import FitMode, Orientation, PageSettings, PageSize

A4 = PageBox(width_pt=595.0, height_pt=842.0)


class TestDocumentBuilder:
    def test_init_creates_catalog_and_reserves_pages(self):
        builder = DocumentBuilder(A4, FitMode.FIT)
        doc = builder.document

        assert builder.pages_id == ObjectId(1, 0)
        assert doc.root == ObjectId(2, 0)
        assert doc.get_object(doc.root) == {"Type": Name("Catalog"), "Pages": ObjectId(1)}
        assert 1 not in doc.objects

    def test_page_objects(self, png_factory, fake_decoder):
        builder = DocumentBuilder(
            A4,
            FitMode.FIT,
            optimizer=None,
            decoder=fake_decoder(width=100, height=50),
        )

        page_id = builder.add_image_page(png_factory())
        doc = builder.document

        assert page_id == ObjectId(5)
        image = doc.get_object(ObjectId(3))
        assert isinstance(image, Stream)
        assert image.dictionary == {
            "Type": "XObject",
            "Subtype": "Image",
            "Width": 100,
            "Height": 50,
            "ColorSpace": "DeviceRGB",
            "BitsPerComponent": 8,
            "Length": 100 * 50 * 3,
        }
        assert image.data == bytes(100 * 50 * 3)

        content = doc.get_object(ObjectId(4))
        assert content.data == b"q\n595 0 0 297.5 0 272.25 cm\n/Im1 Do\nQ"

        page = doc.get_object(page_id)
        assert page == {
            "Type": "Page",
            "Parent": ObjectId(1),
            "MediaBox": [0, 0, 595.0, 842.0],
            "Contents": ObjectId(4),
            "Resources": {"XObject": {"Im1": ObjectId(3)}},
        }

    def test_finalize_writes_page_tree_in_order(self, png_factory, fake_decoder):
        builder = DocumentBuilder(A4, FitMode.FILL, optimizer=None, decoder=fake_decoder())
        ids = [builder.add_image_page(png_factory(f"p{i}.png")) for i in range(3)]

        doc = builder.finalize()

        assert doc.get_object(builder.pages_id) == {
            "Type": "Pages",
            "Count": 3,
            "Kids": ids,
        }

    def test_validator_runs_first(self, tmp_path: Path, fake_decoder):
        decoded = []

        def _decoder(path):
            decoded.append(path)
            return fake_decoder()(path)

        builder = DocumentBuilder(A4, FitMode.FIT, decoder=_decoder)

        with pytest.raises(ImageNotFoundError):
            builder.add_image_page(tmp_path / "missing.png")
        assert decoded == []

    def test_optimized_copy_is_decoded_then_removed(self, image_factory, fake_decoder):
        decoded = []

        def _decoder(path):
            decoded.append(path)
            assert path.exists()
            return fake_decoder()(path)

        src = image_factory("photo.jpg")
        builder = DocumentBuilder(A4, FitMode.FIT, decoder=_decoder)
        builder.add_image_page(src)

        assert len(decoded) == 1
        assert decoded[0] != src
        assert decoded[0].name.endswith("_photo.jpg")
        assert not decoded[0].exists()

    def test_temp_file_removed_when_decode_fails(self, image_factory):
        decoded = []

        def _decoder(path):
            decoded.append(path)
            raise ImageReadError("corrupt")

        builder = DocumentBuilder(A4, FitMode.FIT, decoder=_decoder)

        with pytest.raises(ImageReadError):
            builder.add_image_page(image_factory("scan.png"))
        assert not decoded[0].exists()

    def test_unoptimized_format_decoded_from_source(self, image_factory, fake_decoder):
        decoded = []

        def _decoder(path):
            decoded.append(path)
            return fake_decoder()(path)

        src = image_factory("scan.bmp")
        DocumentBuilder(A4, FitMode.FIT, decoder=_decoder).add_image_page(src)

        assert decoded == [src]


class TestBuildDocument:
    def test_empty_raises(self):
        with pytest.raises(NoImagesError, match="No images provided"):
            build_document([], A4, FitMode.FIT)

    def test_first_failure_aborts(self, png_factory, tmp_path: Path, fake_decoder):
        paths = [
            png_factory("a.png"),
            tmp_path / "missing-1.png",
            tmp_path / "missing-2.png",
        ]

        with pytest.raises(ImageNotFoundError, match="missing-1.png"):
            build_document(paths, A4, FitMode.FIT, decoder=fake_decoder())

    def test_optimizer_failure_aborts(self, png_factory, fake_decoder):
        def _optimizer(src, dst, quality):
            raise ImageProcessingError("cannot shrink")

        with pytest.raises(ImageProcessingError, match="cannot shrink"):
            build_document(
                [png_factory()],
                A4,
                FitMode.FIT,
                optimizer=_optimizer,
                decoder=fake_decoder(),
            )


class TestAssemblePdf:
    def test_single_image(self, png_factory, tmp_path: Path):
        img = png_factory("slide_01.png")
        out = tmp_path / "output.pdf"

        size = assemble_pdf(image_paths=[img], output_path=out)

        assert out.exists()
        assert size == out.stat().st_size
        assert out.read_bytes()[:5] == b"%PDF-"

    def test_multiple_images(self, png_factory, tmp_path: Path):
        images = [png_factory(f"slide_{i + 1:02d}.png") for i in range(3)]
        out = tmp_path / "output.pdf"

        assemble_pdf(image_paths=images, output_path=out)

        with pikepdf.open(out) as pdf:
            assert len(pdf.pages) == 3

    def test_creates_parent_directories(self, png_factory, tmp_path: Path):
        img = png_factory("slide_01.png")
        out = tmp_path / "nested" / "deep" / "output.pdf"

        assemble_pdf(image_paths=[img], output_path=out)

        assert out.exists()

    def test_empty_image_list_raises(self, tmp_path: Path):
        out = tmp_path / "output.pdf"

        with pytest.raises(NoImagesError):
            assemble_pdf(image_paths=[], output_path=out)
        assert not out.exists()

    def test_missing_image_raises(self, png_factory, tmp_path: Path):
        out = tmp_path / "output.pdf"
        missing = tmp_path / "nonexistent.png"

        with pytest.raises(ImageNotFoundError):
            assemble_pdf(image_paths=[png_factory(), missing], output_path=out)
        assert not out.exists()

    def test_landscape_letter_media_box(self, png_factory, tmp_path: Path):
        out = tmp_path / "output.pdf"
        settings = PageSettings(page_size=PageSize.LETTER, orientation=Orientation.LANDSCAPE)

        assemble_pdf(image_paths=[png_factory()], output_path=out, settings=settings)

        with pikepdf.open(out) as pdf:
            assert [float(v) for v in pdf.pages[0].MediaBox] == [0, 0, 792, 612]
