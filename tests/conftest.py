"""Shared fixtures: small images written on the fly."""

from __future__ import annotations

import struct
import zlib
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

from image_pdf.imaging import DecodedImage


def create_minimal_png(
    path: Path,
    *,
    width: int = 100,
    height: int = 100,
    rgb: tuple[int, int, int] = (255, 0, 0),
) -> None:
    """Create a minimal valid RGB PNG file without going through Pillow."""

    def _chunk(chunk_type: bytes, data: bytes) -> bytes:
        c = chunk_type + data
        crc = struct.pack(">I", zlib.crc32(c) & 0xFFFFFFFF)
        return struct.pack(">I", len(data)) + c + crc

    signature = b"\x89PNG\r\n\x1a\n"
    ihdr_data = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    ihdr = _chunk(b"IHDR", ihdr_data)

    raw_data = b""
    for _ in range(height):
        raw_data += b"\x00" + bytes(rgb) * width
    idat = _chunk(b"IDAT", zlib.compress(raw_data))
    iend = _chunk(b"IEND", b"")

    path.write_bytes(signature + ihdr + idat + iend)


@pytest.fixture
def png_factory(tmp_path: Path) -> Callable[..., Path]:
    def _make(name: str = "image.png", **kwargs) -> Path:
        path = tmp_path / name
        create_minimal_png(path, **kwargs)
        return path

    return _make


@pytest.fixture
def image_factory(tmp_path: Path) -> Callable[..., Path]:
    """Write an image in any Pillow-supported format, chosen by extension."""

    def _make(
        name: str,
        *,
        size: tuple[int, int] = (40, 30),
        mode: str = "RGB",
        color=(0, 128, 255),
    ) -> Path:
        path = tmp_path / name
        Image.new(mode, size, color).save(path)
        return path

    return _make


@pytest.fixture
def fake_decoder() -> Callable[..., Callable[[Path], DecodedImage]]:
    """Build a decoder that returns black pixels of a fixed size for any path."""

    def _make(width: int = 10, height: int = 20) -> Callable[[Path], DecodedImage]:
        def _decode(path: Path) -> DecodedImage:
            return DecodedImage(
                width=width, height=height, data=bytes(width * height * 3)
            )

        return _decode

    return _make
