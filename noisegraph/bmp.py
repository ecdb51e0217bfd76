"""Writing noise textures as 8-bit greyscale BMP files."""

from __future__ import annotations

import os
import struct
from pathlib import Path
from typing import Iterable, Union

PathLike = Union[str, "os.PathLike[str]"]

_HEADER = struct.Struct("<2sIIIIHHHH")
_INFO_HEADER_SIZE = 12
_PALETTE = bytes(level for level in range(256) for _ in range(3))
_DATA_OFFSET = _HEADER.size + len(_PALETTE)
_MAX_DIMENSION = 0xFFFF
_MAX_NUMBERED_EXPORTS = 1024


def _row_padding(width: int) -> int:
    return (-width) % 4


def encode_bmp(pixels: Iterable[int], width: int, height: int) -> bytes:
    """Encode packed RGBA pixels as a palettised 8-bit BMP.

    Only the lowest byte (the red channel) of each pixel is stored; the
    palette maps each index to the matching grey. Rows are padded to four
    bytes.
    """
    width = int(width)
    height = int(height)
    if not 0 < width <= _MAX_DIMENSION or not 0 < height <= _MAX_DIMENSION:
        raise ValueError(f"image size {width}x{height} is outside 1..{_MAX_DIMENSION}")
    data = bytes(int(pixel) & 0xFF for pixel in pixels)
    if len(data) != width * height:
        raise ValueError(f"expected {width * height} pixels, got {len(data)}")

    padding = _row_padding(width)
    file_size = _DATA_OFFSET + (width + padding) * height
    header = _HEADER.pack(b"BM", file_size, 0, _DATA_OFFSET, _INFO_HEADER_SIZE, width, height, 1, 8)
    pad = bytes(padding)
    rows = b"".join(data[start:start + width] + pad for start in range(0, len(data), width))
    return header + _PALETTE + rows


def write_bmp(path: PathLike, pixels: Iterable[int], width: int, height: int) -> Path:
    """Write pixels to a BMP file, replacing any existing file; returns the path."""
    target = Path(path)
    encoded = encode_bmp(pixels, width, height)
    with target.open("wb") as stream:
        stream.write(encoded)
    return target


def next_export_path(directory: PathLike, node_name: str) -> Path:
    """First free file name of the form NAME.bmp, NAME_1.bmp, NAME_2.bmp, ...

    After 1023 numbered attempts the last candidate is returned even if it exists.
    """
    folder = Path(directory)
    candidate = folder / f"{node_name}.bmp"
    for number in range(1, _MAX_NUMBERED_EXPORTS):
        if not candidate.exists():
            break
        candidate = folder / f"{node_name}_{number}.bmp"
    return candidate