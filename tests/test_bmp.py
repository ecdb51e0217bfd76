import struct

import pytest

from noisegraph.bmp import encode_bmp, next_export_path, write_bmp


def _header(data):
    return struct.unpack("<2sIIIIHHHH", data[:26])


def test_header_fields():
    data = encode_bmp([0] * 12, 4, 3)
    magic, file_size, reserved, offset, info_size, width, height, planes, depth = _header(data)
    assert magic == b"BM"
    assert reserved == 0
    assert offset == 14 + 12 + 256 * 3
    assert info_size == 12
    assert (width, height) == (4, 3)
    assert planes == 1
    assert depth == 8
    assert file_size == len(data)


def test_palette_is_grey_ramp():
    data = encode_bmp([0], 1, 1)
    palette = data[26:26 + 768]
    triples = [palette[i:i + 3] for i in range(0, 768, 3)]
    assert all(t == bytes([level] * 3) for level, t in enumerate(triples))


def test_rows_are_padded_to_four_bytes():
    pixels = [1, 2, 3, 4, 5, 6]
    data = encode_bmp(pixels, 3, 2)
    body = data[_header(data)[3]:]
    assert body == bytes([1, 2, 3, 0, 4, 5, 6, 0])


def test_no_padding_when_width_is_multiple_of_four():
    pixels = list(range(8))
    data = encode_bmp(pixels, 4, 2)
    assert data[_header(data)[3]:] == bytes(pixels)


def test_only_low_byte_of_pixel_is_written():
    data = encode_bmp([0xFF336699], 1, 1)
    assert data[_header(data)[3]] == 0x99


def test_pixel_count_must_match_size():
    with pytest.raises(ValueError):
        encode_bmp([0, 0, 0], 2, 2)


@pytest.mark.parametrize("width,height", [(0, 1), (1, 0), (70000, 1)])
def test_invalid_size_rejected(width, height):
    with pytest.raises(ValueError):
        encode_bmp([], width, height)


def test_write_bmp_roundtrip(tmp_path):
    target = tmp_path / "out.bmp"
    result = write_bmp(target, [7, 8, 9, 10], 2, 2)
    assert result == target
    assert target.read_bytes() == encode_bmp([7, 8, 9, 10], 2, 2)


def test_next_export_path_sequence(tmp_path):
    first = next_export_path(tmp_path, "Perlin")
    assert first == tmp_path / "Perlin.bmp"
    first.write_bytes(b"")
    second = next_export_path(tmp_path, "Perlin")
    assert second == tmp_path / "Perlin_1.bmp"
    second.write_bytes(b"")
    assert next_export_path(tmp_path, "Perlin") == tmp_path / "Perlin_2.bmp"


def test_next_export_path_ignores_other_names(tmp_path):
    (tmp_path / "Simplex.bmp").write_bytes(b"")
    assert next_export_path(tmp_path, "Perlin") == tmp_path / "Perlin.bmp"