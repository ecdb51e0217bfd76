"""Base64 encoding used for serialised node trees."""

from __future__ import annotations

import base64
from typing import Iterable, Union

BytesLike = Union[bytes, bytearray, memoryview, Iterable[int]]


def encode(data: BytesLike) -> str:
    """Encode bytes as padded standard Base64 text."""
    return base64.b64encode(bytes(data)).decode("ascii")


def decode(text: Union[str, bytes]) -> bytes:
    """Decode padded standard Base64 text.

    Raises ValueError when the text length is not a multiple of four or
    when it holds characters outside the Base64 alphabet.
    """
    if len(text) % 4 != 0:
        raise ValueError(f"Base64 text length {len(text)} is not a multiple of 4")
    return base64.b64decode(text, validate=True)