"""Persisted settings of the texture preview in INI section form."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

SETTINGS_TYPE_NAME = "NoiseToolNoiseTexture"
SETTINGS_ENTRY_NAME = "Settings"

_FLOAT = r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))"
_INT = r"\s*([+-]?\d+)"
_FREQUENCY_RE = re.compile(r"frequency=" + _FLOAT, re.IGNORECASE)
_SEED_RE = re.compile(r"seed=" + _INT)
_GEN_TYPE_RE = re.compile(r"gen_type=" + _INT)
_EXPORT_SIZE_RE = re.compile(r"export_size=" + _INT + r"(?::" + _INT + r")?")
_SECTION_RE = re.compile(r"^\[(.*?)\]\[(.*)\]$")


def _int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


class GenType(enum.IntEnum):
    """How the preview samples the generator."""

    TWO_D = 0
    TWO_D_TILED = 1
    THREE_D = 2
    FOUR_D = 3

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    GenType.TWO_D: "2D",
    GenType.TWO_D_TILED: "2D Tiled",
    GenType.THREE_D: "3D Slice",
    GenType.FOUR_D: "4D Slice",
}


@dataclass
class TextureSettings:
    """Preview frequency, seed, generation type and export size."""

    frequency: float = 0.02
    seed: int = 1337
    gen_type: GenType = GenType.TWO_D
    export_size: tuple[int, int] = (4096, 4096)

    def to_ini(self) -> str:
        """The settings as an INI section."""
        width, height = self.export_size
        return (
            f"\n[{SETTINGS_TYPE_NAME}][{SETTINGS_ENTRY_NAME}]\n"
            f"frequency={self.frequency:f}\n"
            f"seed={self.seed:d}\n"
            f"gen_type={int(self.gen_type):d}\n"
            f"export_size={width:d}:{height:d}\n"
        )

    def apply_line(self, line: str) -> bool:
        """Apply one key=value line; returns whether a setting was read from it.

        Lines that do not parse, and unknown generation types, leave the
        settings unchanged.
        """
        applied = False
        if match := _FREQUENCY_RE.match(line):
            self.frequency = float(match.group(1))
            applied = True
        if match := _SEED_RE.match(line):
            self.seed = _int32(int(match.group(1)))
            applied = True
        if match := _GEN_TYPE_RE.match(line):
            try:
                self.gen_type = GenType(int(match.group(1)))
                applied = True
            except ValueError:
                pass
        if match := _EXPORT_SIZE_RE.match(line):
            width = int(match.group(1))
            height = int(match.group(2)) if match.group(2) is not None else self.export_size[1]
            self.export_size = (width, height)
            applied = True
        return applied


def parse_settings(text: str) -> TextureSettings:
    """Read preview settings from INI text; missing values keep their defaults."""
    settings = TextureSettings()
    in_section = False
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        if section := _SECTION_RE.match(line):
            in_section = section.group(1) == SETTINGS_TYPE_NAME and section.group(2) == SETTINGS_ENTRY_NAME
            continue
        if in_section:
            settings.apply_line(line)
    return settings