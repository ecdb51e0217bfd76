"""Texture preview state: sampling a generator over a grid and panning it."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Iterator, Union

from .generator import Generator
from .settings import GenType, TextureSettings

_BLANK_SIZE = (16, 16)


def _int32(value: int) -> int:
    value = int(value) & 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


class MouseButton(enum.Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass
class BuildData:
    """Everything needed to render one texture."""

    generator: Generator | None = None
    size: tuple[int, int] = (-1, -1)
    offset: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0, 0.0])
    frequency: float = 0.02
    seed: int = 1337
    iteration: int = 0
    gen_type: GenType = GenType.TWO_D


@dataclass(frozen=True)
class TextureData:
    """A rendered texture: raw noise values and packed greyscale RGBA pixels."""

    iteration: int
    size: tuple[int, int]
    min_value: float
    max_value: float
    values: tuple[float, ...]
    pixels: tuple[int, ...]


def _positions(data: BuildData) -> Iterator[tuple[float, ...]]:
    width, height = data.size
    freq = data.frequency
    ox, oy, oz, ow = (int(o) for o in data.offset)
    if data.gen_type is GenType.TWO_D_TILED:
        x_radius = width / (2.0 * math.pi)
        y_radius = height / (2.0 * math.pi)
        x_step = 2.0 * math.pi / width
        y_step = 2.0 * math.pi / height
        for y in range(height):
            ay = y * y_step
            for x in range(width):
                ax = x * x_step
                yield (
                    math.cos(ax) * x_radius * freq,
                    math.sin(ax) * x_radius * freq,
                    math.cos(ay) * y_radius * freq,
                    math.sin(ay) * y_radius * freq,
                )
        return
    extra: tuple[float, ...] = ()
    if data.gen_type is GenType.THREE_D:
        extra = (oz * freq,)
    elif data.gen_type is GenType.FOUR_D:
        extra = (oz * freq, ow * freq)
    for y in range(height):
        for x in range(width):
            yield ((x + ox) * freq, (y + oy) * freq, *extra)


def _to_rgba8(value: float) -> int:
    """Map [-1, 1] to a grey level, packed with red in the low byte and opaque alpha."""
    if math.isnan(value):
        level = 0
    else:
        level = int(round((min(max(value, -1.0), 1.0) + 1.0) * 127.5))
    return level | (level << 8) | (level << 16) | (0xFF << 24)


def _build_texture(data: BuildData) -> TextureData:
    if data.generator is None:
        raise ValueError("no generator to render")
    seed = _int32(data.seed)
    values = tuple(float(data.generator.gen(seed, *pos)) for pos in _positions(data))
    return TextureData(
        iteration=data.iteration,
        size=data.size,
        min_value=min(values),
        max_value=max(values),
        values=values,
        pixels=tuple(_to_rgba8(v) for v in values),
    )


def _blank_texture(iteration: int) -> TextureData:
    count = _BLANK_SIZE[0] * _BLANK_SIZE[1]
    return TextureData(iteration, _BLANK_SIZE, 0.0, 0.0, (0.0,) * count, (0,) * count)


class TexturePreview:
    """Keeps the preview's build settings and renders textures when they change."""

    def __init__(self, settings: TextureSettings | None = None) -> None:
        settings = settings or TextureSettings()
        self.build = BuildData(frequency=settings.frequency, seed=settings.seed, gen_type=settings.gen_type)
        self.export_size: tuple[int, int] = tuple(settings.export_size)
        self.texture: TextureData | None = None
        self.current_iteration = 0

    def regenerate(self, generator: Generator | None) -> TextureData | None:
        """Render with a new generator; a blank texture when there is none.

        Returns None, leaving the texture as it was, while the size is unset.
        """
        build = self.build
        build.generator = generator
        build.iteration += 1
        width, height = build.size
        if width <= 0 or height <= 0:
            return None
        texture = _build_texture(build) if generator is not None else _blank_texture(build.iteration)
        if texture.iteration > self.current_iteration:
            self.current_iteration = texture.iteration
            self.texture = texture
        return texture

    def resize(self, width: int, height: int) -> TextureData | None:
        """Change the view size, keeping it centred; None if the size is unchanged."""
        if width < 1 or height < 1:
            raise ValueError(f"preview size {width}x{height} must be at least 1x1")
        build = self.build
        old_width, old_height = build.size
        if (width, height) == (old_width, old_height):
            return None
        build.offset[0] -= (width - old_width) / 2
        build.offset[1] -= (height - old_height) / 2
        build.size = (int(width), int(height))
        return self.regenerate(build.generator)

    def drag(self, dx: float, dy: float, button: Union[MouseButton, str]) -> TextureData | None:
        """Pan the view: left drags x/y, right drags the z (and w in 4D) slice.

        Returns None when the drag does not apply to the current generation type.
        """
        button = MouseButton(button)
        build = self.build
        before = list(build.offset)
        if button is MouseButton.LEFT and build.gen_type is not GenType.TWO_D_TILED:
            build.offset[0] -= dx
            build.offset[1] += dy
        elif button is MouseButton.RIGHT and build.gen_type in (GenType.THREE_D, GenType.FOUR_D):
            build.offset[2] -= dx
            if build.gen_type is GenType.FOUR_D:
                build.offset[3] -= dy
        if build.offset == before:
            return None
        return self.regenerate(build.generator)

    def export_build_data(self) -> BuildData:
        """Build settings for an export at export_size showing the same view."""
        build = self.build
        if build.generator is None:
            raise ValueError("nothing to export: no generator is set")
        total = sum(build.size)
        if total <= 0:
            raise ValueError("nothing to export: the preview has no size")
        scale = sum(self.export_size) / total
        return BuildData(
            generator=build.generator,
            size=self.export_size,
            offset=[o * scale for o in build.offset],
            frequency=build.frequency / scale,
            seed=build.seed,
            iteration=build.iteration,
            gen_type=build.gen_type,
        )