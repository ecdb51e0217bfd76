"""Fractal nodes that sum several octaves of a source generator."""

from __future__ import annotations

import math
from typing import Any

from .generator import Generator, HybridSource, Metadata, source_value


def _next_seed(seed: int) -> int:
    """Seed of the next octave, wrapping like a signed 32-bit integer."""
    seed = (int(seed) + 1) & 0xFFFFFFFF
    return seed - (1 << 32) if seed & 0x80000000 else seed


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def ping_pong(t: float) -> float:
    """Fold a value back and forth around a period of two."""
    if not math.isfinite(t):
        return math.nan
    t -= round(t * 0.5) * 2.0
    return t if t < 1.0 else 2.0 - t


class Fractal(Generator):
    """Base of the fractal nodes: source, gain, octaves and lacunarity."""

    _source_type: type = Generator
    _source_name = "Source"

    def __init__(self) -> None:
        self.source: Generator | None = None
        self.gain = HybridSource(0.5)
        self.weighted_strength = HybridSource(0.0)
        self.octaves = 3
        self.lacunarity = 2.0
        self.fractal_bounding = 1.0 / 1.75

    def set_source(self, gen: Generator) -> None:
        if not isinstance(gen, self._source_type):
            raise TypeError(f"expected a {self._source_type.__name__}, got {type(gen).__name__}")
        self.source = gen

    def set_gain(self, value: Any) -> None:
        if isinstance(value, Generator):
            self.gain.constant = 1.0
        self.gain.set(value)
        self._calculate_fractal_bounding()

    def set_weighted_strength(self, value: Any) -> None:
        self.weighted_strength.set(value)

    def set_octave_count(self, value: int) -> None:
        self.octaves = int(value)
        self._calculate_fractal_bounding()

    def set_lacunarity(self, value: float) -> None:
        self.lacunarity = float(value)

    def _calculate_fractal_bounding(self) -> None:
        gain = abs(self.gain.constant)
        amp = gain
        amp_fractal = 1.0
        for _ in range(1, self.octaves):
            amp_fractal += amp
            amp *= gain
        self.fractal_bounding = 1.0 / amp_fractal

    @classmethod
    def _describe(cls, meta: Metadata) -> None:
        super()._describe(meta)
        meta.groups.append("Fractal")
        meta.add_generator_source(cls._source_name, Fractal.set_source, owner=Fractal, source_type=cls._source_type)
        meta.add_hybrid_source("Gain", 0.5, Fractal.set_gain, owner=Fractal)
        meta.add_hybrid_source("Weighted Strength", 0.0, Fractal.set_weighted_strength, owner=Fractal)
        meta.add_variable("Octaves", 3, Fractal.set_octave_count, owner=Fractal, min_value=2, max_value=16)
        meta.add_variable("Lacunarity", 2.0, Fractal.set_lacunarity, owner=Fractal)


class FractalFBm(Fractal):
    """Fractional Brownian motion: a weighted sum of octaves."""

    def gen(self, seed: int, *args: float) -> float:
        gain = source_value(self.gain, seed, *args)
        weighted = source_value(self.weighted_strength, seed, *args)
        amp = self.fractal_bounding
        pos = tuple(args)
        noise = source_value(self.source, seed, *pos)
        total = noise * amp
        for _ in range(1, self.octaves):
            seed = _next_seed(seed)
            amp *= _lerp(1.0, (noise + 1.0) * 0.5, weighted)
            amp *= gain
            pos = tuple(p * self.lacunarity for p in pos)
            noise = source_value(self.source, seed, *pos)
            total += noise * amp
        return total


class FractalRidged(Fractal):
    """Sum of inverted absolute octaves, giving sharp ridges."""

    def gen(self, seed: int, *args: float) -> float:
        gain = source_value(self.gain, seed, *args)
        weighted = source_value(self.weighted_strength, seed, *args)
        amp = self.fractal_bounding
        pos = tuple(args)
        noise = abs(source_value(self.source, seed, *pos))
        total = (noise * -2.0 + 1.0) * amp
        for _ in range(1, self.octaves):
            seed = _next_seed(seed)
            amp *= _lerp(1.0, 1.0 - noise, weighted)
            amp *= gain
            pos = tuple(p * self.lacunarity for p in pos)
            noise = abs(source_value(self.source, seed, *pos))
            total += (noise * -2.0 + 1.0) * amp
        return total


class FractalPingPong(Fractal):
    """Sum of octaves folded by the ping-pong function."""

    def __init__(self) -> None:
        super().__init__()
        self.ping_pong_strength = HybridSource(0.0)

    def set_ping_pong_strength(self, value: Any) -> None:
        self.ping_pong_strength.set(value)

    @classmethod
    def _describe(cls, meta: Metadata) -> None:
        super()._describe(meta)
        meta.add_hybrid_source(
            "Ping Pong Strength", 2.0, FractalPingPong.set_ping_pong_strength, owner=FractalPingPong
        )

    def gen(self, seed: int, *args: float) -> float:
        gain = source_value(self.gain, seed, *args)
        weighted = source_value(self.weighted_strength, seed, *args)
        strength = source_value(self.ping_pong_strength, seed, *args)
        amp = self.fractal_bounding
        pos = tuple(args)
        noise = ping_pong((source_value(self.source, seed, *pos) + 1.0) * strength)
        total = noise * amp
        for _ in range(1, self.octaves):
            seed = _next_seed(seed)
            amp *= _lerp(1.0, (noise + 1.0) * 0.5, weighted)
            amp *= gain
            pos = tuple(p * self.lacunarity for p in pos)
            noise = ping_pong((source_value(self.source, seed, *pos) + 1.0) * strength)
            total += noise * amp
        return total