"""Domain warp nodes applied over several octaves."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Sequence

from .fractal import Fractal, _lerp, _next_seed
from .generator import Generator, HybridSource, Metadata, source_value


class DomainWarp(Generator):
    """A node that displaces positions before sampling its warp source."""

    def __init__(self) -> None:
        self.warp_source: Generator | None = None
        self.warp_amplitude = HybridSource(1.0)
        self.warp_frequency = 0.5

    def set_warp_source(self, gen: Generator) -> None:
        if not isinstance(gen, Generator):
            raise TypeError(f"expected a generator, got {type(gen).__name__}")
        self.warp_source = gen

    def set_warp_amplitude(self, value: Any) -> None:
        self.warp_amplitude.set(value)

    def set_warp_frequency(self, value: float) -> None:
        self.warp_frequency = float(value)

    @classmethod
    def _describe(cls, meta: Metadata) -> None:
        super()._describe(meta)
        meta.groups.append("Domain Warp")
        meta.add_generator_source("Source", DomainWarp.set_warp_source, owner=DomainWarp)
        meta.add_hybrid_source("Warp Amplitude", 1.0, DomainWarp.set_warp_amplitude, owner=DomainWarp)
        meta.add_variable("Warp Frequency", 0.5, DomainWarp.set_warp_frequency, owner=DomainWarp)

    @abstractmethod
    def warp(
        self, seed: int, amplitude: float, noise_pos: Sequence[float], warp_pos: Sequence[float]
    ) -> tuple[float, tuple[float, ...]]:
        """Displace warp_pos using noise sampled at noise_pos.

        Returns the warp strength and the displaced position.
        """

    def gen(self, seed: int, *args: float) -> float:
        amp = source_value(self.warp_amplitude, seed, *args)
        noise_pos = tuple(p * self.warp_frequency for p in args)
        _, warped = self.warp(seed, amp, noise_pos, tuple(args))
        return source_value(self.warp_source, seed, *warped)


class _WarpFractal(Fractal):
    _source_type = DomainWarp
    _source_name = "Domain Warp Source"

    @classmethod
    def _describe(cls, meta: Metadata) -> None:
        super()._describe(meta)
        meta.groups.append("Domain Warp")

    def _fractal_warp(self, seed: int, args: Sequence[float], progressive: bool) -> float:
        warp = self.source
        if warp is None:
            raise ValueError("domain warp source is not set")
        start = tuple(args)
        amp = self.fractal_bounding * source_value(warp.warp_amplitude, seed, *start)
        weighted = source_value(self.weighted_strength, seed, *start)
        gain = source_value(self.gain, seed, *start)
        freq = warp.warp_frequency
        seed_inc = seed
        pos = start

        def noise_pos() -> tuple[float, ...]:
            base = pos if progressive else start
            return tuple(p * freq for p in base)

        strength, pos = warp.warp(seed_inc, amp, noise_pos(), pos)
        for _ in range(1, self.octaves):
            seed_inc = _next_seed(seed_inc)
            freq *= self.lacunarity
            amp *= _lerp(1.0, 1.0 - strength, weighted)
            amp *= gain
            strength, pos = warp.warp(seed_inc, amp, noise_pos(), pos)
        return source_value(warp.warp_source, seed, *pos)


class DomainWarpFractalProgressive(_WarpFractal):
    """Each octave samples its warp noise at the already-warped position."""

    def gen(self, seed: int, *args: float) -> float:
        return self._fractal_warp(seed, args, progressive=True)


class DomainWarpFractalIndependant(_WarpFractal):
    """Each octave samples its warp noise at the original position."""

    def gen(self, seed: int, *args: float) -> float:
        return self._fractal_warp(seed, args, progressive=False)