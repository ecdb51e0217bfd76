"""Core node model: generators, hybrid sources and node metadata."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Callable, Iterable, Sequence

Setter = Callable[[Any, Any], None]


def _int32(value: int) -> int:
    value = int(value) & 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _check_dimensions(position: Sequence[float]) -> None:
    if len(position) not in (2, 3, 4):
        raise ValueError(f"expected 2 to 4 coordinates, got {len(position)}")


class VariableType(enum.IntEnum):
    """Kind of a node's plain member variable."""

    FLOAT = 0
    INT = 1
    ENUM = 2


@dataclass
class HybridSource:
    """A node input that is either a constant or another generator."""

    constant: float = 0.0
    base: Generator | None = None

    def set(self, value: Any) -> None:
        """Set a generator source, or a constant that clears any generator."""
        if isinstance(value, Generator):
            self.base = value
        elif value is None:
            raise ValueError("a hybrid source needs a generator or a number")
        elif isinstance(value, Real):
            self.constant = float(value)
            self.base = None
        else:
            raise TypeError(f"cannot use {type(value).__name__} as a hybrid source")


def _owner_matches(owner: type | None, node: Any) -> bool:
    return owner is None or isinstance(node, owner)


@dataclass(frozen=True)
class MemberVariable:
    """Description of a plain (float, int or enum) node setting."""

    name: str
    type: VariableType
    default: float
    setter: Setter
    owner: type | None = None
    min_value: float | None = None
    max_value: float | None = None
    enum_names: tuple[str, ...] = ()
    dimension_idx: int = -1

    def apply(self, node: Any, value: float) -> bool:
        """Set the variable on a node, clamped to its bounds; False if the node does not have it."""
        if not _owner_matches(self.owner, node):
            return False
        value = float(value) if self.type is VariableType.FLOAT else int(value)
        if self.min_value is not None:
            value = max(value, self.min_value)
        if self.max_value is not None:
            value = min(value, self.max_value)
        self.setter(node, value)
        return True


@dataclass(frozen=True)
class MemberNodeLookup:
    """Description of a node input that must be a generator."""

    name: str
    setter: Setter
    owner: type | None = None
    source_type: type | None = None
    dimension_idx: int = -1

    def apply(self, node: Any, source: Any) -> bool:
        """Connect a source generator; False if the node or source type does not fit."""
        required = self.source_type or Generator
        if not _owner_matches(self.owner, node) or not isinstance(source, required):
            return False
        self.setter(node, source)
        return True


@dataclass(frozen=True)
class MemberHybrid:
    """Description of a node input that is a generator or a constant."""

    name: str
    default: float
    setter: Setter
    owner: type | None = None
    dimension_idx: int = -1

    def apply_node(self, node: Any, source: Any) -> bool:
        """Connect a generator to the input; False if it does not fit."""
        if not _owner_matches(self.owner, node) or not isinstance(source, Generator):
            return False
        self.setter(node, source)
        return True

    def apply_value(self, node: Any, value: float) -> bool:
        """Set the input to a constant; False if the node does not have it."""
        if not _owner_matches(self.owner, node):
            return False
        self.setter(node, float(value))
        return True


@dataclass
class Metadata:
    """Name, groups and settable members of a generator class."""

    name: str
    node_type: type
    groups: list[str] = field(default_factory=list)
    member_variables: list[MemberVariable] = field(default_factory=list)
    member_node_lookups: list[MemberNodeLookup] = field(default_factory=list)
    member_hybrids: list[MemberHybrid] = field(default_factory=list)

    def add_variable(
        self,
        name: str,
        default: float,
        setter: Setter,
        *,
        owner: type | None = None,
        min_value: float | None = None,
        max_value: float | None = None,
        enum_names: Iterable[str] = (),
        dimension_idx: int = -1,
    ) -> None:
        enum_names = tuple(enum_names)
        if enum_names:
            kind = VariableType.ENUM
        elif isinstance(default, int) and not isinstance(default, bool):
            kind = VariableType.INT
        else:
            kind = VariableType.FLOAT
        self.member_variables.append(
            MemberVariable(name, kind, default, setter, owner, min_value, max_value, enum_names, dimension_idx)
        )

    def add_generator_source(
        self,
        name: str,
        setter: Setter,
        *,
        owner: type | None = None,
        source_type: type | None = None,
        dimension_idx: int = -1,
    ) -> None:
        self.member_node_lookups.append(MemberNodeLookup(name, setter, owner, source_type, dimension_idx))

    def add_hybrid_source(
        self,
        name: str,
        default: float,
        setter: Setter,
        *,
        owner: type | None = None,
        dimension_idx: int = -1,
    ) -> None:
        self.member_hybrids.append(MemberHybrid(name, float(default), setter, owner, dimension_idx))

    def create_node(self) -> Generator:
        """Create a new node of this type with default settings."""
        return self.node_type()


class Generator(ABC):
    """A noise node that yields one value per position and seed."""

    @classmethod
    def metadata(cls) -> Metadata:
        """Metadata describing this generator class, built once per class."""
        cached = cls.__dict__.get("_cached_metadata")
        if cached is None:
            cached = Metadata(cls.__name__, cls)
            cls._describe(cached)
            cls._cached_metadata = cached
        return cached

    @classmethod
    def _describe(cls, meta: Metadata) -> None:
        """Add the members a class introduces; subclasses extend via super()."""

    @abstractmethod
    def gen(self, seed: int, *args: float) -> float:
        """Value at the position given by 2 to 4 coordinates."""

    def gen_single_2d(self, x: float, y: float, seed: int) -> float:
        return float(self.gen(_int32(seed), float(x), float(y)))

    def gen_single_3d(self, x: float, y: float, z: float, seed: int) -> float:
        return float(self.gen(_int32(seed), float(x), float(y), float(z)))

    def gen_single_4d(self, x: float, y: float, z: float, w: float, seed: int) -> float:
        return float(self.gen(_int32(seed), float(x), float(y), float(z), float(w)))

    def gen_position_array(
        self, positions: Iterable[Sequence[float]], offsets: Sequence[float], seed: int
    ) -> list[float]:
        """Values at each position shifted by the offsets."""
        offsets = tuple(float(o) for o in offsets)
        _check_dimensions(offsets)
        seed = _int32(seed)
        values = []
        for point in positions:
            if len(point) != len(offsets):
                raise ValueError(f"position {tuple(point)} does not have {len(offsets)} coordinates")
            values.append(float(self.gen(seed, *(float(p) + o for p, o in zip(point, offsets)))))
        return values


def source_value(source: Any, seed: int, *args: float) -> float:
    """Evaluate a generator, hybrid source or constant at a position."""
    if isinstance(source, HybridSource):
        if source.base is None:
            return source.constant
        return float(source.base.gen(seed, *args))
    if isinstance(source, Generator):
        return float(source.gen(seed, *args))
    if source is None:
        raise ValueError("generator source is not set")
    if isinstance(source, Real):
        return float(source)
    raise TypeError(f"cannot evaluate {type(source).__name__} as a source")