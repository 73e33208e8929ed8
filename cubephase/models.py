from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Tuple, Union

from cubephase.palette import face_color
from cubephase.rotation import AXIS_INDEX, IDENTITY, VALID_TURNS, Quaternion, Vec3

_LATTICE = (-1, 0, 1)


class PieceKind(str, Enum):
    CORE = "core"
    CENTER = "center"
    EDGE = "edge"
    CORNER = "corner"

    @classmethod
    def from_origin(cls, origin: Vec3) -> "PieceKind":
        weight = sum(abs(value) for value in origin)
        return (cls.CORE, cls.CENTER, cls.EDGE, cls.CORNER)[weight]


class Phase(str, Enum):
    SCRAMBLED = "Scrambled"
    CROSS = "Cross"
    F2L = "F2L"
    OLL = "OLL"
    PLL = "PLL"
    SOLVED = "Solved"

    @property
    def rank(self) -> int:
        return _PHASE_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Phase):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Phase):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Phase):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Phase):
            return NotImplemented
        return self.rank >= other.rank


_PHASE_RANK = {phase: rank for rank, phase in enumerate(Phase)}


class F2LStage(str, Enum):
    FIRST_LAYER = "First Layer"
    SECOND_LAYER = "Second Layer"


class OLLCase(str, Enum):
    DOT = "Dot"
    L_SHAPE = "L-Shape"
    LINE = "Line"
    SUNE = "Sune"
    ANTI_SUNE = "Anti-Sune"
    H = "H"
    PI = "Pi"
    U = "U"
    T = "T"
    L = "L"
    UNKNOWN = "Unknown"


class PLLCase(str, Enum):
    DIAGONAL = "Diagonal"
    HEADLIGHTS = "Headlights"
    H = "PLL (H)"
    Z = "PLL (Z)"
    UA = "PLL (Ua)"
    UB = "PLL (Ub)"
    SOLVED = "Solved"
    UNKNOWN = "Unknown"


class CaseGroup(str, Enum):
    OLL = "OLL"
    PLL = "PLL"


def _check_lattice(name: str, value: Vec3) -> Vec3:
    if len(value) != 3 or any(component not in _LATTICE for component in value):
        raise ValueError(f"{name} must be a 3-tuple of values in {{-1, 0, 1}}, got {value}")
    return (int(value[0]), int(value[1]), int(value[2]))


@dataclass(frozen=True)
class Piece:
    id: int
    origin: Vec3
    position: Vec3
    orientation: Quaternion = IDENTITY

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", _check_lattice("origin", self.origin))
        object.__setattr__(self, "position", _check_lattice("position", self.position))
        if len(self.orientation) != 4:
            raise ValueError("orientation must be a (w, x, y, z) quaternion")

    @property
    def kind(self) -> PieceKind:
        return PieceKind.from_origin(self.origin)


@dataclass(frozen=True)
class Move:
    axis: str
    slices: frozenset[int]
    turns: int

    def __post_init__(self) -> None:
        if self.axis not in AXIS_INDEX:
            raise ValueError(f"Move axis must be one of x/y/z, got {self.axis!r}")
        if self.turns not in VALID_TURNS:
            raise ValueError(f"Move turns must be one of {VALID_TURNS}, got {self.turns}")

        if any(value not in _LATTICE for value in self.slices):
            raise ValueError(f"Move slices must be within {{-1, 0, 1}}, got {sorted(self.slices)}")
        object.__setattr__(self, "slices", frozenset(int(value) for value in self.slices))

    @classmethod
    def of(cls, axis: str, slices: Iterable[int], turns: int) -> "Move":
        return cls(axis=axis, slices=frozenset(slices), turns=turns)

    @property
    def axis_index(self) -> int:
        return AXIS_INDEX[self.axis]

    @property
    def is_half_turn(self) -> bool:
        return abs(self.turns) == 2

    def inverse(self) -> "Move":
        if self.is_half_turn:
            return self
        return Move(axis=self.axis, slices=self.slices, turns=-self.turns)


class _BaseFaceMixin:
    base_face: Optional[str]

    @property
    def base_color(self) -> Optional[str]:
        if self.base_face is None:
            return None
        return face_color(self.base_face)


@dataclass(frozen=True)
class CrossResult(_BaseFaceMixin):
    """No face reached the cross; reported as Cross with no base face."""

    base_face: Optional[str] = None
    phase: Phase = field(default=Phase.CROSS, init=False)

    @property
    def is_solved(self) -> bool:
        return False


@dataclass(frozen=True)
class F2LResult(_BaseFaceMixin):
    base_face: str
    missing_count: int
    stage: Optional[F2LStage] = None
    phase: Phase = field(default=Phase.F2L, init=False)

    @property
    def is_solved(self) -> bool:
        return False


@dataclass(frozen=True)
class OLLResult(_BaseFaceMixin):
    base_face: str
    oll_case: OLLCase
    phase: Phase = field(default=Phase.OLL, init=False)

    @property
    def is_solved(self) -> bool:
        return False


@dataclass(frozen=True)
class PLLResult(_BaseFaceMixin):
    base_face: str
    pll_case: PLLCase
    phase: Phase = field(default=Phase.PLL, init=False)

    @property
    def is_solved(self) -> bool:
        return False


@dataclass(frozen=True)
class SolvedResult(_BaseFaceMixin):
    base_face: str
    phase: Phase = field(default=Phase.SOLVED, init=False)

    @property
    def is_solved(self) -> bool:
        return True


AnalysisResult = Union[CrossResult, F2LResult, OLLResult, PLLResult, SolvedResult]


@dataclass(frozen=True)
class AlgorithmPreset:
    name: str
    formula: str
    group: CaseGroup
    aliases: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Preset name must be non-empty")
        if not self.formula.strip():
            raise ValueError("Preset formula must be non-empty")
