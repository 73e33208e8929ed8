from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Sequence

import numpy as np

from cubephase.config import DEFAULT_CONFIG, AnalysisConfig
from cubephase.formula import CameraView, moves_from_formula
from cubephase.models import AnalysisResult, Move, Piece
from cubephase.phase import analyze
from cubephase.rotation import (
    IDENTITY,
    move_quaternion,
    normalize_quaternion,
    quaternion_multiply,
    rotate,
)

logger = logging.getLogger(__name__)

Snapshot = tuple[Piece, ...]

_SCRAMBLE_AXES = ("x", "y", "z")
_SCRAMBLE_SLICES = (-1, 0, 1)
_SCRAMBLE_TURNS = (1, -1, 2)
DEFAULT_SCRAMBLE_LENGTH = 20


def initial_pieces() -> Snapshot:
    pieces: list[Piece] = []
    piece_id = 0
    for x in (-1, 0, 1):
        for y in (-1, 0, 1):
            for z in (-1, 0, 1):
                pieces.append(Piece(id=piece_id, origin=(x, y, z), position=(x, y, z), orientation=IDENTITY))
                piece_id += 1
    return tuple(pieces)


def validate_snapshot(pieces: Sequence[Piece]) -> None:
    if len(pieces) != 27:
        raise ValueError(f"Snapshot must contain exactly 27 pieces, got {len(pieces)}")

    ids = {piece.id for piece in pieces}
    if len(ids) != 27:
        raise ValueError("Snapshot piece ids must be unique")

    positions = {piece.position for piece in pieces}
    if len(positions) != 27:
        raise ValueError("Snapshot positions must cover every lattice point exactly once")


def apply_move(pieces: Sequence[Piece], move: Move) -> Snapshot:
    """Returns the snapshot after one move; untouched pieces are reused as-is."""
    if not move.slices:
        return tuple(pieces)

    rotation = move_quaternion(move.axis, move.turns)
    axis_index = move.axis_index
    moved = 0
    result: list[Piece] = []

    for piece in pieces:
        if piece.position[axis_index] not in move.slices:
            result.append(piece)
            continue
        result.append(
            replace(
                piece,
                position=rotate(piece.position, move.axis, move.turns),
                orientation=normalize_quaternion(quaternion_multiply(rotation, piece.orientation)),
            )
        )
        moved += 1

    logger.debug(
        "Applied move axis=%s slices=%s turns=%d (%d pieces)",
        move.axis,
        sorted(move.slices),
        move.turns,
        moved,
    )
    return tuple(result)


def apply_moves(pieces: Sequence[Piece], moves: Iterable[Move]) -> Snapshot:
    snapshot = tuple(pieces)
    for move in moves:
        snapshot = apply_move(snapshot, move)
    return snapshot


def random_move(rng: np.random.Generator) -> Move:
    axis = _SCRAMBLE_AXES[int(rng.integers(len(_SCRAMBLE_AXES)))]
    layer = _SCRAMBLE_SLICES[int(rng.integers(len(_SCRAMBLE_SLICES)))]
    turns = _SCRAMBLE_TURNS[int(rng.integers(len(_SCRAMBLE_TURNS)))]
    return Move(axis=axis, slices=frozenset({layer}), turns=turns)


def scramble(
    pieces: Sequence[Piece],
    count: int = DEFAULT_SCRAMBLE_LENGTH,
    rng: Optional[np.random.Generator] = None,
) -> tuple[Snapshot, list[Move]]:
    if count < 0:
        raise ValueError("count must be >= 0")

    generator = rng if rng is not None else np.random.default_rng()
    moves = [random_move(generator) for _ in range(count)]
    logger.debug("Scrambling with %d random moves (seeded=%s)", count, rng is not None)
    return apply_moves(pieces, moves), moves


@dataclass
class CubeStore:
    """Owns the current snapshot and advances it one completed move at a time."""

    config: AnalysisConfig = DEFAULT_CONFIG
    view: CameraView = field(default_factory=CameraView)
    pieces: Snapshot = field(default_factory=initial_pieces)
    history: list[Move] = field(default_factory=list)
    move_count: int = 0

    @property
    def snapshot(self) -> Snapshot:
        return self.pieces

    def apply(self, move: Move) -> Snapshot:
        self.pieces = apply_move(self.pieces, move)
        self.history.append(move)
        self.move_count += 1
        return self.pieces

    def apply_notation(self, formula: str) -> Snapshot:
        for move in moves_from_formula(formula, view=self.view):
            self.apply(move)
        return self.pieces

    def scramble(self, count: int = DEFAULT_SCRAMBLE_LENGTH, seed: Optional[int] = None) -> list[Move]:
        rng = np.random.default_rng(seed)
        self.pieces, moves = scramble(self.pieces, count=count, rng=rng)
        self.history.extend(moves)
        self.move_count = 0
        return moves

    def undo(self) -> Snapshot:
        if not self.history:
            raise ValueError("No moves to undo")
        move = self.history.pop()
        self.pieces = apply_move(self.pieces, move.inverse())
        self.move_count = max(0, self.move_count - 1)
        return self.pieces

    def reset(self) -> Snapshot:
        self.pieces = initial_pieces()
        self.history.clear()
        self.move_count = 0
        return self.pieces

    def analyze(self) -> AnalysisResult:
        return analyze(self.pieces, config=self.config)
