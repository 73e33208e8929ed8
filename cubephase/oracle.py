from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from cubephase.config import DEFAULT_CONFIG, AnalysisConfig
from cubephase.models import Piece
from cubephase.pieces import NORMAL_BY_FACE
from cubephase.rotation import quaternion_inverse, rotate_vector


def _vec(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=float)


def _unit(values: Sequence[float]) -> np.ndarray:
    vector = _vec(values)
    norm = float(np.linalg.norm(vector))
    if norm == 0.0:
        return vector
    return vector / norm


def is_correctly_placed(
    piece: Piece,
    reference_center: Piece,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> bool:
    """Checks position and orientation of a piece relative to a reference center.

    The current center-to-piece vector is taken into the piece's own frame; it
    only recovers the solved vector when both the slot and the twist are right.
    """
    solved_vector = _vec(reference_center.origin) - _vec(piece.origin)
    current_vector = _vec(reference_center.position) - _vec(piece.position)
    local_vector = rotate_vector(quaternion_inverse(piece.orientation), current_vector)
    return float(np.linalg.norm(local_vector - solved_vector)) < config.placement_tolerance


def top_sticker_normal(piece: Piece, top_center: Piece) -> np.ndarray:
    """World direction of the piece's sticker that belongs to the top face."""
    return rotate_vector(piece.orientation, _unit(top_center.origin))


def top_direction(top_center: Piece) -> np.ndarray:
    return rotate_vector(top_center.orientation, _unit(top_center.origin))


def _angle_between(a: np.ndarray, b: np.ndarray) -> float:
    cosine = float(np.dot(_unit(a), _unit(b)))
    return math.acos(max(-1.0, min(1.0, cosine)))


def is_oriented_for_top_layer(
    piece: Piece,
    top_center: Piece,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> bool:
    angle = _angle_between(top_direction(top_center), top_sticker_normal(piece, top_center))
    return angle < config.orientation_tolerance


def carried_stickers(piece: Piece) -> list[str]:
    """Face letters of the stickers a piece physically carries, from its origin."""
    return [
        face
        for face, normal in NORMAL_BY_FACE.items()
        if all(n == 0 or n == o for n, o in zip(normal, piece.origin))
    ]


def sticker_facing(
    piece: Piece,
    direction: Sequence[float],
    threshold: float = DEFAULT_CONFIG.pll_sticker_dot,
) -> Optional[str]:
    """Returns the face letter of the sticker pointing along direction, if any."""
    target = _unit(direction)
    best_face: Optional[str] = None
    best_dot = threshold

    for face in carried_stickers(piece):
        world_normal = rotate_vector(piece.orientation, NORMAL_BY_FACE[face])
        dot = float(np.dot(world_normal, target))
        if dot > best_dot:
            best_dot = dot
            best_face = face

    return best_face
