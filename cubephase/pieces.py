from __future__ import annotations

from typing import Iterable, Optional, Sequence

import numpy as np

from cubephase.models import Piece, PieceKind

_FACE_BY_NORMAL = {
    (0, 1, 0): "U",
    (0, -1, 0): "D",
    (1, 0, 0): "R",
    (-1, 0, 0): "L",
    (0, 0, 1): "F",
    (0, 0, -1): "B",
}

NORMAL_BY_FACE = {face: normal for normal, face in _FACE_BY_NORMAL.items()}


def piece_kind(piece: Piece) -> PieceKind:
    return PieceKind.from_origin(piece.origin)


def is_center(piece: Piece) -> bool:
    return piece_kind(piece) is PieceKind.CENTER


def is_edge(piece: Piece) -> bool:
    return piece_kind(piece) is PieceKind.EDGE


def is_corner(piece: Piece) -> bool:
    return piece_kind(piece) is PieceKind.CORNER


def centers(pieces: Iterable[Piece]) -> list[Piece]:
    return [piece for piece in pieces if is_center(piece)]


def edges(pieces: Iterable[Piece]) -> list[Piece]:
    return [piece for piece in pieces if is_edge(piece)]


def corners(pieces: Iterable[Piece]) -> list[Piece]:
    return [piece for piece in pieces if is_corner(piece)]


def _origin(piece: Piece) -> np.ndarray:
    return np.asarray(piece.origin, dtype=float)


def face_for_vector(vector: Sequence[float]) -> Optional[str]:
    """Maps a (near) axis-aligned unit vector to its face letter."""
    snapped = tuple(int(round(value)) for value in vector)
    return _FACE_BY_NORMAL.get(snapped)


def face_of_center(center: Piece) -> str:
    face = face_for_vector(center.origin)
    if face is None or center.kind is not PieceKind.CENTER:
        raise ValueError(f"Piece {center.id} is not a center piece")
    return face


def base_axis_index(center: Piece) -> int:
    for index, value in enumerate(center.origin):
        if value != 0:
            return index
    raise ValueError(f"Piece {center.id} has no face axis")


def cross_edges(center: Piece, edge_pieces: Iterable[Piece], max_distance: float = 1.1) -> list[Piece]:
    center_origin = _origin(center)
    return [
        edge
        for edge in edge_pieces
        if float(np.linalg.norm(_origin(edge) - center_origin)) < max_distance
    ]


def base_corners(center: Piece, corner_pieces: Iterable[Piece]) -> list[Piece]:
    axis = base_axis_index(center)
    return [corner for corner in corner_pieces if corner.origin[axis] == center.origin[axis]]


def paired_edge(corner: Piece, axis_index: int, edge_pieces: Iterable[Piece]) -> Optional[Piece]:
    """Returns the edge sharing the corner's slot: the corner origin with the base axis zeroed."""
    target = list(corner.origin)
    target[axis_index] = 0
    target_origin = tuple(target)
    return next((edge for edge in edge_pieces if edge.origin == target_origin), None)


def opposite_center(
    center: Piece,
    center_pieces: Iterable[Piece],
    max_dot: float = -0.9,
) -> Optional[Piece]:
    center_origin = _origin(center)
    return next(
        (other for other in center_pieces if float(np.dot(center_origin, _origin(other))) < max_dot),
        None,
    )


def layer_pieces(center: Piece, pieces: Iterable[Piece]) -> list[Piece]:
    """Edges and corners whose origin lies in the center's face layer."""
    axis = base_axis_index(center)
    return [
        piece
        for piece in pieces
        if (is_edge(piece) or is_corner(piece)) and piece.origin[axis] == center.origin[axis]
    ]
