from __future__ import annotations

from itertools import combinations
from typing import Sequence

import numpy as np

from cubephase.config import DEFAULT_CONFIG, AnalysisConfig
from cubephase.models import OLLCase, Piece
from cubephase.oracle import top_direction, top_sticker_normal
from cubephase.pieces import corners, edges


def _position(piece: Piece) -> np.ndarray:
    return np.asarray(piece.position, dtype=float)


def _distance(a: Piece, b: Piece) -> float:
    return float(np.linalg.norm(_position(a) - _position(b)))


def _is_up(piece: Piece, top_center: Piece, up: np.ndarray, config: AnalysisConfig) -> bool:
    return float(np.dot(top_sticker_normal(piece, top_center), up)) > config.oll_parallel_dot


def identify_oll(
    top_pieces: Sequence[Piece],
    top_center: Piece,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> OLLCase:
    """Names the 2-look OLL case of the last layer from its geometry.

    Edges are classified first (Dot / L-Shape / Line). Once the edge cross is
    oriented, the corner pattern selects one of the seven OCLL cases.
    """
    up = top_direction(top_center)
    layer_edges = edges(top_pieces)
    layer_corners = corners(top_pieces)

    oriented_edges = [edge for edge in layer_edges if _is_up(edge, top_center, up, config)]
    if len(oriented_edges) < 4:
        if not oriented_edges:
            return OLLCase.DOT
        if len(oriented_edges) == 2:
            if _distance(*oriented_edges) < config.oll_adjacent_edge_distance:
                return OLLCase.L_SHAPE
            return OLLCase.LINE
        # odd counts only show up on broken or hand-built states
        return OLLCase.UNKNOWN

    oriented = [corner for corner in layer_corners if _is_up(corner, top_center, up, config)]
    oriented_ids = {corner.id for corner in oriented}
    unoriented = [corner for corner in layer_corners if corner.id not in oriented_ids]

    if not oriented:
        return _classify_no_corners(layer_corners, top_center, config)
    if len(oriented) == 1:
        return _classify_one_corner(oriented[0], layer_corners, top_center, up)
    if len(oriented) == 2:
        return _classify_two_corners(oriented, unoriented, top_center, config)
    return OLLCase.UNKNOWN


def headlight_pairs(
    layer_corners: Sequence[Piece],
    top_center: Piece,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> int:
    """Counts adjacent corner pairs whose top stickers face the same way."""
    count = 0
    for first, second in combinations(layer_corners, 2):
        if _distance(first, second) > config.oll_adjacent_corner_distance:
            continue
        n1 = top_sticker_normal(first, top_center)
        n2 = top_sticker_normal(second, top_center)
        if float(np.dot(n1, n2)) > config.oll_parallel_dot:
            count += 1
    return count


def _classify_no_corners(
    layer_corners: Sequence[Piece],
    top_center: Piece,
    config: AnalysisConfig,
) -> OLLCase:
    pairs = headlight_pairs(layer_corners, top_center, config)
    if pairs >= 2:
        return OLLCase.H
    if pairs == 1:
        return OLLCase.PI
    return OLLCase.UNKNOWN


def corner_twist(corner: Piece, top_center: Piece, up: np.ndarray) -> float:
    """Positive when the top sticker is twisted clockwise around the layer, negative otherwise."""
    radial = _position(corner) - _position(top_center)
    return float(np.dot(np.cross(radial, top_sticker_normal(corner, top_center)), up))


def _classify_one_corner(
    oriented: Piece,
    layer_corners: Sequence[Piece],
    top_center: Piece,
    up: np.ndarray,
) -> OLLCase:
    center_position = _position(top_center)
    tangent = np.cross(up, _position(oriented) - center_position)
    tangent_norm = float(np.linalg.norm(tangent))
    if tangent_norm == 0.0:
        return OLLCase.UNKNOWN
    tangent = tangent / tangent_norm

    neighbor = None
    best_dot = -np.inf
    for corner in layer_corners:
        if corner.id == oriented.id:
            continue
        radial = _position(corner) - center_position
        radial = radial / np.linalg.norm(radial)
        dot = float(np.dot(radial, tangent))
        if dot > best_dot:
            best_dot = dot
            neighbor = corner

    if neighbor is None:
        return OLLCase.UNKNOWN
    return OLLCase.SUNE if corner_twist(neighbor, top_center, up) > 0 else OLLCase.ANTI_SUNE


def _classify_two_corners(
    oriented: Sequence[Piece],
    unoriented: Sequence[Piece],
    top_center: Piece,
    config: AnalysisConfig,
) -> OLLCase:
    if _distance(*oriented) > config.oll_adjacent_corner_distance:
        return OLLCase.L
    if len(unoriented) != 2:
        return OLLCase.UNKNOWN

    n1 = top_sticker_normal(unoriented[0], top_center)
    n2 = top_sticker_normal(unoriented[1], top_center)
    if float(np.dot(n1, n2)) > config.oll_headlights_dot:
        return OLLCase.U
    return OLLCase.T
