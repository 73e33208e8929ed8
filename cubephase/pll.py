from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from cubephase.config import DEFAULT_CONFIG, AnalysisConfig
from cubephase.models import PLLCase, Piece
from cubephase.oracle import sticker_facing, top_direction
from cubephase.palette import is_opposite_face
from cubephase.pieces import corners, edges

_BASIS_DIRECTIONS = (
    (1.0, 0.0, 0.0),
    (-1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, -1.0, 0.0),
    (0.0, 0.0, 1.0),
    (0.0, 0.0, -1.0),
)


@dataclass(frozen=True)
class SideReading:
    direction: tuple[float, float, float]
    corner_colors: tuple[Optional[str], Optional[str]]
    edge_color: Optional[str]

    @property
    def is_headlights(self) -> bool:
        first, second = self.corner_colors
        return first is not None and first == second

    @property
    def is_bar(self) -> bool:
        return self.is_headlights and self.edge_color == self.corner_colors[0]


def side_directions(up: Sequence[float]) -> list[tuple[float, float, float]]:
    up_vector = np.asarray(up, dtype=float)
    return [
        direction
        for direction in _BASIS_DIRECTIONS
        if abs(float(np.dot(direction, up_vector))) < 0.1
    ]


def read_side(
    direction: tuple[float, float, float],
    top_pieces: Sequence[Piece],
    top_center: Piece,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> SideReading:
    """Reads the last-layer sticker colors visible on one side of the cube."""
    center_position = np.asarray(top_center.position, dtype=float)
    side = np.asarray(direction, dtype=float)

    def on_side(piece: Piece) -> bool:
        offset = np.asarray(piece.position, dtype=float) - center_position
        return float(np.dot(offset, side)) > 0.5

    side_corners = [corner for corner in corners(top_pieces) if on_side(corner)]
    side_edge = next((edge for edge in edges(top_pieces) if on_side(edge)), None)

    corner_colors: tuple[Optional[str], Optional[str]] = (None, None)
    if len(side_corners) == 2:
        corner_colors = (
            sticker_facing(side_corners[0], direction, config.pll_sticker_dot),
            sticker_facing(side_corners[1], direction, config.pll_sticker_dot),
        )

    edge_color = None
    if side_edge is not None:
        edge_color = sticker_facing(side_edge, direction, config.pll_sticker_dot)

    return SideReading(direction=direction, corner_colors=corner_colors, edge_color=edge_color)


def _find_side(
    sides: Sequence[SideReading],
    direction: np.ndarray,
    config: AnalysisConfig,
) -> Optional[SideReading]:
    return next(
        (
            side
            for side in sides
            if float(np.dot(side.direction, direction)) > config.pll_direction_dot
        ),
        None,
    )


def identify_pll(
    top_pieces: Sequence[Piece],
    top_center: Piece,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> PLLCase:
    up = top_direction(top_center)
    sides = [read_side(direction, top_pieces, top_center, config) for direction in side_directions(up)]

    headlights = sum(1 for side in sides if side.is_headlights)
    bars = [side for side in sides if side.is_bar]

    if headlights == 0:
        return PLLCase.DIAGONAL
    if headlights == 1:
        return PLLCase.HEADLIGHTS
    if headlights != 4:
        return PLLCase.UNKNOWN

    if len(bars) == 4:
        distinct = {side.corner_colors[0] for side in sides}
        return PLLCase.SOLVED if len(distinct) == 4 else PLLCase.UNKNOWN

    if not bars:
        reference = next(
            (side for side in sides if side.corner_colors[0] and side.edge_color),
            None,
        )
        if reference is None:
            return PLLCase.Z
        if is_opposite_face(reference.corner_colors[0], reference.edge_color):
            return PLLCase.H
        return PLLCase.Z

    if len(bars) == 1:
        return _classify_u_perm(bars[0], sides, up, config)

    return PLLCase.Z


def _classify_u_perm(
    back: SideReading,
    sides: Sequence[SideReading],
    up: np.ndarray,
    config: AnalysisConfig,
) -> PLLCase:
    front_direction = -np.asarray(back.direction, dtype=float)
    right_direction = np.cross(up, front_direction)

    front = _find_side(sides, front_direction, config)
    right = _find_side(sides, right_direction, config)
    if front is None or right is None or not front.edge_color or not right.corner_colors[0]:
        return PLLCase.UA

    if front.edge_color == right.corner_colors[0]:
        return PLLCase.UA
    return PLLCase.UB
