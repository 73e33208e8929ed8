from __future__ import annotations

import logging
from typing import Optional, Sequence

from cubephase.config import DEFAULT_CONFIG, AnalysisConfig
from cubephase.models import (
    AnalysisResult,
    CrossResult,
    F2LResult,
    F2LStage,
    OLLCase,
    OLLResult,
    PLLCase,
    PLLResult,
    Phase,
    Piece,
    SolvedResult,
)
from cubephase.oll import identify_oll
from cubephase.oracle import is_correctly_placed, is_oriented_for_top_layer
from cubephase.pieces import (
    base_axis_index,
    base_corners,
    centers,
    corners,
    cross_edges,
    edges,
    face_of_center,
    layer_pieces,
    opposite_center,
    paired_edge,
)
from cubephase.pll import identify_pll

logger = logging.getLogger(__name__)


def f2l_stage(
    solved_pairs: int,
    solved_corners: int,
    solved_edges: int,
) -> Optional[tuple[Optional[F2LStage], int]]:
    """Maps F2L counts to (stage, missing count); None once all four pairs are in."""
    if solved_pairs == 4:
        return None
    if solved_pairs >= 2:
        return None, 4 - solved_pairs
    if solved_corners == 4:
        return F2LStage.SECOND_LAYER, 4 - solved_edges
    return F2LStage.FIRST_LAYER, 4 - solved_corners


def _count_f2l(
    center: Piece,
    pieces: Sequence[Piece],
    config: AnalysisConfig,
) -> tuple[int, int, int]:
    axis = base_axis_index(center)
    edge_pieces = edges(pieces)
    solved_pairs = solved_corners = solved_edges = 0

    for corner in base_corners(center, corners(pieces)):
        corner_ok = is_correctly_placed(corner, center, config)
        if corner_ok:
            solved_corners += 1

        edge = paired_edge(corner, axis, edge_pieces)
        if edge is None:
            continue
        edge_ok = is_correctly_placed(edge, center, config)
        if edge_ok:
            solved_edges += 1
        if corner_ok and edge_ok:
            solved_pairs += 1

    return solved_pairs, solved_corners, solved_edges


def _last_layer_result(
    base_face: str,
    center: Piece,
    pieces: Sequence[Piece],
    config: AnalysisConfig,
) -> tuple[Phase, AnalysisResult]:
    top_center = opposite_center(center, centers(pieces), config.opposite_dot)
    if top_center is None:
        # only reachable on hand-built snapshots without an opposite center
        return Phase.OLL, OLLResult(base_face=base_face, oll_case=OLLCase.UNKNOWN)

    top_pieces = layer_pieces(top_center, pieces)
    if not all(is_oriented_for_top_layer(piece, top_center, config) for piece in top_pieces):
        return Phase.OLL, OLLResult(base_face=base_face, oll_case=identify_oll(top_pieces, top_center, config))

    pll_case = identify_pll(top_pieces, top_center, config)
    if pll_case is PLLCase.SOLVED:
        return Phase.SOLVED, SolvedResult(base_face=base_face)
    return Phase.PLL, PLLResult(base_face=base_face, pll_case=pll_case)


def analyze_from(
    pieces: Sequence[Piece],
    base_center: Piece,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> tuple[Phase, Optional[AnalysisResult]]:
    """Furthest phase reachable with base_center as the bottom face.

    Returns (Phase.SCRAMBLED, None) when this face's cross is not solved.
    """
    base_face = face_of_center(base_center)
    cross = cross_edges(base_center, edges(pieces), config.cross_edge_distance)
    if not all(is_correctly_placed(edge, base_center, config) for edge in cross):
        return Phase.SCRAMBLED, None

    pairs, solved_corners, solved_edges = _count_f2l(base_center, pieces, config)
    progress = f2l_stage(pairs, solved_corners, solved_edges)
    if progress is not None:
        stage, missing = progress
        return Phase.F2L, F2LResult(base_face=base_face, missing_count=missing, stage=stage)

    return _last_layer_result(base_face, base_center, pieces, config)


def analyze(pieces: Sequence[Piece], config: AnalysisConfig = DEFAULT_CONFIG) -> AnalysisResult:
    """Classifies a snapshot by trying every center as the base face and keeping the best."""
    best_phase = Phase.SCRAMBLED
    best: Optional[AnalysisResult] = None

    for center in centers(pieces):
        phase, result = analyze_from(pieces, center, config)
        logger.debug(
            "Base %s -> %s%s",
            face_of_center(center),
            phase.value,
            f" (missing {result.missing_count})" if isinstance(result, F2LResult) else "",
        )
        if result is None:
            continue

        if phase > best_phase:
            best_phase, best = phase, result
        elif (
            phase == best_phase
            and isinstance(result, F2LResult)
            and isinstance(best, F2LResult)
            and result.missing_count < best.missing_count
        ):
            best = result

    if best is None:
        logger.debug("No base face has a solved cross")
        return CrossResult()

    logger.debug("Selected base %s at phase %s", best.base_face, best.phase.value)
    return best
