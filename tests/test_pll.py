from __future__ import annotations

from cubephase.formula import FormulaConverter, moves_from_formula
from cubephase.models import Phase, Piece, PLLCase, PLLResult
from cubephase.oracle import sticker_facing
from cubephase.phase import analyze_from
from cubephase.pieces import NORMAL_BY_FACE, centers, layer_pieces
from cubephase.pll import identify_pll, read_side, side_directions
from cubephase.state import apply_moves, initial_pieces

T_PERM = "R U R' U' R' F R2 U' R' U' R U R' F'"
Y_PERM = "F R U' R' U' R U R' F' R U R' U' R' F R F'"
H_PERM = "M2 U M2 U2 M2 U M2"
Z_PERM = "M' U M2 U M2 U M' U2 M2"
UA_PERM = "M2 U M U2 M' U M2"
UB_PERM = "M2 U' M U2 M' U' M2"


def _apply(formula: str) -> tuple[Piece, ...]:
    return apply_moves(initial_pieces(), moves_from_formula(formula))


def _inverse(formula: str) -> str:
    return " ".join(FormulaConverter.invert_moves(FormulaConverter.convert(formula)))


def _center(pieces: tuple[Piece, ...], face: str) -> Piece:
    return next(piece for piece in centers(pieces) if piece.origin == NORMAL_BY_FACE[face])


def _case(pieces: tuple[Piece, ...]) -> PLLCase:
    phase, result = analyze_from(pieces, _center(pieces, "D"))
    assert phase is Phase.PLL
    assert isinstance(result, PLLResult)
    return result.pll_case


def test_solved_last_layer_reads_four_bars() -> None:
    pieces = initial_pieces()
    top = _center(pieces, "U")
    top_pieces = layer_pieces(top, pieces)

    directions = side_directions((0.0, 1.0, 0.0))
    assert len(directions) == 4
    sides = [read_side(direction, top_pieces, top) for direction in directions]
    assert all(side.is_bar for side in sides)
    assert identify_pll(top_pieces, top) is PLLCase.SOLVED


def test_top_turn_does_not_break_solved_detection() -> None:
    pieces = _apply("U'")
    phase, _ = analyze_from(pieces, _center(pieces, "D"))
    assert phase is Phase.SOLVED


def test_sticker_facing_reads_rotated_pieces() -> None:
    pieces = _apply("U")
    # the UR edge lands in UF with its R sticker facing front
    edge = next(piece for piece in pieces if piece.origin == (1, 1, 0))
    assert edge.position == (0, 1, 1)
    assert sticker_facing(edge, (0.0, 0.0, 1.0)) == "R"
    assert sticker_facing(edge, (1.0, 0.0, 0.0)) is None


def test_edge_only_perms() -> None:
    assert _case(_apply(H_PERM)) is PLLCase.H
    assert _case(_apply(Z_PERM)) is PLLCase.Z


def test_u_perm_direction() -> None:
    assert _case(_apply(_inverse(UA_PERM))) is PLLCase.UA
    assert _case(_apply(UA_PERM)) is PLLCase.UB
    assert _case(_apply(_inverse(UB_PERM))) is PLLCase.UB


def test_corner_swaps() -> None:
    assert _case(_apply(T_PERM)) is PLLCase.HEADLIGHTS
    assert _case(_apply(Y_PERM)) is PLLCase.DIAGONAL


def test_recognition_ignores_top_layer_offset() -> None:
    assert _case(_apply(f"{T_PERM} U")) is PLLCase.HEADLIGHTS
    assert _case(_apply(f"{H_PERM} U2")) is PLLCase.H
