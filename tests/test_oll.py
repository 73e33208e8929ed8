from __future__ import annotations

import math
from dataclasses import replace
from typing import Mapping

import pytest

from cubephase.formula import FormulaConverter, moves_from_formula
from cubephase.models import OLLCase, OLLResult, Phase, Piece
from cubephase.oll import corner_twist, headlight_pairs, identify_oll
from cubephase.oracle import top_direction
from cubephase.phase import analyze, analyze_from
from cubephase.pieces import NORMAL_BY_FACE, centers, corners, layer_pieces
from cubephase.presets import algorithm_for_case, get_preset
from cubephase.rotation import Quaternion, move_quaternion, quaternion_from_axis_angle, quaternion_multiply
from cubephase.state import apply_moves, initial_pieces

# quarter turns that send the U sticker of a piece to the given side
FACING = {
    "F": move_quaternion("x", 1),
    "B": move_quaternion("x", -1),
    "R": move_quaternion("z", -1),
    "L": move_quaternion("z", 1),
}

UFL, UFR, UBL, UBR = (-1, 1, 1), (1, 1, 1), (-1, 1, -1), (1, 1, -1)


def _center(pieces: tuple[Piece, ...], face: str) -> Piece:
    return next(piece for piece in centers(pieces) if piece.origin == NORMAL_BY_FACE[face])


def _with_orientations(orientations: Mapping[tuple[int, int, int], Quaternion]) -> tuple[Piece, ...]:
    return tuple(
        replace(piece, orientation=orientations[piece.origin]) if piece.origin in orientations else piece
        for piece in initial_pieces()
    )


def _top_case(pieces: tuple[Piece, ...]) -> OLLCase:
    top = _center(pieces, "U")
    return identify_oll(layer_pieces(top, pieces), top)


def _flipped(*origins: tuple[int, int, int]) -> dict[tuple[int, int, int], Quaternion]:
    return {origin: quaternion_from_axis_angle(origin, math.pi) for origin in origins}


def _case_after_setup(formula: str) -> OLLCase:
    """Applies the inverse of a solving algorithm and reads the case from the D base."""
    setup = FormulaConverter.invert_moves(FormulaConverter.convert(formula))
    pieces = apply_moves(initial_pieces(), moves_from_formula(" ".join(setup)))
    phase, result = analyze_from(pieces, _center(pieces, "D"))
    assert phase is Phase.OLL
    assert isinstance(result, OLLResult)
    return result.oll_case


def test_edge_orientation_shapes() -> None:
    assert _top_case(_with_orientations(_flipped((1, 1, 0), (-1, 1, 0), (0, 1, 1), (0, 1, -1)))) is OLLCase.DOT
    assert _top_case(_with_orientations(_flipped((1, 1, 0), (0, 1, 1)))) is OLLCase.L_SHAPE
    assert _top_case(_with_orientations(_flipped((1, 1, 0), (-1, 1, 0)))) is OLLCase.LINE


def test_odd_number_of_oriented_edges_is_unknown() -> None:
    assert _top_case(_with_orientations(_flipped((1, 1, 0)))) is OLLCase.UNKNOWN


def test_sune_and_anti_sune_follow_neighbor_twist() -> None:
    # UFR stays oriented; UBR is the neighbor whose twist decides the case
    others = {
        UFL: quaternion_from_axis_angle(UFL, 2 * math.pi / 3),
        UBL: quaternion_from_axis_angle(UBL, 2 * math.pi / 3),
    }
    sune = _with_orientations({**others, UBR: quaternion_from_axis_angle(UBR, -2 * math.pi / 3)})
    anti_sune = _with_orientations({**others, UBR: quaternion_from_axis_angle(UBR, 2 * math.pi / 3)})

    assert _top_case(sune) is OLLCase.SUNE
    assert _top_case(anti_sune) is OLLCase.ANTI_SUNE
    assert analyze(sune) == OLLResult(base_face="D", oll_case=OLLCase.SUNE)


def test_corner_twist_sign() -> None:
    pieces = _with_orientations({UBR: quaternion_from_axis_angle(UBR, -2 * math.pi / 3)})
    top = _center(pieces, "U")
    corner = next(piece for piece in corners(pieces) if piece.origin == UBR)
    assert corner_twist(corner, top, top_direction(top)) == pytest.approx(1.0)


def test_no_oriented_corners() -> None:
    h_case = _with_orientations({UFL: FACING["F"], UFR: FACING["F"], UBL: FACING["B"], UBR: FACING["B"]})
    pi_case = _with_orientations({UFL: FACING["L"], UBL: FACING["L"], UFR: FACING["F"], UBR: FACING["B"]})
    pinwheel = _with_orientations({UFL: FACING["L"], UFR: FACING["F"], UBR: FACING["R"], UBL: FACING["B"]})

    assert _top_case(h_case) is OLLCase.H
    assert _top_case(pi_case) is OLLCase.PI
    assert _top_case(pinwheel) is OLLCase.UNKNOWN


def test_noisy_h_degrades_to_pi() -> None:
    tilted = quaternion_from_axis_angle("y", math.radians(30))
    noisy = _with_orientations(
        {
            UFL: FACING["F"],
            UFR: FACING["F"],
            UBL: FACING["B"],
            UBR: quaternion_multiply(tilted, FACING["B"]),
        }
    )
    top = _center(noisy, "U")
    assert headlight_pairs(corners(layer_pieces(top, noisy)), top) == 1
    assert _top_case(noisy) is OLLCase.PI


def test_two_oriented_corners() -> None:
    u_case = _with_orientations({UFL: FACING["F"], UFR: FACING["F"]})
    t_case = _with_orientations({UFL: FACING["L"], UFR: FACING["R"]})
    l_case = _with_orientations({UFL: FACING["L"], UBR: FACING["B"]})

    assert _top_case(u_case) is OLLCase.U
    assert _top_case(t_case) is OLLCase.T
    assert _top_case(l_case) is OLLCase.L


def test_algorithm_setups_are_recognized() -> None:
    assert _case_after_setup("F R U R' U' F'") is OLLCase.LINE
    assert _case_after_setup("f R U R' U' f'") is OLLCase.L_SHAPE
    assert _case_after_setup("R U R' U R U' R' U R U2 R'") is OLLCase.H
    assert _case_after_setup("R U2 R2 U' R2 U' R2 U2 R") is OLLCase.PI
    assert _case_after_setup("R2 D R' U2 R D' R' U2 R'") is OLLCase.U
    assert _case_after_setup("r U R' U' r' F R F'") is OLLCase.T


def test_sune_setups_are_mirror_cases() -> None:
    assert _case_after_setup("R U R' U R U2 R'") is OLLCase.ANTI_SUNE
    assert _case_after_setup("R U2 R' U' R U' R'") is OLLCase.SUNE


@pytest.mark.parametrize("name", ["Sune", "Anti-Sune", "Line", "L-Shape", "H", "Pi", "U", "T"])
def test_algorithm_for_recognized_case_orients_last_layer(name: str) -> None:
    setup = FormulaConverter.invert_moves(FormulaConverter.convert(get_preset(name).formula))
    pieces = apply_moves(initial_pieces(), moves_from_formula(" ".join(setup)))
    _, result = analyze_from(pieces, _center(pieces, "D"))
    assert isinstance(result, OLLResult)

    solved = apply_moves(pieces, moves_from_formula(algorithm_for_case(result.oll_case).formula))
    phase, _ = analyze_from(solved, _center(solved, "D"))
    assert phase >= Phase.PLL
