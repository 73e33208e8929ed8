import logging

from cubephase.config import DEFAULT_CONFIG, AnalysisConfig
from cubephase.formula import CameraView, FormulaConverter, FormulaSyntaxError, moves_from_formula, resolve_move
from cubephase.models import (
    AlgorithmPreset,
    AnalysisResult,
    CaseGroup,
    CrossResult,
    F2LResult,
    F2LStage,
    Move,
    OLLCase,
    OLLResult,
    Phase,
    Piece,
    PieceKind,
    PLLCase,
    PLLResult,
    SolvedResult,
)
from cubephase.oll import identify_oll
from cubephase.oracle import is_correctly_placed, is_oriented_for_top_layer
from cubephase.phase import analyze, analyze_from
from cubephase.pll import identify_pll
from cubephase.presets import algorithm_for_case, get_preset, list_preset_names
from cubephase.rotation import rotate
from cubephase.state import CubeStore, apply_move, apply_moves, initial_pieces, scramble

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AlgorithmPreset",
    "AnalysisConfig",
    "AnalysisResult",
    "CameraView",
    "CaseGroup",
    "CrossResult",
    "CubeStore",
    "DEFAULT_CONFIG",
    "F2LResult",
    "F2LStage",
    "FormulaConverter",
    "FormulaSyntaxError",
    "Move",
    "OLLCase",
    "OLLResult",
    "PLLCase",
    "PLLResult",
    "Phase",
    "Piece",
    "PieceKind",
    "SolvedResult",
    "algorithm_for_case",
    "analyze",
    "analyze_from",
    "apply_move",
    "apply_moves",
    "get_preset",
    "identify_oll",
    "identify_pll",
    "initial_pieces",
    "is_correctly_placed",
    "is_oriented_for_top_layer",
    "list_preset_names",
    "moves_from_formula",
    "resolve_move",
    "rotate",
    "scramble",
]
