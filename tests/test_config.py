from __future__ import annotations

import pytest

from cubephase.config import DEFAULT_CONFIG, AnalysisConfig
from cubephase.formula import moves_from_formula
from cubephase.phase import analyze
from cubephase.state import apply_moves, initial_pieces


def test_env_overrides_are_parsed_as_floats() -> None:
    config = AnalysisConfig.from_env(
        {
            "CUBEPHASE_PLACEMENT_TOLERANCE": "0.3",
            "CUBEPHASE_OLL_HEADLIGHTS_DOT": " 0.75 ",
            "UNRELATED": "1",
        }
    )
    assert config.placement_tolerance == pytest.approx(0.3)
    assert config.oll_headlights_dot == pytest.approx(0.75)
    assert config.orientation_tolerance == DEFAULT_CONFIG.orientation_tolerance


def test_empty_environment_keeps_base_config() -> None:
    base = AnalysisConfig(cross_edge_distance=1.2)
    assert AnalysisConfig.from_env({}, base=base) is base


def test_invalid_env_value_fails_fast() -> None:
    with pytest.raises(ValueError, match="CUBEPHASE_PLACEMENT_TOLERANCE must be a float"):
        AnalysisConfig.from_env({"CUBEPHASE_PLACEMENT_TOLERANCE": "tight"})


def test_out_of_range_values_are_rejected() -> None:
    with pytest.raises(ValueError, match="placement_tolerance"):
        AnalysisConfig(placement_tolerance=0)
    with pytest.raises(ValueError, match="pll_sticker_dot"):
        AnalysisConfig(pll_sticker_dot=1.5)
    with pytest.raises(ValueError, match="opposite_dot"):
        AnalysisConfig(opposite_dot=0.5)
    with pytest.raises(ValueError, match="placement_tolerance"):
        AnalysisConfig.from_env({"CUBEPHASE_PLACEMENT_TOLERANCE": "-1"})


def test_custom_config_flows_into_analysis() -> None:
    pieces = apply_moves(initial_pieces(), moves_from_formula("R U R'"))
    strict = AnalysisConfig(placement_tolerance=0.05)
    assert analyze(pieces, config=strict) == analyze(pieces)
