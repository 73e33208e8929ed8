from __future__ import annotations

import math
import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

ENV_PREFIX = "CUBEPHASE_"


@dataclass(frozen=True)
class AnalysisConfig:
    placement_tolerance: float = 0.2
    # radians
    orientation_tolerance: float = 0.5
    cross_edge_distance: float = 1.1
    opposite_dot: float = -0.9
    oll_parallel_dot: float = 0.9
    oll_adjacent_edge_distance: float = 1.8
    oll_adjacent_corner_distance: float = 2.2
    oll_headlights_dot: float = 0.8
    pll_sticker_dot: float = 0.9
    pll_direction_dot: float = 0.9

    def __post_init__(self) -> None:
        if self.placement_tolerance <= 0:
            raise ValueError("placement_tolerance must be > 0")
        if not 0 < self.orientation_tolerance < math.pi:
            raise ValueError("orientation_tolerance must be within (0, pi)")
        if self.cross_edge_distance <= 0:
            raise ValueError("cross_edge_distance must be > 0")
        if not -1.0 <= self.opposite_dot < 0:
            raise ValueError("opposite_dot must be within [-1, 0)")
        for name in ("oll_parallel_dot", "oll_headlights_dot", "pll_sticker_dot", "pll_direction_dot"):
            value = getattr(self, name)
            if not 0 < value <= 1.0:
                raise ValueError(f"{name} must be within (0, 1]")
        if self.oll_adjacent_edge_distance <= 0 or self.oll_adjacent_corner_distance <= 0:
            raise ValueError("OLL adjacency distances must be > 0")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        base: Optional["AnalysisConfig"] = None,
    ) -> "AnalysisConfig":
        """Builds a config from CUBEPHASE_<FIELD> overrides, e.g. CUBEPHASE_PLACEMENT_TOLERANCE."""
        env = os.environ if environ is None else environ
        config = base or cls()
        overrides: dict[str, float] = {}

        for config_field in fields(cls):
            variable = f"{ENV_PREFIX}{config_field.name.upper()}"
            raw_value = env.get(variable, "").strip()
            if not raw_value:
                continue
            try:
                overrides[config_field.name] = float(raw_value)
            except ValueError as exc:
                raise ValueError(f"Environment variable {variable} must be a float") from exc

        if not overrides:
            return config
        return replace(config, **overrides)


DEFAULT_CONFIG = AnalysisConfig()
