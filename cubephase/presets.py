from __future__ import annotations

from typing import Dict, Union

from cubephase.models import AlgorithmPreset, CaseGroup, OLLCase, PLLCase

PRESET_LIST = [
    # Edge orientation
    AlgorithmPreset(name="Dot", formula="F R U R' U' F' f R U R' U' f'", group=CaseGroup.OLL),
    AlgorithmPreset(name="L-Shape", formula="f R U R' U' f'", group=CaseGroup.OLL),
    AlgorithmPreset(name="Line", formula="F R U R' U' F'", group=CaseGroup.OLL),
    # Corner orientation, each named after the case it solves
    AlgorithmPreset(name="Sune", formula="R U2 R' U' R U' R'", group=CaseGroup.OLL),
    AlgorithmPreset(name="Anti-Sune", formula="R U R' U R U2 R'", group=CaseGroup.OLL, aliases=("Antisune",)),
    AlgorithmPreset(name="H", formula="R U R' U R U' R' U R U2 R'", group=CaseGroup.OLL, aliases=("OLL (H)",)),
    AlgorithmPreset(name="Pi", formula="R U2 R2 U' R2 U' R2 U2 R", group=CaseGroup.OLL),
    AlgorithmPreset(name="U", formula="R2 D R' U2 R D' R' U2 R'", group=CaseGroup.OLL, aliases=("OLL (U)",)),
    AlgorithmPreset(name="T", formula="r U R' U' r' F R F'", group=CaseGroup.OLL, aliases=("OLL (T)",)),
    AlgorithmPreset(name="L", formula="F R' F' r U R U' r'", group=CaseGroup.OLL, aliases=("OLL (L)",)),
    # Permutation
    AlgorithmPreset(
        name="Diagonal",
        formula="F R U' R' U' R U R' F' R U R' U' R' F R F'",
        group=CaseGroup.PLL,
        aliases=("Yperm",),
    ),
    AlgorithmPreset(
        name="Headlights",
        formula="R U R' U' R' F R2 U' R' U' R U R' F'",
        group=CaseGroup.PLL,
        aliases=("Tperm",),
    ),
    AlgorithmPreset(name="PLL (H)", formula="M2 U M2 U2 M2 U M2", group=CaseGroup.PLL, aliases=("Hperm",)),
    AlgorithmPreset(name="PLL (Ua)", formula="R U' R U R U R U' R' U' R2", group=CaseGroup.PLL, aliases=("Ua",)),
    AlgorithmPreset(name="PLL (Ub)", formula="R2 U R U R' U' R' U' R' U R'", group=CaseGroup.PLL, aliases=("Ub",)),
    AlgorithmPreset(name="PLL (Z)", formula="M' U M2 U M2 U M' U2 M2", group=CaseGroup.PLL, aliases=("Zperm",)),
]


def _normalized_key(name: str) -> str:
    return name.strip().lower()


def _build_registry() -> Dict[str, AlgorithmPreset]:
    registry: Dict[str, AlgorithmPreset] = {}
    for preset in PRESET_LIST:
        for raw_key in (preset.name, *preset.aliases):
            key = _normalized_key(raw_key)
            if key in registry:
                raise ValueError(f"Duplicate preset key detected: {raw_key}")
            registry[key] = preset
    return registry


PRESET_REGISTRY = _build_registry()


def get_preset(name: str) -> AlgorithmPreset:
    key = _normalized_key(name)
    if key not in PRESET_REGISTRY:
        available = ", ".join(list_preset_names())
        raise KeyError(f"Unknown preset: {name}. Available presets: {available}")
    return PRESET_REGISTRY[key]


def algorithm_for_case(case: Union[OLLCase, PLLCase]) -> AlgorithmPreset:
    """Looks up the algorithm that solves a recognized OLL/PLL case."""
    if case in (OLLCase.UNKNOWN, PLLCase.UNKNOWN, PLLCase.SOLVED):
        raise KeyError(f"No algorithm for case: {case.value}")
    preset = get_preset(case.value)
    expected = CaseGroup.OLL if isinstance(case, OLLCase) else CaseGroup.PLL
    if preset.group is not expected:
        raise KeyError(f"No {expected.value} algorithm for case: {case.value}")
    return preset


def list_preset_names() -> list[str]:
    return sorted({preset.name for preset in PRESET_REGISTRY.values()})
