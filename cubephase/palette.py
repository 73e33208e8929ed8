from __future__ import annotations

import re
from typing import Sequence

FACE_ORDER = "URFDLB"

STANDARD_CUBE_COLORS: tuple[str, ...] = (
    "#FFFFFF",  # U - white
    "#B71234",  # R - red
    "#009B48",  # F - green
    "#FFD500",  # D - yellow
    "#FF5800",  # L - orange
    "#0046AD",  # B - blue
)

OPPOSITE_FACES = {
    "U": "D",
    "D": "U",
    "R": "L",
    "L": "R",
    "F": "B",
    "B": "F",
}

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def validate_cube_palette(colors: Sequence[str]) -> None:
    if len(colors) != 6:
        raise ValueError("Cube palette must contain exactly 6 face colors (U,R,F,D,L,B)")

    for face, color in zip(FACE_ORDER, colors, strict=True):
        if not _HEX_COLOR.match(color):
            raise ValueError(f"Invalid color '{color}' for face {face} (expected #RRGGBB)")

    normalized = [color.upper() for color in colors]
    if len(set(normalized)) != 6:
        raise ValueError("Cube palette face colors must be distinct")


def face_color(face: str, colors: Sequence[str] = STANDARD_CUBE_COLORS) -> str:
    if len(face) != 1 or face not in FACE_ORDER:
        raise ValueError(f"Unknown face: {face}")
    validate_cube_palette(colors)
    return colors[FACE_ORDER.index(face)]


def is_opposite_face(a: str, b: str) -> bool:
    return OPPOSITE_FACES.get(a) == b
