from __future__ import annotations

import math
from typing import Literal, Sequence, Union

import numpy as np

Axis = Literal["x", "y", "z"]
Vec3 = tuple[int, int, int]
Quaternion = tuple[float, float, float, float]  # (w, x, y, z)

AXIS_INDEX: dict[str, int] = {"x": 0, "y": 1, "z": 2}
AXIS_VECTORS: dict[str, tuple[float, float, float]] = {
    "x": (1.0, 0.0, 0.0),
    "y": (0.0, 1.0, 0.0),
    "z": (0.0, 0.0, 1.0),
}
VALID_TURNS = (-2, -1, 1, 2)

IDENTITY: Quaternion = (1.0, 0.0, 0.0, 0.0)


def _check_axis(axis: str) -> None:
    if axis not in AXIS_INDEX:
        raise ValueError(f"Unsupported axis: {axis}")


def _check_turns(turns: int) -> None:
    if turns not in VALID_TURNS:
        raise ValueError(f"Turns must be one of {VALID_TURNS}, got {turns}")


def rotate(position: Sequence[int], axis: str, turns: int) -> Vec3:
    """Rotates a lattice position about a cube axis by a quarter or half turn."""
    _check_axis(axis)
    _check_turns(turns)
    x, y, z = position

    if abs(turns) == 2:
        if axis == "x":
            rotated = (x, -y, -z)
        elif axis == "y":
            rotated = (-x, y, -z)
        else:
            rotated = (-x, -y, z)
    else:
        d = turns
        if axis == "x":
            rotated = (x, -d * z, d * y)
        elif axis == "y":
            rotated = (d * z, y, -d * x)
        else:
            rotated = (-d * y, d * x, z)

    return (round(rotated[0]), round(rotated[1]), round(rotated[2]))


def normalize_quaternion(q: Sequence[float]) -> Quaternion:
    arr = np.asarray(q, dtype=float)
    norm = float(np.linalg.norm(arr))
    if norm == 0.0:
        raise ValueError("Cannot normalize a zero quaternion")
    w, x, y, z = (arr / norm).tolist()
    return (w, x, y, z)


def quaternion_from_axis_angle(axis: Union[str, Sequence[float]], angle: float) -> Quaternion:
    if isinstance(axis, str):
        _check_axis(axis)
        vector = np.asarray(AXIS_VECTORS[axis], dtype=float)
    else:
        vector = np.asarray(axis, dtype=float)
        length = float(np.linalg.norm(vector))
        if length == 0.0:
            raise ValueError("Rotation axis must be non-zero")
        vector = vector / length

    half = angle / 2.0
    s = math.sin(half)
    return normalize_quaternion((math.cos(half), *(vector * s).tolist()))


def move_quaternion(axis: str, turns: int) -> Quaternion:
    _check_turns(turns)
    return quaternion_from_axis_angle(axis, math.pi / 2 * turns)


def quaternion_multiply(a: Sequence[float], b: Sequence[float]) -> Quaternion:
    """Hamilton product a * b (b applied first)."""
    aw, ax, ay, az = a
    bw, bx, by, bz = b
    return (
        aw * bw - ax * bx - ay * by - az * bz,
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
    )


def quaternion_inverse(q: Sequence[float]) -> Quaternion:
    w, x, y, z = normalize_quaternion(q)
    return (w, -x, -y, -z)


def rotate_vector(q: Sequence[float], vector: Sequence[float]) -> np.ndarray:
    w, x, y, z = normalize_quaternion(q)
    u = np.array([x, y, z])
    v = np.asarray(vector, dtype=float)
    t = 2.0 * np.cross(u, v)
    return v + w * t + np.cross(u, t)


def quaternions_equivalent(a: Sequence[float], b: Sequence[float], tolerance: float = 1e-6) -> bool:
    # q and -q describe the same rotation.
    dot = abs(float(np.dot(normalize_quaternion(a), normalize_quaternion(b))))
    return dot > 1.0 - tolerance
