from __future__ import annotations

import math
from typing import Iterable, NamedTuple, Sequence

import numpy as np


class Vector3(NamedTuple):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def of(cls, values: Iterable[float]) -> "Vector3":
        vals = [float(v) for v in values]
        if len(vals) != 3:
            raise ValueError(f"expected 3 components, got {len(vals)}")
        return cls(*vals)


class Quaternion(NamedTuple):
    """Vector part first, scalar last, matching the text encoding ``x y z w``."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def identity(cls) -> "Quaternion":
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def of(cls, values: Iterable[float]) -> "Quaternion":
        vals = [float(v) for v in values]
        if len(vals) != 4:
            raise ValueError(f"expected 4 components, got {len(vals)}")
        return cls(*vals)


def translation_matrix(v: Sequence[float]) -> np.ndarray:
    T = np.eye(4, dtype=float)
    T[:3, 3] = np.asarray(v, dtype=float)
    return T


def rotation_x(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    T = np.eye(4, dtype=float)
    T[1:3, 1:3] = [[c, -s], [s, c]]
    return T


def rotation_y(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    T = np.eye(4, dtype=float)
    T[0, 0], T[0, 2] = c, s
    T[2, 0], T[2, 2] = -s, c
    return T


def rotation_z(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    T = np.eye(4, dtype=float)
    T[0:2, 0:2] = [[c, -s], [s, c]]
    return T


def format_components(values: Iterable[float]) -> str:
    return " ".join(repr(float(v)) for v in values)


def parse_components(text: str) -> list:
    return [float(tok) for tok in text.split()]
