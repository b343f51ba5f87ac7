#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

Vector2 is an immutable named tuple, so it can be handed straight to pygame
drawing calls; every helper returns a new value.
"""
import math
from typing import NamedTuple


class Vector2(NamedTuple):
    x: float
    y: float


ZERO = Vector2(0.0, 0.0)


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Vector2, b: Vector2) -> Vector2:
    return Vector2(a[0] + b[0], a[1] + b[1])


def vec_sub(a: Vector2, b: Vector2) -> Vector2:
    return Vector2(a[0] - b[0], a[1] - b[1])


def vec_scale(a: Vector2, s: float) -> Vector2:
    return Vector2(a[0] * s, a[1] * s)


def vec_div(a: Vector2, s: float) -> Vector2:
    """Divide by a scalar. Callers must not pass 0."""
    return Vector2(a[0] / s, a[1] / s)


def vec_len(a: Vector2) -> float:
    return math.sqrt(a[0] * a[0] + a[1] * a[1])


def vec_norm(a: Vector2) -> Vector2:
    """Unit vector along a, or the zero vector when a has no length."""
    l = vec_len(a)
    if l == 0:
        return ZERO
    return vec_div(a, l)


def vec_dist(a: Vector2, b: Vector2) -> float:
    return vec_len(vec_sub(a, b))
