from __future__ import annotations

import math

TAU = 2.0 * math.pi


def clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))


def wrap_unit(value: float) -> float:
    wrapped = value % 1.0
    # -1e-18 % 1.0 rounds to 1.0
    if wrapped >= 1.0:
        return 0.0
    return wrapped


def wrap_angle(angle: float) -> float:
    """Wrap into (-pi, pi]."""
    if -math.pi < angle <= math.pi:
        return angle
    wrapped = math.fmod(angle + math.pi, TAU)
    if wrapped <= 0.0:
        wrapped += TAU
    return wrapped - math.pi


def normalize_rotation(rotation: float) -> float:
    """Wrap into [0, 2*pi)."""
    wrapped = rotation % TAU
    if wrapped >= TAU:
        return 0.0
    return wrapped


def heading_vector(rotation: float) -> tuple[float, float]:
    # 0 rad points up (+y)
    angle = math.pi / 2.0 - rotation
    return math.cos(angle), math.sin(angle)
