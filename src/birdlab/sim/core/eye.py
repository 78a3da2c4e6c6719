from __future__ import annotations

import math
from typing import Iterable, List

from pygame.math import Vector2

from ...errors import InvalidArgument
from ..utils.math2d import wrap_angle
from .config import SimulationConfig
from .food import Food


class Eye:
    """Angular food sensor.

    Every food within ``fov_range`` and inside the ``fov_angle`` cone centred on the
    bird's heading lands in one of ``cells`` equal angular buckets. Closer food weighs
    more: each contributes ``(fov_range - distance) / fov_range`` to its bucket.
    """

    __slots__ = ("_fov_range", "_fov_angle", "_cells")

    def __init__(self, fov_range: float, fov_angle: float, cells: int):
        if fov_range <= 0.0:
            raise InvalidArgument(f"fov_range must be > 0, got {fov_range}")
        if not 0.0 < fov_angle <= 2.0 * math.pi:
            raise InvalidArgument(f"fov_angle must be in (0, 2*pi], got {fov_angle}")
        if cells < 1:
            raise InvalidArgument(f"cells must be >= 1, got {cells}")
        self._fov_range = fov_range
        self._fov_angle = fov_angle
        self._cells = cells

    @staticmethod
    def from_config(config: SimulationConfig) -> "Eye":
        return Eye(config.eye_fov_range, config.eye_fov_angle, config.eye_cells)

    @property
    def fov_range(self) -> float:
        return self._fov_range

    @property
    def fov_angle(self) -> float:
        return self._fov_angle

    @property
    def cells(self) -> int:
        return self._cells

    def process_vision(self, position: Vector2, rotation: float, foods: Iterable[Food]) -> List[float]:
        vision = [0.0] * self._cells
        half_angle = self._fov_angle / 2.0
        for food in foods:
            dx = food.position.x - position.x
            dy = food.position.y - position.y
            distance = math.hypot(dx, dy)
            if distance > self._fov_range:
                continue

            angle = wrap_angle(math.atan2(dx, dy) - rotation)
            if angle < -half_angle or angle > half_angle:
                continue

            cell = int((angle + half_angle) / self._fov_angle * self._cells)
            cell = min(cell, self._cells - 1)
            vision[cell] += (self._fov_range - distance) / self._fov_range
        return vision
