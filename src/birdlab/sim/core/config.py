from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from ...errors import InvalidArgument

BRAIN_OUTPUTS = 2


@dataclass
class SimulationConfig:
    world_animals: int = 40
    world_foods: int = 60
    bird_size: float = 0.015
    food_size: float = 0.01
    eye_fov_range: float = 0.25
    eye_fov_angle: float = math.pi + math.pi / 4.0
    eye_cells: int = 9
    brain_neurons: int = 9
    sim_speed_min: float = 0.001
    sim_speed_max: float = 0.005
    sim_speed_accel: float = 0.2
    sim_rotation_accel: float = math.pi / 2.0
    sim_generation_length: int = 2500
    ga_mut_chance: float = 0.01
    ga_mut_coeff: float = 0.3
    collision_channel_capacity: int = 1024
    seed: int = 42

    @property
    def brain_topology(self) -> list[int]:
        return [self.eye_cells, self.brain_neurons, BRAIN_OUTPUTS]

    def validate(self) -> "SimulationConfig":
        _require(self.world_animals >= 1, "world_animals must be >= 1")
        _require(self.world_foods >= 0, "world_foods must be >= 0")
        _require(self.bird_size >= 0.0, "bird_size must be >= 0")
        _require(self.food_size >= 0.0, "food_size must be >= 0")
        _require(self.eye_fov_range > 0.0, "eye_fov_range must be > 0")
        _require(0.0 < self.eye_fov_angle <= 2.0 * math.pi, "eye_fov_angle must be in (0, 2*pi]")
        _require(self.eye_cells >= 1, "eye_cells must be >= 1")
        _require(self.brain_neurons >= 1, "brain_neurons must be >= 1")
        _require(self.sim_speed_min <= self.sim_speed_max, "sim_speed_min must not exceed sim_speed_max")
        _require(self.sim_speed_accel >= 0.0, "sim_speed_accel must be >= 0")
        _require(self.sim_rotation_accel >= 0.0, "sim_rotation_accel must be >= 0")
        _require(self.sim_generation_length >= 1, "sim_generation_length must be >= 1")
        _require(0.0 <= self.ga_mut_chance <= 1.0, "ga_mut_chance must be in [0, 1]")
        _require(self.ga_mut_coeff >= 0.0, "ga_mut_coeff must be >= 0")
        _require(self.collision_channel_capacity >= 1, "collision_channel_capacity must be >= 1")
        return self

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text()) or {}
        return load_config(data)


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise InvalidArgument(message)


_CONVERTERS = {"int": int, "float": float}


def _coerce(name: str, annotation: str, value: Any) -> Any:
    convert = _CONVERTERS.get(annotation)
    if convert is None:
        return value
    if isinstance(value, bool):
        raise InvalidArgument(f"{name} must be {annotation}, got {value!r}")
    try:
        converted = convert(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"{name} must be {annotation}, got {value!r}") from exc
    # int(2.5) would silently truncate
    if convert is int and isinstance(value, float) and converted != value:
        raise InvalidArgument(f"{name} must be int, got {value!r}")
    return converted


def load_config(raw: Mapping[str, Any]) -> SimulationConfig:
    if not isinstance(raw, Mapping):
        raise InvalidArgument(f"Configuration must be a mapping, got {type(raw).__name__}")
    # accept both a flat mapping and one nested under "simulation"
    values = raw.get("simulation", raw)
    if not isinstance(values, Mapping):
        raise InvalidArgument(f"'simulation' section must be a mapping, got {type(values).__name__}")
    annotations = {item.name: item.type for item in fields(SimulationConfig)}
    unknown = sorted(set(values) - set(annotations))
    if unknown:
        raise InvalidArgument(f"Unknown configuration keys: {', '.join(map(str, unknown))}")
    coerced = {name: _coerce(name, str(annotations[name]), value) for name, value in values.items()}
    return SimulationConfig(**coerced).validate()
