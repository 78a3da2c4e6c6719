from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List


@dataclass(slots=True)
class Snapshot:
    tick: int
    generation: int
    age: int
    birds: List[Dict[str, Any]]
    foods: List[Dict[str, float]]

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
