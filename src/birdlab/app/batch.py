from __future__ import annotations

import argparse
import itertools
import json
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from loguru import logger

from ..sim.core.config import SimulationConfig
from ..sim.core.evolution import EvolutionLoop
from ..sim.core.rng import DeterministicRng
from ..sim.types.statistics import GenerationStatistics

_DONE = object()


@dataclass(frozen=True, slots=True)
class GenerationRecord:
    config: Mapping[str, Any]
    iteration: int
    generation: int
    statistics: GenerationStatistics

    def as_dict(self) -> Dict[str, Any]:
        return {
            "config": dict(self.config),
            "iteration": self.iteration,
            "generation": self.generation,
            "statistics": self.statistics.ga.as_dict(),
        }


def config_grid(
    base: Optional[SimulationConfig] = None,
    brain_neurons: Sequence[int] = (2, 3, 5, 10),
    eye_fov_range: Sequence[float] = (0.1, 0.25, 0.33, 0.5),
    eye_fov_angle: Sequence[float] = (1.0, 2.0, 3.14, 6.0),
    eye_cells: Sequence[int] = (2, 3, 6, 9, 12),
    ga_mut_chance: Sequence[float] = (0.001, 0.01, 0.1, 0.5),
    ga_mut_coeff: Sequence[float] = (0.01, 0.1, 0.3, 0.5, 1.0),
) -> List[SimulationConfig]:
    base = base if base is not None else SimulationConfig()
    return [
        replace(
            base,
            brain_neurons=neurons,
            eye_fov_range=fov_range,
            eye_fov_angle=fov_angle,
            eye_cells=cells,
            ga_mut_chance=mut_chance,
            ga_mut_coeff=mut_coeff,
        ).validate()
        for neurons, fov_range, fov_angle, cells, mut_chance, mut_coeff in itertools.product(
            brain_neurons, eye_fov_range, eye_fov_angle, eye_cells, ga_mut_chance, ga_mut_coeff
        )
    ]


def _run_instance(
    config: SimulationConfig,
    iteration: int,
    generations: int,
    rng: DeterministicRng,
    records: "queue.Queue[object]",
) -> None:
    # every instance owns its config copy, its random stream and its world
    loop = EvolutionLoop(replace(config), rng)
    # all option values are scalars, so a read-only view of a fresh dict is a full snapshot
    settings = MappingProxyType(config.as_dict())
    for _ in range(generations):
        stats = loop.train(rng)
        records.put(
            GenerationRecord(config=settings, iteration=iteration, generation=stats.generation, statistics=stats)
        )


def _consume(records: "queue.Queue[object]", sink: Callable[[GenerationRecord], None]) -> None:
    while True:
        item = records.get()
        if item is _DONE:
            return
        sink(item)  # type: ignore[arg-type]


def run_batch(
    configs: Iterable[SimulationConfig],
    iterations: int,
    generations: int,
    seed: int = 0,
    sink: Optional[Callable[[GenerationRecord], None]] = None,
    workers: Optional[int] = None,
) -> List[GenerationRecord]:
    """Train many independent simulations in parallel.

    Workers push records into an unbounded queue, so publishing never fails; a single
    consumer thread hands them to ``sink`` in arrival order. Returns every record that
    reached the sink.
    """

    collected: List[GenerationRecord] = []

    def _deliver(record: GenerationRecord) -> None:
        collected.append(record)
        if sink is not None:
            sink(record)

    jobs = [(config, iteration) for config in configs for iteration in range(iterations)]
    base_rng = DeterministicRng(seed)
    records: "queue.Queue[object]" = queue.Queue()
    consumer = threading.Thread(target=_consume, args=(records, _deliver), name="RecordWriter", daemon=True)
    consumer.start()
    logger.info("[Batch] {} instances x {} generations", len(jobs), generations)
    try:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(_run_instance, config, iteration, generations, base_rng.fork(index), records)
                for index, (config, iteration) in enumerate(jobs)
            ]
            for future in futures:
                future.result()
    finally:
        records.put(_DONE)
        consumer.join()
    logger.info("[Batch] wrote {} records", len(collected))
    return collected


def main() -> None:
    parser = argparse.ArgumentParser(description="Sweep bird evolution over a configuration grid")
    parser.add_argument("--output", type=Path, required=True, help="JSON lines file to append records to")
    parser.add_argument("--iterations", type=int, default=15)
    parser.add_argument("--generations", type=int, default=30)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--limit", type=int, default=None, help="Only run the first N grid configurations")
    args = parser.parse_args()

    configs = config_grid()
    if args.limit is not None:
        configs = configs[: args.limit]
    with Path(args.output).open("a") as handle:

        def _write(record: GenerationRecord) -> None:
            handle.write(json.dumps(record.as_dict()) + "\n")

        run_batch(configs, args.iterations, args.generations, seed=args.seed, sink=_write, workers=args.workers)


if __name__ == "__main__":
    main()
