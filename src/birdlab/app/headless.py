from __future__ import annotations

import argparse
import csv
import json
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from loguru import logger

from ..sim.core.config import SimulationConfig
from ..sim.core.evolution import EvolutionLoop
from ..sim.core.rng import DeterministicRng
from ..sim.types.statistics import GenerationStatistics

_HEADER = [
    "generation",
    "min_fitness",
    "max_fitness",
    "avg_fitness",
    "median_fitness",
]


def _format_row(stats: GenerationStatistics) -> list[object]:
    return [
        stats.generation,
        f"{stats.min_fitness:.4f}",
        f"{stats.max_fitness:.4f}",
        f"{stats.avg_fitness:.4f}",
        f"{stats.median_fitness:.4f}",
    ]


def _summary(history: List[GenerationStatistics]) -> dict[str, object]:
    if not history:
        return {"generations": 0}
    best = max(history, key=lambda stats: stats.max_fitness)
    first = history[0]
    last = history[-1]
    return {
        "generations": len(history),
        "best": {"generation": best.generation, "max_fitness": best.max_fitness},
        "first_avg_fitness": first.avg_fitness,
        "last_avg_fitness": last.avg_fitness,
        "avg_fitness_gain": last.avg_fitness - first.avg_fitness,
    }


def run_headless(
    generations: int,
    seed: Optional[int],
    log_path: Optional[Path],
    config: Optional[SimulationConfig] = None,
    summary_path: Optional[Path] = None,
) -> List[GenerationStatistics]:
    config = config if config is not None else SimulationConfig()
    if seed is not None:
        config = replace(config, seed=seed)
    rng = DeterministicRng(config.seed)
    loop = EvolutionLoop(config, rng)
    logger.info("[Headless] training {} generations with seed {}", generations, config.seed)

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_HEADER)

    history: List[GenerationStatistics] = []
    try:
        for _ in range(generations):
            stats = loop.train(rng)
            history.append(stats)
            logger.info("[Headless] generation {}: {}", stats.generation, stats.ga)
            if writer:
                writer.writerow(_format_row(stats))
    finally:
        if csv_file:
            csv_file.close()

    if summary_path:
        Path(summary_path).write_text(json.dumps(_summary(history), indent=2))
    return history


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless bird evolution")
    parser.add_argument("--generations", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML file with simulation options")
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write per-generation statistics")
    parser.add_argument("--summary", type=Path, default=None, help="Optional JSON file summarising the run")
    args = parser.parse_args()
    config = SimulationConfig.from_yaml(args.config) if args.config else None
    run_headless(args.generations, args.seed, args.log, config=config, summary_path=args.summary)


if __name__ == "__main__":
    main()
