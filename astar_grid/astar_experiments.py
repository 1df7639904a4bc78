import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import numpy as np
from astar import AStarSearch, SearchResult
from grid2d import Grid2D

logger = logging.getLogger(__name__)

GridIndex = Tuple[int, int]


@dataclass
class ExperimentConfig:
    """
    Parameters of one experiment: a fresh random grid and one search.
    """

    width: int = 50
    height: int = 50
    num_obstacles: int = 20
    start: GridIndex = (15, 10)
    goal: GridIndex = (40, 48)
    seed: Optional[int] = None
    max_iterations: Optional[int] = None


@dataclass
class ExperimentResult:
    index: int
    config: ExperimentConfig
    grid: Grid2D = field(repr=False)
    result: SearchResult = field(repr=False)

    @property
    def elapsed(self) -> float:
        return self.result.elapsed

    @property
    def path_len(self) -> int:
        return len(self.result.path) if self.result.path else 0


def run_experiment(
    config: ExperimentConfig,
    index: int = 0,
    trace: Optional[Callable[[AStarSearch], None]] = None,
) -> ExperimentResult:
    """
    Build a new grid with random obstacles and run A* once on it.

    Raises the grid's errors (invalid obstacle count, out-of-bounds
    start/goal) unchanged; an unreachable goal is recorded in the result.
    """
    grid = Grid2D.random_grid(
        config.width,
        config.height,
        num_obstacles=config.num_obstacles,
        seed=config.seed,
    )
    search = AStarSearch(
        grid,
        config.start,
        config.goal,
        max_iterations=config.max_iterations,
        on_iteration=trace,
    )
    result = search.search()
    if not result.found:
        logger.warning(
            "Experiment %d: no path from %s to %s (%s)",
            index,
            config.start,
            config.goal,
            result.status,
        )
    return ExperimentResult(index=index, config=config, grid=grid, result=result)


def run_experiments(
    config: ExperimentConfig,
    count: int = 1,
    trace: Optional[Callable[[AStarSearch], None]] = None,
) -> List[ExperimentResult]:
    """
    Run ``count`` independent experiments, each on a freshly built grid.

    When ``config.seed`` is set, per-experiment seeds are drawn from it up
    front so the whole batch is reproducible.
    """
    if count < 1:
        raise ValueError(f"count must be at least 1, got {count}")
    if config.seed is not None:
        rng = np.random.RandomState(config.seed)
        seeds = [int(s) for s in rng.randint(0, 1_000_000, size=count)]
    else:
        seeds = [None] * count

    results: List[ExperimentResult] = []
    for i, seed in enumerate(seeds):
        exp_config = ExperimentConfig(
            width=config.width,
            height=config.height,
            num_obstacles=config.num_obstacles,
            start=config.start,
            goal=config.goal,
            seed=seed,
            max_iterations=config.max_iterations,
        )
        results.append(run_experiment(exp_config, index=i, trace=trace))
    return results


def results_to_rows(results: List[ExperimentResult]) -> List[List[str]]:
    """
    One CSV row per experiment, matching export.RESULTS_HEADER.
    """
    rows: List[List[str]] = []
    for r in results:
        c = r.config
        rows.append(
            [
                str(r.index),
                f"[{c.start[0]},{c.start[1]}]",
                f"[{c.goal[0]},{c.goal[1]}]",
                f"{c.width},{c.height}",
                str(c.num_obstacles),
                f"{r.elapsed:.6f}",
                r.result.status,
                str(r.path_len),
            ]
        )
    return rows
