"""
Run A* experiments on random 2D grids from the command line.

Each experiment builds a fresh grid with random obstacles, searches for a
path between two fixed cells, and records the outcome. Results go to
``<saves-dir>/results.csv``; ``--image`` also writes one PPM per
experiment and ``--plot`` opens a matplotlib window for each found path.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from astar import AStarSearch
from astar_experiments import ExperimentConfig, results_to_rows, run_experiments
from grid_errors import AStarGridError
from grid_export import ensure_dir, state_image, write_csv, write_ppm
from grid_render import LEGEND, render_grid

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Find the shortest path on a 2D grid with A*."
    )
    parser.add_argument(
        "--resx",
        type=int,
        default=50,
        help="Grid resolution along x.",
    )
    parser.add_argument(
        "--resy",
        type=int,
        default=50,
        help="Grid resolution along y.",
    )
    parser.add_argument(
        "--obs",
        type=int,
        default=20,
        help="Number of obstacles to place.",
    )
    parser.add_argument("--x1", type=int, default=15, help="Start x.")
    parser.add_argument("--y1", type=int, default=10, help="Start y.")
    parser.add_argument("--x2", type=int, default=40, help="Goal x.")
    parser.add_argument("--y2", type=int, default=48, help="Goal y.")
    parser.add_argument(
        "--exp",
        type=int,
        default=1,
        help="Number of experiments to run.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible obstacle layouts.",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Optional bound on A* loop iterations per experiment.",
    )
    parser.add_argument(
        "--console",
        action="store_true",
        help="Print the grid before and after each search.",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Print the grid at every search iteration (implies --console).",
    )
    parser.add_argument(
        "--image",
        action="store_true",
        help="Write a PPM image of each finished grid.",
    )
    parser.add_argument(
        "--image-min-res",
        type=int,
        default=300,
        help="Minimal side length in pixels of the PPM images.",
    )
    parser.add_argument(
        "--plot",
        action="store_true",
        help="Show a matplotlib plot of each found path.",
    )
    parser.add_argument(
        "--saves-dir",
        type=str,
        default="saves",
        help="Directory for the CSV table and images.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    args = parser.parse_args(argv)
    if args.exp < 1:
        parser.error(f"--exp must be at least 1, got {args.exp}")
    return args


def _print_trace(search: AStarSearch) -> None:
    print(render_grid(search.grid, search.state.states))


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    console = args.console or args.trace
    config = ExperimentConfig(
        width=args.resx,
        height=args.resy,
        num_obstacles=args.obs,
        start=(args.x1, args.y1),
        goal=(args.x2, args.y2),
        seed=args.seed,
        max_iterations=args.max_iterations,
    )

    if console:
        print("Find the shortest path on a 2D grid.")
        print("Marking cells:")
        for line in LEGEND:
            print("  ", line)

    try:
        results = run_experiments(
            config,
            count=args.exp,
            trace=_print_trace if args.trace else None,
        )
    except AStarGridError as exc:
        logger.error("Invalid configuration: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    saves_dir = ensure_dir(args.saves_dir)

    for r in results:
        print("------------------------------------")
        print(f"          Exp number: {r.index + 1}")
        print("------------------------------------")
        if console:
            print(render_grid(r.grid, r.result.states))
        if r.result.found:
            print("Ok!")
            print(f"  Path length: {r.path_len} cells, cost {r.result.cost}")
        else:
            print(f"No path found ({r.result.status}).")
        print(f"  Elapsed time = {r.elapsed:.6f} [s]")

        if args.image:
            image = state_image(
                r.grid, r.result.states, min_resolution=args.image_min_res
            )
            image_path = os.path.join(saves_dir, f"experiment_{r.index + 1}.ppm")
            write_ppm(image_path, image)
            print("  Image saved to", image_path)

        if args.plot and r.result.found:
            from grid_visualize import compare_states_and_path

            compare_states_and_path(
                r.grid,
                r.result.states,
                r.result.path,
                title=f"Experiment {r.index + 1}",
            )

    csv_path = os.path.join(saves_dir, "results.csv")
    write_csv(results_to_rows(results), csv_path)

    found = sum(1 for r in results if r.result.found)
    print("\nSummary:")
    print(f"  Paths found: {found}/{len(results)}")
    print(f"  Results table: {csv_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
