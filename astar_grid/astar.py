# astar.py
import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Set, Tuple

import numpy as np
from grid2d import Cell, CellState, Coord, Grid2D
from grid_neighbors import neighbor_indices
from min_heap import MinHeap
from path_search import reconstruct_path

logger = logging.getLogger(__name__)

Heuristic = Callable[[Cell, Cell], int]

STATUS_FOUND = "found"
STATUS_NO_PATH = "no_path"
STATUS_ITERATION_LIMIT = "iteration_limit"


def heuristic(a: Cell, b: Cell, scale: int = 10) -> int:
    """
    Euclidean distance between two cells, scaled and truncated to int.

    The same function doubles as the step cost between adjacent cells,
    giving 10 for an orthogonal step and 14 for a diagonal one.
    """
    dx = b.x - a.x
    dy = b.y - a.y
    return int(scale * math.sqrt(dx * dx + dy * dy))


@dataclass
class SearchState:
    """
    Per-run bookkeeping, indexed in parallel with the grid's flat cells.
    """

    g: np.ndarray
    h: np.ndarray
    f: np.ndarray
    parent: np.ndarray
    states: np.ndarray
    open_heap: MinHeap
    closed: Set[int] = field(default_factory=set)
    iterations: int = 0

    @classmethod
    def for_grid(cls, grid: Grid2D) -> "SearchState":
        n = grid.num_cells
        f = np.zeros(n, dtype=np.int64)
        return cls(
            g=np.zeros(n, dtype=np.int64),
            h=np.zeros(n, dtype=np.int64),
            f=f,
            parent=np.full(n, -1, dtype=np.int64),
            states=grid.initial_states(),
            open_heap=MinHeap(key=f.__getitem__, indexed=True),
        )


@dataclass
class SearchResult:
    """
    Outcome of one A* run.

    ``path`` is None unless ``status == "found"``; an unreachable goal is a
    normal result, not an error.
    """

    status: str
    path: Optional[List[Cell]]
    cost: Optional[int]
    expanded: int
    iterations: int
    elapsed: float
    grid: Grid2D = field(repr=False)
    states: np.ndarray = field(repr=False)

    @property
    def found(self) -> bool:
        return self.status == STATUS_FOUND

    def state_of(self, coord: Coord) -> CellState:
        return CellState(int(self.states[self.grid.index_of(coord)]))

    def cell_states(self) -> Iterator[Tuple[Cell, CellState]]:
        """
        Read-only iteration over every cell with its final state.
        """
        for i, cell in enumerate(self.grid.cells()):
            yield cell, CellState(int(self.states[i]))

    def state_grid(self) -> np.ndarray:
        """
        Final states reshaped to (height, width).
        """
        return self.states.reshape(self.grid.height, self.grid.width).copy()


class AStarSearch:
    """
    A* over an 8-connected Grid2D.

    Cells that have been expanded (CLOSED) are never re-opened, even if a
    cheaper route to them shows up later. With the default heuristic this
    is safe; a custom heuristic that overestimates gives up optimality at
    exactly that point.

    An open cell whose cost improves is re-sifted in place in the heap,
    so the open set never holds stale entries.
    """

    def __init__(
        self,
        grid: Grid2D,
        start: Coord,
        goal: Coord,
        heuristic: Heuristic = heuristic,
        max_iterations: Optional[int] = None,
        on_iteration: Optional[Callable[["AStarSearch"], None]] = None,
    ):
        self.grid = grid
        self.start = grid.cell_at(start)
        self.goal = grid.cell_at(goal)
        self.heuristic = heuristic
        self.max_iterations = max_iterations
        self.on_iteration = on_iteration
        self.state: Optional[SearchState] = None

    def search(self) -> SearchResult:
        t0 = time.perf_counter()
        grid = self.grid
        state = SearchState.for_grid(grid)
        self.state = state

        start_idx = grid.index_of(self.start)
        goal_idx = grid.index_of(self.goal)

        if grid.is_blocked(self.start) or grid.is_blocked(self.goal):
            logger.info(
                "Start %s or goal %s is blocked; no search performed",
                self.start.as_tuple(),
                self.goal.as_tuple(),
            )
            return self._result(STATUS_NO_PATH, None, None, t0)

        g, h, f = state.g, state.h, state.f
        parent, states = state.parent, state.states
        open_heap = state.open_heap

        g[start_idx] = 0
        h[start_idx] = self.heuristic(self.start, self.goal)
        f[start_idx] = g[start_idx] + h[start_idx]
        states[start_idx] = CellState.OPEN
        open_heap.insert(start_idx)

        while open_heap:
            if (
                self.max_iterations is not None
                and state.iterations >= self.max_iterations
            ):
                logger.info(
                    "Search stopped after %d iterations", state.iterations
                )
                return self._result(STATUS_ITERATION_LIMIT, None, None, t0)

            state.iterations += 1
            if self.on_iteration is not None:
                self.on_iteration(self)

            current = open_heap.extract_min()
            states[current] = CellState.CLOSED
            state.closed.add(current)

            if current == goal_idx:
                path = reconstruct_path(grid, parent, states, goal_idx)
                cost = int(g[goal_idx])
                logger.info(
                    "Path found: %d cells, cost %d, %d expanded",
                    len(path),
                    cost,
                    len(state.closed),
                )
                return self._result(STATUS_FOUND, path, cost, t0)

            current_cell = grid.cell_by_index(current)
            current_g = int(g[current])

            for nb in neighbor_indices(grid, current):
                if nb in state.closed:
                    continue

                nb_cell = grid.cell_by_index(nb)
                tentative_g = current_g + self.heuristic(current_cell, nb_cell)
                queued = nb in open_heap

                if not queued or tentative_g < g[nb]:
                    parent[nb] = current
                    g[nb] = tentative_g
                    h[nb] = self.heuristic(nb_cell, self.goal)
                    f[nb] = g[nb] + h[nb]

                    if queued:
                        open_heap.update(nb)
                    else:
                        states[nb] = CellState.OPEN
                        open_heap.insert(nb)

            logger.debug(
                "Expanded %s (g=%d), open=%d",
                current_cell.as_tuple(),
                current_g,
                len(open_heap),
            )

        logger.info(
            "No path from %s to %s", self.start.as_tuple(), self.goal.as_tuple()
        )
        return self._result(STATUS_NO_PATH, None, None, t0)

    def _result(
        self,
        status: str,
        path: Optional[List[Cell]],
        cost: Optional[int],
        t0: float,
    ) -> SearchResult:
        state = self.state
        return SearchResult(
            status=status,
            path=path,
            cost=cost,
            expanded=len(state.closed),
            iterations=state.iterations,
            elapsed=time.perf_counter() - t0,
            grid=self.grid,
            states=state.states,
        )


def find_path(
    grid: Grid2D,
    start: Coord,
    goal: Coord,
    **kwargs,
) -> Optional[List[Cell]]:
    """
    Run A* on a grid.

    Parameters
    ----------
    grid : Grid2D
        Grid with obstacles already placed.
    start, goal : Cell or (x, y) tuples
        Start and goal coordinates.
    **kwargs
        Forwarded to AStarSearch (heuristic, max_iterations, ...).

    Returns
    -------
    path : list of Cell from start to goal (inclusive),
        or None if no path exists.
    """
    return AStarSearch(grid, start, goal, **kwargs).search().path
