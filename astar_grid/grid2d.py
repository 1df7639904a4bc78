# grid2d.py
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import FrozenSet, Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np
from grid_errors import InvalidObstacleCountError, OutOfBoundsError

logger = logging.getLogger(__name__)


class CellState(IntEnum):
    """
    Visitation state of a cell during (or after) a search.
    """

    UNVISITED = 0
    OPEN = 1
    CLOSED = 2
    BLOCKED = 3
    ON_PATH = 4


@dataclass(frozen=True)
class Cell:
    """
    One grid position. Coordinates never change once the grid is built.

    Attributes
    ----------
    x : int
        Column index, grows to the right.
    y : int
        Row index, grows downward.
    """

    x: int
    y: int

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


Coord = Union[Cell, Tuple[int, int]]


def _xy(coord: Coord) -> Tuple[int, int]:
    if isinstance(coord, Cell):
        return coord.x, coord.y
    x, y = coord
    return int(x), int(y)


class Grid2D:
    """
    Fixed-size rectangular grid with blocking obstacle cells.

    Cells are stored in a flat list: cell (x, y) lives at index
    ``y * width + x``. Search code refers to cells by that index and keeps
    its per-run costs in parallel arrays, so the grid itself is never
    touched by a search.

    An occupancy grid with shape (height, width) is kept next to the
    cells, where:
        1 = blocked (obstacle)
        0 = free
    """

    def __init__(self, width: int, height: int):
        """
        Parameters
        ----------
        width, height : int
            Grid resolution along x and y. Both must be positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Grid dimensions must be positive, got {width}x{height}."
            )
        self.width = width
        self.height = height

        self._cells: List[Cell] = [
            Cell(x, y) for y in range(height) for x in range(width)
        ]
        self.occupancy = np.zeros((height, width), dtype=np.uint8)
        self._obstacles: List[Cell] = []

    @classmethod
    def random_grid(
        cls,
        width: int,
        height: int,
        num_obstacles: int = 0,
        seed: Optional[int] = None,
    ) -> "Grid2D":
        """
        Create a grid and scatter ``num_obstacles`` distinct obstacle cells.
        """
        grid = cls(width, height)
        rng = np.random.RandomState(seed) if seed is not None else None
        grid.place_obstacles(num_obstacles, rng=rng)
        return grid

    # ------------------------------------------------------------------ #
    # Obstacles
    # ------------------------------------------------------------------ #

    def place_obstacles(
        self,
        count: int,
        rng: Optional[np.random.RandomState] = None,
    ) -> List[Cell]:
        """
        Replace the current obstacles with ``count`` random distinct cells.

        Coordinates are sampled uniformly; a coordinate that is already an
        obstacle is discarded and sampled again.

        Raises
        ------
        InvalidObstacleCountError
            If count < 0 or count >= width * height.
        """
        if count < 0 or count >= self.num_cells:
            raise InvalidObstacleCountError(count, self.num_cells)

        if rng is None:
            rng = np.random.RandomState()

        self.clear_obstacles()
        chosen: List[Cell] = []
        taken = set()
        while len(chosen) < count:
            x = int(rng.randint(self.width))
            y = int(rng.randint(self.height))
            if (x, y) in taken:
                continue
            taken.add((x, y))
            chosen.append(self._cells[self._flat(x, y)])

        self._mark(chosen)
        logger.debug(
            "Placed %d obstacles on %dx%d grid", count, self.width, self.height
        )
        return list(chosen)

    def set_obstacles(self, coords: Iterable[Coord]) -> List[Cell]:
        """
        Replace the current obstacles with the given coordinates.

        Duplicates are collapsed so obstacle positions stay unique.
        """
        chosen: List[Cell] = []
        seen = set()
        for coord in coords:
            cell = self.cell_at(coord)
            if cell not in seen:
                seen.add(cell)
                chosen.append(cell)
        if len(chosen) >= self.num_cells:
            raise InvalidObstacleCountError(len(chosen), self.num_cells)

        self.clear_obstacles()
        self._mark(chosen)
        return list(chosen)

    def clear_obstacles(self) -> None:
        self.occupancy[:, :] = 0
        self._obstacles = []

    def _mark(self, cells: List[Cell]) -> None:
        for cell in cells:
            self.occupancy[cell.y, cell.x] = 1
        self._obstacles = list(cells)

    @property
    def obstacles(self) -> FrozenSet[Cell]:
        return frozenset(self._obstacles)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    @property
    def num_cells(self) -> int:
        return self.width * self.height

    def in_bounds(self, coord: Coord) -> bool:
        x, y = _xy(coord)
        return 0 <= x < self.width and 0 <= y < self.height

    def is_blocked(self, coord: Coord) -> bool:
        x, y = self._checked(coord)
        return bool(self.occupancy[y, x])

    def is_passable(self, coord: Coord) -> bool:
        """
        True iff the coordinate is inside the grid and not an obstacle.
        """
        x, y = _xy(coord)
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False
        return self.occupancy[y, x] == 0

    def cell_at(self, coord: Coord) -> Cell:
        x, y = self._checked(coord)
        return self._cells[self._flat(x, y)]

    def index_of(self, coord: Coord) -> int:
        x, y = self._checked(coord)
        return self._flat(x, y)

    def cell_by_index(self, index: int) -> Cell:
        if not 0 <= index < self.num_cells:
            raise OutOfBoundsError(index, self.width, self.height)
        return self._cells[index]

    def cells(self) -> Iterator[Cell]:
        """
        Iterate over all cells, row by row.
        """
        return iter(self._cells)

    def get_occupancy_grid(self) -> np.ndarray:
        """
        Return a copy of the occupancy grid (values 0 or 1, shape (H, W)).
        """
        return self.occupancy.copy()

    def initial_states(self) -> np.ndarray:
        """
        Flat uint8 array of CellState: BLOCKED for obstacles, else UNVISITED.
        """
        states = np.full(self.num_cells, CellState.UNVISITED, dtype=np.uint8)
        states[self.occupancy.ravel() == 1] = CellState.BLOCKED
        return states

    def _flat(self, x: int, y: int) -> int:
        return y * self.width + x

    def _checked(self, coord: Coord) -> Tuple[int, int]:
        x, y = _xy(coord)
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBoundsError((x, y), self.width, self.height)
        return x, y

    def __repr__(self) -> str:
        return (
            f"Grid2D(width={self.width}, height={self.height}, "
            f"obstacles={len(self._obstacles)})"
        )
