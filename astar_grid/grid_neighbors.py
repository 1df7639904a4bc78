# grid_neighbors.py
from typing import List, Tuple

from grid2d import Cell, Grid2D

# Generation order decides which of several equal-f cells is queued first:
# right, left, down, up, down-right, up-left, down-left, up-right.
# y grows downward.
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (-1, -1),
    (-1, 1),
    (1, -1),
)


def neighbor_indices(grid: Grid2D, index: int) -> List[int]:
    """
    8-connected passable neighbors of the cell at flat ``index``.

    Out-of-bounds and blocked candidates are skipped, not reported.
    """
    cell = grid.cell_by_index(index)
    width, height = grid.width, grid.height
    occ = grid.occupancy

    result: List[int] = []
    for dx, dy in NEIGHBOR_OFFSETS:
        nx, ny = cell.x + dx, cell.y + dy
        if 0 <= nx < width and 0 <= ny < height and occ[ny, nx] == 0:
            result.append(ny * width + nx)
    return result


def neighbors(grid: Grid2D, cell: Cell) -> List[Cell]:
    """
    Same as ``neighbor_indices`` but takes and returns cells.
    """
    return [
        grid.cell_by_index(i)
        for i in neighbor_indices(grid, grid.index_of(cell))
    ]
