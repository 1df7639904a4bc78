# path_search.py
from typing import List

import numpy as np
from grid2d import Cell, CellState, Grid2D


def reconstruct_path(
    grid: Grid2D,
    parent: np.ndarray,
    states: np.ndarray,
    goal_index: int,
) -> List[Cell]:
    """
    Walk parent links from the goal back to the start.

    Each visited cell is marked ON_PATH in ``states`` as a side effect.

    Parameters
    ----------
    parent : np.ndarray of shape (num_cells,)
        Flat index of each cell's predecessor, -1 for the start.
    states : np.ndarray of shape (num_cells,)
        Per-run CellState array; updated in place.
    goal_index : int
        Flat index of the goal cell.

    Returns
    -------
    path : list of Cell from start to goal (inclusive). A search whose
        start is its goal yields a single cell.
    """
    path: List[Cell] = []
    current = goal_index
    while current != -1:
        path.append(grid.cell_by_index(current))
        states[current] = CellState.ON_PATH
        current = int(parent[current])
    path.reverse()
    return path
