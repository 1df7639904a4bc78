from typing import List, Optional

import matplotlib.pyplot as plt
import numpy as np
from grid_export import COLORS
from grid2d import Cell, CellState, Grid2D
from matplotlib.colors import ListedColormap


def _state_cmap() -> ListedColormap:
    return ListedColormap(
        [np.array(COLORS[st]) / 255.0 for st in CellState]
    )


def show_grid_states(
    grid: Grid2D,
    states: Optional[np.ndarray] = None,
    ax=None,
    title: str = "Search State",
) -> None:
    """
    Visualize every cell colored by its CellState.

    Row 0 is drawn at the top, matching y growing downward.
    """
    if states is None:
        states = grid.initial_states()
    if ax is None:
        _, ax = plt.subplots()
    ax.imshow(
        states.reshape(grid.height, grid.width),
        cmap=_state_cmap(),
        vmin=0,
        vmax=len(CellState) - 1,
        origin="upper",
        interpolation="nearest",
    )
    ax.set_title(title)
    ax.set_xlabel("x")
    ax.set_ylabel("y")


def show_path_on_grid(
    grid: Grid2D,
    path: List[Cell],
    ax=None,
    color="red",
    label="Path",
) -> None:
    """
    Overlay a path of cells on the occupancy grid.

    Cell (x, y) is drawn at pixel (x, y), so the path runs through cell
    centers.
    """
    if ax is None:
        _, ax = plt.subplots()

    ax.imshow(grid.get_occupancy_grid(), cmap="gray_r", origin="upper")
    xs = [c.x for c in path]
    ys = [c.y for c in path]
    ax.plot(xs, ys, color=color, linewidth=2, label=label)
    ax.scatter(xs[0], ys[0], c="green", s=30, label="Start")
    ax.scatter(xs[-1], ys[-1], c="red", s=30, label="Goal")
    ax.set_title(label)
    ax.legend()


def compare_states_and_path(
    grid: Grid2D,
    states: np.ndarray,
    path: List[Cell],
    title: str = "A* Search",
) -> None:
    """
    Plot the explored states and the resulting path side-by-side.
    """
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    show_grid_states(grid, states, ax=axes[0], title="Explored Cells")
    show_path_on_grid(grid, path, ax=axes[1], color="blue", label="A* Path")

    plt.suptitle(title)
    plt.tight_layout()
    plt.show()
