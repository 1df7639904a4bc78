# grid_render.py
from typing import Mapping, Optional

import numpy as np
from grid2d import CellState, Grid2D

GLYPHS = {
    CellState.UNVISITED: ".",
    CellState.OPEN: "o",
    CellState.CLOSED: "x",
    CellState.BLOCKED: "#",
    CellState.ON_PATH: "*",
}

LEGEND = (
    ". - unvisited cells",
    "o - open cells",
    "x - closed cells",
    "# - wall cells",
    "* - cells on the path",
)


def render_grid(
    grid: Grid2D,
    states: Optional[np.ndarray] = None,
    glyphs: Mapping[CellState, str] = GLYPHS,
) -> str:
    """
    One glyph per cell, one line per row, glyphs separated by a space.

    ``states`` is a flat CellState array (e.g. SearchResult.states); when
    omitted only the obstacles are shown.
    """
    if states is None:
        states = grid.initial_states()
    rows = states.reshape(grid.height, grid.width)
    lines = [
        " ".join(glyphs[CellState(int(v))] for v in row) for row in rows
    ]
    return "\n".join(lines) + "\n"
