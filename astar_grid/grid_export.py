# grid_export.py
import csv
import os
from typing import Iterable, Mapping, Optional, Sequence, Tuple

import numpy as np
from grid2d import CellState, Grid2D

RESULTS_HEADER = (
    "exp",
    "start",
    "end",
    "resolution",
    "obstacles",
    "elapsed_s",
    "status",
    "path_len",
)

COLORS = {
    CellState.UNVISITED: (255, 255, 255),
    CellState.OPEN: (255, 165, 0),
    CellState.CLOSED: (139, 69, 19),
    CellState.BLOCKED: (220, 20, 60),
    CellState.ON_PATH: (34, 139, 34),
}


def write_csv(
    rows: Iterable[Sequence[object]],
    path: str,
    header: Optional[Sequence[str]] = RESULTS_HEADER,
    delimiter: str = ",",
) -> None:
    """
    Write a table to a CSV file, header first if one is given.
    """
    with open(path, "w", newline="") as fh:
        writer = csv.writer(fh, delimiter=delimiter)
        if header is not None:
            writer.writerow(header)
        for row in rows:
            writer.writerow(row)


def state_image(
    grid: Grid2D,
    states: np.ndarray,
    min_resolution: int = 300,
    colors: Mapping[CellState, Tuple[int, int, int]] = COLORS,
) -> np.ndarray:
    """
    Build an RGB image (H, W, 3) uint8 with one colored block per cell.

    Each cell is scaled by the same integer factor, chosen so that the
    shorter image side is at least ``min_resolution`` pixels.
    """
    palette = np.zeros((len(CellState), 3), dtype=np.uint8)
    for st, rgb in colors.items():
        palette[int(st)] = rgb

    cells = states.reshape(grid.height, grid.width)
    image = palette[cells]

    scale = max(1, -(-min_resolution // min(grid.width, grid.height)))
    if scale > 1:
        image = np.repeat(np.repeat(image, scale, axis=0), scale, axis=1)
    return image


def write_ppm(path: str, image: np.ndarray) -> None:
    """
    Save an (H, W, 3) uint8 image as a binary PPM (P6) file.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got {image.shape}.")
    height, width, _ = image.shape
    with open(path, "wb") as fh:
        fh.write(f"P6\n{width} {height}\n255\n".encode("ascii"))
        fh.write(np.ascontiguousarray(image, dtype=np.uint8).tobytes())


def ensure_dir(path: str) -> str:
    os.makedirs(path, exist_ok=True)
    return path
