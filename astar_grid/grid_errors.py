# grid_errors.py


class AStarGridError(Exception):
    """
    Base class for every error raised by the grid search package.
    """


class HeapUnderflowError(AStarGridError, IndexError):
    """
    Raised when extracting or peeking from an empty heap.
    """


class OutOfBoundsError(AStarGridError, IndexError):
    """
    Raised when a coordinate or flat index lies outside the grid.
    """

    def __init__(self, coord, width: int, height: int):
        self.coord = coord
        self.width = width
        self.height = height
        super().__init__(
            f"Coordinate {coord} is outside the {width}x{height} grid."
        )


class InvalidObstacleCountError(AStarGridError, ValueError):
    """
    Raised when the requested number of obstacles cannot be placed.

    Rejection sampling would never terminate for count >= width * height,
    so such requests are refused before any sampling happens.
    """

    def __init__(self, count: int, num_cells: int):
        self.count = count
        self.num_cells = num_cells
        super().__init__(
            f"Cannot place {count} obstacles on a grid with {num_cells} cells "
            f"(expected 0 <= count < {num_cells})."
        )
