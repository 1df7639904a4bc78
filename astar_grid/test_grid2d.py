import numpy as np
import pytest
from grid_errors import InvalidObstacleCountError, OutOfBoundsError
from grid2d import Cell, CellState, Grid2D


def test_grid_dimensions_and_cells():
    grid = Grid2D(4, 3)
    assert grid.width == 4
    assert grid.height == 3
    assert grid.num_cells == 12

    cells = list(grid.cells())
    assert len(cells) == 12
    assert len(set(cells)) == 12
    assert cells[0] == Cell(0, 0)
    assert cells[5] == Cell(1, 1)
    assert grid.index_of((1, 1)) == 5
    assert grid.cell_by_index(5) is grid.cell_at((1, 1))


def test_new_grid_is_unvisited():
    grid = Grid2D(3, 3)
    assert (grid.initial_states() == CellState.UNVISITED).all()
    assert grid.obstacles == frozenset()
    assert grid.get_occupancy_grid().shape == (3, 3)


@pytest.mark.parametrize("w, h", [(0, 3), (3, 0), (-1, 2)])
def test_non_positive_dimensions_rejected(w, h):
    with pytest.raises(ValueError):
        Grid2D(w, h)


def test_cell_at_out_of_bounds():
    grid = Grid2D(3, 2)
    for coord in [(-1, 0), (3, 0), (0, 2), (0, -1)]:
        with pytest.raises(OutOfBoundsError):
            grid.cell_at(coord)
    with pytest.raises(OutOfBoundsError):
        grid.cell_by_index(6)


def test_cells_are_immutable():
    cell = Cell(1, 2)
    with pytest.raises(AttributeError):
        cell.x = 5


@pytest.mark.parametrize("count", [0, 1, 5, 24])
def test_obstacle_generation_yields_distinct_cells(count):
    grid = Grid2D(5, 5)
    placed = grid.place_obstacles(count, rng=np.random.RandomState(3))

    assert len(placed) == count
    assert len(set(placed)) == count
    assert grid.obstacles == frozenset(placed)
    assert int(grid.get_occupancy_grid().sum()) == count
    for cell in placed:
        assert not grid.is_passable(cell)
        assert grid.is_blocked(cell)


def test_obstacle_count_equal_to_cells_rejected():
    grid = Grid2D(2, 2)
    with pytest.raises(InvalidObstacleCountError):
        grid.place_obstacles(4)
    with pytest.raises(InvalidObstacleCountError):
        grid.place_obstacles(-1)
    assert grid.obstacles == frozenset()


def test_regenerating_obstacles_resets_previous_ones():
    grid = Grid2D(10, 10)
    rng = np.random.RandomState(0)
    grid.place_obstacles(30, rng=rng)
    second = grid.place_obstacles(5, rng=rng)

    assert grid.obstacles == frozenset(second)
    assert int(grid.get_occupancy_grid().sum()) == 5


def test_random_grid_is_reproducible():
    a = Grid2D.random_grid(8, 8, num_obstacles=10, seed=42)
    b = Grid2D.random_grid(8, 8, num_obstacles=10, seed=42)
    assert a.obstacles == b.obstacles
    assert np.array_equal(a.get_occupancy_grid(), b.get_occupancy_grid())


def test_set_obstacles_and_passability():
    grid = Grid2D(3, 3)
    grid.set_obstacles([(1, 1), Cell(1, 1), (0, 2)])

    assert grid.obstacles == {Cell(1, 1), Cell(0, 2)}
    assert not grid.is_passable((1, 1))
    assert grid.is_passable((0, 0))
    assert not grid.is_passable((3, 0))
    assert not grid.is_passable((0, -1))

    states = grid.initial_states()
    assert states[grid.index_of((1, 1))] == CellState.BLOCKED
    assert states[grid.index_of((0, 2))] == CellState.BLOCKED
    assert (states == CellState.BLOCKED).sum() == 2

    grid.clear_obstacles()
    assert grid.is_passable((1, 1))


def test_set_obstacles_out_of_bounds():
    grid = Grid2D(3, 3)
    with pytest.raises(OutOfBoundsError):
        grid.set_obstacles([(3, 3)])


def test_occupancy_copy_is_independent():
    grid = Grid2D(3, 3)
    occ = grid.get_occupancy_grid()
    occ[0, 0] = 1
    assert grid.is_passable((0, 0))
