import os

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest
from astar_cli import main
from astar_experiments import (
    ExperimentConfig,
    results_to_rows,
    run_experiment,
    run_experiments,
)
from grid_errors import InvalidObstacleCountError
from grid_export import RESULTS_HEADER
from grid2d import Grid2D
from grid_visualize import show_grid_states, show_path_on_grid


def test_run_experiment_on_open_grid():
    config = ExperimentConfig(
        width=10, height=10, num_obstacles=0, start=(0, 0), goal=(9, 5), seed=1
    )
    exp = run_experiment(config)

    assert exp.result.found
    assert exp.path_len == len(exp.result.path)
    assert exp.elapsed >= 0.0


def test_invalid_obstacle_count_is_raised():
    config = ExperimentConfig(
        width=2, height=2, num_obstacles=4, start=(0, 0), goal=(1, 1)
    )
    with pytest.raises(InvalidObstacleCountError):
        run_experiment(config)


def test_seeded_batches_are_reproducible():
    config = ExperimentConfig(
        width=12, height=12, num_obstacles=30, start=(0, 0), goal=(11, 11), seed=7
    )

    a = run_experiments(config, count=3)
    b = run_experiments(config, count=3)

    assert [r.config.seed for r in a] == [r.config.seed for r in b]
    assert [r.grid.obstacles for r in a] == [r.grid.obstacles for r in b]
    assert [r.result.status for r in a] == [r.result.status for r in b]
    assert [r.index for r in a] == [0, 1, 2]


@pytest.mark.parametrize("seed", [None, 7])
def test_non_positive_experiment_count_is_rejected(seed):
    config = ExperimentConfig(
        width=5, height=5, num_obstacles=0, start=(0, 0), goal=(4, 4), seed=seed
    )
    for count in (0, -1):
        with pytest.raises(ValueError):
            run_experiments(config, count=count)


def test_results_to_rows_matches_header():
    config = ExperimentConfig(
        width=5, height=4, num_obstacles=0, start=(0, 0), goal=(4, 3)
    )
    rows = results_to_rows(run_experiments(config, count=2))

    assert len(rows) == 2
    assert all(len(row) == len(RESULTS_HEADER) for row in rows)
    assert rows[1][:5] == ["1", "[0,0]", "[4,3]", "5,4", "0"]
    assert rows[0][6] == "found"


def test_cli_writes_csv_and_images(tmp_path, capsys):
    saves = tmp_path / "saves"
    code = main(
        [
            "--resx", "8", "--resy", "6", "--obs", "5",
            "--x1", "0", "--y1", "0", "--x2", "7", "--y2", "5",
            "--exp", "2", "--seed", "3", "--image", "--image-min-res", "12",
            "--console", "--saves-dir", str(saves),
        ]
    )

    assert code == 0
    assert os.path.exists(saves / "results.csv")
    assert os.path.exists(saves / "experiment_1.ppm")
    assert os.path.exists(saves / "experiment_2.ppm")
    out = capsys.readouterr().out
    assert "Exp number: 2" in out
    assert "Summary:" in out


def test_cli_rejects_invalid_configuration(tmp_path):
    code = main(
        ["--resx", "2", "--resy", "2", "--obs", "4", "--saves-dir", str(tmp_path)]
    )
    assert code == 2


def test_cli_rejects_out_of_bounds_start(tmp_path):
    code = main(
        ["--resx", "5", "--resy", "5", "--obs", "0", "--saves-dir", str(tmp_path)]
    )
    # default start (15, 10) lies outside a 5x5 grid
    assert code == 2


def test_cli_rejects_non_positive_exp(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--exp", "0", "--saves-dir", str(tmp_path)])
    assert exc.value.code == 2
    assert "--exp" in capsys.readouterr().err
    assert not os.listdir(tmp_path)


def test_plots_render_without_display():
    grid = Grid2D.random_grid(10, 10, num_obstacles=10, seed=0)
    exp = run_experiment(
        ExperimentConfig(
            width=10, height=10, num_obstacles=0, start=(0, 0), goal=(9, 9)
        )
    )

    fig, axes = plt.subplots(1, 2)
    show_grid_states(exp.grid, exp.result.states, ax=axes[0])
    show_path_on_grid(exp.grid, exp.result.path, ax=axes[1])
    show_grid_states(grid, ax=None)
    plt.close("all")
