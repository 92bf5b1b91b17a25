import pytest
import os
import glob
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from stomp_costs.types import MotionPlanRequest, PlanningScene, RobotStateMsg
from stomp_costs.map.grid_map import GridMap
from stomp_costs.robot import PointRobotModel, PointRobotConfig
from stomp_costs.costs import ObstacleDistanceGradient
from stomp_costs.visualization.observers import (
    EfficientObserver, ExperimentObserver, DebugObserver, make_observer,
)
from stomp_costs.visualization.plotter import plot_cost_profile, plot_scene


@pytest.fixture
def cost_setup():
    grid_map = GridMap(width=40, height=40, resolution=0.05)
    grid_map.set_obstacle_circle(1.0, 1.0, 0.2)
    scene = PlanningScene(name="disc", grid_map=grid_map)
    model = PointRobotModel(PointRobotConfig(radius=0.05))
    request = MotionPlanRequest(group_name="base",
                                start_state=RobotStateMsg(["base_x", "base_y"], [0.2, 1.0]))
    xs = np.linspace(0.2, 1.8, 12)
    trajectory = np.vstack([xs, np.full(12, 1.0)])
    return model, scene, request, trajectory


def run(cost_setup, observer, rollouts=3):
    model, scene, request, trajectory = cost_setup
    cost_fn = ObstacleDistanceGradient(observer=observer)
    assert cost_fn.initialize(model, "base", {'cost_weight': 1.0, 'max_distance': 0.3})
    assert cost_fn.set_motion_plan_request(scene, request)
    for r in range(rollouts):
        assert cost_fn.compute_costs(trajectory, 0, trajectory.shape[1], 0, r).success
    cost_fn.done(True, 1, 0.0)
    return cost_fn


def test_efficient_mode(cost_setup):
    observer = EfficientObserver()
    run(cost_setup, observer)
    # EfficientObserver should not record anything
    assert not hasattr(observer, 'cost_history')


def test_efficient_mode_prints_errors(capsys):
    observer = EfficientObserver()
    cost_fn = ObstacleDistanceGradient(observer=observer)
    assert not cost_fn.compute_costs(np.zeros((2, 3)), 0, 3).success
    assert "[ERROR] ObstacleDistanceGradient" in capsys.readouterr().out


def test_experiment_mode(cost_setup):
    observer = ExperimentObserver()
    run(cost_setup, observer)

    assert len(observer.cost_history) == 3
    assert observer.scene_info == "disc"
    _, _, costs = observer.cost_history[0]
    # 轨迹穿过圆盘
    assert costs.max() == 1.0
    assert costs[0] == 0.0


def test_debug_mode(cost_setup, tmp_path):
    log_dir = str(tmp_path / "cost_debug")
    observer = DebugObserver(log_dir=log_dir)
    cost_fn = run(cost_setup, observer)

    # Compatible with Experiment Mode
    assert len(observer.cost_history) == 3

    # Errors end up in the log file too
    cost_fn.compute_costs(np.zeros((2, 3)), 0, 3)
    observer.close()

    log_files = glob.glob(os.path.join(log_dir, "*.log"))
    assert len(log_files) == 1

    with open(log_files[0], 'r', encoding='utf-8') as f:
        content = f.read()
    assert "Debug Session Started" in content
    assert "Scene Info set: disc" in content
    assert "Costs iter=0 rollout=2" in content
    assert "ERROR - ObstacleDistanceGradient Robot State has not been updated" in content


def test_make_observer(tmp_path):
    assert isinstance(make_observer('efficient'), EfficientObserver)
    assert isinstance(make_observer('experiment'), ExperimentObserver)
    debug = make_observer('debug', log_dir=str(tmp_path))
    assert isinstance(debug, DebugObserver)
    debug.close()
    with pytest.raises(ValueError):
        make_observer('verbose')


def test_plots(cost_setup, tmp_path):
    observer = ExperimentObserver()
    run(cost_setup, observer)
    _, scene, _, trajectory = cost_setup

    fig, (ax_scene, ax_cost) = plt.subplots(1, 2)
    plot_scene(scene.grid_map, paths=[trajectory.T], ax=ax_scene)
    plot_cost_profile(observer, iteration=0, ax=ax_cost)
    assert len(ax_cost.lines) == 3
    save_path = tmp_path / "profile.png"
    fig.savefig(save_path)
    plt.close(fig)
    assert save_path.exists()
