# tests/costs/test_arm_rollouts.py
import sys
import os
import numpy as np
import pytest

sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from stomp_costs.types import MotionPlanRequest, PlanningScene, RobotStateMsg
from stomp_costs.map.grid_map import GridMap
from stomp_costs.robot import PlanarArmModel, PlanarArmConfig
from stomp_costs.costs import create_cost_functions

COST_TERMS = [
    {'class': 'ObstacleDistanceGradient', 'cost_weight': 1.0, 'max_distance': 0.2},
    {'class': 'CollisionCheck', 'cost_weight': 10.0},
]


@pytest.fixture
def arm_setup():
    # 4m x 4m，基座在中心，正上方有一个方块
    grid_map = GridMap(width=80, height=80, resolution=0.05)
    grid_map.set_obstacle_rect(1.8, 3.0, 2.2, 3.4)
    scene = PlanningScene(name="box_above", grid_map=grid_map)

    arm = PlanarArmModel(PlanarArmConfig(link_lengths=[0.6, 0.6], link_radius=0.03,
                                         base_x=2.0, base_y=2.0))
    request = MotionPlanRequest(
        group_name="manipulator",
        start_state=RobotStateMsg(joint_names=arm.joint_names, positions=[0.0, 0.0]))
    return arm, scene, request


def sweep(num_timesteps):
    """第一个关节从 0 转到 pi，手臂伸直扫过正上方"""
    q1 = np.linspace(0.0, np.pi, num_timesteps)
    return np.vstack([q1, np.zeros(num_timesteps)])


def test_sweep_through_obstacle(arm_setup):
    arm, scene, request = arm_setup
    proximity, collision = create_cost_functions(COST_TERMS, arm, "manipulator")
    assert proximity.set_motion_plan_request(scene, request)
    assert collision.set_motion_plan_request(scene, request)

    trajectory = sweep(21)
    near = proximity.compute_costs(trajectory, 0, 21)
    hits = collision.compute_costs(trajectory, 0, 21)
    assert near.success and hits.success

    # 伸直的手臂 (臂展 1.2m) 指向正上方时末端伸入方块
    assert near.costs[10] == 1.0
    assert hits.costs[10] == 1.0
    assert near.validity
    assert not hits.validity

    # 水平位置远离方块
    assert near.costs[0] == 0.0
    assert near.costs[20] == 0.0

    # 碰撞的时间步在邻近代价中一定是最大代价
    assert np.all(near.costs[hits.costs > 0] == 1.0)
    assert np.all((near.costs >= 0.0) & (near.costs <= 1.0))


def test_instances_are_independent(arm_setup):
    arm, scene, request = arm_setup
    worker_a = create_cost_functions(COST_TERMS[:1], arm, "manipulator")[0]
    worker_b = create_cost_functions(COST_TERMS[:1], arm, "manipulator")[0]
    assert worker_a.set_motion_plan_request(scene, request)
    assert worker_b.set_motion_plan_request(scene, request)

    rng = np.random.default_rng(0)
    rollouts = sweep(15)[None] + rng.normal(0.0, 0.05, size=(4, 2, 15))

    results_a = [worker_a.compute_costs(r, 0, 15).costs for r in rollouts]
    # 交错调用另一个实例不影响结果
    for r in rollouts[::-1]:
        worker_b.compute_costs(r, 0, 15)
    results_a_again = [worker_a.compute_costs(r, 0, 15).costs for r in rollouts]

    for first, second in zip(results_a, results_a_again):
        np.testing.assert_array_equal(first, second)
    assert worker_a.robot_state is not worker_b.robot_state
