# tests/robot/test_planar_arm.py
import sys
import os
import math
import numpy as np
import pytest

sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from stomp_costs.types import PlanningScene, RobotStateMsg
from stomp_costs.map.grid_map import GridMap
from stomp_costs.robot import (
    PlanarArmModel, PlanarArmConfig, PointRobotModel, PointRobotConfig, RobotState,
    robot_state_msg_to_robot_state, robot_state_to_robot_state_msg,
)


@pytest.fixture
def arm():
    config = PlanarArmConfig(link_lengths=[1.0, 0.5], link_radius=0.05,
                             base_x=2.0, base_y=2.0, samples_per_link=5)
    return PlanarArmModel(config)


def test_config_derived_fields(arm):
    assert arm.config.num_joints == 2
    assert arm.joint_names == ["joint_1", "joint_2"]
    assert arm.config.reach == pytest.approx(1.5)
    group = arm.get_joint_group("manipulator")
    assert group.variable_count == 2
    np.testing.assert_array_equal(group.indices, [0, 1])


def test_config_rejects_empty_arm():
    with pytest.raises(ValueError):
        PlanarArmConfig(link_lengths=[])


def test_forward_kinematics(arm):
    joints = arm.joint_positions(np.array([0.0, math.pi / 2]))
    np.testing.assert_allclose(joints, [[2.0, 2.0], [3.0, 2.0], [3.0, 2.5]], atol=1e-12)

    samples = arm.forward_kinematics(np.array([0.0, 0.0]))
    assert samples.shape == (10, 2)
    np.testing.assert_allclose(samples[:5, 0], [2.0, 2.25, 2.5, 2.75, 3.0])
    np.testing.assert_allclose(samples[-1], [3.5, 2.0])


def test_state_requires_update(arm):
    state = RobotState(arm)
    with pytest.raises(RuntimeError):
        state.get_collision_points()
    state.update()
    assert not state.dirty
    state.set_joint_group_positions(arm.get_joint_group("manipulator"), [0.1, 0.2])
    assert state.dirty


def test_state_group_size_mismatch(arm):
    state = RobotState(arm)
    with pytest.raises(ValueError):
        state.set_joint_group_positions(arm.get_joint_group("manipulator"), [0.1])


def test_distance_to_wall(arm):
    # 6m x 4m 地图，竖直墙: x >= 4.0
    grid_map = GridMap(width=120, height=80, resolution=0.05)
    grid_map.set_obstacle_rect(4.0, 0.0, 5.95, 3.95)
    scene = PlanningScene(name="wall", grid_map=grid_map)

    state = RobotState(arm)
    state.set_variable_positions([0.0, 0.0])  # 末端在 x = 3.5
    state.update()
    dist = arm.distance("manipulator", scene, state)
    # 0.5m 间隙 - 连杆半径 0.05
    assert dist == pytest.approx(0.45, abs=0.06)

    # 臂展 2.5m，末端伸进墙里
    arm_config = PlanarArmConfig(link_lengths=[1.0, 1.5], link_radius=0.05, base_x=2.0, base_y=2.0)
    long_arm = PlanarArmModel(arm_config)
    long_state = RobotState(long_arm)
    long_state.update()
    assert long_arm.distance("manipulator", scene, long_state) < 0.0


def test_distance_requires_distance_field():
    model = PointRobotModel(PointRobotConfig(distance_field=False))
    scene = PlanningScene(name="empty", grid_map=GridMap(10, 10, 0.1))
    state = RobotState(model)
    state.update()
    assert not model.has_distance_field()
    with pytest.raises(RuntimeError):
        model.distance("base", scene, state)


def test_point_robot_distance():
    model = PointRobotModel(PointRobotConfig(radius=0.2))
    grid_map = GridMap(width=40, height=40, resolution=0.05)
    grid_map.set_obstacle_rect(1.0, 0.0, 1.95, 1.95)
    scene = PlanningScene(name="half", grid_map=grid_map)

    state = RobotState(model)
    state.set_variable_positions([0.5, 1.0])
    state.update()
    assert model.distance("base", scene, state) == pytest.approx(0.3, abs=0.06)


def test_msg_conversion_round_trip(arm):
    state = RobotState(arm)
    msg = RobotStateMsg(joint_names=["joint_2"], positions=[0.7])
    assert robot_state_msg_to_robot_state(msg, state)
    np.testing.assert_allclose(state.positions, [0.0, 0.7])

    out = robot_state_to_robot_state_msg(state)
    assert out.joint_names == ["joint_1", "joint_2"]
    assert out.positions == pytest.approx([0.0, 0.7])


@pytest.mark.parametrize("msg", [
    None,
    {"joint_names": ["joint_1"], "positions": [0.0]},
    RobotStateMsg(joint_names=["joint_1", "joint_2"], positions=[0.0]),
    RobotStateMsg(joint_names=["joint_1", "joint_1"], positions=[0.0, 0.1]),
    RobotStateMsg(joint_names=["elbow"], positions=[0.0]),
    RobotStateMsg(joint_names=["joint_1"], positions=[float('inf')]),
    RobotStateMsg(joint_names=["joint_1"], positions=[None]),
])
def test_msg_conversion_rejects_malformed(arm, msg):
    assert not robot_state_msg_to_robot_state(msg, RobotState(arm))
