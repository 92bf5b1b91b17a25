# stomp_costs/robot/state.py
import numpy as np
from typing import Optional

from stomp_costs.types import JointGroup


class RobotState:
    """
    可变的机器人状态 (工作状态)
    代价项在一次 compute_costs 中逐时间步原地修改同一个实例，避免重复分配。
    """
    def __init__(self, robot_model):
        self.robot_model = robot_model
        self._positions = robot_model.default_positions().astype(float)
        self._collision_points: Optional[np.ndarray] = None
        self._dirty = True

    @property
    def positions(self) -> np.ndarray:
        return self._positions.copy()

    def set_variable_positions(self, positions):
        positions = np.asarray(positions, dtype=float).ravel()
        if positions.shape[0] != self._positions.shape[0]:
            raise ValueError(f"Expected {self._positions.shape[0]} values, got {positions.shape[0]}")
        self._positions[:] = positions
        self._dirty = True

    def set_variable_position(self, index: int, value: float):
        self._positions[index] = value
        self._dirty = True

    def set_joint_group_positions(self, group: JointGroup, values):
        values = np.asarray(values, dtype=float).ravel()
        if values.shape[0] != group.variable_count:
            raise ValueError(f"Group '{group.name}' has {group.variable_count} joints, got {values.shape[0]} values")
        self._positions[group.indices] = values
        self._dirty = True

    def update(self, force: bool = False):
        """刷新派生量 (正运动学采样点)"""
        if self._dirty or force:
            self._collision_points = self.robot_model.forward_kinematics(self._positions)
            self._dirty = False

    @property
    def dirty(self) -> bool:
        return self._dirty

    def get_collision_points(self) -> np.ndarray:
        if self._dirty:
            raise RuntimeError("RobotState is dirty, call update() before querying derived data")
        return self._collision_points

