# stomp_costs/robot/base.py
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
import numpy as np

from .config import RobotConfig
from stomp_costs.types import JointGroup, PlanningScene


class RobotModelBase(ABC):
    """
    机器人模型接口基类

    代价项只通过这里的接口访问机器人与距离场：
    1. get_joint_group: 规划组 -> 关节下标
    2. forward_kinematics: 关节角 -> 用于碰撞/距离查询的采样点
    3. has_distance_field / distance: 距离预言机 (Distance Oracle)

    一个模型实例在整个规划会话中被优化器与所有代价项共享，代价项只读不写。
    """
    def __init__(self, config: RobotConfig):
        self.config = config
        self._groups: Dict[str, JointGroup] = {}

    @property
    @abstractmethod
    def joint_names(self) -> List[str]:
        """完整状态向量中的关节名 (顺序即状态向量顺序)"""
        pass

    @property
    @abstractmethod
    def collision_radius(self) -> float:
        """采样点代表的几何体半径 (从中心距离中扣除)"""
        pass

    @abstractmethod
    def forward_kinematics(self, positions: np.ndarray) -> np.ndarray:
        """
        [运动学接口] 由完整关节向量计算世界坐标系下的采样点。

        Args:
            positions: (num_variables,) 关节值

        Returns:
            (N, 2) 采样点数组，供距离场查询
        """
        pass

    @property
    def variable_count(self) -> int:
        return len(self.joint_names)

    def default_positions(self) -> np.ndarray:
        return np.zeros(self.variable_count)

    def add_joint_group(self, name: str, joint_names: List[str]) -> JointGroup:
        indices = []
        for joint in joint_names:
            if joint not in self.joint_names:
                raise ValueError(f"Joint '{joint}' is not part of the robot model")
            indices.append(self.joint_names.index(joint))
        group = JointGroup(name=name, joint_names=list(joint_names), indices=np.array(indices, dtype=int))
        self._groups[name] = group
        return group

    def get_joint_group(self, name: str) -> Optional[JointGroup]:
        return self._groups.get(name)

    def has_distance_field(self) -> bool:
        """该模型是否为规划组构建了距离场"""
        return self.config.distance_field

    def distance(self, group_name: str, scene: PlanningScene, state) -> float:
        """
        [距离预言机] 机器人与场景中最近障碍物之间的有符号间隙 (m)。
        负值表示穿透/碰撞。state 必须已经调用过 update()。
        """
        if not self.has_distance_field():
            raise RuntimeError("Robot model has no distance field")
        if group_name not in self._groups:
            raise KeyError(f"Unknown planning group '{group_name}'")

        points = state.get_collision_points()
        signed = scene.grid_map.get_signed_distances(points)
        return float(np.min(signed)) - self.collision_radius - self.config.safe_margin
