# stomp_costs/robot/point_robot.py
import numpy as np
from typing import List

from .base import RobotModelBase
from .config import PointRobotConfig

class PointRobotModel(RobotModelBase):
    """
    质点/全向圆盘机器人
    关节即平面坐标 (base_x, base_y)，采样点就是圆心本身。
    """

    def __init__(self, config: PointRobotConfig):
        super().__init__(config)
        self.config: PointRobotConfig = config
        self.add_joint_group(config.group_name, config.joint_names)

    @property
    def joint_names(self) -> List[str]:
        return self.config.joint_names

    @property
    def collision_radius(self) -> float:
        return self.config.radius

    def forward_kinematics(self, positions: np.ndarray) -> np.ndarray:
        center = np.asarray(positions, dtype=float)[:2] + self.config.bounding_offset
        return center.reshape(1, 2)
