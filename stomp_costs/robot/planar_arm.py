# stomp_costs/robot/planar_arm.py
import numpy as np
from typing import List

from .base import RobotModelBase
from .config import PlanarArmConfig

class PlanarArmModel(RobotModelBase):
    """
    平面 N 连杆机械臂模型实现

    特点：
    1. 运动学：关节角累加得到各连杆的绝对朝向，逐段累加得到关节位置。
    2. 几何：每根连杆是半径为 link_radius 的胶囊体，用等距采样点近似。
    3. 规划组：默认创建一个包含全部关节的组 (config.group_name)。
    """

    def __init__(self, config: PlanarArmConfig):
        super().__init__(config)
        self.config: PlanarArmConfig = config
        self._lengths = np.asarray(config.link_lengths, dtype=float)
        self.add_joint_group(config.group_name, config.joint_names)

    @property
    def joint_names(self) -> List[str]:
        return self.config.joint_names

    @property
    def collision_radius(self) -> float:
        return self.config.link_radius

    def joint_positions(self, positions: np.ndarray) -> np.ndarray:
        """
        计算基座与各关节/末端的世界坐标
        :return: (num_joints + 1, 2)，第 0 行为基座，最后一行为末端
        """
        angles = np.cumsum(np.asarray(positions, dtype=float))
        dx = self._lengths * np.cos(angles)
        dy = self._lengths * np.sin(angles)

        pts = np.empty((self.config.num_joints + 1, 2))
        pts[0] = [self.config.base_x, self.config.base_y]
        pts[1:, 0] = self.config.base_x + np.cumsum(dx)
        pts[1:, 1] = self.config.base_y + np.cumsum(dy)
        return pts

    def end_effector(self, positions: np.ndarray) -> np.ndarray:
        return self.joint_positions(positions)[-1]

    def forward_kinematics(self, positions: np.ndarray) -> np.ndarray:
        joints = self.joint_positions(positions)
        starts = joints[:-1]   # (L, 2)
        ends = joints[1:]      # (L, 2)

        # 向量化插值: (L, 1, 2) + (1, S, 1) * (L, 1, 2) -> (L, S, 2)
        fractions = self.config.sample_fractions[None, :, None]
        samples = starts[:, None, :] + fractions * (ends - starts)[:, None, :]
        return samples.reshape(-1, 2)
