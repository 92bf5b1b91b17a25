# [配置] 该模块独有的配置数据类
from dataclasses import dataclass, field
from typing import List
import numpy as np

@dataclass
class RobotConfig:
    """所有机器人模型通用的配置"""
    safe_margin: float = 0.0      # 距离查询时额外扣除的安全余量
    distance_field: bool = True   # False 表示该模型未构建距离场 (has_distance_field() 返回 False)

@dataclass
class PlanarArmConfig(RobotConfig):
    """
    平面 N 连杆机械臂配置
    所有关节均为绕 z 轴的转动关节，关节角为相对前一连杆的角度。
    """
    # --- 1. 几何参数 ---
    link_lengths: List[float] = field(default_factory=lambda: [0.5, 0.4, 0.3])  # [m]
    link_radius: float = 0.03      # [m] 连杆视为带半径的胶囊体
    base_x: float = 1.0            # [m] 基座在世界坐标系中的位置
    base_y: float = 1.0
    group_name: str = "manipulator"

    # --- 2. 距离采样 ---
    samples_per_link: int = 8      # 每根连杆上用于查询距离场的采样点数 (含两端)

    # --- 3. 派生属性 (自动计算，外部只读) ---
    num_joints: int = field(init=False)
    joint_names: List[str] = field(init=False)
    sample_fractions: np.ndarray = field(init=False)  # 采样点在连杆上的相对位置 [0, 1]
    reach: float = field(init=False)                  # 最大臂展

    def __post_init__(self):
        if len(self.link_lengths) == 0:
            raise ValueError("PlanarArmConfig requires at least one link")
        if self.samples_per_link < 2:
            raise ValueError("samples_per_link must be >= 2 (both link ends are sampled)")

        self.num_joints = len(self.link_lengths)
        self.joint_names = [f"joint_{i + 1}" for i in range(self.num_joints)]
        self.sample_fractions = np.linspace(0.0, 1.0, self.samples_per_link)
        self.reach = float(np.sum(self.link_lengths))

@dataclass
class PointRobotConfig(RobotConfig):
    """
    质点/全向圆盘机器人配置
    配置空间即平面位置 (x, y)。
    """
    radius: float = 0.1            # [m] 圆盘半径
    group_name: str = "base"

    # --- 派生属性 ---
    joint_names: List[str] = field(init=False)
    bounding_offset: np.ndarray = field(init=False)

    def __post_init__(self):
        if self.radius < 0:
            raise ValueError("radius must be >= 0")
        self.joint_names = ["base_x", "base_y"]
        self.bounding_offset = np.array([0.0, 0.0])
