# stomp_costs/types.py
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from stomp_costs.map.grid_map import GridMap
from stomp_costs.errors import CostFunctionError


@dataclass
class JointGroup:
    """
    规划组：机器人全部关节中参与优化的一个命名子集
    """
    name: str
    joint_names: List[str]
    indices: np.ndarray      # 组内关节在完整状态向量中的下标

    @property
    def variable_count(self) -> int:
        return len(self.joint_names)


@dataclass
class RobotStateMsg:
    """
    序列化的机器人状态 (对应规划请求中的 start_state)
    """
    joint_names: List[str] = field(default_factory=list)
    positions: List[float] = field(default_factory=list)


@dataclass
class MotionPlanRequest:
    group_name: str
    start_state: Optional[RobotStateMsg] = None
    num_timesteps: int = 40
    allowed_planning_time: float = 5.0   # [s]


@dataclass
class PlanningScene:
    """
    规划场景：障碍物地图。
    构造时预计算有符号距离场，之后在一次规划会话内只读。
    """
    name: str
    grid_map: GridMap

    def __post_init__(self):
        if self.grid_map.signed_distance_map is None:
            self.grid_map.precompute_distance_map()


@dataclass
class CostResult:
    """
    compute_costs 的返回值。
    success 为 False 时 costs 为 None，error 说明失败原因。
    """
    success: bool
    costs: Optional[np.ndarray] = None
    validity: bool = False
    error: Optional[CostFunctionError] = None
