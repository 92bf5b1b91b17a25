# [入口] 负责暴露类，让外部调用更简洁

# stomp_costs/robot/__init__.py

from .base import RobotModelBase
from .config import RobotConfig, PlanarArmConfig, PointRobotConfig
from .state import RobotState
from .conversions import robot_state_msg_to_robot_state, robot_state_to_robot_state_msg
from .planar_arm import PlanarArmModel
from .point_robot import PointRobotModel

__all__ = [
    "RobotModelBase",
    "RobotConfig",
    "PlanarArmConfig",
    "PointRobotConfig",
    "RobotState",
    "robot_state_msg_to_robot_state",
    "robot_state_to_robot_state_msg",
    "PlanarArmModel",
    "PointRobotModel",
]
