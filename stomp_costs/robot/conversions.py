# stomp_costs/robot/conversions.py
import math
from typing import Any

from stomp_costs.types import RobotStateMsg
from .state import RobotState


def robot_state_msg_to_robot_state(msg: Any, state: RobotState) -> bool:
    """
    将序列化的起始状态写入 state。
    消息中未列出的关节保持 state 中原有的值。

    :return: False 表示消息格式错误 (此时 state 可能已被部分修改，调用方应丢弃它)
    """
    if not isinstance(msg, RobotStateMsg):
        return False

    names = list(msg.joint_names)
    positions = list(msg.positions)
    if len(names) != len(positions):
        return False
    if len(set(names)) != len(names):
        return False

    model_joints = state.robot_model.joint_names
    for name, value in zip(names, positions):
        if name not in model_joints:
            return False
        try:
            value = float(value)
        except (TypeError, ValueError):
            return False
        if not math.isfinite(value):
            return False
        state.set_variable_position(model_joints.index(name), value)

    return True


def robot_state_to_robot_state_msg(state: RobotState) -> RobotStateMsg:
    return RobotStateMsg(
        joint_names=list(state.robot_model.joint_names),
        positions=[float(v) for v in state.positions],
    )
