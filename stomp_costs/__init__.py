# stomp_costs/__init__.py

from .errors import ErrorCode, CostFunctionError, ConfigParseResult
from .types import JointGroup, RobotStateMsg, MotionPlanRequest, PlanningScene, CostResult

__all__ = [
    "ErrorCode",
    "CostFunctionError",
    "ConfigParseResult",
    "JointGroup",
    "RobotStateMsg",
    "MotionPlanRequest",
    "PlanningScene",
    "CostResult",
]
