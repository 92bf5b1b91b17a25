# stomp_costs/errors.py
from enum import Enum
from dataclasses import dataclass
from typing import Any, Optional


class ErrorCode(Enum):
    SUCCESS = 0

    # 机器人模型没有距离场 (初始化失败，该实例不能用于此规划组)
    CAPABILITY_MISSING = 1

    # 缺少必需参数，或参数取值非法 (如 max_distance <= 0)
    CONFIG_INVALID = 2

    # 参数存在但类型错误
    CONFIG_PARSE_ERROR = 3

    # 请求中的起始状态无法转换为 RobotState
    STATE_CONVERSION_ERROR = 4

    # 在 initialize() 成功之前尝试绑定请求
    NOT_INITIALIZED = 5

    # 在绑定请求之前尝试计算代价
    NOT_BOUND = 6

    # 轨迹矩阵的列数不足以覆盖请求的时间步区间
    RANGE_ERROR = 7


@dataclass
class CostFunctionError:
    """一次失败调用的错误码与可读信息"""
    code: ErrorCode
    message: str

    def __str__(self):
        return f"[{self.code.name}] {self.message}"


@dataclass
class ConfigParseResult:
    """
    配置解析结果 (替代异常)。
    成功时 config 非空，失败时 error 非空。
    """
    config: Optional[Any] = None
    error: Optional[CostFunctionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
