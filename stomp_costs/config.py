# [关键] 全局配置定义与代价项参数解析

# stomp_costs/config.py
import math
import numbers
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from .errors import ErrorCode, CostFunctionError, ConfigParseResult


@dataclass
class GlobalConfig:
    map_resolution: float = 0.05
    observer_mode: str = 'efficient'   # 'efficient' | 'experiment' | 'debug'
    debug_log_dir: str = "logs/cost_debug"


@dataclass
class ObstacleDistanceConfig:
    """ObstacleDistanceGradient 的参数"""
    cost_weight: float          # 由优化器在外部乘上，本代价项内部不使用
    max_distance: float         # [m] 超过该距离的障碍物视为无关，Cost 为 0


@dataclass
class CollisionCheckConfig:
    """CollisionCheck 的参数"""
    cost_weight: float
    collision_penalty: float = 1.0


def read_number(config: Mapping[str, Any], key: str, owner: str,
                default: Optional[float] = None) -> Tuple[Optional[float], Optional[CostFunctionError]]:
    """
    从配置字典中读取一个数值参数。
    :return: (value, error)，二者只有一个非空
    """
    if key not in config:
        if default is not None:
            return float(default), None
        return None, CostFunctionError(
            ErrorCode.CONFIG_INVALID,
            f"{owner} failed to find the '{key}' parameter")

    value = config[key]
    # bool 是 int 的子类，需要单独排除
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None, CostFunctionError(
            ErrorCode.CONFIG_PARSE_ERROR,
            f"{owner} failed to parse the '{key}' parameter: "
            f"expected a number, got {type(value).__name__}")

    value = float(value)
    if not math.isfinite(value):
        return None, CostFunctionError(
            ErrorCode.CONFIG_INVALID,
            f"{owner} requires a finite '{key}', got {value}")
    return value, None


def _check_mapping(config: Any, owner: str) -> Optional[CostFunctionError]:
    if not isinstance(config, Mapping):
        return CostFunctionError(
            ErrorCode.CONFIG_PARSE_ERROR,
            f"{owner} failed to parse configuration parameters: "
            f"expected a mapping, got {type(config).__name__}")
    return None


def parse_obstacle_distance_config(config: Any, owner: str = "ObstacleDistanceGradient") -> ConfigParseResult:
    """
    解析 {'cost_weight': float, 'max_distance': float}。未知的键被忽略。
    - 缺少键 / max_distance <= 0 -> CONFIG_INVALID
    - 类型错误 -> CONFIG_PARSE_ERROR
    """
    error = _check_mapping(config, owner)
    if error:
        return ConfigParseResult(error=error)

    # 先检查所有参数是否存在，再检查类型
    for key in ("cost_weight", "max_distance"):
        if key not in config:
            return ConfigParseResult(error=CostFunctionError(
                ErrorCode.CONFIG_INVALID,
                f"{owner} failed to find the '{key}' parameter"))

    cost_weight, error = read_number(config, "cost_weight", owner)
    if error:
        return ConfigParseResult(error=error)
    max_distance, error = read_number(config, "max_distance", owner)
    if error:
        return ConfigParseResult(error=error)

    # 公式 (max_distance - dist) / max_distance 要求分母为正
    if max_distance <= 0.0:
        return ConfigParseResult(error=CostFunctionError(
            ErrorCode.CONFIG_INVALID,
            f"{owner} requires 'max_distance' > 0, got {max_distance}"))

    return ConfigParseResult(config=ObstacleDistanceConfig(
        cost_weight=cost_weight, max_distance=max_distance))


def parse_collision_check_config(config: Any, owner: str = "CollisionCheck") -> ConfigParseResult:
    """解析 {'cost_weight': float, 'collision_penalty': float (可选, 默认 1.0)}"""
    error = _check_mapping(config, owner)
    if error:
        return ConfigParseResult(error=error)

    cost_weight, error = read_number(config, "cost_weight", owner)
    if error:
        return ConfigParseResult(error=error)
    penalty, error = read_number(config, "collision_penalty", owner, default=1.0)
    if error:
        return ConfigParseResult(error=error)

    if penalty < 0.0:
        return ConfigParseResult(error=CostFunctionError(
            ErrorCode.CONFIG_INVALID,
            f"{owner} requires 'collision_penalty' >= 0, got {penalty}"))

    return ConfigParseResult(config=CollisionCheckConfig(
        cost_weight=cost_weight, collision_penalty=penalty))
