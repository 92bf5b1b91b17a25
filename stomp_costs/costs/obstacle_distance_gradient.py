# stomp_costs/costs/obstacle_distance_gradient.py
from typing import Any, Mapping, Optional

from stomp_costs.config import ObstacleDistanceConfig, parse_obstacle_distance_config
from stomp_costs.errors import ConfigParseResult
from stomp_costs.interfaces import ICostObserver
from .distance_field_cost import DistanceFieldCostFunction
from .registry import register


def map_distance_to_cost(dist: float, max_distance: float) -> float:
    """
    有符号间隙 -> [0, 1] 的代价
    - dist >= max_distance: 0 (远离障碍物)
    - dist < 0 或 NaN:      1 (碰撞；距离场给不出有效值时按碰撞处理)
    - 其余:                 (max_distance - dist) / max_distance，线性从 1 降到 0
    """
    if dist >= max_distance:
        return 0.0
    if not dist >= 0.0:
        return 1.0
    return (max_distance - dist) / max_distance


@register("ObstacleDistanceGradient")
class ObstacleDistanceGradient(DistanceFieldCostFunction):
    """
    障碍物邻近代价：利用机器人模型的距离场惩罚靠近或穿透障碍物的时间步。

    只产生逐时间步的势场采样值，不做平滑也不计算梯度，平均/梯度交给优化器。
    cost_weight 只保存，由优化器在外部乘上。
    碰撞不会把 validity 置为 False，由优化器根据代价自行权衡。

    配置：
        cost_weight:  float
        max_distance: float (> 0) [m] 超过这个距离就认为安全了，Cost 为 0
    """
    def __init__(self, observer: Optional[ICostObserver] = None):
        super().__init__("ObstacleDistanceGradient", observer)
        self.cost_weight: Optional[float] = None
        self.max_distance: Optional[float] = None

    def _parse_config(self, config: Mapping[str, Any]) -> ConfigParseResult:
        return parse_obstacle_distance_config(config, owner=self.get_name())

    def _apply_config(self, parsed: ObstacleDistanceConfig):
        self.cost_weight = parsed.cost_weight
        self.max_distance = parsed.max_distance

    def map_distance(self, dist: float) -> float:
        return map_distance_to_cost(dist, self.max_distance)
