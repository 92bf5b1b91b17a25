# stomp_costs/costs/collision_check.py
from typing import Any, Mapping, Optional

import numpy as np

from stomp_costs.config import CollisionCheckConfig, parse_collision_check_config
from stomp_costs.errors import ConfigParseResult
from stomp_costs.interfaces import ICostObserver
from .distance_field_cost import DistanceFieldCostFunction
from .registry import register


@register("CollisionCheck")
class CollisionCheck(DistanceFieldCostFunction):
    """
    二值碰撞代价：有符号间隙 < 0 (或为 NaN) 的时间步代价为 collision_penalty，其余为 0。
    只要有一个被评估的时间步处于碰撞，validity 就为 False。
    """
    def __init__(self, observer: Optional[ICostObserver] = None):
        super().__init__("CollisionCheck", observer)
        self.cost_weight: Optional[float] = None
        self.collision_penalty: Optional[float] = None

    def _parse_config(self, config: Mapping[str, Any]) -> ConfigParseResult:
        return parse_collision_check_config(config, owner=self.get_name())

    def _apply_config(self, parsed: CollisionCheckConfig):
        self.cost_weight = parsed.cost_weight
        self.collision_penalty = parsed.collision_penalty

    def map_distance(self, dist: float) -> float:
        return self.collision_penalty if not dist >= 0.0 else 0.0

    def _validity(self, distances: np.ndarray) -> bool:
        return bool(np.all(distances >= 0.0))
