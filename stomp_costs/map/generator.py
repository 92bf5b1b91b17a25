# stomp_costs/map/generator.py
import random
from typing import List, Optional, Tuple

from stomp_costs.map.grid_map import GridMap

class MapGenerator:
    """
    随机障碍地图生成器
    在地图上随机放置矩形与圆形障碍，并清空给定的安全区域 (例如机器人基座附近)。
    """

    def __init__(
        self,
        num_obstacles: int = 6,
        min_size_m: float = 0.1,
        max_size_m: float = 0.4,
        circle_ratio: float = 0.5,
        seed: Optional[int] = None
    ):
        self.num_obstacles = num_obstacles
        self.min_size_m = min_size_m
        self.max_size_m = max_size_m
        self.circle_ratio = circle_ratio
        self.seed = seed
        self._rng = random.Random(seed)

    def generate(self, grid_map: GridMap,
                 keep_clear: Optional[List[Tuple[float, float, float]]] = None) -> GridMap:
        """
        :param keep_clear: [(x, y, radius), ...] 生成后强制清空的圆形区域
        """
        grid_map.clear()
        map_w_m = grid_map.width * grid_map.resolution
        map_h_m = grid_map.height * grid_map.resolution

        for _ in range(self.num_obstacles):
            size = self._rng.uniform(self.min_size_m, self.max_size_m)
            cx = self._rng.uniform(0.0, map_w_m)
            cy = self._rng.uniform(0.0, map_h_m)

            if self._rng.random() < self.circle_ratio:
                grid_map.set_obstacle_circle(cx, cy, size / 2.0)
            else:
                # 矩形的长宽比在 [0.5, 2] 之间随机
                aspect = self._rng.uniform(0.5, 2.0)
                half_w = size * aspect / 2.0
                half_h = size / aspect / 2.0
                grid_map.set_obstacle_rect(cx - half_w, cy - half_h, cx + half_w, cy + half_h)

        for x, y, radius in keep_clear or []:
            grid_map.set_obstacle_circle(x, y, radius, value=0)

        return grid_map
