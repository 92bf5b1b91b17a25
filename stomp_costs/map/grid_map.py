# stomp_costs/map/grid_map.py
import numpy as np
from typing import Optional, Tuple
from scipy.ndimage import distance_transform_edt

from .base import MapBase

class GridMap(MapBase):
    def __init__(self, width: int, height: int, resolution: float = 0.05):
        self._width = width
        self._height = height
        self._resolution = resolution
        self._grid = np.zeros((height, width), dtype=np.int8)  # 初始化全 0 (空闲) 矩阵，类型用 int8 节省内存
        self._signed_dist_map = None

    @property
    def data(self) -> np.ndarray:
        return self._grid

    @property
    def resolution(self) -> float:
        return self._resolution

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def signed_distance_map(self) -> Optional[np.ndarray]:
        return self._signed_dist_map

    def world_to_grid(self, x: float, y: float) -> Tuple[int, int]:
        """
        物理坐标 -> 栅格索引
        向下取整：floor(x / res)
        """
        x_idx = int(np.floor(x / self._resolution))
        y_idx = int(np.floor(y / self._resolution))
        return x_idx, y_idx

    def grid_to_world(self, x_idx: int, y_idx: int) -> Tuple[float, float]:
        """
        栅格索引 -> 物理坐标
        返回格子中心：idx * res + res/2
        """
        x = x_idx * self._resolution + self._resolution / 2.0
        y = y_idx * self._resolution + self._resolution / 2.0
        return x, y

    def is_inside(self, x: float, y: float) -> bool:
        """判断物理坐标是否在地图范围内"""
        xi, yi = self.world_to_grid(x, y)
        return self._is_valid_index(xi, yi)

    def _is_valid_index(self, x_idx: int, y_idx: int) -> bool:
        """内部辅助：检查索引边界"""
        return (0 <= x_idx < self._width) and (0 <= y_idx < self._height)

    # ------------------------------------------------------------------
    # 编辑接口：任何修改都会使已计算的距离场失效
    # ------------------------------------------------------------------

    def set_obstacle_rect(self, x_min: float, y_min: float, x_max: float, y_max: float):
        """将物理矩形区域 [x_min, x_max] x [y_min, y_max] 标记为障碍"""
        ix0, iy0 = self.world_to_grid(x_min, y_min)
        ix1, iy1 = self.world_to_grid(x_max, y_max)
        ix0, iy0 = max(ix0, 0), max(iy0, 0)
        ix1, iy1 = min(ix1, self._width - 1), min(iy1, self._height - 1)
        if ix0 > ix1 or iy0 > iy1:
            return
        self._grid[iy0:iy1 + 1, ix0:ix1 + 1] = 1
        self._invalidate()

    def set_obstacle_circle(self, cx: float, cy: float, radius: float, value: int = 1):
        """以格子中心判断，将圆内的格子设为 value (1=障碍, 0=清除)"""
        ys, xs = np.mgrid[0:self._height, 0:self._width]
        cell_x = (xs + 0.5) * self._resolution
        cell_y = (ys + 0.5) * self._resolution
        mask = (cell_x - cx) ** 2 + (cell_y - cy) ** 2 <= radius ** 2
        self._grid[mask] = value
        self._invalidate()

    def clear(self):
        self._grid[:] = 0
        self._invalidate()

    def _invalidate(self):
        self._signed_dist_map = None

    # ------------------------------------------------------------------
    # 距离场
    # ------------------------------------------------------------------

    def precompute_distance_map(self):
        """
        计算欧氏距离变换 (Euclidean Distance Transform, EDT)。
        self._signed_dist_map: 外部距离 - 内部距离，障碍内部为负值，单位为米。
        """
        # distance_transform_edt 计算的是“当前像素离最近的0值像素的距离”
        # 外部距离：障碍物=0, 空闲=1
        free = (self._grid != 1)
        outside = distance_transform_edt(free) if np.any(~free) else np.full(self._grid.shape, np.inf)

        # 内部距离：空闲=0, 障碍物=1
        inside = distance_transform_edt(~free) if np.any(free) else np.full(self._grid.shape, np.inf)

        self._signed_dist_map = (outside - inside) * self._resolution

        if np.all(free):
            max_clearance = float('inf')
        else:
            max_clearance = float(np.max(outside)) * self._resolution
        print(f"[GridMap] Distance map pre-computed. Max clearance: {max_clearance:.2f}m")

    def get_signed_distance(self, x: float, y: float) -> float:
        return float(self.get_signed_distances(np.array([[x, y]]))[0])

    def get_signed_distances(self, points: np.ndarray) -> np.ndarray:
        """
        向量化查询 (N, 2) 个物理点的有符号距离。
        越界的点视为在障碍物内部，返回 -resolution。
        """
        if self._signed_dist_map is None:
            self.precompute_distance_map()

        points = np.asarray(points, dtype=float).reshape(-1, 2)
        ix = np.floor(points[:, 0] / self._resolution).astype(int)
        iy = np.floor(points[:, 1] / self._resolution).astype(int)

        valid_mask = (ix >= 0) & (ix < self._width) & (iy >= 0) & (iy < self._height)

        result = np.full(len(points), -self._resolution)
        # numpy 索引顺序为 (row, col) 即 (y, x)
        result[valid_mask] = self._signed_dist_map[iy[valid_mask], ix[valid_mask]]
        return result
