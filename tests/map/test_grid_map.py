# tests/map/test_grid_map.py
import sys
import os
import numpy as np
import pytest

# --- 路径设置 (确保能导入 stomp_costs) ---
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from stomp_costs.map.grid_map import GridMap
from stomp_costs.map.generator import MapGenerator


@pytest.fixture
def box_map():
    # 5m x 5m，分辨率 0.1m，中间 [2, 3] x [2, 3] 为障碍
    grid_map = GridMap(width=50, height=50, resolution=0.1)
    grid_map.set_obstacle_rect(2.0, 2.0, 2.95, 2.95)
    grid_map.precompute_distance_map()
    return grid_map


def test_world_grid_conversion():
    grid_map = GridMap(width=10, height=10, resolution=0.5)
    assert grid_map.world_to_grid(1.2, 3.9) == (2, 7)
    assert grid_map.grid_to_world(2, 7) == (1.25, 3.75)
    assert grid_map.world_to_grid(-0.1, 0.0) == (-1, 0)
    assert not grid_map.is_inside(-0.1, 0.0)


def test_signed_distance_sign(box_map):
    assert box_map.get_signed_distance(0.5, 0.5) > 0.0
    assert box_map.get_signed_distance(2.5, 2.5) < 0.0
    # 离障碍边界 1m 的点
    assert box_map.get_signed_distance(1.05, 2.55) == pytest.approx(1.0, abs=0.11)


def test_signed_distance_out_of_bounds(box_map):
    assert box_map.get_signed_distance(-1.0, 1.0) == -box_map.resolution


def test_vectorized_matches_scalar(box_map):
    points = np.array([[0.5, 0.5], [2.5, 2.5], [4.9, 4.9], [10.0, 1.0]])
    expected = [box_map.get_signed_distance(x, y) for x, y in points]
    np.testing.assert_allclose(box_map.get_signed_distances(points), expected)


def test_edit_invalidates_distance_map(box_map):
    assert box_map.signed_distance_map is not None
    box_map.set_obstacle_circle(0.5, 0.5, 0.3)
    assert box_map.signed_distance_map is None
    # 查询时自动重新计算
    assert box_map.get_signed_distance(0.5, 0.5) < 0.0


def test_empty_map_is_infinitely_clear():
    grid_map = GridMap(width=10, height=10, resolution=0.1)
    assert np.isinf(grid_map.get_signed_distance(0.5, 0.5))


def test_generator_is_reproducible():
    a = MapGenerator(num_obstacles=5, seed=3).generate(GridMap(40, 40, 0.05))
    b = MapGenerator(num_obstacles=5, seed=3).generate(GridMap(40, 40, 0.05))
    np.testing.assert_array_equal(a.data, b.data)
    assert a.data.sum() > 0


def test_generator_keeps_area_clear():
    grid_map = MapGenerator(num_obstacles=30, min_size_m=0.3, max_size_m=0.6, seed=1).generate(
        GridMap(40, 40, 0.05), keep_clear=[(1.0, 1.0, 0.3)])
    assert grid_map.get_signed_distance(1.0, 1.0) > 0.0
