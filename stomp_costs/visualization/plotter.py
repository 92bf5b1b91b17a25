# 绘图逻辑 (Matplotlib)

from typing import List, Optional

import numpy as np
import matplotlib.pyplot as plt

from stomp_costs.map.grid_map import GridMap
from stomp_costs.visualization.observers import ExperimentObserver


def plot_cost_profile(observer: ExperimentObserver, iteration: Optional[int] = None, ax=None):
    """
    根据 observer 里的历史数据画出每个 rollout 的逐时间步代价曲线
    :param iteration: 只画某一次迭代；None 表示全部
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 4))

    for it, rollout, costs in observer.cost_history:
        if iteration is not None and it != iteration:
            continue
        ax.plot(np.arange(len(costs)), costs, alpha=0.4, linewidth=1)

    ax.set_xlabel("Timestep")
    ax.set_ylabel("Obstacle cost")
    ax.set_ylim(-0.05, 1.05)
    title = "Cost profile" if iteration is None else f"Cost profile (iteration {iteration})"
    ax.set_title(title)
    return ax


def plot_scene(grid_map: GridMap, paths: Optional[List[np.ndarray]] = None,
               show_distance: bool = True, ax=None):
    """
    画出障碍地图 (可选叠加有符号距离场) 以及若干条工作空间路径
    :param paths: 每条为 (T, 2) 的末端/圆心轨迹
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))

    extent = [0, grid_map.width * grid_map.resolution, 0, grid_map.height * grid_map.resolution]

    # 1. 距离场作为底图
    if show_distance:
        if grid_map.signed_distance_map is None:
            grid_map.precompute_distance_map()
        sdf = np.clip(grid_map.signed_distance_map, -1.0, 1.0)
        ax.imshow(sdf, cmap='RdBu', origin='lower', extent=extent, alpha=0.6)

    # 2. 障碍物
    ax.imshow(np.ma.masked_where(grid_map.data == 0, grid_map.data),
              cmap='Greys', origin='lower', extent=extent, vmin=0, vmax=1)

    # 3. 路径
    for path in paths or []:
        path = np.asarray(path)
        ax.plot(path[:, 0], path[:, 1], '-', linewidth=1)

    ax.set_aspect('equal')
    return ax
