# stomp_costs/costs/factory.py
from typing import Any, List, Mapping, Optional, Sequence

from stomp_costs.interfaces import ICostObserver
from stomp_costs.visualization.observers import EfficientObserver
from .base import CostFunction
from .registry import COST_FUNCTIONS
# 导入具体实现以完成注册
from . import obstacle_distance_gradient  # noqa: F401
from . import collision_check  # noqa: F401


def create_cost_function(entry: Mapping[str, Any], robot_model, group_name: str,
                         observer: Optional[ICostObserver] = None) -> Optional[CostFunction]:
    """
    按配置构造并初始化一个代价项。
    entry 示例: {'class': 'ObstacleDistanceGradient', 'cost_weight': 1.0, 'max_distance': 0.1}
    其余键原样交给 initialize()。

    :return: 初始化成功的实例；失败返回 None
    """
    if observer is None:
        observer = EfficientObserver()

    class_name = entry.get("class") if isinstance(entry, Mapping) else None
    if class_name not in COST_FUNCTIONS:
        observer.log(f"Unknown cost function '{class_name}', available: {sorted(COST_FUNCTIONS)}",
                     level='ERROR')
        return None

    cost_fn = COST_FUNCTIONS[class_name](observer=observer)
    config = {k: v for k, v in entry.items() if k != "class"}
    if not cost_fn.initialize(robot_model, group_name, config):
        observer.log(f"Failed to initialize cost function '{class_name}': {cost_fn.last_error}",
                     level='ERROR')
        return None
    return cost_fn


def create_cost_functions(entries: Sequence[Mapping[str, Any]], robot_model, group_name: str,
                          observer: Optional[ICostObserver] = None) -> List[CostFunction]:
    """
    构造一组代价项；任意一项失败则整体失败 (返回空列表)。
    每次调用都得到全新的实例，可直接分配给各个并行 worker。
    """
    cost_fns = []
    for entry in entries:
        cost_fn = create_cost_function(entry, robot_model, group_name, observer)
        if cost_fn is None:
            return []
        cost_fns.append(cost_fn)
    return cost_fns
