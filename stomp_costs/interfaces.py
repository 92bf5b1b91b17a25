from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import numpy as np

class ICostObserver(ABC):
    """
    代价项观察者接口
    用于解耦代价计算与 记录/调试/可视化 逻辑。
    支持三种模式：
    1. Efficient: 仅打印错误，无额外开销
    2. Experiment: 记录每次调用的代价向量用于可视化
    3. Debug: 详细日志记录用于问题排查
    """

    @abstractmethod
    def record_costs(self, iteration: int, rollout: int, costs: np.ndarray):
        """记录一次 compute_costs 的结果"""
        pass

    @abstractmethod
    def set_scene_info(self, scene_info: Any):
        """设置场景信息 (绑定请求时调用)"""
        pass

    @abstractmethod
    def log(self, message: str, level: str = 'INFO', payload: Optional[Dict] = None):
        """
        结构化日志记录
        :param message: 日志消息
        :param level: 日志级别 'INFO', 'WARN', 'ERROR', 'DEBUG'
        :param payload: 额外的结构化数据 (如配置参数、时间步区间等)
        """
        pass
