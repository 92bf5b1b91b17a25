import logging
import time
import os
from typing import Any, List, Tuple, Dict, Optional

import numpy as np

from stomp_costs.interfaces import ICostObserver

class EfficientObserver(ICostObserver):
    """
    高效运行模式
    除了必要的流程不额外进行信息记录。
    相当于 NoOp。
    """
    def record_costs(self, iteration: int, rollout: int, costs: np.ndarray): pass
    def set_scene_info(self, scene_info: Any): pass
    def log(self, message: str, level: str = 'INFO', payload: Optional[Dict] = None):
        # 仅在 ERROR 级别打印
        if level == 'ERROR':
            print(f"[ERROR] {message}")


class ExperimentObserver(ICostObserver):
    """
    实验模式
    记录每次代价计算的 (iteration, rollout, costs)。
    这些信息主要用于代价曲线的比较和可视化 (Replay)。
    """
    def __init__(self):
        # 存储格式: List[Tuple[iteration, rollout, costs]]
        self.cost_history: List[Tuple[int, int, np.ndarray]] = []
        # 存储格式: List[Tuple[level, message]]
        self.messages: List[Tuple[str, str]] = []
        self.scene_info = None

    def record_costs(self, iteration: int, rollout: int, costs: np.ndarray):
        # 存副本，调用方之后可能复用同一个数组
        self.cost_history.append((iteration, rollout, np.array(costs, copy=True)))

    def set_scene_info(self, scene_info: Any):
        self.scene_info = scene_info

    def log(self, message: str, level: str = 'INFO', payload: Optional[Dict] = None):
        # 实验模式只保留消息以便事后检查，控制台输出保持简洁
        self.messages.append((level, message))
        if level == 'ERROR':
            print(f"[ERROR] {message}")

    def costs_for_iteration(self, iteration: int) -> List[np.ndarray]:
        return [c for it, _, c in self.cost_history if it == iteration]


class DebugObserver(ICostObserver):
    """
    Debug 模式
    用于详细分析某次优化中代价为什么异常。
    将详细日志写入文件，同时保留实验数据以便对照。
    """
    def __init__(self, log_dir: str = "logs/cost_debug"):
        # 复用 ExperimentObserver 的存储，以便 Debug 时也能画图
        self.viz_observer = ExperimentObserver()

        self.log_dir = log_dir
        os.makedirs(self.log_dir, exist_ok=True)

        # 配置 Logger
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        self.log_file = os.path.join(self.log_dir, f"cost_debug_{timestamp}.log")

        # logger 名称带上 id，避免同一秒内创建的多个 observer 共享 handler
        self.logger = logging.getLogger(f"CostDebug_{timestamp}_{id(self)}")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

        # 避免添加重复 Handler
        if not self.logger.handlers:
            fh = logging.FileHandler(self.log_file, encoding='utf-8')
            fh.setLevel(logging.DEBUG)
            formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
            fh.setFormatter(formatter)
            self.logger.addHandler(fh)

        self.logger.info("=== Debug Session Started ===")

    def record_costs(self, iteration: int, rollout: int, costs: np.ndarray):
        self.viz_observer.record_costs(iteration, rollout, costs)
        peak = float(np.max(costs)) if len(costs) else 0.0
        self.logger.debug(
            f"Costs iter={iteration} rollout={rollout} "
            f"sum={float(np.sum(costs)):.4f} max={peak:.4f}")

    def set_scene_info(self, scene_info: Any):
        self.viz_observer.set_scene_info(scene_info)
        self.logger.info(f"Scene Info set: {scene_info}")

    def log(self, message: str, level: str = 'INFO', payload: Optional[Dict] = None):
        if payload:
            message = f"{message} | Payload: {payload}"

        if level == 'DEBUG':
            self.logger.debug(message)
        elif level == 'WARN':
            self.logger.warning(message)
        elif level == 'ERROR':
            self.logger.error(message)
        else:
            self.logger.info(message)

    def close(self):
        """释放文件句柄"""
        for handler in list(self.logger.handlers):
            handler.flush()
            handler.close()
            self.logger.removeHandler(handler)

    # Proxy properties for ExperimentObserver compatibility
    @property
    def cost_history(self): return self.viz_observer.cost_history
    @property
    def scene_info(self): return self.viz_observer.scene_info


def make_observer(mode: str = 'efficient', log_dir: str = "logs/cost_debug") -> ICostObserver:
    """按名称构造观察者: 'efficient' | 'experiment' | 'debug'"""
    if mode == 'efficient':
        return EfficientObserver()
    if mode == 'experiment':
        return ExperimentObserver()
    if mode == 'debug':
        return DebugObserver(log_dir=log_dir)
    raise ValueError(f"Unknown observer mode '{mode}'")
