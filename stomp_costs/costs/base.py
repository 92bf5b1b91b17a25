# stomp_costs/costs/base.py
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Mapping, Optional

import numpy as np

from stomp_costs.errors import ErrorCode, CostFunctionError
from stomp_costs.interfaces import ICostObserver
from stomp_costs.types import CostResult, MotionPlanRequest, PlanningScene
from stomp_costs.visualization.observers import EfficientObserver


class LifecycleState(Enum):
    UNINITIALIZED = 0
    CONFIGURED = 1     # initialize()/configure() 成功
    BOUND = 2          # set_motion_plan_request() 成功
    EVALUATING = 3     # 至少调用过一次 compute_costs()，done() 后回到 CONFIGURED


class CostFunction(ABC):
    """
    代价项基类 (Strategy Interface)
    优化器按以下顺序调用：
        initialize -> set_motion_plan_request -> compute_costs (每个 rollout x 每次迭代) -> done
    所有失败都以返回值报告 (bool / CostResult.success)，不抛异常，
    并在 last_error 中保留错误码与可读信息。

    实例不是线程安全的：并行评估 rollout 时每个 worker 需持有自己的实例。
    """
    def __init__(self, name: str, observer: Optional[ICostObserver] = None):
        self._name = name
        self.observer = observer if observer is not None else EfficientObserver()
        self.lifecycle = LifecycleState.UNINITIALIZED
        self.last_error: Optional[CostFunctionError] = None

    def get_name(self) -> str:
        return self._name

    @abstractmethod
    def initialize(self, robot_model, group_name: str, config: Mapping[str, Any]) -> bool:
        """检查机器人模型能力、记录规划组，并调用 configure()"""
        pass

    @abstractmethod
    def configure(self, config: Mapping[str, Any]) -> bool:
        """解析并保存参数；失败时保持原有参数不变"""
        pass

    @abstractmethod
    def set_motion_plan_request(self, planning_scene: PlanningScene, request: MotionPlanRequest) -> bool:
        """绑定一次规划请求 (场景 + 起始状态)"""
        pass

    @abstractmethod
    def compute_costs(self, parameters: np.ndarray, start_timestep: int, num_timesteps: int,
                      iteration_number: int = 0, rollout_number: int = 0) -> CostResult:
        """
        计算一条轨迹在 [start_timestep, start_timestep + num_timesteps) 上的逐时间步代价
        :param parameters: (num_dof, num_timesteps_total) 轨迹矩阵，只读
        """
        pass

    @abstractmethod
    def done(self, success: bool, total_iterations: int, final_cost: float):
        """优化结束，释放与请求相关的资源"""
        pass

    def _fail(self, code: ErrorCode, message: str, payload: Optional[Dict] = None) -> bool:
        self.last_error = CostFunctionError(code, message)
        self.observer.log(f"{self.get_name()} {message}", level='ERROR', payload=payload)
        return False

    def _fail_with(self, error: CostFunctionError) -> bool:
        """参数解析产生的错误信息已带有代价项名称，原样记录"""
        self.last_error = error
        self.observer.log(error.message, level='ERROR')
        return False

    def _fail_result(self, code: ErrorCode, message: str, payload: Optional[Dict] = None) -> CostResult:
        self._fail(code, message, payload)
        return CostResult(success=False, costs=None, validity=False, error=self.last_error)

    def __repr__(self):
        return f"{type(self).__name__}(name={self._name!r}, state={self.lifecycle.name})"
