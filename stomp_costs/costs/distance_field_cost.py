# stomp_costs/costs/distance_field_cost.py
from abc import abstractmethod
from typing import Any, Mapping, Optional

import numpy as np

from stomp_costs.errors import ErrorCode, ConfigParseResult
from stomp_costs.interfaces import ICostObserver
from stomp_costs.types import CostResult, JointGroup, MotionPlanRequest, PlanningScene
from stomp_costs.robot.state import RobotState
from stomp_costs.robot.conversions import robot_state_msg_to_robot_state
from .base import CostFunction, LifecycleState


class DistanceFieldCostFunction(CostFunction):
    """
    基于距离场查询的代价项的公共生命周期。

    工作流程：
    1. initialize: 要求机器人模型提供距离场 (has_distance_field)。
    2. set_motion_plan_request: 从请求的 start_state 构造新的工作状态 RobotState。
    3. compute_costs: 把轨迹第 t 列写入工作状态 -> update() -> 查询距离 -> 映射为代价。
    4. done: 释放工作状态与场景引用。

    子类只需要实现参数解析与 距离 -> 代价 的映射。
    """
    def __init__(self, name: str, observer: Optional[ICostObserver] = None):
        super().__init__(name, observer)
        self.robot_model = None         # 共享、只读，不归本实例所有
        self.group_name: Optional[str] = None
        self._joint_group: Optional[JointGroup] = None

        # 绑定请求后才存在
        self._planning_scene: Optional[PlanningScene] = None
        self._plan_request: Optional[MotionPlanRequest] = None
        self._robot_state: Optional[RobotState] = None

    # ------------------------------------------------------------------
    # 子类接口
    # ------------------------------------------------------------------

    @abstractmethod
    def _parse_config(self, config: Mapping[str, Any]) -> ConfigParseResult:
        pass

    @abstractmethod
    def _apply_config(self, parsed: Any):
        """保存已经通过校验的参数"""
        pass

    @abstractmethod
    def map_distance(self, dist: float) -> float:
        """单个时间步：有符号间隙 -> 代价"""
        pass

    def _validity(self, distances: np.ndarray) -> bool:
        return True

    # ------------------------------------------------------------------
    # 生命周期
    # ------------------------------------------------------------------

    def initialize(self, robot_model, group_name: str, config: Mapping[str, Any]) -> bool:
        has_distance_field = getattr(robot_model, "has_distance_field", None)
        if robot_model is None or not callable(has_distance_field) or not has_distance_field():
            return self._fail(ErrorCode.CAPABILITY_MISSING, "robot model has no Distance Field")

        joint_group = robot_model.get_joint_group(group_name)
        if joint_group is None:
            return self._fail(ErrorCode.CAPABILITY_MISSING,
                              f"robot model has no planning group '{group_name}'")

        # 参数解析成功之前不修改任何成员，失败时保留上一次有效的状态
        result = self._parse_config(config)
        if not result.ok:
            return self._fail_with(result.error)

        # 换了模型或规划组，旧的工作状态已经不匹配
        if robot_model is not self.robot_model or group_name != self.group_name:
            self._release()

        self.robot_model = robot_model
        self.group_name = group_name
        self._joint_group = joint_group
        self._commit_config(result.config)
        return True

    def configure(self, config: Mapping[str, Any]) -> bool:
        result = self._parse_config(config)
        if not result.ok:
            return self._fail_with(result.error)

        self._commit_config(result.config)
        return True

    def _commit_config(self, parsed: Any):
        self._apply_config(parsed)
        self.last_error = None
        if self.lifecycle == LifecycleState.UNINITIALIZED and self.robot_model is not None:
            self.lifecycle = LifecycleState.CONFIGURED

        self.observer.log(f"{self.get_name()} configured", level='DEBUG', payload=vars(parsed))

    def set_motion_plan_request(self, planning_scene: PlanningScene, request: MotionPlanRequest) -> bool:
        if self.lifecycle == LifecycleState.UNINITIALIZED:
            return self._fail(ErrorCode.NOT_INITIALIZED,
                              "must be initialized and configured before binding a request")

        # 丢弃上一次请求的工作状态
        self._release()

        robot_state = RobotState(self.robot_model)
        if not robot_state_msg_to_robot_state(getattr(request, "start_state", None), robot_state):
            return self._fail(ErrorCode.STATE_CONVERSION_ERROR,
                              "Failed to get current robot state from request")
        robot_state.update()

        self._planning_scene = planning_scene
        self._plan_request = request
        self._robot_state = robot_state
        self.lifecycle = LifecycleState.BOUND
        self.last_error = None

        self.observer.set_scene_info(getattr(planning_scene, "name", planning_scene))
        return True

    def compute_costs(self, parameters: np.ndarray, start_timestep: int, num_timesteps: int,
                      iteration_number: int = 0, rollout_number: int = 0) -> CostResult:
        """
        逐时间步评估 parameters 的第 [start_timestep, start_timestep + num_timesteps) 列。

        返回的代价向量按轨迹列下标索引 (costs[t] 对应第 t 列)，长度为
        start_timestep + num_timesteps。start_timestep 为 0 时长度恰为 num_timesteps；
        从中间开始评估时，前 start_timestep 个元素保持为 0。
        """
        if self._robot_state is None or self.lifecycle not in (LifecycleState.BOUND, LifecycleState.EVALUATING):
            return self._fail_result(ErrorCode.NOT_BOUND, "Robot State has not been updated")

        parameters = np.asarray(parameters, dtype=float)
        if parameters.ndim != 2:
            return self._fail_result(ErrorCode.RANGE_ERROR,
                                     f"'parameters' must be a (dof x timesteps) matrix, got shape {parameters.shape}")
        if start_timestep < 0 or num_timesteps < 0:
            return self._fail_result(ErrorCode.RANGE_ERROR,
                                     f"Invalid timestep window start={start_timestep} num={num_timesteps}")
        if parameters.shape[0] != self._joint_group.variable_count:
            return self._fail_result(ErrorCode.RANGE_ERROR,
                                     f"'parameters' has {parameters.shape[0]} rows but group "
                                     f"'{self.group_name}' has {self._joint_group.variable_count} joints")
        end_timestep = start_timestep + num_timesteps
        if parameters.shape[1] < end_timestep:
            return self._fail_result(ErrorCode.RANGE_ERROR,
                                     "Size in the 'parameters' matrix is less than required",
                                     payload={'columns': parameters.shape[1], 'required': end_timestep})

        self.lifecycle = LifecycleState.EVALUATING

        # 代价下标与轨迹列下标一致
        costs = np.zeros(end_timestep)
        distances = np.empty(num_timesteps)
        for t in range(start_timestep, end_timestep):
            self._robot_state.set_joint_group_positions(self._joint_group, parameters[:, t])
            self._robot_state.update()

            dist = self.robot_model.distance(self.group_name, self._planning_scene, self._robot_state)
            distances[t - start_timestep] = dist
            costs[t] = self.map_distance(dist)

        validity = self._validity(distances)
        self.observer.record_costs(iteration_number, rollout_number, costs)
        return CostResult(success=True, costs=costs, validity=validity)

    def done(self, success: bool, total_iterations: int, final_cost: float):
        self.observer.log(f"{self.get_name()} done", level='DEBUG',
                          payload={'success': success, 'total_iterations': total_iterations,
                                   'final_cost': final_cost})
        self._release()

    def _release(self):
        self._robot_state = None
        self._planning_scene = None
        self._plan_request = None
        if self.lifecycle in (LifecycleState.BOUND, LifecycleState.EVALUATING):
            self.lifecycle = LifecycleState.CONFIGURED

    @property
    def is_bound(self) -> bool:
        return self._robot_state is not None

    @property
    def robot_state(self) -> Optional[RobotState]:
        return self._robot_state

    @property
    def planning_scene(self) -> Optional[PlanningScene]:
        return self._planning_scene
