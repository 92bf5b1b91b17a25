import sys
import os
import argparse
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

# --- 路径设置 ---
# 确保能找到 stomp_costs 包
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from stomp_costs.config import GlobalConfig
from stomp_costs.map.grid_map import GridMap
from stomp_costs.map.generator import MapGenerator
from stomp_costs.robot import PlanarArmModel, PlanarArmConfig
from stomp_costs.types import MotionPlanRequest, PlanningScene, RobotStateMsg
from stomp_costs.costs import create_cost_functions
from stomp_costs.visualization.observers import make_observer
from stomp_costs.visualization.plotter import plot_cost_profile, plot_scene

COST_TERMS = [
    {'class': 'ObstacleDistanceGradient', 'cost_weight': 1.0, 'max_distance': 0.15},
    {'class': 'CollisionCheck', 'cost_weight': 10.0, 'collision_penalty': 1.0},
]

def interpolate(start: np.ndarray, goal: np.ndarray, num_timesteps: int) -> np.ndarray:
    """关节空间直线插值，返回 (dof, T)"""
    alphas = np.linspace(0.0, 1.0, num_timesteps)
    return start[:, None] + (goal - start)[:, None] * alphas[None, :]

def make_rollouts(mean: np.ndarray, num_rollouts: int, stddev: float, rng: np.random.Generator) -> np.ndarray:
    """
    围绕均值轨迹生成带噪声的 rollouts (首末时间步保持不变)
    :return: (num_rollouts, dof, T)
    """
    noise = rng.normal(0.0, stddev, size=(num_rollouts,) + mean.shape)
    # 平滑噪声：对时间维做滑动平均
    kernel = np.ones(5) / 5.0
    noise = np.apply_along_axis(lambda v: np.convolve(v, kernel, mode='same'), 2, noise)
    noise[:, :, 0] = 0.0
    noise[:, :, -1] = 0.0
    return mean[None] + noise

def run_experiment(num_iterations: int = 5, num_rollouts: int = 10, num_timesteps: int = 40,
                   seed: int = 7, output_dir: str = "logs/rollout_costs", show: bool = False):
    cfg = GlobalConfig()
    rng = np.random.default_rng(seed)

    # --- 1. 场景 ---
    grid_map = GridMap(width=60, height=60, resolution=cfg.map_resolution)  # 3m x 3m
    arm_config = PlanarArmConfig(link_lengths=[0.6, 0.5, 0.3], base_x=1.5, base_y=1.5)
    MapGenerator(num_obstacles=8, seed=seed).generate(
        grid_map, keep_clear=[(arm_config.base_x, arm_config.base_y, 0.3)])
    scene = PlanningScene(name=f"random_{seed}", grid_map=grid_map)

    robot_model = PlanarArmModel(arm_config)
    group = robot_model.get_joint_group(arm_config.group_name)

    # --- 2. 代价项 ---
    # 需要 cost_history 画图，efficient 模式不记录
    mode = 'experiment' if cfg.observer_mode == 'efficient' else cfg.observer_mode
    observer = make_observer(mode, log_dir=cfg.debug_log_dir)
    cost_fns = create_cost_functions(COST_TERMS, robot_model, arm_config.group_name, observer)
    if not cost_fns:
        print("[Experiment] Failed to create cost functions")
        return None

    start = np.array([0.0, 0.3, 0.3])
    goal = np.array([np.pi * 0.9, -0.3, -0.3])
    request = MotionPlanRequest(
        group_name=arm_config.group_name,
        start_state=RobotStateMsg(joint_names=group.joint_names, positions=start.tolist()),
        num_timesteps=num_timesteps,
    )
    for cost_fn in cost_fns:
        if not cost_fn.set_motion_plan_request(scene, request):
            print(f"[Experiment] {cost_fn.get_name()} rejected the request: {cost_fn.last_error}")
            return None

    # --- 3. 简化的优化循环 (仅用于驱动代价项) ---
    mean = interpolate(start, goal, num_timesteps)
    records = []
    for iteration in range(num_iterations):
        rollouts = make_rollouts(mean, num_rollouts, stddev=0.15, rng=rng)
        totals = np.zeros(num_rollouts)

        for r, rollout in enumerate(rollouts):
            for cost_fn in cost_fns:
                result = cost_fn.compute_costs(rollout, 0, num_timesteps, iteration, r)
                if not result.success:
                    print(f"[Experiment] {cost_fn.get_name()} failed: {result.error}")
                    continue
                weighted = cost_fn.cost_weight * float(np.sum(result.costs))
                totals[r] += weighted
                records.append({
                    'iteration': iteration,
                    'rollout': r,
                    'cost_function': cost_fn.get_name(),
                    'cost': weighted,
                    'max_step_cost': float(np.max(result.costs)),
                    'valid': result.validity,
                })

        # 以 exp(-h * 归一化代价) 为权重更新均值
        spread = max(totals.max() - totals.min(), 1e-9)
        weights = np.exp(-10.0 * (totals - totals.min()) / spread)
        weights /= weights.sum()
        mean = np.tensordot(weights, rollouts, axes=1)

    final_cost = float(np.min(totals))
    for cost_fn in cost_fns:
        cost_fn.done(True, num_iterations, final_cost)

    # --- 4. 汇总 ---
    df = pd.DataFrame(records)
    summary = df.groupby(['iteration', 'cost_function']).agg(
        mean_cost=('cost', 'mean'),
        min_cost=('cost', 'min'),
        valid_ratio=('valid', 'mean'),
    ).reset_index()
    print(summary.to_string(index=False))

    os.makedirs(output_dir, exist_ok=True)
    df.to_csv(os.path.join(output_dir, "rollout_costs.csv"), index=False)

    # --- 5. 可视化 ---
    fig, (ax_scene, ax_cost) = plt.subplots(1, 2, figsize=(12, 5))
    tip_path = np.array([robot_model.end_effector(mean[:, t]) for t in range(num_timesteps)])
    plot_scene(grid_map, paths=[tip_path], ax=ax_scene)
    ax_scene.set_title("End effector path (final mean)")
    if hasattr(observer, 'cost_history'):
        plot_cost_profile(observer, iteration=num_iterations - 1, ax=ax_cost)
    fig.tight_layout()
    fig.savefig(os.path.join(output_dir, "rollout_costs.png"))
    if show:
        plt.show()
    plt.close(fig)

    return summary

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Evaluate obstacle costs over noisy rollouts")
    parser.add_argument("--iterations", type=int, default=5)
    parser.add_argument("--rollouts", type=int, default=10)
    parser.add_argument("--timesteps", type=int, default=40)
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--show", action="store_true")
    args = parser.parse_args()

    run_experiment(args.iterations, args.rollouts, args.timesteps, args.seed, show=args.show)
