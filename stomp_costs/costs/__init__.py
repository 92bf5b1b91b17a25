# stomp_costs/costs/__init__.py

from .base import CostFunction, LifecycleState
from .distance_field_cost import DistanceFieldCostFunction
from .obstacle_distance_gradient import ObstacleDistanceGradient, map_distance_to_cost
from .collision_check import CollisionCheck
from .registry import COST_FUNCTIONS, register
from .factory import create_cost_function, create_cost_functions

__all__ = [
    'CostFunction',
    'LifecycleState',
    'DistanceFieldCostFunction',
    'ObstacleDistanceGradient',
    'map_distance_to_cost',
    'CollisionCheck',
    'COST_FUNCTIONS',
    'register',
    'create_cost_function',
    'create_cost_functions',
]
