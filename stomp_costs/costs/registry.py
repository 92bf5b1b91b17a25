# stomp_costs/costs/registry.py
from typing import Callable, Dict, Type

# 名称 -> 代价项类，由 @register 填充
COST_FUNCTIONS: Dict[str, Type] = {}


def register(name: str) -> Callable[[Type], Type]:
    """类装饰器：以 name 注册一个代价项，供配置驱动的工厂构造"""
    def decorator(cls: Type) -> Type:
        if name in COST_FUNCTIONS and COST_FUNCTIONS[name] is not cls:
            raise ValueError(f"Cost function '{name}' is already registered")
        COST_FUNCTIONS[name] = cls
        return cls
    return decorator
