"""
Reusable validation helpers and decorators.
"""
# 说明：参数验证相关的辅助函数与装饰器，用于在库内部统一进行轻量级参数检查与转换。
# 职责：
# - ParameterError：所有定义域越界（epsilon/delta/lambda/敏感度等）统一使用的异常类型
# - ensure：基于布尔条件触发参数校验错误的轻量断言工具
# - ensure_finite / ensure_positive：针对浮点参数的有限性与正性检查
# - validate_arguments：根据 schema 为函数参数应用验证/转换逻辑的装饰器

from __future__ import annotations

import functools
import inspect
import math
import numbers
from typing import Any, Callable, Dict, Mapping, Type


class ParameterError(ValueError):
    """Raised when an input falls outside its documented domain."""


def ensure(condition: bool, message: str, *, error: Type[Exception] = ParameterError) -> None:
    # 条件不满足时抛出指定的异常类型（默认使用 ParameterError）
    if not condition:
        raise error(message)


def ensure_real(value: Any, *, label: str = "value") -> float:
    # 要求 value 为实数（排除 bool），返回 float 形式
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ParameterError(f"{label} must be a real number")
    try:
        return float(value)
    except OverflowError as exc:
        raise ParameterError(f"{label} is too large to represent as a float") from exc


def ensure_finite(value: Any, *, label: str = "value") -> float:
    # 拒绝 NaN 与 ±inf；NaN 与任何值比较均为 False，不能依赖后续的区间判断
    val = ensure_real(value, label=label)
    if not math.isfinite(val):
        raise ParameterError(f"{label} must be finite, got {val!r}")
    return val


def ensure_positive(value: Any, *, label: str = "value") -> float:
    val = ensure_finite(value, label=label)
    if val <= 0.0:
        raise ParameterError(f"{label} must be positive, got {val!r}")
    return val


def positive(label: str) -> Callable[[Any], float]:
    """Validator factory for use with :func:`validate_arguments`."""
    return functools.partial(ensure_positive, label=label)


def validate_arguments(schema: Mapping[str, Callable[[Any], Any]]) -> Callable:
    """
    Decorator validating arguments according to callables.

    Each validator receives the argument and should return the (possibly
    transformed) value or raise ParameterError.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            # 绑定实参到形参名，未显式传入（使用默认值）的参数不强制验证
            bound = signature.bind(*args, **kwargs)
            arguments: Dict[str, Any] = bound.arguments
            for name, validator in schema.items():
                if name in arguments:
                    arguments[name] = validator(arguments[name])
            return func(*bound.args, **bound.kwargs)

        return wrapper

    return decorator
