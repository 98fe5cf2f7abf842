"""
Factory helpers to instantiate and calibrate mechanisms from registry identifiers.

Responsibilities
  - Normalise identifiers (string/enum) via the registry.
  - Construct mechanisms with supported init arguments.
  - Calibrate with provided sensitivity/delta.
"""
# 说明：根据注册表标识符创建并校准机制实例的工厂辅助函数。
# 职责：
# - 规范化字符串或枚举形式的机制标识符并解析为具体机制类
# - 根据机制构造函数与校准函数的签名筛选支持的参数并安全传递
# - 支持直接接收已有机制实例并在需要时进行一次性校准

from __future__ import annotations

import inspect
from typing import Any, Dict, Mapping, Optional

from dpnoise.core.privacy.base_mechanism import BaseMechanism

from .mechanism_registry import MechanismType, get_mechanism_class


def _filter_kwargs(signature_obj: inspect.Signature, values: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep only non-None kwargs that the callable accepts."""
    return {k: v for k, v in values.items() if k in signature_obj.parameters and v is not None}


def _calibrate(mech: BaseMechanism, sensitivity: Optional[float], delta: Optional[float]) -> None:
    cal_sig = inspect.signature(mech._calibrate_parameters)  # pylint: disable=protected-access
    mech.calibrate(**_filter_kwargs(cal_sig, {"sensitivity": sensitivity, "delta": delta}))


def create_mechanism(
    mechanism: str | MechanismType | BaseMechanism,
    *,
    epsilon: float,
    delta: Optional[float] = None,
    sensitivity: Optional[float] = None,
    rng: Optional[Any] = None,
    name: Optional[str] = None,
    calibrate: bool = True,
) -> BaseMechanism:
    """
    Create and (optionally) calibrate a mechanism by identifier.

    Args:
        mechanism: MechanismType or string identifier, or an existing BaseMechanism.
        epsilon: Privacy budget ε passed to the constructor.
        delta: Optional δ (used by the snapping selector).
        sensitivity: Optional L1 sensitivity (used by the geometric mechanism).
        rng: Optional seed, numpy Generator or RandomSource.
        name: Optional human readable name.
        calibrate: Whether to call calibrate() before returning.
    """
    if isinstance(mechanism, BaseMechanism):
        if calibrate and not mechanism.calibrated:
            _calibrate(mechanism, sensitivity, delta)
        return mechanism

    mech_cls = get_mechanism_class(mechanism)
    init_sig = inspect.signature(mech_cls.__init__)
    init_kwargs = _filter_kwargs(
        init_sig,
        {"delta": delta, "sensitivity": sensitivity, "rng": rng, "name": name},
    )
    instance = mech_cls(epsilon=epsilon, **init_kwargs)
    if calibrate:
        instance.calibrate()
    return instance
