"""
Light-weight registry mapping mechanism identifiers to implementations.

Responsibilities
  - Provide a single source of truth for mechanism lookups.
  - Normalise identifiers and aliases.

Limitations
  - Only includes mechanisms registered in MECHANISM_REGISTRY.
"""
# 说明：维护机制标识符与具体机制实现类映射关系的轻量级注册表模块。
# 职责：
# - 作为机制查找与工厂创建的单一事实来源
# - 提供机制标识符（含历史别名，如 "laplace" 指向二选一 snapping 选择器）的归一化与错误报告

from __future__ import annotations

import enum
from typing import Dict, Type

from dpnoise.core.privacy.base_mechanism import BaseMechanism
from dpnoise.core.utils.param_validation import ParameterError

from .noise import SecureGeometricMechanism
from .snapping import BinarySnappingMechanism


class MechanismType(str, enum.Enum):
    SECURE_GEOMETRIC = "secure_geometric"
    BINARY_SNAPPING = "binary_snapping"

    @classmethod
    def from_str(cls, value: str) -> "MechanismType":
        key = value.strip().lower().replace("-", "_")
        key = _ALIASES.get(key, key)
        return cls(key)


_ALIASES: Dict[str, str] = {
    "geometric": "secure_geometric",
    "discrete_laplace": "secure_geometric",
    "snapping": "binary_snapping",
    # 历史命名：该选择器并非经典拉普拉斯机制
    "laplace": "binary_snapping",
}

MECHANISM_REGISTRY: Dict[MechanismType, Type[BaseMechanism]] = {
    MechanismType.SECURE_GEOMETRIC: SecureGeometricMechanism,
    MechanismType.BINARY_SNAPPING: BinarySnappingMechanism,
}


def normalize_mechanism(mechanism: str | MechanismType) -> MechanismType:
    """Coerce string or enum to MechanismType, raising on unknown identifiers."""
    if isinstance(mechanism, MechanismType):
        return mechanism
    try:
        return MechanismType.from_str(str(mechanism))
    except ValueError as exc:
        raise ParameterError(f"unknown mechanism '{mechanism}'") from exc


def get_mechanism_class(mechanism: str | MechanismType) -> Type[BaseMechanism]:
    mech_type = normalize_mechanism(mechanism)
    if mech_type not in MECHANISM_REGISTRY:
        raise ParameterError(f"mechanism '{mech_type.value}' not registered")
    return MECHANISM_REGISTRY[mech_type]


def registered_mechanisms_snapshot() -> Dict[str, str]:
    """Snapshot of registered mechanisms for tooling or docs."""
    return {mech.value: cls.__name__ for mech, cls in MECHANISM_REGISTRY.items()}
