"""
Core abstractions shared by every mechanism implementation.

Responsibilities:
    * common parameter validation and randomness-source management
    * consistent calibration lifecycle
    * serialization helpers
    * purpose specific exceptions
"""
# 说明：定义本库所有机制共享的抽象基类与通用工具。
# 职责：
# - 通用参数校验与随机源（RandomSource）管理
# - 统一的校准生命周期（calibrate / require_calibrated）
# - 序列化辅助工具
# - 特定用途的异常类型

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

from dpnoise.core.utils.param_validation import ParameterError, ensure_finite, ensure_positive
from dpnoise.core.utils.random import RandomSource, create_random_source


# Exceptions -----------------------------------------------------------------
class MechanismError(Exception):
    """Base exception for mechanism lifecycle errors."""


class NotCalibratedError(MechanismError):
    """Raised when an operation requires prior calibration."""


# Base abstraction ------------------------------------------------------------
# 所有机制的抽象基类：
#  - 负责 epsilon/delta 校验与随机源管理
#  - 约定统一的校准生命周期
#  - 提供序列化/反序列化与 JSON 辅助
class BaseMechanism(ABC):
    """Abstract base class for all mechanisms."""

    def __init__(
        self,
        epsilon: float,
        delta: float = 0.0,
        rng: Optional[Any] = None,
        name: Optional[str] = None,
    ):
        self.epsilon: float = ensure_positive(epsilon, label="epsilon")
        self.delta: float = self._validate_delta(delta)
        self.name: str = name or self.__class__.__name__
        self._source: RandomSource = create_random_source(rng)
        self._calibrated: bool = False
        self._meta: Dict[str, Any] = {}

    @staticmethod
    def _validate_delta(delta: float) -> float:
        value = ensure_finite(delta, label="delta")
        if value < 0.0:
            raise ParameterError("delta must be a non-negative real number")
        return value

    # Calibration lifecycle ---------------------------------------------------
    def calibrate(self, **kwargs: Any) -> "BaseMechanism":
        """
        Common calibration entry point.
        - Args:
            - **kwargs: Mechanism specific calibration kwargs.
        - Returns:
            - self (allows chaining).
        """
        # 仅在子类成功完成参数推导后才切换生命周期标志位
        self._calibrate_parameters(**kwargs)
        self._calibrated = True
        return self

    @abstractmethod
    def _calibrate_parameters(self, **kwargs: Any) -> None:
        """Subclasses implement their own calibration logic."""

    @abstractmethod
    def randomise(self, value: Any) -> Any:
        """Apply the mechanism to the provided value."""

    def add_noise(self, value: Any) -> Any:
        """Alias for randomise."""
        return self.randomise(value)

    def reset_calibration(self) -> None:
        self._calibrated = False

    @property
    def calibrated(self) -> bool:
        return self._calibrated

    @property
    def source(self) -> RandomSource:
        return self._source

    # Serialization -----------------------------------------------------------
    def serialize(self) -> Dict[str, Any]:
        """Return a JSON serialisable snapshot of the mechanism (never its randomness)."""
        return {
            "class": f"{self.__class__.__module__}.{self.__class__.__qualname__}",
            "mechanism": self.mechanism_id,
            "name": self.name,
            "epsilon": self.epsilon,
            "delta": self.delta,
            "calibrated": bool(self._calibrated),
            "meta": dict(self._meta),
        }

    @classmethod
    def deserialize(cls: Type["BaseMechanism"], data: Dict[str, Any]) -> "BaseMechanism":
        if "epsilon" not in data:
            raise ParameterError("serialized data missing 'epsilon' field")
        instance = cls(epsilon=data["epsilon"], delta=data.get("delta", 0.0), rng=None, name=data.get("name"))
        instance._meta = dict(data.get("meta", {}))
        if data.get("calibrated"):
            instance.calibrate()
        return instance

    def to_json(self) -> str:
        return json.dumps(self.serialize(), default=str)

    @classmethod
    def from_json(cls: Type["BaseMechanism"], text: str) -> "BaseMechanism":
        return cls.deserialize(json.loads(text))

    # Utilities ---------------------------------------------------------------
    def require_calibrated(self) -> None:
        if not self._calibrated:
            raise NotCalibratedError("mechanism not calibrated; call calibrate() first")

    def reseed(self, seed: Optional[Any]) -> None:
        """Replace the randomness source with one constructed from ``seed``."""
        self._source = create_random_source(seed)

    @property
    def mechanism_id(self) -> str:
        """Stable identifier used in serialization and the registry."""
        name = self.__class__.__name__
        suffix = "Mechanism"
        if name.endswith(suffix) and name != suffix:
            name = name[: -len(suffix)]
        # 驼峰转下划线：SecureGeometric -> secure_geometric，与注册表键一致
        return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name).lower()

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} name={self.name} "
            f"eps={self.epsilon} delta={self.delta} calibrated={self._calibrated}>"
        )
