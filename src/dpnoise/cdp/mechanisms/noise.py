"""
Secure integer noise generation for integer-valued aggregates.

Responsibilities:
    * compute the granularity and rate for (l1_sensitivity, epsilon)
    * draw a two-sided geometric sample and scale it by the granularity
      without introducing floating point rounding for integer granularities
    * wrap the generator in the mechanism lifecycle (calibrate / randomise /
      serialize) for scalars, sequences and integer arrays
"""
# 说明：安全整数噪声生成（有限精度下的离散拉普拉斯）。
# 职责：
# - noise：粒度 → λ → 双侧几何样本 → 缩放；粒度 ≤ 1 时在浮点域舍入，粒度 > 1 时做精确整数乘法
# - SecureGeometricMechanism：按机制生命周期封装 noise，对整数标量、序列与整数数组逐元素加噪并保持容器类型
# 约定：任何失败都直接抛出异常，绝不返回零噪声或其它回退值

from __future__ import annotations

import numbers
from typing import Any, Dict, Optional

import numpy as np

from dpnoise.core.privacy.base_mechanism import BaseMechanism
from dpnoise.core.utils.logging import get_logger
from dpnoise.core.utils.math_utils import clamp_int64, round_half_away_from_zero
from dpnoise.core.utils.param_validation import ParameterError, ensure_positive
from dpnoise.core.utils.random import RandomSource, create_random_source

from .geometric import sample_two_sided_geometric
from .granularity import geometric_lambda, get_granularity, min_bits

logger = get_logger(__name__)


def _scale_sample(sample: int, granularity: float) -> int:
    if granularity <= 1.0:
        return clamp_int64(round_half_away_from_zero(sample * granularity))
    # granularity > 1 时必为精确的 2 的幂，整数乘法不引入舍入
    return clamp_int64(sample * int(granularity))


def noise(l1_sensitivity: float, epsilon: float, source: Optional[RandomSource] = None) -> int:
    """Return integer noise calibrated to ``(l1_sensitivity, epsilon)``.

    The value is a two-sided geometric sample with rate
    ``granularity * epsilon / (l1_sensitivity + granularity)``, scaled by the
    power-of-two granularity and kept within the signed 64-bit range.
    """
    granularity = get_granularity(l1_sensitivity, epsilon)
    lam = geometric_lambda(l1_sensitivity, epsilon, granularity)
    sample = sample_two_sided_geometric(lam, source if source is not None else create_random_source())
    return _scale_sample(sample, granularity)


class SecureGeometricMechanism(BaseMechanism):
    """Pure-DP discrete Laplace mechanism with exact, finite-precision sampling."""

    def __init__(
        self,
        epsilon: float = 1.0,
        sensitivity: float = 1.0,
        rng: Optional[Any] = None,
        name: Optional[str] = None,
    ):
        super().__init__(epsilon=epsilon, rng=rng, name=name)
        self.sensitivity = ensure_positive(sensitivity, label="sensitivity")
        self.granularity: Optional[float] = None
        self.lam: Optional[float] = None
        self.min_bits: Optional[int] = None

    # pylint: disable=arguments-differ
    def _calibrate_parameters(self, *, sensitivity: Optional[float] = None, **kwargs: Any) -> None:
        """Derive granularity, lambda and the random-bit budget."""
        del kwargs
        if sensitivity is not None:
            self.sensitivity = ensure_positive(sensitivity, label="sensitivity")
        self.granularity = get_granularity(self.sensitivity, self.epsilon)
        self.lam = geometric_lambda(self.sensitivity, self.epsilon, self.granularity)
        self.min_bits = min_bits(self.sensitivity, self.epsilon)
        self._meta["distribution"] = "two_sided_geometric"
        logger.debug(
            "calibrated %s: granularity=%r lambda=%r min_bits=%d",
            self.name,
            self.granularity,
            self.lam,
            self.min_bits,
        )

    def _draw(self) -> int:
        return noise(self.sensitivity, self.epsilon, self._source)

    def _noisy_int(self, item: Any) -> int:
        if isinstance(item, bool) or not isinstance(item, numbers.Integral):
            raise ParameterError("secure geometric mechanism only accepts integer values")
        return clamp_int64(int(item) + self._draw())

    def randomise(self, value: Any) -> Any:
        """Add secure integer noise to an integer scalar, sequence or array."""
        self.require_calibrated()
        if isinstance(value, np.ndarray):
            if not np.issubdtype(value.dtype, np.integer):
                raise ParameterError("secure geometric mechanism only accepts integer arrays")
            flat = [self._noisy_int(int(item)) for item in value.ravel()]
            return np.asarray(flat, dtype=np.int64).reshape(value.shape)
        if isinstance(value, (list, tuple)):
            noisy = [self._noisy_int(item) for item in value]
            return noisy if isinstance(value, list) else tuple(noisy)
        return self._noisy_int(value)

    def serialize(self) -> Dict[str, Any]:
        base = super().serialize()
        base.update(
            {
                "sensitivity": self.sensitivity,
                "granularity": self.granularity,
                "lambda": self.lam,
                "min_bits": self.min_bits,
            }
        )
        return base

    @classmethod
    def deserialize(cls, data: Dict[str, Any]) -> "SecureGeometricMechanism":
        if "epsilon" not in data:
            raise ParameterError("serialized data missing 'epsilon' field")
        inst = cls(
            epsilon=data["epsilon"],
            sensitivity=data.get("sensitivity", 1.0),
            rng=None,
            name=data.get("name"),
        )
        inst._meta = dict(data.get("meta", {}))
        if data.get("calibrated"):
            inst.calibrate()
        return inst
