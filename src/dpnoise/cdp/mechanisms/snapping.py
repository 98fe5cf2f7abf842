"""
Two-outcome randomized selection used for snapping / randomized rounding.

Responsibilities:
    * derive the bit-width ``k`` and power-of-two rounding granularity ``r``
      that keep the selection probabilities numerically exact
    * select 0 or 1 with probability proportional to
      ``exp(-|i| * r * epsilon / delta_r)`` for ``i`` in ``{0, 1}``

This is an exponential-mechanism-style binary choice, not the classical
Laplace mechanism; it serves as the tie-break primitive of a larger
snapping mechanism.
"""
# 说明：用于 snapping / 随机舍入的二选一随机选择原语（指数机制式加权）。
# 职责：
# - k：位宽 10 + floor(1 + log2(2/ε))；原先的致命断言改为可恢复的 ParameterError
# - r：最小值 floor(δ/ε·2^k)+1，再通过整数移位求不小于它的最小 2 的幂
# - round_to_nearest_multiple：将 δ 向上取整到 r 的倍数
# - snapped_binary_choice / SnappingSelector / BinarySnappingMechanism：按 p0 采样 0 或 1

from __future__ import annotations

import math
from typing import Any, Dict, Optional

from dpnoise.core.privacy.base_mechanism import BaseMechanism
from dpnoise.core.utils.logging import get_logger
from dpnoise.core.utils.param_validation import ParameterError, ensure_finite, ensure_real
from dpnoise.core.utils.random import RandomSource, create_random_source

logger = get_logger(__name__)

MIN_EPSILON = 1.0e-32

# 1 + log2(2/ε) 的上界
MAX_BIT_WIDTH_ADDITION = 107.0


def k(epsilon: float) -> int:
    """Bit-width ``10 + floor(1 + log2(2 / epsilon))``."""
    epsilon = ensure_finite(epsilon, label="epsilon")
    if epsilon < MIN_EPSILON:
        raise ParameterError(f"epsilon must be at least {MIN_EPSILON}, got {epsilon!r}")
    addition = 1.0 + math.log2(2.0 / epsilon)
    if addition >= MAX_BIT_WIDTH_ADDITION:
        raise ParameterError(f"epsilon {epsilon!r} requires a bit-width beyond the supported range")
    return 10 + math.floor(addition)


def r(delta: float, epsilon: float) -> float:
    """Smallest power of two at least ``floor(delta / epsilon * 2**k(epsilon)) + 1``."""
    delta = ensure_real(delta, label="delta")
    epsilon = ensure_real(epsilon, label="epsilon")
    if math.isnan(epsilon) or epsilon <= 0.0:
        raise ParameterError(f"epsilon must be positive, got {epsilon!r}")
    if math.isnan(delta) or delta < 0.0:
        raise ParameterError(f"delta must be non-negative, got {delta!r}")
    scaled = (delta / epsilon) * math.ldexp(1.0, k(epsilon))
    if not math.isfinite(scaled):
        raise ParameterError("delta / epsilon is too large")
    minimum = math.floor(scaled) + 1
    power_of_two = 1
    while power_of_two < minimum:
        power_of_two <<= 1
    try:
        return float(power_of_two)
    except OverflowError as exc:
        raise ParameterError("rounding granularity exceeds the float range") from exc


def round_to_nearest_multiple(delta: float, r: float) -> float:
    """Round ``delta`` up to the nearest multiple of ``r``."""
    return r * math.ceil(delta / r)


def snapping_probability(delta: float, epsilon: float) -> float:
    """Closed-form probability of selecting outcome 0."""
    delta = ensure_real(delta, label="delta")
    if math.isnan(delta) or delta <= 0.0:
        raise ParameterError(f"delta must be positive, got {delta!r}")
    granularity = r(delta, epsilon)
    delta_r = round_to_nearest_multiple(delta, granularity)
    weight_0 = 1.0
    weight_1 = math.exp(-granularity * epsilon / delta_r)
    return weight_0 / (weight_0 + weight_1)


def snapped_binary_choice(delta: float, epsilon: float, source: Optional[RandomSource] = None) -> int:
    """Return 0 with probability :func:`snapping_probability`, else 1."""
    prob_0 = snapping_probability(delta, epsilon)
    source = source if source is not None else create_random_source()
    return 0 if source.random() <= prob_0 else 1


select = snapped_binary_choice


class SnappingSelector:
    """Binary snapping selector bound to an injected randomness source."""

    def __init__(self, rng: Optional[Any] = None):
        self._source = create_random_source(rng)

    def select(self, delta: float, epsilon: float) -> int:
        return snapped_binary_choice(delta, epsilon, self._source)


class BinarySnappingMechanism(BaseMechanism):
    """Mechanism wrapper around the snapped binary choice for fixed (delta, epsilon)."""

    def __init__(
        self,
        epsilon: float = 1.0,
        delta: float = 1.0,
        rng: Optional[Any] = None,
        name: Optional[str] = None,
    ):
        super().__init__(epsilon=epsilon, delta=delta, rng=rng, name=name)
        self.k: Optional[int] = None
        self.r: Optional[float] = None
        self.delta_r: Optional[float] = None
        self.prob_0: Optional[float] = None

    # pylint: disable=arguments-differ
    def _calibrate_parameters(self, *, delta: Optional[float] = None, **kwargs: Any) -> None:
        del kwargs
        if delta is not None:
            self.delta = self._validate_delta(delta)
        if self.delta <= 0.0:
            raise ParameterError("delta must be positive for the snapping selector")
        self.k = k(self.epsilon)
        self.r = r(self.delta, self.epsilon)
        self.delta_r = round_to_nearest_multiple(self.delta, self.r)
        self.prob_0 = snapping_probability(self.delta, self.epsilon)
        self._meta["distribution"] = "binary_snapping"
        logger.debug("calibrated %s: k=%d r=%r p0=%r", self.name, self.k, self.r, self.prob_0)

    def randomise(self, value: Any = None) -> int:
        """Return a fresh choice in ``{0, 1}``; ``value`` is ignored."""
        del value
        self.require_calibrated()
        return 0 if self._source.random() <= self.prob_0 else 1

    def serialize(self) -> Dict[str, Any]:
        base = super().serialize()
        base.update({"k": self.k, "r": self.r, "delta_r": self.delta_r, "prob_0": self.prob_0})
        return base
