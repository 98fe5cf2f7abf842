"""
Exact-inversion geometric and two-sided geometric samplers.

Responsibilities:
    * draw from the geometric distribution with success probability
      ``1 - exp(-lambda)`` by binary-search inversion over the int64 range
    * compose a symmetric (discrete Laplace) sample from a geometric draw and
      a sign bit, with a single representation of zero

Every step compares a fresh uniform fraction against a conditional
probability instead of evaluating the inverse CDF once in floating point,
which is what keeps rounding artefacts out of the released distribution.
The ``log``/``log1p``/``exp``/``expm1`` forms below are load bearing; do not
rewrite them algebraically.
"""
# 说明：精确逆变换几何采样与双侧几何（离散拉普拉斯）采样。
# 职责：
# - sample_geometric：在 [0, INT64_MAX] 上用二分 + 条件概率比较完成逆变换采样
# - sample_two_sided_geometric：几何样本减一并配合符号位，拒绝“负零”以保证对称
# - GeometricSampler / TwoSidedGeometricSampler：持有注入随机源的对象封装

from __future__ import annotations

import math
from typing import Any, Optional

from dpnoise.core.utils.math_utils import INT64_MAX
from dpnoise.core.utils.param_validation import ParameterError, ensure_real
from dpnoise.core.utils.random import RandomSource, create_random_source, random_bool

# λ 过小时闭式逆函数病态
MIN_LAMBDA = math.ldexp(1.0, -59)

_LOG_HALF = math.log(0.5)


def _validate_lambda(lam: float) -> float:
    lam = ensure_real(lam, label="lambda")
    if math.isnan(lam) or lam <= MIN_LAMBDA:
        raise ParameterError(f"lambda must be greater than 2**-59, got {lam!r}")
    return lam


def _resolve(source: Optional[RandomSource]) -> RandomSource:
    return source if source is not None else create_random_source()


def sample_geometric(lam: float, source: Optional[RandomSource] = None) -> int:
    """Draw from the geometric distribution parameterised by ``p = 1 - exp(-lam)``.

    Returns an integer in ``[1, INT64_MAX]``; samples beyond the int64 range
    are truncated to ``INT64_MAX``.
    """
    lam = _validate_lambda(lam)
    source = _resolve(source)

    if source.random() > -math.expm1(-lam * float(INT64_MAX)):
        return INT64_MAX

    left = 0
    right = INT64_MAX
    while left + 1 < right:
        mid_estimate = math.ceil(
            left - (_LOG_HALF + math.log1p(math.exp(lam * float(left - right)))) / lam
        )
        # 夹到 (left, right) 内部，保证每步都有进展
        mid = min(max(mid_estimate, left + 1), right - 1)
        q = math.expm1(lam * float(left - mid)) / math.expm1(lam * float(left - right))
        if source.random() <= q:
            right = mid
        else:
            left = mid
    return right


def sample_two_sided_geometric(lam: float, source: Optional[RandomSource] = None) -> int:
    """Draw from the two-sided geometric distribution, ``P(x) ∝ exp(-lam * |x|)``."""
    source = _resolve(source)
    magnitude = 0
    positive = False
    while magnitude == 0 and not positive:
        magnitude = sample_geometric(lam, source) - 1
        positive = random_bool(source)
    # sample_geometric 的值域为 [1, INT64_MAX]，magnitude 非负，取反不会越出 int64
    if magnitude < 0:
        raise ParameterError("geometric sample outside its support")
    return magnitude if positive else -magnitude


class GeometricSampler:
    """Geometric sampler bound to an injected randomness source."""

    def __init__(self, rng: Optional[Any] = None):
        self._source = create_random_source(rng)

    def sample(self, lam: float) -> int:
        return sample_geometric(lam, self._source)


class TwoSidedGeometricSampler:
    """Two-sided geometric (discrete Laplace) sampler bound to a source."""

    def __init__(self, rng: Optional[Any] = None):
        self._source = create_random_source(rng)

    def sample(self, lam: float) -> int:
        return sample_two_sided_geometric(lam, self._source)
