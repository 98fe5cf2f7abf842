"""
Granularity and bit-budget calculations for the secure geometric sampler.

Responsibilities:
    * choose the power-of-two resolution at which noise is generated
    * derive the geometric rate parameter lambda from (sensitivity, epsilon)
    * estimate the random-bit budget the binary-search sampler consumes

See "Secure Noise Generation" (Google differential privacy library docs)
for the analysis behind the constants.
"""
# 说明：安全几何采样器所需的粒度（granularity）与随机比特预算计算。
# 职责：
# - get_granularity：ceil_power_of_two(Δ/ε) / 2^40，粒度始终是精确的 2 的幂
# - geometric_lambda：λ = g·ε / (Δ + g)，noise 与 min_bits 共用同一计算
# - min_bits：ceil(log2(6·ln10·g/λ))，仅作诊断用途，采样本身不依赖它

from __future__ import annotations

import math

from dpnoise.core.utils.math_utils import ceil_power_of_two
from dpnoise.core.utils.param_validation import ParameterError, positive, validate_arguments

# 2^40
GRANULARITY_PARAM = float(2**40)

# 安全性证明中使用的尾部界
_TAIL_BOUND = 6.0 * math.log(10.0)


@validate_arguments({"l1_sensitivity": positive("l1_sensitivity"), "epsilon": positive("epsilon")})
def get_granularity(l1_sensitivity: float, epsilon: float) -> float:
    """Return the power-of-two granularity for ``(l1_sensitivity, epsilon)``."""
    ratio = l1_sensitivity / epsilon
    if math.isinf(ratio):
        raise ParameterError("l1_sensitivity / epsilon overflows")
    return ceil_power_of_two(ratio) / GRANULARITY_PARAM


def geometric_lambda(l1_sensitivity: float, epsilon: float, granularity: float) -> float:
    return granularity * epsilon / (l1_sensitivity + granularity)


def min_bits(l1_sensitivity: float, epsilon: float) -> int:
    """Minimum number of random bits the sampler needs for the target bias bound.

    Computed as ``ceil(log2(6 ln(10) * granularity / lambda))``.
    """
    granularity = get_granularity(l1_sensitivity, epsilon)
    lam = geometric_lambda(l1_sensitivity, epsilon, granularity)
    if lam <= 0.0:
        raise ParameterError("derived lambda underflowed to zero")
    return max(0, math.ceil(math.log2(_TAIL_BOUND * granularity / lam)))
