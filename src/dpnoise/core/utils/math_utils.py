"""
Exact numerical helpers shared by the samplers.

Responsibilities
  - Power-of-two rounding by exact exponent search.
  - Float-to-integer conversions with well defined rounding and saturation.
  - Signed 64-bit range constants.

Limitations
  - Operates on Python floats (IEEE-754 binary64) and ints only.
"""
# 说明：采样器共享的精确数值工具。
# 职责：
# - ceil_power_of_two：通过逐次调整指数（ldexp）精确求不小于 x 的最小 2 的幂，不经过 log 再取整
# - round_half_away_from_zero：与 Python 内置 round（银行家舍入）不同，半数远离零舍入
# - clamp_int64 / INT64_MAX / INT64_MIN：将无界 Python 整数饱和到有符号 64 位区间

from __future__ import annotations

import math
import numbers

from .param_validation import ParameterError, ensure_real

INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)

MAX_POWER_OF_TWO = math.ldexp(1.0, 1023)


def ceil_power_of_two(x: float) -> float:
    """Return the smallest power of two greater than or equal to ``x``.

    ``x`` must lie in ``[0, 2**1023]``. ``x == 0`` maps to ``1.0``.
    """
    if isinstance(x, numbers.Integral) and not isinstance(x, bool):
        # 整数按精确值处理，转换为 float 可能舍入到更小的值
        value = int(x)
        if value < 0 or value > 2**1023:
            raise ParameterError(f"x must lie in [0, 2**1023], got {value!r}")
        if value == 0:
            return 1.0
        return math.ldexp(1.0, (value - 1).bit_length())
    x = ensure_real(x, label="x")
    if math.isnan(x) or x < 0.0 or x > MAX_POWER_OF_TWO:
        raise ParameterError(f"x must lie in [0, 2**1023], got {x!r}")
    exponent = 0
    val = math.ldexp(1.0, exponent)
    while val < x:
        exponent += 1
        val = math.ldexp(1.0, exponent)
    if x > 0.0:
        # 0 < x < 1：向下逐次减半，直到下一次减半会小于 x
        while math.ldexp(1.0, exponent - 1) >= x:
            exponent -= 1
        val = math.ldexp(1.0, exponent)
    return val


def is_power_of_two(x: float) -> bool:
    if not math.isfinite(x) or x <= 0.0:
        return False
    mantissa, _ = math.frexp(x)
    return mantissa == 0.5


def round_half_away_from_zero(x: float) -> int:
    if not math.isfinite(x):
        raise ParameterError(f"cannot round non-finite value {x!r}")
    # abs(x) - floor(abs(x)) 是精确的；abs(x) + 0.5 在 0.49999999999999994 处会进位出错
    magnitude = abs(x)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return whole if x >= 0 else -whole


def clamp_int64(value: int) -> int:
    return max(INT64_MIN, min(INT64_MAX, value))
