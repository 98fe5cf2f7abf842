"""
Unit tests for validation helpers and decorators.
"""
# 说明：参数验证工具（ensure / ensure_finite / ensure_positive / validate_arguments）的单元测试。

import math

import pytest

from dpnoise.core.utils import (
    ParameterError,
    ensure,
    ensure_finite,
    ensure_positive,
    ensure_real,
    positive,
    validate_arguments,
)


def test_parameter_error_is_value_error() -> None:
    assert issubclass(ParameterError, ValueError)


def test_ensure_passes_and_fails() -> None:
    ensure(True, "should not raise")
    with pytest.raises(ParameterError):
        ensure(False, "error")


def test_ensure_real_rejects_non_numbers() -> None:
    assert ensure_real(3) == 3.0
    with pytest.raises(ParameterError):
        ensure_real("3")
    with pytest.raises(ParameterError):
        ensure_real(True)


def test_ensure_real_rejects_ints_beyond_float_range() -> None:
    # 超出 binary64 范围的整数不应泄漏 OverflowError
    with pytest.raises(ParameterError):
        ensure_real(10**400)
    with pytest.raises(ParameterError):
        ensure_positive(-(10**400))


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_ensure_finite_rejects_non_finite(bad: float) -> None:
    with pytest.raises(ParameterError):
        ensure_finite(bad)


@pytest.mark.parametrize("bad", [0.0, -1.0, math.nan])
def test_ensure_positive_rejects(bad: float) -> None:
    with pytest.raises(ParameterError):
        ensure_positive(bad, label="epsilon")


def test_validate_arguments_decorator() -> None:
    @validate_arguments({"x": positive("x")})
    def double(x: float, y: float = 1.0) -> float:
        return 2 * x * y

    assert double(4) == 8.0
    assert double(x=2, y=3) == 12.0
    with pytest.raises(ParameterError):
        double(-1)
    with pytest.raises(ParameterError):
        double(x=0.0)
