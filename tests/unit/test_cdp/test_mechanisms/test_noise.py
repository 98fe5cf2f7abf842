"""
Unit tests for secure integer noise generation.
"""
# 说明：noise(...) 与 SecureGeometricMechanism 的单元测试。
# 覆盖：
# - noise：返回 int64 范围内整数；(1, 1) 下的均值≈0、方差与 λ 推导一致
# - 粒度 > 1 时输出恒为粒度的整数倍（精确整数乘法）
# - 非法参数直接抛 ParameterError，绝不回退为零噪声
# - 相同种子下结果可复现
# - SecureGeometricMechanism：校准参数、容器类型保持、非整数输入拒绝、序列化往返

import math

import numpy as np
import pytest

from dpnoise.cdp.mechanisms.granularity import geometric_lambda, get_granularity
from dpnoise.cdp.mechanisms.noise import SecureGeometricMechanism, noise
from dpnoise.core.privacy.base_mechanism import NotCalibratedError
from dpnoise.core.utils import INT64_MAX, INT64_MIN, GeneratorRandomSource, ParameterError


def test_noise_returns_int(seeded_source) -> None:
    value = noise(1.0, 1.0, seeded_source)
    assert isinstance(value, int)
    assert INT64_MIN <= value <= INT64_MAX


def test_noise_uses_secure_default() -> None:
    assert isinstance(noise(1.0, 1.0), int)


def test_noise_is_reproducible_with_same_seed() -> None:
    a = GeneratorRandomSource(2024)
    b = GeneratorRandomSource(2024)
    assert [noise(2.0, 0.5, a) for _ in range(20)] == [noise(2.0, 0.5, b) for _ in range(20)]


@pytest.mark.parametrize(
    "sensitivity, epsilon", [(0.0, 1.0), (1.0, 0.0), (-1.0, 1.0), (1.0, math.nan), (10**400, 1.0), (1.0, 10**400)]
)
def test_noise_rejects_invalid_parameters(sensitivity: float, epsilon: float, seeded_source) -> None:
    with pytest.raises(ParameterError):
        noise(sensitivity, epsilon, seeded_source)


def test_noise_mean_and_variance() -> None:
    source = GeneratorRandomSource(777)
    draws = 20000
    values = np.array([noise(1.0, 1.0, source) for _ in range(draws)], dtype=float)
    granularity = get_granularity(1.0, 1.0)
    lam = geometric_lambda(1.0, 1.0, granularity)
    q = math.exp(-lam)
    # 双侧几何方差 2q/(1-q)^2，乘以粒度平方，再加舍入到整数的 1/12
    expected_variance = granularity**2 * 2.0 * q / math.expm1(-lam) ** 2 + 1.0 / 12.0
    assert abs(values.mean()) < 0.06
    assert values.var() == pytest.approx(expected_variance, abs=0.25)


def test_integer_granularity_yields_exact_multiples(seeded_source) -> None:
    sensitivity = 2.0**45
    granularity = get_granularity(sensitivity, 1.0)
    assert granularity == 32.0
    for _ in range(50):
        assert noise(sensitivity, 1.0, seeded_source) % 32 == 0


@pytest.fixture
def mechanism() -> SecureGeometricMechanism:
    return SecureGeometricMechanism(epsilon=1.0, sensitivity=1.0, rng=5)


def test_calibrate_sets_parameters(mechanism: SecureGeometricMechanism) -> None:
    mechanism.calibrate()
    assert mechanism.granularity == 2.0**-40
    assert mechanism.lam == pytest.approx(2.0**-40)
    assert mechanism.min_bits == 4
    assert mechanism.serialize()["meta"]["distribution"] == "two_sided_geometric"


def test_calibrate_accepts_sensitivity_override(mechanism: SecureGeometricMechanism) -> None:
    mechanism.calibrate(sensitivity=4.0)
    assert mechanism.sensitivity == 4.0
    assert mechanism.granularity == 4.0 / 2**40
    with pytest.raises(ParameterError):
        mechanism.calibrate(sensitivity=0.0)


def test_randomise_requires_calibration(mechanism: SecureGeometricMechanism) -> None:
    with pytest.raises(NotCalibratedError):
        mechanism.randomise(1)


def test_randomise_preserves_container_types(mechanism: SecureGeometricMechanism) -> None:
    mechanism.calibrate()
    assert isinstance(mechanism.randomise(5), int)
    assert isinstance(mechanism.randomise(np.int64(5)), int)
    noisy_list = mechanism.randomise([1, 2, 3])
    assert isinstance(noisy_list, list) and len(noisy_list) == 3
    noisy_tuple = mechanism.randomise((1, 2))
    assert isinstance(noisy_tuple, tuple) and len(noisy_tuple) == 2
    arr = np.zeros((2, 3), dtype=np.int32)
    noisy_arr = mechanism.randomise(arr)
    assert noisy_arr.shape == (2, 3)
    assert np.issubdtype(noisy_arr.dtype, np.integer)


@pytest.mark.parametrize("bad", [1.5, [1, 2.5], np.zeros(3), "7", True])
def test_randomise_rejects_non_integers(mechanism: SecureGeometricMechanism, bad) -> None:
    mechanism.calibrate()
    with pytest.raises(ParameterError):
        mechanism.randomise(bad)


def test_randomise_is_seed_reproducible() -> None:
    a = SecureGeometricMechanism(epsilon=0.5, sensitivity=1.0, rng=8).calibrate()
    b = SecureGeometricMechanism(epsilon=0.5, sensitivity=1.0, rng=8).calibrate()
    assert a.randomise([10, 20, 30]) == b.randomise([10, 20, 30])


def test_serialize_roundtrip(mechanism: SecureGeometricMechanism) -> None:
    mechanism.calibrate()
    data = mechanism.serialize()
    assert "rng" not in data
    restored = SecureGeometricMechanism.deserialize(data)
    assert restored.sensitivity == mechanism.sensitivity
    assert restored.granularity == mechanism.granularity
    assert restored.lam == mechanism.lam
    assert restored.calibrated is True
    assert SecureGeometricMechanism.from_json(mechanism.to_json()).min_bits == mechanism.min_bits
