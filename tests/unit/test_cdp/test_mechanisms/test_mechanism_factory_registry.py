"""
Unit tests for mechanism registry and factory.
"""
# 说明：机制注册表与工厂方法的单元测试。
# 覆盖：
# - 注册表条目与别名（含历史命名 "laplace"）的归一化
# - 机制类查找与未知名称的错误分支
# - 工厂创建与自动校准，已有实例的按需校准

import pytest

from dpnoise.cdp.mechanisms import (
    MECHANISM_REGISTRY,
    BinarySnappingMechanism,
    MechanismType,
    SecureGeometricMechanism,
    create_mechanism,
    get_mechanism_class,
    normalize_mechanism,
    registered_mechanisms_snapshot,
)
from dpnoise.core.utils import ParameterError


def test_registry_contains_expected_mechanisms() -> None:
    assert MECHANISM_REGISTRY[MechanismType.SECURE_GEOMETRIC] is SecureGeometricMechanism
    assert MECHANISM_REGISTRY[MechanismType.BINARY_SNAPPING] is BinarySnappingMechanism


@pytest.mark.parametrize(
    "name, expected",
    [
        ("secure_geometric", MechanismType.SECURE_GEOMETRIC),
        ("Geometric", MechanismType.SECURE_GEOMETRIC),
        ("discrete-laplace", MechanismType.SECURE_GEOMETRIC),
        ("snapping", MechanismType.BINARY_SNAPPING),
        ("laplace", MechanismType.BINARY_SNAPPING),
        (MechanismType.BINARY_SNAPPING, MechanismType.BINARY_SNAPPING),
    ],
)
def test_normalize_mechanism(name, expected) -> None:
    assert normalize_mechanism(name) == expected


def test_unknown_mechanism_raises() -> None:
    with pytest.raises(ParameterError):
        normalize_mechanism("gaussian")
    with pytest.raises(ParameterError):
        get_mechanism_class("missing")


def test_snapshot_lists_classes() -> None:
    assert registered_mechanisms_snapshot() == {
        "secure_geometric": "SecureGeometricMechanism",
        "binary_snapping": "BinarySnappingMechanism",
    }


def test_factory_creates_and_calibrates_geometric() -> None:
    mech = create_mechanism("geometric", epsilon=0.5, sensitivity=2.0, rng=1)
    assert isinstance(mech, SecureGeometricMechanism)
    assert mech.calibrated is True
    assert mech.sensitivity == 2.0
    assert mech.granularity == 4.0 / 2**40


def test_factory_creates_snapping_with_delta() -> None:
    mech = create_mechanism(MechanismType.BINARY_SNAPPING, epsilon=1.0, delta=1.0, sensitivity=3.0)
    assert isinstance(mech, BinarySnappingMechanism)
    assert mech.calibrated is True
    assert mech.r == 8192.0


def test_factory_can_skip_calibration() -> None:
    mech = create_mechanism("snapping", epsilon=1.0, delta=0.5, calibrate=False)
    assert mech.calibrated is False


def test_factory_calibrates_existing_instance() -> None:
    mech = SecureGeometricMechanism(epsilon=1.0)
    returned = create_mechanism(mech, epsilon=1.0, sensitivity=8.0)
    assert returned is mech
    assert mech.calibrated is True
    assert mech.sensitivity == 8.0


@pytest.mark.parametrize("mechanism_type", list(MechanismType))
def test_serialized_mechanism_id_resolves_in_registry(mechanism_type: MechanismType) -> None:
    # 序列化中的 "mechanism" 字段可直接交回工厂重建同类机制
    original = create_mechanism(mechanism_type, epsilon=1.0, rng=1)
    mechanism_id = original.serialize()["mechanism"]
    assert normalize_mechanism(mechanism_id) is mechanism_type
    rebuilt = create_mechanism(mechanism_id, epsilon=1.0, rng=2)
    assert type(rebuilt) is type(original)
