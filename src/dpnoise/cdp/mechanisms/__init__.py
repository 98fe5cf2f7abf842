"""Secure discrete noise mechanisms and their building blocks."""
from .granularity import GRANULARITY_PARAM, geometric_lambda, get_granularity, min_bits
from .geometric import (
    MIN_LAMBDA,
    GeometricSampler,
    TwoSidedGeometricSampler,
    sample_geometric,
    sample_two_sided_geometric,
)
from .noise import SecureGeometricMechanism, noise
from .snapping import (
    BinarySnappingMechanism,
    SnappingSelector,
    k,
    r,
    round_to_nearest_multiple,
    select,
    snapped_binary_choice,
    snapping_probability,
)
from .mechanism_registry import (
    MECHANISM_REGISTRY,
    MechanismType,
    get_mechanism_class,
    normalize_mechanism,
    registered_mechanisms_snapshot,
)
from .mechanism_factory import create_mechanism

__all__ = [
    "GRANULARITY_PARAM",
    "geometric_lambda",
    "get_granularity",
    "min_bits",
    "MIN_LAMBDA",
    "GeometricSampler",
    "TwoSidedGeometricSampler",
    "sample_geometric",
    "sample_two_sided_geometric",
    "SecureGeometricMechanism",
    "noise",
    "BinarySnappingMechanism",
    "SnappingSelector",
    "k",
    "r",
    "round_to_nearest_multiple",
    "select",
    "snapped_binary_choice",
    "snapping_probability",
    "MECHANISM_REGISTRY",
    "MechanismType",
    "get_mechanism_class",
    "normalize_mechanism",
    "registered_mechanisms_snapshot",
    "create_mechanism",
]
