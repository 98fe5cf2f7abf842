"""Secure discrete noise generation for differential privacy."""

from __future__ import annotations

from dpnoise.cdp.mechanisms import (
    GeometricSampler,
    SnappingSelector,
    TwoSidedGeometricSampler,
    get_granularity,
    min_bits,
    noise,
    select,
    snapped_binary_choice,
)
from dpnoise.core.utils import (
    GeneratorRandomSource,
    ParameterError,
    RandomSource,
    SecureRandomSource,
    ceil_power_of_two,
    create_random_source,
)

__version__ = "0.1.0"

__all__ = [
    "GeometricSampler",
    "SnappingSelector",
    "TwoSidedGeometricSampler",
    "get_granularity",
    "min_bits",
    "noise",
    "select",
    "snapped_binary_choice",
    "GeneratorRandomSource",
    "ParameterError",
    "RandomSource",
    "SecureRandomSource",
    "ceil_power_of_two",
    "create_random_source",
]
