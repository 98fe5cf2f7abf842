"""Entry point for the central differential privacy (CDP) noise package."""

from __future__ import annotations

from .mechanisms import (
    MECHANISM_REGISTRY,
    BinarySnappingMechanism,
    MechanismType,
    SecureGeometricMechanism,
    create_mechanism,
    get_mechanism_class,
    normalize_mechanism,
    registered_mechanisms_snapshot,
)

__all__: list[str] = [
    "MECHANISM_REGISTRY",
    "BinarySnappingMechanism",
    "MechanismType",
    "SecureGeometricMechanism",
    "create_mechanism",
    "get_mechanism_class",
    "normalize_mechanism",
    "registered_mechanisms_snapshot",
]
