"""Entry point for the core library components."""

from __future__ import annotations

from .privacy import (
    BaseMechanism,
    MechanismError,
    NotCalibratedError,
)
from .utils import (
    GeneratorRandomSource,
    ParameterError,
    RandomSource,
    RuntimeConfig,
    SecureRandomSource,
    configure,
    create_random_source,
    get_config,
    get_logger,
)

__all__: list[str] = [
    "BaseMechanism",
    "MechanismError",
    "NotCalibratedError",
    "GeneratorRandomSource",
    "ParameterError",
    "RandomSource",
    "RuntimeConfig",
    "SecureRandomSource",
    "configure",
    "create_random_source",
    "get_config",
    "get_logger",
]
