"""Shared utility helpers used across the core library."""

from .math_utils import (
    INT64_MAX,
    INT64_MIN,
    ceil_power_of_two,
    clamp_int64,
    is_power_of_two,
    round_half_away_from_zero,
)
from .config import (
    RuntimeConfig,
    get_config,
    configure,
)
from .logging import (
    get_logger,
    configure_logging,
    PrivacyFilter,
)
from .param_validation import (
    ensure,
    ensure_finite,
    ensure_positive,
    ensure_real,
    positive,
    validate_arguments,
    ParameterError,
)
from .random import (
    GeneratorRandomSource,
    RandomSource,
    SecureRandomSource,
    create_random_source,
    reset_configured_source,
    random_bool,
    split_random_source,
)

__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "ceil_power_of_two",
    "clamp_int64",
    "is_power_of_two",
    "round_half_away_from_zero",
    "RuntimeConfig",
    "get_config",
    "configure",
    "get_logger",
    "configure_logging",
    "PrivacyFilter",
    "ensure",
    "ensure_finite",
    "ensure_positive",
    "ensure_real",
    "positive",
    "validate_arguments",
    "ParameterError",
    "GeneratorRandomSource",
    "RandomSource",
    "SecureRandomSource",
    "create_random_source",
    "reset_configured_source",
    "random_bool",
    "split_random_source",
]
