"""Core privacy abstractions and shared exceptions."""
from .base_mechanism import (
    BaseMechanism,
    MechanismError,
    NotCalibratedError,
)

__all__ = [
    "BaseMechanism",
    "MechanismError",
    "NotCalibratedError",
]
