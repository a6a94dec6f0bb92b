"""Domain layer - Problem models, aggregate and errors.

This module contains the immutable entities produced by the parser,
the Input aggregate that owns them, and the typed errors raised while
building them.
"""

from .errors import ErrorKind, InputError, RoutePrepError, RoutingError
from .models import (
    Amount,
    Break,
    Coordinates,
    ForcedService,
    Job,
    JobType,
    Location,
    Matrix,
    Skills,
    StepType,
    TimeWindow,
    Vehicle,
    VehicleStep,
)
from .problem import Input

__all__ = [
    # Models
    "Amount",
    "Skills",
    "Matrix",
    "Coordinates",
    "Location",
    "TimeWindow",
    "ForcedService",
    "Break",
    "JobType",
    "Job",
    "StepType",
    "VehicleStep",
    "Vehicle",
    "Input",
    # Errors
    "ErrorKind",
    "RoutePrepError",
    "InputError",
    "RoutingError",
]
