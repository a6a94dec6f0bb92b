"""Immutable domain models for a routing problem.

All models are frozen dataclasses with slots. They hold plain Python
values only: nothing keeps a reference to the decoded JSON document
they were built from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, Optional, Tuple

# Capacity or demand along every goods dimension of the problem.
Amount = Tuple[int, ...]
Skills = FrozenSet[int]
# Square cost matrix, rows indexed by location index.
Matrix = Tuple[Tuple[int, ...], ...]


class JobType(Enum):
    """Role of a job in the problem."""

    SINGLE = auto()
    PICKUP = auto()
    DELIVERY = auto()


class StepType(Enum):
    """Kind of a step in a vehicle's pre-assigned plan."""

    START = auto()
    END = auto()
    BREAK = auto()
    JOB = auto()


@dataclass(frozen=True, slots=True)
class Coordinates:
    """A (longitude, latitude) pair, in the order found in documents."""

    lon: float
    lat: float


@dataclass(frozen=True, slots=True)
class Location:
    """A place, given as a matrix index, as coordinates, or as both.

    Attributes:
        index: Row/column in a caller-provided matrix
        coordinates: Geographic position, used for routing or geometry
    """

    index: Optional[int] = None
    coordinates: Optional[Coordinates] = None

    def __post_init__(self) -> None:
        if self.index is None and self.coordinates is None:
            raise ValueError("Location needs an index or coordinates")

    @property
    def user_index(self) -> bool:
        """Check if the index was supplied by the caller."""
        return self.index is not None

    @property
    def has_coordinates(self) -> bool:
        return self.coordinates is not None


@dataclass(frozen=True, slots=True, order=True)
class TimeWindow:
    """A [start, end] interval; ordering is by (start, end)."""

    start: int
    end: int


@dataclass(frozen=True, slots=True)
class ForcedService:
    """Caller-imposed timing of a plan step's service.

    The three constraints are independent; combinations are not
    cross-checked.
    """

    at: Optional[int] = None
    after: Optional[int] = None
    before: Optional[int] = None


@dataclass(frozen=True, slots=True)
class Break:
    """A vehicle break with its allowed time windows (sorted)."""

    id: int
    time_windows: Tuple[TimeWindow, ...]
    service: int = 0
    description: str = ""


@dataclass(frozen=True, slots=True)
class Job:
    """A single job or one leg of a shipment.

    Attributes:
        id: Caller id, unique among jobs of the same type
        location: Where the job takes place
        type: Single job, shipment pickup or shipment delivery
        service: Service duration
        delivery: Amount dropped at the location
        pickup: Amount collected at the location
        skills: Skills a vehicle needs to serve the job
        priority: Priority in [0, max_priority]
        time_windows: Allowed service windows, sorted by (start, end)
        description: Free text
    """

    id: int
    location: Location
    type: JobType = JobType.SINGLE
    service: int = 0
    delivery: Amount = ()
    pickup: Amount = ()
    skills: Skills = frozenset()
    priority: int = 0
    time_windows: Tuple[TimeWindow, ...] = ()
    description: str = ""


@dataclass(frozen=True, slots=True)
class VehicleStep:
    """One step of a vehicle's pre-assigned plan.

    START and END steps are boundary markers with no id. BREAK steps
    reference a break id; JOB steps reference a job id along with the
    job type the id belongs to.
    """

    step_type: StepType
    forced_service: ForcedService = field(default_factory=ForcedService)
    id: Optional[int] = None
    job_type: Optional[JobType] = None

    @classmethod
    def start(cls, forced_service: ForcedService) -> VehicleStep:
        return cls(StepType.START, forced_service)

    @classmethod
    def end(cls, forced_service: ForcedService) -> VehicleStep:
        return cls(StepType.END, forced_service)

    @classmethod
    def job(
        cls, job_type: JobType, step_id: int, forced_service: ForcedService
    ) -> VehicleStep:
        return cls(StepType.JOB, forced_service, step_id, job_type)

    @classmethod
    def break_(cls, step_id: int, forced_service: ForcedService) -> VehicleStep:
        return cls(StepType.BREAK, forced_service, step_id)


@dataclass(frozen=True, slots=True)
class Vehicle:
    """A vehicle with its constraints and optional pre-assigned plan.

    Attributes:
        id: Caller id, unique among vehicles
        start: Optional start location
        end: Optional end location
        capacity: Capacity along every amount dimension
        skills: Skills the vehicle provides
        time_window: Working hours
        breaks: Breaks sorted by their first time window
        description: Free text
        profile: Routing profile name declared for this vehicle
        steps: Pre-assigned plan, in caller order
    """

    id: int
    start: Optional[Location]
    end: Optional[Location]
    capacity: Amount
    skills: Skills
    time_window: TimeWindow
    breaks: Tuple[Break, ...] = ()
    description: str = ""
    profile: str = ""
    steps: Tuple[VehicleStep, ...] = ()
