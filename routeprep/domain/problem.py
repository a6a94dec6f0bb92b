"""Aggregate problem model handed over to the optimizer.

An Input is created empty with a fixed amount dimensionality, populated
by the input parser, and only read afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Set, Tuple

from ..ports.routing import RoutingPort
from .errors import InputError, RoutingError
from .models import Amount, Job, JobType, Location, Matrix, Vehicle


def _location_key(location: Location) -> Hashable:
    # Locations with a caller index are identified by that index alone.
    if location.user_index:
        return ("index", location.index)
    return ("coordinates", location.coordinates)


@dataclass
class Input:
    """All vehicles, jobs and shipments of one problem.

    Attributes:
        amount_size: Length of every amount vector in the problem
        vehicles: Vehicles in document order
        jobs: Single jobs and shipment legs, in insertion order
        matrix: Caller-provided cost matrix, if any
        routing: Backend used to compute costs when no matrix is given
        geometry: Whether route geometry is requested for the output
    """

    amount_size: int
    vehicles: List[Vehicle] = field(default_factory=list)
    jobs: List[Job] = field(default_factory=list)
    matrix: Optional[Matrix] = None
    routing: Optional[RoutingPort] = field(default=None, repr=False)
    geometry: bool = False

    _locations: List[Location] = field(default_factory=list, repr=False)
    _location_indices: Dict[Hashable, int] = field(default_factory=dict, repr=False)
    _shipments: List[Tuple[int, int]] = field(default_factory=list, repr=False)
    _vehicle_ids: Set[int] = field(default_factory=set, repr=False)
    _job_ids: Dict[JobType, Set[int]] = field(default_factory=dict, repr=False)
    _has_skills: bool = field(default=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self._job_ids = {job_type: set() for job_type in JobType}

    # ----------------
    # Population
    # ----------------
    def add_vehicle(self, vehicle: Vehicle) -> None:
        """Add a vehicle, registering its start and end locations.

        Raises:
            InputError: On a duplicate vehicle id or a capacity whose
                length differs from the problem amount size.
        """
        if vehicle.id in self._vehicle_ids:
            raise InputError(f"Duplicate vehicle id: {vehicle.id}.", key="id")
        self._check_amount(vehicle.capacity, "capacity")

        for location in (vehicle.start, vehicle.end):
            if location is not None:
                self._register_location(location)

        self._vehicle_ids.add(vehicle.id)
        self._has_skills = self._has_skills or bool(vehicle.skills)
        self.vehicles.append(vehicle)

    def add_job(self, job: Job) -> None:
        """Add a single job.

        Raises:
            InputError: If the job is a shipment leg, its id is already
                used by another single job, or an amount has the wrong
                length.
        """
        if job.type is not JobType.SINGLE:
            raise InputError(f"Wrong job type for job {job.id}.")
        self._store_job(job, "job")

    def add_shipment(self, pickup: Job, delivery: Job) -> None:
        """Add a linked pickup and delivery pair.

        Raises:
            InputError: If the legs have the wrong types, an id is
                already used by a job of the same type, or an amount
                has the wrong length.
        """
        if pickup.type is not JobType.PICKUP:
            raise InputError(f"Wrong type for pickup {pickup.id}.")
        if delivery.type is not JobType.DELIVERY:
            raise InputError(f"Wrong type for delivery {delivery.id}.")

        pickup_rank = self._store_job(pickup, "pickup")
        delivery_rank = self._store_job(delivery, "delivery")
        self._shipments.append((pickup_rank, delivery_rank))

    def set_matrix(self, matrix: Matrix) -> None:
        self.matrix = matrix

    def set_routing(self, routing: RoutingPort) -> None:
        self.routing = routing

    def set_geometry(self, geometry: bool) -> None:
        self.geometry = geometry

    # ----------------
    # Read access
    # ----------------
    @property
    def shipments(self) -> List[Tuple[Job, Job]]:
        """Return (pickup, delivery) pairs in insertion order."""
        return [(self.jobs[p], self.jobs[d]) for p, d in self._shipments]

    @property
    def locations(self) -> Tuple[Location, ...]:
        """Return every distinct location in registration order."""
        return tuple(self._locations)

    @property
    def has_skills(self) -> bool:
        return self._has_skills

    @property
    def has_jobs(self) -> bool:
        return any(job.type is JobType.SINGLE for job in self.jobs)

    @property
    def has_shipments(self) -> bool:
        return bool(self._shipments)

    @property
    def all_locations_have_coords(self) -> bool:
        return all(location.has_coordinates for location in self._locations)

    def index_of(self, location: Location) -> int:
        """Return the cost-matrix index of a registered location.

        With a caller-provided matrix this is the caller's index;
        otherwise it is the location's rank in ``locations``, matching
        the rows of the matrix computed by the routing backend.

        Raises:
            KeyError: If the location was never registered.
            InputError: If a matrix is provided and the location has no
                index into it.
        """
        rank = self._location_indices[_location_key(location)]
        if self.matrix is None:
            return rank
        if location.index is None:
            raise InputError("Missing location_index.", key="location_index")
        return location.index

    def get_matrix(self) -> Matrix:
        """Return the cost matrix for all registered locations.

        The caller-provided matrix is used when present; otherwise
        durations are requested from the attached routing backend.

        Raises:
            InputError: If a location index falls outside the provided
                matrix, or a location lacks coordinates in routing mode.
            RoutingError: If no routing backend is attached or the
                backend fails.
        """
        if self.matrix is not None:
            size = len(self.matrix)
            for location in self._locations:
                if location.index is None:
                    raise InputError("Missing location_index.", key="location_index")
                if location.index >= size:
                    raise InputError(
                        "location_index exceeding matrix size.",
                        key="location_index",
                    )
            return self.matrix

        if not self.all_locations_have_coords:
            raise InputError("Missing coordinates for routing engine.")
        if self.routing is None:
            raise RoutingError("No routing engine attached to problem.")

        self._logger.debug(
            "Requesting matrix from routing engine",
            extra={"profile": self.routing.profile, "size": len(self._locations)},
        )
        return self.routing.get_matrix(self._locations)

    # ----------------
    # Internal helpers
    # ----------------
    def _store_job(self, job: Job, role: str) -> int:
        known_ids = self._job_ids[job.type]
        if job.id in known_ids:
            raise InputError(f"Duplicate {role} id: {job.id}.", key="id")
        self._check_amount(job.delivery, "delivery")
        self._check_amount(job.pickup, "pickup")

        self._register_location(job.location)
        known_ids.add(job.id)
        self._has_skills = self._has_skills or bool(job.skills)
        self.jobs.append(job)
        return len(self.jobs) - 1

    def _check_amount(self, amount: Amount, key: str) -> None:
        if len(amount) != self.amount_size:
            raise InputError(
                f"Inconsistent {key} length: {len(amount)} and {self.amount_size}.",
                key=key,
            )

    def _register_location(self, location: Location) -> None:
        key = _location_key(location)
        if key in self._location_indices:
            return
        self._location_indices[key] = len(self._locations)
        self._locations.append(location)
