"""Entity builders composing field extractors into domain objects.

Builders validate entity-level invariants (id presence, shipment
pairing, location availability and bounds) and return immutable
domain models. Like the extractors, they raise ``InputError`` on the
first violation.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..config import ParsingConfig
from ..domain.errors import InputError
from ..domain.models import (
    Amount,
    Break,
    JobType,
    Job,
    Location,
    Skills,
    TimeWindow,
    Vehicle,
    VehicleStep,
)
from .fields import (
    Node,
    get_amount,
    get_break_time_windows,
    get_coordinates,
    get_forced_service,
    get_job_time_windows,
    get_priority,
    get_service,
    get_skills,
    get_string,
    get_vehicle_time_window,
    is_array,
    is_object,
    is_uint,
    is_uint64,
)

logger = logging.getLogger(__name__)

# Step type strings referencing an id, with the job type they point to.
_ID_STEP_TYPES: Dict[str, Optional[JobType]] = {
    "job": JobType.SINGLE,
    "pickup": JobType.PICKUP,
    "delivery": JobType.DELIVERY,
    "break": None,
}


def default_time_window(config: ParsingConfig) -> TimeWindow:
    return TimeWindow(0, config.time_window_end)


# ----------------
# Entity checks
# ----------------
def check_id(node: Any, type_label: str) -> None:
    if not is_object(node):
        raise InputError(f"Invalid {type_label}.")
    if not is_uint64(node.get("id")):
        raise InputError(f"Invalid or missing id for {type_label}.", key="id")


def check_shipment(node: Any) -> None:
    if not is_object(node):
        raise InputError("Invalid shipment.")
    if not is_object(node.get("pickup")):
        raise InputError("Missing pickup for shipment.", key="pickup")
    if not is_object(node.get("delivery")):
        raise InputError("Missing delivery for shipment.", key="delivery")


def check_location_index(node: Node, type_label: str, matrix_size: int) -> None:
    """Check ``location_index`` against a provided matrix.

    The node must already carry a validated ``id``.
    """
    index = node.get("location_index")
    if not is_uint(index):
        raise InputError(
            f"Invalid location_index for {type_label} {node['id']}.",
            key="location_index",
        )
    if matrix_size <= index:
        raise InputError(
            f"location_index exceeding matrix size for {type_label} {node['id']}.",
            key="location_index",
        )


def check_location(node: Node, type_label: str) -> None:
    if not is_array(node.get("location")):
        raise InputError(
            f"Invalid location for {type_label} {node['id']}.", key="location"
        )


# ----------------
# Breaks and steps
# ----------------
def get_break(node: Any) -> Break:
    check_id(node, "break")
    return Break(
        id=node["id"],
        time_windows=tuple(get_break_time_windows(node)),
        service=get_service(node),
        description=get_string(node, "description"),
    )


def get_vehicle_breaks(node: Node) -> List[Break]:
    """Return the vehicle breaks sorted by their first time window.

    Breaks sharing the same first window keep their document order.
    """
    if "breaks" not in node:
        return []

    value = node["breaks"]
    if not is_array(value):
        raise InputError(f"Invalid breaks for vehicle {node['id']}.", key="breaks")

    breaks = [get_break(b) for b in value]
    breaks.sort(key=lambda b: (b.time_windows[0].start, b.time_windows[0].end))
    return breaks


def get_vehicle_steps(node: Node) -> List[VehicleStep]:
    """Return the vehicle's pre-assigned plan, in document order."""
    if "steps" not in node:
        return []

    value = node["steps"]
    if not is_array(value):
        raise InputError(f"Invalid steps for vehicle {node['id']}.", key="steps")

    steps: List[VehicleStep] = []
    for json_step in value:
        if not is_object(json_step):
            raise InputError(
                f"Invalid steps for vehicle {node['id']}.", key="steps"
            )

        forced_service = get_forced_service(json_step)
        type_str = get_string(json_step, "type")

        if type_str == "start":
            steps.append(VehicleStep.start(forced_service))
            continue
        if type_str == "end":
            steps.append(VehicleStep.end(forced_service))
            continue

        if not is_uint64(json_step.get("id")):
            raise InputError(
                f"Invalid id in steps for vehicle {node['id']}.", key="id"
            )
        if type_str not in _ID_STEP_TYPES:
            raise InputError(
                f"Invalid type in steps for vehicle {node['id']}.", key="type"
            )

        job_type = _ID_STEP_TYPES[type_str]
        if job_type is None:
            steps.append(VehicleStep.break_(json_step["id"], forced_service))
        else:
            steps.append(VehicleStep.job(job_type, json_step["id"], forced_service))

    return steps


# ----------------
# Vehicles
# ----------------
def _get_vehicle_location(node: Node, key: str) -> Optional[Location]:
    # Any combination of coordinates and index is legal.
    index_key = f"{key}_index"
    has_coords = key in node
    has_index = index_key in node

    if has_index and not is_uint(node[index_key]):
        raise InputError(
            f"Invalid {index_key} for vehicle {node['id']}.", key=index_key
        )

    if has_index:
        coordinates = get_coordinates(node, key) if has_coords else None
        return Location(index=node[index_key], coordinates=coordinates)
    if has_coords:
        return Location(coordinates=get_coordinates(node, key))
    return None


def get_vehicle(node: Any, amount_size: int, config: ParsingConfig) -> Vehicle:
    """Build a vehicle from its JSON object.

    Args:
        node: The vehicle object.
        amount_size: Problem-wide amount length, imposed on ``capacity``.
        config: Parsing defaults (time window, default profile).

    Raises:
        InputError: On any invalid vehicle field.
    """
    check_id(node, "vehicle")

    start = _get_vehicle_location(node, "start")
    end = _get_vehicle_location(node, "end")

    return Vehicle(
        id=node["id"],
        start=start,
        end=end,
        capacity=get_amount(node, "capacity", amount_size),
        skills=get_skills(node),
        time_window=get_vehicle_time_window(node, default_time_window(config)),
        breaks=tuple(get_vehicle_breaks(node)),
        description=get_string(node, "description"),
        profile=get_string(node, "profile") or config.default_profile,
        steps=tuple(get_vehicle_steps(node)),
    )


# ----------------
# Jobs and shipments
# ----------------
def normalize_legacy_amount(node: Node) -> Node:
    """Compatibility shim for the deprecated job ``amount`` key.

    When a job defines neither ``delivery`` nor ``pickup`` but carries
    ``amount``, that amount is a delivery. Returns a shallow copy with
    ``delivery`` set in that case, the node itself otherwise. Shipment
    legs never go through this shim.
    """
    if "amount" in node and "delivery" not in node and "pickup" not in node:
        normalized = dict(node)
        normalized["delivery"] = node["amount"]
        return normalized
    return node


def get_job_location(node: Node, type_label: str, matrix_size: Optional[int]) -> Location:
    """Validate and build the location of a job or shipment leg.

    With a provided matrix (``matrix_size`` set), ``location_index`` is
    mandatory and ``location`` coordinates are optional. Without one,
    ``location`` coordinates are mandatory.
    """
    if matrix_size is not None:
        check_location_index(node, type_label, matrix_size)
        coordinates = (
            get_coordinates(node, "location") if "location" in node else None
        )
        return Location(index=node["location_index"], coordinates=coordinates)

    check_location(node, type_label)
    return Location(coordinates=get_coordinates(node, "location"))


def get_job(
    node: Any, amount_size: int, matrix_size: Optional[int], config: ParsingConfig
) -> Job:
    """Build a single job, honouring the legacy ``amount`` alias."""
    check_id(node, "job")
    location = get_job_location(node, "job", matrix_size)
    node = normalize_legacy_amount(node)

    return Job(
        id=node["id"],
        location=location,
        type=JobType.SINGLE,
        service=get_service(node),
        delivery=get_amount(node, "delivery", amount_size),
        pickup=get_amount(node, "pickup", amount_size),
        skills=get_skills(node),
        priority=get_priority(node, config.max_priority),
        time_windows=tuple(get_job_time_windows(node, default_time_window(config))),
        description=get_string(node, "description"),
    )


def _get_shipment_leg(
    node: Node,
    job_type: JobType,
    amount_size: int,
    amount: Amount,
    skills: Skills,
    priority: int,
    matrix_size: Optional[int],
    config: ParsingConfig,
) -> Job:
    type_label = "pickup" if job_type is JobType.PICKUP else "delivery"
    check_id(node, type_label)
    location = get_job_location(node, type_label, matrix_size)

    empty = (0,) * amount_size
    return Job(
        id=node["id"],
        location=location,
        type=job_type,
        service=get_service(node),
        delivery=amount if job_type is JobType.DELIVERY else empty,
        pickup=amount if job_type is JobType.PICKUP else empty,
        skills=skills,
        priority=priority,
        time_windows=tuple(get_job_time_windows(node, default_time_window(config))),
        description=get_string(node, "description"),
    )


def get_shipment(
    node: Any, amount_size: int, matrix_size: Optional[int], config: ParsingConfig
) -> Tuple[Job, Job]:
    """Build the (pickup, delivery) legs of a shipment.

    Both legs share the shipment-level amount, skills and priority; the
    amount is picked up by the first leg and delivered by the second.
    """
    check_shipment(node)

    amount = get_amount(node, "amount", amount_size)
    skills = get_skills(node)
    priority = get_priority(node, config.max_priority)

    pickup = _get_shipment_leg(
        node["pickup"], JobType.PICKUP, amount_size, amount, skills, priority,
        matrix_size, config,
    )
    delivery = _get_shipment_leg(
        node["delivery"], JobType.DELIVERY, amount_size, amount, skills, priority,
        matrix_size, config,
    )
    logger.debug(
        "Shipment built", extra={"pickup": pickup.id, "delivery": delivery.id}
    )
    return pickup, delivery
