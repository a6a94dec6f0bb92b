"""Field extractors for decoded problem documents.

Each extractor pulls one semantically typed value out of a JSON object
node (a ``dict`` produced by ``json.loads``). Extractors are total over
three cases: key present and valid (typed value returned), key present
and invalid (``InputError`` raised), key absent (documented default
returned, or ``InputError`` when the key is mandatory).

JSON typing follows a strict DOM: booleans are never numbers, "uint"
values are integers in [0, 2**32 - 1] and ids are integers in
[0, 2**64 - 1]. Numbers are finite and representable as doubles.
"""

from __future__ import annotations

import math
import sys
from typing import Any, List, Mapping, Optional

from ..domain.errors import InputError
from ..domain.models import (
    Amount,
    Coordinates,
    ForcedService,
    Skills,
    TimeWindow,
)

UINT_MAX = 2**32 - 1
UINT64_MAX = 2**64 - 1
DOUBLE_MAX = int(sys.float_info.max)

Node = Mapping[str, Any]


# ----------------
# JSON type predicates
# ----------------
def is_object(value: Any) -> bool:
    return isinstance(value, dict)


def is_array(value: Any) -> bool:
    return isinstance(value, list)


def is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return abs(value) <= DOUBLE_MAX
    return isinstance(value, float) and math.isfinite(value)


def is_uint(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= UINT_MAX
    )


def is_uint64(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= UINT64_MAX
    )


# ----------------
# Extractors
# ----------------
def get_coordinates(node: Node, key: str) -> Coordinates:
    """Return the [lon, lat] pair stored under ``key``.

    Extra trailing elements are ignored. The caller is expected to have
    asserted that ``key`` is present; a missing key fails like a
    malformed one.
    """
    value = node.get(key)
    if (
        not is_array(value)
        or len(value) < 2
        or not is_number(value[0])
        or not is_number(value[1])
    ):
        raise InputError(f"Invalid {key} array.", key=key)
    return Coordinates(lon=float(value[0]), lat=float(value[1]))


def get_string(node: Node, key: str) -> str:
    if key not in node:
        return ""
    value = node[key]
    if not isinstance(value, str):
        raise InputError(f"Invalid {key} value.", key=key)
    return value


def get_amount(node: Node, key: str, size: int) -> Amount:
    """Return the amount vector under ``key``, zeros of length ``size`` if absent."""
    if key not in node:
        return (0,) * size

    value = node[key]
    if not is_array(value):
        raise InputError(f"Invalid {key} array.", key=key)
    if len(value) != size:
        raise InputError(
            f"Inconsistent {key} length: {len(value)} and {size}.", key=key
        )
    for component in value:
        if not is_uint(component):
            raise InputError(f"Invalid {key} value.", key=key)
    return tuple(value)


def get_skills(node: Node) -> Skills:
    if "skills" not in node:
        return frozenset()

    value = node["skills"]
    if not is_array(value):
        raise InputError("Invalid skills object.", key="skills")
    for skill in value:
        if not is_uint(skill):
            raise InputError("Invalid skill value.", key="skills")
    return frozenset(value)


def get_service(node: Node) -> int:
    return _get_duration(node, "service") or 0


def get_priority(node: Node, max_priority: int) -> int:
    """Return the priority, 0 if absent.

    Raises:
        InputError: If the value is not an unsigned integer or exceeds
            ``max_priority``.
    """
    if "priority" not in node:
        return 0

    value = node["priority"]
    if not is_uint(value) or value > max_priority:
        raise InputError("Invalid priority value.", key="priority")
    return value


def get_time_window(value: Any) -> TimeWindow:
    """Build a time window from a JSON ``[start, end]`` array."""
    if (
        not is_array(value)
        or len(value) < 2
        or not is_uint(value[0])
        or not is_uint(value[1])
    ):
        raise InputError("Invalid time-window.", key="time_window")
    return TimeWindow(value[0], value[1])


def get_vehicle_time_window(node: Node, default: TimeWindow) -> TimeWindow:
    if "time_window" not in node:
        return default
    return get_time_window(node["time_window"])


def get_job_time_windows(node: Node, default: TimeWindow) -> List[TimeWindow]:
    """Return sorted job time windows, ``[default]`` when the key is absent.

    The node must already carry a validated ``id``.
    """
    if "time_windows" not in node:
        return [default]

    value = node["time_windows"]
    if not is_array(value) or not value:
        raise InputError(
            f"Invalid time_windows array for job {node['id']}.", key="time_windows"
        )
    return sorted(get_time_window(tw) for tw in value)


def get_break_time_windows(node: Node) -> List[TimeWindow]:
    """Return sorted break time windows; the key is mandatory for breaks."""
    value = node.get("time_windows")
    if not is_array(value) or not value:
        raise InputError(
            f"Invalid time_windows array for break {node['id']}.", key="time_windows"
        )
    return sorted(get_time_window(tw) for tw in value)


def get_forced_service(node: Node) -> ForcedService:
    return ForcedService(
        at=_get_duration(node, "service_at"),
        after=_get_duration(node, "service_after"),
        before=_get_duration(node, "service_before"),
    )


def _get_duration(node: Node, key: str) -> Optional[int]:
    if key not in node:
        return None
    value = node[key]
    if not is_uint(value):
        raise InputError(f"Invalid {key} value.", key=key)
    return value
