"""Parsing layer - Field extractors and entity builders.

- fields: one extractor per semantic field of the input schema
- builders: vehicles, breaks, steps, jobs and shipments
"""

from .builders import (
    check_id,
    check_location,
    check_location_index,
    check_shipment,
    get_job,
    get_shipment,
    get_vehicle,
    normalize_legacy_amount,
)

__all__ = [
    "check_id",
    "check_location",
    "check_location_index",
    "check_shipment",
    "get_job",
    "get_shipment",
    "get_vehicle",
    "normalize_legacy_amount",
]
