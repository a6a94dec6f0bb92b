"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the ingested problem to routing engines:
- osrm-routed (HTTP)
- libosrm (in-process)
- openrouteservice (HTTP)
"""
