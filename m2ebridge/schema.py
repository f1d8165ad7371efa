"""Schemas describing the configuration of every pipeline component."""

from __future__ import annotations

import copy
from typing import Any

from m2ebridge.filtras import builder, comparator, eraser, finder, limiter, nop, splitter, throttle

_FILTRA_SCHEMAS = {
    "comparator": comparator.SCHEMA,
    "finder": finder.SCHEMA,
    "eraser": eraser.SCHEMA,
    "builder": builder.SCHEMA,
    "splitter": splitter.SCHEMA,
    "limiter": limiter.SCHEMA,
    "nop": nop.SCHEMA,
    "throttle": throttle.SCHEMA,
}

_CONNECTOR_SCHEMAS: dict[str, Any] = {}


def get_schemas() -> dict[str, dict[str, Any]]:
    """Return all component schemas grouped as connectors and filtras."""
    return {
        "connectors": copy.deepcopy(_CONNECTOR_SCHEMAS),
        "filtras": copy.deepcopy(_FILTRA_SCHEMAS),
    }


def get_schema_by_type(type_name: str) -> dict[str, Any]:
    """Return the schema of the component named ``type_name``."""
    components = get_schemas()
    for group in ("connectors", "filtras"):
        if type_name in components[group]:
            return components[group][type_name]
    raise RuntimeError("Unknown type")