"""
Pure Python data models for circuitlab.

This package contains Qt-free data classes that represent circuit elements.
All models use only Python standard library types (no PyQt6 dependencies).
"""

from .component import (
    COMPONENT_COLORS,
    DEFAULT_PROPERTIES,
    EDITABLE_FIELDS,
    ID_PREFIXES,
    POWERED_EPSILON,
    ComponentData,
    ComponentKind,
    Terminal,
)
from .errors import CircuitError, InvalidEditError, MissingEndpointError, SelfConnectionError
from .topology import TopologyModel
from .wire import WireData

__all__ = [
    "TopologyModel",
    "ComponentData",
    "ComponentKind",
    "Terminal",
    "WireData",
    "COMPONENT_COLORS",
    "DEFAULT_PROPERTIES",
    "EDITABLE_FIELDS",
    "ID_PREFIXES",
    "POWERED_EPSILON",
    "CircuitError",
    "SelfConnectionError",
    "InvalidEditError",
    "MissingEndpointError",
]
