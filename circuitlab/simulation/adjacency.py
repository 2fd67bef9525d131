"""
simulation/adjacency.py

Derives the component-to-component graph from the wire list.
"""

import logging

logger = logging.getLogger(__name__)


def build_adjacency(components, wires):
    """
    Build the adjacency map used by the loop finder.

    Args:
        components: dict mapping component_id -> ComponentData
        wires: iterable of WireData

    Returns:
        dict mapping every component_id to the list of component_ids it is
        wired to. Each wire contributes one entry per direction, so parallel
        wires between the same pair appear more than once. Wires touching an
        open switch are left out (a broken path), as are wires whose far end
        no longer exists.
    """
    adjacency = {component_id: [] for component_id in components}

    for wire in wires:
        a = wire.start_component_id
        b = wire.end_component_id

        if a not in components or b not in components:
            missing = a if a not in components else b
            logger.debug("Dropping %s: endpoint %s is missing", wire.wire_id, missing)
            continue

        if components[a].is_open_switch or components[b].is_open_switch:
            continue

        adjacency[a].append(b)
        adjacency[b].append(a)

    return adjacency
