"""
simulation/loop_finder.py

Enumerates simple cycles that start and end at a voltage source.

This is a depth-bounded backtracking search, not mesh analysis: every loop
returned is solved on its own by the lumped solver.
"""

from typing import Optional


def find_loops(adjacency: dict[str, list[str]], source_id: str, max_depth: Optional[int] = None) -> list[list[str]]:
    """
    Find every simple loop through ``source_id``.

    Args:
        adjacency: component_id -> neighbour ids, as built by build_adjacency().
        source_id: The battery the loops must start and end at.
        max_depth: Recursion limit. Defaults to the component count + 1, which
            is longer than any simple cycle, so the bound never cuts a real loop.

    Returns:
        Loops as lists of component ids beginning with the source and without
        a trailing copy of it. A cycle and its reverse traversal are the same
        loop; only the first one found is kept.
    """
    if source_id not in adjacency:
        return []
    if max_depth is None:
        max_depth = len(adjacency) + 1

    loops: list[list[str]] = []
    seen: set[tuple[str, ...]] = set()
    path = [source_id]
    visited = {source_id}

    def record(loop: list[str]) -> None:
        key = tuple(loop)
        reverse = (loop[0],) + tuple(reversed(loop[1:]))
        if key in seen or reverse in seen:
            return
        seen.add(key)
        loops.append(list(loop))

    def visit(node: str, depth: int) -> None:
        if depth > max_depth:
            return
        # Parallel wires repeat a neighbour; one visit per neighbour is enough
        for neighbour in dict.fromkeys(adjacency.get(node, ())):
            if neighbour == source_id:
                hops = len(path)
                # Going straight back needs a second, parallel wire to close the loop
                if hops >= 3 or (hops == 2 and adjacency[node].count(source_id) >= 2):
                    record(path)
                continue
            if neighbour in visited:
                continue
            visited.add(neighbour)
            path.append(neighbour)
            visit(neighbour, depth + 1)
            path.pop()
            visited.discard(neighbour)

    visit(source_id, 1)
    return loops
