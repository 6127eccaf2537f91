"""Cycle detection over the resolved import graph."""

from __future__ import annotations

from typing import Mapping, Sequence

from .models import CircularDependency

_WHITE, _GRAY, _BLACK = 0, 1, 2


def find_cycles(adjacency: Mapping[str, Sequence[str]], max_depth: int = 10) -> list[list[str]]:
    """Three-color depth-first search for import cycles (iterative).

    Every edge into a node still on the current path closes a cycle, which
    is recorded as the path slice from that node to the top of the stack.
    Overlapping cycles are reported independently. The path never grows
    beyond ``max_depth`` nodes; nodes cut off by the cap are searched again
    later as roots of their own.

    Neighbors missing from ``adjacency`` are ignored.
    """
    color = {node: _WHITE for node in adjacency}
    cycles: list[list[str]] = []

    for root in adjacency:
        if color[root] != _WHITE:
            continue

        color[root] = _GRAY
        path = [root]
        call_stack = [(root, iter(adjacency[root]))]

        while call_stack:
            node, neighbors = call_stack[-1]
            descended = False
            for nxt in neighbors:
                state = color.get(nxt)
                if state is None or nxt == node:
                    continue
                if state == _GRAY:
                    cycles.append(path[path.index(nxt):])
                elif state == _WHITE and len(path) < max_depth:
                    color[nxt] = _GRAY
                    path.append(nxt)
                    call_stack.append((nxt, iter(adjacency[nxt])))
                    descended = True
                    break

            if not descended:
                call_stack.pop()
                path.pop()
                color[node] = _BLACK

    return cycles


def classify_cycles(cycles: list[list[str]]) -> list[CircularDependency]:
    """Two-file cycles are high severity, longer loops medium."""
    return [
        CircularDependency(cycle=list(c), severity="high" if len(c) == 2 else "medium")
        for c in cycles
    ]
