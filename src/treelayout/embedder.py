"""Tree layout: assigns non-overlapping plane coordinates to every tree node.

The layout runs two linear passes over the tree's own child order:

- extents are summed bottom-up, a node reserving at least ``node_width`` and
  otherwise the packed width of its children plus the gaps between them;
- spans are handed out top-down, children packed left to right inside their
  parent's span, leaves centred in their span and parents centred over the
  midpoint of their first and last child.

Sibling spans are contiguous and disjoint, so no overlap correction is needed.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .tree import NodeId, TreeSnapshot

logger = logging.getLogger(__name__)

ORIENTATIONS = {"TB", "LR"}


@dataclass(frozen=True)
class LayoutConfig:
    # Uniform footprint of a node along the sibling axis.
    node_width: float = 80.0

    # Space kept between adjacent sibling subtrees.
    horizontal_gap: float = 20.0

    # Distance between depth levels.
    vertical_gap: float = 60.0

    # "TB": depth grows downwards along y. "LR": depth grows rightwards along x.
    orientation: str = "TB"

    def __post_init__(self) -> None:
        if not self.node_width > 0:
            raise ValueError(f"node_width must be > 0, got {self.node_width!r}")
        if self.horizontal_gap < 0:
            raise ValueError(f"horizontal_gap must be >= 0, got {self.horizontal_gap!r}")
        if self.vertical_gap < 0:
            raise ValueError(f"vertical_gap must be >= 0, got {self.vertical_gap!r}")
        if self.orientation not in ORIENTATIONS:
            raise ValueError(
                f"orientation must be one of {sorted(ORIENTATIONS)}, got {self.orientation!r}"
            )


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass
class LayoutResult:
    positions: Dict[NodeId, Position] = field(default_factory=dict)
    # (parent, child) pairs in document order of the child.
    edges: List[Tuple[Position, Position]] = field(default_factory=list)
    edge_ids: List[Tuple[NodeId, NodeId]] = field(default_factory=list)
    # Pre-order node sequence.
    order: List[NodeId] = field(default_factory=list)
    # Span each node was allotted along the sibling axis, as (low, high).
    spans: Dict[NodeId, Tuple[float, float]] = field(default_factory=dict)
    depths: Dict[NodeId, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.positions)

    @property
    def is_empty(self) -> bool:
        return not self.positions


def compute(tree: TreeSnapshot, config: Optional[LayoutConfig] = None) -> LayoutResult:
    """Lay out ``tree`` and return a fresh :class:`LayoutResult`.

    The tree is only read. An empty tree yields an empty result.
    """
    cfg = config or LayoutConfig()
    root = tree.root_id()
    if root is None:
        return LayoutResult()

    node_width = float(cfg.node_width)
    gap = float(cfg.horizontal_gap)

    order: List[NodeId] = []
    children: Dict[NodeId, List[NodeId]] = {}
    parent_of: Dict[NodeId, NodeId] = {}
    depths: Dict[NodeId, int] = {root: 0}
    stack = [root]
    while stack:
        node_id = stack.pop()
        order.append(node_id)
        kids = list(tree.children_ids(node_id))
        children[node_id] = kids
        for kid in kids:
            parent_of[kid] = node_id
            depths[kid] = depths[node_id] + 1
        stack.extend(reversed(kids))

    # Reverse pre-order reaches every child before its parent.
    extents: Dict[NodeId, float] = {}
    for node_id in reversed(order):
        kids = children[node_id]
        if not kids:
            extents[node_id] = node_width
            continue
        packed = sum(extents[kid] for kid in kids) + gap * (len(kids) - 1)
        extents[node_id] = max(node_width, packed)

    start = -node_width / 2.0
    spans: Dict[NodeId, Tuple[float, float]] = {root: (start, start + extents[root])}
    for node_id in order:
        cursor = spans[node_id][0]
        for kid in children[node_id]:
            spans[kid] = (cursor, cursor + extents[kid])
            cursor += extents[kid] + gap

    cross: Dict[NodeId, float] = {}
    for node_id in reversed(order):
        kids = children[node_id]
        if kids:
            cross[node_id] = (cross[kids[0]] + cross[kids[-1]]) / 2.0
        else:
            low, high = spans[node_id]
            cross[node_id] = (low + high) / 2.0

    positions: Dict[NodeId, Position] = {}
    for node_id in order:
        level = depths[node_id] * float(cfg.vertical_gap)
        if cfg.orientation == "TB":
            positions[node_id] = Position(cross[node_id], level)
        else:
            positions[node_id] = Position(level, cross[node_id])

    result = LayoutResult(positions=positions, order=order, spans=spans, depths=depths)
    for node_id in order[1:]:
        parent = parent_of[node_id]
        result.edge_ids.append((parent, node_id))
        result.edges.append((positions[parent], positions[node_id]))

    logger.debug(
        "laid out %d nodes, %d levels, root extent %s",
        len(order),
        max(depths.values()) + 1,
        extents[root],
    )
    return result


__all__ = ["LayoutConfig", "LayoutResult", "Position", "compute", "ORIENTATIONS"]
