"""Arena-backed rooted, ordered tree plus the read-only view the layout consumes."""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional, Protocol, Sequence

NodeId = int


class TreeSnapshot(Protocol):
    """Read-only ordered tree view consumed by the layout engine."""

    def root_id(self) -> Optional[NodeId]:
        ...

    def children_ids(self, node_id: NodeId) -> Sequence[NodeId]:
        ...

    def data(self, node_id: NodeId) -> Any:
        ...

    def __len__(self) -> int:
        ...


class Tree:
    """Nodes live in flat lists indexed by ``NodeId``.

    Children are index lists and the parent is a plain index used for lookup
    only; the tree owns every payload.
    """

    def __init__(self) -> None:
        self._data: List[Any] = []
        self._children: List[List[NodeId]] = []
        self._parent: List[Optional[NodeId]] = []
        self._root: Optional[NodeId] = None

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, int) and 0 <= node_id < len(self._data)

    def root_id(self) -> Optional[NodeId]:
        return self._root

    def children_ids(self, node_id: NodeId) -> Sequence[NodeId]:
        self._check(node_id)
        return tuple(self._children[node_id])

    def parent_id(self, node_id: NodeId) -> Optional[NodeId]:
        self._check(node_id)
        return self._parent[node_id]

    def data(self, node_id: NodeId) -> Any:
        self._check(node_id)
        return self._data[node_id]

    def insert(self, data: Any, parent: Optional[NodeId] = None) -> NodeId:
        """Add a node under ``parent``, or as root when ``parent`` is None.

        Inserting a root into a non-empty tree pushes the old root down to be
        the first child of the new one.
        """
        if parent is not None:
            self._check(parent)
        node_id = len(self._data)
        self._data.append(data)
        self._children.append([])
        self._parent.append(parent)
        if parent is not None:
            self._children[parent].append(node_id)
            return node_id
        if self._root is not None:
            self._children[node_id].append(self._root)
            self._parent[self._root] = node_id
        self._root = node_id
        return node_id

    def move(self, node_id: NodeId, new_parent: NodeId) -> None:
        """Detach ``node_id`` and append it as the last child of ``new_parent``."""
        self._check(node_id)
        self._check(new_parent)
        old_parent = self._parent[node_id]
        if old_parent is None:
            raise ValueError("cannot move the root node")
        cursor: Optional[NodeId] = new_parent
        while cursor is not None:
            if cursor == node_id:
                raise ValueError(f"cannot move node {node_id} below its own subtree")
            cursor = self._parent[cursor]
        self._children[old_parent].remove(node_id)
        self._children[new_parent].append(node_id)
        self._parent[node_id] = new_parent

    def depth(self, node_id: NodeId) -> int:
        self._check(node_id)
        level = 0
        cursor = self._parent[node_id]
        while cursor is not None:
            level += 1
            cursor = self._parent[cursor]
        return level

    def pre_order(self) -> Iterator[NodeId]:
        if self._root is None:
            return
        stack = [self._root]
        while stack:
            node_id = stack.pop()
            yield node_id
            stack.extend(reversed(self._children[node_id]))

    def post_order(self) -> Iterator[NodeId]:
        if self._root is None:
            return
        stack = [(self._root, False)]
        while stack:
            node_id, expanded = stack.pop()
            if expanded:
                yield node_id
                continue
            stack.append((node_id, True))
            for child in reversed(self._children[node_id]):
                stack.append((child, False))

    @classmethod
    def from_nested(cls, obj: Mapping[str, Any], children_key: str = "children") -> "Tree":
        """Build a tree from nested mappings such as a JSON parse-tree export.

        Each mapping becomes a node whose payload is the mapping without
        ``children_key``.
        """
        tree = cls()
        if not obj:
            return tree
        pending: List[tuple] = [(obj, None)]
        while pending:
            item, parent = pending.pop()
            if not isinstance(item, Mapping):
                raise TypeError(f"tree nodes must be mappings, got {type(item).__name__}")
            payload: Dict[str, Any] = {k: v for k, v in item.items() if k != children_key}
            node_id = tree.insert(payload, parent)
            kids = item.get(children_key) or []
            for child in reversed(list(kids)):
                pending.append((child, node_id))
        return tree

    def _check(self, node_id: NodeId) -> None:
        if node_id not in self:
            raise KeyError(f"unknown node id: {node_id!r}")


__all__ = ["NodeId", "Tree", "TreeSnapshot"]
