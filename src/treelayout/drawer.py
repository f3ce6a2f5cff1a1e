"""Pluggable render targets for computed layouts."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple, Union

from .embedder import Position

BBox = Tuple[float, float, float, float]
Artifact = Union[str, bytes]


class DrawerError(Exception):
    """Raised by a drawer that cannot record or finish its output."""

    def __init__(self, message: str, *, drawer: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.drawer = drawer

    def __str__(self) -> str:
        if self.drawer:
            return f"{self.drawer}: {self.message}"
        return self.message


class Drawer(ABC):
    """Accumulates node and edge primitives, then closes them into an artifact.

    A drawer is single use: once :meth:`finalize` has run, further draw calls
    raise :class:`DrawerError`. Implementations fill in ``_node``, ``_edge``
    and ``_finish``.
    """

    media_type = "application/octet-stream"
    # True when finalize() yields bytes rather than text.
    binary = False

    def __init__(self) -> None:
        self._finalized = False

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def finalized(self) -> bool:
        return self._finalized

    def draw_node(self, position: Position, label: str, emphasized: bool = False) -> None:
        self._ensure_open()
        self._node(position, label, emphasized)

    def draw_edge(self, parent: Position, child: Position) -> None:
        self._ensure_open()
        self._edge(parent, child)

    def finalize(self) -> Artifact:
        self._ensure_open()
        self._finalized = True
        return self._finish()

    @abstractmethod
    def _node(self, position: Position, label: str, emphasized: bool) -> None:
        ...

    @abstractmethod
    def _edge(self, parent: Position, child: Position) -> None:
        ...

    @abstractmethod
    def _finish(self) -> Artifact:
        ...

    def _ensure_open(self) -> None:
        if self._finalized:
            raise DrawerError("drawer was already finalized", drawer=self.name)


def merge_bbox(current: Optional[BBox], new: Optional[BBox]) -> Optional[BBox]:
    if new is None:
        return current
    if current is None:
        return new
    return (
        min(current[0], new[0]),
        min(current[1], new[1]),
        max(current[2], new[2]),
        max(current[3], new[3]),
    )


__all__ = ["Artifact", "BBox", "Drawer", "DrawerError", "merge_bbox"]
