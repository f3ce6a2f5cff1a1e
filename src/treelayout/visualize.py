"""Label and emphasis hooks implemented by node payload types."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Tuple


class Visualize(ABC):
    """Mix into a node payload type to control how drawers present it."""

    @abstractmethod
    def visualize(self) -> str:
        """Return the label drawn for this node."""

    def emphasize(self) -> bool:
        """Return True to have drawers highlight this node."""
        return False


def describe(data: Any) -> Tuple[str, bool]:
    visualize = getattr(data, "visualize", None)
    if not callable(visualize):
        return ("" if data is None else str(data)), False
    label = visualize()
    emphasize = getattr(data, "emphasize", None)
    emphasized = bool(emphasize()) if callable(emphasize) else False
    return str(label), emphasized


__all__ = ["Visualize", "describe"]
