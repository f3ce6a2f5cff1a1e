"""Public API for treelayout."""
from .drawer import Drawer, DrawerError
from .embedder import LayoutConfig, LayoutResult, Position, compute
from .layouter import Layouter, LayouterError
from .png_drawer import PngDrawer
from .svg_drawer import SvgDrawer
from .tree import NodeId, Tree, TreeSnapshot
from .visualize import Visualize, describe

__all__ = [
    "Drawer",
    "DrawerError",
    "LayoutConfig",
    "LayoutResult",
    "Layouter",
    "LayouterError",
    "NodeId",
    "PngDrawer",
    "Position",
    "SvgDrawer",
    "Tree",
    "TreeSnapshot",
    "Visualize",
    "compute",
    "describe",
]
