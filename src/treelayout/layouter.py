"""Runs the layout, feeds a drawer and persists what it produces."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple, Union

from .drawer import Artifact, Drawer
from .embedder import LayoutConfig, Position, compute
from .svg_drawer import SvgDrawer
from .tree import TreeSnapshot
from .visualize import describe

logger = logging.getLogger(__name__)

DrawerSpec = Union[Drawer, Callable[[], Drawer], None]
OutputTarget = Union[str, "os.PathLike[str]", Any, None]


@dataclass
class LayouterError(Exception):
    code: str
    message: str
    drawer: Optional[str] = None
    path: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class Layouter:
    """Configured pipeline for one tree.

    ``drawer`` may be a ready :class:`Drawer` (usable for a single write) or a
    zero-argument factory such as a drawer class; ``SvgDrawer`` is the default.
    ``output`` may be ``None`` (artifact only returned), a filesystem path
    (overwritten) or any object with a ``write`` method.
    """

    def __init__(
        self,
        tree: TreeSnapshot,
        *,
        config: Optional[LayoutConfig] = None,
        drawer: DrawerSpec = None,
        output: OutputTarget = None,
    ) -> None:
        if output is not None and not _is_path(output) and not callable(getattr(output, "write", None)):
            raise TypeError(
                f"output must be a path, a writable object or None, got {type(output).__name__}"
            )
        self.tree = tree
        self.config = config or LayoutConfig()
        self.drawer = drawer
        self.output = output

    def with_config(self, config: LayoutConfig) -> "Layouter":
        return Layouter(self.tree, config=config, drawer=self.drawer, output=self.output)

    def with_drawer(self, drawer: DrawerSpec) -> "Layouter":
        return Layouter(self.tree, config=self.config, drawer=drawer, output=self.output)

    def with_output(self, output: OutputTarget) -> "Layouter":
        return Layouter(self.tree, config=self.config, drawer=self.drawer, output=output)

    def with_file_path(self, path: Union[str, "os.PathLike[str]"]) -> "Layouter":
        return self.with_output(Path(path))

    def render(self) -> Artifact:
        """Lay out the tree and return the drawer's artifact without persisting it."""
        layout = compute(self.tree, self.config)
        nodes: List[Tuple[Position, str, bool]] = []
        for node_id in layout.order:
            label, emphasized = describe(self.tree.data(node_id))
            nodes.append((layout.positions[node_id], label, emphasized))

        drawer = self._make_drawer()
        logger.debug(
            "drawing %d nodes and %d edges with %s", len(nodes), len(layout.edges), drawer.name
        )
        try:
            for parent, child in layout.edges:
                drawer.draw_edge(parent, child)
            for position, label, emphasized in nodes:
                drawer.draw_node(position, label, emphasized)
            return drawer.finalize()
        except Exception as exc:
            raise LayouterError(
                "E_DRAWER",
                f"{drawer.name} failed: {exc}",
                drawer=drawer.name,
            ) from exc

    def write(self) -> Artifact:
        """Render and persist to the configured output; returns the artifact."""
        artifact = self.render()
        target = self.output
        if target is None:
            return artifact
        if _is_path(target):
            path = Path(target)
            logger.debug("writing layout to %s", path)
            try:
                if isinstance(artifact, bytes):
                    path.write_bytes(artifact)
                else:
                    path.write_text(artifact, encoding="utf-8")
            except OSError as exc:
                raise LayouterError(
                    "E_IO_WRITE",
                    f"failed to write output file: {path} ({exc})",
                    path=str(path),
                ) from exc
            return artifact
        try:
            target.write(artifact)
        # Closed streams raise ValueError, text/bytes mismatches raise TypeError.
        except (OSError, ValueError, TypeError) as exc:
            raise LayouterError("E_IO_WRITE", f"failed to write output: {exc}") from exc
        return artifact

    def _make_drawer(self) -> Drawer:
        spec = self.drawer
        if spec is None:
            return SvgDrawer()
        if isinstance(spec, Drawer):
            return spec
        drawer = spec()
        if not isinstance(drawer, Drawer):
            raise TypeError(f"drawer factory returned {type(drawer).__name__}, expected a Drawer")
        return drawer


def _is_path(value: Any) -> bool:
    return isinstance(value, (str, os.PathLike))


__all__ = ["Layouter", "LayouterError"]
