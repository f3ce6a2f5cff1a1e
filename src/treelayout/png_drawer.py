"""Bitmap drawer rendering a layout to PNG with Pillow."""
from __future__ import annotations

import io
import math
from dataclasses import dataclass
from typing import List, Optional

from PIL import Image, ImageDraw

from .drawer import BBox, Drawer, merge_bbox
from .embedder import Position
from .measure import DEFAULT_FONT_FAMILY, TextMeasurer, shared_measurer


@dataclass
class _NodeMark:
    position: Position
    label: str
    emphasized: bool
    label_width: float


class PngDrawer(Drawer):
    """Collects primitives and paints them once the canvas size is known."""

    media_type = "image/png"
    binary = True

    def __init__(
        self,
        *,
        node_radius: float = 6.0,
        font_size: float = 12.0,
        margin: float = 20.0,
        scale: float = 1.0,
        background: str = "white",
        font_family: str = DEFAULT_FONT_FAMILY,
        measurer: Optional[TextMeasurer] = None,
    ) -> None:
        super().__init__()
        if scale <= 0:
            raise ValueError(f"scale must be > 0, got {scale!r}")
        self.node_radius = node_radius
        self.font_size = font_size
        self.margin = margin
        self.scale = scale
        self.background = background
        self._measurer = measurer or shared_measurer(font_family)
        self._edges: List[tuple] = []
        self._nodes: List[_NodeMark] = []
        self._bbox: Optional[BBox] = None

    def _edge(self, parent: Position, child: Position) -> None:
        self._edges.append((parent, child))
        self._bbox = merge_bbox(
            self._bbox,
            (
                min(parent.x, child.x),
                min(parent.y, child.y),
                max(parent.x, child.x),
                max(parent.y, child.y),
            ),
        )

    def _node(self, position: Position, label: str, emphasized: bool) -> None:
        r = self.node_radius
        width = self._measurer.measure(label, self.font_size, bold=emphasized)
        self._nodes.append(_NodeMark(position, label, emphasized, width))
        self._bbox = merge_bbox(
            self._bbox, (position.x - r, position.y - r, position.x + r, position.y + r)
        )
        if label:
            self._bbox = merge_bbox(
                self._bbox,
                (
                    position.x - width / 2.0,
                    position.y + r,
                    position.x + width / 2.0,
                    position.y + r + self.font_size * 1.25,
                ),
            )

    def _finish(self) -> bytes:
        if self._bbox is None:
            image = Image.new("RGB", (1, 1), self.background)
            return _png_bytes(image)

        min_x, min_y, max_x, max_y = self._bbox
        s = self.scale
        width = max(1, int(math.ceil((max_x - min_x + 2 * self.margin) * s)))
        height = max(1, int(math.ceil((max_y - min_y + 2 * self.margin) * s)))
        image = Image.new("RGB", (width, height), self.background)
        draw = ImageDraw.Draw(image)

        def px(pos: Position) -> tuple:
            return ((pos.x - min_x + self.margin) * s, (pos.y - min_y + self.margin) * s)

        for parent, child in self._edges:
            draw.line([px(parent), px(child)], fill="#777777", width=max(1, int(round(s))))

        r = self.node_radius * s
        for mark in self._nodes:
            cx, cy = px(mark.position)
            fill, outline = ("#ffd966", "#b45f06") if mark.emphasized else ("#ffffff", "#333333")
            draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=fill, outline=outline, width=2)
            if mark.label:
                font = self._measurer.font(self.font_size * s, bold=mark.emphasized)
                draw.text((cx - mark.label_width * s / 2.0, cy + r), mark.label, fill="#000000", font=font)
        return _png_bytes(image)


def _png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


__all__ = ["PngDrawer"]
