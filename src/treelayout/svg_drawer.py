"""Default drawer: renders a layout as a standalone SVG document."""
from __future__ import annotations

import math
import re
import xml.etree.ElementTree as ET
from typing import Optional

from .drawer import BBox, Drawer, DrawerError, merge_bbox
from .embedder import Position
from .measure import DEFAULT_FONT_FAMILY, TextMeasurer, shared_measurer

SVG_NS = "http://www.w3.org/2000/svg"
ET.register_namespace("", SVG_NS)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

NODE_STYLE = {"fill": "#ffffff", "stroke": "#333333", "stroke-width": "1.5"}
EMPHASIS_STYLE = {"fill": "#ffd966", "stroke": "#b45f06", "stroke-width": "2"}
EDGE_STYLE = {"stroke": "#777777", "stroke-width": "1"}

# Characters XML 1.0 cannot carry, even escaped.
_XML_INVALID = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _q(tag: str) -> str:
    return f"{{{SVG_NS}}}{tag}"


def _fmt(value: float) -> str:
    if math.isclose(value, round(value)):
        return str(int(round(value)))
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


class SvgDrawer(Drawer):
    """Circle plus label per node, a line per edge.

    Edges are kept in their own group ahead of the nodes group, so they always
    sit beneath the nodes whatever order the draw calls arrive in.
    """

    media_type = "image/svg+xml"
    binary = False

    def __init__(
        self,
        *,
        node_radius: float = 6.0,
        font_size: float = 12.0,
        margin: float = 20.0,
        background: str = "#fff",
        font_family: str = DEFAULT_FONT_FAMILY,
        measurer: Optional[TextMeasurer] = None,
    ) -> None:
        super().__init__()
        self.node_radius = node_radius
        self.font_size = font_size
        self.margin = margin
        self.background = background
        self.font_family = font_family
        self._measurer = measurer or shared_measurer(font_family)
        self._edges = ET.Element(_q("g"), {"class": "edges"})
        self._nodes = ET.Element(_q("g"), {"class": "nodes"})
        self._bbox: Optional[BBox] = None

    @property
    def bbox(self) -> Optional[BBox]:
        return self._bbox

    def _edge(self, parent: Position, child: Position) -> None:
        attrs = {
            "x1": _fmt(parent.x),
            "y1": _fmt(parent.y),
            "x2": _fmt(child.x),
            "y2": _fmt(child.y),
        }
        attrs.update(EDGE_STYLE)
        ET.SubElement(self._edges, _q("line"), attrs)
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
        if _XML_INVALID.search(label):
            raise DrawerError(f"label {label!r} contains characters not allowed in XML", drawer=self.name)

        r = self.node_radius
        group = ET.SubElement(
            self._nodes, _q("g"), {"class": "node emphasized" if emphasized else "node"}
        )
        circle = {"cx": _fmt(position.x), "cy": _fmt(position.y), "r": _fmt(r)}
        circle.update(EMPHASIS_STYLE if emphasized else NODE_STYLE)
        ET.SubElement(group, _q("circle"), circle)
        self._bbox = merge_bbox(
            self._bbox, (position.x - r, position.y - r, position.x + r, position.y + r)
        )

        if not label:
            return
        baseline = position.y + r + self.font_size
        text_attrs = {
            "x": _fmt(position.x),
            "y": _fmt(baseline),
            "text-anchor": "middle",
            "font-family": self.font_family,
            "font-size": _fmt(self.font_size),
        }
        if emphasized:
            text_attrs["font-weight"] = "bold"
        text = ET.SubElement(group, _q("text"), text_attrs)
        text.text = label

        width = self._measurer.measure(label, self.font_size, bold=emphasized)
        self._bbox = merge_bbox(
            self._bbox,
            (
                position.x - width / 2.0,
                position.y + r,
                position.x + width / 2.0,
                baseline + self.font_size * 0.25,
            ),
        )

    def _finish(self) -> str:
        svg_root = ET.Element(_q("svg"), {"version": "1.1"})
        if self._bbox is None:
            svg_root.set("width", "0")
            svg_root.set("height", "0")
            svg_root.set("viewBox", "0 0 0 0")
            return XML_DECLARATION + _pretty_xml(svg_root)

        min_x, min_y, max_x, max_y = self._bbox
        view_x = min_x - self.margin
        view_y = min_y - self.margin
        width = (max_x - min_x) + 2 * self.margin
        height = (max_y - min_y) + 2 * self.margin
        svg_root.set("width", _fmt(width))
        svg_root.set("height", _fmt(height))
        svg_root.set("viewBox", f"{_fmt(view_x)} {_fmt(view_y)} {_fmt(width)} {_fmt(height)}")

        color = (self.background or "").strip()
        if color and color.lower() not in {"none", "transparent"}:
            ET.SubElement(
                svg_root,
                _q("rect"),
                {
                    "x": _fmt(view_x),
                    "y": _fmt(view_y),
                    "width": _fmt(width),
                    "height": _fmt(height),
                    "fill": color,
                },
            )
        if len(self._edges):
            svg_root.append(self._edges)
        if len(self._nodes):
            svg_root.append(self._nodes)
        return XML_DECLARATION + _pretty_xml(svg_root)


def _pretty_xml(element: ET.Element) -> str:
    ET.indent(element, space="  ")
    return ET.tostring(element, encoding="unicode") + "\n"


__all__ = ["SvgDrawer", "SVG_NS"]
