"""
scene_xml/decoders.py

Decoders for the leaf elements of a scene document: points, plain colors
and colors located at a curve parameter.

Every decoder reads ``count`` same-tag children of a parent element in
document order and returns a fresh tuple.  Missing numeric attributes
default to 0; missing *elements* raise ``StructureError``.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Iterable, List, Tuple

from models import Color, ColorPoint, Point
from scene_xml.attributes import query_float
from scene_xml.errors import StructureError

log = logging.getLogger(__name__)

# (image_width, image_height)
ImageSize = Tuple[int, int]

# Lower-case channels hold [0, 1] values, upper-case ones [0, 255]
_CHANNELS = (("R", "r"), ("G", "g"), ("B", "b"))


# ───────────────────────────────────────────────
# Helpers
# ───────────────────────────────────────────────

def decode_channel(has_upper: bool, upper_val: float, lower_val: float) -> float:
    """Normalize one color channel.

    Args:
        has_upper: Whether the upper-case (0-255) attribute is present.
        upper_val: Value of the upper-case attribute.
        lower_val: Value of the lower-case (0-1) attribute.

    Returns:
        ``upper_val / 255`` if *has_upper*, else *lower_val* unchanged.
    """
    if has_upper:
        return upper_val / 255.0
    return lower_val


def _read_rgb(element: ET.Element) -> List[float]:
    return [
        decode_channel(upper in element.attrib, query_float(element, upper), query_float(element, lower))
        for upper, lower in _CHANNELS
    ]


def _children(parent: ET.Element, tag: str, count: int) -> List[ET.Element]:
    """Return the first *count* ``<tag>`` children of *parent*.

    Raises:
        StructureError: There is no ``<tag>`` child at all, or fewer than
            *count* of them.
    """
    children = parent.findall(tag)
    if not children:
        raise StructureError(f"Cannot read {tag} in <{parent.tag}>")
    if len(children) < count:
        raise StructureError(
            f"Cannot read {tag} {len(children)} in <{parent.tag}>: "
            f"{count} declared, {len(children)} present"
        )
    if len(children) > count:
        log.warning("<%s> declares %d <%s>, %d present; extra elements ignored",
                    parent.tag, count, tag, len(children))
    return children[:max(count, 0)]


# ───────────────────────────────────────────────
# Decoders
# ───────────────────────────────────────────────

def decode_points(
    parent: ET.Element,
    tag: str,
    count: int,
    normalize: bool = False,
    swap: bool = False,
    image_size: ImageSize = (0, 0),
) -> Tuple[Point, ...]:
    """Read ``count`` ``<tag x=".." y="..">`` children as points.

    Args:
        parent: Element whose children are read.
        tag: Child tag name, e.g. ``"control_point"``.
        count: Declared number of children.
        normalize: Positions are given in [0, 1]; scale x by the image
            height and y by the image width.
        swap: Exchange x and y (legacy curve files).
        image_size: ``(width, height)`` of the scene image.
    """
    width, height = image_size
    points = []
    for child in _children(parent, tag, count):
        x = query_float(child, "x")
        y = query_float(child, "y")
        if normalize:
            # x pairs with height and y with width
            x *= height
            y *= width
        if swap:
            x, y = y, x
        points.append(Point(x, y))
    return tuple(points)


def decode_colors(parent: ET.Element, tag: str, count: int, swap: bool = False) -> Tuple[Color, ...]:
    """Read ``count`` ``<tag>`` children as RGB colors.

    Each channel comes from ``R``/``G``/``B`` (divided by 255) when present,
    otherwise from ``r``/``g``/``b`` as-is.  *swap* exchanges red and blue.
    """
    colors = []
    for child in _children(parent, tag, count):
        r, g, b = _read_rgb(child)
        if swap:
            r, b = b, r
        colors.append(Color(r, g, b))
    return tuple(colors)


def normalize_color_points(color_points: Iterable[ColorPoint]) -> Tuple[ColorPoint, ...]:
    """Rescale parameters authored as global ids into [0, 1].

    Only parameters above 1 take part in the maximum.  When at least one
    exists, every parameter (including those already below 1) is divided
    by that maximum; otherwise the sequence is returned unchanged.
    """
    color_points = tuple(color_points)
    above_one = [cp.t for cp in color_points if cp.t > 1]
    if not above_one:
        return color_points
    max_t = max(above_one)
    return tuple(cp._replace(t=cp.t / max_t) for cp in color_points)


def decode_color_points(
    parent: ET.Element,
    tag: str,
    count: int,
    swap: bool = False,
) -> Tuple[ColorPoint, ...]:
    """Read ``count`` ``<tag>`` children as colors at parameter ``globalID``.

    Channels follow ``decode_colors``; parameters are then passed through
    ``normalize_color_points``.
    """
    color_points = []
    for child in _children(parent, tag, count):
        r, g, b = _read_rgb(child)
        if swap:
            r, b = b, r
        color_points.append(ColorPoint(r, g, b, query_float(child, "globalID")))
    return normalize_color_points(color_points)
