"""
scene_xml/assemblers.py

Build curves and meshes from their collection elements.

Each assembler walks the declared number of entity elements under one
collection (``curve_set``, ``poisson_curve_set``, ``mesh_set`` or the
legacy root), checks the declared counts and hands the leaf elements to
the decoders in ``scene_xml.decoders``.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import List, Tuple

from models import BoundaryCondition, DiffusionCurve, GradientMesh, PoissonCurve
from scene_xml.attributes import query_bool, query_int, query_str
from scene_xml.decoders import ImageSize, decode_color_points, decode_colors, decode_points
from scene_xml.errors import StructureError

log = logging.getLogger(__name__)


def _entities(parent: ET.Element, tag: str, count_attr: str) -> List[ET.Element]:
    """Return the declared number of ``<tag>`` children of *parent*.

    Raises:
        StructureError: Fewer ``<tag>`` children than ``count_attr`` declares.
    """
    count = query_int(parent, count_attr)
    children = parent.findall(tag)
    if len(children) < count:
        raise StructureError(f"Cannot read {tag} {len(children)} in <{parent.tag}>: "
                             f"{count_attr}={count}, {len(children)} present")
    return children[:max(count, 0)]


def _required_child(element: ET.Element, tag: str, what: str, index: int) -> ET.Element:
    child = element.find(tag)
    if child is None:
        raise StructureError(f"Cannot read {what} {index} (missing <{tag}>)")
    return child


# ─────────────────────────────────────────────────────────
# Diffusion curves
# ─────────────────────────────────────────────────────────

def read_diffusion_curves(
    parent: ET.Element,
    swap: bool = False,
    image_size: ImageSize = (0, 0),
) -> Tuple[DiffusionCurve, ...]:
    """Read the ``<curve>`` children of a ``curve_set`` (or legacy root).

    Args:
        parent: Element carrying ``nb_curves`` and the ``<curve>`` children.
        swap: Legacy dialect.  Swaps x/y of control points, red/blue of the
            colors, and the left/right color sides with their boundaries.
        image_size: ``(width, height)`` of the scene image.

    Returns:
        One ``DiffusionCurve`` per declared curve, in document order.
    """
    curves = []
    for i, curve_el in enumerate(_entities(parent, "curve", "nb_curves")):
        points_el = _required_child(curve_el, "control_points_set", "control points of diffusion curve", i)
        control_points = decode_points(
            points_el, "control_point", query_int(curve_el, "nb_control_points"),
            normalize=False, swap=swap, image_size=image_size,
        )

        left_el = _required_child(curve_el, "left_colors_set", "left colors of diffusion curve", i)
        boundary_left = BoundaryCondition.from_attribute(query_str(left_el, "boundary"))
        colors_left = decode_color_points(left_el, "left_color", query_int(curve_el, "nb_left_colors"), swap)

        right_el = _required_child(curve_el, "right_colors_set", "right colors of diffusion curve", i)
        boundary_right = BoundaryCondition.from_attribute(query_str(right_el, "boundary"))
        colors_right = decode_color_points(right_el, "right_color", query_int(curve_el, "nb_right_colors"), swap)

        if swap:
            colors_left, colors_right = colors_right, colors_left
            boundary_left, boundary_right = boundary_right, boundary_left

        curves.append(DiffusionCurve(
            control_points=control_points,
            colors_left=colors_left,
            colors_right=colors_right,
            boundary_left=boundary_left,
            boundary_right=boundary_right,
        ))

    log.debug("Read %d diffusion curves from <%s>", len(curves), parent.tag)
    return tuple(curves)


# ─────────────────────────────────────────────────────────
# Poisson curves
# ─────────────────────────────────────────────────────────

def read_poisson_curves(parent: ET.Element) -> Tuple[PoissonCurve, ...]:
    """Read the ``<poisson_curve>`` children of a ``poisson_curve_set``."""
    curves = []
    for i, curve_el in enumerate(_entities(parent, "poisson_curve", "nb_curves")):
        points_el = _required_child(curve_el, "control_points_set", "control points of Poisson curve", i)
        control_points = decode_points(points_el, "control_point", query_int(curve_el, "nb_control_points"))

        weights_el = _required_child(curve_el, "weights_set", "weights of Poisson curve", i)
        weights = decode_color_points(weights_el, "weight", query_int(curve_el, "nb_weights"))

        curves.append(PoissonCurve(control_points=control_points, weights=weights))

    log.debug("Read %d Poisson curves from <%s>", len(curves), parent.tag)
    return tuple(curves)


# ─────────────────────────────────────────────────────────
# Gradient meshes
# ─────────────────────────────────────────────────────────

def read_gradient_meshes(parent: ET.Element, image_size: ImageSize = (0, 0)) -> Tuple[GradientMesh, ...]:
    """Read the ``<mesh>`` children of a ``mesh_set``.

    Declared ``nb_positions`` and ``nb_colors`` must both equal
    ``(nb_rows + 1) * (nb_cols + 1)``; this is checked before the
    corresponding elements are decoded.  When a mesh is ``normalized``,
    its positions and tangents are scaled to the image size.
    """
    meshes = []
    for i, mesh_el in enumerate(_entities(parent, "mesh", "nb_meshes")):
        num_rows = query_int(mesh_el, "nb_rows")
        num_cols = query_int(mesh_el, "nb_cols")
        is_normalized = query_bool(mesh_el, "normalized", False)
        expected = (num_rows + 1) * (num_cols + 1)

        num_positions = query_int(mesh_el, "nb_positions")
        if num_positions != expected:
            raise StructureError(
                f"Number of positions does not match the mesh size in mesh {i}: "
                f"nb_positions={num_positions}, expected {expected} for {num_rows}x{num_cols}"
            )
        positions_el = _required_child(mesh_el, "position_set", "positions of mesh", i)
        positions = decode_points(positions_el, "position", num_positions,
                                  normalize=is_normalized, image_size=image_size)

        num_colors = query_int(mesh_el, "nb_colors")
        if num_colors != expected:
            raise StructureError(
                f"Number of colors does not match the mesh size in mesh {i}: "
                f"nb_colors={num_colors}, expected {expected} for {num_rows}x{num_cols}"
            )
        colors_el = _required_child(mesh_el, "color_set", "colors of mesh", i)
        colors = decode_colors(colors_el, "color", num_colors)

        tangents_u: Tuple = ()
        tangents_v: Tuple = ()
        tangents_el = mesh_el.find("pos_tangent_set")
        if tangents_el is not None:
            tangents_u = decode_points(tangents_el, "positionU", num_positions,
                                       normalize=is_normalized, image_size=image_size)
            tangents_v = decode_points(tangents_el, "positionV", num_positions,
                                       normalize=is_normalized, image_size=image_size)

        meshes.append(GradientMesh(
            num_rows=num_rows,
            num_cols=num_cols,
            positions=positions,
            colors=colors,
            tangents_u=tangents_u,
            tangents_v=tangents_v,
        ))

    log.debug("Read %d gradient meshes from <%s>", len(meshes), parent.tag)
    return tuple(meshes)
