"""
models.py

Data models for vector-graphics scenes: diffusion curves, Poisson curves
and gradient meshes, as produced by ``scene_xml.parse_scene_file``.

All models are immutable.  Sequences are stored as tuples so a ``Scene``
can be compared field-for-field and shared between threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Tuple

import numpy as np


# ----------------------------
# Primitive values
# ----------------------------

class Point(NamedTuple):
    """2D position (x, y)."""
    x: float = 0.0
    y: float = 0.0


class Color(NamedTuple):
    """RGB color with channels in [0, 1]."""
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0


class ColorPoint(NamedTuple):
    """RGB color located at parameter ``t`` along a curve."""
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    t: float = 0.0

    @property
    def color(self) -> Color:
        return Color(self.r, self.g, self.b)


class BoundaryCondition(Enum):
    """Boundary condition applied on one side of a diffusion curve."""
    NEUMANN = "Neumann"
    DIRICHLET = "Dirichlet"

    @classmethod
    def from_attribute(cls, value: Optional[str]) -> "BoundaryCondition":
        """Map a ``boundary`` attribute to a condition.

        Only the exact string ``"Neumann"`` selects NEUMANN; anything else,
        including a missing attribute, is DIRICHLET.
        """
        if value == cls.NEUMANN.value:
            return cls.NEUMANN
        return cls.DIRICHLET


# ----------------------------
# Scene entities
# ----------------------------

@dataclass(frozen=True)
class DiffusionCurve:
    """Curve carrying independent color profiles on its left and right side.

    Attributes:
        control_points: Control polygon of the spline.
        colors_left: Color samples on the left side, ``t`` in [0, 1].
        colors_right: Color samples on the right side.
        boundary_left: Boundary condition on the left side.
        boundary_right: Boundary condition on the right side.
    """
    control_points: Tuple[Point, ...] = ()
    colors_left: Tuple[ColorPoint, ...] = ()
    colors_right: Tuple[ColorPoint, ...] = ()
    boundary_left: BoundaryCondition = BoundaryCondition.DIRICHLET
    boundary_right: BoundaryCondition = BoundaryCondition.DIRICHLET

    def control_array(self) -> np.ndarray:
        """Control points as an ``(N, 2)`` float array."""
        return np.asarray(self.control_points, dtype=float).reshape(-1, 2)


@dataclass(frozen=True)
class PoissonCurve:
    """Curve carrying Laplacian samples used as Poisson source terms.

    Attributes:
        control_points: Control polygon of the spline.
        weights: Laplacian value (as a color) at parameter locations.
    """
    control_points: Tuple[Point, ...] = ()
    weights: Tuple[ColorPoint, ...] = ()

    def control_array(self) -> np.ndarray:
        """Control points as an ``(N, 2)`` float array."""
        return np.asarray(self.control_points, dtype=float).reshape(-1, 2)


@dataclass(frozen=True)
class GradientMesh:
    """Rectangular grid of ``(num_rows + 1) x (num_cols + 1)`` vertices.

    Positions, colors and tangents are flat row-major lists.  Tangents are
    either both present (one per vertex) or both empty.
    """
    num_rows: int = 0
    num_cols: int = 0
    positions: Tuple[Point, ...] = ()
    colors: Tuple[Color, ...] = ()
    tangents_u: Tuple[Point, ...] = ()
    tangents_v: Tuple[Point, ...] = ()

    @property
    def vertex_count(self) -> int:
        return (self.num_rows + 1) * (self.num_cols + 1)

    @property
    def has_tangents(self) -> bool:
        return bool(self.tangents_u)

    def position_grid(self) -> np.ndarray:
        """Vertex positions as a ``(rows + 1, cols + 1, 2)`` array."""
        return np.asarray(self.positions, dtype=float).reshape(self.num_rows + 1, self.num_cols + 1, 2)

    def color_grid(self) -> np.ndarray:
        """Vertex colors as a ``(rows + 1, cols + 1, 3)`` array."""
        return np.asarray(self.colors, dtype=float).reshape(self.num_rows + 1, self.num_cols + 1, 3)


@dataclass(frozen=True)
class Scene:
    """A complete vector-graphics scene.

    Attributes:
        width: Width of the image to render (0 when the document omits it).
        height: Height of the image to render (0 when the document omits it).
        diffusion_curves: All diffusion curves, in document order.
        poisson_curves: All Poisson curves, in document order.
        gradient_meshes: All gradient meshes, in document order.
    """
    width: int = 0
    height: int = 0
    diffusion_curves: Tuple[DiffusionCurve, ...] = ()
    poisson_curves: Tuple[PoissonCurve, ...] = ()
    gradient_meshes: Tuple[GradientMesh, ...] = ()

    @classmethod
    def from_file(cls, path: str, encoding: str = "utf-8") -> "Scene":
        """Read a scene XML file.  See ``scene_xml.parse_scene_file``."""
        from scene_xml.parser import parse_scene_file

        return parse_scene_file(path, encoding=encoding)

    @property
    def is_empty(self) -> bool:
        return not (self.diffusion_curves or self.poisson_curves or self.gradient_meshes)

    def bounds(self) -> Optional[Tuple[Point, Point]]:
        """Bounding box ``(min, max)`` of all control points and mesh vertices.

        Returns:
            Two points, or ``None`` if the scene holds no geometry.
        """
        chunks = [c.control_array() for c in self.diffusion_curves]
        chunks += [c.control_array() for c in self.poisson_curves]
        chunks += [np.asarray(m.positions, dtype=float).reshape(-1, 2) for m in self.gradient_meshes]
        chunks = [c for c in chunks if c.size]
        if not chunks:
            return None
        pts = np.concatenate(chunks)
        lo = pts.min(axis=0)
        hi = pts.max(axis=0)
        return Point(float(lo[0]), float(lo[1])), Point(float(hi[0]), float(hi[1]))
