"""
preview.py

Wireframe preview of a scene using Pillow.

Draws what the reader produced, not a diffusion or Poisson solution:

- diffusion curves as control polygons, in the mean of their colors
- Poisson curves as control polygons in a fixed color
- gradient meshes as their vertex grid, vertices filled by their colors
"""

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from models import Color, ColorPoint, GradientMesh, Point, Scene
from settings import PreviewSettings

RGB = Tuple[int, int, int]

_MARGIN = 10


def to_rgb(color: Sequence[float]) -> RGB:
    """Convert a [0, 1] color to 8-bit channels, clamping out-of-range values."""
    return tuple(max(0, min(255, int(round(c * 255)))) for c in color[:3])


def mean_color(samples: Iterable[ColorPoint]) -> Color:
    samples = list(samples)
    if not samples:
        return Color(0.0, 0.0, 0.0)
    n = len(samples)
    return Color(
        sum(s.r for s in samples) / n,
        sum(s.g for s in samples) / n,
        sum(s.b for s in samples) / n,
    )


def canvas_scale(scene: Scene, scale: float = 1.0, max_side: int = 4096) -> float:
    """Drawing scale, reduced from *scale* so no canvas side exceeds *max_side*."""
    width, height = _extent(scene)
    longest = max(width, height) * scale
    if max_side > 0 and longest > max_side:
        return max_side / max(width, height)
    return scale


def canvas_size(scene: Scene, scale: float = 1.0, max_side: int = 4096) -> Tuple[int, int]:
    """Pixel size of the preview canvas.

    Uses the scene's image size; geometry outside it is clipped.  A
    dimension of 0 falls back to the bounding box plus a margin.  The
    result is shrunk to fit within ``max_side`` on its longest side.
    """
    width, height = _extent(scene)
    s = canvas_scale(scene, scale, max_side)
    return max(1, int(width * s)), max(1, int(height * s))


def _extent(scene: Scene) -> Tuple[int, int]:
    width, height = scene.width, scene.height
    if width > 0 and height > 0:
        return width, height
    bounds = scene.bounds()
    if bounds is not None:
        _, hi = bounds
        if width <= 0:
            width = max(0, int(hi.x) + _MARGIN)
        if height <= 0:
            height = max(0, int(hi.y) + _MARGIN)
    return max(width, 0), max(height, 0)


def _polyline(points: Sequence[Point], scale: float):
    return [(p.x * scale, p.y * scale) for p in points]


def _clip_segment(p0: Tuple[float, float], p1: Tuple[float, float], box: Tuple[float, float, float, float]):
    """Clip segment *p0*-*p1* to *box* ``(x0, y0, x1, y1)``; ``None`` if it lies outside."""
    (xa, ya), (xb, yb) = p0, p1
    if not all(math.isfinite(v) for v in (xa, ya, xb, yb)):
        return None
    dx, dy = xb - xa, yb - ya
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, xa - box[0]), (dx, box[2] - xa), (-dy, ya - box[1]), (dy, box[3] - ya)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            t0 = max(t0, t)
        else:
            t1 = min(t1, t)
        if t0 > t1:
            return None
    return (xa + t0 * dx, ya + t0 * dy), (xa + t1 * dx, ya + t1 * dy)


def _draw_polyline(draw: ImageDraw.ImageDraw, size: Tuple[int, int], points, fill, width: int) -> None:
    """Draw a polyline segment by segment, clipped to the canvas."""
    w, h = size
    pad = width + 1
    box = (-pad, -pad, w + pad, h + pad)
    points = [tuple(p) for p in points]
    for p0, p1 in zip(points, points[1:]):
        clipped = _clip_segment(p0, p1, box)
        if clipped is not None:
            draw.line(clipped, fill=fill, width=width)


def _draw_mesh(draw: ImageDraw.ImageDraw, size: Tuple[int, int], mesh: GradientMesh, s: PreviewSettings, scale: float) -> None:
    if mesh.num_rows < 0 or mesh.num_cols < 0 or len(mesh.positions) != mesh.vertex_count:
        return
    grid = mesh.position_grid() * scale
    rows, cols = grid.shape[0], grid.shape[1]
    for r in range(rows):
        _draw_polyline(draw, size, grid[r], s.mesh_line_color, 1)
    for c in range(cols):
        _draw_polyline(draw, size, grid[:, c], s.mesh_line_color, 1)

    w, h = size
    rad = s.point_radius
    for pos, color in zip(mesh.positions, mesh.colors):
        x, y = pos.x * scale, pos.y * scale
        if not (-rad <= x <= w + rad and -rad <= y <= h + rad):
            continue
        draw.ellipse((x - rad, y - rad, x + rad, y + rad), fill=to_rgb(color), outline=s.mesh_line_color)


def render_wireframe(scene: Scene, settings: Optional[PreviewSettings] = None) -> Image.Image:
    """Draw *scene* onto a new RGB image.

    Args:
        scene: Scene to draw.
        settings: Preview appearance; defaults to ``PreviewSettings()``.

    Returns:
        A Pillow image of ``canvas_size(scene, settings.scale, settings.max_side)``.
    """
    s = settings or PreviewSettings()
    scale = canvas_scale(scene, s.scale, s.max_side)
    size = canvas_size(scene, s.scale, s.max_side)
    img = Image.new("RGB", size, s.background)
    draw = ImageDraw.Draw(img)

    # Meshes first so curves stay visible on top
    for mesh in scene.gradient_meshes:
        _draw_mesh(draw, size, mesh, s, scale)

    for curve in scene.poisson_curves:
        _draw_polyline(draw, size, _polyline(curve.control_points, scale), s.poisson_color, s.curve_width)

    for curve in scene.diffusion_curves:
        color = mean_color(curve.colors_left + curve.colors_right)
        _draw_polyline(draw, size, _polyline(curve.control_points, scale), to_rgb(color), s.curve_width)

    return img


def save_wireframe(scene: Scene, path: str, settings: Optional[PreviewSettings] = None) -> None:
    """Render *scene* and save it; the format follows the file extension."""
    render_wireframe(scene, settings).save(path)
