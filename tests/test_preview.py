"""Tests for preview.py: wireframe rendering with Pillow."""
from __future__ import annotations

import os

from PIL import Image

from models import Color, ColorPoint, DiffusionCurve, GradientMesh, Point, PoissonCurve, Scene
from preview import canvas_scale, canvas_size, mean_color, render_wireframe, save_wireframe, to_rgb
from scene_xml import parse_scene_file
from settings import PreviewSettings

_SCENE_DIR = os.path.join(os.path.dirname(__file__), "..", "test_data", "scenes")


class TestHelpers:

    def test_to_rgb(self):
        assert to_rgb(Color(1.0, 0.0, 0.5)) == (255, 0, 128)

    def test_to_rgb_clamps(self):
        assert to_rgb((1.5, -0.2, 0.0)) == (255, 0, 0)

    def test_mean_color(self):
        samples = [ColorPoint(1, 0, 0, 0), ColorPoint(0, 0, 1, 1)]
        assert mean_color(samples) == Color(0.5, 0.0, 0.5)

    def test_mean_color_empty(self):
        assert mean_color([]) == Color(0.0, 0.0, 0.0)


class TestCanvasSize:

    def test_uses_scene_size(self):
        assert canvas_size(Scene(width=100, height=80)) == (100, 80)

    def test_scaled(self):
        assert canvas_size(Scene(width=100, height=80), scale=0.5) == (50, 40)

    def test_empty_scene(self):
        assert canvas_size(Scene()) == (1, 1)

    def test_falls_back_to_bounds(self):
        curve = DiffusionCurve(control_points=(Point(0, 0), Point(90, 40)))
        assert canvas_size(Scene(diffusion_curves=(curve,))) == (100, 50)


class TestRenderWireframe:

    def test_mesh_vertex_colors(self):
        mesh = GradientMesh(
            num_rows=1,
            num_cols=1,
            positions=(Point(10, 10), Point(50, 10), Point(10, 50), Point(50, 50)),
            colors=(Color(1, 0, 0), Color(0, 1, 0), Color(0, 0, 1), Color(1, 1, 1)),
        )
        img = render_wireframe(Scene(width=100, height=80, gradient_meshes=(mesh,)))
        assert img.size == (100, 80)
        assert img.getpixel((10, 10)) == (255, 0, 0)
        assert img.getpixel((50, 50)) == (255, 255, 255)

    def test_diffusion_curve_mean_color(self):
        curve = DiffusionCurve(
            control_points=(Point(5, 20), Point(60, 20)),
            colors_left=(ColorPoint(1, 0, 0, 0),),
            colors_right=(ColorPoint(0, 0, 1, 0),),
        )
        img = render_wireframe(Scene(width=80, height=40, diffusion_curves=(curve,)),
                               PreviewSettings(curve_width=3))
        assert img.getpixel((30, 20)) == (128, 0, 128)

    def test_background(self):
        img = render_wireframe(Scene(width=4, height=4), PreviewSettings(background="#000000"))
        assert img.getpixel((0, 0)) == (0, 0, 0)

    def test_save_sample_scene(self, tmp_path):
        scene = parse_scene_file(os.path.join(_SCENE_DIR, "unified_small.xml"))
        out = tmp_path / "preview.png"
        save_wireframe(scene, str(out), PreviewSettings(scale=0.5))
        with Image.open(out) as img:
            assert img.size == (320, 240)


class TestFarGeometry:

    def test_scene_size_clips_far_points(self):
        curve = PoissonCurve(control_points=(Point(0, 0), Point(200000, 200000)))
        scene = Scene(width=100, height=100, poisson_curves=(curve,))
        assert canvas_size(scene) == (100, 100)

        img = render_wireframe(scene, PreviewSettings(curve_width=3))
        assert img.size == (100, 100)
        assert img.getpixel((50, 50)) == (0x8E, 0x44, 0xAD)

    def test_bounding_box_fallback_is_capped(self):
        curve = PoissonCurve(control_points=(Point(0, 0), Point(5000, 2500)))
        scene = Scene(poisson_curves=(curve,))
        width, height = canvas_size(scene, max_side=1000)
        assert width in (999, 1000)
        assert height == 500

    def test_capped_render_fits_max_side(self):
        curve = PoissonCurve(control_points=(Point(0, 0), Point(200000, 100000)))
        img = render_wireframe(Scene(poisson_curves=(curve,)), PreviewSettings(max_side=400))
        assert max(img.size) <= 400
        assert canvas_scale(Scene(poisson_curves=(curve,)), 1.0, 400) < 1.0

    def test_non_finite_points_are_skipped(self):
        curve = PoissonCurve(control_points=(Point(0, 0), Point(float("inf"), 5)))
        img = render_wireframe(Scene(width=10, height=10, poisson_curves=(curve,)))
        assert img.getpixel((5, 5)) == (255, 255, 255)
