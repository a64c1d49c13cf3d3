"""Tests for Renderer class."""

import pytest
import numpy as np
from PIL import Image

from glasstrace.vec3 import Vec3, Point3, Color
from glasstrace.ray import Ray
from glasstrace.shapes import Sphere, Scene
from glasstrace.materials import Lambertian
from glasstrace.integrator import MAX_DEPTH, T_MIN, sky_color
from glasstrace.renderer import Renderer, RenderSettings, write_ppm
from glasstrace.scenes import three_spheres_scene, axis_camera

from conftest import FixedRandom


class TestRenderSettings:
    """Test RenderSettings configuration."""

    def test_default_values(self):
        settings = RenderSettings()
        assert settings.width == 200
        assert settings.height == 100
        assert settings.samples_per_pixel == 10
        assert settings.max_depth == MAX_DEPTH
        assert settings.seed is None

    def test_custom_values(self):
        settings = RenderSettings(width=320, height=240, samples_per_pixel=4, max_depth=8, seed=3)
        assert (settings.width, settings.height) == (320, 240)
        assert settings.samples_per_pixel == 4
        assert settings.max_depth == 8
        assert settings.seed == 3

    def test_aspect_ratio(self):
        assert RenderSettings(width=200, height=100).aspect_ratio == 2.0
        assert RenderSettings(width=300, height=400).aspect_ratio == 0.75


class TestRendererBasic:
    """Test basic renderer functionality."""

    def test_default_settings(self):
        assert Renderer().settings == RenderSettings()

    def test_render_shape_and_dtype(self):
        renderer = Renderer(RenderSettings(width=6, height=4, samples_per_pixel=1, seed=0))
        image = renderer.render(Scene(), axis_camera(1.5))
        assert image.shape == (4, 6, 3)
        assert image.dtype == np.float64

    def test_top_row_is_first(self):
        # Upward rays see more blue and less red in the sky gradient
        renderer = Renderer(RenderSettings(width=4, height=6, samples_per_pixel=1, seed=0))
        image = renderer.render(Scene(), axis_camera(4 / 6))
        assert image[0, :, 0].mean() < image[-1, :, 0].mean()

    def test_same_seed_same_image(self):
        settings = RenderSettings(width=6, height=3, samples_per_pixel=2, seed=7)
        first = Renderer(settings).render(three_spheres_scene(), axis_camera(2.0))
        second = Renderer(settings).render(three_spheres_scene(), axis_camera(2.0))
        assert np.array_equal(first, second)

    def test_explicit_source_overrides_seed(self):
        settings = RenderSettings(width=4, height=2, samples_per_pixel=2, seed=1)
        renderer = Renderer(settings)
        a = renderer.render(three_spheres_scene(), axis_camera(2.0), np.random.default_rng(99))
        b = renderer.render(three_spheres_scene(), axis_camera(2.0), np.random.default_rng(99))
        assert np.array_equal(a, b)

    def test_progress_callback(self):
        renderer = Renderer(RenderSettings(width=3, height=5, samples_per_pixel=1, seed=0))
        progress = []
        renderer.set_progress_callback(progress.append)

        renderer.render(Scene(), axis_camera(0.6))

        assert len(progress) == 5
        assert progress == sorted(progress)
        assert progress[-1] == 1.0

    def test_pixel_values_stay_in_unit_range(self):
        renderer = Renderer(RenderSettings(width=6, height=3, samples_per_pixel=2, seed=11))
        image = renderer.render(three_spheres_scene(), axis_camera(2.0))
        assert image.min() >= 0.0
        assert image.max() <= 1.0


class TestEndToEnd:
    """Render a tiny scene with a fixed random source and check every pixel."""

    def test_white_diffuse_sphere(self):
        width, height = 8, 4
        scene = Scene([Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(1, 1, 1)))])
        camera = axis_camera(2.0)
        renderer = Renderer(RenderSettings(width=width, height=height, samples_per_pixel=1))

        image = renderer.render(scene, camera, FixedRandom())

        expected = np.zeros((height, width, 3))
        hits = 0
        for j in range(height):
            for i in range(width):
                ray = camera.get_ray((i + 0.5) / width, (height - 1 - j + 0.5) / height)
                hit = scene.hit(ray, T_MIN, float('inf'))
                if hit is None:
                    color = sky_color(ray)
                else:
                    # A centered unit-ball sample sends the bounce along the normal
                    hits += 1
                    color = sky_color(Ray(hit.point, hit.normal))
                expected[j, i] = color.to_array()

        assert hits > 0
        assert np.array_equal(Renderer.to_ldr(image), Renderer.to_ldr(expected))


class TestToneMapping:
    """Test gamma correction and quantization."""

    @pytest.mark.parametrize("value,expected", [
        (0.0, 0),
        (0.25, 127),
        (1.0, 255),
        (2.0, 255),
        (-1.0, 0),
    ])
    def test_to_ldr(self, value, expected):
        image = np.full((1, 1, 3), value)
        ldr = Renderer.to_ldr(image)
        assert ldr.dtype == np.uint8
        assert ldr[0, 0, 0] == expected

    def test_to_ldr_keeps_shape(self):
        assert Renderer.to_ldr(np.zeros((3, 5, 3))).shape == (3, 5, 3)


class TestImageOutput:
    """Test PPM and Pillow image output."""

    def test_write_ppm_text(self, tmp_path):
        pixels = np.array([[[255, 0, 0], [0, 128, 255]]], dtype=np.uint8)
        path = tmp_path / "out.ppm"

        write_ppm(pixels, path)

        assert path.read_bytes() == b"P3\r\n2 1\r\n255\r\n255 0 0\r\n0 128 255\r\n"

    def test_write_ppm_row_order(self, tmp_path):
        pixels = np.array([
            [[1, 1, 1]],
            [[2, 2, 2]],
        ], dtype=np.uint8)
        path = tmp_path / "rows.ppm"

        write_ppm(pixels, path)

        lines = path.read_bytes().split(b"\r\n")
        assert lines[1] == b"1 2"
        assert lines[3:5] == [b"1 1 1", b"2 2 2"]

    def test_save_image_ppm_from_linear(self, tmp_path):
        path = tmp_path / "linear.ppm"
        Renderer().save_image(np.full((1, 1, 3), 0.25), path)
        assert path.read_bytes().endswith(b"127 127 127\r\n")

    def test_save_image_png_round_trip(self, tmp_path):
        image = np.random.default_rng(5).random((4, 6, 3))
        path = tmp_path / "out.png"

        Renderer().save_image(image, path)

        with Image.open(path) as loaded:
            assert loaded.size == (6, 4)
            assert np.array_equal(np.asarray(loaded), Renderer.to_ldr(image))

    def test_save_image_passes_uint8_through(self, tmp_path):
        pixels = np.array([[[10, 20, 30]]], dtype=np.uint8)
        path = tmp_path / "raw.ppm"
        Renderer().save_image(pixels, path)
        assert path.read_bytes().endswith(b"10 20 30\r\n")
