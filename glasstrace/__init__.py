"""
Glasstrace - A Python Ray Tracing Renderer

A small offline renderer for scenes made of spheres:
- Diffuse, metal (with fuzz) and glass (Schlick-weighted refraction) materials
- Thin-lens camera with depth of field
- Monte Carlo antialiasing
- PPM and PNG output
"""

__version__ = "0.1.0"
__author__ = "Glasstrace Team"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .shapes import HitRecord, Hittable, Sphere, Scene
from .materials import Material, ScatterResult, Lambertian, Metal, Dielectric, schlick
from .camera import Camera
from .integrator import MAX_DEPTH, T_MIN, sky_color, trace_color
from .renderer import Renderer, RenderSettings, write_ppm
from .scenes import (
    random_scene, random_scene_camera, three_spheres_scene, two_spheres_scene,
    axis_camera
)
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
