"""
Built-in scenes and their matching cameras.

- random_scene: the final "many small spheres" cover scene
- three_spheres_scene: diffuse, metal and glass spheres on a large ground sphere
- two_spheres_scene: two touching diffuse spheres for checking the field of view
"""

from __future__ import annotations
import math

from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .shapes import Sphere, Scene
from .materials import Lambertian, Metal, Dielectric


def random_scene(rng) -> Scene:
    """Create the cover scene: a grid of randomly placed small spheres.

    Small spheres get a diffuse material 80% of the time, metal 15% and
    glass 5%. All glass spheres share one material instance.

    Args:
        rng: Random source used for placement and materials
    """
    world = Scene()
    glass = Dielectric(1.5)

    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(Color(0.5, 0.5, 0.5))))

    clearing = Point3(4, 0.2, 0)
    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - clearing).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = Color(
                    rng.random() * rng.random(),
                    rng.random() * rng.random(),
                    rng.random() * rng.random()
                )
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                albedo = Color(
                    0.5 * (1 + rng.random()),
                    0.5 * (1 + rng.random()),
                    0.5 * (1 + rng.random())
                )
                material = Metal(albedo, 0.5 * rng.random())
            else:
                material = glass

            world.add(Sphere(center, 0.2, material))

    world.add(Sphere(Point3(0, 1, 0), 1.0, glass))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    return world


def random_scene_camera(aspect_ratio: float) -> Camera:
    """Camera for random_scene with a slight depth of field."""
    return Camera(
        look_from=Point3(13, 2, 3),
        look_at=Point3(0, 0, 0),
        vup=Vec3(0, 1, 0),
        vfov=20,
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=10.0
    )


def three_spheres_scene() -> Scene:
    """Create a diffuse, a metal and a glass sphere on a ground sphere."""
    world = Scene()
    world.add(Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(0.1, 0.2, 0.5))))
    world.add(Sphere(Point3(0, -100.5, -1), 100, Lambertian(Color(0.8, 0.8, 0.0))))
    world.add(Sphere(Point3(1, 0, -1), 0.5, Metal(Color(0.8, 0.6, 0.2), 0.0)))
    world.add(Sphere(Point3(-1, 0, -1), 0.5, Dielectric(1.5)))
    return world


def two_spheres_scene() -> Scene:
    """Create a blue and a red sphere that touch on the view axis.

    Rendered through a 90 degree camera it is a quick check of the
    projection: the spheres must appear the same size, mirrored.
    """
    r = math.cos(math.pi / 4)
    world = Scene()
    world.add(Sphere(Point3(-r, 0, -1), r, Lambertian(Color(0, 0, 1))))
    world.add(Sphere(Point3(r, 0, -1), r, Lambertian(Color(1, 0, 0))))
    return world


def axis_camera(aspect_ratio: float) -> Camera:
    """Pinhole camera at the origin looking down -Z with a 90 degree FOV."""
    return Camera(
        look_from=Point3(0, 0, 0),
        look_at=Point3(0, 0, -1),
        vup=Vec3(0, 1, 0),
        vfov=90,
        aspect_ratio=aspect_ratio
    )

