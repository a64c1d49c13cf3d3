"""
Light transport for a single camera sample.

trace_color follows a ray through the scene: every hit either scatters
(multiplying the carried radiance by the material's attenuation) or absorbs
it, and a ray that escapes picks up the sky gradient. The bounce count is
bounded by max_depth, so every call terminates.
"""

from __future__ import annotations

from .vec3 import Color
from .ray import Ray
from .shapes import Hittable

MAX_DEPTH = 50

# Lower hit bound; keeps scattered rays from re-hitting their own surface
T_MIN = 0.001

WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)
BLACK = Color(0.0, 0.0, 0.0)


def sky_color(ray: Ray) -> Color:
    """Vertical white-to-blue gradient seen by rays that escape the scene."""
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t


def trace_color(
    ray: Ray,
    scene: Hittable,
    rng,
    depth: int = 0,
    max_depth: int = MAX_DEPTH
) -> Color:
    """Compute the color carried back along a ray.

    Equivalent to the recursive form
    ``attenuation * trace_color(scattered, scene, rng, depth + 1)``
    but runs as a loop with the attenuation product as accumulator.

    Args:
        ray: The ray to trace
        scene: The scene to trace against
        rng: Random source handed to the materials
        depth: Number of bounces already taken
        max_depth: Hits at or beyond this depth return black

    Returns:
        The linear radiance for this ray
    """
    throughput = WHITE
    while True:
        hit = scene.hit(ray, T_MIN, float('inf'))
        if hit is None:
            return throughput * sky_color(ray)

        if depth >= max_depth or hit.material is None:
            return BLACK

        result = hit.material.scatter(ray, hit, rng)
        if result is None:
            return BLACK

        throughput = throughput * result.attenuation
        ray = result.scattered_ray
        depth += 1
