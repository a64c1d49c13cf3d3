"""
Materials system.

Implements:
- Lambertian diffuse
- Metal (specular reflection with fuzz)
- Dielectric (glass, water - with refraction and Schlick reflectance)

A material turns an incoming ray and a hit into either a scattered ray with
an attenuation color, or None when the ray is absorbed.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .vec3 import Vec3, Color
from .ray import Ray
from .shapes import HitRecord


@dataclass
class ScatterResult:
    """Result of a material scatter operation."""
    scattered_ray: Ray
    attenuation: Color


class Material(ABC):
    """Abstract base class for materials."""

    @abstractmethod
    def scatter(self, ray_in: Ray, hit: HitRecord, rng) -> Optional[ScatterResult]:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray
            hit: The intersection being shaded
            rng: Random source (numpy Generator or compatible)

        Returns:
            ScatterResult if ray scatters, None if absorbed
        """
        pass


class Lambertian(Material):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Color):
        """Create a Lambertian material.

        Args:
            albedo: The base color (RGB, each component 0-1)
        """
        self.albedo = albedo

    def scatter(self, ray_in: Ray, hit: HitRecord, rng) -> Optional[ScatterResult]:
        # Offset from the normal tip by a point in the unit ball
        scatter_direction = hit.normal + Vec3.random_in_unit_sphere(rng)
        return ScatterResult(
            scattered_ray=Ray(hit.point, scatter_direction),
            attenuation=self.albedo
        )

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"


class Metal(Material):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: Color, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            fuzz: Reflection roughness (0 = mirror); values above 1 are
                clamped to 1
        """
        self.albedo = albedo
        self.fuzz = min(fuzz, 1.0)

    def scatter(self, ray_in: Ray, hit: HitRecord, rng) -> Optional[ScatterResult]:
        reflected = ray_in.direction.normalize().reflect(hit.normal)

        if self.fuzz > 0:
            reflected = reflected + Vec3.random_in_unit_sphere(rng) * self.fuzz

        # Fuzzed into the surface: absorbed
        if reflected.dot(hit.normal) <= 0:
            return None
        return ScatterResult(
            scattered_ray=Ray(hit.point, reflected),
            attenuation=self.albedo
        )

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"


class Dielectric(Material):
    """Clear dielectric (glass-like) material with refraction."""

    def __init__(self, refractive_index: float = 1.5):
        """Create a dielectric material.

        Args:
            refractive_index: Index of refraction (1.0 = air, 1.5 = glass,
                2.4 = diamond)
        """
        self.refractive_index = refractive_index

    def scatter(self, ray_in: Ray, hit: HitRecord, rng) -> Optional[ScatterResult]:
        attenuation = Color(1.0, 1.0, 1.0)
        direction = ray_in.direction
        reflected = direction.normalize().reflect(hit.normal)

        # Sphere normals point outward, so a positive dot means exiting
        d_dot_n = direction.dot(hit.normal)
        if d_dot_n > 0:
            outward_normal = -hit.normal
            ni_over_nt = self.refractive_index
            cosine = self.refractive_index * d_dot_n / direction.length()
        else:
            outward_normal = hit.normal
            ni_over_nt = 1.0 / self.refractive_index
            cosine = -d_dot_n / direction.length()

        refracted = direction.refract(outward_normal, ni_over_nt)
        if refracted is None:
            # Total internal reflection
            scattered = Ray(hit.point, reflected)
        elif rng.random() < schlick(cosine, self.refractive_index):
            scattered = Ray(hit.point, reflected)
        else:
            scattered = Ray(hit.point, refracted)

        return ScatterResult(scattered_ray=scattered, attenuation=attenuation)

    def __repr__(self) -> str:
        return f"Dielectric(refractive_index={self.refractive_index})"


def schlick(cosine: float, ref_idx: float) -> float:
    """Schlick's approximation for Fresnel reflectance."""
    r0 = (1 - ref_idx) / (1 + ref_idx)
    r0 = r0 * r0
    return r0 + (1 - r0) * pow(1 - cosine, 5)
