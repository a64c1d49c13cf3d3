"""
Renderer module - drives the camera and integrator over the image.

Implements:
- Per-pixel Monte Carlo sampling (antialiasing and lens blur)
- Square-root gamma correction and 8-bit quantization
- Image output as plain-text PPM or any format Pillow can write
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

import numpy as np

from .vec3 import Color
from .camera import Camera
from .shapes import Hittable
from .integrator import MAX_DEPTH, trace_color

logger = logging.getLogger(__name__)


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 200
    height: int = 100
    samples_per_pixel: int = 10
    max_depth: int = MAX_DEPTH
    seed: Optional[int] = None

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


class Renderer:
    """Single-threaded path tracing renderer."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Hittable, camera: Camera, rng=None) -> np.ndarray:
        """Render the scene and return the linear image as a numpy array.

        Args:
            scene: The scene to render (any Hittable)
            camera: The camera to render from
            rng: Random source; defaults to a generator seeded from
                settings.seed

        Returns:
            Linear (not gamma corrected) image of shape (height, width, 3),
            top row first
        """
        width = self.settings.width
        height = self.settings.height
        samples = self.settings.samples_per_pixel
        max_depth = self.settings.max_depth

        if rng is None:
            rng = np.random.default_rng(self.settings.seed)

        logger.debug(
            "Rendering %dx%d, %d samples/pixel, max depth %d, %d objects",
            width, height, samples, max_depth, len(getattr(scene, 'objects', ()))
        )
        start = time.perf_counter()

        image = np.zeros((height, width, 3), dtype=np.float64)

        for j in range(height):
            row = height - 1 - j
            for i in range(width):
                pixel_color = Color(0, 0, 0)

                for _ in range(samples):
                    u = (i + rng.random()) / width
                    v = (row + rng.random()) / height

                    ray = camera.get_ray(u, v, rng)
                    pixel_color = pixel_color + trace_color(
                        ray, scene, rng, max_depth=max_depth
                    )

                image[j, i] = pixel_color.to_array() / samples

            if self._progress_callback:
                self._progress_callback((j + 1) / height)

        logger.debug("Render finished in %.2fs", time.perf_counter() - start)
        return image

    @staticmethod
    def to_ldr(image: np.ndarray) -> np.ndarray:
        """Convert a linear image to 8-bit with gamma 2 correction.

        Each channel is clamped to [0, 1], square-rooted, scaled by 255.99
        and truncated.

        Args:
            image: Linear image array (float)

        Returns:
            Image as uint8 array of the same shape
        """
        corrected = np.sqrt(np.clip(image, 0.0, 1.0))
        return (corrected * 255.99).astype(np.uint8)

    def save_image(self, image: np.ndarray, filename: Union[str, Path]) -> None:
        """Save image to file.

        Args:
            image: Linear float image or already quantized uint8 image
            filename: Output filename (extension determines format)
        """
        from PIL import Image as PILImage

        if image.dtype != np.uint8:
            image = self.to_ldr(image)

        if str(filename).lower().endswith('.ppm'):
            write_ppm(image, filename)
        else:
            PILImage.fromarray(image, 'RGB').save(filename)
        logger.debug("Saved %s", filename)


def write_ppm(pixels: np.ndarray, filename: Union[str, Path]) -> None:
    """Write an 8-bit image as a plain-text (P3) PPM file.

    Args:
        pixels: uint8 array of shape (height, width, 3), top row first
        filename: Output path
    """
    height, width = pixels.shape[:2]

    with open(filename, 'w', newline='') as f:
        f.write('P3\r\n')
        f.write(f'{width} {height}\r\n')
        f.write('255\r\n')
        for r, g, b in pixels.reshape(-1, 3):
            f.write(f'{r} {g} {b}\r\n')
