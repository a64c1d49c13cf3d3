#!/usr/bin/env python3
"""
Glasstrace - A Python Ray Tracing Renderer

Main entry point for rendering scenes.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

import numpy as np

from glasstrace.renderer import Renderer, RenderSettings
from glasstrace.scenes import (
    random_scene, random_scene_camera, three_spheres_scene, two_spheres_scene,
    axis_camera
)
from glasstrace.scene_parser import SceneParseError, load_scene


def make_generators(seed):
    """Return independent (scene, render) generators derived from one seed."""
    scene_seq, render_seq = np.random.SeedSequence(seed).spawn(2)
    return np.random.default_rng(scene_seq), np.random.default_rng(render_seq)


def build_scene(name: str, settings: RenderSettings, rng):
    """Return (world, camera) for a built-in scene name."""
    if name == 'random':
        return random_scene(rng), random_scene_camera(settings.aspect_ratio)
    if name == 'fov':
        return two_spheres_scene(), axis_camera(settings.aspect_ratio)
    return three_spheres_scene(), axis_camera(settings.aspect_ratio)


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Glasstrace - A Python Ray Tracing Renderer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene random --output render.ppm
  python main.py --scene spheres --samples 100 --output spheres.png
  python main.py --scene-file scene.yaml --output scene.png
        '''
    )

    parser.add_argument('--width', type=int, default=200, help='Image width (default: 200)')
    parser.add_argument('--height', type=int, default=100, help='Image height (default: 100)')
    parser.add_argument('--samples', type=int, default=10, help='Samples per pixel (default: 10)')
    parser.add_argument('--depth', type=int, default=50, help='Max ray depth (default: 50)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed (default: random)')
    parser.add_argument('--output', type=str, default='output/render.ppm', help='Output filename')
    parser.add_argument('--scene', type=str, default='random', choices=['random', 'spheres', 'fov'],
                        help='Built-in scene to render (default: random)')
    parser.add_argument('--scene-file', type=str, default=None,
                        help='JSON or YAML scene description (overrides --scene and size flags)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    print("=" * 60)
    print("Glasstrace Ray Tracer")
    print("=" * 60)

    render_rng = None
    if args.scene_file:
        print(f"\nLoading scene file: {args.scene_file}")
        try:
            world, camera, settings = load_scene(args.scene_file)
        except SceneParseError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        if args.seed is not None:
            settings.seed = args.seed
    else:
        settings = RenderSettings(
            width=args.width,
            height=args.height,
            samples_per_pixel=args.samples,
            max_depth=args.depth,
            seed=args.seed
        )
        print(f"\nCreating scene: {args.scene}")
        scene_rng, render_rng = make_generators(args.seed)
        world, camera = build_scene(args.scene, settings, scene_rng)

    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Objects in scene: {len(world)}")

    renderer = Renderer(settings)

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    image = renderer.render(world, camera, render_rng)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    if elapsed > 0:
        print(f"  Samples per second: {(settings.width * settings.height * settings.samples_per_pixel) / elapsed:.0f}")

    # Ensure output directory exists
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {args.output}")
    renderer.save_image(image, output_path)

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
