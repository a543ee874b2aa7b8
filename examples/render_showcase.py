#!/usr/bin/env python3
"""Render the showcase scene or a JSON scene description.

This script demonstrates end-to-end rendering: it builds the scene (the
built-in showcase or a JSON description), renders it through the camera
with Whitted-style shading and saves the image.

Usage:
    python -m examples.render_showcase [options]

Options:
    --width WIDTH       Image width in pixels (default: GLINT_WIDTH or 400)
    --height HEIGHT     Image height in pixels (default: GLINT_HEIGHT or 200)
    --depth DEPTH       Reflection/refraction depth (default: GLINT_MAX_DEPTH or 5)
    --scene FILE        JSON scene description (default: built-in showcase)
    --output OUTPUT     Output path, .ppm or .png (default: GLINT_OUTPUT)
    --preview           Show the result in a Matplotlib window
    --log-level LEVEL   Logging level (default: GLINT_LOG_LEVEL or INFO)
    --quiet             Suppress progress output

Example:
    python -m examples.render_showcase --width 200 --height 100 --output showcase.ppm
    python -m examples.render_showcase --scene examples/scenes/three_spheres.json
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti

from glint import config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the showcase scene or a JSON scene description.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help=f"Image width in pixels (default: {config.WIDTH}, or the scene's camera)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help=f"Image height in pixels (default: {config.HEIGHT}, or the scene's camera)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=config.MAX_DEPTH,
        help=f"Reflection/refraction recursion depth (default: {config.MAX_DEPTH})",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene description (default: built-in showcase scene)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=str(config.OUTPUT),
        help=f"Output file path, .ppm or .png (default: {config.OUTPUT})",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the rendered image in a Matplotlib window",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.LOG_LEVEL,
        help=f"Logging level (default: {config.LOG_LEVEL})",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_scene(
    settings: config.RenderSettings,
    scene_path: str | None = None,
    preview: bool = False,
    quiet: bool = False,
    size_overridden: bool = True,
) -> Path:
    """Render a scene and save it to ``settings.output``.

    Args:
        settings: Image size, depth and output path.
        scene_path: JSON scene description; None renders the showcase.
        preview: If True, open a Matplotlib window after saving.
        quiet: If True, suppress progress output.
        size_overridden: If False and a scene file is given, the scene's own
            camera size is used instead of ``settings.width/height``.

    Returns:
        Path to the saved image file.
    """
    from glint.core.renderer import Renderer
    from glint.preview.export import save_image
    from glint.scene.manager import SceneManager
    from glint.scene.showcase import create_showcase_scene

    if scene_path is None:
        if not quiet:
            print(f"Creating showcase scene ({settings.width}x{settings.height})...")
        scene, camera = create_showcase_scene(settings.width, settings.height)
    else:
        if not quiet:
            print(f"Loading scene from {scene_path}...")
        scene = SceneManager()
        scene.load(scene_path)
        if size_overridden:
            camera = scene.get_camera(settings.width, settings.height)
        else:
            camera = scene.get_camera()

    world = scene.get_world()
    renderer = Renderer(camera, max_depth=settings.max_depth)

    if not quiet:
        print(
            f"Rendering {camera.hsize}x{camera.vsize}, "
            f"{len(world.shapes)} shapes, {len(world.lights)} lights, "
            f"depth {settings.max_depth}..."
        )

    started = time.perf_counter()

    def report_rows(rows_done: int, total_rows: int) -> None:
        # Redraws one status line in place
        bar_width = 30
        filled = bar_width * rows_done // total_rows
        print(
            f"\r  [{'#' * filled}{'.' * (bar_width - filled)}] "
            f"row {rows_done}/{total_rows}, {time.perf_counter() - started:.1f}s",
            end="",
            flush=True,
        )

    canvas = renderer.render(world, callback=None if quiet else report_rows)
    if not quiet:
        print()

    output_file = settings.output
    output_file.parent.mkdir(parents=True, exist_ok=True)
    save_image(canvas, output_file)

    if not quiet:
        print(f"Wrote {output_file.resolve()} in {time.perf_counter() - started:.2f}s")

    if preview:
        from glint.preview.display import show_preview

        show_preview(canvas)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        from glint.logging_config import setup_logging

        settings = config.RenderSettings(
            width=args.width if args.width is not None else config.WIDTH,
            height=args.height if args.height is not None else config.HEIGHT,
            max_depth=args.depth,
            output=Path(args.output),
            log_level=args.log_level,
        )
        setup_logging("glint", settings.log_level)

        # Shading runs in Python; Taichi only backs the canvas
        ti.init(arch=ti.cpu)
        if not args.quiet:
            print("Using CPU backend")

        render_scene(
            settings,
            scene_path=args.scene,
            preview=args.preview,
            quiet=args.quiet,
            size_overridden=args.width is not None or args.height is not None,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
