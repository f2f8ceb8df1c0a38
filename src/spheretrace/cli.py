"""Command-line entry point.

Renders a scene file, or a randomly generated scene when no input is
given, and writes the result as a PNG.

Usage:
    spheretrace [options]
    python -m spheretrace [options]

Options:
    --input, -i PATH      Scene JSON file (default: random scene)
    --output, -o PATH     Output PNG path (default: output.png)
    --width, -w WIDTH     Image width in pixels (default: 256)
    --height, -H HEIGHT   Image height in pixels (default: 256)
    --samples, -s N       Indirect samples per bounce (default: 16)
    --depth, -d N         Maximum recursion depth (default: 3)
    --seed SEED           Seed for reproducible renders
    --tone-map METHOD     Tone mapping: none or reinhard (default: reinhard)
    --gamma GAMMA         Gamma correction after tone mapping (default: 1.0)
    --preview             Show a live preview window while rendering
    --show                Show the finished image in a Matplotlib window
    --quiet               Only report warnings and errors

Example:
    spheretrace -i examples/scenes/three_spheres.json -w 128 -H 128 -s 8
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import numpy as np
import taichi as ti

from spheretrace.config import TONE_MAP_METHODS, RenderConfig

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    defaults = RenderConfig()
    parser = argparse.ArgumentParser(
        prog="spheretrace",
        description="Render a scene of diffuse spheres and point lights.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--input",
        "-i",
        type=str,
        default=None,
        help="Input scene JSON file path (default: generate a random scene)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=defaults.output,
        help=f"Output PNG file path (default: {defaults.output})",
    )
    parser.add_argument(
        "--width",
        "-w",
        type=int,
        default=defaults.width,
        help=f"Image width in pixels (default: {defaults.width})",
    )
    parser.add_argument(
        "--height",
        "-H",
        type=int,
        default=defaults.height,
        help=f"Image height in pixels (default: {defaults.height})",
    )
    parser.add_argument(
        "--samples",
        "-s",
        type=int,
        default=defaults.samples,
        help=f"Indirect samples per bounce (default: {defaults.samples})",
    )
    parser.add_argument(
        "--depth",
        "-d",
        type=int,
        default=defaults.depth,
        help=f"Maximum recursion depth (default: {defaults.depth})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random source (default: unseeded)",
    )
    parser.add_argument(
        "--tone-map",
        type=str,
        choices=TONE_MAP_METHODS,
        default=defaults.tone_map,
        help=f"Tone mapping method (default: {defaults.tone_map})",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=defaults.gamma,
        help=f"Gamma correction applied after tone mapping (default: {defaults.gamma})",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show a live preview window while rendering",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Show the finished image in a Matplotlib window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> RenderConfig:
    """Build a validated render configuration from parsed arguments."""
    config = RenderConfig(
        input=args.input,
        output=args.output,
        width=args.width,
        height=args.height,
        samples=args.samples,
        depth=args.depth,
        seed=args.seed,
        tone_map=args.tone_map,
        gamma=args.gamma,
        preview=args.preview,
        show=args.show,
    )
    config.validate()
    return config


def render(config: RenderConfig) -> Path:
    """Render according to a configuration and save the PNG.

    Taichi must already be initialized.

    Args:
        config: The render settings.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports so Taichi is initialized before any field is created
    from spheretrace.core.progressive import ProgressiveRenderer
    from spheretrace.preview.display import process_image_for_display, show_preview
    from spheretrace.preview.export import save_png
    from spheretrace.scene.loader import load_scene, random_scene

    rng = np.random.default_rng(config.seed)

    if config.input:
        scene = load_scene(config.input)
        logger.info("Loaded scene %s", config.input)
    else:
        scene = random_scene(rng)
        logger.info("Generated random scene")

    renderer = ProgressiveRenderer(
        scene,
        config.width,
        config.height,
        depth=config.depth,
        indirect_samples=config.samples,
        rng=rng,
    )

    preview = None
    if config.preview:
        from spheretrace.preview.interactive import InteractivePreview

        if InteractivePreview.is_display_available():
            preview = InteractivePreview(config.width, config.height)
        else:
            logger.warning("No display available, rendering without preview")

    def refresh(done: int, total: int) -> None:
        if preview is not None and preview.is_running():
            preview.update_image(
                process_image_for_display(
                    renderer.get_image_numpy(), tone_map=config.tone_map, gamma=config.gamma
                )
            )
            preview.show_frame()

    start_time = time.time()
    renderer.render(callback=refresh)
    logger.info("Render time: %.2fs", time.time() - start_time)

    image = renderer.get_image_numpy()
    output = save_png(image, config.output, tone_map=config.tone_map, gamma=config.gamma)
    logger.info("Output written to %s", output)

    if preview is not None:
        preview.run()

    if config.show:
        show_preview(
            image, tone_map=config.tone_map, gamma=config.gamma, title=str(output)
        )

    return output


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(message)s",
    )

    try:
        config = config_from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    ti.init(arch=ti.cpu)

    try:
        render(config)
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
