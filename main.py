"""
main.py

usvg-scenes - command-line reader for vector-graphics scene files

Reads one or more scene XML files (unified ``SceneXML`` or legacy
``CurveSetXML``) and reports their image size and primitive counts.

Usage:
    python main.py scenes/unified/bubble.xml scenes/curve_only/poivron_orzan.xml
    python main.py scenes/mesh_backgrounds/sea.xml --preview sea.png

Dependencies:
    pip install numpy pillow platformdirs tomli-w
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from models import Scene
from scene_xml import SceneError, parse_scene_file
from settings import SettingsManager, get_settings

log = logging.getLogger(__name__)

RULE = "-" * 64


def format_report(path: str, scene: Scene) -> str:
    """Summary block printed for each file read."""
    lines = [
        RULE,
        f"Successfully read XML file: {path}",
        f"Image dimensions: {scene.width} x {scene.height}",
        f"Number of diffusion curves: {len(scene.diffusion_curves)}",
        f"Number of Poisson curves: {len(scene.poisson_curves)}",
        f"Number of gradient meshes: {len(scene.gradient_meshes)}",
    ]
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="usvg-scenes",
        description="Read diffusion curve / gradient mesh scene files and report their contents.",
    )
    parser.add_argument("paths", nargs="*", metavar="FILE", help="Scene XML file(s) to read")
    parser.add_argument("--preview", metavar="PNG", help="Write a wireframe preview (single FILE only)")
    parser.add_argument("--encoding", help="Text encoding of the input files (default from settings)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--print-settings", action="store_true", help="Print the effective settings as TOML")
    return parser


def configure_logging(level_name: str, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run(
    argv: Optional[List[str]] = None,
    settings_manager: Optional[SettingsManager] = None,
    out: TextIO = sys.stdout,
    err: TextIO = sys.stderr,
) -> int:
    """Run the command line.

    Args:
        argv: Arguments without the program name (``sys.argv[1:]`` if None).
        settings_manager: Settings source; the global manager if None.
        out: Stream for reports.
        err: Stream for error messages.

    Returns:
        Process exit status: 0 on success, 1 if a file could not be read,
        2 on a usage error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    manager = settings_manager or get_settings()
    settings = manager.settings
    configure_logging(settings.general.log_level, args.verbose)
    try:
        manager.ensure_file_complete()
    except OSError as e:
        log.warning("Cannot write settings file %s: %s", manager.get_settings_path(), e)

    if args.print_settings:
        print(f"# {manager.get_settings_path()}", file=out)
        print(manager.to_toml(), file=out)
        if not args.paths:
            return 0

    if not args.paths:
        parser.print_usage(err)
        print("usvg-scenes: error: no input files", file=err)
        return 2
    if args.preview and len(args.paths) != 1:
        print("usvg-scenes: error: --preview needs exactly one input file", file=err)
        return 2

    encoding = args.encoding or settings.general.encoding
    for path in args.paths:
        try:
            scene = parse_scene_file(path, encoding=encoding)
        except SceneError as e:
            log.debug("Failed to read %s", path, exc_info=True)
            print(f"Error reading {path}: {e}", file=err)
            return 1
        print(format_report(path, scene), file=out)

        if args.preview:
            from preview import save_wireframe

            save_wireframe(scene, args.preview, settings.preview)
            print(f"Wireframe preview written to {args.preview}", file=out)

    return 0


def main() -> None:
    """Application entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
