# python/scenefile/cli.py
# Command-line front end: load a scene file, then print a summary, dump or JSON.
# RELEVANT FILES:python/scenefile/scene.py,python/scenefile/io.py,tests/test_cli.py

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .io import format_scene, save_scene_json
from .scene import Scene


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="scenefile",
        description="Parse a scene description file and report its contents.",
    )
    parser.add_argument("scene", type=Path, help="Path to the scene file.")
    parser.add_argument("--json", dest="json_out", type=Path, help="Write the parsed scene as JSON to this path.")
    parser.add_argument("--dump", action="store_true", help="Print the diagnostic dump to stdout.")
    parser.add_argument("--config", type=Path, help="Parser config JSON file.")
    parser.add_argument(
        "--value-split",
        choices=["truncate", "keep"],
        help="How to treat '=' inside values (default: truncate).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log parser degradations at DEBUG level.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = {}
    if args.value_split is not None:
        options["value_split"] = args.value_split
    try:
        scene = Scene(config=args.config, **options)
    except (OSError, ValueError, TypeError) as exc:
        print(f"Error: invalid parser config: {exc}", file=sys.stderr)
        return 2

    if not scene.load(args.scene):
        print(f"Error: could not load scene {args.scene}", file=sys.stderr)
        return 1

    if args.dump:
        sys.stdout.write(format_scene(scene.model))
    if args.json_out is not None:
        save_scene_json(scene.model, args.json_out)
    if not args.dump and args.json_out is None:
        c = scene.model.counts()
        print(
            f"{args.scene}: {c['textures']} textures, {c['meshes']} meshes, "
            f"{c['materials']} materials, {c['objects']} objects, {c['lights']} lights"
        )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
