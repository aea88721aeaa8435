#!/usr/bin/env python3
"""Load a scene file and print its diagnostic dump and object transforms.

Usage:
    python examples/scene_report.py [path/to/file.scene]
"""

import sys
from pathlib import Path

from _import_shim import ensure_repo_import

ensure_repo_import()

import numpy as np

import scenefile

DEFAULT_SCENE = Path(__file__).with_name("demo.scene")


def main() -> int:
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_SCENE
    scene = scenefile.Scene()
    if not scene.load(path):
        print(f"could not load {path}", file=sys.stderr)
        return 1

    scene.debug_output(sys.stdout)

    arrays = scene.object_arrays()
    with np.printoptions(precision=3, suppress=True):
        print("positions:")
        print(arrays["positions"])
        print("scales:")
        print(arrays["scales"])
    unresolved = int(np.count_nonzero(arrays["meshes"] < 0))
    print(f"objects without a mesh: {unresolved}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
