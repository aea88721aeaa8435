# Ensure `import scenefile` works from a fresh clone:
# put repo/python on sys.path so the package is importable without prior install.
# Set SCENEFILE_NO_BOOTSTRAP=1 to test an installed copy instead.
import os
import sys
from pathlib import Path

import pytest


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _ensure_python_path():
    pkg_dir = _repo_root() / "python"
    if str(pkg_dir) not in sys.path:
        sys.path.insert(0, str(pkg_dir))


if os.environ.get("SCENEFILE_NO_BOOTSTRAP") != "1":
    _ensure_python_path()


MINIMAL_SCENE = """\
[scene]
  [resources]
    [texture]
      file=tex/brick.png
      name=brick
    [/texture]
    [mesh]
      file=mesh/cube.obj
      name=cube
    [/mesh]
    [material]
      name=brickMat
      color=0.5,0.25,1
      specSize=16
      diffuseTex=brick
      normalTex=brick
    [/material]
  [/resources]
  [objects]
    [obj]
      name=box
      position=1,2,3
      mesh=cube
      material=brickMat
    [/obj]
  [/objects]
  [lights]
    [light]
      type=spot
      position=0,10,0
      direction=0,-1,0
      shadows=yes
    [/light]
  [/lights]
[/scene]
"""


@pytest.fixture
def minimal_scene_text() -> str:
    return MINIMAL_SCENE


@pytest.fixture
def write_scene(tmp_path):
    """Write scene text to a file under tmp_path and return its path."""
    def _write(text, name: str = "test.scene") -> Path:
        path = tmp_path / name
        if isinstance(text, bytes):
            path.write_bytes(text)
        else:
            path.write_text(text, encoding="utf-8", newline="")
        return path
    return _write
