# python/scenefile/scene.py
# Scene facade: load a scene file and expose its ordered collections read-only.
# Exists to give callers the load/accessor/count surface over the parser and model.
# RELEVANT FILES:python/scenefile/parser.py,python/scenefile/model.py,python/scenefile/io.py,tests/test_scene.py

from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional, TextIO, Tuple, Union

import numpy as np

from .config import ConfigSource, ParserConfig, load_parser_config, split_parser_overrides
from .io import SceneSource, format_scene, read_scene_source, scene_to_dict, scene_to_json
from .lighting import Light
from .materials import Material
from .mesh import Mesh
from .model import SceneModel, SceneObject
from .parser import parse_scene_text
from .textures import Texture

logger = logging.getLogger(__name__)


class Scene:
    """Parsed scene with textures, meshes, materials, objects and lights.

    Each ``load`` clears the current contents first. A failed load leaves the
    scene empty and returns False.

    Example:
        >>> scene = Scene()
        >>> scene.load("demo.scene")
        True
        >>> scene.object_count
        3
    """

    def __init__(self, config: ConfigSource = None, **options: Any):
        overrides, unknown = split_parser_overrides(options)
        if unknown:
            names = ", ".join(sorted(unknown))
            raise TypeError(f"Unknown Scene option(s): {names}")
        self._config = load_parser_config(config, overrides)
        self._model = SceneModel()

    @property
    def config(self) -> ParserConfig:
        return self._config

    # ---- loading ----

    def load(self, source: SceneSource) -> bool:
        """Replace the scene with the contents of ``source`` (a path or bytes).

        Returns False when the source cannot be read, is empty or is not a
        path or bytes; the scene is left empty in that case.
        """
        self.clear()
        try:
            text = read_scene_source(source, self._config)
        except (OSError, ValueError, TypeError) as exc:
            logger.warning(f"Scene load failed: {exc}")
            return False
        self._model = parse_scene_text(text, self._config)
        logger.debug(f"Loaded scene: {self._model.counts()}")
        return True

    def loads(self, text: Union[str, bytes]) -> bool:
        """Like :meth:`load` but takes the document itself."""
        self.clear()
        if isinstance(text, (bytes, bytearray)):
            try:
                text = read_scene_source(text, self._config)
            except ValueError as exc:
                logger.warning(f"Scene load failed: {exc}")
                return False
        if not isinstance(text, str):
            logger.warning(f"Scene load failed: unsupported scene text type: {type(text).__name__}")
            return False
        if not text:
            logger.warning("Scene load failed: empty scene text")
            return False
        self._model = parse_scene_text(text, self._config)
        return True

    def clear(self) -> None:
        self._model = SceneModel()

    # ---- accessors ----

    @property
    def model(self) -> SceneModel:
        return self._model

    @property
    def textures(self) -> Tuple[Texture, ...]:
        return tuple(self._model.textures)

    @property
    def meshes(self) -> Tuple[Mesh, ...]:
        return tuple(self._model.meshes)

    @property
    def materials(self) -> Tuple[Material, ...]:
        return tuple(self._model.materials)

    @property
    def objects(self) -> Tuple[SceneObject, ...]:
        return tuple(self._model.objects)

    @property
    def lights(self) -> Tuple[Light, ...]:
        return tuple(self._model.lights)

    @property
    def texture_count(self) -> int:
        return len(self._model.textures)

    @property
    def mesh_count(self) -> int:
        return len(self._model.meshes)

    @property
    def material_count(self) -> int:
        return len(self._model.materials)

    @property
    def object_count(self) -> int:
        return len(self._model.objects)

    @property
    def light_count(self) -> int:
        return len(self._model.lights)

    def object_arrays(self) -> Dict[str, np.ndarray]:
        return self._model.object_arrays()

    # ---- inspection ----

    def to_dict(self) -> dict:
        return scene_to_dict(self._model)

    def snapshot(self) -> str:
        return scene_to_json(self._model)

    def debug_output(self, stream: Optional[TextIO] = None) -> None:
        """Write the diagnostic dump to ``stream`` (stderr by default)."""
        out = stream if stream is not None else sys.stderr
        out.write(format_scene(self._model))

    def __repr__(self) -> str:
        c = self._model.counts()
        return (
            f"Scene(textures={c['textures']}, meshes={c['meshes']}, materials={c['materials']}, "
            f"objects={c['objects']}, lights={c['lights']})"
        )
