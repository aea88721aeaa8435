# python/scenefile/__init__.py
# Public Python API for the scenefile scene description parser
# Exists to re-export the load surface, records and helpers from one place
# RELEVANT FILES: python/scenefile/scene.py, python/scenefile/parser.py, python/scenefile/config.py, tests/test_scene.py
from .config import ParserConfig, load_parser_config
from .io import format_scene, read_scene_source, save_scene_json, scene_to_dict, scene_to_json
from .lighting import Light, LightType
from .materials import Material
from .mesh import Mesh
from .model import SceneModel, SceneObject
from .parser import ParseContext, ParserState, parse_scene_text, process_line, resolve_index
from .scalars import parse_bool, parse_float, parse_vector
from .scene import Scene
from .textures import Texture
from .vector import Vector3

__version__ = "0.1.0"

__all__ = [
    "Scene",
    "SceneModel",
    "SceneObject",
    "Texture",
    "Mesh",
    "Material",
    "Light",
    "LightType",
    "Vector3",
    "ParserConfig",
    "load_parser_config",
    "ParseContext",
    "ParserState",
    "parse_scene_text",
    "process_line",
    "resolve_index",
    "parse_float",
    "parse_vector",
    "parse_bool",
    "read_scene_source",
    "scene_to_dict",
    "scene_to_json",
    "save_scene_json",
    "format_scene",
    "load_scene",
]


def load_scene(source, config=None, **options) -> Scene:
    """Create a :class:`Scene` and load ``source`` into it.

    Raises RuntimeError when the source cannot be loaded.
    """
    scene = Scene(config=config, **options)
    if not scene.load(source):
        raise RuntimeError(f"scenefile: could not load scene from {source!r}")
    return scene
