# python/scenefile/io.py
# Source acquisition, JSON export and the diagnostic text dump for scenes
# The parser itself never touches files; everything on disk goes through here

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from .config import ParserConfig
from .model import SceneModel

logger = logging.getLogger(__name__)

SceneSource = Union[str, "os.PathLike[str]", bytes, bytearray]


# ========== Source acquisition ==========

def read_scene_source(source: SceneSource, config: Optional[ParserConfig] = None) -> str:
    """Return the full text of a scene source.

    Parameters
    ----------
    source : str, PathLike, bytes or bytearray
        A filesystem path, or the raw file contents as bytes.
    config : ParserConfig, optional
        Supplies the encoding and decode error policy.

    Returns
    -------
    str
        Decoded text, never empty.

    Raises
    ------
    FileNotFoundError
        If the path does not exist.
    IsADirectoryError
        If the path names a directory.
    ValueError
        If the source holds no bytes.
    TypeError
        If ``source`` is of an unsupported type.
    """
    cfg = config if config is not None else ParserConfig()

    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
        label = "<bytes>"
    elif isinstance(source, (str, os.PathLike)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Scene file not found: {path}")
        if path.is_dir():
            raise IsADirectoryError(f"Scene source is a directory: {path}")
        data = path.read_bytes()
        label = str(path)
    else:
        raise TypeError(f"Unsupported scene source type: {type(source).__name__}")

    if not data:
        raise ValueError(f"Scene source is empty: {label}")

    logger.debug(f"read {len(data)} bytes from {label}")
    return data.decode(cfg.encoding, errors=cfg.encoding_errors)


# ========== Export ==========

def scene_to_dict(model: SceneModel) -> dict:
    """JSON-ready view of the model; unset references become None."""
    return model.to_dict()


def scene_to_json(model: SceneModel, indent: Optional[int] = 2) -> str:
    return json.dumps(scene_to_dict(model), indent=indent)


def save_scene_json(model: SceneModel, path: Union[str, Path], indent: Optional[int] = 2) -> Path:
    out = Path(path)
    out.write_text(scene_to_json(model, indent=indent) + "\n", encoding="utf-8")
    logger.info(f"Saved scene JSON: {out}")
    return out


# ========== Diagnostic dump ==========

def _num(value: float) -> str:
    return f"{value:g}"


def _ref(index: Optional[int]) -> str:
    return "unset" if index is None else str(index)


def format_scene(model: SceneModel) -> str:
    """Render every collection as ``[i].field = value`` lines."""
    lines = []

    lines.append(f"Textures: {len(model.textures)}")
    for i, tex in enumerate(model.textures):
        lines.append(f"[{i}].file = {tex.file}")
        lines.append(f"[{i}].name = {tex.name}")
    lines.append("")

    lines.append(f"Meshes: {len(model.meshes)}")
    for i, mesh in enumerate(model.meshes):
        lines.append(f"[{i}].file = {mesh.file}")
        lines.append(f"[{i}].name = {mesh.name}")
    lines.append("")

    lines.append(f"Materials: {len(model.materials)}")
    for i, mat in enumerate(model.materials):
        lines.append(f"[{i}].name = {mat.name}")
        lines.append(f"[{i}].color = {mat.color}")
        lines.append(f"[{i}].specSize = {_num(mat.spec_size)}")
        lines.append(f"[{i}].diffuseTex = {_ref(mat.diffuse_tex)}")
        lines.append(f"[{i}].normalTex = {_ref(mat.normal_tex)}")
    lines.append("")

    lines.append(f"Objects: {len(model.objects)}")
    for i, obj in enumerate(model.objects):
        lines.append(f"[{i}].name = {obj.name}")
        lines.append(f"[{i}].position = {obj.position}")
        lines.append(f"[{i}].orientation = {obj.orientation}")
        lines.append(f"[{i}].scale = {obj.scale}")
        lines.append(f"[{i}].mesh = {_ref(obj.mesh)}")
        lines.append(f"[{i}].material = {_ref(obj.material)}")
        lines.append("")

    lines.append(f"Lights: {len(model.lights)}")
    for i, light in enumerate(model.lights):
        lines.append(f"[{i}].type = {light.type.label}")
        lines.append(f"[{i}].diffuseColor = {light.diffuse_color}")
        lines.append(f"[{i}].diffuseIntensity = {_num(light.diffuse_intensity)}")
        lines.append(f"[{i}].specularColor = {light.specular_color}")
        lines.append(f"[{i}].specularIntensity = {_num(light.specular_intensity)}")
        lines.append(f"[{i}].position = {light.position}")
        lines.append(f"[{i}].range = {_num(light.range)}")
        lines.append(f"[{i}].direction = {light.direction}")
        lines.append(f"[{i}].shadows = {'true' if light.shadows else 'false'}")
        lines.append(f"[{i}].shadowBias = {_num(light.shadow_bias)}")
        lines.append(f"[{i}].coneInnerAngle = {_num(light.cone_inner_angle)}")
        lines.append(f"[{i}].coneOuterAngle = {_num(light.cone_outer_angle)}")
        lines.append("")

    return "\n".join(lines) + "\n"
