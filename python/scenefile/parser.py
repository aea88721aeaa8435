"""Section state machine for the scene text format.

A scene file is read one logical line at a time. Bracket tags such as
``[scene]`` or ``[/texture]`` move the parser between nested sections;
inside a leaf section (``[texture]``, ``[mesh]``, ``[material]``, ``[obj]``,
``[light]``) each ``key=value`` line updates the pending record for that
section, and the closing tag appends the record to the model.

Name references (a material's textures, an object's mesh and material) are
resolved against what has already been committed when the line is read.
A name declared later in the file is never picked up.

Usage:
    from scenefile.parser import parse_scene_text

    model = parse_scene_text(text)
    print(len(model.objects), model.objects[0].mesh)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Sequence

from .config import ParserConfig
from .lighting import Light, light_type_from_name
from .materials import Material
from .mesh import Mesh
from .model import SceneModel, SceneObject
from .scalars import float_prefix, parse_bool, parse_vector
from .textures import Texture
from .textutil import iter_logical_lines, split_key_value

logger = logging.getLogger(__name__)

__all__ = [
    "ParserState",
    "PendingRecords",
    "ParseContext",
    "process_line",
    "finish",
    "resolve_index",
    "parse_lines",
    "parse_scene_text",
]


class ParserState(Enum):
    """Nesting context of the parser."""
    OUTSIDE = "outside"
    SCENE = "scene"
    RESOURCES = "resources"
    IN_TEXTURE = "texture"
    IN_MESH = "mesh"
    IN_MATERIAL = "material"
    OBJECTS = "objects"
    IN_OBJECT = "obj"
    LIGHTS = "lights"
    IN_LIGHT = "light"


@dataclass
class PendingRecords:
    """One in-progress record per leaf section kind."""
    texture: Texture = field(default_factory=Texture)
    mesh: Mesh = field(default_factory=Mesh)
    material: Material = field(default_factory=Material)
    obj: SceneObject = field(default_factory=SceneObject)
    light: Light = field(default_factory=Light)


@dataclass
class ParseContext:
    """Everything one load needs: current section, pending records and output."""
    model: SceneModel = field(default_factory=SceneModel)
    config: ParserConfig = field(default_factory=ParserConfig)
    state: ParserState = ParserState.OUTSIDE
    pending: PendingRecords = field(default_factory=PendingRecords)


def resolve_index(name: str, records: Sequence) -> Optional[int]:
    """Index of the first record whose ``name`` equals ``name``, else None."""
    for index, record in enumerate(records):
        if record.name == name:
            return index
    return None


def _degraded(ctx: ParseContext, message: str, level: int = logging.DEBUG) -> None:
    if ctx.config.log_degradations:
        logger.log(level, message)


# ---------------------------------------------------------------------------
# Field interpreters
# ---------------------------------------------------------------------------

FieldSetter = Callable[[ParseContext, object, str], None]


def _assign_text(attr: str) -> FieldSetter:
    def setter(ctx: ParseContext, record: object, value: str) -> None:
        setattr(record, attr, value)
    return setter


def _assign_float(attr: str) -> FieldSetter:
    def setter(ctx: ParseContext, record: object, value: str) -> None:
        number = float_prefix(value)
        if number is None:
            _degraded(ctx, f"{attr}={value!r} is not a number; using 0.0")
            number = 0.0
        setattr(record, attr, number)
    return setter


def _assign_vector(attr: str) -> FieldSetter:
    def setter(ctx: ParseContext, record: object, value: str) -> None:
        vec = parse_vector(value)
        if vec is None:
            _degraded(ctx, f"{attr}={value!r} is not a 3-component vector; keeping {getattr(record, attr)}")
            return
        setattr(record, attr, vec)
    return setter


def _assign_bool(attr: str) -> FieldSetter:
    def setter(ctx: ParseContext, record: object, value: str) -> None:
        setattr(record, attr, parse_bool(value))
    return setter


def _assign_reference(attr: str, collection: str) -> FieldSetter:
    def setter(ctx: ParseContext, record: object, value: str) -> None:
        index = resolve_index(value, getattr(ctx.model, collection))
        if index is None:
            _degraded(ctx, f"{attr}={value!r} does not name a declared entry in {collection}", logging.WARNING)
        setattr(record, attr, index)
    return setter


def _assign_light_type(ctx: ParseContext, record: object, value: str) -> None:
    light_type = light_type_from_name(value)
    if light_type is None:
        _degraded(ctx, f"unknown light type {value!r}; keeping {record.type.label}")
        return
    record.type = light_type


_TEXTURE_FIELDS: Dict[str, FieldSetter] = {
    "file": _assign_text("file"),
    "name": _assign_text("name"),
}

_MESH_FIELDS: Dict[str, FieldSetter] = {
    "file": _assign_text("file"),
    "name": _assign_text("name"),
}

_MATERIAL_FIELDS: Dict[str, FieldSetter] = {
    "name": _assign_text("name"),
    "color": _assign_vector("color"),
    "specSize": _assign_float("spec_size"),
    "diffuseTex": _assign_reference("diffuse_tex", "textures"),
    "normalTex": _assign_reference("normal_tex", "textures"),
}

_OBJECT_FIELDS: Dict[str, FieldSetter] = {
    "name": _assign_text("name"),
    "position": _assign_vector("position"),
    "orientation": _assign_vector("orientation"),
    "scale": _assign_vector("scale"),
    "mesh": _assign_reference("mesh", "meshes"),
    "material": _assign_reference("material", "materials"),
}

_LIGHT_FIELDS: Dict[str, FieldSetter] = {
    "type": _assign_light_type,
    "diffuseColor": _assign_vector("diffuse_color"),
    "diffuseIntensity": _assign_float("diffuse_intensity"),
    "specularColor": _assign_vector("specular_color"),
    "specularIntensity": _assign_float("specular_intensity"),
    "position": _assign_vector("position"),
    "range": _assign_float("range"),
    "direction": _assign_vector("direction"),
    "shadows": _assign_bool("shadows"),
    "shadowBias": _assign_float("shadow_bias"),
    "coneInnerAngle": _assign_float("cone_inner_angle"),
    "coneOuterAngle": _assign_float("cone_outer_angle"),
}


# ---------------------------------------------------------------------------
# Section handlers
# ---------------------------------------------------------------------------

StateHandler = Callable[[ParseContext, str], ParserState]


@dataclass(frozen=True)
class _LeafSection:
    close_tag: str
    parent: ParserState
    slot: str
    collection: str
    fields: Dict[str, FieldSetter]
    factory: Callable[[], object]


_LEAF_SECTIONS: Dict[ParserState, _LeafSection] = {
    ParserState.IN_TEXTURE: _LeafSection(
        "[/texture]", ParserState.RESOURCES, "texture", "textures", _TEXTURE_FIELDS, Texture
    ),
    ParserState.IN_MESH: _LeafSection(
        "[/mesh]", ParserState.RESOURCES, "mesh", "meshes", _MESH_FIELDS, Mesh
    ),
    ParserState.IN_MATERIAL: _LeafSection(
        "[/material]", ParserState.RESOURCES, "material", "materials", _MATERIAL_FIELDS, Material
    ),
    ParserState.IN_OBJECT: _LeafSection(
        "[/obj]", ParserState.OBJECTS, "obj", "objects", _OBJECT_FIELDS, SceneObject
    ),
    ParserState.IN_LIGHT: _LeafSection(
        "[/light]", ParserState.LIGHTS, "light", "lights", _LIGHT_FIELDS, Light
    ),
}

# Tags recognized in each non-leaf state and the state they lead to.
_SECTION_TAGS: Dict[ParserState, Dict[str, ParserState]] = {
    ParserState.OUTSIDE: {
        "[scene]": ParserState.SCENE,
    },
    ParserState.SCENE: {
        "[resources]": ParserState.RESOURCES,
        "[objects]": ParserState.OBJECTS,
        "[lights]": ParserState.LIGHTS,
        "[/scene]": ParserState.OUTSIDE,
    },
    ParserState.RESOURCES: {
        "[texture]": ParserState.IN_TEXTURE,
        "[mesh]": ParserState.IN_MESH,
        "[material]": ParserState.IN_MATERIAL,
        "[/resources]": ParserState.SCENE,
    },
    ParserState.OBJECTS: {
        "[obj]": ParserState.IN_OBJECT,
        "[/objects]": ParserState.SCENE,
    },
    ParserState.LIGHTS: {
        "[light]": ParserState.IN_LIGHT,
        "[/lights]": ParserState.SCENE,
    },
}


def _section_handler(state: ParserState) -> StateHandler:
    tags = _SECTION_TAGS[state]

    def handle(ctx: ParseContext, line: str) -> ParserState:
        target = tags.get(line)
        if target is None:
            _degraded(ctx, f"ignoring {line!r} in [{state.value}]")
            return state
        return target

    return handle


def _commit(ctx: ParseContext, leaf: _LeafSection) -> None:
    record = getattr(ctx.pending, leaf.slot)
    getattr(ctx.model, leaf.collection).append(record)
    setattr(ctx.pending, leaf.slot, leaf.factory())


def _leaf_handler(state: ParserState) -> StateHandler:
    leaf = _LEAF_SECTIONS[state]

    def handle(ctx: ParseContext, line: str) -> ParserState:
        if line == leaf.close_tag:
            _commit(ctx, leaf)
            return leaf.parent
        pair = split_key_value(line, keep_equals=ctx.config.keep_equals)
        if pair is None:
            _degraded(ctx, f"ignoring {line!r} in [{state.value}]")
            return state
        key, value = pair
        setter = leaf.fields.get(key)
        if setter is None:
            _degraded(ctx, f"unknown key {key!r} in [{state.value}]")
            return state
        setter(ctx, getattr(ctx.pending, leaf.slot), value)
        return state

    return handle


_HANDLERS: Dict[ParserState, StateHandler] = {
    **{state: _section_handler(state) for state in _SECTION_TAGS},
    **{state: _leaf_handler(state) for state in _LEAF_SECTIONS},
}


def process_line(ctx: ParseContext, line: str) -> ParserState:
    """Feed one logical line to the parser and return the new state."""
    ctx.state = _HANDLERS[ctx.state](ctx, line)
    return ctx.state


def finish(ctx: ParseContext) -> SceneModel:
    """End of input. An open leaf section's pending record is dropped."""
    if ctx.state in _LEAF_SECTIONS:
        if ctx.config.log_degradations:
            logger.warning(f"input ended inside [{ctx.state.value}]; pending record discarded")
    elif ctx.state is not ParserState.OUTSIDE:
        _degraded(ctx, f"input ended inside [{ctx.state.value}]")
    return ctx.model


def parse_lines(lines: Iterable[str], config: Optional[ParserConfig] = None) -> SceneModel:
    """Parse already-extracted logical lines into a new model."""
    ctx = ParseContext(config=config if config is not None else ParserConfig())
    for line in lines:
        process_line(ctx, line)
    return finish(ctx)


def parse_scene_text(text: str, config: Optional[ParserConfig] = None) -> SceneModel:
    """Parse a whole scene document into a new :class:`SceneModel`."""
    return parse_lines(iter_logical_lines(text), config)
