# python/scenefile/model.py
# Placed scene objects and the ordered collections produced by a load.
# Exists to hold parser output independently of the Scene facade.
# RELEVANT FILES:python/scenefile/parser.py,python/scenefile/scene.py,python/scenefile/io.py,tests/test_model.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from .lighting import Light
from .materials import Material
from .mesh import Mesh
from .textures import Texture
from .vector import Vector3


@dataclass
class SceneObject:
    """An instance of a mesh placed in the scene with a material."""
    name: str = ""
    position: Vector3 = field(default_factory=Vector3.zeros)
    orientation: Vector3 = field(default_factory=Vector3.zeros)
    scale: Vector3 = field(default_factory=Vector3.ones)
    mesh: Optional[int] = None
    material: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "position": self.position.to_list(),
            "orientation": self.orientation.to_list(),
            "scale": self.scale.to_list(),
            "mesh": self.mesh,
            "material": self.material,
        }


def _vectors_to_array(vectors: Sequence[Vector3]) -> np.ndarray:
    if not vectors:
        return np.zeros((0, 3), dtype=np.float32)
    return np.array([v.as_tuple() for v in vectors], dtype=np.float32)


def _indices_to_array(indices: Sequence[Optional[int]]) -> np.ndarray:
    return np.array([-1 if i is None else i for i in indices], dtype=np.int32)


@dataclass
class SceneModel:
    """The five resource collections, each in declaration order."""
    textures: List[Texture] = field(default_factory=list)
    meshes: List[Mesh] = field(default_factory=list)
    materials: List[Material] = field(default_factory=list)
    objects: List[SceneObject] = field(default_factory=list)
    lights: List[Light] = field(default_factory=list)

    def clear(self) -> None:
        self.textures.clear()
        self.meshes.clear()
        self.materials.clear()
        self.objects.clear()
        self.lights.clear()

    def is_empty(self) -> bool:
        return not (self.textures or self.meshes or self.materials or self.objects or self.lights)

    def counts(self) -> Dict[str, int]:
        return {
            "textures": len(self.textures),
            "meshes": len(self.meshes),
            "materials": len(self.materials),
            "objects": len(self.objects),
            "lights": len(self.lights),
        }

    def object_arrays(self) -> Dict[str, np.ndarray]:
        """Pack object transforms and references into numpy arrays.

        Vector fields become float32 (N, 3) arrays. Mesh and material indices
        become int32 (N,) arrays in which -1 marks an unset reference.
        """
        return {
            "positions": _vectors_to_array([o.position for o in self.objects]),
            "orientations": _vectors_to_array([o.orientation for o in self.objects]),
            "scales": _vectors_to_array([o.scale for o in self.objects]),
            "meshes": _indices_to_array([o.mesh for o in self.objects]),
            "materials": _indices_to_array([o.material for o in self.objects]),
        }

    def to_dict(self) -> dict:
        return {
            "textures": [t.to_dict() for t in self.textures],
            "meshes": [m.to_dict() for m in self.meshes],
            "materials": [m.to_dict() for m in self.materials],
            "objects": [o.to_dict() for o in self.objects],
            "lights": [light.to_dict() for light in self.lights],
        }
