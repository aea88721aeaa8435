# python/scenefile/materials.py
# Material record with color, specular size and texture slots.
# Texture slots hold indices into the scene's texture list, None when unset.
# RELEVANT FILES:python/scenefile/textures.py,python/scenefile/parser.py,tests/test_parser.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .vector import Vector3


@dataclass
class Material:
    name: str = ""
    color: Vector3 = field(default_factory=Vector3.ones)
    spec_size: float = 0.0
    diffuse_tex: Optional[int] = None
    normal_tex: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "color": self.color.to_list(),
            "specSize": self.spec_size,
            "diffuseTex": self.diffuse_tex,
            "normalTex": self.normal_tex,
        }
