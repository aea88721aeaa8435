# python/scenefile/lighting.py
# Light record and light type enumeration for [light] sections.
# RELEVANT FILES:python/scenefile/parser.py,python/scenefile/io.py,tests/test_parser.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from .vector import Vector3


class LightType(Enum):
    """Light type enumeration, in declaration order of the format."""
    POINT = 0
    SPOT = 1
    DIRECTIONAL = 2

    @property
    def label(self) -> str:
        return self.name.lower()


_LIGHT_TYPES: Dict[str, LightType] = {
    "point": LightType.POINT,
    "spot": LightType.SPOT,
    "directional": LightType.DIRECTIONAL,
}


def light_type_from_name(value: str) -> Optional[LightType]:
    """Exact, case-sensitive lookup; unknown names give None."""
    return _LIGHT_TYPES.get(value)


@dataclass
class Light:
    type: LightType = LightType.POINT
    diffuse_color: Vector3 = field(default_factory=Vector3.ones)
    diffuse_intensity: float = 1.0
    specular_color: Vector3 = field(default_factory=Vector3.ones)
    specular_intensity: float = 1.0
    position: Vector3 = field(default_factory=Vector3.zeros)
    range: float = 64.0
    direction: Vector3 = field(default_factory=Vector3.zeros)
    shadows: bool = True
    shadow_bias: float = 0.00001
    cone_inner_angle: float = 10.0
    cone_outer_angle: float = 12.0

    def to_dict(self) -> dict:
        return {
            "type": self.type.label,
            "diffuseColor": self.diffuse_color.to_list(),
            "diffuseIntensity": self.diffuse_intensity,
            "specularColor": self.specular_color.to_list(),
            "specularIntensity": self.specular_intensity,
            "position": self.position.to_list(),
            "range": self.range,
            "direction": self.direction.to_list(),
            "shadows": self.shadows,
            "shadowBias": self.shadow_bias,
            "coneInnerAngle": self.cone_inner_angle,
            "coneOuterAngle": self.cone_outer_angle,
        }
