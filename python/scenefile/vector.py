"""Three-component float vector used for positions, colors and scales.

Scene records store plain Python floats; ``to_array`` hands a float32 copy to
numpy consumers, matching the single-precision storage of the scene format.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

__all__ = ["Vector3"]


@dataclass(frozen=True)
class Vector3:
    """Immutable (x, y, z) triple."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zeros(cls) -> "Vector3":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def ones(cls) -> "Vector3":
        return cls(1.0, 1.0, 1.0)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_list(self) -> list:
        return [self.x, self.y, self.z]

    def to_array(self) -> np.ndarray:
        """Return the vector as a float32 array of shape (3,)."""
        return np.array([self.x, self.y, self.z], dtype=np.float32)

    def __str__(self) -> str:
        return f"{self.x:g}, {self.y:g}, {self.z:g}"
