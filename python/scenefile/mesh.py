# python/scenefile/mesh.py
# Mesh resource record declared in a [mesh] section.
# RELEVANT FILES:python/scenefile/scene.py,python/scenefile/parser.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Mesh:
    """A mesh file reference; ``name`` is what objects use to find it."""
    file: str = ""
    name: str = ""

    def to_dict(self) -> dict:
        return {"file": self.file, "name": self.name}
