# python/scenefile/textures.py
# Texture resource record declared in a [texture] section.
# Exists so materials can reference textures by name and store their index.
# RELEVANT FILES:python/scenefile/materials.py,python/scenefile/parser.py,tests/test_parser.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Texture:
    file: str = ""
    name: str = ""

    def to_dict(self) -> dict:
        return {"file": self.file, "name": self.name}
