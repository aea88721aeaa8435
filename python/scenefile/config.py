# python/scenefile/config.py
# Parser configuration parsing utilities
# Exists to let callers opt into value handling changes without touching parser code
# RELEVANT FILES: python/scenefile/scene.py, python/scenefile/parser.py, python/scenefile/cli.py, tests/test_config.py
from __future__ import annotations

import codecs
import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional, Tuple, Union

ConfigSource = Union["ParserConfig", Mapping[str, Any], str, Path, None]

# "truncate" keeps only the text between the first and second '=' of a line.
_VALUE_SPLIT_MODES: Dict[str, str] = {
    "truncate": "truncate",
    "legacy": "truncate",
    "first": "truncate",
    "keep": "keep",
    "rejoin": "keep",
    "full": "keep",
}

_ENCODING_ERRORS = {"strict", "replace", "ignore", "backslashreplace", "surrogateescape"}


def _normalize_key(value: Any) -> str:
    return "".join(
        c
        for c in str(value).strip().lower()
        if c not in {"-", "_", " ", "."}
    )


def _normalize_choice(value: Any, mapping: Mapping[str, str], label: str) -> str:
    key = _normalize_key(value)
    if key not in mapping:
        raise ValueError(f"Unknown {label}: {value!r}")
    return mapping[key]


@dataclass
class ParserConfig:
    value_split: str = "truncate"
    encoding: str = "utf-8"
    encoding_errors: str = "replace"
    log_degradations: bool = True

    @property
    def keep_equals(self) -> bool:
        return self.value_split == "keep"

    def to_dict(self) -> dict:
        return {
            "value_split": self.value_split,
            "encoding": self.encoding,
            "encoding_errors": self.encoding_errors,
            "log_degradations": self.log_degradations,
        }

    def copy(self) -> "ParserConfig":
        return copy.deepcopy(self)

    def validate(self) -> None:
        if self.value_split not in {"truncate", "keep"}:
            raise ValueError(f"value_split must be 'truncate' or 'keep', got {self.value_split!r}")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding: {self.encoding!r}") from None
        if self.encoding_errors not in _ENCODING_ERRORS:
            supported = ", ".join(sorted(_ENCODING_ERRORS))
            raise ValueError(
                f"encoding_errors must be one of {supported}, got {self.encoding_errors!r}"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["ParserConfig"] = None) -> "ParserConfig":
        base = copy.deepcopy(default) if default is not None else cls()
        if "value_split" in data:
            base.value_split = _normalize_choice(data["value_split"], _VALUE_SPLIT_MODES, "value split mode")
        if "encoding" in data:
            base.encoding = str(data["encoding"])
        if "encoding_errors" in data:
            base.encoding_errors = str(data["encoding_errors"]).strip().lower()
        if "log_degradations" in data:
            flag = data["log_degradations"]
            if not isinstance(flag, bool):
                raise ValueError(f"log_degradations must be true or false, got {flag!r}")
            base.log_degradations = flag
        return base


def _load_from_path(path: Path) -> Mapping[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in {".json", ""}:
        data = json.loads(text)
        if not isinstance(data, Mapping):
            raise TypeError(f"Parser config file must hold a JSON object: {path}")
        return data
    raise ValueError(f"Unsupported parser config file format: {path}")


def _build_override_mapping(overrides: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in overrides.items():
        if key in {"value_split", "split_values"}:
            out["value_split"] = value
        elif key == "keep_equals":
            out["value_split"] = "keep" if value else "truncate"
        elif key == "encoding":
            out["encoding"] = value
        elif key in {"encoding_errors", "errors"}:
            out["encoding_errors"] = value
        elif key in {"log_degradations", "verbose_degradations"}:
            out["log_degradations"] = value
        else:
            # Unknown keys are handled by caller.
            pass
    return out


def load_parser_config(config: ConfigSource = None, overrides: Optional[Mapping[str, Any]] = None) -> ParserConfig:
    if isinstance(config, ParserConfig):
        cfg = config.copy()
    elif isinstance(config, Mapping):
        cfg = ParserConfig.from_mapping(config)
    elif isinstance(config, (str, Path)):
        cfg = ParserConfig.from_mapping(_load_from_path(Path(config)))
    elif config is None:
        cfg = ParserConfig()
    else:
        raise TypeError("config must be ParserConfig, mapping, path, or None")

    if overrides:
        merged = _build_override_mapping(overrides)
        if merged:
            cfg = ParserConfig.from_mapping(merged, cfg)
    cfg.validate()
    return cfg


def split_parser_overrides(kwargs: MutableMapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    overrides: Dict[str, Any] = {}
    remaining: Dict[str, Any] = {}
    recognized = {
        "value_split",
        "split_values",
        "keep_equals",
        "encoding",
        "encoding_errors",
        "errors",
        "log_degradations",
        "verbose_degradations",
    }
    for key, value in list(kwargs.items()):
        if key in recognized:
            overrides[key] = kwargs.pop(key)
        else:
            remaining[key] = value
    return overrides, remaining
