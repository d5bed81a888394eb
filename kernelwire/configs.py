"""Key/value configuration files: ``KEY=VALUE`` per line, ``#`` starts a comment."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Union

PathArg = Union[str, "PathLike[str]"]

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))"
)


def _leading_int(text: str) -> int:
    """Parse the leading integer of ``text``, or 0 when there is none."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _leading_float(text: str) -> float:
    """Parse the leading number of ``text``, or 0.0 when there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


@dataclass
class Config:
    """A parsed configuration file."""

    path: str = ""
    properties: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: PathArg) -> "Config":
        """Read and parse a configuration file; raises ``OSError`` if unreadable."""
        text = Path(path).read_text(encoding="utf-8")
        properties: dict[str, str] = {}
        for raw_line in text.splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            key, sep, value = line.partition("=")
            if not sep:
                continue
            properties[key.strip()] = value.strip()
        return cls(path=str(path), properties=properties)

    def has_property(self, name: str) -> bool:
        return name in self.properties

    def get_int(self, name: str) -> int:
        """Integer value of ``name``, or -1 when the key is absent."""
        if name not in self.properties:
            return -1
        return _leading_int(self.properties[name])

    def get_string(self, name: str) -> str | None:
        """String value of ``name``, or ``None`` when the key is absent."""
        return self.properties.get(name)

    def get_double(self, name: str) -> float:
        """Floating-point value of ``name``, or -1.0 when the key is absent."""
        if name not in self.properties:
            return -1.0
        return _leading_float(self.properties[name])


def load_config(path: PathArg) -> Config:
    """Load a module's configuration file, raising if it cannot be read."""
    return Config.from_file(path)