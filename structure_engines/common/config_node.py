"""Dotted-path view over a parsed blueprint document."""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple


class ConfigurationNode:
    """
    A node of a nested configuration tree (as produced by YAML or JSON).

    Paths are dotted (``"materials.walls.type"``). Keys that themselves contain
    dots, such as picker properties written flat (``inner.material: stone``),
    are matched before the path is split.
    """

    def __init__(self, value: Any = None, path: str = ""):
        self._value = value
        self.path = path

    @property
    def value(self) -> Any:
        return self._value

    def exists(self) -> bool:
        return self._value is not None

    def is_section(self) -> bool:
        return isinstance(self._value, Mapping)

    def get_node(self, path: str) -> "ConfigurationNode":
        """Return the node at ``path``, or an empty node if nothing is there."""
        full = f"{self.path}.{path}" if self.path else path
        return ConfigurationNode(_lookup(self._value, path), full)

    def get_string(self, path: Optional[str] = None, default: Optional[str] = None) -> Optional[str]:
        node = self.get_node(path) if path else self
        raw = node.value
        if raw is None or isinstance(raw, (Mapping, list)):
            return default
        if isinstance(raw, bool):
            return "true" if raw else "false"
        return str(raw)

    def get_keys(self) -> List[str]:
        if not self.is_section():
            return []
        return [str(k) for k in self._value.keys()]

    def children(self) -> Iterator[Tuple[str, "ConfigurationNode"]]:
        """Yield ``(key, node)`` pairs in document order."""
        if not self.is_section():
            return
        for key, raw in self._value.items():
            child_path = f"{self.path}.{key}" if self.path else str(key)
            yield str(key), ConfigurationNode(raw, child_path)

    def to_properties(self) -> Dict[str, str]:
        """Flatten the subtree into a dotted string-keyed property map."""
        out: Dict[str, str] = {}
        _flatten(self._value, "", out)
        return out

    def __repr__(self) -> str:
        return f"ConfigurationNode(path={self.path!r}, value={self._value!r})"


def _lookup(value: Any, path: str) -> Any:
    if not path:
        return value
    if not isinstance(value, Mapping):
        return None
    if path in value:
        return value[path]
    parts = path.split(".")
    # Longest key prefix first so "inner.material.x" can hit a literal "inner.material" key.
    for cut in range(len(parts) - 1, 0, -1):
        head = ".".join(parts[:cut])
        if head in value:
            return _lookup(value[head], ".".join(parts[cut:]))
    return None


def _flatten(value: Any, prefix: str, out: Dict[str, str]) -> None:
    if isinstance(value, Mapping):
        for key, raw in value.items():
            _flatten(raw, f"{prefix}.{key}" if prefix else str(key), out)
        return
    if value is None or not prefix:
        return
    if isinstance(value, bool):
        out[prefix] = "true" if value else "false"
    else:
        out[prefix] = str(value)
