"""Material pickers: per-voxel material decisions.

A picker is created by type name from the registry, configured once from a
flat property map, then asked once per voxel. ``None`` means "no material".
"""
from __future__ import annotations

import abc
from random import Random
from typing import Callable, Dict, List, Mapping, Optional, Type

from structure_engines.common.errors import MaterialSetterLoadingError
from structure_engines.materials.registry import Material, MaterialRegistry, get_material_registry


class MaterialPicker(abc.ABC):
    """Decides which material goes in a voxel, given whether it's on the shell."""

    def __init__(self, name: str, registry: Optional[MaterialRegistry] = None):
        self.name = name
        self._registry = registry

    @property
    def registry(self) -> MaterialRegistry:
        return self._registry or get_material_registry()

    @abc.abstractmethod
    def configure(self, properties: Mapping[str, str]) -> None:
        pass

    @abc.abstractmethod
    def pick(self, outer: bool) -> Optional[Material]:
        pass

    def set_random_source(self, random: Random) -> None:
        """Only random pickers draw from the shared source."""

    # --- Property helpers ---

    def _require(self, properties: Mapping[str, str], key: str) -> str:
        raw = properties.get(key)
        if raw is None or str(raw).strip() == "":
            raise MaterialSetterLoadingError(f'Picker "{self.name}": "{key}" is missing')
        return str(raw).strip()

    def _int(self, properties: Mapping[str, str], key: str, default: int = 0) -> int:
        raw = properties.get(key)
        if raw is None:
            return default
        try:
            return int(str(raw).strip())
        except ValueError:
            raise MaterialSetterLoadingError(f'Picker "{self.name}": "{key}" is not an integer: {raw!r}')

    def _material(self, properties: Mapping[str, str], prefix: str = "") -> Material:
        material_id = self._require(properties, f"{prefix}material")
        material = self.registry.get(material_id)
        if material is None:
            raise MaterialSetterLoadingError(f'Picker "{self.name}": unknown material "{material_id}"')
        return material.with_data(self._int(properties, f"{prefix}data", material.data))

    def _odds(self, properties: Mapping[str, str], prefix: str = "") -> int:
        key = f"{prefix}odds"
        if key not in properties and f"{prefix}odd" in properties:
            key = f"{prefix}odd"
        self._require(properties, key)
        odds = self._int(properties, key)
        if not 0 <= odds <= 100:
            raise MaterialSetterLoadingError(f'Picker "{self.name}": "{key}" must be within 0..100, got {odds}')
        return odds


class RandomPicker(MaterialPicker):
    def __init__(self, name: str, registry: Optional[MaterialRegistry] = None):
        super().__init__(name, registry)
        self._random = Random()

    def set_random_source(self, random: Random) -> None:
        self._random = random

    def _roll(self, odds: int) -> bool:
        return self._random.randrange(100) < odds


class SimplePicker(MaterialPicker):
    """Always the same material."""

    material: Material

    def configure(self, properties: Mapping[str, str]) -> None:
        self.material = self._material(properties)

    def pick(self, outer: bool) -> Optional[Material]:
        return self.material

    def __repr__(self) -> str:
        return f"SimplePicker(name={self.name!r}, material={self.material!s})"


class RandomSimplePicker(RandomPicker):
    """The material with ``odds`` percent chance, otherwise nothing."""

    material: Material
    odds: int

    def configure(self, properties: Mapping[str, str]) -> None:
        self.material = self._material(properties)
        self.odds = self._odds(properties)

    def pick(self, outer: bool) -> Optional[Material]:
        return self.material if self._roll(self.odds) else None

    def __repr__(self) -> str:
        return f"RandomSimplePicker(name={self.name!r}, material={self.material!s}, odds={self.odds})"


class InnerOuterPicker(MaterialPicker):
    """One material for the shell, another for the interior."""

    inner: Material
    outer: Material

    def configure(self, properties: Mapping[str, str]) -> None:
        self.inner = self._material(properties, "inner.")
        self.outer = self._material(properties, "outer.")

    def pick(self, outer: bool) -> Optional[Material]:
        return self.outer if outer else self.inner

    def __repr__(self) -> str:
        return f"InnerOuterPicker(name={self.name!r}, inner={self.inner!s}, outer={self.outer!s})"


class RandomInnerOuterPicker(RandomPicker):
    """Inner/outer materials, each side placed with its own odds."""

    inner: Material
    inner_odds: int
    outer: Material
    outer_odds: int

    def configure(self, properties: Mapping[str, str]) -> None:
        self.inner = self._material(properties, "inner.")
        self.inner_odds = self._odds(properties, "inner.")
        self.outer = self._material(properties, "outer.")
        self.outer_odds = self._odds(properties, "outer.")

    def pick(self, outer: bool) -> Optional[Material]:
        if outer:
            return self.outer if self._roll(self.outer_odds) else None
        return self.inner if self._roll(self.inner_odds) else None

    def __repr__(self) -> str:
        return (
            f"RandomInnerOuterPicker(name={self.name!r}, inner={self.inner!s}, inner_odds={self.inner_odds}, "
            f"outer={self.outer!s}, outer_odds={self.outer_odds})"
        )


PickerFactory = Callable[[str, Optional[MaterialRegistry]], MaterialPicker]

_PICKERS: Dict[str, PickerFactory] = {}


def register_picker(type_name: str, factory: PickerFactory) -> None:
    _PICKERS[type_name] = factory


def new_picker(
    type_name: str,
    name: str,
    registry: Optional[MaterialRegistry] = None,
) -> Optional[MaterialPicker]:
    """Create an unconfigured picker, or ``None`` when the type isn't registered."""
    factory = _PICKERS.get(type_name)
    if factory is None:
        return None
    return factory(name, registry)


def list_picker_types() -> List[str]:
    return sorted(_PICKERS)


_BUILTIN: Dict[str, Type[MaterialPicker]] = {
    "simple": SimplePicker,
    "random-simple": RandomSimplePicker,
    "inner-outer": InnerOuterPicker,
    "random-inner-outer": RandomInnerOuterPicker,
}
for _type_name, _cls in _BUILTIN.items():
    register_picker(_type_name, _cls)
