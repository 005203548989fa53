"""Shape base class and the shape type registry."""
from __future__ import annotations

import abc
import logging
from random import Random
from typing import Any, ClassVar, Dict, Iterator, List, Mapping, Optional, Tuple, Type

from structure_engines.common.errors import InstructionStateError, ShapeLoadingError
from structure_engines.materials.setter import MaterialSetter
from structure_engines.value.nodes import Constant, Value
from structure_engines.world.transform import DrawContext

logger = logging.getLogger(__name__)

Voxel = Tuple[int, int, int, bool]


class Shape(abc.ABC):
    """
    Rasterizes a footprint from a position and a variant-specific size map.

    Sizes and position are Values: ``randomize`` recalculates them, every other
    method only reads their cached results.
    """

    TYPE: ClassVar[str] = ""
    SIZE_KEYS: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, name: str = ""):
        self.name = name
        self.x: Value = Constant(0)
        self.y: Value = Constant(0)
        self.z: Value = Constant(0)
        self.sizes: Dict[str, Value] = {}
        self.material_setter: Optional[MaterialSetter] = None

    def set_position(self, x: Value, y: Value, z: Value) -> None:
        self.x, self.y, self.z = x, y, z

    def set_size(self, sizes: Mapping[str, Value]) -> None:
        for key in self.SIZE_KEYS:
            if key not in sizes:
                raise ShapeLoadingError.missing_size(key)
        unknown = sorted(set(sizes) - set(self.SIZE_KEYS))
        if unknown:
            logger.warning("Shape %s (%s) ignores unknown size keys: %s", self.name, self.TYPE, ", ".join(unknown))
        self.sizes = {key: sizes[key] for key in self.SIZE_KEYS}

    def set_material_setter(self, setter: MaterialSetter) -> None:
        self.material_setter = setter

    def get_position(self) -> Tuple[int, int, int]:
        return (
            int(self.x.get_cached_value()),
            int(self.y.get_cached_value()),
            int(self.z.get_cached_value()),
        )

    def size(self, key: str) -> float:
        return self.sizes[key].get_cached_value()

    def values(self) -> List[Value]:
        return [self.x, self.y, self.z] + [self.sizes[key] for key in self.SIZE_KEYS if key in self.sizes]

    @abc.abstractmethod
    def iter_voxels(self) -> Iterator[Voxel]:
        """Yield ``(x, y, z, outer)`` in structure-local coordinates, each voxel once."""

    def draw(self, context: DrawContext) -> None:
        setter = self.material_setter
        if setter is None:
            raise InstructionStateError(f"Shape {self.name} has no material setter")
        to_world = context.transform.to_world
        for x, y, z, outer in self.iter_voxels():
            if setter.set_material(context.grid, to_world(x, y, z), outer):
                context.writes += 1

    def randomize(self) -> None:
        for value in self.values():
            value.calculate()

    def set_random_source(self, random: Random) -> None:
        for value in self.values():
            value.set_random_source(random)

    def describe(self) -> Dict[str, Any]:
        return {
            "type": self.TYPE,
            "position": {"x": str(self.x), "y": str(self.y), "z": str(self.z)},
            "size": {key: str(value) for key, value in self.sizes.items()},
            "material": self.material_setter.name if self.material_setter else None,
        }

    def __repr__(self) -> str:
        sizes = ", ".join(f"{key}={value}" for key, value in self.sizes.items())
        return f"{type(self).__name__}(x={self.x}, y={self.y}, z={self.z}, {sizes}, setter={self.material_setter!r})"


_SHAPES: Dict[str, Type[Shape]] = {}


def register_shape(type_name: str, shape_cls: Type[Shape]) -> None:
    _SHAPES[type_name] = shape_cls


def new_shape(type_name: str, name: str = "") -> Optional[Shape]:
    """Create a shape by type name, or ``None`` when the type isn't registered."""
    shape_cls = _SHAPES.get(type_name)
    if shape_cls is None:
        return None
    return shape_cls(name)


def list_shape_types() -> List[str]:
    return sorted(_SHAPES)
