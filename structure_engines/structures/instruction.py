"""Instruction: one shape, its expressions and its material setter."""
from __future__ import annotations

import logging
from enum import Enum
from random import Random
from typing import Any, Dict, Mapping, Optional

from structure_engines.common.config_node import ConfigurationNode
from structure_engines.common.errors import (
    ExpressionError,
    InstructionLoadingError,
    InstructionStateError,
    MaterialSetterLoadingError,
    ShapeLoadingError,
)
from structure_engines.materials.registry import MaterialRegistry
from structure_engines.materials.setter import MaterialSetter, load_material_setter
from structure_engines.shapes import Shape, new_shape
from structure_engines.value import Constant, Value, parse_value
from structure_engines.world.transform import DrawContext

logger = logging.getLogger(__name__)

_POSITION_KEYS = ("x", "y", "z")


class InstructionState(str, Enum):
    UNLOADED = "unloaded"
    LOADED = "loaded"
    READY = "ready"
    DRAWN = "drawn"


class Instruction:
    """
    Binds one Shape to its position, size map and material setter.

    Lifecycle: ``load`` moves UNLOADED -> LOADED, ``set_random_source`` moves
    to READY and ``draw`` to DRAWN. ``randomize`` and ``draw`` may be repeated
    in any loaded state; calling them before a successful load raises
    ``InstructionStateError``.
    """

    def __init__(self, name: str):
        self.name = name
        self.state = InstructionState.UNLOADED
        self.shape: Optional[Shape] = None

    def load(
        self,
        node: ConfigurationNode,
        scope: Optional[Mapping[str, float]] = None,
        setters: Optional[Mapping[str, MaterialSetter]] = None,
        registry: Optional[MaterialRegistry] = None,
    ) -> "Instruction":
        """
        Configure the shape from an ``instructions`` entry.

        ``scope`` is the variable table expressions may reference and
        ``setters`` the template's named material setters. On failure the
        instruction stays UNLOADED and the raised error names the field.
        """
        if not node.is_section():
            raise InstructionLoadingError(f'Instruction "{self.name}" must be a section', field="shape")

        shape_type = node.get_string("shape")
        if not shape_type:
            raise ShapeLoadingError(f'Instruction "{self.name}": shape is missing')
        shape = new_shape(shape_type.strip().lower(), self.name)
        if shape is None:
            raise ShapeLoadingError(f'Instruction "{self.name}": unknown shape type "{shape_type}"')

        position = node.get_node("position")
        shape.set_position(*(self._value(position, key, scope, "position") for key in _POSITION_KEYS))

        size = node.get_node("size")
        if not size.is_section():
            raise ShapeLoadingError(f'Instruction "{self.name}": size is missing')
        shape.set_size({key: self._value(size, key, scope, "size") for key in size.get_keys()})

        shape.set_material_setter(self._material_setter(node.get_node("material"), setters or {}, registry))

        self.shape = shape
        self.state = InstructionState.LOADED
        logger.debug("Loaded instruction %s: %r", self.name, shape)
        return self

    def _value(self, section: ConfigurationNode, key: str, scope, field: str) -> Value:
        raw = section.get_node(key).value
        if raw is None:
            # Omitted position coordinates sit on the template origin.
            return Constant(0)
        try:
            return parse_value(raw, scope)
        except ExpressionError as exc:
            raise InstructionLoadingError(
                f'Instruction "{self.name}": {field}.{key} is invalid: {exc}', field=field
            ) from exc

    def _material_setter(
        self,
        node: ConfigurationNode,
        setters: Mapping[str, MaterialSetter],
        registry: Optional[MaterialRegistry],
    ) -> MaterialSetter:
        if not node.exists():
            raise InstructionLoadingError(f'Instruction "{self.name}": material is missing', field="material")
        setter_name = f"{self.name}.material"
        if not node.is_section():
            # Either a name from the template's materials or a bare material id.
            setter_name = node.get_string() or ""
            if setter_name in setters:
                return setters[setter_name]
        try:
            return load_material_setter(setter_name, node, registry)
        except MaterialSetterLoadingError as exc:
            raise InstructionLoadingError(
                f'Instruction "{self.name}": material is invalid: {exc}', field="material"
            ) from exc

    def _require_loaded(self, action: str) -> Shape:
        if self.state is InstructionState.UNLOADED or self.shape is None:
            raise InstructionStateError(f'Cannot {action} instruction "{self.name}" before it is loaded')
        return self.shape

    def set_random_source(self, random: Random) -> None:
        shape = self._require_loaded("wire randomness into")
        shape.set_random_source(random)
        if shape.material_setter is not None:
            shape.material_setter.set_random_source(random)
        if self.state is InstructionState.LOADED:
            self.state = InstructionState.READY

    def randomize(self) -> None:
        self._require_loaded("randomize").randomize()

    def draw(self, context: DrawContext) -> None:
        self._require_loaded("draw").draw(context)
        self.state = InstructionState.DRAWN

    def describe(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name, "state": self.state.value}
        if self.shape is not None:
            out.update(self.shape.describe())
        return out

    def __repr__(self) -> str:
        return f"Instruction(name={self.name!r}, state={self.state.value}, shape={self.shape!r})"
