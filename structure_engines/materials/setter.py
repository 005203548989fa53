"""Material setters: apply a picker's decision to one world voxel."""
from __future__ import annotations

import logging
from enum import Enum
from random import Random
from typing import TYPE_CHECKING, Optional, Tuple

from structure_engines.common.config_node import ConfigurationNode
from structure_engines.common.errors import MaterialSetterLoadingError
from structure_engines.materials.pickers import MaterialPicker, SimplePicker, new_picker
from structure_engines.materials.registry import AIR, Material, MaterialRegistry

if TYPE_CHECKING:
    from structure_engines.world.grid import VoxelGrid

logger = logging.getLogger(__name__)


class EmptyPolicy(str, Enum):
    """What to do when the picker returns no material."""
    AIR = "air"    # write air, carving the voxel out
    SKIP = "skip"  # leave whatever is already there


class MaterialSetter:
    """Binds a picker to voxel writes. Holds no grid state of its own."""

    def __init__(self, name: str, picker: MaterialPicker, empty: EmptyPolicy = EmptyPolicy.AIR):
        self.name = name
        self.picker = picker
        self.empty = empty

    @classmethod
    def fixed(cls, material: Material, name: Optional[str] = None) -> "MaterialSetter":
        picker = SimplePicker(name or material.id)
        picker.material = material
        return cls(picker.name, picker)

    def set_material(self, grid: "VoxelGrid", position: Tuple[int, int, int], outer: bool) -> bool:
        """Write the picked material at ``position``. Returns whether a write happened."""
        material = self.picker.pick(outer)
        if material is None:
            if self.empty is EmptyPolicy.SKIP:
                return False
            material = AIR
        x, y, z = position
        grid.write_voxel(x, y, z, material)
        return True

    def set_random_source(self, random: Random) -> None:
        self.picker.set_random_source(random)

    def __repr__(self) -> str:
        return f"MaterialSetter(name={self.name!r}, picker={self.picker!r}, empty={self.empty.value})"


_RESERVED_KEYS = {"type", "empty", "properties"}


def load_material_setter(
    name: str,
    node: ConfigurationNode,
    registry: Optional[MaterialRegistry] = None,
) -> MaterialSetter:
    """
    Build a setter from a ``materials`` entry.

    A bare string is shorthand for a simple picker (``walls: stone``). A section
    has a picker ``type`` (default ``simple``), an optional ``empty`` policy and
    the picker properties, either under ``properties`` or inline.
    """
    if not node.exists():
        raise MaterialSetterLoadingError(f'Material setter "{name}" has no definition')
    if not node.is_section():
        properties = {"material": node.get_string() or ""}
        picker_type = "simple"
        empty_raw = None
    else:
        picker_type = node.get_string("type", "simple")
        empty_raw = node.get_string("empty")
        props_node = node.get_node("properties")
        if props_node.is_section():
            properties = props_node.to_properties()
        else:
            properties = {
                key: value
                for key, value in node.to_properties().items()
                if key.split(".", 1)[0] not in _RESERVED_KEYS
            }

    picker = new_picker(picker_type, name, registry)
    if picker is None:
        raise MaterialSetterLoadingError(f'Material setter "{name}": unknown picker type "{picker_type}"')
    try:
        picker.configure(properties)
    except MaterialSetterLoadingError:
        raise
    except (KeyError, ValueError) as exc:
        raise MaterialSetterLoadingError.wrap(name, exc)

    empty = EmptyPolicy.AIR
    if empty_raw is not None:
        try:
            empty = EmptyPolicy(empty_raw.strip().lower())
        except ValueError:
            raise MaterialSetterLoadingError(
                f'Material setter "{name}": empty must be "air" or "skip", got "{empty_raw}"'
            )
    logger.debug("Loaded material setter %s: %r", name, picker)
    return MaterialSetter(name, picker, empty)
