"""Structure templates (IWGOs): named, reusable voxel blueprints."""
from __future__ import annotations

import logging
from random import Random
from typing import Any, Dict, List, Mapping, Optional, Union

from structure_engines.common.config_node import ConfigurationNode
from structure_engines.common.errors import ExpressionError, IWGOLoadingError, LoadingError
from structure_engines.materials.registry import MaterialRegistry
from structure_engines.materials.setter import MaterialSetter, load_material_setter
from structure_engines.structures.instruction import Instruction
from structure_engines.value import VariableScope, parse_value
from structure_engines.world.grid import VoxelGrid
from structure_engines.world.transform import IDENTITY, DrawContext, Transform

logger = logging.getLogger(__name__)


class IWGO:
    """
    An ordered list of instructions sharing one variable table and one
    random source.

    Instructions draw in declaration order and a later instruction overwrites
    what an earlier one wrote. Reseeding with the same seed and drawing again
    reproduces the same writes.
    """

    def __init__(self, name: str = "", registry: Optional[MaterialRegistry] = None):
        self.name = name
        self.registry = registry
        self.variables = VariableScope()
        self.material_setters: Dict[str, MaterialSetter] = {}
        self.instructions: List[Instruction] = []
        self.random = Random()
        self.loaded = False

    def load(self, config: Union[ConfigurationNode, Mapping[str, Any]]) -> "IWGO":
        """Load the whole template, or raise ``IWGOLoadingError`` and keep the previous state."""
        node = config if isinstance(config, ConfigurationNode) else ConfigurationNode(config)
        name = node.get_string("name") or self.name
        if not node.is_section():
            raise IWGOLoadingError(f'IWGO "{name}" must be a mapping')
        if not name:
            raise IWGOLoadingError("IWGO has no name")
        try:
            variables = self._load_variables(node.get_node("variables"))
            setters = self._load_setters(node.get_node("materials"))
            instructions = self._load_instructions(node.get_node("instructions"), variables, setters)
        except LoadingError as exc:
            raise IWGOLoadingError.wrap(name, exc) from exc

        self.name = name
        self.variables = variables
        self.material_setters = setters
        self.instructions = instructions
        self.loaded = True
        self.set_random_source(self.random)
        logger.info("Loaded IWGO %s with %d instruction(s)", name, len(instructions))
        return self

    def _load_variables(self, node: ConfigurationNode) -> VariableScope:
        scope = VariableScope()
        if node.exists() and not node.is_section():
            raise IWGOLoadingError("variables must be a section")
        for key, child in node.children():
            try:
                scope.declare(key, parse_value(child.value, scope))
            except ExpressionError as exc:
                raise IWGOLoadingError(f'variable "{key}" is invalid: {exc}') from exc
        return scope

    def _load_setters(self, node: ConfigurationNode) -> Dict[str, MaterialSetter]:
        if node.exists() and not node.is_section():
            raise IWGOLoadingError("materials must be a section")
        return {key: load_material_setter(key, child, self.registry) for key, child in node.children()}

    def _load_instructions(
        self,
        node: ConfigurationNode,
        scope: VariableScope,
        setters: Mapping[str, MaterialSetter],
    ) -> List[Instruction]:
        if not node.is_section():
            raise IWGOLoadingError("instructions section is missing")
        return [
            Instruction(key).load(child, scope, setters, self.registry)
            for key, child in node.children()
        ]

    def set_seed(self, seed: int) -> None:
        # Reseed in place: every node already holds this generator.
        self.random.seed(seed)

    def set_random_source(self, random: Random) -> None:
        self.random = random
        self.variables.set_random_source(random)
        for instruction in self.instructions:
            instruction.set_random_source(random)

    def randomize(self) -> None:
        self.variables.calculate()
        for instruction in self.instructions:
            instruction.randomize()

    def draw(self, grid: VoxelGrid, transform: Transform = IDENTITY) -> int:
        """Draw every instruction in order. Returns the number of voxel writes."""
        context = DrawContext(grid=grid, transform=transform)
        for instruction in self.instructions:
            instruction.draw(context)
        logger.debug("Drew IWGO %s at %s: %d write(s)", self.name, transform, context.writes)
        return context.writes

    def place(
        self,
        grid: VoxelGrid,
        x: int,
        y: int,
        z: int,
        rotation: int = 0,
        seed: Optional[int] = None,
    ) -> int:
        if seed is not None:
            self.set_seed(seed)
        self.randomize()
        return self.draw(grid, Transform(x=x, y=y, z=z, rotation=rotation))

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "variables": {key: str(value) for key, value in self.variables.items_values()},
            "materials": sorted(self.material_setters),
            "instructions": [instruction.describe() for instruction in self.instructions],
        }

    def __repr__(self) -> str:
        return f"IWGO(name={self.name!r}, instructions={len(self.instructions)})"
