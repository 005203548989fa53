"""Material handles and the registry that resolves material ids."""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class Material(BaseModel):
    """Opaque voxel material handle. ``data`` carries a variant (wood type, colour...)."""

    model_config = ConfigDict(frozen=True)

    id: str
    data: int = 0

    @property
    def is_air(self) -> bool:
        return self.id == AIR_ID

    def with_data(self, data: int) -> "Material":
        if data == self.data:
            return self
        return Material(id=self.id, data=data)

    def __str__(self) -> str:
        return self.id if not self.data else f"{self.id}:{self.data}"


AIR_ID = "air"
AIR = Material(id=AIR_ID)


def _normalize(material_id: str) -> str:
    key = material_id.strip().lower()
    if ":" in key:
        key = key.split(":", 1)[1]
    return key


class MaterialRegistry:
    """Resolves material id strings to handles. Unknown ids resolve to ``None``."""

    def __init__(self) -> None:
        self._materials: Dict[str, Material] = {}
        self._init_presets()

    def _init_presets(self) -> None:
        """Load the built-in block materials."""
        presets = [
            AIR,
            Material(id="stone"),
            Material(id="cobblestone"),
            Material(id="mossy_cobblestone"),
            Material(id="dirt"),
            Material(id="grass"),
            Material(id="sand"),
            Material(id="sandstone"),
            Material(id="gravel"),
            Material(id="clay"),
            Material(id="log"),
            Material(id="planks"),
            Material(id="leaves"),
            Material(id="glass"),
            Material(id="brick"),
            Material(id="stone_brick"),
            Material(id="obsidian"),
            Material(id="ice"),
            Material(id="snow"),
            Material(id="water"),
            Material(id="lava"),
            Material(id="glowstone"),
            Material(id="wool"),
        ]
        for material in presets:
            self._materials[material.id] = material

    def register(self, material: Material) -> Material:
        self._materials[_normalize(material.id)] = material
        return material

    def get(self, material_id: Optional[str]) -> Optional[Material]:
        if not material_id:
            return None
        return self._materials.get(_normalize(material_id))

    def list_ids(self) -> List[str]:
        return sorted(self._materials)


_REGISTRY = MaterialRegistry()


def get_material_registry() -> MaterialRegistry:
    return _REGISTRY


def set_material_registry(registry: MaterialRegistry) -> None:
    global _REGISTRY
    _REGISTRY = registry
