"""Voxel grid collaborator: the only thing the engines write to."""
from __future__ import annotations

from typing import Dict, List, Optional, Protocol, Tuple

from pydantic import BaseModel

from structure_engines.materials.registry import Material

VoxelKey = Tuple[int, int, int]


class VoxelGrid(Protocol):
    """Write-only view of the host world."""

    def write_voxel(self, x: int, y: int, z: int, material: Material) -> None: ...


class VoxelWrite(BaseModel):
    x: int
    y: int
    z: int
    material: str


class InMemoryVoxelGrid:
    """Records writes; the latest write to a position wins."""

    def __init__(self) -> None:
        self._voxels: Dict[VoxelKey, Material] = {}
        self._log: List[Tuple[VoxelKey, Material]] = []

    def write_voxel(self, x: int, y: int, z: int, material: Material) -> None:
        key = (x, y, z)
        self._voxels[key] = material
        self._log.append((key, material))

    def get(self, x: int, y: int, z: int) -> Optional[Material]:
        return self._voxels.get((x, y, z))

    @property
    def voxels(self) -> Dict[VoxelKey, Material]:
        return dict(self._voxels)

    @property
    def write_log(self) -> List[Tuple[VoxelKey, Material]]:
        return list(self._log)

    @property
    def write_count(self) -> int:
        return len(self._log)

    def solid_count(self) -> int:
        return sum(1 for material in self._voxels.values() if not material.is_air)

    def to_writes(self) -> List[VoxelWrite]:
        return [
            VoxelWrite(x=key[0], y=key[1], z=key[2], material=str(material))
            for key, material in self._log
        ]

    def clear(self) -> None:
        self._voxels.clear()
        self._log.clear()
