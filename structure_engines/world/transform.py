"""Local-to-world placement of a structure."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from structure_engines.world.grid import VoxelGrid


class Transform(BaseModel):
    """
    Translation plus an optional rotation in quarter turns around the y axis.

    Rotation is applied first, around the structure's local origin.
    """

    model_config = ConfigDict(frozen=True)

    x: int = 0
    y: int = 0
    z: int = 0
    rotation: int = 0

    @field_validator("rotation")
    @classmethod
    def _normalize_rotation(cls, value: int) -> int:
        return value % 4

    def to_world(self, x: int, y: int, z: int) -> Tuple[int, int, int]:
        if self.rotation == 1:
            x, z = -z, x
        elif self.rotation == 2:
            x, z = -x, -z
        elif self.rotation == 3:
            x, z = z, -x
        return self.x + x, self.y + y, self.z + z


IDENTITY = Transform()


@dataclass
class DrawContext:
    """Borrowed for the duration of one draw pass."""

    grid: VoxelGrid
    transform: Transform = IDENTITY
    writes: int = 0
