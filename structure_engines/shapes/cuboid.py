"""Axis-aligned box."""
from __future__ import annotations

from typing import Iterator

from structure_engines.shapes.base import Shape, Voxel, register_shape


class Cuboid(Shape):
    """
    A box whose lower corner is the position. ``x`` is the length, ``y`` the
    height and ``z`` the depth; a size of zero or less draws nothing.
    """

    TYPE = "cuboid"
    SIZE_KEYS = ("x", "y", "z")

    def iter_voxels(self) -> Iterator[Voxel]:
        px, py, pz = self.get_position()
        size_x = int(self.size("x"))
        size_y = int(self.size("y"))
        size_z = int(self.size("z"))
        for xx in range(size_x):
            for yy in range(size_y):
                for zz in range(size_z):
                    outer = (
                        xx == 0 or yy == 0 or zz == 0
                        or xx == size_x - 1 or yy == size_y - 1 or zz == size_z - 1
                    )
                    yield px + xx, py + yy, pz + zz, outer


register_shape(Cuboid.TYPE, Cuboid)
