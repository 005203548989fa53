"""Axis-aligned ellipsoid."""
from __future__ import annotations

import math
from typing import Iterator, Tuple

from structure_engines.shapes.base import Shape, Voxel, register_shape


def _length_sq(x: float, y: float, z: float) -> float:
    return x * x + y * y + z * z


def _signs(offset: int) -> Tuple[int, ...]:
    return (offset,) if offset == 0 else (offset, -offset)


class Sphere(Shape):
    """
    An ellipsoid centred on the position, with one radius per axis.

    Half a voxel is added to every radius so a radius of 0 still draws the
    centre voxel. Offsets are normalized by that effective radius: ``xx / r``
    is the inner face of a voxel cell and ``(xx + 1) / r`` its outer face.
    """

    TYPE = "sphere"
    SIZE_KEYS = ("radiusX", "radiusY", "radiusZ")

    def effective_radii(self) -> Tuple[float, float, float]:
        return (
            self.size("radiusX") + 0.5,
            self.size("radiusY") + 0.5,
            self.size("radiusZ") + 0.5,
        )

    def iter_octant(self) -> Iterator[Voxel]:
        """Yield non-negative offsets ``(xx, yy, zz, outer)`` of the first octant."""
        rx, ry, rz = self.effective_radii()
        if rx <= 0 or ry <= 0 or rz <= 0:
            return
        inv_x = 1 / rx
        inv_y = 1 / ry
        inv_z = 1 / rz
        ceil_x = math.ceil(rx)
        ceil_y = math.ceil(ry)
        ceil_z = math.ceil(rz)

        next_xn = 0.0
        for xx in range(ceil_x + 1):
            xn = next_xn
            next_xn = (xx + 1) * inv_x
            next_yn = 0.0
            for yy in range(ceil_y + 1):
                yn = next_yn
                next_yn = (yy + 1) * inv_y
                next_zn = 0.0
                row_done = False
                for zz in range(ceil_z + 1):
                    zn = next_zn
                    next_zn = (zz + 1) * inv_z
                    if _length_sq(xn, yn, zn) > 1:
                        # The distance only grows along each axis, so the
                        # first miss of a row, column or plane ends it.
                        if zz == 0:
                            if yy == 0:
                                return
                            row_done = True
                        break
                    outer = (
                        _length_sq(next_xn, yn, zn) > 1
                        or _length_sq(xn, next_yn, zn) > 1
                        or _length_sq(xn, yn, next_zn) > 1
                    )
                    yield xx, yy, zz, outer
                if row_done:
                    break

    def iter_voxels(self) -> Iterator[Voxel]:
        px, py, pz = self.get_position()
        for xx, yy, zz, outer in self.iter_octant():
            for sx in _signs(xx):
                for sy in _signs(yy):
                    for sz in _signs(zz):
                        yield px + sx, py + sy, pz + sz, outer


register_shape(Sphere.TYPE, Sphere)
