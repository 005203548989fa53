"""Straight one-voxel-thick line."""
from __future__ import annotations

from typing import Iterator, Tuple

from structure_engines.shapes.base import Shape, Voxel, register_shape


def bresenham_3d(start: Tuple[int, int, int], end: Tuple[int, int, int]) -> Iterator[Tuple[int, int, int]]:
    x, y, z = start
    x1, y1, z1 = end
    dx, dy, dz = abs(x1 - x), abs(y1 - y), abs(z1 - z)
    sx = 1 if x1 > x else -1
    sy = 1 if y1 > y else -1
    sz = 1 if z1 > z else -1
    yield x, y, z

    if dx >= dy and dx >= dz:
        p1, p2 = 2 * dy - dx, 2 * dz - dx
        while x != x1:
            x += sx
            if p1 >= 0:
                y += sy
                p1 -= 2 * dx
            if p2 >= 0:
                z += sz
                p2 -= 2 * dx
            p1 += 2 * dy
            p2 += 2 * dz
            yield x, y, z
    elif dy >= dx and dy >= dz:
        p1, p2 = 2 * dx - dy, 2 * dz - dy
        while y != y1:
            y += sy
            if p1 >= 0:
                x += sx
                p1 -= 2 * dy
            if p2 >= 0:
                z += sz
                p2 -= 2 * dy
            p1 += 2 * dx
            p2 += 2 * dz
            yield x, y, z
    else:
        p1, p2 = 2 * dy - dz, 2 * dx - dz
        while z != z1:
            z += sz
            if p1 >= 0:
                y += sy
                p1 -= 2 * dz
            if p2 >= 0:
                x += sx
                p2 -= 2 * dz
            p1 += 2 * dy
            p2 += 2 * dx
            yield x, y, z


class Line(Shape):
    """
    A line from the position to the position plus the ``x``, ``y``, ``z``
    offset, both ends included. Every voxel of a line is on its shell.
    """

    TYPE = "line"
    SIZE_KEYS = ("x", "y", "z")

    def iter_voxels(self) -> Iterator[Voxel]:
        px, py, pz = self.get_position()
        end = (px + int(self.size("x")), py + int(self.size("y")), pz + int(self.size("z")))
        for x, y, z in bresenham_3d((px, py, pz), end):
            yield x, y, z, True


register_shape(Line.TYPE, Line)
