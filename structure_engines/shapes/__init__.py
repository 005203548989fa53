"""Shape rasterizers. Importing this package registers the built-in shapes."""

from structure_engines.shapes.base import Shape, list_shape_types, new_shape, register_shape  # noqa: F401
from structure_engines.shapes.cuboid import Cuboid  # noqa: F401
from structure_engines.shapes.line import Line  # noqa: F401
from structure_engines.shapes.sphere import Sphere  # noqa: F401
