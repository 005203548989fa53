"""World-side collaborators: voxel grid and placement transform."""

from structure_engines.world.grid import InMemoryVoxelGrid, VoxelGrid, VoxelWrite  # noqa: F401
from structure_engines.world.transform import DrawContext, Transform  # noqa: F401
