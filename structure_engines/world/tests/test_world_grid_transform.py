import pytest
from pydantic import ValidationError

from structure_engines.materials import AIR, Material
from structure_engines.world import DrawContext, InMemoryVoxelGrid, Transform


@pytest.mark.parametrize(
    "rotation, expected",
    [
        (0, (12, 20, 33)),
        (1, (7, 20, 32)),
        (2, (8, 20, 27)),
        (3, (13, 20, 28)),
        (4, (12, 20, 33)),
        (-1, (13, 20, 28)),
    ],
)
def test_transform_rotates_around_y_then_translates(rotation, expected):
    transform = Transform(x=10, y=20, z=30, rotation=rotation)
    assert transform.to_world(2, 0, 3) == expected


def test_rotation_is_normalized():
    assert Transform(rotation=5).rotation == 1
    assert Transform(rotation=-2).rotation == 2


def test_grid_last_write_wins():
    grid = InMemoryVoxelGrid()
    stone = Material(id="stone")
    grid.write_voxel(1, 2, 3, stone)
    grid.write_voxel(1, 2, 3, AIR)
    grid.write_voxel(0, 0, 0, stone)
    assert grid.get(1, 2, 3) == AIR
    assert grid.write_count == 3
    assert grid.solid_count() == 1
    assert [w.material for w in grid.to_writes()] == ["stone", "air", "stone"]
    grid.clear()
    assert grid.voxels == {}
    assert grid.write_count == 0


def test_draw_context_defaults_to_identity_transform():
    context = DrawContext(grid=InMemoryVoxelGrid())
    assert context.transform == Transform()
    assert context.transform.to_world(1, 2, 3) == (1, 2, 3)
    assert context.writes == 0


def test_transform_is_immutable_and_hashable():
    transform = Transform(x=1, rotation=1)
    with pytest.raises(ValidationError):
        transform.x = 5
    assert hash(transform) == hash(Transform(x=1, rotation=1))
