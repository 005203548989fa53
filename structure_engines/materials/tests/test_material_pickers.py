"""Tests for material pickers, setters and the material registry."""
import random

import pytest

from structure_engines.common.config_node import ConfigurationNode
from structure_engines.common.errors import LoadingError, MaterialSetterLoadingError
from structure_engines.materials import (
    AIR,
    EmptyPolicy,
    InnerOuterPicker,
    Material,
    MaterialRegistry,
    MaterialSetter,
    RandomInnerOuterPicker,
    RandomSimplePicker,
    SimplePicker,
    get_material_registry,
    load_material_setter,
    new_picker,
    register_picker,
)
from structure_engines.world import InMemoryVoxelGrid


def _picker(type_name, properties, seed=None):
    picker = new_picker(type_name, "test")
    assert picker is not None
    picker.configure(properties)
    if seed is not None:
        picker.set_random_source(random.Random(seed))
    return picker


def test_registry_resolves_presets_case_insensitively():
    registry = get_material_registry()
    assert registry.get("Stone") == Material(id="stone")
    assert registry.get("minecraft:stone") == Material(id="stone")
    assert registry.get("air") is AIR
    assert registry.get("unobtainium") is None


def test_registry_accepts_custom_materials():
    registry = MaterialRegistry()
    registry.register(Material(id="marble"))
    assert registry.get("MARBLE") == Material(id="marble")


def test_new_picker_unknown_type_returns_none():
    assert new_picker("rainbow", "x") is None


def test_builtin_picker_types():
    assert isinstance(new_picker("simple", "a"), SimplePicker)
    assert isinstance(new_picker("random-simple", "a"), RandomSimplePicker)
    assert isinstance(new_picker("inner-outer", "a"), InnerOuterPicker)
    assert isinstance(new_picker("random-inner-outer", "a"), RandomInnerOuterPicker)


def test_simple_picker_always_returns_material():
    picker = _picker("simple", {"material": "brick", "data": "2"})
    assert picker.pick(True) == Material(id="brick", data=2)
    assert picker.pick(False) == Material(id="brick", data=2)


@pytest.mark.parametrize("outer", [True, False])
def test_random_simple_odds_bounds(outer):
    never = _picker("random-simple", {"material": "stone", "odds": "0"}, seed=1)
    always = _picker("random-simple", {"material": "stone", "odds": "100"}, seed=1)
    assert all(never.pick(outer) is None for _ in range(500))
    assert all(always.pick(outer) == Material(id="stone") for _ in range(500))


def test_random_simple_accepts_odd_alias_and_is_roughly_fair():
    picker = _picker("random-simple", {"material": "stone", "odd": "50"}, seed=5)
    hits = sum(1 for _ in range(2000) if picker.pick(False) is not None)
    assert 800 < hits < 1200


def test_inner_outer_picker():
    picker = _picker("inner-outer", {"inner.material": "planks", "outer.material": "log"})
    assert picker.pick(True) == Material(id="log")
    assert picker.pick(False) == Material(id="planks")


def test_random_inner_outer_sides_are_independent():
    picker = _picker(
        "random-inner-outer",
        {
            "inner.material": "glass",
            "inner.odds": "0",
            "outer.material": "stone",
            "outer.odds": "100",
        },
        seed=3,
    )
    assert all(picker.pick(True) == Material(id="stone") for _ in range(100))
    assert all(picker.pick(False) is None for _ in range(100))


@pytest.mark.parametrize(
    "type_name, properties",
    [
        ("simple", {}),
        ("simple", {"material": "unobtainium"}),
        ("random-simple", {"material": "stone"}),
        ("random-simple", {"material": "stone", "odds": "lots"}),
        ("random-simple", {"material": "stone", "odds": "101"}),
        ("inner-outer", {"inner.material": "stone"}),
        ("random-inner-outer", {"inner.material": "stone", "inner.odds": "5", "outer.material": "dirt"}),
        ("simple", {"material": "stone", "data": "x"}),
    ],
)
def test_configure_failures(type_name, properties):
    picker = new_picker(type_name, "bad")
    with pytest.raises(MaterialSetterLoadingError):
        picker.configure(properties)


def test_same_seed_same_sequence():
    props = {"material": "stone", "odds": "50"}
    first = _picker("random-simple", props, seed=9)
    second = _picker("random-simple", props, seed=9)
    assert [first.pick(False) for _ in range(64)] == [second.pick(False) for _ in range(64)]


def test_setter_writes_air_for_empty_by_default():
    grid = InMemoryVoxelGrid()
    setter = MaterialSetter("holes", _picker("random-simple", {"material": "stone", "odds": "0"}))
    assert setter.set_material(grid, (1, 2, 3), True) is True
    assert grid.get(1, 2, 3) is AIR


def test_setter_skip_policy_leaves_voxel_alone():
    grid = InMemoryVoxelGrid()
    grid.write_voxel(0, 0, 0, Material(id="dirt"))
    picker = _picker("random-simple", {"material": "stone", "odds": "0"})
    setter = MaterialSetter("sparse", picker, EmptyPolicy.SKIP)
    assert setter.set_material(grid, (0, 0, 0), False) is False
    assert grid.get(0, 0, 0) == Material(id="dirt")
    assert grid.write_count == 1


def test_fixed_setter():
    grid = InMemoryVoxelGrid()
    MaterialSetter.fixed(Material(id="sand")).set_material(grid, (4, 0, 4), False)
    assert grid.get(4, 0, 4) == Material(id="sand")


def test_load_setter_from_section():
    node = ConfigurationNode(
        {
            "type": "random-inner-outer",
            "empty": "skip",
            "properties": {
                "inner": {"material": "air", "odds": 100},
                "outer.material": "stone",
                "outer.odds": 75,
            },
        }
    )
    setter = load_material_setter("walls", node)
    assert setter.empty is EmptyPolicy.SKIP
    assert isinstance(setter.picker, RandomInnerOuterPicker)
    assert setter.picker.outer_odds == 75
    assert setter.picker.inner == AIR


def test_load_setter_inline_properties_and_shorthand():
    inline = load_material_setter("floor", ConfigurationNode({"type": "simple", "material": "planks"}))
    assert inline.picker.pick(False) == Material(id="planks")

    shorthand = load_material_setter("roof", ConfigurationNode("brick"))
    assert shorthand.picker.pick(True) == Material(id="brick")
    assert shorthand.empty is EmptyPolicy.AIR


def test_load_setter_failures():
    with pytest.raises(MaterialSetterLoadingError):
        load_material_setter("a", ConfigurationNode({"type": "rainbow", "material": "stone"}))
    with pytest.raises(MaterialSetterLoadingError):
        load_material_setter("b", ConfigurationNode({"material": "stone", "empty": "sometimes"}))
    with pytest.raises(LoadingError):
        load_material_setter("c", ConfigurationNode(None))


def test_register_custom_picker():
    class CheckerPicker(SimplePicker):
        def pick(self, outer):
            return self.material if outer else None

    register_picker("checker", CheckerPicker)
    picker = _picker("checker", {"material": "wool"})
    assert picker.pick(True) == Material(id="wool")
    assert picker.pick(False) is None
