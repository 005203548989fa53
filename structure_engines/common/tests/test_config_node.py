from structure_engines.common.config_node import ConfigurationNode

DOC = {
    "name": "hut",
    "materials": {
        "walls": {
            "type": "inner-outer",
            "inner.material": "air",
            "outer": {"material": "stone", "data": 2},
            "hollow": True,
        }
    },
    "instructions": {"b": 1, "a": 2},
}


def test_dotted_lookup():
    node = ConfigurationNode(DOC)
    assert node.get_string("name") == "hut"
    assert node.get_string("materials.walls.type") == "inner-outer"
    assert node.get_string("materials.walls.outer.material") == "stone"
    assert node.get_node("materials.walls").path == "materials.walls"


def test_literal_dotted_keys_match_first():
    walls = ConfigurationNode(DOC).get_node("materials.walls")
    assert walls.get_string("inner.material") == "air"


def test_missing_paths():
    node = ConfigurationNode(DOC)
    missing = node.get_node("materials.roof.type")
    assert not missing.exists()
    assert node.get_string("nope", "fallback") == "fallback"
    assert node.get_string("materials") is None
    assert ConfigurationNode("leaf").get_keys() == []


def test_children_keep_document_order():
    node = ConfigurationNode(DOC).get_node("instructions")
    assert [key for key, _ in node.children()] == ["b", "a"]
    assert node.get_keys() == ["b", "a"]
    assert [child.path for _, child in node.children()] == ["instructions.b", "instructions.a"]


def test_to_properties_flattens():
    walls = ConfigurationNode(DOC).get_node("materials.walls")
    assert walls.to_properties() == {
        "type": "inner-outer",
        "inner.material": "air",
        "outer.material": "stone",
        "outer.data": "2",
        "hollow": "true",
    }
