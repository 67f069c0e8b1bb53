import yaml

from oaskit.position import Locator, Position

MAPPING_INPUT = """{
  "a": 1,
  "b": {
    "c": 2
  }
}"""

SEQUENCE_INPUT = """[
  1,
  2.125
]"""


def test_position_key():
    loc = Position.from_node(yaml.compose(MAPPING_INPUT))
    assert loc.line == 1
    assert loc.column == 1
    assert loc.key("abc") == loc

    b = loc.key("b")
    assert b.node.tag == "tag:yaml.org,2002:str"
    assert b.node.value == "b"
    assert b.line == 3
    assert b.column == 3

    c = loc.field("b").key("c")
    assert c.node.tag == "tag:yaml.org,2002:str"
    assert c.node.value == "c"
    assert c.line == 4
    assert c.column == 5


def test_position_field():
    loc = Position.from_node(yaml.compose(MAPPING_INPUT))
    assert loc.line == 1
    assert loc.column == 1
    assert loc.field("abc") == loc

    loc = loc.field("b")
    assert loc.node.tag == "tag:yaml.org,2002:map"
    assert loc.line == 3
    assert loc.column == 8

    loc = loc.field("c")
    assert loc.node.value == "2"
    assert loc.line == 4
    assert loc.column == 10


def test_position_index():
    loc = Position.from_node(yaml.compose(SEQUENCE_INPUT))
    assert loc.line == 1
    assert loc.column == 1
    assert loc.index(-10) == loc
    assert loc.index(2) == loc

    first = loc.index(0)
    assert first.node.tag == "tag:yaml.org,2002:int"
    assert first.node.value == "1"
    assert first.line == 2
    assert first.column == 3

    second = loc.index(1)
    assert second.node.tag == "tag:yaml.org,2002:float"
    assert second.node.value == "2.125"
    assert second.line == 3
    assert second.column == 3


def test_key_on_non_mapping_is_empty():
    loc = Position.from_node(yaml.compose(SEQUENCE_INPUT))
    assert loc.key("a") == Position()
    assert loc.field("a") == Position()


def test_index_on_non_sequence_returns_parent():
    loc = Position.from_node(yaml.compose(MAPPING_INPUT))
    assert loc.index(0) == loc


def test_position_str():
    assert str(Position(line=3)) == "3"
    assert str(Position(line=3, column=5)) == "3:5"
    assert Position(line=3, column=5).with_filename("spec.yml") == "spec.yml:3:5"
    assert Position(line=3, column=5).with_filename("") == "3:5"


def test_position_str_prefers_node():
    loc = Position.from_node(yaml.compose(MAPPING_INPUT)).field("b")
    assert str(Position(line=99, column=99, node=loc.node)) == "3:8"


def test_locator_unset():
    loc = Locator()
    assert not loc.is_set
    assert loc.key("a") == Locator()
    assert loc.field("a") == Locator()
    assert loc.index(0) == Locator()


def test_locator_set():
    root = yaml.compose(MAPPING_INPUT)
    loc = Locator.from_node(root)
    assert loc.is_set
    assert loc.field("b").position.column == 8
    assert loc.key("b").position.line == 3

    other = Locator()
    other.set_position(Position(line=7, column=2))
    assert other.position == Position(line=7, column=2)
    assert other.index(0).position == Position(line=7, column=2)