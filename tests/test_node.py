"""Tests for confmap.node."""

import pytest

from confmap import ConfigNode, MappingOptions, default_serializers
from confmap.errors import CoercionError, MappingError, NoSerializerError


class TestStructure:
    def test_empty_root(self):
        node = ConfigNode.root()
        assert node.empty
        assert not node.is_list
        assert node.child_count == 0
        assert node.path == ()

    def test_scalar(self):
        node = ConfigNode.root("hello")
        assert not node.empty
        assert node.scalar == "hello"

    def test_list_children(self):
        node = ConfigNode.root([1, [2, 3], None])
        assert node.is_list
        assert node.child_count == 3
        assert node.node(1, 0).scalar == 2
        assert node.node(2).empty
        assert node.node(1, 1).path == (1, 1)

    def test_missing_child(self):
        with pytest.raises(IndexError):
            ConfigNode.root([1]).node(3)

    def test_scalar_of_list_fails(self):
        node = ConfigNode.root([1, 2])
        with pytest.raises(CoercionError):
            node.scalar

    def test_raw_roundtrip(self):
        raw = ["a", [1, 2], None, 3.5]
        assert ConfigNode.root(raw).raw() == raw

    def test_set_list(self):
        node = ConfigNode.root("x").set_list(2)
        assert node.child_count == 2
        assert all(child.empty for child in node.children_list())

    def test_append_replaces_scalar(self):
        node = ConfigNode.root("x")
        node.append_list_node().set_value(1)
        assert node.raw() == [1]

    def test_take_children(self):
        source = ConfigNode.root([[1], 2])
        moved = source.node(0)
        target = ConfigNode.root([1, 2, 3]).node(1)
        target.take_children(source)
        assert source.empty
        assert target.raw() == [[1], 2]
        assert target.node(0) is moved
        assert moved.parent is target
        assert moved.node(0).path == (1, 0, 0)

    def test_children_share_root_options(self):
        options = MappingOptions(serializers=default_serializers(), strict_lists=False)
        node = ConfigNode.root([[1]], options=options)
        assert node.node(0, 0).options is options


class TestTypedAccess:
    def test_get_scalar(self):
        assert ConfigNode.root("12").get(int) == 12

    def test_get_empty_scalar(self):
        assert ConfigNode.root().get(str) is None

    def test_set_scalar(self):
        node = ConfigNode.root()
        node.set(float, "2.5")
        assert node.raw() == 2.5

    def test_unknown_type(self):
        with pytest.raises(NoSerializerError):
            ConfigNode.root("x").get(bytes)


class TestMappingError:
    def test_message_without_path(self):
        assert str(MappingError("bad")) == "bad"

    def test_message_with_path(self):
        assert str(MappingError("bad", ("a", 0))) == "bad (at a.0)"

    def test_root_path(self):
        assert str(MappingError("bad", ())) == "bad (at <root>)"

    def test_path_is_set_once(self):
        err = MappingError("bad")
        err.init_path((2,))
        err.init_path((0, 2))
        assert err.path == (2,)
