# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for init-code trees and their merging."""

import pytest

from gapicgen.metacode.field_path import parse_field_path
from gapicgen.metacode.tree import InitCodeLineType, InitCodeNode, InitValueConfig

# ###############
# Test Helpers
# ###############


def _merged(*specs: str) -> InitCodeNode:
    return InitCodeNode.create_with_children("root", InitCodeLineType.STRUCTURE, *map(parse_field_path, specs))


def _keys_in_order(node: InitCodeNode) -> list[str]:
    return [n.key for n in node.list_in_initialization_order()]


# ###############
# Construction
# ###############


class TestConstruction:
    def test_placeholder(self) -> None:
        node = InitCodeNode.create("name")
        assert node.line_type == InitCodeLineType.UNKNOWN
        assert not node.init_value_config.has_initial_value
        assert not node.is_resolved

    def test_with_value(self) -> None:
        node = InitCodeNode.create_with_value("name", InitValueConfig('"a"'))
        assert node.line_type == InitCodeLineType.SIMPLE
        assert node.init_value_config.initial_value == '"a"'

    def test_children_are_read_only(self) -> None:
        node = _merged("a")
        with pytest.raises(TypeError):
            node.children["b"] = InitCodeNode.create("b")  # type: ignore[index]

    def test_added_child_is_copied(self) -> None:
        child = InitCodeNode.create_with_children("shelf", InitCodeLineType.STRUCTURE, InitCodeNode.create("name"))
        parent = InitCodeNode.create_with_children("root", InitCodeLineType.STRUCTURE, child)
        child.add_child(InitCodeNode.create("theme"))
        assert list(parent.children["shelf"].children) == ["name"]

    def test_with_value_replaces_config(self) -> None:
        config = InitValueConfig()
        assert config.with_value("1") == InitValueConfig("1")
        assert config.initial_value is None


# ###############
# Merging
# ###############


class TestMerging:
    def test_shared_prefix_is_merged(self) -> None:
        root = _merged("shelf.name", "shelf.theme")
        assert list(root.children) == ["shelf"]
        assert list(root.children["shelf"].children) == ["name", "theme"]

    def test_placeholder_is_replaced_in_place(self) -> None:
        root = _merged("a", "b", 'a="x"')
        assert list(root.children) == ["a", "b"]
        assert root.children["a"].init_value_config.initial_value == '"x"'

    def test_valued_leaf_is_kept(self) -> None:
        root = _merged('a="x"', "a")
        assert root.children["a"].init_value_config.initial_value == '"x"'

    def test_merge_is_commutative(self) -> None:
        """Equality ignores child order, so merge order does not matter."""
        specs = ["shelf.name", "shelf.theme", "books[0].title", "labels{\"k\"}"]
        assert _merged(*specs) == _merged(*reversed(specs))

    def test_different_trees_are_not_equal(self) -> None:
        assert _merged("a") != _merged("b")

    def test_nodes_are_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(InitCodeNode.create("a"))


# ###############
# Ordering
# ###############


class TestInitializationOrder:
    def test_nested_lists_post_order(self) -> None:
        assert _keys_in_order(_merged("mylist[0][0]")) == ["0", "0", "mylist", "root"]

    def test_children_precede_parents(self) -> None:
        assert _keys_in_order(_merged("shelf.name", "title")) == ["name", "shelf", "title", "root"]

    def test_copy_is_deep_and_equal(self) -> None:
        root = _merged("shelf.name")
        copied = root.copy()
        assert copied == root
        assert copied.children["shelf"] is not root.children["shelf"]
