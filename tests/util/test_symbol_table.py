# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for unique identifier allocation."""

from gapicgen.util.symbol_table import SuffixStyle, SymbolTable


def test_first_request_returns_name_unchanged() -> None:
    """A free name is handed out as it is."""
    table = SymbolTable()
    assert table.get_new_symbol("shelf") == "shelf"
    assert table.contains("shelf")


def test_numeric_suffixes_count_from_two() -> None:
    """Clashing names get numeric suffixes starting at 2."""
    table = SymbolTable()
    assert [table.get_new_symbol("book") for _ in range(3)] == ["book", "book2", "book3"]


def test_numeric_suffix_skips_taken_variants() -> None:
    table = SymbolTable(seed={"book", "book2"})
    assert table.get_new_symbol("book") == "book3"


def test_underscore_suffixes() -> None:
    """With the underscore style a clash appends underscores."""
    table = SymbolTable(SuffixStyle.UNDERSCORE)
    assert [table.get_new_symbol("name") for _ in range(3)] == ["name", "name_", "name__"]


def test_seed_reserves_name() -> None:
    table = SymbolTable()
    table.seed("request")
    assert table.get_new_symbol("request") == "request2"


def test_names_are_case_sensitive() -> None:
    table = SymbolTable()
    table.get_new_symbol("Name")
    assert table.get_new_symbol("name") == "name"
