# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for case conversion helpers."""

import pytest

from gapicgen.util.name import (
    is_version_segment,
    lower_camel,
    lower_hyphen,
    lower_underscore,
    singularize,
    split_words,
    upper_camel,
    upper_underscore,
)

# ###############
# Word Splitting
# ###############


class TestSplitWords:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("listFoos", ["list", "foos"]),
            ("ListFoos", ["list", "foos"]),
            ("list_foos", ["list", "foos"]),
            ("list-foos", ["list", "foos"]),
            ("LIST_FOOS", ["list", "foos"]),
            ("HTTPRequest", ["http", "request"]),
            ("listFoos_page-token", ["list", "foos", "page", "token"]),
            ("v1", ["v1"]),
        ],
    )
    def test_split(self, name: str, expected: list[str]) -> None:
        assert split_words(name) == expected

    def test_empty_name_has_no_words(self) -> None:
        assert split_words("") == []


# ###############
# Case Styles
# ###############


class TestCaseStyles:
    def test_lower_camel(self) -> None:
        assert lower_camel("page_token") == "pageToken"
        assert lower_camel("PageToken") == "pageToken"

    def test_lower_camel_of_empty_name(self) -> None:
        assert lower_camel("") == ""

    def test_upper_camel(self) -> None:
        assert upper_camel("library_service") == "LibraryService"

    def test_lower_underscore(self) -> None:
        assert lower_underscore("nextPageToken") == "next_page_token"

    def test_upper_underscore(self) -> None:
        assert upper_underscore("listBooks_page_str_desc") == "LIST_BOOKS_PAGE_STR_DESC"

    def test_lower_hyphen(self) -> None:
        assert lower_hyphen("shelfName") == "shelf-name"

    def test_conversions_round_trip_between_styles(self) -> None:
        assert lower_underscore(upper_camel("list_shelves")) == "list_shelves"


# ###############
# Words
# ###############


class TestSingularize:
    @pytest.mark.parametrize(
        ("plural", "singular"),
        [
            ("books", "book"),
            ("shelves", "shelf"),
            ("libraries", "library"),
            ("boxes", "box"),
            ("addresses", "address"),
            ("address", "address"),
            ("fish", "fish"),
        ],
    )
    def test_singularize(self, plural: str, singular: str) -> None:
        assert singularize(plural) == singular


class TestVersionSegment:
    @pytest.mark.parametrize("segment", ["v1", "v2beta1", "v1alpha", "v1p1beta1"])
    def test_version_segments(self, segment: str) -> None:
        assert is_version_segment(segment)

    @pytest.mark.parametrize("segment", ["library", "version1", "v", "V1"])
    def test_non_version_segments(self, segment: str) -> None:
        assert not is_version_segment(segment)
