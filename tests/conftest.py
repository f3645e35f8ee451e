# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Shared API model fixtures: a proto library service and a discovery document."""

import json
from pathlib import Path
from typing import Any

import pytest

from gapicgen.model.api import ApiModel
from gapicgen.model.loader import api_model_from_dict

# ###############
# Test Helpers
# ###############

LIBRARY_SERVICE = "google.example.library.v1.LibraryService"
PKG = "google.example.library.v1"


def _scalar(name: str, kind: str, cardinality: str = "optional", **extra: Any) -> dict[str, Any]:
    return {"name": name, "type": {"kind": kind, "cardinality": cardinality}, **extra}


def _message(name: str, type_name: str, cardinality: str = "optional", **extra: Any) -> dict[str, Any]:
    return {
        "name": name,
        "type": {"kind": "message", "cardinality": cardinality, "type_name": f"{PKG}.{type_name}"},
        **extra,
    }


def _map(name: str, key_kind: str, value_kind: str) -> dict[str, Any]:
    return {
        "name": name,
        "type": {
            "kind": "message",
            "cardinality": "repeated",
            "map_key": {"kind": key_kind},
            "map_value": {"kind": value_kind},
        },
    }


def _method(name: str, request: str, response: str, verb: str | None = None, path: str = "", **extra: Any) -> dict:
    method: dict[str, Any] = {"name": name, "input_type": f"{PKG}.{request}", "output_type": f"{PKG}.{response}"}
    if verb is not None:
        method["http"] = {"verb": verb, "path": path}
    method.update(extra)
    return method


def _library_api_data() -> dict[str, Any]:
    """A proto description of a small library service covering every generation feature."""
    messages = [
        {
            "full_name": f"{PKG}.Book",
            "fields": [
                _scalar("name", "string"),
                _scalar("author", "string"),
                _scalar("title", "string"),
                _scalar("read", "bool"),
                _scalar("rating", "double"),
                _scalar("tags", "string", "repeated"),
                _map("labels", "string", "string"),
                _map("editions", "int32", "string"),
                _scalar("cover", "bytes"),
            ],
        },
        {"full_name": f"{PKG}.Shelf", "fields": [_scalar("name", "string"), _scalar("theme", "string")]},
        {"full_name": f"{PKG}.Foo", "fields": [_scalar("id", "int64")]},
        {"full_name": f"{PKG}.Empty"},
        {"full_name": f"{PKG}.CreateShelfRequest", "fields": [_message("shelf", "Shelf")]},
        {"full_name": f"{PKG}.GetBookRequest", "fields": [_scalar("name", "string")]},
        {
            "full_name": f"{PKG}.ListBooksRequest",
            "fields": [_scalar("parent", "string"), _scalar("pageToken", "string"), _scalar("pageSize", "int32")],
        },
        {
            "full_name": f"{PKG}.ListBooksResponse",
            "fields": [_message("books", "Book", "repeated"), _scalar("nextPageToken", "string")],
        },
        {
            "full_name": f"{PKG}.ListFoosRequest",
            "fields": [_scalar("pageToken", "string"), _scalar("pageSize", "int32")],
        },
        {
            "full_name": f"{PKG}.ListFoosResponse",
            "fields": [_message("foos", "Foo", "repeated"), _scalar("nextPageToken", "string")],
        },
        {
            "full_name": f"{PKG}.ListMixedResponse",
            "fields": [
                _message("books", "Book", "repeated"),
                _message("shelves", "Shelf", "repeated"),
                _scalar("nextPageToken", "string"),
            ],
        },
        {
            "full_name": f"{PKG}.UpdateBookRequest",
            "fields": [
                _scalar("name", "string"),
                _message("book", "Book"),
                _scalar("update_mask", "string"),
                _scalar("etag", "string"),
                _scalar("force", "bool"),
            ],
        },
        {
            "full_name": f"{PKG}.DeleteBookRequest",
            "fields": [_scalar("name", "string"), _scalar("etag", "string", oneof="condition")],
        },
        {
            "full_name": f"{PKG}.PublishRequest",
            "fields": [
                _scalar("topic", "string"),
                _message("shelf", "Shelf"),
                _message("books", "Book", "repeated"),
            ],
        },
        {"full_name": f"{PKG}.PublishResponse", "fields": [_scalar("book_ids", "string", "repeated")]},
        {"full_name": f"{PKG}.ExportBookRequest", "fields": [_scalar("name", "string")]},
        {"full_name": f"{PKG}.Operation", "fields": [_scalar("name", "string"), _scalar("done", "bool")]},
        {"full_name": f"{PKG}.ExportMetadata", "fields": [_scalar("progress", "int32")]},
        {
            "full_name": f"{PKG}.StreamShelvesRequest",
            "fields": [_scalar("name", "string"), _scalar("theme", "string")],
        },
    ]
    methods = [
        _method("CreateShelf", "CreateShelfRequest", "Shelf", "POST", "/v1/shelves", description="Creates a shelf."),
        _method("GetBook", "GetBookRequest", "Book", "GET", "/v1/{name=shelves/*/books/*}"),
        _method("ListBooks", "ListBooksRequest", "ListBooksResponse", "GET", "/v1/{parent=shelves/*}/books"),
        _method("ListFoos", "ListFoosRequest", "ListFoosResponse", "GET", "/v1/foos"),
        _method("ListMixed", "ListBooksRequest", "ListMixedResponse", "GET", "/v1/mixed"),
        _method("UpdateBook", "UpdateBookRequest", "Book", "PUT", "/v1/{name=shelves/*/books/*}"),
        _method("DeleteBook", "DeleteBookRequest", "Empty", "DELETE", "/v1/{name=shelves/*/books/*}"),
        _method("Publish", "PublishRequest", "PublishResponse", "POST", "/v1/publish"),
        _method("ExportBook", "ExportBookRequest", "Operation", "POST", "/v1/{name=shelves/*/books/*}:export"),
        _method("StreamShelves", "StreamShelvesRequest", "Shelf", request_streaming=True),
    ]
    return {
        "title": "Library",
        "files": [
            {
                "package": PKG,
                "messages": messages,
                "services": [
                    {"full_name": LIBRARY_SERVICE, "methods": methods, "description": "Manages shelves and books."},
                    {"full_name": f"{PKG}.HiddenService", "reachable": False},
                ],
            }
        ],
    }


def _discovery_data() -> dict[str, Any]:
    """A discovery document with one resource holding a list and a get method."""
    return {
        "kind": "discovery#restDescription",
        "discoveryVersion": "v1",
        "name": "storage",
        "version": "v1",
        "schemas": {
            "Bucket": {
                "id": "Bucket",
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "size": {"type": "string", "format": "int64"},
                    "labels": {"type": "object", "additionalProperties": {"type": "string"}},
                },
            },
            "Buckets": {
                "id": "Buckets",
                "type": "object",
                "properties": {
                    "items": {"type": "array", "items": {"$ref": "Bucket"}},
                    "nextPageToken": {"type": "string"},
                },
            },
        },
        "resources": {
            "buckets": {
                "methods": {
                    "list": {
                        "id": "storage.buckets.list",
                        "path": "b",
                        "httpMethod": "GET",
                        "parameters": {
                            "project": {"type": "string", "location": "query", "required": True},
                            "pageToken": {"type": "string", "location": "query"},
                            "maxResults": {"type": "integer", "format": "uint32", "location": "query"},
                        },
                        "parameterOrder": ["project"],
                        "response": {"$ref": "Buckets"},
                    },
                    "get": {
                        "id": "storage.buckets.get",
                        "path": "b/{bucket}",
                        "httpMethod": "GET",
                        "parameters": {
                            "bucket": {
                                "type": "string",
                                "location": "path",
                                "required": True,
                                "pattern": "^projects/[^/]+/buckets/[^/]+$",
                            },
                        },
                        "parameterOrder": ["bucket"],
                        "response": {"$ref": "Bucket"},
                    },
                    "insert": {
                        "id": "storage.buckets.insert",
                        "path": "b",
                        "httpMethod": "POST",
                        "parameters": {"project": {"type": "string", "location": "query", "required": True}},
                        "request": {"$ref": "Bucket"},
                        "response": {"$ref": "Bucket"},
                    },
                }
            }
        },
    }


# ###############
# Fixtures
# ###############


@pytest.fixture
def library_data() -> dict[str, Any]:
    return _library_api_data()


@pytest.fixture
def library_model() -> ApiModel:
    return api_model_from_dict(_library_api_data(), source_label="library")


@pytest.fixture
def discovery_data() -> dict[str, Any]:
    return _discovery_data()


@pytest.fixture
def discovery_model() -> ApiModel:
    return api_model_from_dict(_discovery_data(), source_label="storage")


@pytest.fixture
def library_model_file(tmp_path: Path) -> Path:
    """The library description written as a JSON file."""
    path = tmp_path / "library.json"
    path.write_text(json.dumps(_library_api_data()), encoding="utf-8")
    return path
