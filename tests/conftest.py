"""Root-level pytest fixtures for docquery tests."""

import os

import pytest

from docquery.models.filter_expr import FieldMeta

OBJECT_ID = "507f1f77bcf86cd799439011"


@pytest.fixture
def object_id() -> str:
    """A well-formed 24-hex-digit identifier string."""
    return OBJECT_ID


@pytest.fixture
def product_schema() -> dict[str, FieldMeta]:
    """Field schema with one multi-language field."""
    return {
        "price": FieldMeta(),
        "name": FieldMeta(is_multi_language=True),
        "title": FieldMeta(is_multi_language=True),
    }


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run with no config file in cwd or HOME and no DOCQUERY_ env vars."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in list(os.environ):
        if key.startswith("DOCQUERY_"):
            monkeypatch.delenv(key)
    return tmp_path
