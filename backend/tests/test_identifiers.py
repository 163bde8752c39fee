"""
Noteful Backend — Identifier Tests
===================================

What we test:
    ✅ Generated ids are 24 lowercase hex chars and unique
    ✅ Validation accepts only well-formed ids
    ✅ Normalization lowercases
"""

import pytest

from app.identifiers import (
    OBJECT_ID_LENGTH,
    is_valid_object_id,
    new_object_id,
    normalize_object_id,
)


class TestNewObjectId:

    def test_shape(self):
        oid = new_object_id()
        assert len(oid) == OBJECT_ID_LENGTH
        assert oid == oid.lower()
        assert is_valid_object_id(oid)

    def test_unique(self):
        ids = {new_object_id() for _ in range(1000)}
        assert len(ids) == 1000


class TestIsValidObjectId:

    @pytest.mark.parametrize("value", [
        "5c3cf6a06b6a9f2f2c9c5a01",
        "ABCDEF0123456789abcdef01",
    ])
    def test_accepts_24_hex(self, value):
        assert is_valid_object_id(value)

    @pytest.mark.parametrize("value", [
        "",
        "not-an-id",
        "5c3cf6a06b6a9f2f2c9c5a0",      # 23 chars
        "5c3cf6a06b6a9f2f2c9c5a011",    # 25 chars
        "5c3cf6a06b6a9f2f2c9c5a0g",     # non-hex
        "5c3cf6a06b6a9f2f2c9c5a01\n",   # trailing newline
        None,
        12345,
        ["5c3cf6a06b6a9f2f2c9c5a01"],
    ])
    def test_rejects_everything_else(self, value):
        assert not is_valid_object_id(value)


def test_normalize_lowercases():
    assert normalize_object_id("ABCDEF0123456789ABCDEF01") == "abcdef0123456789abcdef01"
