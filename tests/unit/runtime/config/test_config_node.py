"""Tests for the tagged configuration tree."""

from datetime import date

import pytest

from src.runtime.config.config_node import (
    ConfigMapping,
    ConfigNull,
    ConfigScalar,
    ConfigSequence,
    decode_node,
    encode_node,
)


class TestDecodeNode:
    """Tests for decode_node."""

    def test_none_becomes_null(self) -> None:
        assert decode_node(None) == ConfigNull()

    def test_nested_structure(self) -> None:
        node = decode_node({"image": {"tag": "v1", "ports": [80, 443]}, "debug": False})

        assert node == ConfigMapping(
            {
                "image": ConfigMapping(
                    {
                        "tag": ConfigScalar("v1"),
                        "ports": ConfigSequence((ConfigScalar(80), ConfigScalar(443))),
                    }
                ),
                "debug": ConfigScalar(False),
            }
        )

    def test_non_string_keys_are_kept(self) -> None:
        node = decode_node({1: "one", 2.5: "half"})

        assert isinstance(node, ConfigMapping)
        assert set(node.entries) == {1, 2.5}

    def test_dates_are_scalars(self) -> None:
        assert decode_node(date(2024, 1, 2)) == ConfigScalar(date(2024, 1, 2))

    def test_unsupported_value_raises(self) -> None:
        with pytest.raises(ValueError, match="unsupported"):
            decode_node({"key": object()})


class TestEncodeNode:
    """Tests for encode_node."""

    def test_encode_restores_plain_data(self) -> None:
        data = {"a": [1, "two", None, {"b": 3.5}], "c": None}

        assert encode_node(decode_node(data)) == data

    def test_null_encodes_to_none(self) -> None:
        assert encode_node(ConfigNull()) is None
