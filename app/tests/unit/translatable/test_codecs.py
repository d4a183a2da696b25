"""Unit tests for translatable.codecs."""

import pytest

from translatable.codecs import StorageCodec

pytestmark = pytest.mark.unit


class TestStorageCodecDecode:
    """Tests for StorageCodec.decode."""

    def test_none_decodes_to_empty_dict(self):
        """Absent column reads as no translations."""
        assert StorageCodec.decode(None) == {}

    def test_json_text(self):
        """JSON object text is decoded."""
        assert StorageCodec.decode('{"en":"Hello","fr":"Bonjour"}') == {
            "en": "Hello",
            "fr": "Bonjour",
        }

    def test_bytes(self):
        """UTF-8 bytes are decoded."""
        assert StorageCodec.decode('{"fr":"Brûlé"}'.encode("utf-8")) == {"fr": "Brûlé"}

    def test_invalid_utf8_bytes(self):
        """Undecodable bytes read as empty."""
        assert StorageCodec.decode(b"\xff\xfe{") == {}

    def test_mapping_is_copied(self):
        """Decoded mappings never alias the stored value."""
        raw = {"fr": {"title": "Bonjour"}}

        decoded = StorageCodec.decode(raw)
        decoded["fr"]["title"] = "Salut"

        assert raw == {"fr": {"title": "Bonjour"}}

    @pytest.mark.parametrize("raw", ["", "   ", "not json", "{broken", "[1, 2]", '"text"', "42", 42])
    def test_unreadable_values_decode_to_empty_dict(self, raw):
        """Blank, malformed and non-object values read as empty."""
        assert StorageCodec.decode(raw) == {}


class TestStorageCodecEncode:
    """Tests for StorageCodec.encode."""

    def test_compact_output(self):
        """Output has no whitespace between tokens."""
        assert StorageCodec.encode({"en": "Hello", "fr": "Bonjour"}) == (
            '{"en":"Hello","fr":"Bonjour"}'
        )

    def test_unicode_and_slashes_unescaped(self):
        """Non-ASCII characters and slashes are written as-is."""
        assert StorageCodec.encode({"fr": "Crème/brûlée"}) == '{"fr":"Crème/brûlée"}'

    def test_preserves_insertion_order(self):
        """Keys keep insertion order."""
        assert StorageCodec.encode({"fr": 1, "en": 2}) == '{"fr":1,"en":2}'

    def test_null_values(self):
        """None values are written as JSON null."""
        assert StorageCodec.encode({"en": None}) == '{"en":null}'
