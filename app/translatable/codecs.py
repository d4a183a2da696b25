"""JSON codec for translation storage columns.

Columns may hold JSON text (as loaded from the database), an already decoded
mapping (when the host decodes JSON columns itself), or nothing at all.
Decoding never raises: unreadable data reads as "no translations".
"""

import copy
import json
from collections.abc import Mapping
from typing import Any, Dict

from translatable.logging import get_module_logger

logger = get_module_logger()


class StorageCodec:
    """Decodes and encodes JSON storage columns."""

    @staticmethod
    def decode(raw: Any) -> Dict[str, Any]:
        """Decode a raw column value into a mapping.

        Args:
            raw: Column value: None, JSON text (str or bytes), or a mapping.

        Returns:
            Decoded mapping, or an empty dict when the value is absent,
            malformed or not a JSON object.
        """
        if raw is None:
            return {}

        if isinstance(raw, Mapping):
            return copy.deepcopy(dict(raw))

        if isinstance(raw, (bytes, bytearray)):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError:
                logger.warning("storage_column_not_utf8")
                return {}

        if not isinstance(raw, str) or not raw.strip():
            return {}

        try:
            decoded = json.loads(raw)
        except ValueError:
            logger.warning("storage_column_malformed_json", length=len(raw))
            return {}

        if not isinstance(decoded, dict):
            return {}

        return decoded

    @staticmethod
    def encode(data: Mapping) -> str:
        """Encode a mapping as compact JSON text.

        Keys keep insertion order; non-ASCII characters and slashes are
        written as-is.

        Args:
            data: Mapping to encode.

        Returns:
            JSON text.
        """
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
