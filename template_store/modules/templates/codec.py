"""JSON encoding of template bodies.

Bodies are arbitrary JSON-compatible documents. The encoded text is what the
size limit is measured against and what the ``CompressedText`` column stores.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


def encode_body(body: Any) -> str:
    return json.dumps(body, ensure_ascii=False, sort_keys=True, allow_nan=False)


def body_size(encoded: str) -> int:
    """Size in bytes of the UTF-8 form of an encoded body."""
    return len(encoded.encode("utf-8"))


def decode_body(raw: Optional[str], *, template_id: Optional[str] = None) -> Any:
    """Decode a stored body, yielding an empty document when missing or corrupt."""
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Template %s has an unreadable body; returning empty document", template_id)
        return {}
    return {} if value is None else value


__all__ = ["body_size", "decode_body", "encode_body"]
