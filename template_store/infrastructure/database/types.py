"""Custom column types."""

from __future__ import annotations

import gzip
import logging
import zlib
from typing import Any, Optional

from sqlalchemy import LargeBinary
from sqlalchemy.types import TypeDecorator

logger = logging.getLogger(__name__)


class CompressedText(TypeDecorator):
    """Text stored gzip-compressed in a binary column.

    Python values are ``str``; the database sees UTF-8 bytes run through gzip.
    Stored bytes that cannot be decompressed load as ``None``.
    """

    impl = LargeBinary
    cache_ok = True

    def __init__(self, compresslevel: int = 6, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.compresslevel = compresslevel

    def process_bind_param(self, value: Optional[str], dialect) -> Optional[bytes]:
        if value is None:
            return None
        return gzip.compress(value.encode("utf-8"), compresslevel=self.compresslevel)

    def process_result_value(self, value: Optional[bytes], dialect) -> Optional[str]:
        if value is None:
            return None
        try:
            return gzip.decompress(value).decode("utf-8")
        except (OSError, EOFError, zlib.error, UnicodeDecodeError) as exc:
            logger.warning("Unreadable compressed value (%s bytes): %s", len(value), exc)
            return None
