"""Public exports for template services."""

from .codec import body_size, decode_body, encode_body
from .service import TemplateService

__all__ = [
    "TemplateService",
    "body_size",
    "decode_body",
    "encode_body",
]
