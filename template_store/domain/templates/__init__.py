"""Public exports for the template domain."""

from .exceptions import (
    TemplateAlreadyExistsError,
    TemplateBodyTooLargeError,
    TemplateError,
    TemplateNotFoundError,
    TemplateValidationError,
)
from .models import (
    CreateTemplateRequest,
    GetTemplatesRequest,
    OwnerType,
    TemplateDto,
    TemplateSortBy,
    UpdateTemplateRequest,
)

__all__ = [
    "CreateTemplateRequest",
    "GetTemplatesRequest",
    "OwnerType",
    "TemplateAlreadyExistsError",
    "TemplateBodyTooLargeError",
    "TemplateDto",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateSortBy",
    "TemplateValidationError",
    "UpdateTemplateRequest",
]
