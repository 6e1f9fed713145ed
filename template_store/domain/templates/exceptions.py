"""Template domain specific exceptions."""


class TemplateError(Exception):
    """Base class for template domain errors."""


class TemplateAlreadyExistsError(TemplateError):
    """Raised when the owner already has a template with the same type and name."""


class TemplateNotFoundError(TemplateError):
    """Raised when the requested template cannot be found."""

    def __init__(self, template_id: str) -> None:
        super().__init__(f"Template with ID {template_id} not found.")
        self.template_id = template_id


class TemplateBodyTooLargeError(TemplateError):
    """Raised when the serialized body exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Template body is {size} bytes, exceeding the maximum size of {limit} bytes.")
        self.size = size
        self.limit = limit


class TemplateValidationError(TemplateError, ValueError):
    """Raised when a field or paging argument falls outside its allowed range."""
