"""Domain models for owner-scoped templates."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

TEMPLATE_TYPE_MAX_LENGTH = 50
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
MAX_BODY_SIZE = 1_048_576


class OwnerType(str, enum.Enum):
    """Kind of principal a template belongs to. Persisted by name."""

    USER = "User"
    GROUP = "Group"
    ORGANIZATION = "Organization"

    @classmethod
    def _missing_(cls, value: object) -> "OwnerType | None":
        if isinstance(value, str):
            for member in cls:
                if value.lower() in (member.value.lower(), member.name.lower()):
                    return member
        return None


class TemplateSortBy(str, enum.Enum):
    USAGE_COUNT = "UsageCount"
    NAME = "Name"
    CREATED_AT = "CreatedAt"
    UPDATED_AT = "UpdatedAt"

    @classmethod
    def parse(cls, value: "TemplateSortBy | str | None") -> "TemplateSortBy":
        """Resolve a sort value, falling back to usage count for unknown input."""
        if isinstance(value, cls):
            return value
        if value:
            normalized = str(value).replace("_", "").lower()
            for member in cls:
                if member.value.lower() == normalized:
                    return member
        return cls.USAGE_COUNT


@dataclass(slots=True)
class TemplateDto:
    id: str
    owner_id: str
    owner_type: OwnerType
    template_type: str
    name: str
    description: Optional[str]
    body: Any
    usage_count: int
    created_at: datetime
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class CreateTemplateRequest:
    owner_id: str
    owner_type: OwnerType
    template_type: str
    name: str
    body: Any
    description: Optional[str] = None


@dataclass(slots=True)
class UpdateTemplateRequest:
    name: str
    body: Any
    description: Optional[str] = None
    # Optional echo of the target id; must match the id passed to update_template.
    template_id: Optional[str] = None


@dataclass(slots=True)
class GetTemplatesRequest:
    owner_id: str
    owner_type: OwnerType
    template_type: Optional[str] = None
    sort_by: TemplateSortBy = TemplateSortBy.USAGE_COUNT
    page: int = 1
    page_size: int = 50
