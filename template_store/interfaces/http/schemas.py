"""Pydantic schemas for the template HTTP interface."""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from template_store.domain.templates.models import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    TEMPLATE_TYPE_MAX_LENGTH,
    OwnerType,
)


class TemplateCreate(BaseModel):
    owner_id: str = Field(..., min_length=1, max_length=36)
    owner_type: OwnerType
    template_type: str = Field(..., min_length=1, max_length=TEMPLATE_TYPE_MAX_LENGTH)
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    body: Any


class TemplateUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    body: Any


class TemplateResponse(BaseModel):
    id: str
    owner_id: str
    owner_type: OwnerType
    template_type: str
    name: str
    description: Optional[str] = None
    body: Any
    usage_count: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UsageResponse(BaseModel):
    id: str
    usage_count: int


class ExistsResponse(BaseModel):
    exists: bool
