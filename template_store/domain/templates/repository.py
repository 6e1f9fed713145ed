"""Repository protocol for template persistence."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from template_store.db.models import Template as TemplateModel

from .models import OwnerType, TemplateSortBy


class TemplateRepository(Protocol):
    """Entity-typed store access. Performs no business validation."""

    async def get_by_id(self, template_id: str) -> TemplateModel | None:
        ...

    async def get_by_owner(
        self,
        owner_id: str,
        owner_type: OwnerType,
        template_type: Optional[str],
        sort_by: TemplateSortBy,
        page: int,
        page_size: int,
    ) -> Sequence[TemplateModel]:
        ...

    async def get_most_used(
        self,
        owner_id: str,
        owner_type: OwnerType,
        template_type: Optional[str],
        limit: int,
    ) -> Sequence[TemplateModel]:
        ...

    async def add(self, template: TemplateModel) -> TemplateModel:
        ...

    async def update(self, template: TemplateModel) -> TemplateModel:
        ...

    async def delete(self, template_id: str) -> bool:
        ...

    async def increment_usage(self, template_id: str) -> int:
        ...

    async def exists(
        self,
        owner_id: str,
        owner_type: OwnerType,
        template_type: str,
        name: str,
    ) -> bool:
        ...
