"""SQLAlchemy implementation for template repository."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy import delete, exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql import Select

from template_store.db.models import Template
from template_store.domain.common import AsyncRepository
from template_store.domain.templates.exceptions import TemplateNotFoundError
from template_store.domain.templates.models import OwnerType, TemplateSortBy

logger = logging.getLogger(__name__)

_SORT_ORDERS = {
    TemplateSortBy.USAGE_COUNT: (Template.usage_count.desc(), Template.created_at.desc(), Template.id.asc()),
    TemplateSortBy.NAME: (Template.name.asc(), Template.id.asc()),
    TemplateSortBy.CREATED_AT: (Template.created_at.desc(), Template.id.asc()),
    # Rows never updated go last: False (has updated_at) sorts before True.
    TemplateSortBy.UPDATED_AT: (
        Template.updated_at.is_(None).asc(),
        Template.updated_at.desc(),
        Template.created_at.desc(),
        Template.id.asc(),
    ),
}


class SqlTemplateRepository(AsyncRepository[Template]):
    """Template store access. Reads come back detached from the session."""

    async def get_by_id(self, template_id: str) -> Template | None:
        stmt = select(Template).where(Template.id == template_id)
        result = await self.session.execute(stmt)
        template = result.scalars().first()
        if template is None:
            return None
        self.session.expunge(template)
        return template

    async def get_by_owner(
        self,
        owner_id: str,
        owner_type: OwnerType,
        template_type: Optional[str],
        sort_by: TemplateSortBy,
        page: int,
        page_size: int,
    ) -> Sequence[Template]:
        order = _SORT_ORDERS.get(sort_by, _SORT_ORDERS[TemplateSortBy.USAGE_COUNT])
        stmt = (
            self._owner_query(owner_id, owner_type, template_type)
            .order_by(*order)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await self.session.execute(stmt)
        return self.detach(result.scalars().all())

    async def get_most_used(
        self,
        owner_id: str,
        owner_type: OwnerType,
        template_type: Optional[str],
        limit: int,
    ) -> Sequence[Template]:
        stmt = (
            self._owner_query(owner_id, owner_type, template_type)
            .order_by(*_SORT_ORDERS[TemplateSortBy.USAGE_COUNT])
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return self.detach(result.scalars().all())

    async def add(self, template: Template) -> Template:
        self.session.add(template)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise
        return template

    async def update(self, template: Template) -> Template:
        stmt = (
            update(Template)
            .where(Template.id == template.id)
            .values(
                name=template.name,
                description=template.description,
                body=template.body,
                updated_at=template.updated_at,
            )
            .execution_options(synchronize_session="fetch")
            .returning(Template)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError:
            await self.session.rollback()
            raise
        updated = result.scalars().first()
        if updated is None:
            raise TemplateNotFoundError(template.id)
        return updated

    async def delete(self, template_id: str) -> bool:
        stmt = delete(Template).where(Template.id == template_id)
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def increment_usage(self, template_id: str) -> int:
        template = await self.session.get(Template, template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        template.usage_count += 1
        await self.session.flush()
        logger.debug("Template %s usage count is now %s", template_id, template.usage_count)
        return template.usage_count

    async def exists(
        self,
        owner_id: str,
        owner_type: OwnerType,
        template_type: str,
        name: str,
    ) -> bool:
        stmt = select(
            exists().where(
                Template.owner_id == owner_id,
                Template.owner_type == owner_type,
                Template.template_type == template_type,
                Template.name == name,
            )
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    @staticmethod
    def _owner_query(owner_id: str, owner_type: OwnerType, template_type: Optional[str]) -> Select:
        stmt = select(Template).where(
            Template.owner_id == owner_id,
            Template.owner_type == owner_type,
        )
        if template_type:
            stmt = stmt.where(Template.template_type == template_type)
        return stmt
