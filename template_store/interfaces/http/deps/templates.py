"""Template related dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from template_store.core.container import ApplicationContainer, get_container
from template_store.modules.templates import TemplateService

from .database import get_db_session


def get_template_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
) -> TemplateService:
    return container.template_service(db)


__all__ = ["get_template_service"]
