"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession

from template_store.core.config import Settings, get_settings
from template_store.core.logging import configure_logging
from template_store.infrastructure.database.session import get_engine
from template_store.modules.templates import TemplateService


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (logging, database engine) are initialised."""
        configure_logging(self.settings)
        get_engine()

    def template_service(self, session: AsyncSession) -> TemplateService:
        return TemplateService.with_session(
            session,
            max_body_bytes=self.settings.templates.max_body_bytes,
            default_page_size=self.settings.templates.default_page_size,
            max_page_size=self.settings.templates.max_page_size,
        )


@lru_cache()
def get_container() -> ApplicationContainer:
    container = ApplicationContainer(settings=get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "get_container"]
