"""Application service handling template workflows."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from template_store.db.models import Template as TemplateModel, generate_uuid
from template_store.domain.templates.exceptions import (
    TemplateAlreadyExistsError,
    TemplateBodyTooLargeError,
    TemplateNotFoundError,
    TemplateValidationError,
)
from template_store.domain.templates.models import (
    DESCRIPTION_MAX_LENGTH,
    MAX_BODY_SIZE,
    NAME_MAX_LENGTH,
    TEMPLATE_TYPE_MAX_LENGTH,
    CreateTemplateRequest,
    GetTemplatesRequest,
    OwnerType,
    TemplateDto,
    TemplateSortBy,
    UpdateTemplateRequest,
)
from template_store.domain.templates.repository import TemplateRepository
from template_store.infrastructure.database.errors import is_unique_violation
from template_store.infrastructure.database.repositories.template_repository import SqlTemplateRepository

from .codec import body_size, decode_body, encode_body

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
DEFAULT_MAX_PAGE_SIZE = 500


class TemplateService:
    """Business façade over the template repository.

    Works with decoded bodies (``TemplateDto``); validation and size checks
    run before any write reaches the store.
    """

    def __init__(
        self,
        repository: TemplateRepository,
        *,
        max_body_bytes: int = MAX_BODY_SIZE,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
    ) -> None:
        self._repository = repository
        self._max_body_bytes = max_body_bytes
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    @classmethod
    def with_session(cls, session: AsyncSession, **options: Any) -> "TemplateService":
        return cls(SqlTemplateRepository(session), **options)

    async def get_by_id(self, template_id: str) -> TemplateDto | None:
        model = await self._repository.get_by_id(template_id)
        return self._to_dto(model) if model else None

    async def get_by_owner(
        self,
        owner_id: str,
        owner_type: OwnerType | str,
        template_type: Optional[str] = None,
        sort_by: TemplateSortBy | str = TemplateSortBy.USAGE_COUNT,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> list[TemplateDto]:
        if page_size is None:
            page_size = self._default_page_size
        if page < 1:
            raise TemplateValidationError(f"page must be >= 1, got {page}")
        if not 1 <= page_size <= self._max_page_size:
            raise TemplateValidationError(
                f"page_size must be between 1 and {self._max_page_size}, got {page_size}"
            )
        models = await self._repository.get_by_owner(
            owner_id,
            _owner_type(owner_type),
            template_type,
            TemplateSortBy.parse(sort_by),
            page,
            page_size,
        )
        return self._to_dtos(models)

    async def list_templates(self, request: GetTemplatesRequest) -> list[TemplateDto]:
        return await self.get_by_owner(
            request.owner_id,
            request.owner_type,
            request.template_type,
            request.sort_by,
            request.page,
            request.page_size,
        )

    async def get_most_used(
        self,
        owner_id: str,
        owner_type: OwnerType | str,
        template_type: Optional[str] = None,
        limit: int = 10,
    ) -> list[TemplateDto]:
        if limit < 1:
            raise TemplateValidationError(f"limit must be >= 1, got {limit}")
        models = await self._repository.get_most_used(owner_id, _owner_type(owner_type), template_type, limit)
        return self._to_dtos(models)

    async def create_template(self, request: CreateTemplateRequest) -> TemplateDto:
        owner_type = _owner_type(request.owner_type)
        _check_text("owner_id", request.owner_id, 36, required=True)
        _check_text("template_type", request.template_type, TEMPLATE_TYPE_MAX_LENGTH, required=True)
        _check_text("name", request.name, NAME_MAX_LENGTH, required=True)
        _check_text("description", request.description, DESCRIPTION_MAX_LENGTH)

        if await self._repository.exists(request.owner_id, owner_type, request.template_type, request.name):
            logger.warning(
                "Rejected duplicate template %r for %s:%s (%s)",
                request.name,
                owner_type.value,
                request.owner_id,
                request.template_type,
            )
            raise TemplateAlreadyExistsError(
                f"Template with name '{request.name}' already exists for this owner."
            )

        body = self._encode(request.body)
        model = TemplateModel(
            id=generate_uuid(),
            owner_id=request.owner_id,
            owner_type=owner_type,
            template_type=request.template_type,
            name=request.name,
            description=request.description,
            body=body,
            usage_count=0,
            created_at=datetime.now(timezone.utc),
            updated_at=None,
        )
        try:
            model = await self._repository.add(model)
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            raise TemplateAlreadyExistsError(
                f"Template with name '{request.name}' already exists for this owner."
            ) from exc

        logger.info(
            "Created template %s (%s) for %s:%s",
            model.id,
            request.template_type,
            owner_type.value,
            request.owner_id,
        )
        return self._to_dto(model)

    async def update_template(self, template_id: str, request: UpdateTemplateRequest) -> TemplateDto:
        if request.template_id is not None and request.template_id != template_id:
            raise TemplateValidationError(
                f"Request targets template {request.template_id}, not {template_id}"
            )
        _check_text("name", request.name, NAME_MAX_LENGTH, required=True)
        _check_text("description", request.description, DESCRIPTION_MAX_LENGTH)

        model = await self._repository.get_by_id(template_id)
        if model is None:
            raise TemplateNotFoundError(template_id)

        body = self._encode(request.body)
        model.name = request.name
        model.description = request.description
        model.body = body
        model.updated_at = datetime.now(timezone.utc)

        model = await self._repository.update(model)
        logger.info("Updated template %s", template_id)
        return self._to_dto(model)

    async def delete_template(self, template_id: str) -> bool:
        deleted = await self._repository.delete(template_id)
        if deleted:
            logger.info("Deleted template %s", template_id)
        else:
            logger.debug("No template %s to delete", template_id)
        return deleted

    async def increment_usage(self, template_id: str) -> int:
        return await self._repository.increment_usage(template_id)

    async def exists(
        self,
        owner_id: str,
        owner_type: OwnerType | str,
        template_type: str,
        name: str,
    ) -> bool:
        return await self._repository.exists(owner_id, _owner_type(owner_type), template_type, name)

    def _encode(self, body: Any) -> str:
        try:
            encoded = encode_body(body)
        except (TypeError, ValueError) as exc:
            raise TemplateValidationError(f"Template body is not JSON serializable: {exc}") from exc
        size = body_size(encoded)
        if size > self._max_body_bytes:
            logger.warning("Rejected template body of %s bytes (limit %s)", size, self._max_body_bytes)
            raise TemplateBodyTooLargeError(size, self._max_body_bytes)
        return encoded

    def _to_dtos(self, models: Sequence[TemplateModel]) -> list[TemplateDto]:
        return [self._to_dto(model) for model in models]

    @staticmethod
    def _to_dto(model: TemplateModel) -> TemplateDto:
        return TemplateDto(
            id=model.id,
            owner_id=model.owner_id,
            owner_type=model.owner_type,
            template_type=model.template_type,
            name=model.name,
            description=model.description,
            body=decode_body(model.body, template_id=model.id),
            usage_count=model.usage_count,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


def _owner_type(value: OwnerType | str) -> OwnerType:
    try:
        return OwnerType(value)
    except ValueError as exc:
        raise TemplateValidationError(f"Unknown owner type: {value!r}") from exc


def _check_text(field: str, value: Optional[str], max_length: int, *, required: bool = False) -> None:
    if value is None or value == "":
        if required:
            raise TemplateValidationError(f"{field} is required")
        return
    if len(value) > max_length:
        raise TemplateValidationError(f"{field} must be at most {max_length} characters")
