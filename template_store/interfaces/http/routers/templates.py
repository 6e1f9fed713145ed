"""Template management endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import IntegrityError

from template_store.domain.templates import (
    CreateTemplateRequest,
    OwnerType,
    TemplateAlreadyExistsError,
    TemplateBodyTooLargeError,
    TemplateDto,
    TemplateNotFoundError,
    TemplateSortBy,
    TemplateValidationError,
    UpdateTemplateRequest,
)
from template_store.infrastructure.database.errors import is_unique_violation
from template_store.interfaces.http.deps import get_template_service
from template_store.interfaces.http.schemas import (
    ExistsResponse,
    TemplateCreate,
    TemplateResponse,
    TemplateUpdate,
    UsageResponse,
)
from template_store.modules.templates import TemplateService

router = APIRouter()


def _to_schema(template: TemplateDto) -> TemplateResponse:
    return TemplateResponse.model_validate(template)


@router.get("/", response_model=list[TemplateResponse], summary="List an owner's templates")
async def list_templates(
    owner_id: str,
    owner_type: OwnerType,
    template_type: Optional[str] = None,
    sort_by: str = TemplateSortBy.USAGE_COUNT.value,
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1),
    service: TemplateService = Depends(get_template_service),
):
    try:
        templates = await service.get_by_owner(owner_id, owner_type, template_type, sort_by, page, page_size)
    except TemplateValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return [_to_schema(template) for template in templates]


@router.get("/most-used", response_model=list[TemplateResponse], summary="Most used templates")
async def most_used_templates(
    owner_id: str,
    owner_type: OwnerType,
    template_type: Optional[str] = None,
    limit: int = Query(10, ge=1),
    service: TemplateService = Depends(get_template_service),
):
    templates = await service.get_most_used(owner_id, owner_type, template_type, limit)
    return [_to_schema(template) for template in templates]


@router.get("/exists", response_model=ExistsResponse, summary="Check whether a template name is taken")
async def template_exists(
    owner_id: str,
    owner_type: OwnerType,
    template_type: str,
    name: str,
    service: TemplateService = Depends(get_template_service),
):
    return ExistsResponse(exists=await service.exists(owner_id, owner_type, template_type, name))


@router.get("/{template_id}", response_model=TemplateResponse, summary="Get a template")
async def get_template(template_id: str, service: TemplateService = Depends(get_template_service)):
    template = await service.get_by_id(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return _to_schema(template)


@router.post("/", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED, summary="Create a template")
async def create_template(payload: TemplateCreate, service: TemplateService = Depends(get_template_service)):
    request = CreateTemplateRequest(**payload.model_dump())
    try:
        template = await service.create_template(request)
    except TemplateAlreadyExistsError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except TemplateBodyTooLargeError as exc:
        raise HTTPException(status_code=413, detail=str(exc))
    except TemplateValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _to_schema(template)


@router.put("/{template_id}", response_model=TemplateResponse, summary="Update a template")
async def update_template(
    template_id: str,
    payload: TemplateUpdate,
    service: TemplateService = Depends(get_template_service),
):
    request = UpdateTemplateRequest(template_id=template_id, **payload.model_dump())
    try:
        template = await service.update_template(template_id, request)
    except TemplateNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except IntegrityError as exc:
        if not is_unique_violation(exc):
            raise
        raise HTTPException(
            status_code=409,
            detail=f"Template with name '{payload.name}' already exists for this owner.",
        )
    except TemplateBodyTooLargeError as exc:
        raise HTTPException(status_code=413, detail=str(exc))
    except TemplateValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _to_schema(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a template")
async def delete_template(template_id: str, service: TemplateService = Depends(get_template_service)):
    if not await service.delete_template(template_id):
        raise HTTPException(status_code=404, detail="Template not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{template_id}/usage", response_model=UsageResponse, summary="Record a template use")
async def increment_usage(template_id: str, service: TemplateService = Depends(get_template_service)):
    try:
        usage_count = await service.increment_usage(template_id)
    except TemplateNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return UsageResponse(id=template_id, usage_count=usage_count)
