"""Category API: list with event counts, get-or-create, delete unused."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from trackplan.api.v1.dependencies import (
    CanCreate,
    CanView,
    IsAdmin,
    get_category_query_service,
    get_category_service,
)
from trackplan.application.use_cases.categories import CategoryService
from trackplan.core.limiter import limit_writes
from trackplan.schemas.category import (
    CategoryCreateRequest,
    CategoryListItemResponse,
    CategoryResponse,
)

router = APIRouter()


@router.get("", response_model=list[CategoryListItemResponse])
async def list_categories(
    _: CanView,
    category_service: Annotated[CategoryService, Depends(get_category_query_service)],
):
    items = await category_service.list_categories()
    return [CategoryListItemResponse.model_validate(c) for c in items]


@router.post("", response_model=CategoryResponse)
@limit_writes
async def get_or_create_category(
    request: Request,
    body: CategoryCreateRequest,
    _: CanCreate,
    category_service: Annotated[CategoryService, Depends(get_category_service)],
):
    """Return the category with this name, creating it if it does not exist."""
    category = await category_service.get_or_create_category(body.name)
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", status_code=204)
@limit_writes
async def delete_category(
    request: Request,
    category_id: str,
    _: IsAdmin,
    category_service: Annotated[CategoryService, Depends(get_category_service)],
):
    """Delete a category; 409 with event_count if events still use it."""
    await category_service.delete_category(category_id)
    return Response(status_code=204)
