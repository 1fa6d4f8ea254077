"""Category management endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from finance_tracker.api.deps import get_category_service, get_current_user
from finance_tracker.models.enums import CategoryDeleteAction, CategoryType
from finance_tracker.models.user import User
from finance_tracker.schemas.category import (
    CategoryDeleteResult,
    CategoryIn,
    CategoryResponse,
)
from finance_tracker.schemas.common import ApiResponse
from finance_tracker.services.category import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get(
    "",
    response_model=ApiResponse[list[CategoryResponse]],
    summary="List user's categories",
)
async def list_categories(
    type: CategoryType | None = Query(None, description="Only categories of this type"),
    current_user: User = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> ApiResponse[list[CategoryResponse]]:
    """List the authenticated user's categories, newest first."""
    categories = await service.list_categories(
        current_user.id, type.value if type else None
    )
    return ApiResponse(data=[CategoryResponse.model_validate(c) for c in categories])


@router.post(
    "",
    response_model=ApiResponse[CategoryResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
    description="Names must be unique per type, ignoring case.",
)
async def create_category(
    data: CategoryIn,
    current_user: User = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> ApiResponse[CategoryResponse]:
    """
    Create a category for the authenticated user.

    Raises:
        400: Validation error
        409: Duplicate name for the type
    """
    category = await service.create_category(current_user.id, data)
    return ApiResponse(
        data=CategoryResponse.model_validate(category), message="category created"
    )


@router.put(
    "/{category_id}",
    response_model=ApiResponse[CategoryResponse],
    summary="Update category",
)
async def update_category(
    category_id: UUID,
    data: CategoryIn,
    current_user: User = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> ApiResponse[CategoryResponse]:
    """
    Replace a category's name, type, icon and color.

    Raises:
        400: Type change while transactions use the category
        403: Category belongs to another user
        404: Category not found
        409: Duplicate name for the type
    """
    category = await service.update_category(current_user.id, category_id, data)
    return ApiResponse(
        data=CategoryResponse.model_validate(category), message="category updated"
    )


@router.delete(
    "/{category_id}",
    response_model=ApiResponse[CategoryDeleteResult],
    summary="Delete category",
    description="""
    Delete a category. The `action` decides what happens to its transactions:

    - `nullify` (default): they become uncategorized
    - `move`: they are reassigned to `target_category_id` (same type required)
    - `delete`: they are deleted as well
    """,
)
async def delete_category(
    category_id: UUID,
    # Plain string so an unknown action gets the catalog error, not a 422
    action: str = Query(CategoryDeleteAction.nullify.value),
    target_category_id: UUID | None = Query(None),
    current_user: User = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> ApiResponse[CategoryDeleteResult]:
    """
    Delete a category using the chosen transaction policy.

    Raises:
        400: Unknown action, missing or mismatched move target
        403: Category or target belongs to another user
        404: Category or target not found
    """
    affected = await service.delete_category(
        current_user.id, category_id, action, target_category_id
    )
    return ApiResponse(
        data=CategoryDeleteResult(
            id=category_id,
            action=CategoryDeleteAction(action),
            affected_transactions=affected,
        ),
        message="category deleted",
    )
