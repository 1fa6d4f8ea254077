"""Transaction endpoints: CRUD and keyword auto-categorization."""

import datetime as dt
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from finance_tracker.api.deps import (
    get_classifier,
    get_current_user,
    get_transaction_service,
)
from finance_tracker.categorization import TransactionClassifier
from finance_tracker.models.enums import TransactionType
from finance_tracker.models.user import User
from finance_tracker.schemas.common import ApiResponse
from finance_tracker.schemas.transaction import (
    AutoCategorizeResult,
    TransactionIn,
    TransactionResponse,
)
from finance_tracker.services.transaction import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get(
    "",
    response_model=ApiResponse[list[TransactionResponse]],
    summary="List transactions",
    description="""
    Get the authenticated user's transactions, newest first.

    Supports filtering by:
    - Type (income, expense, neutral)
    - Category
    - Date range (inclusive)
    """,
)
async def list_transactions(
    type: TransactionType | None = Query(None),
    category_id: UUID | None = Query(None),
    start_date: dt.date | None = Query(None, description="Start date (inclusive)"),
    end_date: dt.date | None = Query(None, description="End date (inclusive)"),
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> ApiResponse[list[TransactionResponse]]:
    transactions = await service.list_transactions(
        current_user.id,
        type=type.value if type else None,
        category_id=category_id,
        start_date=start_date,
        end_date=end_date,
    )
    return ApiResponse(data=[TransactionResponse.model_validate(t) for t in transactions])


@router.post(
    "",
    response_model=ApiResponse[TransactionResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create transaction",
)
async def create_transaction(
    data: TransactionIn,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> ApiResponse[TransactionResponse]:
    """
    Record a transaction.

    Raises:
        400: Validation error or category type mismatch
        403: Category belongs to another user
        404: Category not found
    """
    transaction = await service.create_transaction(current_user.id, data)
    return ApiResponse(
        data=TransactionResponse.model_validate(transaction),
        message="transaction created",
    )


@router.post(
    "/auto-categorize",
    response_model=ApiResponse[AutoCategorizeResult],
    summary="Auto-categorize transactions",
    description="""
    Assign a category to every transaction of the user by matching its
    description against the keyword lexicon. Missing categories are created.
    Running it again reuses the same categories.
    """,
)
async def auto_categorize(
    current_user: User = Depends(get_current_user),
    classifier: TransactionClassifier = Depends(get_classifier),
) -> ApiResponse[AutoCategorizeResult]:
    updated = await classifier.classify_all(current_user.id)
    message = (
        f"categorized {updated} transactions" if updated else "no transactions to categorize"
    )
    return ApiResponse(data=AutoCategorizeResult(updated=updated), message=message)


@router.get(
    "/{transaction_id}",
    response_model=ApiResponse[TransactionResponse],
    summary="Get transaction",
)
async def get_transaction(
    transaction_id: UUID,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> ApiResponse[TransactionResponse]:
    transaction = await service.get_owned_transaction(current_user.id, transaction_id)
    return ApiResponse(data=TransactionResponse.model_validate(transaction))


@router.put(
    "/{transaction_id}",
    response_model=ApiResponse[TransactionResponse],
    summary="Update transaction",
)
async def update_transaction(
    transaction_id: UUID,
    data: TransactionIn,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> ApiResponse[TransactionResponse]:
    transaction = await service.update_transaction(current_user.id, transaction_id, data)
    return ApiResponse(
        data=TransactionResponse.model_validate(transaction),
        message="transaction updated",
    )


@router.delete(
    "/{transaction_id}",
    response_model=ApiResponse[None],
    summary="Delete transaction",
)
async def delete_transaction(
    transaction_id: UUID,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> ApiResponse[None]:
    await service.delete_transaction(current_user.id, transaction_id)
    return ApiResponse(message="transaction deleted")
