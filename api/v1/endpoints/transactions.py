from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_db
from schemas.transaction import TransactionCreate, TransactionResponse, TransactionStatusUpdate
from services.transaction_service import TransactionService

router = APIRouter(prefix="/transactions", tags=["Marketplace"])


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createTransaction",
    responses={
        400: {"description": "Buyer is the seller, or seller does not own the listing"},
        404: {"description": "Listing, buyer or seller not found"},
        409: {"description": "Listing is not active"},
        422: {"description": "Amount or currency do not match the listing"}
    }
)
def create_transaction(transaction_in: TransactionCreate, db: Session = Depends(get_db)):
    """
    Start a purchase.

    While a pending transaction exists for the same listing and buyer, the
    call returns that transaction instead of creating another one.
    """
    return TransactionService(db).create_transaction(transaction_in)


@router.patch(
    "/{transaction_id}/status",
    response_model=TransactionResponse,
    operation_id="updateTransactionStatus"
)
def update_transaction_status(
    transaction_id: int,
    status_in: TransactionStatusUpdate,
    db: Session = Depends(get_db)
):
    return TransactionService(db).update_transaction_status(transaction_id, status_in.status)


@router.get(
    "/by-user/{user_id}",
    response_model=List[TransactionResponse],
    operation_id="getTransactionsByUserId"
)
def get_transactions_by_user_id(user_id: int, db: Session = Depends(get_db)):
    """Purchases and sales of the user, newest first."""
    return TransactionService(db).get_transactions_by_user(user_id)


@router.get(
    "/by-listing/{listing_id}",
    response_model=List[TransactionResponse],
    operation_id="getTransactionsByListingId"
)
def get_transactions_by_listing_id(listing_id: int, db: Session = Depends(get_db)):
    return TransactionService(db).get_transactions_by_listing(listing_id)


@router.get(
    "/{transaction_id}",
    response_model=Optional[TransactionResponse],
    operation_id="getTransactionById"
)
def get_transaction_by_id(transaction_id: int, db: Session = Depends(get_db)):
    return TransactionService(db).get_transaction(transaction_id)
