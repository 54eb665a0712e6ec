from datetime import datetime
from decimal import Decimal
from typing import List, Optional
import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import InvalidOperationError, NotFoundError, StateError, ValidationError
from database import atomic
from models.listing import Listing
from models.transaction import Transaction, TransactionStatus
from models.user import User
from schemas.transaction import TransactionCreate
from schemas.types import CENT, to_cents

logger = logging.getLogger(__name__)

class TransactionService:
    """Service for listing purchases."""

    def __init__(self, db: Session):
        self.db = db

    def create_transaction(self, transaction_data: TransactionCreate) -> Transaction:
        """
        Start a purchase of a listing.

        A buyer holds at most one pending transaction per listing: repeating
        the call while it is pending returns the same row unchanged.

        Args:
            transaction_data: Validated purchase payload

        Returns:
            The new or already pending transaction

        Raises:
            NotFoundError: If the listing, the buyer or the seller is missing
            StateError: If the listing is not active
            InvalidOperationError: If buyer and seller coincide, or the seller does not own the listing
            ValidationError: If amount or currency do not match the listing
        """
        listing_id = transaction_data.listing_id
        buyer_id = transaction_data.buyer_id
        seller_id = transaction_data.seller_id

        listing = self.db.get(Listing, listing_id)
        if listing is None:
            raise NotFoundError(f"Listing with ID {listing_id} not found")
        if not listing.is_active:
            raise StateError(f"Listing with ID {listing_id} is not active")

        if self.db.get(User, buyer_id) is None:
            raise NotFoundError(f"Buyer with ID {buyer_id} not found")
        if self.db.get(User, seller_id) is None:
            raise NotFoundError(f"Seller with ID {seller_id} not found")

        if buyer_id == seller_id:
            logger.warning(f"User {buyer_id} tried to buy their own listing {listing_id}")
            raise InvalidOperationError("Buyer and seller cannot be the same user")
        if listing.user_id != seller_id:
            raise InvalidOperationError("Seller must be the owner of the listing")

        amount = to_cents(transaction_data.amount)
        if abs(amount - Decimal(listing.price)) > CENT:
            raise ValidationError("Transaction amount must match listing price")
        if transaction_data.currency != listing.currency:
            raise ValidationError("Transaction currency must match listing currency")

        existing = self._find_pending(listing_id, buyer_id)
        if existing:
            logger.info(f"Returning pending transaction {existing.id} for listing {listing_id}")
            return existing

        transaction = Transaction(
            listing_id=listing_id,
            buyer_id=buyer_id,
            seller_id=seller_id,
            amount=amount,
            currency=transaction_data.currency,
            status=TransactionStatus.PENDING.value,
            payment_method=transaction_data.payment_method
        )
        try:
            with atomic(self.db):
                self.db.add(transaction)
        except IntegrityError:
            # A concurrent request inserted the pending row first
            existing = self._find_pending(listing_id, buyer_id)
            if existing is None:
                raise
            logger.info(f"Concurrent purchase of listing {listing_id} resolved to transaction {existing.id}")
            return existing
        self.db.refresh(transaction)

        logger.info(f"Created transaction {transaction.id}: buyer {buyer_id} listing {listing_id}")
        return transaction

    def update_transaction_status(self, transaction_id: int, status: str) -> Transaction:
        """Store a new status string. Transitions are not restricted."""
        transaction = self.db.get(Transaction, transaction_id)
        if not transaction:
            raise NotFoundError(f"Transaction with ID {transaction_id} not found")

        previous = transaction.status
        transaction.status = status
        transaction.updated_at = datetime.utcnow()
        with atomic(self.db):
            self.db.add(transaction)
        self.db.refresh(transaction)

        logger.info(f"Transaction {transaction_id} status {previous} -> {status}")
        return transaction

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        return self.db.get(Transaction, transaction_id)

    def get_transactions_by_user(self, user_id: int) -> List[Transaction]:
        """Transactions where the user is the buyer or the seller, newest first."""
        return (
            self.db.query(Transaction)
            .filter(or_(Transaction.buyer_id == user_id, Transaction.seller_id == user_id))
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .all()
        )

    def get_transactions_by_listing(self, listing_id: int) -> List[Transaction]:
        return (
            self.db.query(Transaction)
            .filter(Transaction.listing_id == listing_id)
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .all()
        )

    def _find_pending(self, listing_id: int, buyer_id: int) -> Optional[Transaction]:
        return self.db.query(Transaction).filter(
            Transaction.listing_id == listing_id,
            Transaction.buyer_id == buyer_id,
            Transaction.status == TransactionStatus.PENDING.value
        ).first()
