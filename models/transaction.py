from datetime import datetime
from enum import Enum as PyEnum
from typing import TYPE_CHECKING

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric, Index, text
from sqlalchemy.orm import relationship

from database import Base

if TYPE_CHECKING:
    from models.listing import Listing
    from models.user import User


class TransactionStatus(str, PyEnum):
    """Well-known statuses. The column itself accepts any string."""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


PENDING_ONLY = text("status = 'pending'")


class Transaction(Base):
    """Purchase of a listing by a buyer from the listing's seller."""

    __tablename__ = 'transactions'

    id = Column(Integer, primary_key=True, index=True)
    listing_id = Column(Integer, ForeignKey('listings.id'), nullable=False, index=True)
    buyer_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    seller_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    amount = Column(Numeric(12, 2, asdecimal=True), nullable=False)
    currency = Column(String(3), nullable=False)
    status = Column(String(20), nullable=False, default=TransactionStatus.PENDING.value, index=True)
    payment_method = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    listing = relationship("Listing", back_populates="transactions")
    buyer = relationship("User", foreign_keys=[buyer_id])
    seller = relationship("User", foreign_keys=[seller_id])

    __table_args__ = (
        # One pending purchase per (listing, buyer)
        Index(
            'uq_transactions_pending_listing_buyer',
            'listing_id',
            'buyer_id',
            unique=True,
            sqlite_where=PENDING_ONLY,
            postgresql_where=PENDING_ONLY,
        ),
    )

    def __repr__(self):
        return f"<Transaction {self.id} listing={self.listing_id} {self.status}>"
