from datetime import datetime
from enum import Enum as PyEnum
from typing import TYPE_CHECKING

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Boolean, Numeric, JSON
from sqlalchemy.orm import relationship

from database import Base

if TYPE_CHECKING:
    from models.user import User
    from models.transaction import Transaction


class ListingCondition(str, PyEnum):
    NEW = "new"
    LIKE_NEW = "like_new"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class Listing(Base):
    """Marketplace listing. Price is kept as an exact decimal."""

    __tablename__ = 'listings'

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(12, 2, asdecimal=True), nullable=False, index=True)
    currency = Column(String(3), nullable=False, comment='ISO 4217 code, e.g. USD')
    category = Column(String(50), nullable=False, index=True)
    condition = Column(String(20), nullable=False)
    location = Column(String(100), nullable=True, index=True)
    media_urls = Column(JSON, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    view_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    seller = relationship("User", back_populates="listings")
    transactions = relationship("Transaction", back_populates="listing")

    def __repr__(self):
        return f"<Listing {self.id} {self.title!r} {self.price} {self.currency}>"
