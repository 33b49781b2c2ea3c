# sellcore/models.py
"""SQLAlchemy ORM models for listings and Blue Book reference entries."""
import enum
from sqlalchemy import Column, Integer, Text, Float, DateTime, Index
from .db import Base


class ListingStatus(str, enum.Enum):
    LISTED = "listed"
    EXPIRED = "expired"


class Listing(Base):
    __tablename__ = "listings"
    id = Column(Integer, primary_key=True, index=True)
    seller_id = Column(Text, nullable=False, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text)
    brand = Column(Text)
    model = Column(Text)
    category = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    image_url = Column(Text)
    shipping_cost = Column(Float)
    shipping_method = Column(Text)
    status = Column(Text, nullable=False, default=ListingStatus.LISTED.value)
    created_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<Listing(id={self.id}, status={self.status}, expires_at={self.expires_at})>"


class BlueBookEntry(Base):
    __tablename__ = "bluebook_entries"
    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, index=True)
    brand = Column(Text)
    model = Column(Text)
    category = Column(Text)
    quality_tier = Column(Text)
    avg_price = Column(Float)
    base_price_cents = Column(Integer)
    popularity_score = Column(Integer, nullable=False, default=0)

Index("idx_listings_status_expires", Listing.status, Listing.expires_at)
Index("idx_bluebook_category", BlueBookEntry.category)
