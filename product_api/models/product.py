"""
Product Catalog API — Product SQLAlchemy Model
===============================================

What:  ORM model for the `products` table.
Who:   Used only by SQLProductStore. Routes and services see ProductResponse.

Column notes:
    - id: UUID generated on insert, never changed afterwards
    - name: at most 100 characters (the schema enforces 3..100 after trimming)
    - category: stored as the enum's string value
    - created_at / updated_at: UTC, set by the store on insert and update
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from product_api.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    """A catalog product. Rows only exist in a valid state."""

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    price: Mapped[float] = mapped_column(Float, nullable=False)

    category: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="Other",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Refreshed by the store on every update
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return (
            f"<Product(id={self.id}, name='{self.name}', "
            f"price={self.price}, category='{self.category}')>"
        )
