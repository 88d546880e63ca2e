"""Storefront catalog tables created by the database bootstrap.

Only the columns the admin back-office and the bootstrap indexes rely on are
mapped here; the storefront owns the rest of the schema.
"""

import uuid
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    func,
    literal_column,
)
from sqlalchemy.orm import Mapped, mapped_column

from shopadmin.models.base import BaseModel


class User(BaseModel):
    """Storefront customer or administrator."""

    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_email", "email", unique=True),
        Index("idx_users_phone_number", "phone_number"),
        Index("idx_users_created_at", "created_at"),
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Product(BaseModel):
    """A shawl or scarf listed in the shop."""

    __tablename__ = "products"
    __table_args__ = (
        Index("idx_products_category", "category"),
        Index("idx_products_price", "price"),
        Index("idx_products_created_at", "created_at"),
        Index("idx_products_is_active", "is_active"),
        Index("idx_products_featured", "is_featured"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 0), nullable=False)
    discount_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 0), nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    material: Mapped[str | None] = mapped_column(String(100), nullable=True)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


# Full-text search over name and description (PostgreSQL only)
Index(
    "idx_products_search",
    func.to_tsvector(
        literal_column("'simple'"),
        func.coalesce(Product.name, "") + " " + func.coalesce(Product.description, ""),
    ),
    postgresql_using="gin",
).ddl_if(dialect="postgresql")


class Order(BaseModel):
    """A customer order."""

    __tablename__ = "orders"
    __table_args__ = (
        Index("idx_orders_user_id", "user_id"),
        Index("idx_orders_status", "status"),
        Index("idx_orders_order_number", "order_number", unique=True),
        Index("idx_orders_created_at", "created_at"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    order_number: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 0), nullable=False)


class Category(BaseModel):
    """Product category, addressed by its unique slug."""

    __tablename__ = "categories"
    __table_args__ = (
        Index("idx_categories_name", "name", unique=True),
        Index("idx_categories_slug", "slug", unique=True),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Review(BaseModel):
    """A customer review of a product."""

    __tablename__ = "reviews"
    __table_args__ = (
        Index("idx_reviews_product_id", "product_id"),
        Index("idx_reviews_user_id", "user_id"),
        Index("idx_reviews_created_at", "created_at"),
    )

    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
