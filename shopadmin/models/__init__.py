"""SQLAlchemy models for the admin back-office."""

from shopadmin.models.base import Base, BaseModel, TimestampMixin
from shopadmin.models.catalog import Category, Order, Product, Review, User
from shopadmin.models.notification_template import (
    NotificationTemplate,
    TemplateCategory,
    TemplateType,
)
from shopadmin.models.system_settings import SystemSettings

__all__ = [
    "Base",
    "BaseModel",
    "TimestampMixin",
    "Category",
    "Order",
    "Product",
    "Review",
    "User",
    "NotificationTemplate",
    "TemplateCategory",
    "TemplateType",
    "SystemSettings",
]
