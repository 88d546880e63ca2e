"""Notification template model for email, SMS, push and in-app messages."""

from enum import Enum

from sqlalchemy import Boolean, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shopadmin.models.base import BaseModel, JSONType


class TemplateType(str, Enum):
    """Delivery channel of a template."""

    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"
    IN_APP = "in-app"


class TemplateCategory(str, Enum):
    """Business area a template belongs to."""

    ORDER = "order"
    PAYMENT = "payment"
    MARKETING = "marketing"
    SYSTEM = "system"
    CUSTOM = "custom"


class NotificationTemplate(BaseModel):
    """A reusable notification message definition with ``{variable}`` placeholders."""

    __tablename__ = "notification_templates"
    __table_args__ = (
        Index("idx_notification_templates_type_category", "type", "category"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=TemplateType.EMAIL.value,
    )
    category: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=TemplateCategory.ORDER.value,
    )
    subject: Mapped[str | None] = mapped_column(String(255), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    variables: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_system: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
