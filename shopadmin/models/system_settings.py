"""SystemSettings model for the category-scoped admin settings."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from shopadmin.models.base import BaseModel, JSONType


class SystemSettings(BaseModel):
    """Key-value store for shop-wide settings.

    One row per settings category (``general``, ``payment``, ``shipping``,
    ``email``, ``sms``, ``security``, ``backup``); ``value`` holds the
    category record as validated by its schema.
    """

    __tablename__ = "system_settings"

    key: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )
    value: Mapped[dict] = mapped_column(
        JSONType,
        nullable=False,
        default=dict,
    )
