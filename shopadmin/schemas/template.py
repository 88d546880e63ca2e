"""Notification template Pydantic schemas."""

from datetime import datetime

from pydantic import Field, field_validator

from shopadmin.models.notification_template import TemplateCategory, TemplateType
from shopadmin.schemas.common import CamelSchema


class TemplateBase(CamelSchema):
    """Fields shared by template create requests and responses."""

    name: str = Field(..., max_length=255)
    description: str | None = None
    type: TemplateType = TemplateType.EMAIL
    category: TemplateCategory = TemplateCategory.ORDER
    subject: str | None = Field(None, max_length=255)
    content: str
    variables: list[str] | None = None
    is_active: bool = True


class TemplateCreateRequest(TemplateBase):
    """Schema for creating a template; ``name`` and ``content`` must not be blank."""

    @field_validator("name", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class TemplateUpdateRequest(CamelSchema):
    """Partial template update; unknown fields (``_id``, timestamps) are ignored."""

    name: str | None = Field(None, max_length=255)
    description: str | None = None
    type: TemplateType | None = None
    category: TemplateCategory | None = None
    subject: str | None = Field(None, max_length=255)
    content: str | None = None
    variables: list[str] | None = None
    is_active: bool | None = None

    @field_validator("name", "content")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("must not be empty")
        return value


class TemplateResponse(CamelSchema):
    """A template as returned by the template service."""

    id: str = Field(..., alias="_id")
    name: str
    description: str | None = None
    type: TemplateType
    category: TemplateCategory
    subject: str | None = None
    content: str
    variables: list[str] = []
    is_active: bool
    is_system: bool = False
    created_at: datetime
    updated_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value) -> str:
        return str(value)

    @classmethod
    def from_model(cls, template) -> "TemplateResponse":
        return cls.model_validate(
            {
                "_id": template.id,
                "name": template.name,
                "description": template.description,
                "type": template.type,
                "category": template.category,
                "subject": template.subject,
                "content": template.content,
                "variables": template.variables or [],
                "isActive": template.is_active,
                "isSystem": template.is_system,
                "createdAt": template.created_at,
                "updatedAt": template.updated_at,
            }
        )


class TemplateStatsResponse(CamelSchema):
    """Derived statistics over all templates."""

    total: int = 0
    active: int = 0
    inactive: int = 0
    system: int = 0
    by_type: dict[str, int] = {}
    by_category: dict[str, int] = {}


class TemplatePreviewRequest(CamelSchema):
    """Sample values for placeholder substitution."""

    data: dict[str, str] = {}


class TemplatePreviewResponse(CamelSchema):
    subject: str | None = None
    content: str
    missing_variables: list[str] = []


class TemplateTestRequest(CamelSchema):
    destination: str = Field(..., min_length=3, max_length=255)
    data: dict[str, str] = {}


class TemplateTestResponse(CamelSchema):
    destination: str
    channel: str
    delivered: bool
