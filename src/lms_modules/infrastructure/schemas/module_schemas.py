"""Pydantic schemas for module group and module payloads.

A group payload nests its modules. A module payload carries only
``module_group_id``, never the group itself, so serialization cannot cycle.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from lms_modules.domain.entities import GROUP_NAME_MANDATORY


def _require_group_name(v: str | None) -> str:
    if v is None or not v.strip():
        raise ValueError(GROUP_NAME_MANDATORY)
    return v


def _require_text(v: str, message: str) -> str:
    if not v.strip():
        raise ValueError(message)
    return v


class ModuleFunctionCreate(BaseModel):
    """Schema for creating a module function."""

    name: str = Field(..., min_length=1, max_length=255, description="Function name")
    code: str = Field(..., min_length=1, max_length=128, description="Machine key, e.g. course.create")

    @field_validator("name", "code")
    @classmethod
    def validate_not_blank(cls, v: str, info: ValidationInfo) -> str:
        return _require_text(v, f"Function {info.field_name} is required")


class ModuleFunctionResponse(ModuleFunctionCreate):
    """Schema for module function response."""

    id: int
    module_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ModuleBase(BaseModel):
    """Base schema for Module data."""

    name: str = Field(..., min_length=1, max_length=255, description="Module name")
    url: str = Field(..., min_length=1, max_length=255, description="Route of the page")
    icon: str | None = Field(None, max_length=255, description="Icon reference")
    description: str | None = Field(None, description="Module description")

    @field_validator("name", "url")
    @classmethod
    def validate_not_blank(cls, v: str, info: ValidationInfo) -> str:
        """Reject whitespace-only names and urls."""
        return _require_text(v, f"Module {info.field_name} is required")


class ModuleCreate(ModuleBase):
    """Schema for creating a module."""

    module_functions: list[ModuleFunctionCreate] = Field(default_factory=list)


class ModuleUpdate(BaseModel):
    """Schema for updating a module. Only set fields are applied."""

    name: str | None = Field(None, min_length=1, max_length=255)
    url: str | None = Field(None, min_length=1, max_length=255)
    icon: str | None = Field(None, max_length=255)
    description: str | None = None

    @field_validator("name", "url")
    @classmethod
    def validate_not_blank(cls, v: str | None, info: ValidationInfo) -> str | None:
        # An explicit null is dropped by the service
        if v is None:
            return v
        return _require_text(v, f"Module {info.field_name} is required")


class ModuleResponse(ModuleBase):
    """Schema for module response. Excludes the parent group."""

    id: int
    module_group_id: int
    module_functions: list[ModuleFunctionResponse] = Field(default_factory=list)
    created_by_id: int
    updated_by_id: int | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ModuleGroupBase(BaseModel):
    """Base schema for ModuleGroup data."""

    name: str | None = Field(None, max_length=255, validate_default=True, description="Group name")
    description: str | None = Field(None, description="Group description")
    icon: str = Field(..., min_length=1, max_length=255, description="Icon reference")
    url: str = Field(..., min_length=1, max_length=255, description="URL or route")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        """Reject blank or missing group names."""
        return _require_group_name(v)


class ModuleGroupCreate(ModuleGroupBase):
    """Schema for creating a module group, optionally with its first modules."""

    modules: list[ModuleCreate] = Field(default_factory=list)


class ModuleGroupUpdate(BaseModel):
    """Schema for updating a module group. Only set fields are applied."""

    name: str | None = Field(None, max_length=255, description="Group name")
    description: str | None = None
    icon: str | None = Field(None, min_length=1, max_length=255)
    url: str | None = Field(None, min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        # Only runs when a name is supplied
        return _require_group_name(v)


class ModuleGroupResponse(BaseModel):
    """Schema for module group response without its modules."""

    id: int
    name: str
    description: str | None = None
    icon: str
    url: str
    module_count: int = Field(0, description="Number of modules in the group")
    created_by_id: int
    updated_by_id: int | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ModuleGroupDetailResponse(ModuleGroupResponse):
    """Schema for detailed module group response including its modules."""

    modules: list[ModuleResponse] = Field(default_factory=list, description="Modules in the group")
