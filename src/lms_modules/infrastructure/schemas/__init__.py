"""Pydantic schemas for module menu payloads."""

from lms_modules.infrastructure.schemas.module_schemas import (
    ModuleCreate,
    ModuleFunctionCreate,
    ModuleFunctionResponse,
    ModuleGroupCreate,
    ModuleGroupDetailResponse,
    ModuleGroupResponse,
    ModuleGroupUpdate,
    ModuleResponse,
    ModuleUpdate,
)

__all__ = [
    "ModuleCreate",
    "ModuleFunctionCreate",
    "ModuleFunctionResponse",
    "ModuleGroupCreate",
    "ModuleGroupDetailResponse",
    "ModuleGroupResponse",
    "ModuleGroupUpdate",
    "ModuleResponse",
    "ModuleUpdate",
]
