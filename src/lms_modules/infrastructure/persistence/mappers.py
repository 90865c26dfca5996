"""Map persistence models to domain entities."""

from lms_modules.domain.entities import Module, ModuleFunction, ModuleGroup
from lms_modules.infrastructure.persistence.models import (
    ModuleFunctionModel,
    ModuleGroupModel,
    ModuleModel,
)
from lms_modules.infrastructure.persistence.timestamps import ensure_utc


def to_module_function(model: ModuleFunctionModel) -> ModuleFunction:
    return ModuleFunction(
        id=model.id,
        module_id=model.module_id,
        name=model.name,
        code=model.code,
        created_at=ensure_utc(model.created_at),
        updated_at=ensure_utc(model.updated_at),
    )


def to_module(model: ModuleModel) -> Module:
    return Module(
        id=model.id,
        name=model.name,
        url=model.url,
        module_group_id=model.module_group_id,
        created_by_id=model.created_by_id,
        icon=model.icon,
        description=model.description,
        updated_by_id=model.updated_by_id,
        created_at=ensure_utc(model.created_at),
        updated_at=ensure_utc(model.updated_at),
        module_functions=[to_module_function(f) for f in model.module_functions],
    )


def to_module_group(model: ModuleGroupModel) -> ModuleGroup:
    """Build a ModuleGroup entity, including its modules."""
    return ModuleGroup(
        id=model.id,
        name=model.name,
        icon=model.icon,
        url=model.url,
        created_by_id=model.created_by_id,
        description=model.description,
        updated_by_id=model.updated_by_id,
        created_at=ensure_utc(model.created_at),
        updated_at=ensure_utc(model.updated_at),
        modules=[to_module(m) for m in model.modules],
    )
