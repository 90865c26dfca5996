"""Persistence repositories for database operations."""

from lms_modules.infrastructure.persistence.repositories.module_group_repository import (
    ModuleGroupRepository,
)
from lms_modules.infrastructure.persistence.repositories.module_repository import (
    ModuleRepository,
)
from lms_modules.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "ModuleGroupRepository",
    "ModuleRepository",
    "UserRepository",
]
