"""Domain entities for lms-modules.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from lms_modules.domain.entities.module import Module
from lms_modules.domain.entities.module_function import ModuleFunction
from lms_modules.domain.entities.module_group import GROUP_NAME_MANDATORY, ModuleGroup

__all__ = [
    "GROUP_NAME_MANDATORY",
    "Module",
    "ModuleFunction",
    "ModuleGroup",
]
