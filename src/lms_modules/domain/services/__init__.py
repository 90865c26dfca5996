"""Domain services for lms-modules.

Services contain the business operations on module groups and modules.
"""

from lms_modules.domain.services.module_group_service import ModuleGroupService
from lms_modules.domain.services.module_service import ModuleService

__all__ = [
    "ModuleGroupService",
    "ModuleService",
]
