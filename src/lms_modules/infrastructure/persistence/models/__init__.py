"""SQLAlchemy models for the module menu tables.

All models inherit from the Base class defined in database.py and are
created on startup outside production.
"""

from lms_modules.infrastructure.persistence.models.module import ModuleModel
from lms_modules.infrastructure.persistence.models.module_function import ModuleFunctionModel
from lms_modules.infrastructure.persistence.models.module_group import ModuleGroupModel
from lms_modules.infrastructure.persistence.models.user import UserModel

__all__ = [
    "ModuleFunctionModel",
    "ModuleGroupModel",
    "ModuleModel",
    "UserModel",
]
