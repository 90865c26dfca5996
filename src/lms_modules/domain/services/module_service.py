"""Module service for business logic.

Operations on individual modules: lookups, listing by group, updates,
moving a module between groups and managing its functions.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from lms_modules.core.logging import get_logger
from lms_modules.domain.entities import Module, ModuleFunction
from lms_modules.domain.exceptions import EntityNotFoundError
from lms_modules.infrastructure.persistence.mappers import to_module, to_module_function
from lms_modules.infrastructure.persistence.models import ModuleFunctionModel, ModuleModel
from lms_modules.infrastructure.persistence.repositories import (
    ModuleGroupRepository,
    ModuleRepository,
    UserRepository,
)
from lms_modules.infrastructure.persistence.timestamps import Clock, utc_now
from lms_modules.infrastructure.schemas import ModuleFunctionCreate, ModuleUpdate

logger = get_logger(__name__)

_REQUIRED_MODULE_FIELDS = frozenset({"name", "url"})


class ModuleService:
    """Service for module business logic."""

    def __init__(self, session: AsyncSession, clock: Clock = utc_now) -> None:
        """Initialize the module service.

        Args:
            session: SQLAlchemy async session.
            clock: Source of the current time for audit timestamps.
        """
        self.session = session
        self.module_repo = ModuleRepository(session, clock)
        self.group_repo = ModuleGroupRepository(session, clock)
        self.user_repo = UserRepository(session)

    async def get_module(self, module_id: int) -> Module:
        """Get a module by ID.

        Raises:
            EntityNotFoundError: If the module does not exist.
        """
        return to_module(await self._get_module_model(module_id))

    async def list_modules(self, skip: int = 0, limit: int = 100) -> list[Module]:
        return [to_module(m) for m in await self.module_repo.list(skip, limit)]

    async def list_by_group(self, group_id: int) -> list[Module]:
        """List the modules of a group. Unknown groups yield an empty list."""
        return [to_module(m) for m in await self.module_repo.list_by_group(group_id)]

    async def update_module(self, module_id: int, data: ModuleUpdate, user_id: int) -> Module:
        """Apply a partial update to a module.

        A payload that changes nothing leaves the audit fields untouched.

        Raises:
            EntityNotFoundError: If the module or the user does not exist.
        """
        await self._require_user(user_id)
        module = await self._get_module_model(module_id)

        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key not in _REQUIRED_MODULE_FIELDS
        }
        if changes:
            module = await self.module_repo.update(module, changes, user_id)

        logger.info(
            "Module updated",
            module_id=module.id,
            fields=sorted(changes),
            user_id=user_id,
        )
        return to_module(module)

    async def move_module(self, module_id: int, target_group_id: int, user_id: int) -> Module:
        """Move a module to another group.

        Raises:
            EntityNotFoundError: If the module, the target group or the user
                does not exist.
        """
        await self._require_user(user_id)
        module = await self._get_module_model(module_id)
        if not await self.group_repo.exists(target_group_id):
            raise EntityNotFoundError("ModuleGroup", target_group_id)

        source_group_id = module.module_group_id
        module = await self.module_repo.move(module, target_group_id, user_id)

        logger.info(
            "Module moved",
            module_id=module_id,
            from_group_id=source_group_id,
            to_group_id=target_group_id,
            user_id=user_id,
        )
        return to_module(module)

    async def add_function(
        self, module_id: int, data: ModuleFunctionCreate, user_id: int
    ) -> ModuleFunction:
        """Add a function to a module.

        Raises:
            EntityNotFoundError: If the module or the user does not exist.
        """
        await self._require_user(user_id)
        module = await self._get_module_model(module_id)

        function = await self.module_repo.add_function(
            module, ModuleFunctionModel(name=data.name, code=data.code), user_id
        )

        logger.info(
            "Module function added",
            module_id=module_id,
            function_id=function.id,
            code=function.code,
        )
        return to_module_function(function)

    async def delete_module(self, module_id: int) -> None:
        """Delete a module and its functions.

        Raises:
            EntityNotFoundError: If the module does not exist.
        """
        if not await self.module_repo.delete(module_id):
            raise EntityNotFoundError("Module", module_id)

        logger.info("Module deleted", module_id=module_id)

    async def _get_module_model(self, module_id: int) -> ModuleModel:
        module = await self.module_repo.get_by_id(module_id)
        if module is None:
            raise EntityNotFoundError("Module", module_id)
        return module

    async def _require_user(self, user_id: int) -> None:
        if await self.user_repo.get_by_id(user_id) is None:
            raise EntityNotFoundError("User", user_id)
