"""Module group service for business logic.

Provides the operations behind the admin menu editor: creating, listing,
updating and deleting module groups, and adding or removing the modules
they own. Methods flush but never commit; the caller owns the transaction.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from lms_modules.core.logging import get_logger
from lms_modules.domain.entities import Module, ModuleGroup
from lms_modules.domain.exceptions import EntityNotFoundError
from lms_modules.infrastructure.persistence.mappers import to_module, to_module_group
from lms_modules.infrastructure.persistence.models import (
    ModuleFunctionModel,
    ModuleGroupModel,
    ModuleModel,
)
from lms_modules.infrastructure.persistence.repositories import (
    ModuleGroupRepository,
    ModuleRepository,
    UserRepository,
)
from lms_modules.infrastructure.persistence.timestamps import Clock, utc_now
from lms_modules.infrastructure.schemas import (
    ModuleCreate,
    ModuleGroupCreate,
    ModuleGroupDetailResponse,
    ModuleGroupUpdate,
)

logger = get_logger(__name__)

# Columns that are NOT NULL and so cannot be cleared by an update
_REQUIRED_GROUP_FIELDS = frozenset({"name", "icon", "url"})


def build_module_model(data: ModuleCreate, user_id: int) -> ModuleModel:
    """Build an unsaved module model, with its functions, from a payload."""
    return ModuleModel(
        name=data.name,
        url=data.url,
        icon=data.icon,
        description=data.description,
        created_by_id=user_id,
        module_functions=[
            ModuleFunctionModel(name=f.name, code=f.code) for f in data.module_functions
        ],
    )


class ModuleGroupService:
    """Service for module group business logic."""

    def __init__(self, session: AsyncSession, clock: Clock = utc_now) -> None:
        """Initialize the module group service.

        Args:
            session: SQLAlchemy async session.
            clock: Source of the current time for audit timestamps.
        """
        self.session = session
        self.group_repo = ModuleGroupRepository(session, clock)
        self.module_repo = ModuleRepository(session, clock)
        self.user_repo = UserRepository(session)

    async def create_group(self, data: ModuleGroupCreate, user_id: int) -> ModuleGroup:
        """Create a module group, together with any modules in the payload.

        Args:
            data: Validated group payload.
            user_id: ID of the creating user.

        Returns:
            The created group.

        Raises:
            EntityNotFoundError: If the user does not exist.
        """
        await self._require_user(user_id)

        group = ModuleGroupModel(
            name=data.name,
            description=data.description,
            icon=data.icon,
            url=data.url,
            created_by_id=user_id,
            modules=[build_module_model(m, user_id) for m in data.modules],
        )
        group = await self.group_repo.create(group)

        logger.info(
            "Module group created",
            group_id=group.id,
            name=group.name,
            module_count=len(group.modules),
            user_id=user_id,
        )
        return to_module_group(group)

    async def get_group(self, group_id: int) -> ModuleGroup:
        """Get a group with its modules.

        Raises:
            EntityNotFoundError: If the group does not exist.
        """
        return to_module_group(await self._get_group_model(group_id))

    async def list_groups(
        self, skip: int = 0, limit: int | None = 100
    ) -> list[tuple[ModuleGroup, int]]:
        """List groups with the number of modules in each.

        Args:
            skip: Number of records to skip.
            limit: Maximum number of records to return, None for all.

        Returns:
            List of (group, module count) tuples ordered by group id.
        """
        groups = await self.group_repo.list(skip, limit)
        counts = await self.group_repo.count_modules()
        return [(to_module_group(g), counts.get(g.id, 0)) for g in groups]

    async def update_group(
        self, group_id: int, data: ModuleGroupUpdate, user_id: int
    ) -> ModuleGroup:
        """Apply a partial update to a group.

        Only fields present in the payload are changed. ``description`` may be
        cleared with an explicit null; the other fields are required columns
        and an explicit null for them is ignored. A payload that changes nothing
        leaves the audit fields untouched.

        Raises:
            EntityNotFoundError: If the group or the user does not exist.
        """
        await self._require_user(user_id)
        group = await self._get_group_model(group_id)

        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key not in _REQUIRED_GROUP_FIELDS
        }
        if changes:
            group = await self.group_repo.update(group, changes, user_id)

        logger.info(
            "Module group updated",
            group_id=group.id,
            fields=sorted(changes),
            user_id=user_id,
        )
        return to_module_group(group)

    async def add_module(self, group_id: int, data: ModuleCreate, user_id: int) -> Module:
        """Create a module inside a group.

        Raises:
            EntityNotFoundError: If the group or the user does not exist.
        """
        await self._require_user(user_id)
        group = await self._get_group_model(group_id)

        module = await self.group_repo.attach_module(group, build_module_model(data, user_id), user_id)

        logger.info(
            "Module added to group",
            group_id=group_id,
            module_id=module.id,
            name=module.name,
            user_id=user_id,
        )
        return to_module(module)

    async def remove_module(self, group_id: int, module_id: int, user_id: int) -> None:
        """Detach a module from its group, which deletes it.

        Raises:
            EntityNotFoundError: If the group does not exist or does not
                contain the module.
        """
        group = await self._get_group_model(group_id)

        if not await self.group_repo.detach_module(group, module_id, user_id):
            raise EntityNotFoundError("Module", module_id)

        logger.info(
            "Module removed from group",
            group_id=group_id,
            module_id=module_id,
            user_id=user_id,
        )

    async def delete_group(self, group_id: int) -> None:
        """Delete a group with all of its modules and their functions.

        Raises:
            EntityNotFoundError: If the group does not exist.
        """
        if not await self.group_repo.delete(group_id):
            raise EntityNotFoundError("ModuleGroup", group_id)

        logger.info("Module group deleted", group_id=group_id)

    async def build_menu(self) -> list[ModuleGroupDetailResponse]:
        """Build the full menu: every group with its modules nested.

        Returns:
            List of group payloads ordered by group id.
        """
        groups = await self.group_repo.list(limit=None)
        return [
            ModuleGroupDetailResponse.model_validate(to_module_group(g)) for g in groups
        ]

    async def _get_group_model(self, group_id: int) -> ModuleGroupModel:
        group = await self.group_repo.get_by_id(group_id)
        if group is None:
            raise EntityNotFoundError("ModuleGroup", group_id)
        return group

    async def _require_user(self, user_id: int) -> None:
        if await self.user_repo.get_by_id(user_id) is None:
            raise EntityNotFoundError("User", user_id)
