"""Repository for module group database operations."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lms_modules.domain.exceptions import ImmutableFieldError
from lms_modules.infrastructure.persistence.models import (
    ModuleFunctionModel,
    ModuleGroupModel,
    ModuleModel,
)
from lms_modules.infrastructure.persistence.timestamps import Clock, next_timestamp, utc_now


class ModuleGroupRepository:
    """Repository for module group database operations.

    Owns the audit timestamps of groups and of the modules created through
    them, and the cascading delete of a group's subtree.
    """

    MUTABLE_FIELDS = frozenset({"name", "description", "icon", "url"})
    IMMUTABLE_FIELDS = frozenset({"id", "created_at", "created_by_id"})

    def __init__(self, session: AsyncSession, clock: Clock = utc_now) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
            clock: Source of the current time for audit timestamps.
        """
        self.session = session
        self.clock = clock

    async def create(self, group: ModuleGroupModel) -> ModuleGroupModel:
        """Create a new group together with any modules already attached.

        ``updated_by_id`` defaults to the creator.

        Args:
            group: Group model to create.

        Returns:
            Created group model with its id assigned.
        """
        now = self.clock()
        group.created_at = now
        group.updated_at = now
        if group.updated_by_id is None:
            group.updated_by_id = group.created_by_id
        for module in group.modules:
            stamp_new_module(module, now, group.created_by_id)

        self.session.add(group)
        await self.session.flush()
        return group

    async def get_by_id(self, group_id: int) -> ModuleGroupModel | None:
        """Get a group by ID with its modules freshly loaded.

        Args:
            group_id: Group ID.

        Returns:
            Group model if found, None otherwise.
        """
        result = await self.session.execute(
            select(ModuleGroupModel)
            .where(ModuleGroupModel.id == group_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def exists(self, group_id: int) -> bool:
        result = await self.session.execute(
            select(ModuleGroupModel.id).where(ModuleGroupModel.id == group_id)
        )
        return result.scalar_one_or_none() is not None

    async def list(self, skip: int = 0, limit: int | None = 100) -> list[ModuleGroupModel]:
        """List groups ordered by id.

        Args:
            skip: Number of records to skip.
            limit: Maximum number of records to return, None for all.

        Returns:
            List of group models.
        """
        query = (
            select(ModuleGroupModel)
            .order_by(ModuleGroupModel.id)
            .offset(skip)
            .execution_options(populate_existing=True)
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_modules(self) -> dict[int, int]:
        """Count modules per group.

        Returns:
            Mapping of group ID to module count. Groups without modules are absent.
        """
        result = await self.session.execute(
            select(ModuleModel.module_group_id, func.count(ModuleModel.id)).group_by(
                ModuleModel.module_group_id
            )
        )
        return {group_id: count for group_id, count in result.all()}

    async def update(
        self,
        group: ModuleGroupModel,
        changes: dict[str, Any],
        updated_by_id: int,
    ) -> ModuleGroupModel:
        """Apply changes to a group and refresh its audit fields.

        Args:
            group: Group model to update.
            changes: Mapping of field name to new value.
            updated_by_id: ID of the user making the change.

        Returns:
            Updated group model.

        Raises:
            ImmutableFieldError: If a change targets id, created_at or created_by_id.
            ValueError: If a change targets an unknown field.
        """
        for field_name in changes:
            if field_name in self.IMMUTABLE_FIELDS:
                raise ImmutableFieldError("ModuleGroup", field_name)
            if field_name not in self.MUTABLE_FIELDS:
                raise ValueError(f"Unknown module group field '{field_name}'")

        for field_name, value in changes.items():
            setattr(group, field_name, value)
        self._touch(group, updated_by_id)

        await self.session.flush()
        return group

    async def attach_module(
        self,
        group: ModuleGroupModel,
        module: ModuleModel,
        user_id: int,
    ) -> ModuleModel:
        """Add a new module to the group's owned collection.

        The module's ``module_group_id`` is filled in on flush.

        Args:
            group: Owning group.
            module: New module model.
            user_id: ID of the user adding the module.

        Returns:
            The persisted module.
        """
        now = self.clock()
        stamp_new_module(module, now, user_id)
        group.modules.append(module)
        self._touch(group, user_id)

        await self.session.flush()
        return module

    async def detach_module(
        self,
        group: ModuleGroupModel,
        module_id: int,
        user_id: int,
    ) -> bool:
        """Remove a module from the group; the orphaned module is deleted.

        Args:
            group: Owning group.
            module_id: ID of the module to remove.
            user_id: ID of the user removing the module.

        Returns:
            True if the module was part of the group, False otherwise.
        """
        for module in group.modules:
            if module.id == module_id:
                group.modules.remove(module)
                self._touch(group, user_id)
                await self.session.flush()
                return True
        return False

    async def delete(self, group_id: int) -> bool:
        """Delete a group and everything it owns.

        Functions of the group's modules go first, then the modules, then the
        group, all inside the caller's transaction.

        Args:
            group_id: Group ID.

        Returns:
            True if a group row was deleted, False if none matched.
        """
        module_ids = select(ModuleModel.id).where(ModuleModel.module_group_id == group_id)
        await self.session.execute(
            delete(ModuleFunctionModel).where(ModuleFunctionModel.module_id.in_(module_ids))
        )
        await self.session.execute(
            delete(ModuleModel).where(ModuleModel.module_group_id == group_id)
        )
        result = await self.session.execute(
            delete(ModuleGroupModel).where(ModuleGroupModel.id == group_id)
        )
        await self.session.flush()
        return result.rowcount > 0

    def _touch(self, group: ModuleGroupModel, user_id: int) -> None:
        group.updated_at = next_timestamp(group.updated_at, self.clock)
        group.updated_by_id = user_id


def stamp_new_module(module: ModuleModel, now: datetime, user_id: int) -> None:
    """Stamp insert-time audit fields on a module and its functions."""
    if module.created_by_id is None:
        module.created_by_id = user_id
    if module.updated_by_id is None:
        module.updated_by_id = module.created_by_id
    module.created_at = now
    module.updated_at = now
    for function in module.module_functions:
        function.created_at = now
        function.updated_at = now
