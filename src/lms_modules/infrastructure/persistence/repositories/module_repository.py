"""Repository for module database operations."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from lms_modules.domain.exceptions import ImmutableFieldError
from lms_modules.infrastructure.persistence.models import ModuleFunctionModel, ModuleModel
from lms_modules.infrastructure.persistence.repositories.module_group_repository import (
    stamp_new_module,
)
from lms_modules.infrastructure.persistence.timestamps import Clock, next_timestamp, utc_now


class ModuleRepository:
    """Repository for module database operations."""

    MUTABLE_FIELDS = frozenset({"name", "url", "icon", "description"})
    IMMUTABLE_FIELDS = frozenset({"id", "created_at", "created_by_id"})

    def __init__(self, session: AsyncSession, clock: Clock = utc_now) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
            clock: Source of the current time for audit timestamps.
        """
        self.session = session
        self.clock = clock

    async def create(self, module: ModuleModel) -> ModuleModel:
        """Create a module for an existing group.

        Args:
            module: Module model with ``module_group_id`` and ``created_by_id`` set.

        Returns:
            Created module model.
        """
        stamp_new_module(module, self.clock(), module.created_by_id)
        self.session.add(module)
        await self.session.flush()
        return module

    async def get_by_id(self, module_id: int) -> ModuleModel | None:
        """Get a module by ID.

        Args:
            module_id: Module ID.

        Returns:
            Module model if found, None otherwise.
        """
        result = await self.session.execute(
            select(ModuleModel)
            .where(ModuleModel.id == module_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list(self, skip: int = 0, limit: int = 100) -> list[ModuleModel]:
        result = await self.session.execute(
            select(ModuleModel).order_by(ModuleModel.id).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def list_by_group(self, group_id: int) -> list[ModuleModel]:
        """List the modules of one group ordered by id.

        Args:
            group_id: Module group ID.

        Returns:
            List of module models.
        """
        result = await self.session.execute(
            select(ModuleModel)
            .where(ModuleModel.module_group_id == group_id)
            .order_by(ModuleModel.id)
        )
        return list(result.scalars().all())

    async def update(
        self,
        module: ModuleModel,
        changes: dict[str, Any],
        updated_by_id: int,
    ) -> ModuleModel:
        """Apply changes to a module and refresh its audit fields.

        Raises:
            ImmutableFieldError: If a change targets id, created_at or created_by_id.
            ValueError: If a change targets an unknown field.
        """
        for field_name in changes:
            if field_name in self.IMMUTABLE_FIELDS:
                raise ImmutableFieldError("Module", field_name)
            if field_name not in self.MUTABLE_FIELDS:
                raise ValueError(f"Unknown module field '{field_name}'")

        for field_name, value in changes.items():
            setattr(module, field_name, value)
        self._touch(module, updated_by_id)

        await self.session.flush()
        return module

    async def move(self, module: ModuleModel, group_id: int, updated_by_id: int) -> ModuleModel:
        """Reassign a module to another group.

        Args:
            module: Module to move.
            group_id: ID of the target group.
            updated_by_id: ID of the user making the change.

        Returns:
            Updated module model.
        """
        module.module_group_id = group_id
        self._touch(module, updated_by_id)
        await self.session.flush()
        return module

    async def add_function(
        self,
        module: ModuleModel,
        function: ModuleFunctionModel,
        updated_by_id: int,
    ) -> ModuleFunctionModel:
        """Append a function to the module's owned collection."""
        now = self.clock()
        function.created_at = now
        function.updated_at = now
        module.module_functions.append(function)
        self._touch(module, updated_by_id)
        await self.session.flush()
        return function

    async def delete(self, module_id: int) -> bool:
        """Delete a module and its functions.

        Args:
            module_id: Module ID.

        Returns:
            True if a module row was deleted, False if none matched.
        """
        await self.session.execute(
            delete(ModuleFunctionModel).where(ModuleFunctionModel.module_id == module_id)
        )
        result = await self.session.execute(delete(ModuleModel).where(ModuleModel.id == module_id))
        await self.session.flush()
        return result.rowcount > 0

    def _touch(self, module: ModuleModel, user_id: int) -> None:
        module.updated_at = next_timestamp(module.updated_at, self.clock)
        module.updated_by_id = user_id
