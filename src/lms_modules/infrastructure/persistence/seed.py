"""Seed data for a fresh database.

Creates the system user that owns seeded records and the default admin menu
groups. Seeding is idempotent: existing rows (matched by email or group name)
are left alone.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lms_modules.core.config import Settings, get_settings
from lms_modules.core.logging import get_logger
from lms_modules.infrastructure.persistence.models import ModuleGroupModel, UserModel
from lms_modules.infrastructure.persistence.repositories import (
    ModuleGroupRepository,
    UserRepository,
)

logger = get_logger(__name__)

DEFAULT_MODULE_GROUPS: list[dict[str, str]] = [
    {
        "name": "Content Management",
        "description": "Manage courses, modules, and educational content",
        "icon": "FolderOpen",
        "url": "/admin/content",
    },
    {
        "name": "User Management",
        "description": "Manage users, roles, and permissions",
        "icon": "UsersRound",
        "url": "/admin/user-management",
    },
    {
        "name": "System Settings",
        "description": "System configuration and administration",
        "icon": "Cog",
        "url": "/admin/system",
    },
    {
        "name": "Analytics",
        "description": "Reports, statistics and analytics",
        "icon": "PieChart",
        "url": "/admin/analytics",
    },
]


async def ensure_system_user(session: AsyncSession, settings: Settings | None = None) -> UserModel:
    """Return the system user, creating it if needed.

    Args:
        session: SQLAlchemy async session.
        settings: Optional settings instance.

    Returns:
        UserModel: The system user.
    """
    settings = settings or get_settings()
    user_repo = UserRepository(session)

    user = await user_repo.get_by_email(settings.system_user_email)
    if user is None:
        user = await user_repo.create(
            UserModel(email=settings.system_user_email, full_name="System")
        )
        logger.info("Seeded system user", user_id=user.id, email=user.email)
    return user


async def seed_defaults(session: AsyncSession, settings: Settings | None = None) -> int:
    """Seed the system user and the default module groups.

    Args:
        session: SQLAlchemy async session. The caller commits.
        settings: Optional settings instance.

    Returns:
        int: Number of module groups created.
    """
    system_user = await ensure_system_user(session, settings)
    group_repo = ModuleGroupRepository(session)

    result = await session.execute(select(ModuleGroupModel.name))
    existing_names = set(result.scalars().all())

    created = 0
    for group_data in DEFAULT_MODULE_GROUPS:
        if group_data["name"] in existing_names:
            continue
        group = await group_repo.create(
            ModuleGroupModel(**group_data, created_by_id=system_user.id)
        )
        created += 1
        logger.info("Seeded default module group", group_id=group.id, name=group.name)

    return created
