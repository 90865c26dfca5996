"""ModuleGroup entity for menu organization.

A module group is a named, iconized category of the admin menu. It owns the
modules listed under it; the modules refer back to it only by id.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from lms_modules.domain.entities.module import Module

GROUP_NAME_MANDATORY = "Group name is mandatory"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ModuleGroup:
    """Entity representing a logical grouping of modules.

    Attributes:
        id: Storage-assigned identifier (None until persisted).
        name: Display name, must not be blank.
        icon: Icon reference string.
        url: URL or route the group links to.
        created_by_id: ID of the user who created the group.
        description: Optional free text.
        updated_by_id: ID of the user who last updated the group.
        created_at: Timestamp when the group was created.
        updated_at: Timestamp when the group was last updated.
        modules: Modules contained in this group, ordered by id.
    """

    id: int | None
    name: str
    icon: str
    url: str
    created_by_id: int
    description: str | None = None
    updated_by_id: int | None = None
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)
    modules: list[Module] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate group data after initialization."""
        if self.name is None or not str(self.name).strip():
            raise ValueError(GROUP_NAME_MANDATORY)
        if not self.icon:
            raise ValueError("Group icon is required")
        if not self.url:
            raise ValueError("Group url is required")

    @property
    def module_count(self) -> int:
        return len(self.modules)

    def find_module(self, module_id: int) -> Module | None:
        """Return the contained module with the given id, if any."""
        for module in self.modules:
            if module.id == module_id:
                return module
        return None
