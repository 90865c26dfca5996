"""Module entity for a single navigable feature entry.

Modules belong to exactly one module group. The group is held as a plain
identifier rather than a live reference, so a module can be serialized or
passed around without dragging its parent along.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from lms_modules.domain.entities.module_function import ModuleFunction


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Module:
    """Entity representing a page or feature in the menu.

    Attributes:
        id: Storage-assigned identifier (None until persisted).
        name: Display name.
        url: Route of the page.
        module_group_id: ID of the owning module group.
        created_by_id: ID of the user who created the module.
        icon: Optional icon reference.
        description: Optional free text.
        updated_by_id: ID of the user who last updated the module.
        created_at: Timestamp when the module was created.
        updated_at: Timestamp when the module was last updated.
        module_functions: Functions exposed by this module.
    """

    id: int | None
    name: str
    url: str
    module_group_id: int
    created_by_id: int
    icon: str | None = None
    description: str | None = None
    updated_by_id: int | None = None
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)
    module_functions: list[ModuleFunction] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate module data after initialization."""
        if not self.name or not self.name.strip():
            raise ValueError("Module name is required")
        if not self.url or not self.url.strip():
            raise ValueError("Module url is required")
        if self.module_group_id is None:
            raise ValueError("Module group ID is required")
