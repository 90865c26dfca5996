"""ModuleFunction entity: an action exposed by a module (e.g. ``course.create``)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ModuleFunction:
    """Entity representing a function owned by a module.

    Attributes:
        id: Storage-assigned identifier (None until persisted).
        module_id: ID of the owning module.
        name: Display name.
        code: Machine-readable key.
        created_at: Timestamp when the function was created.
        updated_at: Timestamp when the function was last updated.
    """

    id: int | None
    module_id: int
    name: str
    code: str
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Function name is required")
        if not self.code or not self.code.strip():
            raise ValueError("Function code is required")
