"""SQLAlchemy model for the module_groups table.

A module group is the exclusive parent of the modules listed under it.
Removing a module from ``modules`` deletes it (delete-orphan).
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lms_modules.infrastructure.persistence.database import Base


class ModuleGroupModel(Base):
    """SQLAlchemy model for the module_groups table.

    Attributes:
        id: Primary key (identity).
        name: Display name, stored in the ``group_name`` column.
        description: Optional free text.
        icon: Icon reference.
        url: URL or route of the group.
        created_by_id: Foreign key to the creating user.
        created_at: Timestamp when the group was created.
        updated_by_id: Foreign key to the user who last updated the group.
        updated_at: Timestamp when the group was last updated.
        modules: Owned modules, ordered by id.
    """

    __tablename__ = "module_groups"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        "group_name",
        String(255),
        nullable=False,
        comment="Group display name",
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    icon: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    url: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    created_by_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        comment="Foreign key to users table (creator, never updated)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    updated_by_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"),
        nullable=True,
        comment="Foreign key to users table (last updater)",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    # Relationships
    modules: Mapped[list["ModuleModel"]] = relationship(  # noqa: F821
        "ModuleModel",
        cascade="all, delete-orphan",
        order_by="ModuleModel.id",
        lazy="selectin",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<ModuleGroup(id={self.id}, name={self.name})>"
