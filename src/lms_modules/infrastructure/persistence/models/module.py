"""SQLAlchemy model for the modules table.

Modules keep only the ``module_group_id`` foreign key; there is no
relationship back to the group.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lms_modules.infrastructure.persistence.database import Base


class ModuleModel(Base):
    """SQLAlchemy model for the modules table.

    Attributes:
        id: Primary key (identity).
        name: Display name.
        url: Route of the page.
        icon: Optional icon reference.
        description: Optional free text.
        module_group_id: Foreign key to the owning module group.
        created_by_id: Foreign key to the creating user.
        created_at: Timestamp when the module was created.
        updated_by_id: Foreign key to the user who last updated the module.
        updated_at: Timestamp when the module was last updated.
        module_functions: Owned functions, ordered by id.
    """

    __tablename__ = "modules"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    url: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    icon: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    module_group_id: Mapped[int] = mapped_column(
        ForeignKey("module_groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to module_groups table",
    )
    created_by_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    updated_by_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"),
        nullable=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    # Relationships
    module_functions: Mapped[list["ModuleFunctionModel"]] = relationship(  # noqa: F821
        "ModuleFunctionModel",
        cascade="all, delete-orphan",
        order_by="ModuleFunctionModel.id",
        lazy="selectin",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Module(id={self.id}, name={self.name}, module_group_id={self.module_group_id})>"
