"""SQLAlchemy model for the module_functions table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from lms_modules.infrastructure.persistence.database import Base


class ModuleFunctionModel(Base):
    """SQLAlchemy model for functions owned by a module.

    Attributes:
        id: Primary key.
        module_id: Foreign key to the owning module.
        name: Display name.
        code: Machine-readable key, e.g. ``course.create``.
        created_at: Timestamp when the function was created.
        updated_at: Timestamp when the function was last updated.
    """

    __tablename__ = "module_functions"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    module_id: Mapped[int] = mapped_column(
        ForeignKey("modules.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    code: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ModuleFunction(id={self.id}, code={self.code}, module_id={self.module_id})>"
