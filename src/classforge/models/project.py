"""Project tracking tables."""

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ProjectStatusTitle(str, Enum):
    """Project lifecycle status, seeded into ``project_status``."""

    ACTIVE = "active"  # Default for newly tracked projects
    INACTIVE = "inactive"
    DONE = "done"
    DEAD = "dead"


class ProjectStatus(Base):
    """Lookup table of lifecycle statuses."""

    __tablename__ = "project_status"

    project_status_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)


class ProjectRecord(Base):
    """Project model - tracks projects created from a class."""

    __tablename__ = "project"

    project_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    class_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("class.class_id"), nullable=False, index=True
    )

    # A directory can only hold one project
    install_path: Mapped[str] = mapped_column(String(4096), unique=True, nullable=False)
    install_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    project_status_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("project_status.project_status_id"), nullable=False
    )


DEFAULT_STATUSES: list[dict] = [
    {
        "title": ProjectStatusTitle.ACTIVE.value,
        "is_default": True,
        "comment": "Project is actively worked on.",
    },
    {
        "title": ProjectStatusTitle.INACTIVE.value,
        "is_default": False,
        "comment": "Project is paused.",
    },
    {
        "title": ProjectStatusTitle.DONE.value,
        "is_default": False,
        "comment": "Project is finished.",
    },
    {
        "title": ProjectStatusTitle.DEAD.value,
        "is_default": False,
        "comment": "Project was abandoned.",
    },
]
