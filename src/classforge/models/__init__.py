"""Database models package."""

from .base import Base
from .project import DEFAULT_STATUSES, ProjectRecord, ProjectStatus, ProjectStatusTitle
from .project_class import ClassFile, ClassFolder, ClassLabel, ClassRecord, ClassScript

__all__ = [
    "Base",
    "ClassFile",
    "ClassFolder",
    "ClassLabel",
    "ClassRecord",
    "ClassScript",
    "DEFAULT_STATUSES",
    "ProjectRecord",
    "ProjectStatus",
    "ProjectStatusTitle",
]
