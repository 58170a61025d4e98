"""Tracked project instance."""

from datetime import datetime

from pydantic import BaseModel, Field


class Project(BaseModel):
    """One instantiation of a class at a filesystem path."""

    name: str = Field(..., min_length=1, description="Project name")
    class_id: int = Field(..., description="Id of the class it was created from")
    install_path: str = Field(..., min_length=1, description="Absolute install path")

    # Set by the tracker when the project is recorded
    install_date: datetime | None = Field(None, description="When the project was tracked")
    status_id: int | None = Field(None, description="Project status reference")
