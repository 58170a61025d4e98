"""In-memory representation of a class template."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectClass(BaseModel):
    """A named, reusable project template.

    ``id`` stays ``None`` until the class is saved; the store assigns it.
    A folder or file mapped to ``None`` is created empty, otherwise the value
    names the template it is copied from.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int | None = Field(None, description="Surrogate id assigned by the store")
    name: str = Field(..., min_length=1, description="Unique class name")
    labels: list[str] = Field(default_factory=list, description="Free-text tags")
    folders: dict[str, str | None] = Field(
        default_factory=dict, description="Target folder -> template folder"
    )
    files: dict[str, str | None] = Field(
        default_factory=dict, description="Target file -> template file"
    )
    scripts: dict[str, bool] = Field(
        default_factory=dict, description="Script name -> run with sudo"
    )

    @field_validator("folders", "files")
    @classmethod
    def empty_template_is_none(cls, v: dict[str, str | None]) -> dict[str, str | None]:
        """Treat an empty template string as "no template"."""
        return {target: template or None for target, template in v.items()}
